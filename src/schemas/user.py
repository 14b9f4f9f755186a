"""User schemas.

Request and response bodies use the ``usuario`` column names on the wire;
the Python field names mirror :class:`src.models.user.User`.
"""

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Create a new user.

    Fields are optional at the schema level so that presence is checked by the
    service and reported with its own message.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(None, alias="nomeUsuario", max_length=255)
    login: str | None = Field(None, alias="userUsuario", max_length=255)
    password: str | None = Field(None, alias="senhaUsuario")
    national_id: str | None = Field(None, alias="cpfUsuario", max_length=20)
    email: str | None = Field(None, alias="emailUsuario", max_length=255)


class UserUpdate(BaseModel):
    """Update any subset of a user's fields."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(None, alias="nomeUsuario", max_length=255)
    login: str | None = Field(None, alias="userUsuario", max_length=255)
    national_id: str | None = Field(None, alias="cpfUsuario", max_length=20)
    email: str | None = Field(None, alias="emailUsuario", max_length=255)
    password: str | None = Field(None, alias="senhaUsuario")


class UserResponse(BaseModel):
    """Stored user record, password hash included."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., alias="idUsuario")
    name: str = Field(..., alias="nomeUsuario")
    login: str = Field(..., alias="userUsuario")
    password_hash: str = Field(..., alias="senhaUsuario")
    national_id: str = Field(..., alias="cpfUsuario")
    email: str = Field(..., alias="emailUsuario")


class MessageResponse(BaseModel):
    """Confirmation or error message."""

    msg: str
