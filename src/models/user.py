"""User model."""

from sqlalchemy import Column, Integer, String, UniqueConstraint

from src.database import Base


class User(Base):
    """A user record.

    Attribute names are Python-side; the columns keep the legacy ``usuario``
    table naming that clients also see on the wire.
    """

    __tablename__ = "usuario"
    __table_args__ = (UniqueConstraint("emailUsuario", name="uq_usuario_email"),)

    id = Column("idUsuario", Integer, primary_key=True, autoincrement=True)
    name = Column("nomeUsuario", String(255), nullable=False)
    login = Column("userUsuario", String(255), nullable=False)
    password_hash = Column("senhaUsuario", String(255), nullable=False)
    national_id = Column("cpfUsuario", String(20), nullable=False)
    email = Column("emailUsuario", String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
