"""User service: fetch, create, update and delete user records."""

import logging
from dataclasses import dataclass
from enum import Enum

from fastapi.concurrency import run_in_threadpool

from src.schemas.user import UserCreate, UserResponse, UserUpdate
from src.services.passwords import get_password_hash
from src.services.user_store import StoreError, UserStore

logger = logging.getLogger(__name__)

MSG_NOT_FOUND = "Usuário não encontrado"
MSG_REQUIRED_FIELDS = "Todos os campos são obrigatórios!"
MSG_EMAIL_IN_USE = "E-mail em uso! Por favor, utilize outro e-mail!"
MSG_NO_UPDATE_FIELDS = "Nenhum dado fornecido para atualizar!"
MSG_CREATED = "Usuário criado com sucesso!"
MSG_UPDATED = "Usuário atualizado com sucesso!"
MSG_DELETED = "Usuário deletado com sucesso!"
MSG_FETCH_FAILED = "Erro ao buscar usuário"
MSG_CREATE_FAILED = "Erro interno do servidor ao criar usuário"
MSG_UPDATE_FAILED = "Erro interno do servidor ao atualizar usuário"
MSG_DELETE_FAILED = "Erro interno do servidor ao deletar usuário"


class OutcomeKind(str, Enum):
    """Logical result of a user operation."""

    SUCCESS = "success"
    VALIDATION_FAILURE = "validation_failure"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    STORAGE_FAILURE = "storage_failure"


@dataclass(frozen=True)
class Outcome:
    """Result of a user operation, before it is mapped to a status code."""

    kind: OutcomeKind
    message: str
    user: UserResponse | None = None

    @property
    def ok(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS


class UserService:
    """Service for user record operations."""

    def __init__(self, store: UserStore):
        self.store = store

    async def fetch(self, user_id: str) -> Outcome:
        """Fetch a user, password hash included."""
        result = await run_in_threadpool(self.store.get, user_id)
        if result.error == StoreError.NOT_FOUND:
            return Outcome(OutcomeKind.NOT_FOUND, MSG_NOT_FOUND)
        if not result.ok:
            return Outcome(OutcomeKind.STORAGE_FAILURE, MSG_FETCH_FAILED)

        user = result.value
        return Outcome(
            OutcomeKind.SUCCESS,
            "",
            user=UserResponse(
                id=user.id,
                name=user.name,
                login=user.login,
                password_hash=user.password_hash,
                national_id=user.national_id,
                email=user.email,
            ),
        )

    async def create(self, data: UserCreate) -> Outcome:
        """Create a user after checking that the email is free.

        Between two racing creates the unique constraint on the table decides,
        not the pre-check.
        """
        if not all((data.name, data.login, data.password, data.national_id, data.email)):
            return Outcome(OutcomeKind.VALIDATION_FAILURE, MSG_REQUIRED_FIELDS)

        existing = await run_in_threadpool(self.store.get_by_email, data.email)
        if existing.ok:
            return Outcome(OutcomeKind.CONFLICT, MSG_EMAIL_IN_USE)
        if existing.error != StoreError.NOT_FOUND:
            return Outcome(OutcomeKind.STORAGE_FAILURE, MSG_CREATE_FAILED)

        password_hash = await run_in_threadpool(get_password_hash, data.password)
        result = await run_in_threadpool(
            self.store.insert,
            name=data.name,
            login=data.login,
            password_hash=password_hash,
            national_id=data.national_id,
            email=data.email,
        )
        if result.error == StoreError.CONFLICT:
            return Outcome(OutcomeKind.CONFLICT, MSG_EMAIL_IN_USE)
        if not result.ok:
            return Outcome(OutcomeKind.STORAGE_FAILURE, MSG_CREATE_FAILED)

        logger.info(f"Created user {result.value.id}")
        return Outcome(OutcomeKind.SUCCESS, MSG_CREATED)

    async def update(self, user_id: str, data: UserUpdate) -> Outcome:
        """Apply the supplied fields to a user, re-hashing a new password."""
        changes = build_change_set(data)
        if not changes and not data.password:
            return Outcome(OutcomeKind.VALIDATION_FAILURE, MSG_NO_UPDATE_FIELDS)

        if data.password:
            changes["password_hash"] = await run_in_threadpool(get_password_hash, data.password)

        result = await run_in_threadpool(self.store.update, user_id, changes)
        if result.error == StoreError.NOT_FOUND:
            return Outcome(OutcomeKind.NOT_FOUND, MSG_NOT_FOUND)
        if result.error == StoreError.CONFLICT:
            return Outcome(OutcomeKind.CONFLICT, MSG_EMAIL_IN_USE)
        if not result.ok:
            return Outcome(OutcomeKind.STORAGE_FAILURE, MSG_UPDATE_FAILED)

        logger.info(f"Updated user {user_id}: {', '.join(sorted(changes))}")
        return Outcome(OutcomeKind.SUCCESS, MSG_UPDATED)

    async def delete(self, user_id: str) -> Outcome:
        """Delete a user. There is no soft delete."""
        result = await run_in_threadpool(self.store.delete, user_id)
        if result.error == StoreError.NOT_FOUND:
            return Outcome(OutcomeKind.NOT_FOUND, MSG_NOT_FOUND)
        if not result.ok:
            return Outcome(OutcomeKind.STORAGE_FAILURE, MSG_DELETE_FAILED)

        logger.info(f"Deleted user {user_id}")
        return Outcome(OutcomeKind.SUCCESS, MSG_DELETED)


def build_change_set(data: UserUpdate) -> dict[str, str]:
    """Collect the non-empty plain fields of an update.

    The password is left out; it has to be hashed before it is stored.
    """
    changes: dict[str, str] = {}
    if data.name:
        changes["name"] = data.name
    if data.login:
        changes["login"] = data.login
    if data.national_id:
        changes["national_id"] = data.national_id
    if data.email:
        changes["email"] = data.email
    return changes
