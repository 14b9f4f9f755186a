"""Storage client for user records.

Every call returns a :class:`StoreResult` instead of raising, so callers can
branch on the error kind. SQLAlchemy faults are logged here, once.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.user import User

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Attributes a change-set may touch; the identifier is never one of them.
UPDATABLE_FIELDS = frozenset({"name", "login", "password_hash", "national_id", "email"})


class StoreError(str, Enum):
    """Kinds of storage failure."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FAILURE = "failure"


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Value of a storage call, or the kind of error it hit."""

    value: T | None = None
    error: StoreError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class UserStore:
    """Single-statement operations on the ``usuario`` table."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: Any) -> StoreResult[User]:
        """Look up a user by identifier."""
        try:
            user = self.db.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as e:
            return self._fail(f"Failed to fetch user {user_id}: {e}")
        if user is None:
            return StoreResult(error=StoreError.NOT_FOUND)
        return StoreResult(value=user)

    def get_by_email(self, email: str) -> StoreResult[User]:
        """Look up a user by email address."""
        try:
            user = self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            return self._fail(f"Failed to look up user by email: {e}")
        if user is None:
            return StoreResult(error=StoreError.NOT_FOUND)
        return StoreResult(value=user)

    def insert(self, **fields: Any) -> StoreResult[User]:
        """Insert a new user.

        A violated email uniqueness constraint is reported as ``CONFLICT``.
        """
        user = User(**fields)
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as e:
            self._rollback()
            logger.warning(f"Rejected insert of user with duplicate email: {e.orig}")
            return StoreResult(error=StoreError.CONFLICT)
        except SQLAlchemyError as e:
            return self._fail(f"Failed to insert user: {e}")
        return StoreResult(value=user)

    def update(self, user_id: Any, changes: dict[str, Any]) -> StoreResult[int]:
        """Apply a change-set to the user matching ``user_id``.

        Returns the number of matched rows. Zero matches is ``NOT_FOUND``.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        values = {getattr(User, field): value for field, value in changes.items()}
        try:
            matched = (
                self.db.query(User)
                .filter(User.id == user_id)
                .update(values, synchronize_session=False)
            )
            self.db.commit()
        except IntegrityError as e:
            self._rollback()
            logger.warning(f"Rejected update of user {user_id} to a duplicate email: {e.orig}")
            return StoreResult(error=StoreError.CONFLICT)
        except SQLAlchemyError as e:
            return self._fail(f"Failed to update user {user_id}: {e}")
        if matched == 0:
            return StoreResult(error=StoreError.NOT_FOUND)
        return StoreResult(value=matched)

    def delete(self, user_id: Any) -> StoreResult[int]:
        """Remove the user matching ``user_id``."""
        try:
            removed = (
                self.db.query(User)
                .filter(User.id == user_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            return self._fail(f"Failed to delete user {user_id}: {e}")
        if removed == 0:
            return StoreResult(error=StoreError.NOT_FOUND)
        return StoreResult(value=removed)

    def _fail(self, message: str) -> StoreResult[Any]:
        logger.error(message)
        self._rollback()
        return StoreResult(error=StoreError.FAILURE)

    def _rollback(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError as e:
            logger.error(f"Rollback failed: {e}")
