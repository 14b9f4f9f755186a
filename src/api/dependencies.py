"""FastAPI dependencies for storage and services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from src.database import get_db
from src.services.user_service import UserService
from src.services.user_store import UserStore


def get_user_store(
    db: Annotated[Session, Depends(get_db)],
) -> UserStore:
    """Get the user storage client bound to the request's session."""
    return UserStore(db)


def get_user_service(
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(store)
