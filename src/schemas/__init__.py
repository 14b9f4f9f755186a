"""Pydantic schemas for API requests and responses."""

from src.schemas.user import MessageResponse, UserCreate, UserResponse, UserUpdate

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "MessageResponse",
]
