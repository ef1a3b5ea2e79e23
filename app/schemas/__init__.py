"""
Schemas Package - Exports all Pydantic schemas
"""

from app.schemas.user import (
    UserCreate,
    UserLogin,
    UserResponse,
    UsernameAvailability,
    TokenResponse,
)
from app.schemas.todo import (
    TodoCreate,
    TodoUpdate,
    TodoResponse,
    TodoStats,
    OwnerSummary,
    ParentSummary,
)

__all__ = [
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "UsernameAvailability",
    "TokenResponse",
    "TodoCreate",
    "TodoUpdate",
    "TodoResponse",
    "TodoStats",
    "OwnerSummary",
    "ParentSummary",
]
