"""
Models Package - Exports all database models for easy importing
"""

# Import all models to register them with SQLAlchemy Base
from app.models.user import User, UserRole
from app.models.todo import Todo, TITLE_MAX_LENGTH

__all__ = [
    "User",
    "UserRole",
    "Todo",
    "TITLE_MAX_LENGTH",
]
