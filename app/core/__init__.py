"""
Core Package - Configuration, security, and error kinds

Only config, exceptions and security are re-exported here.
app.core.dependencies imports services and must be imported directly.
"""

from app.core.config import settings, get_settings
from app.core.exceptions import (
    AppError,
    NotFoundError,
    AccessDeniedError,
    ValidationError,
    ConflictError,
    AuthenticationError,
)
from app.core.security import hash_password, verify_password, create_access_token, decode_token

__all__ = [
    "settings",
    "get_settings",
    "AppError",
    "NotFoundError",
    "AccessDeniedError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_token",
]
