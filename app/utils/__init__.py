"""
Utilities Package - Helper functions and tools

This package contains:
- validation.py: field checks that raise ValidationError before any store access
"""

from app.utils.validation import (
    require_text,
    validate_title,
    validate_username,
    validate_password,
)

__all__ = [
    "require_text",
    "validate_title",
    "validate_username",
    "validate_password",
]
