"""
Input Validation - Field checks shared by services, raised before any store access
"""

from typing import Optional

from app.core.exceptions import ValidationError
from app.models.todo import TITLE_MAX_LENGTH

NAME_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 50

def require_text(field: str, value: Optional[str], max_length: int) -> str:
    """
    Return the trimmed value.

    Raises:
        ValidationError: missing, blank, or longer than max_length
    """
    if value is None or not value.strip():
        raise ValidationError.required_field(field)
    value = value.strip()
    if len(value) > max_length:
        raise ValidationError.invalid_length(field, 1, max_length)
    return value

def validate_title(title: Optional[str]) -> str:
    return require_text("title", title, TITLE_MAX_LENGTH)

def validate_username(name: Optional[str]) -> str:
    return require_text("name", name, NAME_MAX_LENGTH)

def validate_password(password: Optional[str]) -> str:
    """Passwords are not trimmed - whitespace is significant"""
    if not password:
        raise ValidationError.required_field("password")
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        raise ValidationError.invalid_length("password", PASSWORD_MIN_LENGTH, PASSWORD_MAX_LENGTH)
    return password
