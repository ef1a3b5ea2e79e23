"""
Domain Exceptions - Error kinds raised by services and mapped to HTTP in app.main
"""

from typing import Any, Optional

class AppError(Exception):
    """
    Base class for expected business errors.

    Every error carries a machine-readable error_code and a context dict
    holding the offending identifier or field, so callers can build a
    user-facing message without parsing the text.
    """
    status_code = 400
    error = "Bad Request"
    error_code = "BUSINESS_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None, **context: Any):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code  # Instance value shadows the class default
        self.context = context

    def to_dict(self) -> dict:
        return {
            "error": self.error,
            "error_code": self.error_code,
            "detail": self.message,
            "context": self.context,
        }

class NotFoundError(AppError):
    """Referenced user or todo does not exist"""
    status_code = 404
    error = "Not Found"
    error_code = "RESOURCE_NOT_FOUND"

    @classmethod
    def todo(cls, todo_id: int) -> "NotFoundError":
        return cls(f"Todo with ID {todo_id} not found", "TODO_NOT_FOUND", resource="todo", resource_id=todo_id)

    @classmethod
    def user(cls, user_id: int) -> "NotFoundError":
        return cls(f"User with ID {user_id} not found", "USER_NOT_FOUND", resource="user", resource_id=user_id)

    @classmethod
    def user_named(cls, name: str) -> "NotFoundError":
        return cls(f"User '{name}' not found", "USER_NOT_FOUND", resource="user", name=name)

class AccessDeniedError(AppError):
    """Principal exists but does not own the resource"""
    status_code = 403
    error = "Forbidden"
    error_code = "ACCESS_DENIED"

    @classmethod
    def ownership(cls, resource: str, resource_id: Any) -> "AccessDeniedError":
        return cls(
            f"You do not have access to this {resource}",
            "OWNERSHIP_VIOLATION",
            resource=resource,
            resource_id=resource_id,
        )

class ValidationError(AppError):
    """Malformed input - raised before any store access"""
    status_code = 400
    error = "Validation Error"
    error_code = "VALIDATION_ERROR"

    @classmethod
    def required_field(cls, field: str) -> "ValidationError":
        return cls(f"{field} is required and cannot be empty", "REQUIRED_FIELD", field=field)

    @classmethod
    def invalid_length(cls, field: str, min_length: int, max_length: int) -> "ValidationError":
        return cls(
            f"{field} length must be between {min_length} and {max_length}",
            "INVALID_LENGTH",
            field=field,
            min_length=min_length,
            max_length=max_length,
        )

class ConflictError(AppError):
    """Uniqueness violation"""
    status_code = 409
    error = "Conflict"
    error_code = "CONFLICT"

    @classmethod
    def username_taken(cls, name: str) -> "ConflictError":
        return cls(f"Username '{name}' is already registered", "USERNAME_TAKEN", field="name", name=name)

class AuthenticationError(AppError):
    status_code = 401
    error = "Unauthorized"
    error_code = "INVALID_CREDENTIALS"
