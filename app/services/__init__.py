from app.services.auth_service import AuthService
from app.services.todo_service import TodoService

__all__ = ["AuthService", "TodoService"]
