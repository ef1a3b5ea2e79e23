from app.repositories.todo_repo import TodoRepository
from app.repositories.user_repo import UserRepository

__all__ = ["TodoRepository", "UserRepository"]
