"""
Todo Service - Ownership-scoped CRUD over the todo hierarchy

Every operation runs in its own transaction and every ownership-checked read
goes through TodoService._authorize, so there is exactly one place where
"does this todo exist and does the caller own it" is decided.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Mapping, Union
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import AccessDeniedError, NotFoundError, ValidationError
from app.database import transaction
from app.models import Todo, User
from app.repositories.todo_repo import TodoRepository
from app.schemas.todo import TodoCreate, TodoUpdate, TodoStats
from app.utils.validation import require_text, validate_title

logger = logging.getLogger(__name__)

# Business fields a patch may change; owner, parent, id and created_at never move
UPDATABLE_FIELDS = ("title", "description", "completed", "progress", "due_date", "priority", "importance")
NULLABLE_FIELDS = frozenset({"description", "due_date"})

SEARCH_MAX_LENGTH = 255

class TodoService:
    def __init__(self, repo: TodoRepository = None):
        self.repo = repo or TodoRepository()

    # ------------------------ Authorization ------------------------

    def _authorize(self, db: Session, todo_id: int, principal: User, for_update: bool = False) -> Todo:
        """
        Load a todo on behalf of principal.

        Existence is checked before ownership, so a missing id is always
        NotFound no matter who asks.
        """
        todo = self.repo.find_by_id(db, todo_id, for_update=for_update)
        if todo is None:
            logger.warning(f"⚠️  Todo {todo_id} not found (requested by user {principal.id})")
            raise NotFoundError.todo(todo_id)
        if todo.owner_id != principal.id:
            logger.warning(f"⚠️  User {principal.id} denied access to todo {todo_id} owned by {todo.owner_id}")
            raise AccessDeniedError.ownership("todo", todo_id)
        return todo

    def get_by_id(self, db: Session, todo_id: int, principal: User) -> Todo:
        with transaction(db):
            return self._authorize(db, todo_id, principal)

    # ------------------------ Create ------------------------

    def create(self, db: Session, draft: TodoCreate, principal: User) -> Todo:
        """
        Persist a new todo owned by principal.

        Any owner_id in the draft is discarded. A parent, when given, must be
        one of principal's own todos.
        """
        title = validate_title(draft.title)
        values = draft.dict(exclude={"title", "owner_id", "parent_id"})

        with transaction(db):
            parent = None
            if draft.parent_id is not None:
                parent = self._authorize(db, draft.parent_id, principal)

            now = datetime.utcnow()
            todo = Todo(title=title, **values)
            todo.owner_id = principal.id  # Never trust the draft for ownership
            todo.parent = parent
            todo.created_at = now
            todo.updated_at = now
            self.repo.save(db, todo)

        logger.info(f"✅ Todo {todo.id} created by user {principal.id} (parent={todo.parent_id})")
        return todo

    # ------------------------ Read ------------------------

    def list_all(self, db: Session, principal: User) -> List[Todo]:
        with transaction(db):
            return self.repo.find_by_owner(db, principal.id)

    def list_roots(self, db: Session, principal: User) -> List[Todo]:
        with transaction(db):
            return self.repo.find_roots_by_owner(db, principal.id)

    def list_children(self, db: Session, parent_id: int, principal: User) -> List[Todo]:
        with transaction(db):
            self._authorize(db, parent_id, principal)
            return self.repo.find_by_parent(db, parent_id)

    def list_overdue(self, db: Session, principal: User) -> List[Todo]:
        """Incomplete todos whose due date has passed"""
        with transaction(db):
            return self.repo.find_overdue_by_owner(db, principal.id, datetime.utcnow())

    def search(self, db: Session, principal: User, text: str) -> List[Todo]:
        """Case-insensitive title search across principal's todos"""
        text = require_text("q", text, SEARCH_MAX_LENGTH)
        with transaction(db):
            return self.repo.search_by_owner(db, principal.id, text)

    def summarize(self, db: Session, principal: User) -> TodoStats:
        with transaction(db):
            total = self.repo.count_by_owner(db, principal.id)
            completed = self.repo.count_by_owner(db, principal.id, completed=True)
            overdue = self.repo.count_overdue_by_owner(db, principal.id, datetime.utcnow())
        return TodoStats(total=total, completed=completed, pending=total - completed, overdue=overdue)

    # ------------------------ Update ------------------------

    def update(self, db: Session, todo_id: int, patch: Union[TodoUpdate, Mapping[str, Any]], principal: User) -> Todo:
        """
        Apply the business fields present in patch.

        Keys outside UPDATABLE_FIELDS are ignored. updated_at always moves
        forward, even when the patch changes nothing.
        """
        changes = self._collect_changes(patch)

        with transaction(db):
            todo = self._authorize(db, todo_id, principal, for_update=True)
            for field, value in changes.items():
                setattr(todo, field, value)
            todo.updated_at = self._next_timestamp(todo.updated_at)
            self.repo.save(db, todo)

        logger.info(f"✅ Todo {todo_id} updated by user {principal.id} ({', '.join(changes) or 'no fields'})")
        return todo

    @staticmethod
    def _collect_changes(patch: Union[TodoUpdate, Mapping[str, Any]]) -> Dict[str, Any]:
        data = dict(patch) if isinstance(patch, Mapping) else patch.dict(exclude_unset=True)
        changes = {}
        for field in UPDATABLE_FIELDS:
            if field not in data:
                continue
            value = data[field]
            if field == "title":
                value = validate_title(value)
            elif value is None and field not in NULLABLE_FIELDS:
                raise ValidationError.required_field(field)
            changes[field] = value
        return changes

    @staticmethod
    def _next_timestamp(previous: datetime) -> datetime:
        now = datetime.utcnow()
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)  # Clock did not tick between writes
        return now

    # ------------------------ Delete ------------------------

    def delete(self, db: Session, todo_id: int, principal: User) -> int:
        """Remove the todo and its entire subtree; returns how many todos were removed"""
        with transaction(db):
            todo = self._authorize(db, todo_id, principal, for_update=True)
            removed = self.repo.delete(db, todo)

        logger.info(f"✅ Todo {todo_id} deleted by user {principal.id} ({removed} todos removed)")
        return removed
