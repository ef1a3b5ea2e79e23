from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app.models.todo import Todo

class TodoRepository:
    """
    Data access for todos. Flushes but never commits - the calling service
    owns the transaction.
    """

    def save(self, db: Session, todo: Todo) -> Todo:
        """Insert or update; the id is assigned on the first flush and kept afterwards"""
        db.add(todo)
        db.flush()
        return todo

    def find_by_id(self, db: Session, todo_id: int, for_update: bool = False) -> Optional[Todo]:
        if for_update:
            # Row lock on servers that support it; SQLite serializes writers anyway
            stmt = select(Todo).where(Todo.id == todo_id).with_for_update()
            return db.execute(stmt).scalars().first()
        return db.get(Todo, todo_id)

    def find_by_owner(self, db: Session, owner_id: int) -> List[Todo]:
        stmt = select(Todo).where(Todo.owner_id == owner_id).order_by(Todo.id)
        return list(db.execute(stmt).scalars().all())

    def find_roots_by_owner(self, db: Session, owner_id: int) -> List[Todo]:
        stmt = (
            select(Todo)
            .where(Todo.owner_id == owner_id, Todo.parent_id.is_(None))
            .order_by(Todo.id)
        )
        return list(db.execute(stmt).scalars().all())

    def find_by_parent(self, db: Session, parent_id: int) -> List[Todo]:
        stmt = select(Todo).where(Todo.parent_id == parent_id).order_by(Todo.id)
        return list(db.execute(stmt).scalars().all())

    def find_overdue_by_owner(self, db: Session, owner_id: int, now: datetime) -> List[Todo]:
        stmt = (
            select(Todo)
            .where(
                Todo.owner_id == owner_id,
                Todo.completed.is_(False),
                Todo.due_date.is_not(None),
                Todo.due_date < now,
            )
            .order_by(Todo.due_date, Todo.id)
        )
        return list(db.execute(stmt).scalars().all())

    def search_by_owner(self, db: Session, owner_id: int, text: str) -> List[Todo]:
        stmt = (
            select(Todo)
            .where(Todo.owner_id == owner_id, Todo.title.icontains(text, autoescape=True))
            .order_by(Todo.id)
        )
        return list(db.execute(stmt).scalars().all())

    def count_by_owner(self, db: Session, owner_id: int, completed: Optional[bool] = None) -> int:
        stmt = select(func.count()).select_from(Todo).where(Todo.owner_id == owner_id)
        if completed is not None:
            stmt = stmt.where(Todo.completed.is_(completed))
        return int(db.execute(stmt).scalar_one())

    def count_overdue_by_owner(self, db: Session, owner_id: int, now: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(Todo)
            .where(
                Todo.owner_id == owner_id,
                Todo.completed.is_(False),
                Todo.due_date.is_not(None),
                Todo.due_date < now,
            )
        )
        return int(db.execute(stmt).scalar_one())

    def collect_subtree_ids(self, db: Session, todo_id: int) -> List[int]:
        """Ids of the todo and all of its descendants, walked level by level"""
        collected = [todo_id]
        frontier = [todo_id]
        while frontier:
            stmt = select(Todo.id).where(Todo.parent_id.in_(frontier))
            frontier = [child_id for child_id in db.execute(stmt).scalars().all() if child_id not in collected]
            collected.extend(frontier)
        return collected

    def delete(self, db: Session, todo: Todo) -> int:
        """
        Delete the todo together with its whole subtree in one flush.

        Does not depend on the database enforcing ON DELETE CASCADE; the unit
        of work orders the DELETEs children first. Returns the number of todos
        removed.
        """
        ids = self.collect_subtree_ids(db, todo.id)
        if todo.parent is not None:
            db.expire(todo.parent, ["children"])  # Drop the stale collection still holding this todo
        nodes = db.execute(select(Todo).where(Todo.id.in_(ids))).scalars().all()
        for node in nodes:
            db.delete(node)
        db.flush()
        return len(nodes)
