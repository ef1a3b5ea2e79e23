"""
Todo Model - Hierarchical work items owned by a single user
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.database import Base

TITLE_MAX_LENGTH = 255

class Todo(Base):
    """
    Todo table - main tasks have no parent, subtasks point at their parent.

    Timestamps are set by TodoService, not by column defaults or hooks.
    """
    __tablename__ = "todos"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    # Ownership and hierarchy - both fixed after creation
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    parent_id = Column(Integer, ForeignKey("todos.id", ondelete="CASCADE"), nullable=True, index=True)

    # Content
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    description = Column(Text, nullable=True)

    # Tracking
    completed = Column(Boolean, default=False, nullable=False)
    progress = Column(Integer, default=0, nullable=False)
    priority = Column(Integer, default=0, nullable=False)
    importance = Column(Integer, default=0, nullable=False)
    due_date = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    owner = relationship("User", back_populates="todos")
    parent = relationship("Todo", back_populates="children", remote_side="Todo.id")
    children = relationship("Todo", back_populates="parent", cascade="save-update, merge, delete")

    def __repr__(self):
        return f"<Todo {self.id}: {self.title} (owner={self.owner_id}, parent={self.parent_id})>"
