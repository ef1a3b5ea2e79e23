"""
Todo Schemas - Pydantic models for todo requests and responses
"""

from pydantic import BaseModel, validator
from typing import Optional
from datetime import datetime

from app.models.user import UserRole

# DO NOT import from app.schemas here - causes circular import

class TodoCreate(BaseModel):
    """
    Draft for a new todo.

    owner_id is accepted so that clients echoing a full todo back do not fail,
    but TodoService always replaces it with the caller's id.
    """
    title: str
    description: Optional[str] = None
    completed: bool = False
    progress: int = 0
    priority: int = 0
    importance: int = 0
    due_date: Optional[datetime] = None
    parent_id: Optional[int] = None  # Main todo when absent
    owner_id: Optional[int] = None

    @validator('title', 'description')
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

class TodoUpdate(BaseModel):
    """
    Patch for an existing todo - only fields the client sends are applied.
    Unknown keys such as owner_id or parent_id are dropped by pydantic.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[bool] = None
    progress: Optional[int] = None
    priority: Optional[int] = None
    importance: Optional[int] = None
    due_date: Optional[datetime] = None

    @validator('title', 'description')
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

class OwnerSummary(BaseModel):
    """Owner info embedded in todo responses - no credentials"""
    id: int
    name: str
    role: UserRole

    class Config:
        from_attributes = True

class ParentSummary(BaseModel):
    """Short parent view, avoids recursive nesting"""
    id: int
    title: str
    completed: bool
    progress: int

    class Config:
        from_attributes = True

class TodoResponse(BaseModel):
    """Schema for todo data in responses"""
    id: int
    title: str
    description: Optional[str]
    completed: bool
    progress: int
    priority: int
    importance: int
    due_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    owner_id: int
    parent_id: Optional[int]
    owner: Optional[OwnerSummary] = None
    parent: Optional[ParentSummary] = None

    class Config:
        from_attributes = True

class TodoStats(BaseModel):
    """Per-user todo counters"""
    total: int
    completed: int
    pending: int
    overdue: int
