"""
Todos API - Owner-scoped todo endpoints

Handlers only translate between HTTP and TodoService; ownership and
hierarchy rules live in the service.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import List
import logging

from app.database import get_db
from app.schemas import TodoCreate, TodoUpdate, TodoResponse, TodoStats
from app.models import User
from app.core.dependencies import get_current_user, get_todo_service
from app.services import TodoService

logger = logging.getLogger(__name__)
router = APIRouter()

def _to_response(todos) -> List[TodoResponse]:
    return [TodoResponse.from_orm(todo) for todo in todos]

@router.post("", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
def create_todo(
    draft: TodoCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: TodoService = Depends(get_todo_service),
):
    """
    Create a todo owned by the caller.

    Raises:
        400: Blank or too long title
        403: parent_id belongs to another user
        404: parent_id does not exist
    """
    logger.info(f"➡️  Create todo request from: {current_user.name}")
    return TodoResponse.from_orm(service.create(db, draft, current_user))

@router.get("", response_model=List[TodoResponse])
def list_todos(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: TodoService = Depends(get_todo_service),
):
    return _to_response(service.list_all(db, current_user))

@router.get("/main", response_model=List[TodoResponse])
def list_main_todos(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: TodoService = Depends(get_todo_service),
):
    """Top-level todos (no parent)"""
    return _to_response(service.list_roots(db, current_user))

@router.get("/overdue", response_model=List[TodoResponse])
def list_overdue_todos(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: TodoService = Depends(get_todo_service),
):
    return _to_response(service.list_overdue(db, current_user))

@router.get("/search", response_model=List[TodoResponse])
def search_todos(
    q: str = Query(..., description="Case-insensitive title fragment"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: TodoService = Depends(get_todo_service),
):
    return _to_response(service.search(db, current_user, q))

@router.get("/stats", response_model=TodoStats)
def todo_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: TodoService = Depends(get_todo_service),
):
    return service.summarize(db, current_user)

@router.get("/{todo_id}", response_model=TodoResponse)
def get_todo(
    todo_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: TodoService = Depends(get_todo_service),
):
    """
    Raises:
        403: Todo belongs to another user
        404: Todo not found
    """
    return TodoResponse.from_orm(service.get_by_id(db, todo_id, current_user))

@router.get("/{todo_id}/subtodos", response_model=List[TodoResponse])
def list_subtodos(
    todo_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: TodoService = Depends(get_todo_service),
):
    """Direct children of a todo the caller owns"""
    return _to_response(service.list_children(db, todo_id, current_user))

@router.put("/{todo_id}", response_model=TodoResponse)
@router.patch("/{todo_id}", response_model=TodoResponse)
def update_todo(
    todo_id: int,
    patch: TodoUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: TodoService = Depends(get_todo_service),
):
    """
    Update business fields only. Fields missing from the body keep their
    value; owner, parent and timestamps in the body are ignored.
    """
    logger.info(f"➡️  Update todo {todo_id} request from: {current_user.name}")
    return TodoResponse.from_orm(service.update(db, todo_id, patch, current_user))

@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_todo(
    todo_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: TodoService = Depends(get_todo_service),
):
    """Delete a todo and all of its subtodos"""
    logger.info(f"➡️  Delete todo {todo_id} request from: {current_user.name}")
    service.delete(db, todo_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
