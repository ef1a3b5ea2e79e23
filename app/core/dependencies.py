"""
FastAPI Dependencies - Reusable dependency injection functions
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import logging

from app.database import get_db
from app.core.security import decode_token
from app.models import User, UserRole
from app.services import AuthService, TodoService

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme - expects "Authorization: Bearer <token>" header
security = HTTPBearer()

_auth_service = AuthService()
_todo_service = TodoService()

def get_auth_service() -> AuthService:
    return _auth_service

def get_todo_service() -> TodoService:
    return _todo_service

def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the Bearer token to the acting principal.

    Process:
        1. Verify token signature and expiration
        2. Extract user ID from token payload
        3. Fetch user from database

    Raises:
        HTTPException 401: If token invalid, expired, or user not found
    """
    user_id = decode_token(credentials.credentials)
    if user_id is None:
        logger.warning("⚠️  Invalid or expired token provided")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.get(User, user_id)
    if not user:
        logger.warning(f"⚠️  Token valid but user {user_id} not found")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.debug(f"✅ Authenticated user: {user.name}")
    return user

def get_current_admin_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Dependency that ensures user has admin role.

    Raises:
        HTTPException 403: If user is not admin
    """
    if current_user.role != UserRole.ADMIN:
        logger.warning(f"⚠️  Non-admin user {current_user.name} attempted admin access")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user
