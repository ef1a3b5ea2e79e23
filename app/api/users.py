"""
Users API - Registration, login, logout and account lookup
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging

from app.database import get_db
from app.schemas import UserCreate, UserLogin, UserResponse, UsernameAvailability, TokenResponse
from app.models import User
from app.core.exceptions import AuthenticationError
from app.core.security import create_access_token
from app.core.dependencies import get_auth_service, get_current_user, get_current_admin_user
from app.services import AuthService
from app.utils.validation import validate_username

logger = logging.getLogger(__name__)
router = APIRouter()

def _token_response(user: User) -> TokenResponse:
    access_token = create_access_token(data={"sub": str(user.id)})
    return TokenResponse(access_token=access_token, token_type="bearer", user=UserResponse.from_orm(user))

@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register new user account.

    Returns:
        TokenResponse with JWT and user info

    Raises:
        400: Blank username or password outside 6-50 characters
        409: Username already registered
    """
    logger.info(f"➡️  Registration attempt for username: {user_data.username}")
    new_user = auth_service.register(db, user_data.username, user_data.password)
    return _token_response(new_user)

@router.post("/login", response_model=TokenResponse)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate user and return JWT token.

    Raises:
        401: Invalid credentials (unknown user and wrong password look the same)
    """
    logger.info(f"➡️  Login attempt for username: {credentials.username}")
    if not auth_service.authenticate(db, credentials.username, credentials.password):
        raise AuthenticationError("Invalid username or password")
    user = auth_service.get_user_by_name(db, credentials.username)
    return _token_response(user)

@router.post("/logout", status_code=status.HTTP_200_OK)
def logout(current_user: User = Depends(get_current_user)):
    """
    Tokens are stateless and cannot be revoked server-side;
    the client discards its token.
    """
    logger.info(f"✅ User logged out: {current_user.name}")
    return {"message": "Successfully logged out"}

@router.get("/check-username", response_model=UsernameAvailability)
def check_username(
    username: str = Query(..., description="Name to check"),
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    name = validate_username(username)
    exists = auth_service.name_exists(db, name)
    return UsernameAvailability(username=name, exists=exists, available=not exists)

@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    return UserResponse.from_orm(current_user)

@router.get("/by-username/{username}", response_model=UserResponse)
def get_user_by_username(
    username: str,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    logger.info(f"➡️  Get user '{username}' request from admin: {current_admin.name}")
    return UserResponse.from_orm(auth_service.get_user_by_name(db, username))

@router.get("/{user_id}", response_model=UserResponse)
def get_user_by_id(
    user_id: int,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Get user by ID (admin only).

    Raises:
        404: User not found
    """
    logger.info(f"➡️  Get user {user_id} request from admin: {current_admin.name}")
    return UserResponse.from_orm(auth_service.get_user(db, user_id))
