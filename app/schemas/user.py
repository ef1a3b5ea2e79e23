"""
User Schemas - Pydantic models for request/response validation
"""

from pydantic import BaseModel, validator
from typing import Optional
from datetime import datetime

from app.models.user import UserRole

class UserCreate(BaseModel):
    """Schema for user registration - requires password"""
    username: str
    password: str  # Plaintext password (will be hashed before storage)

    @validator('username')
    def strip_username(cls, v):
        return v.strip()

class UserLogin(BaseModel):
    """Schema for login request"""
    username: str
    password: str

    @validator('username')
    def strip_username(cls, v):
        return v.strip()

class UserResponse(BaseModel):
    """Schema for user data in responses - excludes password"""
    id: int
    name: str
    role: UserRole
    created_at: datetime
    last_login: Optional[datetime]  # None if never logged in

    class Config:
        from_attributes = True

class UsernameAvailability(BaseModel):
    username: str
    exists: bool
    available: bool

class TokenResponse(BaseModel):
    """Schema for authentication token response"""
    access_token: str  # JWT token
    token_type: str = "bearer"  # OAuth2 standard token type
    user: UserResponse
