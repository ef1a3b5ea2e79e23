"""
User Model - Represents registered accounts that own todos
"""

from sqlalchemy import Column, Integer, String, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.database import Base

class UserRole(str, enum.Enum):
    """User role enumeration - defines permission levels"""
    USER = "USER"  # Regular user - manages own todos
    ADMIN = "ADMIN"  # Can look up other accounts

class User(Base):
    """
    User table - stores authentication and profile information.
    Users are never deleted; their todos live exactly as long as they do.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    # Authentication fields
    name = Column(String(255), unique=True, nullable=False, index=True)  # Login name
    password_hash = Column(String(255), nullable=False)  # bcrypt hash, never plaintext

    # Authorization
    role = Column(SQLEnum(UserRole), default=UserRole.USER, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_login = Column(DateTime, nullable=True)  # Updated on each successful authentication

    todos = relationship("Todo", back_populates="owner")

    def __repr__(self):
        return f"<User {self.name} ({self.role})>"
