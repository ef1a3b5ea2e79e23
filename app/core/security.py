"""
Security Module - Handles password hashing and JWT token generation/validation
"""

from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

# Password hashing context - bcrypt with configurable cost factor
pwd_context = CryptContext(
    schemes=["bcrypt"],  # Use bcrypt algorithm
    deprecated="auto",  # Automatically upgrade old hashes
    bcrypt__rounds=settings.BCRYPT_ROUNDS  # Cost factor (tests lower this to 4)
)

def hash_password(password: str) -> str:
    """
    Hash a plaintext password using bcrypt.

    bcrypt salts every hash, so hashing the same password twice gives
    different strings; use verify_password to compare.
    """
    return pwd_context.hash(password)  # Generate bcrypt hash with salt

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a bcrypt hash.
    A corrupted or unknown hash format counts as a mismatch.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)  # Constant-time comparison
    except (ValueError, TypeError) as e:
        logger.error(f"❌ Password verification error: {str(e)}")
        return False  # If hash is corrupted, deny access

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT access token for authentication.

    Args:
        data: Claims to encode (typically {"sub": str(user.id)})
        expires_delta: Optional custom expiration time

    Returns:
        Signed JWT token string
    """
    to_encode = data.copy()  # Don't modify original dict

    if expires_delta:
        expire = datetime.utcnow() + expires_delta  # Custom expiration
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)  # Default expiration

    to_encode.update({"exp": expire, "iat": datetime.utcnow()})  # Expiry and issued-at claims

    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)  # Sign token

    logger.debug(f"✅ Created access token expiring at {expire}")
    return encoded_jwt

def verify_token(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token.

    Returns:
        Decoded payload dict if valid, None if invalid/expired
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]  # Only accept the configured algorithm
        )
    except jwt.ExpiredSignatureError:  # Token past its exp claim
        logger.warning("⚠️  Token expired")
        return None
    except JWTError as e:  # Bad signature or malformed token
        logger.warning(f"⚠️  Invalid token: {str(e)}")
        return None

def decode_token(token: str) -> Optional[int]:
    """
    Extract user ID from JWT token.

    Returns:
        User ID if token valid and its subject is numeric, None otherwise
    """
    payload = verify_token(token)  # Decode and verify signature
    if not payload:
        return None
    subject = payload.get("sub")  # Extract user ID from subject claim
    try:
        return int(subject)  # Subjects are issued as str(user.id)
    except (TypeError, ValueError):
        logger.warning(f"⚠️  Token subject is not a user id: {subject!r}")
        return None
