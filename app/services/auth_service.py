"""
Authentication Service - Registration, credential checks, user lookup
"""

from datetime import datetime
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.core.security import hash_password, verify_password
from app.database import transaction
from app.models import User, UserRole
from app.repositories.user_repo import UserRepository
from app.utils.validation import validate_password, validate_username

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, repo: UserRepository = None):
        self.repo = repo or UserRepository()

    def register(self, db: Session, name: str, raw_password: str) -> User:
        """
        Create a new account with the default role.

        Raises:
            ValidationError: blank name or password outside 6-50 characters
            ConflictError: name already registered
        """
        name = validate_username(name)
        validate_password(raw_password)

        with transaction(db):
            if self.repo.exists_by_name(db, name):
                logger.warning(f"⚠️  Registration failed - username already exists: {name}")
                raise ConflictError.username_taken(name)

            user = User(
                name=name,
                password_hash=hash_password(raw_password),
                role=UserRole.USER,
                created_at=datetime.utcnow(),
            )
            try:
                self.repo.save(db, user)
            except IntegrityError:
                # Lost a race with a concurrent registration of the same name
                raise ConflictError.username_taken(name)

        logger.info(f"✅ User registered successfully: {user.name} (id={user.id})")
        return user

    def authenticate(self, db: Session, name: str, raw_password: str) -> bool:
        """
        Check credentials. On success last_login is stamped before returning True.
        Unknown names and wrong passwords both return False.
        """
        with transaction(db):
            user = self.repo.find_by_name(db, name)
            if user is None:
                logger.warning(f"⚠️  Login failed - user not found: {name}")
                return False
            if not verify_password(raw_password, user.password_hash):
                logger.warning(f"⚠️  Login failed - incorrect password: {name}")
                return False
            user.last_login = datetime.utcnow()
            self.repo.save(db, user)

        logger.info(f"✅ Login successful: {name}")
        return True

    def get_user(self, db: Session, user_id: int) -> User:
        user = self.repo.find_by_id(db, user_id)
        if user is None:
            raise NotFoundError.user(user_id)
        return user

    def get_user_by_name(self, db: Session, name: str) -> User:
        user = self.repo.find_by_name(db, name)
        if user is None:
            raise NotFoundError.user_named(name)
        return user

    def name_exists(self, db: Session, name: str) -> bool:
        return self.repo.exists_by_name(db, name)
