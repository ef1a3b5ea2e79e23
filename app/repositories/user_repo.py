from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app.models.user import User

class UserRepository:
    """Identity store - users are created and updated, never deleted"""

    def save(self, db: Session, user: User) -> User:
        db.add(user)
        db.flush()
        return user

    def find_by_id(self, db: Session, user_id: int) -> Optional[User]:
        return db.get(User, user_id)

    def find_by_name(self, db: Session, name: str) -> Optional[User]:
        stmt = select(User).where(User.name == name)
        return db.execute(stmt).scalars().first()

    def exists_by_name(self, db: Session, name: str) -> bool:
        stmt = select(func.count()).select_from(User).where(User.name == name)
        return int(db.execute(stmt).scalar_one()) > 0
