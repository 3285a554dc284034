"""
User store: persistence access for users.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.errors import BankCardsError, ErrorCode
from app.models.user import User


class UserStore:
    """Lookup and persistence for User rows bound to one session."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get(self, user_id: int) -> User:
        user = self.find_by_id(user_id)
        if user is None:
            raise BankCardsError(ErrorCode.USER_NOT_FOUND, f"User {user_id} not found")
        return user

    def get_by_username(self, username: str) -> User:
        user = self.find_by_username(username)
        if user is None:
            raise BankCardsError(ErrorCode.USER_NOT_FOUND, f"User {username} not found")
        return user

    def exists_by_username(self, username: str) -> bool:
        return self.db.query(User.id).filter(User.username == username).first() is not None

    def exists_by_email(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email).first() is not None

    def list_all(self, skip: int = 0, limit: int = 100) -> List[User]:
        return self.db.query(User).order_by(User.id).offset(skip).limit(limit).all()

    def save(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.flush()
