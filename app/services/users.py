"""
User registration, authentication and administration.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.errors import BankCardsError, ErrorCode
from app.core.logging_config import get_logger
from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User, UserRole
from app.stores.users import UserStore

logger = get_logger(__name__)


class UserService:
    """User operations for one session."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserStore(db)

    def register(self, username: str, email: str, password: str, role: UserRole = UserRole.USER) -> User:
        if self.users.exists_by_username(username) or self.users.exists_by_email(email):
            raise BankCardsError(ErrorCode.USER_ALREADY_EXISTS)

        try:
            user = self.users.save(
                User(
                    username=username,
                    email=email,
                    password_hash=hash_password(password),
                    role=role,
                )
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("User %s registered with role %s", username, role.value)
        return user

    def authenticate(self, username: str, password: str) -> User:
        user = self.users.find_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed sign-in for %s", username)
            raise BankCardsError(ErrorCode.INVALID_CREDENTIALS)
        return user

    def sign_in(self, username: str, password: str) -> str:
        """Check credentials and return a fresh access token."""
        user = self.authenticate(username, password)
        return issue_token(user)

    def sign_up(self, username: str, email: str, password: str) -> str:
        """Register a regular user and return an access token for them."""
        user = self.register(username, email, password, UserRole.USER)
        return issue_token(user)

    def get_by_username(self, username: str) -> User:
        return self.users.get_by_username(username)

    def get_by_id(self, user_id: int) -> User:
        return self.users.get(user_id)

    def list_users(self, skip: int = 0, limit: int = 100) -> List[User]:
        return self.users.list_all(skip=skip, limit=limit)

    def update_user(self, user_id: int, username: Optional[str] = None, email: Optional[str] = None) -> User:
        user = self.users.get(user_id)

        if username is not None and username != user.username and self.users.exists_by_username(username):
            raise BankCardsError(ErrorCode.USER_ALREADY_EXISTS)
        if email is not None and email != user.email and self.users.exists_by_email(email):
            raise BankCardsError(ErrorCode.USER_ALREADY_EXISTS)

        try:
            if username is not None:
                user.username = username
            if email is not None:
                user.email = email
            self.users.save(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return user

    def delete_user(self, user_id: int) -> None:
        """Delete the user together with the user's cards."""
        user = self.users.get(user_id)
        try:
            self.users.delete(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("User %d deleted", user_id)


def issue_token(user: User) -> str:
    return create_access_token(user.id, user.username, user.role.value)


def bootstrap_admin(db: Session, settings: Settings) -> Optional[User]:
    """
    Create the configured administrator if it does not exist yet.
    Returns the new user, or None when it was already present.
    """
    service = UserService(db)
    if service.users.exists_by_username(settings.ADMIN_USERNAME):
        return None
    logger.info("Creating administrator account %s", settings.ADMIN_USERNAME)
    return service.register(
        settings.ADMIN_USERNAME,
        settings.ADMIN_EMAIL,
        settings.ADMIN_PASSWORD,
        UserRole.ADMIN,
    )
