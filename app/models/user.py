"""
User database model.
Represents customers and administrators.
"""

from sqlalchemy import Column, String, DateTime, Integer, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from app.database import Base
import enum


class UserRole(enum.Enum):
    """User roles."""
    USER = "USER"
    ADMIN = "ADMIN"


class User(Base):
    """
    User table - stores credentials and role.
    """
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(30), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.USER)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    
    # Deleting a user removes the user's cards
    cards = relationship(
        "Card",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
    
    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
    
    def __repr__(self):
        return f"<User(username={self.username}, role={self.role.value if self.role else None})>"
