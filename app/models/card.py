"""
Card database model.
Represents bank cards; balances are stored in integer minor units.
"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from app.database import Base
from app.utils.card_numbers import mask_card_number
import enum

# Largest balance the BIGINT column can hold, in minor units
MAX_BALANCE = 2**63 - 1


class CardStatus(enum.Enum):
    """Card status states."""
    ACTIVE = "ACTIVE"
    BLOCKED = "BLOCKED"
    REQUEST_BLOCKED = "REQUEST_BLOCKED"
    EXPIRED = "EXPIRED"


class Card(Base):
    """
    Card table - stores card number, owner, balance and status.
    """
    __tablename__ = "cards"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_cards_balance_non_negative"),
    )
    
    id = Column(Integer, primary_key=True, index=True)
    number = Column(String(16), unique=True, index=True, nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    balance = Column(BigInteger, nullable=False, default=0)
    status = Column(SQLEnum(CardStatus), nullable=False, default=CardStatus.ACTIVE)
    expire_at = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    
    owner = relationship("User", back_populates="cards")
    
    @property
    def masked_number(self) -> str:
        return mask_card_number(self.number)
    
    def __repr__(self):
        # Never print the full card number
        return f"<Card(id={self.id}, number={self.masked_number}, status={self.status}, balance={self.balance})>"
