"""
Transaction database model.
Append-only log of completed transfers between cards.
"""

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, Integer, ForeignKey, Enum as SQLEnum
from app.database import Base
import enum


class TransactionStatus(enum.Enum):
    """Transaction status states. Only completed transfers are recorded."""
    COMPLETED = "COMPLETED"


class Transaction(Base):
    """
    Transaction table - stores transfer records.
    Card references survive card deletion as NULL.
    """
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
    )
    
    id = Column(Integer, primary_key=True, index=True)
    from_card_id = Column(Integer, ForeignKey("cards.id", ondelete="SET NULL"), index=True, nullable=True)
    to_card_id = Column(Integer, ForeignKey("cards.id", ondelete="SET NULL"), index=True, nullable=True)
    amount = Column(BigInteger, nullable=False)
    status = Column(SQLEnum(TransactionStatus), nullable=False, default=TransactionStatus.COMPLETED)
    created_at = Column(DateTime(timezone=True), nullable=False)
    
    def __repr__(self):
        return f"<Transaction(id={self.id}, from={self.from_card_id}, to={self.to_card_id}, amount={self.amount})>"
