"""
Pydantic schemas for Card API requests and responses.
"""

from pydantic import BaseModel, Field, ConfigDict
from datetime import date

from app.models.card import MAX_BALANCE, CardStatus


class CardCreate(BaseModel):
    """Schema for issuing a new card (admin)."""
    expire_at: date = Field(..., description="Expiration date, YYYY-MM-DD")
    balance: int = Field(default=0, ge=0, le=MAX_BALANCE, description="Initial balance in minor units (cents)")
    username: str = Field(..., min_length=3, max_length=30, description="Owner username")
    
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "expire_at": "2030-12-31",
                "balance": 100000,
                "username": "alex"
            }
        }
    )


class CardStatusUpdate(BaseModel):
    """Schema for an admin status change."""
    status: str = Field(..., min_length=1, max_length=30, description="One of ACTIVE, BLOCKED, REQUEST_BLOCKED, EXPIRED")


class CardView(BaseModel):
    """Schema for card response. The card number is always masked."""
    id: int
    masked_number: str
    status: CardStatus
    expire_at: date
    balance: int
    owner_username: str
    
    model_config = ConfigDict(from_attributes=True)
    
    @classmethod
    def from_card(cls, card, owner_username: str) -> "CardView":
        return cls(
            id=card.id,
            masked_number=card.masked_number,
            status=card.status,
            expire_at=card.expire_at,
            balance=card.balance,
            owner_username=owner_username
        )
