"""
Pydantic schemas for Transfer API requests and responses.
"""

from pydantic import BaseModel, Field, ConfigDict, StrictInt
from datetime import datetime
from typing import Optional, Union

from app.models.card import MAX_BALANCE
from app.models.transaction import TransactionStatus


class TransferRequest(BaseModel):
    """Schema for initiating a transfer between two own cards."""
    from_card: Union[StrictInt, str] = Field(..., description="Source card id or 16-digit card number")
    to_card: Union[StrictInt, str] = Field(..., description="Destination card id or 16-digit card number")
    amount: int = Field(..., gt=0, le=MAX_BALANCE, description="Transfer amount in minor units (must be positive)")
    
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "from_card": "4000123412341234",
                "to_card": "4000567856785678",
                "amount": 25000
            }
        }
    )


class TransactionRecord(BaseModel):
    """Schema for transaction response."""
    id: int
    from_card_id: Optional[int]
    to_card_id: Optional[int]
    amount: int
    status: TransactionStatus
    created_at: datetime
    
    model_config = ConfigDict(from_attributes=True)
