"""
Transfer API endpoints.
Handles money transfers between the authenticated user's own cards.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.transaction import TransferRequest, TransactionRecord
from app.services.transfers import TransferEngine

router = APIRouter(prefix="/transfers", tags=["Transfers"])


@router.post("/", response_model=TransactionRecord, status_code=status.HTTP_201_CREATED)
def create_transfer(
    transfer_data: TransferRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Transfer money between two of your own cards.
    
    - **from_card**: Source card id or card number
    - **to_card**: Destination card id or card number
    - **amount**: Transfer amount in minor units (must be positive)
    """
    return TransferEngine(db).transfer(
        transfer_data.from_card,
        transfer_data.to_card,
        transfer_data.amount,
        current_user.username
    )


@router.get("/{transaction_id}", response_model=TransactionRecord)
def get_transfer(
    transaction_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get one of your transfers by id.
    """
    return TransferEngine(db).get(transaction_id, current_user.username)


@router.get("/", response_model=List[TransactionRecord])
def list_transfers(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    List transfers sent or received by your cards, newest first.
    
    - **skip**: Number of records to skip (default: 0)
    - **limit**: Maximum number of records to return (default: 100)
    """
    return TransferEngine(db).history(current_user.username, skip=skip, limit=limit)
