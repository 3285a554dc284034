"""
Card API endpoints.
Handles card issuance, listing, blocking and status changes.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.api.deps import get_current_user, require_admin
from app.database import get_db
from app.models.user import User
from app.schemas.card import CardCreate, CardStatusUpdate, CardView
from app.services.cards import CardService

router = APIRouter(prefix="/cards", tags=["Cards"])


@router.post("/", response_model=CardView, status_code=status.HTTP_201_CREATED)
def create_card(
    card_data: CardCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """
    Issue a new card (admin only).
    
    - **expire_at**: Expiration date, must not be in the past
    - **balance**: Initial balance in minor units (default: 0)
    - **username**: Owner of the new card
    """
    service = CardService(db)
    card = service.create_card(card_data.expire_at, card_data.balance, card_data.username)
    return service.view(card)


@router.get("/", response_model=List[CardView])
def list_my_cards(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    List the authenticated user's cards with pagination.
    
    - **skip**: Number of records to skip (default: 0)
    - **limit**: Maximum number of records to return (default: 100)
    """
    return CardService(db).list_by_owner(current_user.username, skip=skip, limit=limit)


@router.get("/all", response_model=List[CardView])
def list_all_cards(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """
    List every card in the system (admin only).
    """
    return CardService(db).list_all(skip=skip, limit=limit)


@router.get("/{card_id}", response_model=CardView)
def get_card(
    card_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get one card. Users see their own cards; admins see any card.
    """
    service = CardService(db)
    card = service.get_card(card_id, current_user.username, is_admin=current_user.is_admin)
    return service.view(card)


@router.post("/{card_id}/request-block", response_model=CardView)
def request_block(
    card_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Ask an administrator to block one of your cards.
    """
    service = CardService(db)
    card = service.request_block(card_id, current_user.username)
    return service.view(card)


@router.post("/{card_id}/block", response_model=CardView)
def block_card(
    card_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """
    Block a card (admin only).
    """
    service = CardService(db)
    card = service.admin_block(card_id)
    return service.view(card)


@router.patch("/{card_id}/status", response_model=CardView)
def set_card_status(
    card_id: int,
    status_data: CardStatusUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """
    Set a card's status, e.g. ACTIVE to unblock (admin only).
    """
    service = CardService(db)
    card = service.admin_set_status(card_id, status_data.status)
    return service.view(card)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_card(
    card_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """
    Delete a card (admin only). Its transactions are kept.
    """
    CardService(db).delete_card(card_id)
    return None
