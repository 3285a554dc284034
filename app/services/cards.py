"""
Card lifecycle management: issue, block, status changes and deletion.
"""

from datetime import date
from typing import List

from sqlalchemy.orm import Session

from app.core.errors import BankCardsError, ErrorCode
from app.core.logging_config import get_logger
from app.models.card import MAX_BALANCE, Card, CardStatus
from app.schemas.card import CardView
from app.stores.cards import CardStore
from app.stores.users import UserStore
from app.utils.card_numbers import generate_card_number

logger = get_logger(__name__)

MAX_NUMBER_ATTEMPTS = 10


class CardService:
    """
    Card operations for one session. Each mutating call commits on
    success and rolls back on failure.

    Role checks (admin-only operations) are done by the caller; ownership
    checks take the requesting username explicitly.
    """

    def __init__(self, db: Session):
        self.db = db
        self.cards = CardStore(db)
        self.users = UserStore(db)

    def create_card(self, expire_at: date, initial_balance: int, owner_username: str) -> Card:
        if initial_balance is None:
            initial_balance = 0
        if initial_balance < 0:
            raise BankCardsError(ErrorCode.INVALID_AMOUNT, "Initial balance cannot be negative")
        if initial_balance > MAX_BALANCE:
            raise BankCardsError(ErrorCode.INVALID_AMOUNT, f"Initial balance cannot exceed {MAX_BALANCE}")
        if expire_at < date.today():
            raise BankCardsError(ErrorCode.CARD_EXPIRED, "Expiration date cannot be in the past")

        try:
            owner = self.users.get_by_username(owner_username)
            card = Card(
                number=self._new_card_number(),
                owner_id=owner.id,
                balance=initial_balance,
                status=CardStatus.ACTIVE,
                expire_at=expire_at,
            )
            self.cards.save(card)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Card %d (%s) issued to %s", card.id, card.masked_number, owner_username)
        return card

    def _new_card_number(self) -> str:
        # The unique index on cards.number is the final guard
        for _ in range(MAX_NUMBER_ATTEMPTS):
            number = generate_card_number()
            if not self.cards.exists_by_number(number):
                return number
        raise RuntimeError("Could not generate a unique card number")

    def get_card(self, card_id: int, requesting_username: str, is_admin: bool = False) -> Card:
        card = self.cards.get(card_id)
        if not is_admin:
            self._check_owner(card, requesting_username)
        return card

    def request_block(self, card_id: int, requesting_username: str) -> Card:
        """Flag the card for administrator review. Does not block it."""
        card = self.cards.get(card_id)
        self._check_owner(card, requesting_username)
        card = self._set_status(card, CardStatus.REQUEST_BLOCKED)
        logger.info("Block requested for card %d by %s", card.id, requesting_username)
        return card

    def admin_block(self, card_id: int) -> Card:
        card = self._set_status(self.cards.get(card_id), CardStatus.BLOCKED)
        logger.info("Card %d blocked", card.id)
        return card

    def admin_set_status(self, card_id: int, status: str) -> Card:
        try:
            new_status = CardStatus[status.strip().upper()]
        except (KeyError, AttributeError):
            raise BankCardsError(ErrorCode.INVALID_STATUS, f"Invalid card status: {status}")

        card = self._set_status(self.cards.get(card_id), new_status)
        logger.info("Card %d status set to %s", card.id, new_status.value)
        return card

    def delete_card(self, card_id: int) -> None:
        card = self.cards.get(card_id)
        try:
            self.cards.delete(card)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Card %d deleted", card_id)

    def view(self, card: Card) -> CardView:
        """Outward projection of a card; the number is masked."""
        owner = self.users.find_by_id(card.owner_id)
        return CardView.from_card(card, owner.username if owner else "")

    def list_by_owner(self, username: str, skip: int = 0, limit: int = 100) -> List[CardView]:
        cards = self.cards.list_by_owner(username, skip=skip, limit=limit)
        return [CardView.from_card(card, username) for card in cards]

    def list_all(self, skip: int = 0, limit: int = 100) -> List[CardView]:
        return [CardView.from_card(card, username) for card, username in self.cards.list_all(skip=skip, limit=limit)]

    def _check_owner(self, card: Card, username: str) -> None:
        owner = self.users.find_by_id(card.owner_id)
        if owner is None or owner.username != username:
            raise BankCardsError(ErrorCode.NOT_OWNER)

    def _set_status(self, card: Card, status: CardStatus) -> Card:
        try:
            card.status = status
            self.cards.save(card)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return card
