"""
Card store: persistence access for cards.
"""

from typing import Iterable, List, Optional, Tuple, Union

from sqlalchemy.orm import Session

from app.core.errors import BankCardsError, ErrorCode
from app.models.card import Card
from app.models.user import User

CardIdentifier = Union[int, str]


class CardStore:
    """
    Lookup and persistence for Card rows bound to one session.

    `save` and `delete` flush but never commit: the caller owns the
    transaction boundary.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, card_id: int) -> Optional[Card]:
        return self.db.get(Card, card_id)

    def find_by_number(self, number: str) -> Optional[Card]:
        return self.db.query(Card).filter(Card.number == number).first()

    def exists_by_number(self, number: str) -> bool:
        return self.db.query(Card.id).filter(Card.number == number).first() is not None

    def get(self, card_id: int) -> Card:
        card = self.find_by_id(card_id)
        if card is None:
            raise BankCardsError(ErrorCode.CARD_NOT_FOUND, f"Card {card_id} not found")
        return card

    def get_by_number(self, number: str) -> Card:
        card = self.find_by_number(number)
        if card is None:
            raise BankCardsError(ErrorCode.CARD_NOT_FOUND)
        return card

    def resolve(self, identifier: CardIdentifier) -> Card:
        """
        Resolve a card by id (int) or by number (str).
        """
        if isinstance(identifier, int):
            return self.get(identifier)
        return self.get_by_number(identifier)

    def resolve_for_update(self, identifiers: Iterable[CardIdentifier]) -> List[Card]:
        """
        Resolve cards and lock their rows (SELECT ... FOR UPDATE).

        Ids are resolved first without locking, then the rows are locked
        one by one in ascending id order so that two transfers over the
        same pair of cards always lock in the same order. Locked rows are
        re-read from the database. Cards are returned in the order of
        `identifiers`.

        SQLite ignores FOR UPDATE; there a no-op UPDATE of the row opens
        the write transaction and takes the database write lock instead.
        """
        ids = [self.resolve(identifier).id for identifier in identifiers]
        touch_rows = self.db.get_bind().dialect.name == "sqlite"

        locked = {}
        for card_id in sorted(set(ids)):
            if touch_rows:
                self.db.query(Card).filter(Card.id == card_id).update(
                    {Card.balance: Card.balance}, synchronize_session=False
                )
            card = (
                self.db.query(Card)
                .filter(Card.id == card_id)
                .with_for_update()
                .execution_options(populate_existing=True)
                .first()
            )
            if card is None:
                raise BankCardsError(ErrorCode.CARD_NOT_FOUND, f"Card {card_id} not found")
            locked[card_id] = card

        return [locked[card_id] for card_id in ids]

    def list_by_owner(self, username: str, skip: int = 0, limit: int = 100) -> List[Card]:
        return (
            self.db.query(Card)
            .join(User, Card.owner_id == User.id)
            .filter(User.username == username)
            .order_by(Card.id)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def list_ids_by_owner(self, username: str) -> List[int]:
        rows = (
            self.db.query(Card.id)
            .join(User, Card.owner_id == User.id)
            .filter(User.username == username)
            .all()
        )
        return [row.id for row in rows]

    def list_all(self, skip: int = 0, limit: int = 100) -> List[Tuple[Card, str]]:
        """All cards with their owner usernames, by id."""
        rows = (
            self.db.query(Card, User.username)
            .join(User, Card.owner_id == User.id)
            .order_by(Card.id)
            .offset(skip)
            .limit(limit)
            .all()
        )
        return [(card, username) for card, username in rows]

    def save(self, card: Card) -> Card:
        self.db.add(card)
        self.db.flush()
        return card

    def delete(self, card: Card) -> None:
        self.db.delete(card)
        self.db.flush()
