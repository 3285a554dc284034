"""
Transaction store: append-only log of completed transfers.
"""

from typing import Iterable, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.transaction import Transaction


class TransactionStore:
    """Append and read transaction records. There is no update or delete."""

    def __init__(self, db: Session):
        self.db = db

    def append(self, transaction: Transaction) -> Transaction:
        self.db.add(transaction)
        self.db.flush()
        return transaction

    def find_by_id(self, transaction_id: int) -> Optional[Transaction]:
        return self.db.get(Transaction, transaction_id)

    def list_for_cards(self, card_ids: Iterable[int], skip: int = 0, limit: int = 100) -> List[Transaction]:
        card_ids = list(card_ids)
        if not card_ids:
            return []
        return (
            self.db.query(Transaction)
            .filter(
                or_(
                    Transaction.from_card_id.in_(card_ids),
                    Transaction.to_card_id.in_(card_ids),
                )
            )
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
