"""
Transfer engine.
The only code path that moves money between two card balances.

Implements:
- Validation in a fixed order: existence, ownership, same card, status,
  expiry, funds
- Atomicity: both balance writes and the transaction record share one
  database transaction with a single commit
- Concurrency: row-level locks taken in ascending card id order, with a
  bounded retry on lock contention only
"""

import time
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import BankCardsError, ErrorCode
from app.core.logging_config import get_logger
from app.models.card import MAX_BALANCE, Card, CardStatus
from app.models.transaction import Transaction, TransactionStatus
from app.stores.cards import CardIdentifier, CardStore
from app.stores.transactions import TransactionStore
from app.stores.users import UserStore

logger = get_logger(__name__)

# SQLSTATE codes PostgreSQL uses for serialization failure, deadlock and lock timeout
RETRYABLE_SQLSTATES = {"40001", "40P01", "55P03"}


def is_lock_contention(exc: OperationalError) -> bool:
    """True when the database rejected the statement because of a competing lock."""
    sqlstate = getattr(exc.orig, "pgcode", None) or getattr(exc.orig, "sqlstate", None)
    if sqlstate in RETRYABLE_SQLSTATES:
        return True
    return "database is locked" in str(exc.orig)


class TransferEngine:
    """
    Moves funds between two cards owned by the same user.

    The engine owns the transaction boundary of the session it is given:
    a transfer either commits entirely or is rolled back.
    """

    def __init__(
        self,
        db: Session,
        max_retries: Optional[int] = None,
        retry_backoff: Optional[float] = None,
    ):
        self.db = db
        self.cards = CardStore(db)
        self.transactions = TransactionStore(db)
        self.users = UserStore(db)
        self.max_retries = max_retries if max_retries is not None else settings.TRANSFER_MAX_RETRIES
        self.retry_backoff = retry_backoff if retry_backoff is not None else settings.TRANSFER_RETRY_BACKOFF_SECONDS

    def transfer(
        self,
        from_identifier: CardIdentifier,
        to_identifier: CardIdentifier,
        amount: int,
        requesting_username: str,
    ) -> Transaction:
        """
        Transfer `amount` minor units between two of the user's cards.

        Raises BankCardsError with one of INVALID_AMOUNT, CARD_NOT_FOUND,
        NOT_OWNER, SAME_CARD_TRANSFER, CARD_BLOCKED, CARD_EXPIRED or
        INSUFFICIENT_FUNDS, or INVALID_AMOUNT again when the credit would
        overflow the destination balance. Nothing is written when it raises.
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or not 0 < amount <= MAX_BALANCE:
            raise BankCardsError(ErrorCode.INVALID_AMOUNT, "Transfer amount must be a positive number of minor units")

        attempt = 1
        while True:
            try:
                transaction = self._transfer_once(from_identifier, to_identifier, amount, requesting_username)
                self.db.commit()
            except OperationalError as exc:
                self.db.rollback()
                if not is_lock_contention(exc) or attempt >= self.max_retries:
                    raise
                logger.info("Transfer lock contention, retrying (attempt %d of %d)", attempt, self.max_retries)
                time.sleep(self.retry_backoff * attempt)
                attempt += 1
                continue
            except BankCardsError as exc:
                self.db.rollback()
                logger.warning("Transfer rejected for user %s: %s", requesting_username, exc.code.name)
                raise
            except Exception:
                self.db.rollback()
                logger.exception("Transfer failed for user %s", requesting_username)
                raise

            logger.info(
                "Transfer %d completed: card %d -> card %d, amount %d, user %s",
                transaction.id,
                transaction.from_card_id,
                transaction.to_card_id,
                transaction.amount,
                requesting_username,
            )
            return transaction

    def _transfer_once(
        self,
        from_identifier: CardIdentifier,
        to_identifier: CardIdentifier,
        amount: int,
        requesting_username: str,
    ) -> Transaction:
        from_card, to_card = self.cards.resolve_for_update([from_identifier, to_identifier])

        self._check_owner(from_card, requesting_username)
        self._check_owner(to_card, requesting_username)

        if from_card.id == to_card.id:
            raise BankCardsError(ErrorCode.SAME_CARD_TRANSFER)

        self._validate_cards(from_card, to_card, amount)

        from_card.balance -= amount
        self.cards.save(from_card)
        to_card.balance += amount
        self.cards.save(to_card)

        return self.transactions.append(
            Transaction(
                from_card_id=from_card.id,
                to_card_id=to_card.id,
                amount=amount,
                status=TransactionStatus.COMPLETED,
                created_at=datetime.now(timezone.utc),
            )
        )

    def _check_owner(self, card: Card, username: str) -> None:
        owner = self.users.find_by_id(card.owner_id)
        if owner is None or owner.username != username:
            raise BankCardsError(ErrorCode.NOT_OWNER)

    def _validate_cards(self, from_card: Card, to_card: Card, amount: int) -> None:
        if from_card.status != CardStatus.ACTIVE or to_card.status != CardStatus.ACTIVE:
            raise BankCardsError(ErrorCode.CARD_BLOCKED)

        today = date.today()
        if from_card.expire_at < today or to_card.expire_at < today:
            raise BankCardsError(ErrorCode.CARD_EXPIRED)

        if from_card.balance < amount:
            raise BankCardsError(
                ErrorCode.INSUFFICIENT_FUNDS,
                f"Insufficient funds. Balance: {from_card.balance}, Required: {amount}",
            )

        if to_card.balance + amount > MAX_BALANCE:
            raise BankCardsError(ErrorCode.INVALID_AMOUNT, "Transfer would exceed the maximum card balance")

    def get(self, transaction_id: int, requesting_username: str) -> Transaction:
        """Return one transaction touching at least one of the user's cards."""
        transaction = self.transactions.find_by_id(transaction_id)
        if transaction is None:
            raise BankCardsError(ErrorCode.TRANSACTION_NOT_FOUND, f"Transaction {transaction_id} not found")

        own_ids = set(self.cards.list_ids_by_owner(requesting_username))
        if transaction.from_card_id not in own_ids and transaction.to_card_id not in own_ids:
            raise BankCardsError(ErrorCode.NOT_OWNER, "Transaction does not belong to the current user")
        return transaction

    def history(self, requesting_username: str, skip: int = 0, limit: int = 100) -> List[Transaction]:
        """Transactions sent or received by any of the user's cards, newest first."""
        card_ids = self.cards.list_ids_by_owner(requesting_username)
        return self.transactions.list_for_cards(card_ids, skip=skip, limit=limit)
