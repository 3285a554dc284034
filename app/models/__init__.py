"""
Database models package.
"""

from app.models.user import User, UserRole
from app.models.card import Card, CardStatus
from app.models.transaction import Transaction, TransactionStatus

__all__ = ["User", "UserRole", "Card", "CardStatus", "Transaction", "TransactionStatus"]
