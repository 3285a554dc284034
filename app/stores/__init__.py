"""
Persistence stores package.
"""

from app.stores.cards import CardStore
from app.stores.transactions import TransactionStore
from app.stores.users import UserStore

__all__ = ["CardStore", "TransactionStore", "UserStore"]
