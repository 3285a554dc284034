"""
Domain services package.
"""

from app.services.cards import CardService
from app.services.transfers import TransferEngine
from app.services.users import UserService

__all__ = ["CardService", "TransferEngine", "UserService"]
