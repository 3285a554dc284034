"""
Pydantic schemas package.
"""

from app.schemas.card import CardCreate, CardStatusUpdate, CardView
from app.schemas.transaction import TransferRequest, TransactionRecord
from app.schemas.user import (
    SignInRequest,
    SignUpRequest,
    TokenResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "CardCreate",
    "CardStatusUpdate",
    "CardView",
    "TransferRequest",
    "TransactionRecord",
    "SignInRequest",
    "SignUpRequest",
    "TokenResponse",
    "UserCreate",
    "UserResponse",
    "UserUpdate"
]
