"""
Error kinds raised by the card and transfer services.

Every failure the core reports is a BankCardsError carrying one ErrorCode.
The code holds the HTTP status and default message; translation to a wire
response happens once, in the exception handler registered by app.main.
"""

import enum
from typing import Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse


class ErrorCode(enum.Enum):
    """Error kinds with their HTTP status and default message."""
    USER_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "User not found")
    USER_ALREADY_EXISTS = (status.HTTP_409_CONFLICT, "User with this username or email already exists")
    INVALID_CREDENTIALS = (status.HTTP_401_UNAUTHORIZED, "Invalid username or password")
    FORBIDDEN = (status.HTTP_403_FORBIDDEN, "Operation requires administrator role")
    CARD_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "Card not found")
    CARD_EXPIRED = (status.HTTP_403_FORBIDDEN, "Operation not possible: card is expired")
    CARD_BLOCKED = (status.HTTP_403_FORBIDDEN, "Operation not possible: card is blocked")
    INVALID_STATUS = (status.HTTP_400_BAD_REQUEST, "Invalid card status")
    INVALID_AMOUNT = (status.HTTP_400_BAD_REQUEST, "Invalid amount")
    INSUFFICIENT_FUNDS = (status.HTTP_400_BAD_REQUEST, "Insufficient funds on card")
    SAME_CARD_TRANSFER = (status.HTTP_409_CONFLICT, "Transfer to the same card is not possible")
    NOT_OWNER = (status.HTTP_403_FORBIDDEN, "Card does not belong to the current user")
    TRANSACTION_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "Transaction not found")

    def __init__(self, http_status: int, default_message: str):
        self.http_status = http_status
        self.default_message = default_message


class BankCardsError(Exception):
    """Raised by services; never caught inside the core."""

    def __init__(self, code: ErrorCode, detail: Optional[str] = None):
        self.code = code
        self.detail = detail or code.default_message
        super().__init__(self.detail)

    def __repr__(self):
        return f"<BankCardsError(code={self.code.name}, detail={self.detail!r})>"


def bank_cards_error_handler(request: Request, exc: BankCardsError) -> JSONResponse:
    """Translate a BankCardsError into a JSON error response."""
    return JSONResponse(
        status_code=exc.code.http_status,
        content={"detail": exc.detail, "code": exc.code.name},
    )
