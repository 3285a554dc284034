"""
Card number helpers: random number generation and display masking.
"""

import secrets
from typing import Optional

CARD_NUMBER_LENGTH = 16


def generate_card_number() -> str:
    """Return a random 16-digit card number."""
    return "".join(str(secrets.randbelow(10)) for _ in range(CARD_NUMBER_LENGTH))


def mask_card_number(number: Optional[str]) -> str:
    """
    Hide everything but the last four digits.

    >>> mask_card_number("1111222233334444")
    '**** **** **** 4444'
    >>> mask_card_number("12")
    '****'
    """
    if number is None or len(number) < 4:
        return "****"
    return "**** **** **** " + number[-4:]
