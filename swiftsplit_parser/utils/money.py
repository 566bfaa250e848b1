"""Decimal helpers for monetary values"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

CENTS = Decimal("0.01")


def to_decimal(text: Optional[str]) -> Optional[Decimal]:
    """Parse '1,250.00' / '$42' style text; None when it is not a plain number"""
    if text is None:
        return None
    text = text.replace(",", "").replace("$", "").strip()
    if not re.fullmatch(r"\d+(\.\d+)?", text):
        return None
    return Decimal(text)


def quantize_amount(amount: Decimal) -> Decimal:
    """Round to 2 decimal places, half up"""
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
