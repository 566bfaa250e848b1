"""Split calculation for payments shared between several recipients"""

from dataclasses import replace
from decimal import Decimal
from typing import List, Sequence, Tuple

from swiftsplit_parser.domain.exceptions import ValidationError
from swiftsplit_parser.domain.models import Recipient
from swiftsplit_parser.utils.money import quantize_amount

HUNDRED_PERCENT = Decimal("100")


def calculate_equal_split(
    total_amount: Decimal,
    recipients: Sequence[Recipient],
) -> Tuple[List[Recipient], List[Decimal]]:
    """
    Divide a total equally among recipients.

    Requirements:
    - Each amount is total / N, rounded to cents independently
    - No remainder redistribution: the rounded amounts can miss the total
      by up to N cents
    - Each recipient's share is 100 / N percent, rounded the same way

    Args:
        total_amount: Amount to divide
        recipients: Payees, in order

    Returns:
        (recipients with share filled in, amounts) in the same order

    Example:
        100.00 / 3 -> [33.33, 33.33, 33.33]  (sum 99.99)
    """
    count = len(recipients)
    if count == 0:
        raise ValueError("Cannot split a payment among zero recipients")
    if total_amount <= 0:
        raise ValidationError([f"Invalid amount: {total_amount}"])

    amount = quantize_amount(Decimal(total_amount) / count)
    share = quantize_amount(HUNDRED_PERCENT / count)

    shared = [replace(recipient, share=share) for recipient in recipients]
    amounts = [amount for _ in recipients]

    return shared, amounts
