"""Structural validation of payment intents"""

import re
from typing import List

from swiftsplit_parser.domain.exceptions import ValidationError
from swiftsplit_parser.domain.models import PaymentIntent

REQUIRED_FIELDS = ("payer", "recipients", "amounts", "currency")

_RECIPIENT_NAME = re.compile(r"^[a-zA-Z\s\-']+$")


def find_structural_issues(intent: PaymentIntent) -> List[str]:
    """Every structural problem with the intent; empty means valid"""
    issues = []

    missing = [name for name in REQUIRED_FIELDS if not getattr(intent, name)]
    if missing:
        issues.append(f"Missing required fields: {', '.join(missing)}")

    if len(intent.recipients) != len(intent.amounts):
        issues.append("Recipients and amounts must have the same length")

    if any(amount <= 0 for amount in intent.amounts):
        issues.append("Invalid payment amounts")

    return issues


def validate_payment_intent(intent: PaymentIntent) -> None:
    """
    Raises:
        ValidationError: listing every missing or mismatched field
    """
    issues = find_structural_issues(intent)
    if issues:
        raise ValidationError(issues)


def validate_recipient_name(name: str) -> List[str]:
    """Advisory checks on a recipient name; never invalidates the intent"""
    problems = []
    stripped = name.strip()

    if len(stripped) < 2:
        problems.append("Recipient name is too short")
    if len(name) > 100:
        problems.append("Recipient name is too long")
    if not _RECIPIENT_NAME.match(name):
        problems.append("Recipient name contains invalid characters")

    return problems
