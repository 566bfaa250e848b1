"""Field extraction from classified chat text"""

from decimal import Decimal
from typing import List

from swiftsplit_parser.domain.exceptions import AmountNotFound
from swiftsplit_parser.domain.models import IntentCategory, IntentMatch, Recipient
from swiftsplit_parser.domain.reference_tables import (
    AMOUNT_TOKEN,
    DEFAULT_PURPOSE,
    PAYMENT_PURPOSES,
    PURPOSE_PATTERNS,
    RECIPIENT_SEPARATOR,
)
from swiftsplit_parser.utils.money import to_decimal

FULL_SHARE = Decimal("100")


def extract_recipients(intent_match: IntentMatch) -> List[Recipient]:
    """
    Build recipients from the captured fields.

    A single-recipient capture gets the full share. For split payments the
    recipient list is split on commas / "and" and shares are left for the
    split calculator.
    """
    recipients: List[Recipient] = []

    name = intent_match.groups.get("recipient")
    if name:
        recipients.append(Recipient(name=name, share=FULL_SHARE))

    listed = intent_match.groups.get("recipients")
    if listed and intent_match.intent is IntentCategory.SPLIT_PAYMENT:
        for part in RECIPIENT_SEPARATOR.split(listed):
            part = part.strip()
            if part:
                recipients.append(Recipient(name=part))

    return recipients


def extract_amount(text: str, intent_match: IntentMatch) -> Decimal:
    """
    Captured amount if positive, else the largest currency-like token in the text.

    Raises:
        AmountNotFound: when the text holds no positive number at all
    """
    captured = to_decimal(intent_match.groups.get("amount"))
    if captured is not None and captured > 0:
        return captured

    candidates = [to_decimal(token) for token in AMOUNT_TOKEN.findall(text)]
    positive = [amount for amount in candidates if amount is not None and amount > 0]
    if positive:
        return max(positive)

    raise AmountNotFound("No valid amount found in message")


def match_purpose_vocabulary(phrase: str) -> str:
    """First known purpose contained in the phrase, else the phrase itself"""
    lowered = phrase.lower()
    for purpose in PAYMENT_PURPOSES:
        if purpose in lowered:
            return purpose
    return phrase


def extract_purpose(text: str) -> str:
    for pattern in PURPOSE_PATTERNS:
        match = pattern.search(text)
        if match:
            phrase = match.group(1).strip()
            if phrase:
                return match_purpose_vocabulary(phrase)
    return DEFAULT_PURPOSE
