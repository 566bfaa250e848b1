"""Unit tests for recipient, amount and purpose extraction"""

import pytest
from decimal import Decimal
from swiftsplit_parser.domain.exceptions import AmountNotFound
from swiftsplit_parser.domain.extraction import (
    extract_amount,
    extract_purpose,
    extract_recipients,
    match_purpose_vocabulary,
)
from swiftsplit_parser.domain.intent import detect_payment_intent
from swiftsplit_parser.domain.models import IntentCategory, IntentMatch


def test_extract_single_recipient_full_share():
    match = detect_payment_intent("Pay John 120 USDC for website development")
    recipients = extract_recipients(match)

    assert [r.name for r in recipients] == ["John"]
    assert recipients[0].share == Decimal("100")
    assert recipients[0].wallet is None


def test_extract_split_recipients_unset_share():
    """Test list split on commas and 'and', shares left for the split calculator"""
    match = detect_payment_intent("Split 90 among Jane, Alex and Sam")
    recipients = extract_recipients(match)

    assert [r.name for r in recipients] == ["Jane", "Alex", "Sam"]
    assert all(r.share is None for r in recipients)


def test_recipient_list_ignored_outside_split():
    match = IntentMatch(IntentCategory.BASIC_PAYMENT, {"recipients": "a and b"}, 0.8)
    assert extract_recipients(match) == []


def test_extract_amount_prefers_captured_value():
    match = detect_payment_intent("pay john 120 usdc, invoice 4500")
    assert extract_amount("pay john 120 usdc, invoice 4500", match) == Decimal("120")


def test_extract_amount_falls_back_to_largest_token():
    """Test fallback scan picks the maximum positive amount"""
    match = IntentMatch(IntentCategory.SPLIT_PAYMENT, {"recipients": "Jane and Alex"}, 0.75)
    text = "split among jane and alex: $20 now, 0 later, $45.50 tomorrow"

    assert extract_amount(text, match) == Decimal("45.50")


def test_extract_amount_zero_capture_uses_scan():
    match = IntentMatch(IntentCategory.BASIC_PAYMENT, {"recipient": "bob", "amount": "0"}, 0.8)
    assert extract_amount("pay bob 0 then 15", match) == Decimal("15")


def test_extract_amount_not_found():
    match = IntentMatch(IntentCategory.UNKNOWN, {}, 0.0)
    with pytest.raises(AmountNotFound):
        extract_amount("pay bob nothing", match)


def test_extract_purpose_vocabulary_term():
    """Test captured phrase resolves to the vocabulary term it contains"""
    assert extract_purpose("Pay John 120 USDC for website development") == "website"


def test_extract_purpose_raw_phrase():
    assert extract_purpose("send bob 20 for pizza night please") == "pizza night"


def test_extract_purpose_payment_for():
    assert extract_purpose("tip ana 5, payment for logo work") == "logo"


def test_extract_purpose_default():
    assert extract_purpose("pay bob 20") == "Professional services"


def test_match_purpose_vocabulary_order():
    """Test vocabulary order decides between several contained terms"""
    assert match_purpose_vocabulary("Design and development") == "design"


def test_extract_amount_with_thousands_separator():
    """Test grouped digits are captured whole, not cut at the comma"""
    text = "Pay John 1,200 USDC for logo"
    match = detect_payment_intent(text)

    assert match.groups["amount"] == "1,200"
    assert extract_amount(text, match) == Decimal("1200")


def test_extract_amount_scan_reads_thousands_separator():
    match = IntentMatch(IntentCategory.SPLIT_PAYMENT, {"recipients": "Jane and Alex"}, 0.75)
    assert extract_amount("split among jane and alex: $12,500.75 total", match) == Decimal("12500.75")
