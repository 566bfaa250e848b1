"""Payment intent classification over free-form text"""

from swiftsplit_parser.domain.models import IntentCategory, IntentMatch
from swiftsplit_parser.domain.reference_tables import (
    INTENT_PATTERNS,
    STRONG_INTENT_INDICATORS,
    WEAK_INTENT_INDICATORS,
)

BASE_CONFIDENCE = 0.7
STRONG_INDICATOR_WEIGHT = 0.1
WEAK_INDICATOR_WEIGHT = 0.05


def calculate_intent_confidence(normalized_text: str) -> float:
    """
    Confidence for a text that already matched an intent pattern.

    Scoring:
    - 0.7 base for any matched pattern
    - +0.1 per strong indicator (pay, send, transfer, usdc, tip) found as a substring
    - +0.05 per weak indicator (money, cash, funds, dollars)
    - Capped at 1.0
    """
    confidence = BASE_CONFIDENCE
    confidence += STRONG_INDICATOR_WEIGHT * sum(
        1 for indicator in STRONG_INTENT_INDICATORS if indicator in normalized_text
    )
    confidence += WEAK_INDICATOR_WEIGHT * sum(
        1 for indicator in WEAK_INTENT_INDICATORS if indicator in normalized_text
    )
    return round(min(confidence, 1.0), 2)


def detect_payment_intent(text: str) -> IntentMatch:
    """
    Classify text into an intent category.

    Patterns are tried in declared order and the first match wins. Matching is
    case-insensitive over the trimmed text so captured names keep their casing;
    indicator keywords are checked against the case-folded text.
    """
    stripped = text.strip()
    normalized = stripped.casefold()

    for intent, pattern in INTENT_PATTERNS:
        match = pattern.search(stripped)
        if match:
            groups = {name: value.strip() for name, value in match.groupdict().items() if value}
            return IntentMatch(
                intent=intent,
                groups=groups,
                confidence=calculate_intent_confidence(normalized),
            )

    return IntentMatch(intent=IntentCategory.UNKNOWN, groups={}, confidence=0.0)
