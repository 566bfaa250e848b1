"""Risk scoring engine - gates automatic approval of parsed payments"""

from decimal import Decimal
from typing import List, Optional, Tuple

from swiftsplit_parser.domain.models import PaymentIntent, RiskAssessment
from swiftsplit_parser.domain.reference_tables import (
    RISK_PATTERNS,
    SEVERITY_POINTS,
    SUSPICIOUS_KEYWORDS,
)
from swiftsplit_parser.domain.validation import validate_recipient_name

LARGE_AMOUNT_POINTS = 30
LOW_CONFIDENCE_POINTS = 20
SUSPICIOUS_KEYWORD_POINTS = 25
HIGH_FREQUENCY_POINTS = 15

MAX_SCORE = 100


def describe_payment(intent: PaymentIntent) -> str:
    """Lowercased purpose plus recipient names, the text risk rules run over"""
    names = " ".join(recipient.name for recipient in intent.recipients)
    return f"{intent.purpose} {names}".lower()


def calculate_risk_score(
    intent: PaymentIntent,
    recent_payment_count: int = 0,
    min_confidence: float = 0.85,
    large_amount_threshold: int = 10_000,
    frequency_threshold: int = 5,
) -> Tuple[int, List[str]]:
    """
    Additive risk score with a warning per signal that fired.

    Scoring weights:
    - +30: total amount above the large amount threshold
    - +20: confidence below the minimum
    - +40 / +20: each high / medium severity risk pattern in the description
    - +25: each suspicious keyword in the description
    - +15: more recent payments from this payer than the frequency threshold

    Returns: (score clamped to 0-100, warnings)
    """
    score = 0
    warnings: List[str] = []

    if intent.total_amount > Decimal(large_amount_threshold):
        warnings.append("Large payment amount detected")
        score += LARGE_AMOUNT_POINTS

    if intent.confidence < min_confidence:
        warnings.append(f"Low confidence score: {intent.confidence}")
        score += LOW_CONFIDENCE_POINTS

    description = describe_payment(intent)

    for risk_pattern in RISK_PATTERNS:
        if risk_pattern.pattern.search(description):
            warnings.append(f"Risk pattern detected: {risk_pattern.reason}")
            score += SEVERITY_POINTS.get(risk_pattern.severity, 0)

    for keyword in SUSPICIOUS_KEYWORDS:
        if keyword in description:
            warnings.append(f"Suspicious keyword detected: {keyword}")
            score += SUSPICIOUS_KEYWORD_POINTS

    if recent_payment_count > frequency_threshold:
        warnings.append("Unusually high payment frequency")
        score += HIGH_FREQUENCY_POINTS

    return max(0, min(score, MAX_SCORE)), warnings


def determine_review(score: int, approval_threshold: int = 50) -> Tuple[bool, bool]:
    """
    Map risk score to an approval decision.

    Returns: (is_approved, requires_review)
    """
    if score < approval_threshold:
        return True, False
    return False, True


def assess_risk(
    intent: PaymentIntent,
    issues: Optional[List[str]] = None,
    recent_payment_count: int = 0,
    min_confidence: float = 0.85,
    large_amount_threshold: int = 10_000,
    frequency_threshold: int = 5,
    approval_threshold: int = 50,
) -> RiskAssessment:
    """
    Main entry point: score an intent and decide whether it needs review.

    Issues come from structural validation and are carried through untouched;
    risk never invalidates an intent on its own.
    """
    score, warnings = calculate_risk_score(
        intent,
        recent_payment_count=recent_payment_count,
        min_confidence=min_confidence,
        large_amount_threshold=large_amount_threshold,
        frequency_threshold=frequency_threshold,
    )

    for recipient in intent.recipients:
        for problem in validate_recipient_name(recipient.name):
            warnings.append(f"{problem}: {recipient.name}")

    is_approved, requires_review = determine_review(score, approval_threshold)

    return RiskAssessment(
        score=score,
        issues=list(issues or []),
        warnings=warnings,
        is_approved=is_approved,
        requires_review=requires_review,
    )
