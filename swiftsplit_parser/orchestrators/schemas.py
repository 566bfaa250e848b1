"""Pydantic schemas for the result envelope returned by every orchestrator"""

from dataclasses import asdict
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from swiftsplit_parser.domain.models import PaymentIntent, RiskAssessment


class ParseResult(BaseModel):
    """Uniform output of chat, invoice and voice parsing"""

    success: bool
    data: Optional[PaymentIntent] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def requires_review(self) -> bool:
        return bool(self.metadata.get("requires_review", False))


class BatchItemResult(ParseResult):
    """Single entry of a batch parse"""

    id: Optional[str] = None
    type: str


def risk_to_dict(assessment: RiskAssessment) -> Dict[str, Any]:
    payload = asdict(assessment)
    payload["is_valid"] = assessment.is_valid
    payload["assessed_at"] = assessment.assessed_at.isoformat()
    return payload


def success_result(intent: PaymentIntent, assessment: RiskAssessment, metadata: Dict[str, Any]) -> ParseResult:
    return ParseResult(
        success=True,
        data=intent,
        metadata={
            **metadata,
            "risk": risk_to_dict(assessment),
            "requires_review": assessment.requires_review,
        },
    )


def failure_result(error: str, error_code: str, metadata: Optional[Dict[str, Any]] = None) -> ParseResult:
    return ParseResult(
        success=False,
        data=None,
        error=error,
        metadata={**(metadata or {}), "error_code": error_code},
    )
