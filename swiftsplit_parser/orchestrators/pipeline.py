"""Shared orchestration: validation, risk scoring, envelope, metrics and logs"""

import logging
import time
import uuid
from typing import Any, Awaitable, Dict, Optional, Protocol

from swiftsplit_parser.config import settings
from swiftsplit_parser.domain.exceptions import DomainException
from swiftsplit_parser.domain.models import PaymentIntent, PaymentSource, RiskAssessment
from swiftsplit_parser.domain.scoring import assess_risk
from swiftsplit_parser.domain.validation import find_structural_issues, validate_payment_intent
from swiftsplit_parser.infrastructure.observability.logging import log_parse_outcome
from swiftsplit_parser.infrastructure.observability.metrics import record_parse, record_risk_decision
from swiftsplit_parser.orchestrators.schemas import ParseResult, failure_result, success_result

logger = logging.getLogger(__name__)


class PaymentHistory(Protocol):
    def count_recent_payments(self, payer: str) -> int: ...


class PaymentPipeline:
    """
    Base for the chat, invoice and voice orchestrators.

    Flow:
    1. Subclass builds a PaymentIntent (text acquisition happens there)
    2. Structural validation
    3. Risk scoring with the recent payment count for the payer
    4. Uniform ParseResult; no exception escapes
    """

    source: PaymentSource = PaymentSource.CHAT

    def __init__(self, payment_history: Optional[PaymentHistory] = None):
        self.payment_history = payment_history

    def recent_payment_count(self, payer: str) -> int:
        if self.payment_history is None:
            return 0
        return self.payment_history.count_recent_payments(payer)

    def assess(self, intent: PaymentIntent) -> RiskAssessment:
        return assess_risk(
            intent,
            issues=find_structural_issues(intent),
            recent_payment_count=self.recent_payment_count(intent.payer),
            min_confidence=settings.risk_min_confidence,
            large_amount_threshold=settings.large_amount_threshold,
            frequency_threshold=settings.frequency_threshold,
            approval_threshold=settings.approval_threshold,
        )

    async def run(self, operation: Awaitable[PaymentIntent]) -> ParseResult:
        start_time = time.monotonic()
        request_id = str(uuid.uuid4())
        source = self.source.value
        metadata: Dict[str, Any] = {"request_id": request_id, "source": source}

        try:
            # 1. Build intent
            intent = await operation

            # 2. Structural validation
            validate_payment_intent(intent)

            # 3. Risk assessment
            assessment = self.assess(intent)

        except DomainException as e:
            logger.warning(f"Parse failed: {e}", extra={"request_id": request_id, "source": source})
            return self._finish(failure_result(str(e), e.code, metadata), start_time)

        except Exception as e:
            logger.error(f"Unexpected error: {e}", exc_info=True, extra={"request_id": request_id, "source": source})
            return self._finish(failure_result("Internal parsing error", "INTERNAL_ERROR", metadata), start_time)

        record_risk_decision(assessment.score)
        return self._finish(success_result(intent, assessment, metadata), start_time)

    def _finish(self, result: ParseResult, start_time: float) -> ParseResult:
        duration_ms = (time.monotonic() - start_time) * 1000
        result.metadata["duration_ms"] = round(duration_ms, 2)

        record_parse(self.source.value, result.success)
        log_parse_outcome(
            request_id=result.metadata["request_id"],
            source=self.source.value,
            success=result.success,
            duration_ms=duration_ms,
            intent=result.data.intent.value if result.data else None,
            risk_score=result.metadata.get("risk", {}).get("score"),
            requires_review=result.metadata.get("requires_review"),
            error_code=result.metadata.get("error_code"),
        )
        return result
