"""Chat message parsing"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from swiftsplit_parser.config import settings
from swiftsplit_parser.domain.builder import build_chat_intent
from swiftsplit_parser.domain.exceptions import IntentNotDetected, InvalidInput
from swiftsplit_parser.domain.intent import detect_payment_intent
from swiftsplit_parser.domain.models import PaymentIntent, PaymentSource
from swiftsplit_parser.orchestrators.pipeline import PaymentPipeline
from swiftsplit_parser.orchestrators.schemas import ParseResult


def intent_from_text(
    text: str,
    payer: Optional[str] = None,
    source: PaymentSource = PaymentSource.CHAT,
    extra_metadata: Optional[Dict[str, Any]] = None,
) -> PaymentIntent:
    """
    Classify text and build a PaymentIntent from it.

    Raises:
        IntentNotDetected: no pattern matched or confidence is below the floor
        AmountNotFound: no positive amount in the text
    """
    intent_match = detect_payment_intent(text)

    if not intent_match.matched or intent_match.confidence < settings.intent_confidence_floor:
        raise IntentNotDetected("No clear payment intent detected in message")

    return build_chat_intent(
        intent_match,
        text,
        payer=payer or settings.default_payer,
        currency=settings.currency,
        source=source,
        extra_metadata=extra_metadata,
    )


class ChatOrchestrator(PaymentPipeline):
    """Parses free-form chat messages"""

    source = PaymentSource.CHAT

    async def parse(self, message: str, sender: Optional[str] = None) -> ParseResult:
        return await self.run(self._build(message, sender))

    async def parse_many(self, messages: Iterable[Dict[str, Any]]) -> List[ParseResult]:
        """Messages are {text, sender} mappings, parsed in order"""
        results = []
        for message in messages:
            if not isinstance(message, Mapping):
                message = {}
            results.append(await self.parse(message.get("text"), message.get("sender")))
        return results

    async def _build(self, message: str, sender: Optional[str]) -> PaymentIntent:
        if not isinstance(message, str) or not message.strip():
            raise InvalidInput("Message text is required")
        return intent_from_text(message, payer=sender)
