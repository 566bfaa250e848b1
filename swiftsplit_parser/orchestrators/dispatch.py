"""Entry point routing any payment input to its orchestrator"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from swiftsplit_parser.config import settings
from swiftsplit_parser.infrastructure.acquisition.documents import DocumentTextExtractor
from swiftsplit_parser.infrastructure.acquisition.ocr import OcrEngine
from swiftsplit_parser.infrastructure.clients.transcription import TranscriptionClient
from swiftsplit_parser.infrastructure.database.repositories import RecentPaymentHistory
from swiftsplit_parser.infrastructure.database.session import init_db
from swiftsplit_parser.infrastructure.observability.logging import setup_logging
from swiftsplit_parser.orchestrators.chat import ChatOrchestrator
from swiftsplit_parser.orchestrators.invoice import InvoiceOrchestrator
from swiftsplit_parser.orchestrators.schemas import BatchItemResult, ParseResult, failure_result
from swiftsplit_parser.orchestrators.voice import VoiceOrchestrator
from swiftsplit_parser.utils.date_utils import utcnow

logger = logging.getLogger(__name__)

SUPPORTED_KINDS = ("chat", "invoice", "voice")


class PaymentParser:
    """Parses chat, invoice and voice payment requests into ParseResults"""

    def __init__(
        self,
        chat: Optional[ChatOrchestrator] = None,
        invoice: Optional[InvoiceOrchestrator] = None,
        voice: Optional[VoiceOrchestrator] = None,
    ):
        self.chat = chat or ChatOrchestrator()
        self.invoice = invoice or InvoiceOrchestrator()
        self.voice = voice or VoiceOrchestrator()

    async def parse(self, kind: str, payload: Mapping[str, Any]) -> ParseResult:
        """
        Route a payload by kind.

        Payloads:
        - chat: {text, sender?}
        - invoice: {buffer, file_type}
        - voice: {audio, content_type, sender?}

        Malformed payloads come back as INVALID_INPUT failures, unknown kinds
        as UNSUPPORTED_FORMAT; nothing is raised.
        """
        if kind not in SUPPORTED_KINDS:
            return failure_result(f"Unsupported input type: {kind}", "UNSUPPORTED_FORMAT", {"source": kind})

        if not isinstance(payload, Mapping):
            logger.warning(f"Payload for {kind} is not a mapping: {type(payload).__name__}")
            return failure_result("Input payload must be a mapping", "INVALID_INPUT", {"source": kind})

        try:
            if kind == "chat":
                return await self.chat.parse(payload["text"], payload.get("sender"))
            if kind == "invoice":
                return await self.invoice.parse(payload["buffer"], payload["file_type"])
            return await self.voice.parse(payload["audio"], payload["content_type"], payload.get("sender"))
        except KeyError as e:
            logger.warning(f"Missing input field for {kind}: {e}")
            return failure_result(f"Missing input field: {e.args[0]}", "INVALID_INPUT", {"source": kind})

    async def batch_parse(self, inputs: Iterable[Mapping[str, Any]]) -> List[BatchItemResult]:
        """Inputs are {id, type, data} mappings, processed sequentially"""
        results = []
        for item in inputs:
            if not isinstance(item, Mapping):
                item = {}
            kind = item.get("type")
            result = await self.parse(kind, item.get("data") or {})
            results.append(
                BatchItemResult(
                    id=item.get("id"),
                    type=str(kind),
                    success=result.success,
                    data=result.data,
                    error=result.error,
                    metadata=result.metadata,
                )
            )
        return results

    def status(self) -> Dict[str, Any]:
        """Module states for health reporting"""
        voice_state = "active" if self.voice.transcription_client.api_key else "unconfigured"
        return {
            "status": "ok",
            "modules": {
                "chat": "active",
                "invoice": "active",
                "voice": voice_state,
                "validation": "active",
            },
            "timestamp": utcnow().isoformat(),
        }


def create_parser() -> PaymentParser:
    """Create a parser wired to the configured collaborators"""
    setup_logging(settings.log_level)
    init_db()

    # One OCR engine for the whole process; it serializes its own access
    extractor = DocumentTextExtractor(ocr_engine=OcrEngine())
    payment_history = RecentPaymentHistory()

    return PaymentParser(
        chat=ChatOrchestrator(payment_history=payment_history),
        invoice=InvoiceOrchestrator(extractor=extractor, payment_history=payment_history),
        voice=VoiceOrchestrator(transcription_client=TranscriptionClient(), payment_history=payment_history),
    )
