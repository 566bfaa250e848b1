"""Invoice document parsing"""

import asyncio
import logging
from typing import Optional

from swiftsplit_parser.config import settings
from swiftsplit_parser.domain.builder import build_invoice_intent
from swiftsplit_parser.domain.document import analyze_invoice_structure
from swiftsplit_parser.domain.exceptions import ExtractionError, UnsupportedFormat
from swiftsplit_parser.domain.models import ExtractedText, PaymentIntent, PaymentSource
from swiftsplit_parser.domain.reference_tables import SUPPORTED_DOCUMENT_TYPES
from swiftsplit_parser.infrastructure.acquisition.documents import DocumentTextExtractor, normalize_file_type
from swiftsplit_parser.infrastructure.observability.metrics import acquisition_failure_counter
from swiftsplit_parser.orchestrators.pipeline import PaymentHistory, PaymentPipeline
from swiftsplit_parser.orchestrators.schemas import ParseResult

logger = logging.getLogger(__name__)


class InvoiceOrchestrator(PaymentPipeline):
    """Parses uploaded invoice PDFs and images"""

    source = PaymentSource.INVOICE

    def __init__(
        self,
        extractor: Optional[DocumentTextExtractor] = None,
        payment_history: Optional[PaymentHistory] = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
    ):
        super().__init__(payment_history)
        self.extractor = extractor or DocumentTextExtractor()
        self.timeout = settings.acquisition_timeout_seconds if timeout is None else timeout
        self.max_retries = settings.acquisition_max_retries if max_retries is None else max_retries
        self.backoff_base = settings.acquisition_backoff_base if backoff_base is None else backoff_base

    async def parse(self, data: bytes, file_type: str) -> ParseResult:
        return await self.run(self._build(data, file_type))

    async def acquire_text(self, data: bytes, file_type: str) -> ExtractedText:
        """
        Run blocking text extraction off the event loop with a timeout.

        Retry strategy:
        - Only timeouts are retried; extraction errors are deterministic
        - Exponential backoff: base * 2^(attempt-1)
        - A timed-out worker thread cannot be cancelled and runs to completion;
          with a shared OcrEngine the retry waits on its lock until then

        Raises:
            UnsupportedFormat: before any extraction attempt
            ExtractionError: extraction failed or every attempt timed out
        """
        if normalize_file_type(file_type) not in SUPPORTED_DOCUMENT_TYPES:
            raise UnsupportedFormat(f"Unsupported file type: {file_type}")

        attempt = 0
        while True:
            try:
                return await asyncio.wait_for(
                    asyncio.to_thread(self.extractor.extract, data, file_type),
                    timeout=self.timeout,
                )
            except asyncio.TimeoutError as e:
                attempt += 1
                acquisition_failure_counter.inc()
                if attempt >= self.max_retries:
                    raise ExtractionError(
                        f"Text extraction timed out after {attempt} attempts"
                    ) from e

            backoff = self.backoff_base * (2 ** (attempt - 1))
            logger.warning("Text extraction attempt %d timed out, retrying in %.1fs", attempt, backoff)
            await asyncio.sleep(backoff)

    async def _build(self, data: bytes, file_type: str) -> PaymentIntent:
        extracted = await self.acquire_text(data, file_type)
        structure = analyze_invoice_structure(extracted.text)
        return build_invoice_intent(structure, extracted, currency=settings.currency)
