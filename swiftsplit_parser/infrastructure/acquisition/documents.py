"""Document text acquisition: direct PDF text with OCR fallback"""

import io
import logging
import time
from typing import Optional

import pdfplumber

from swiftsplit_parser.config import settings
from swiftsplit_parser.domain.exceptions import ExtractionError, UnsupportedFormat
from swiftsplit_parser.domain.models import ExtractedText
from swiftsplit_parser.domain.reference_tables import SUPPORTED_DOCUMENT_TYPES
from swiftsplit_parser.infrastructure.acquisition.ocr import OcrEngine
from swiftsplit_parser.infrastructure.observability.metrics import acquisition_latency_histogram

logger = logging.getLogger(__name__)


def normalize_file_type(file_type: str) -> str:
    """'application/pdf', '.PDF', 'image/jpeg' -> 'pdf' / 'jpeg'"""
    value = (file_type or "").strip().lower()
    value = value.rsplit("/", 1)[-1]
    return value.lstrip(".")


class DocumentTextExtractor:
    """Turns uploaded invoice bytes into text"""

    def __init__(self, ocr_engine: Optional[OcrEngine] = None, max_pages: Optional[int] = None):
        self.ocr_engine = ocr_engine or OcrEngine()
        self.max_pages = max_pages or settings.pdf_max_pages

    def extract(self, data: bytes, file_type: str) -> ExtractedText:
        """
        Extract text from a PDF or image.

        PDFs are read directly first; if that fails or yields nothing the
        pages are rendered and OCRed. Images go straight to OCR.

        Raises:
            UnsupportedFormat: file type is not pdf/jpg/jpeg/png/tiff
            ExtractionError: no text could be recovered
        """
        kind = normalize_file_type(file_type)
        if kind not in SUPPORTED_DOCUMENT_TYPES:
            raise UnsupportedFormat(f"Unsupported file type: {file_type}")

        start_time = time.monotonic()

        if kind == "pdf":
            text = self._read_pdf_text(data)
            method = "pdf-text"
            if not text.strip():
                logger.warning("PDF text extraction yielded nothing, trying OCR fallback")
                text = self._ocr(self.ocr_engine.pdf_to_text, data, self.max_pages)
                method = "pdf-ocr"
        else:
            text = self._ocr(self.ocr_engine.image_to_text, data)
            method = "image-ocr"

        elapsed = time.monotonic() - start_time
        acquisition_latency_histogram.labels(method=method).observe(elapsed)

        if not text.strip():
            raise ExtractionError(f"No text could be extracted from {kind} document")

        return ExtractedText(text=text, method=method, elapsed_ms=elapsed * 1000)

    def _read_pdf_text(self, data: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = pdf.pages[: self.max_pages]
                return "\n".join(page.extract_text() or "" for page in pages)
        except Exception as e:
            logger.warning("PDF text extraction failed: %s", e)
            return ""

    @staticmethod
    def _ocr(operation, *args) -> str:
        try:
            return operation(*args)
        except Exception as e:
            raise ExtractionError(f"OCR processing failed: {e}") from e
