"""Integration tests for document text acquisition"""

import io
import threading
import time
import pytest
from unittest.mock import MagicMock, patch
from PIL import Image
from swiftsplit_parser.domain.exceptions import ExtractionError, UnsupportedFormat
from swiftsplit_parser.infrastructure.acquisition import documents
from swiftsplit_parser.infrastructure.acquisition.documents import DocumentTextExtractor, normalize_file_type
from swiftsplit_parser.infrastructure.acquisition.ocr import OcrEngine

pytestmark = pytest.mark.integration


def _pdf(*page_texts):
    """pdfplumber.open stand-in yielding pages with the given text"""
    pdf = MagicMock()
    pdf.__enter__.return_value.pages = [MagicMock(**{"extract_text.return_value": text}) for text in page_texts]
    return MagicMock(return_value=pdf)


@pytest.fixture
def ocr_engine():
    engine = MagicMock(spec=OcrEngine)
    engine.pdf_to_text.return_value = "Invoice 7\nTotal: $10.00"
    engine.image_to_text.return_value = "Receipt\nTotal: $4.50"
    return engine


@pytest.mark.parametrize(
    "file_type,expected",
    [("application/pdf", "pdf"), (".PDF", "pdf"), ("image/jpeg", "jpeg"), ("png", "png"), ("", "")],
)
def test_normalize_file_type(file_type, expected):
    assert normalize_file_type(file_type) == expected


def test_pdf_text_read_directly(monkeypatch, ocr_engine):
    monkeypatch.setattr(documents.pdfplumber, "open", _pdf("Invoice 1", None, "Total: $5.00"))

    extracted = DocumentTextExtractor(ocr_engine=ocr_engine).extract(b"%PDF", "pdf")

    assert extracted.method == "pdf-text"
    assert extracted.text == "Invoice 1\n\nTotal: $5.00"
    ocr_engine.pdf_to_text.assert_not_called()


def test_pdf_page_limit(monkeypatch, ocr_engine):
    monkeypatch.setattr(documents.pdfplumber, "open", _pdf("one", "two", "three"))

    extracted = DocumentTextExtractor(ocr_engine=ocr_engine, max_pages=2).extract(b"%PDF", "pdf")

    assert extracted.text == "one\ntwo"


def test_empty_pdf_falls_back_to_ocr(monkeypatch, ocr_engine):
    monkeypatch.setattr(documents.pdfplumber, "open", _pdf("", "  "))

    extracted = DocumentTextExtractor(ocr_engine=ocr_engine, max_pages=3).extract(b"%PDF", "application/pdf")

    assert extracted.method == "pdf-ocr"
    assert extracted.text == "Invoice 7\nTotal: $10.00"
    ocr_engine.pdf_to_text.assert_called_once_with(b"%PDF", 3)


def test_unreadable_pdf_falls_back_to_ocr(monkeypatch, ocr_engine):
    monkeypatch.setattr(documents.pdfplumber, "open", MagicMock(side_effect=ValueError("not a pdf")))

    extracted = DocumentTextExtractor(ocr_engine=ocr_engine).extract(b"junk", "pdf")

    assert extracted.method == "pdf-ocr"


def test_image_goes_to_ocr(ocr_engine):
    extracted = DocumentTextExtractor(ocr_engine=ocr_engine).extract(b"\x89PNG", "image/png")

    assert extracted.method == "image-ocr"
    assert extracted.word_count == 3
    ocr_engine.image_to_text.assert_called_once_with(b"\x89PNG")


def test_ocr_failure_wrapped(ocr_engine):
    ocr_engine.image_to_text.side_effect = RuntimeError("tesseract not installed")

    with pytest.raises(ExtractionError, match="OCR processing failed"):
        DocumentTextExtractor(ocr_engine=ocr_engine).extract(b"img", "jpg")


def test_no_text_recovered(ocr_engine):
    ocr_engine.image_to_text.return_value = "   "

    with pytest.raises(ExtractionError, match="No text could be extracted"):
        DocumentTextExtractor(ocr_engine=ocr_engine).extract(b"img", "tiff")


def test_unsupported_type(ocr_engine):
    with pytest.raises(UnsupportedFormat):
        DocumentTextExtractor(ocr_engine=ocr_engine).extract(b"doc", "docx")


def _png_bytes(frames=1) -> bytes:
    buffer = io.BytesIO()
    images = [Image.new("RGB", (40, 20), color="white") for _ in range(frames)]
    if frames == 1:
        images[0].save(buffer, format="PNG")
    else:
        images[0].save(buffer, format="TIFF", save_all=True, append_images=images[1:])
    return buffer.getvalue()


@patch("swiftsplit_parser.infrastructure.acquisition.ocr.pytesseract.image_to_string")
def test_ocr_engine_image_to_text(mock_tesseract):
    mock_tesseract.return_value = "Total: $9.00"

    text = OcrEngine(language="eng").image_to_text(_png_bytes())

    assert text == "Total: $9.00"
    image = mock_tesseract.call_args.args[0]
    assert image.mode == "L"
    assert mock_tesseract.call_args.kwargs["lang"] == "eng"


@patch("swiftsplit_parser.infrastructure.acquisition.ocr.pytesseract.image_to_string")
def test_ocr_engine_multi_frame_tiff(mock_tesseract):
    mock_tesseract.side_effect = ["page one", "", "page three"]

    text = OcrEngine().image_to_text(_png_bytes(frames=3))

    assert text == "page one\npage three"
    assert mock_tesseract.call_count == 3


@patch("swiftsplit_parser.infrastructure.acquisition.ocr.convert_from_bytes")
@patch("swiftsplit_parser.infrastructure.acquisition.ocr.pytesseract.image_to_string")
def test_ocr_engine_pdf_to_text(mock_tesseract, mock_convert):
    mock_convert.return_value = [Image.new("RGB", (10, 10)), Image.new("RGB", (10, 10))]
    mock_tesseract.side_effect = ["first", "second"]

    text = OcrEngine().pdf_to_text(b"%PDF", max_pages=2, dpi=150)

    assert text == "first\nsecond"
    mock_convert.assert_called_once_with(b"%PDF", dpi=150, first_page=1, last_page=2)


def test_ocr_engine_serializes_concurrent_recognitions():
    """Test two threads sharing one engine never run Tesseract at the same time"""
    active = []
    spans = []
    overlaps = []

    def fake_image_to_string(image, lang=None, config=None):
        if active:
            overlaps.append(threading.current_thread().name)
        active.append(threading.current_thread().name)
        started = time.monotonic()
        time.sleep(0.05)
        spans.append((started, time.monotonic()))
        active.pop()
        return "text"

    engine = OcrEngine()
    image = Image.new("RGB", (10, 10), color="white")

    with patch(
        "swiftsplit_parser.infrastructure.acquisition.ocr.pytesseract.image_to_string",
        side_effect=fake_image_to_string,
    ):
        threads = [threading.Thread(target=engine.recognize, args=(image,)) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    assert overlaps == []
    assert len(spans) == 2
    first, second = sorted(spans)
    assert first[1] <= second[0]
