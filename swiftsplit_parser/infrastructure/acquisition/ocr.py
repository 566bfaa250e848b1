"""
OCR engine wrapper using Tesseract for text extraction from images and rendered PDF pages.
"""

import io
import threading
from typing import Iterable, List, Optional

import pytesseract
from pdf2image import convert_from_bytes
from PIL import Image, ImageOps

from swiftsplit_parser.config import settings


class OcrEngine:
    """
    Single-writer handle around the Tesseract engine.

    Tesseract is not assumed to be reentrant, so every recognition on a handle
    runs under one lock. Share one instance across callers instead of creating
    an engine per request.
    """

    def __init__(self, language: Optional[str] = None, config: str = "--psm 6 -c preserve_interword_spaces=1"):
        self.language = language or settings.ocr_language
        self.config = config
        self._lock = threading.Lock()

    @staticmethod
    def prepare_image(image: Image.Image) -> Image.Image:
        """Auto-rotate from EXIF, grayscale, stretch contrast"""
        image = ImageOps.exif_transpose(image)
        image = image.convert("L")
        return ImageOps.autocontrast(image)

    def recognize(self, image: Image.Image) -> str:
        prepared = self.prepare_image(image)
        with self._lock:
            return pytesseract.image_to_string(prepared, lang=self.language, config=self.config)

    def recognize_pages(self, pages: Iterable[Image.Image]) -> str:
        texts: List[str] = [self.recognize(page) for page in pages]
        return "\n".join(text for text in texts if text.strip())

    def image_to_text(self, data: bytes) -> str:
        """
        Perform OCR on an encoded image (jpg, png, tiff).
        Multi-frame TIFFs are read frame by frame.
        """
        with Image.open(io.BytesIO(data)) as image:
            frames = []
            for index in range(getattr(image, "n_frames", 1)):
                image.seek(index)
                frames.append(image.copy())
        return self.recognize_pages(frames)

    def pdf_to_text(self, data: bytes, max_pages: Optional[int] = None, dpi: Optional[int] = None) -> str:
        """Render PDF pages to images and OCR them in order"""
        pages = convert_from_bytes(
            data,
            dpi=dpi or settings.pdf_render_dpi,
            first_page=1,
            last_page=max_pages or settings.pdf_max_pages,
        )
        return self.recognize_pages(pages)
