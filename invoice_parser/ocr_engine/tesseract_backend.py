"""
Tesseract OCR Backend.

This module provides OCR functionality using Tesseract (pytesseract)
for scanned invoices: image files and PDFs without a text layer.

The parsing engine works line by line, so the backend returns plain
text with Tesseract's own line breaks preserved.

Requirements:
    - Tesseract OCR installed on the system
    - pytesseract Python package

Author: ML Engineering Team
"""

import time
from typing import List

from PIL import Image

from config import get_config
from invoice_parser.utils.logger import get_logger
from invoice_parser.utils.exceptions import OCREngineNotAvailableError, OCRProcessingError

logger = get_logger(__name__)


class TesseractBackend:
    """
    Tesseract OCR backend implementation.

    Attributes:
        language: Tesseract language code (e.g., "eng")
        psm: Page Segmentation Mode (1-13)
        oem: OCR Engine Mode (0-3)
        extra_config: Additional Tesseract configuration

    Example:
        >>> backend = TesseractBackend()
        >>> text = backend.extract_text(image)
    """

    def __init__(self) -> None:
        """Initialize the Tesseract backend with configuration."""
        self.language = get_config("ocr.tesseract.lang", "eng")
        # psm 6 keeps table rows on single lines
        self.psm = get_config("ocr.tesseract.psm", 6)
        self.oem = get_config("ocr.tesseract.oem", 3)
        self.extra_config = get_config("ocr.tesseract.config", "")

        self._check_dependencies()

        logger.debug(
            f"TesseractBackend initialized (lang={self.language}, "
            f"psm={self.psm}, oem={self.oem})"
        )

    def _check_dependencies(self) -> None:
        """
        Check if Tesseract is available.

        Raises:
            OCREngineNotAvailableError: If Tesseract is not installed.
        """
        try:
            import pytesseract
            self._pytesseract = pytesseract

            version = pytesseract.get_tesseract_version()
            logger.info(f"Tesseract version: {version}")

        except ImportError:
            raise OCREngineNotAvailableError(
                "pytesseract (install with: pip install pytesseract)"
            )
        except Exception as e:
            raise OCREngineNotAvailableError(
                f"Tesseract OCR (not installed or not in PATH): {e}"
            )

    def _build_config(self) -> str:
        """
        Build Tesseract configuration string.

        Returns:
            Configuration string for Tesseract.
        """
        config_parts = [
            f"--psm {self.psm}",
            f"--oem {self.oem}"
        ]

        if self.extra_config:
            config_parts.append(self.extra_config)

        return ' '.join(config_parts)

    def extract_text(self, image: Image.Image) -> str:
        """
        Extract the text of one image.

        Args:
            image: PIL Image to process.

        Returns:
            Extracted text with line breaks preserved.

        Raises:
            OCRProcessingError: If OCR processing fails.
        """
        start_time = time.time()

        try:
            if image.mode != 'RGB':
                image = image.convert('RGB')

            text = self._pytesseract.image_to_string(
                image,
                lang=self.language,
                config=self._build_config()
            )
        except Exception as e:
            logger.error(f"OCR processing failed: {e}")
            raise OCRProcessingError("image", str(e))

        logger.info(
            f"OCR completed: {len(text.splitlines())} lines "
            f"({time.time() - start_time:.2f}s)"
        )
        return text

    def extract_pages(self, images: List[Image.Image]) -> str:
        """
        Extract the text of several page images.

        Args:
            images: Page images in order.

        Returns:
            Page texts joined by newlines.
        """
        return "\n".join(self.extract_text(image) for image in images)
