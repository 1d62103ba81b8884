"""
PDF Processor Module.

This module handles PDF text extraction including:
    - Digital PDF text extraction (pdfplumber, PyMuPDF fallback)
    - Page rendering for OCR of image-only PDFs
    - Multi-page handling

Author: ML Engineering Team
"""

import io
from pathlib import Path
from typing import List, Tuple, Union

import fitz  # PyMuPDF
import pdfplumber
from PIL import Image

from config import get_config
from invoice_parser.utils.logger import get_logger
from invoice_parser.utils.exceptions import CorruptedFileError

logger = get_logger(__name__)

PdfSource = Union[str, Path, bytes]


class PDFProcessor:
    """
    Processor for PDF files.

    Extracts the embedded text layer page by page. Image-only (scanned)
    PDFs have no usable text layer; their pages can be rendered to
    images for OCR.

    Attributes:
        backend: Primary text backend ("pdfplumber" or "pymupdf").
        max_pages: Maximum number of pages to process.
        min_text_chars: Below this many characters a PDF is image-only.
        dpi: Resolution for page rendering.

    Example:
        >>> processor = PDFProcessor()
        >>> text, pages = processor.extract_text("invoice.pdf")
        >>> print(f"Extracted {pages} pages")
    """

    def __init__(self) -> None:
        """Initialize the PDF processor with configuration."""
        self.backend = get_config("input.pdf.backend", "pdfplumber")
        self.max_pages = get_config("input.pdf.max_pages", 50)
        self.min_text_chars = get_config("input.pdf.min_text_chars", 20)
        self.dpi = get_config("input.pdf.dpi", 300)

        logger.debug(f"PDFProcessor initialized (backend={self.backend}, max_pages={self.max_pages})")

    def extract_text(self, source: PdfSource) -> Tuple[str, int]:
        """
        Extract the text layer of a PDF.

        Args:
            source: Path to the PDF file or its raw bytes.

        Returns:
            Tuple of (text with one newline between pages, page count).

        Raises:
            CorruptedFileError: If no backend can read the PDF.
        """
        name = self._describe(source)
        logger.info(f"Extracting text from PDF: {name}")

        if self.backend == "pymupdf":
            backends = [self._extract_with_pymupdf, self._extract_with_pdfplumber]
        else:
            backends = [self._extract_with_pdfplumber, self._extract_with_pymupdf]

        errors = []
        for backend in backends:
            try:
                pages = backend(source)
            except Exception as e:
                logger.warning(f"{backend.__name__} failed for {name}: {e}")
                errors.append(str(e))
                continue

            return "\n".join(pages), len(pages)

        raise CorruptedFileError(name, "; ".join(errors))

    def has_text_layer(self, text: str) -> bool:
        """Whether extracted text is substantial enough to skip OCR."""
        return len(text.strip()) >= self.min_text_chars

    def render_pages(self, source: PdfSource) -> List[Image.Image]:
        """
        Render PDF pages to images for OCR.

        Args:
            source: Path to the PDF file or its raw bytes.

        Returns:
            List of RGB PIL Images, one per page.

        Raises:
            CorruptedFileError: If the PDF cannot be rendered.
        """
        images = []
        try:
            with self._open_pymupdf(source) as doc:
                # Default PDF resolution is 72 DPI
                zoom = self.dpi / 72.0
                matrix = fitz.Matrix(zoom, zoom)

                for page_num in range(self._page_limit(len(doc))):
                    pix = doc.load_page(page_num).get_pixmap(matrix=matrix)
                    image = Image.open(io.BytesIO(pix.tobytes("png")))
                    if image.mode != 'RGB':
                        image = image.convert('RGB')
                    images.append(image)
        except Exception as e:
            logger.error(f"PyMuPDF rendering failed: {e}")
            raise CorruptedFileError(self._describe(source), str(e))

        return images

    def _extract_with_pdfplumber(self, source: PdfSource) -> List[str]:
        """Extract page texts using pdfplumber."""
        logger.debug("Using pdfplumber for text extraction")
        if isinstance(source, bytes):
            source = io.BytesIO(source)

        with pdfplumber.open(source) as pdf:
            pages = pdf.pages[:self._page_limit(len(pdf.pages))]
            return [page.extract_text() or "" for page in pages]

    def _extract_with_pymupdf(self, source: PdfSource) -> List[str]:
        """Extract page texts using PyMuPDF."""
        logger.debug("Using PyMuPDF for text extraction")
        with self._open_pymupdf(source) as doc:
            page_count = self._page_limit(len(doc))
            return [doc.load_page(page_num).get_text() for page_num in range(page_count)]

    def _page_limit(self, page_count: int) -> int:
        """Number of pages to read, warning when max_pages cuts the document short."""
        if page_count > self.max_pages:
            logger.warning(f"PDF has {page_count} pages, limiting to {self.max_pages}")
            return self.max_pages
        return page_count

    @staticmethod
    def _open_pymupdf(source: PdfSource):
        if isinstance(source, bytes):
            return fitz.open(stream=source, filetype="pdf")
        return fitz.open(str(source))

    @staticmethod
    def _describe(source: PdfSource) -> str:
        if isinstance(source, bytes):
            return f"<buffer {len(source)} bytes>"
        return Path(source).name
