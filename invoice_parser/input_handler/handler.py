"""
Text Extraction Module.

This module provides the TextExtractor class, the collaborator that
turns an uploaded document into the plain text consumed by the
parsing engine. It detects the document type and delegates:

    - .txt / plain text buffers → decoded as UTF-8
    - .pdf → text layer via PDFProcessor, OCR if the PDF is image-only
    - images → OCR via TesseractBackend

Usage:
    from invoice_parser.input_handler import TextExtractor

    extractor = TextExtractor()
    text = extractor.extract_from_file("invoice.pdf")

Classes:
    TextExtractor: Main class for document text extraction
"""

import io
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image, UnidentifiedImageError

from config import get_config
from invoice_parser.utils.logger import get_logger
from invoice_parser.utils.helpers import get_file_extension
from invoice_parser.utils.exceptions import (
    InputError,
    UnsupportedFileTypeError,
    FileNotFoundError,
    CorruptedFileError
)

from .pdf_processor import PDFProcessor

logger = get_logger(__name__)

PDF_MAGIC = b"%PDF"
IMAGE_MAGIC = (b"\x89PNG", b"\xff\xd8\xff", b"II*\x00", b"MM\x00*", b"BM")


class TextExtractor:
    """
    Extracts plain text from invoice documents.

    Attributes:
        text_extensions: Extensions read as plain text.
        pdf_extensions: Extensions read as PDF.
        image_extensions: Extensions read through OCR.
        ocr_enabled: Whether OCR is attempted for scanned documents.
        pdf_processor: PDFProcessor instance for PDF files.

    Example:
        >>> extractor = TextExtractor()
        >>> text = extractor.extract_from_file("invoice.pdf")
        >>> text = extractor.extract_from_bytes(upload.read(), filename="invoice.pdf")
    """

    TEXT_EXTENSIONS = {'.txt'}
    PDF_EXTENSIONS = {'.pdf'}
    IMAGE_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.tiff', '.bmp'}

    def __init__(self, ocr_enabled: Optional[bool] = None, ocr_backend=None) -> None:
        """
        Initialize the TextExtractor.

        Args:
            ocr_enabled: Override for the configured OCR switch.
            ocr_backend: Object with extract_text(image) and
                extract_pages(images). Defaults to TesseractBackend,
                created on first use.
        """
        self.text_extensions = self._extensions("input.supported_text_formats", self.TEXT_EXTENSIONS)
        self.pdf_extensions = self._extensions("input.supported_pdf_formats", self.PDF_EXTENSIONS)
        self.image_extensions = self._extensions("input.supported_image_formats", self.IMAGE_EXTENSIONS)

        if ocr_enabled is None:
            ocr_enabled = get_config("ocr.enabled", True)
        self.ocr_enabled = bool(ocr_enabled)

        self.pdf_processor = PDFProcessor()
        self._ocr_backend = ocr_backend

        logger.debug(f"TextExtractor initialized (ocr_enabled={self.ocr_enabled})")

    @staticmethod
    def _extensions(key: str, default: set) -> set:
        return {ext.lower() for ext in get_config(key, sorted(default))}

    @property
    def supported_extensions(self) -> set:
        return self.text_extensions | self.pdf_extensions | self.image_extensions

    @property
    def ocr_backend(self):
        """Get or create the OCR backend."""
        if self._ocr_backend is None:
            from invoice_parser.ocr_engine import TesseractBackend
            self._ocr_backend = TesseractBackend()
        return self._ocr_backend

    def detect_file_type(self, filepath: Union[str, Path]) -> str:
        """
        Detect the type of input file from its extension.

        Args:
            filepath: Path to the file to analyze.

        Returns:
            File type string: 'text', 'pdf' or 'image'.

        Raises:
            UnsupportedFileTypeError: If file type is not supported.
        """
        extension = get_file_extension(filepath)

        if extension in self.text_extensions:
            return 'text'
        if extension in self.pdf_extensions:
            return 'pdf'
        if extension in self.image_extensions:
            return 'image'
        raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))

    def sniff_file_type(self, data: bytes) -> str:
        """Detect the type of a buffer from its leading bytes."""
        if data.startswith(PDF_MAGIC):
            return 'pdf'
        if data.startswith(IMAGE_MAGIC):
            return 'image'
        return 'text'

    def validate_file(self, filepath: Union[str, Path]) -> Path:
        """
        Validate that a file exists and is accessible.

        Args:
            filepath: Path to the file to validate.

        Returns:
            Path object pointing to the validated file.

        Raises:
            FileNotFoundError: If file doesn't exist.
            InputError: If the path is not a file.
        """
        path = Path(filepath)

        if not path.exists():
            raise FileNotFoundError(str(filepath))

        if not path.is_file():
            raise InputError(f"Path is not a file: {filepath}")

        return path

    def extract_from_file(self, filepath: Union[str, Path]) -> str:
        """
        Extract the text of a document file.

        Args:
            filepath: Path to the invoice file.

        Returns:
            Extracted text.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            UnsupportedFileTypeError: If the extension is not supported.
            CorruptedFileError: If the document cannot be read.
        """
        path = self.validate_file(filepath)
        file_type = self.detect_file_type(path)
        logger.info(f"Extracting text from {file_type} file: {path.name}")

        if file_type == 'text':
            return path.read_text(encoding='utf-8', errors='replace')

        return self._extract(path.read_bytes(), file_type, path.name)

    def extract_from_bytes(self, data: bytes, filename: Optional[str] = None) -> str:
        """
        Extract the text of a document buffer.

        Args:
            data: Raw document bytes.
            filename: Original filename; its extension picks the type.
                When absent the type is sniffed from the content.

        Returns:
            Extracted text.

        Raises:
            UnsupportedFileTypeError: If the filename extension is not supported.
            CorruptedFileError: If the document cannot be read.
        """
        if not isinstance(data, (bytes, bytearray)):
            raise InputError(f"Expected bytes, got {type(data).__name__}")
        data = bytes(data)

        if filename:
            file_type = self.detect_file_type(filename)
        else:
            file_type = self.sniff_file_type(data)

        source = filename or f"<buffer {len(data)} bytes>"
        logger.info(f"Extracting text from {file_type} buffer: {source}")

        if file_type == 'text':
            return data.decode('utf-8', errors='replace')

        return self._extract(data, file_type, source)

    def _extract(self, data: bytes, file_type: str, source: str) -> str:
        if file_type == 'pdf':
            return self._extract_pdf(data, source)
        return self._extract_image(data, source)

    def _extract_pdf(self, data: bytes, source: str) -> str:
        text, page_count = self.pdf_processor.extract_text(data)
        logger.debug(f"{source}: {page_count} page(s), {len(text)} characters")

        if self.pdf_processor.has_text_layer(text) or not self.ocr_enabled:
            return text

        logger.info(f"{source} has no text layer, running OCR")
        images = self.pdf_processor.render_pages(data)
        return self.ocr_backend.extract_pages(images)

    def _extract_image(self, data: bytes, source: str) -> str:
        if not self.ocr_enabled:
            raise InputError(f"OCR is disabled, cannot read image: {source}")

        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise CorruptedFileError(source, str(e))

        return self.ocr_backend.extract_text(image)

    def collect_files(self, directory: Union[str, Path], recursive: bool = False) -> List[Path]:
        """
        Collect all supported files in a directory.

        Args:
            directory: Directory containing invoice files.
            recursive: Whether to search subdirectories.

        Returns:
            Sorted list of file paths.
        """
        directory = Path(directory)

        if not directory.exists():
            raise FileNotFoundError(str(directory))

        if not directory.is_dir():
            raise InputError(f"Path is not a directory: {directory}")

        pattern = "**/*" if recursive else "*"
        files = {
            path for path in directory.glob(pattern)
            if path.is_file() and path.suffix.lower() in self.supported_extensions
        }

        logger.info(f"Found {len(files)} files to process in {directory}")
        return sorted(files)
