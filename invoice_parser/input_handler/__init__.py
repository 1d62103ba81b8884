"""
Input Handler Module for the Invoice Parsing Engine.

This module turns uploaded documents into plain text:
    - Detecting file types (text, PDF, image)
    - Reading the text layer of digital PDFs
    - OCR of scanned PDFs and images

Supported formats:
    - Plain text: TXT
    - PDF (digital and scanned)
    - Images: JPG, JPEG, PNG, TIFF, BMP

Author: ML Engineering Team
"""

from .handler import TextExtractor
from .pdf_processor import PDFProcessor

__all__ = ['TextExtractor', 'PDFProcessor']
