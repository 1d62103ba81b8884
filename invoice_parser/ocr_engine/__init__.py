"""
OCR Engine Module for the Invoice Parsing Engine.

This module provides OCR text extraction for scanned invoices
(image files and PDFs without a text layer) using Tesseract.

Author: ML Engineering Team
"""

from .tesseract_backend import TesseractBackend

__all__ = ['TesseractBackend']
