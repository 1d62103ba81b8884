"""
Invoice Parsing Engine - Source Package.

This package turns the raw text of vendor invoice documents into
structured invoices: header fields, line items, totals and review
flags. A single document may hold several invoices.

Modules:
    - parsing: Line normalization, splitting, field and item extraction
    - input_handler: Text extraction from text, PDF and image files
    - ocr_engine: Tesseract OCR for scanned documents
    - postprocessor: Date/amount normalization and result validation
    - output_handler: JSON and Excel output
    - utils: Logging, exceptions and helpers

Architecture:
    Input → Text → Lines → Segments → Header fields + Line items → Invoices
                                                                    ↓
                                                        Validation / Output
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

from .parsing import InvoiceParser, ParseResult, ParsedInvoice, LineItem

__all__ = [
    'InvoiceParser',
    'ParseResult',
    'ParsedInvoice',
    'LineItem',
    'input_handler',
    'ocr_engine',
    'postprocessor',
    'output_handler',
    'utils'
]
