"""
Parsing Module for the Invoice Parsing Engine.

This module turns raw extracted invoice text into structured,
validated invoice records:
    - Line normalization
    - Detection and splitting of concatenated invoices
    - Header field extraction (invoice number, date, store)
    - Line item extraction from the goods table
    - Totals, page estimate and validation flags

Every stage is a deterministic, rule-ordered heuristic; the same
input text always yields the same result.

Author: ML Engineering Team
"""

from .aggregator import InvoiceAggregator
from .header_fields import HeaderFieldExtractor, Strategy
from .line_items import LineItemExtractor
from .lines import LineNormalizer
from .models import (
    DocumentSegment,
    HeaderFields,
    LineItem,
    ParsedInvoice,
    ParseResult,
    RawLine,
    ValidationFlags,
    UNKNOWN_INVOICE_NO,
    UNKNOWN_STORE,
)
from .parser import InvoiceParser
from .splitter import DocumentSplitter

__all__ = [
    'InvoiceParser',
    'LineNormalizer',
    'DocumentSplitter',
    'HeaderFieldExtractor',
    'Strategy',
    'LineItemExtractor',
    'InvoiceAggregator',
    'RawLine',
    'DocumentSegment',
    'HeaderFields',
    'LineItem',
    'ParsedInvoice',
    'ParseResult',
    'ValidationFlags',
    'UNKNOWN_INVOICE_NO',
    'UNKNOWN_STORE',
]
