"""
Shared fixtures for the invoice parsing test suite.
"""

import logging
from datetime import date

import pytest

from config import ConfigurationManager
from invoice_parser.parsing import InvoiceParser, LineNormalizer, DocumentSegment
from invoice_parser.utils.logger import ROOT_LOGGER_NAME

TODAY = date(2025, 10, 11)

SINGLE_INVOICE_TEXT = """
OM SHREE ASHTAVINAYAK ENTERPRISE R3309
TAX INVOICE
Invoice No. : MUM2526/61782
Invoice Date : 11/10/2025

Sl No Item Code Item Name HSN Qty Rate Amount
1 A1B2C Steel Bolt M8 73181500 12 NOS ₹150.00 ₹1,800.00
2 D3E4F Hex Nut M8 73181600 6 PCS 25.50 153.00
E&OE
Total 18 1,953.00
"""

MULTI_INVOICE_TEXT = """
Invoice No. : MUM2526/61782
OM SHREE ASHTAVINAYAK ENTERPRISE R3309
Invoice Date : 11/10/2025
Sl No Item Code Item Name HSN Qty Rate Amount
1 A1B2C Steel Bolt M8 73181500 12 NOS ₹150.00 ₹1,800.00
2 D3E4F Hex Nut M8 73181600 6 PCS 25.50 153.00
Invoice No. : MUM2526/61790
OM SHREE ASHTAVINAYAK ENTERPRISE R3309
Invoice Date : 12/10/2025
Sl No Item Code Item Name HSN Qty Rate Amount
1 G5H6J Washer 8mm 73182200 100 NOS 2.00 200.00
"""


@pytest.fixture(autouse=True)
def reset_state():
    """Drop the configuration singleton and CLI logging setup after each test."""
    yield
    ConfigurationManager.reset()
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers.clear()
    root.propagate = True
    root.setLevel(logging.NOTSET)


@pytest.fixture
def fixed_today():
    return lambda: TODAY


@pytest.fixture
def single_invoice_text():
    return SINGLE_INVOICE_TEXT


@pytest.fixture
def multi_invoice_text():
    return MULTI_INVOICE_TEXT


@pytest.fixture
def parser(fixed_today):
    return InvoiceParser(today=fixed_today)


@pytest.fixture
def segment_of():
    """Build a segment covering every line of a text."""

    def build(text: str) -> DocumentSegment:
        lines = LineNormalizer().normalize(text)
        return DocumentSegment(lines, 0, len(lines))

    return build
