"""
Output Handler Module for the Invoice Parsing Engine.

This module provides functionality for:
    - JSON output of the result envelope
    - Excel workbook generation (Invoices and Items sheets)

Author: ML Engineering Team
"""

from .handler import OutputHandler
from .excel_exporter import ExcelExporter

__all__ = ['OutputHandler', 'ExcelExporter']
