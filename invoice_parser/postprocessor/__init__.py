"""
Post-Processing Module for the Invoice Parsing Engine.

This module provides functionality for:
    - Day-first date normalization
    - Amount/currency normalization
    - Review of finished parse results

Author: ML Engineering Team
"""

from .normalizers import DateNormalizer, AmountNormalizer
from .validators import ResultValidator, ValidationReport

__all__ = [
    'DateNormalizer',
    'AmountNormalizer',
    'ResultValidator',
    'ValidationReport',
]
