"""
Data Normalizers Module.

This module provides normalization functions for:
    - Day-first numeric dates
    - Currency/amount values

Both normalizers are used by the parsing stages while fields are being
read out of the text, so they never raise on bad input: they return
None and let the caller record the absence.

Author: ML Engineering Team
"""

import logging
import re
from typing import Optional

from config import get_config
from invoice_parser.utils.logger import get_logger

class DateNormalizer:
    """
    Normalizes day/month/year triples to ISO format (YYYY-MM-DD).

    The triple is always read as day first. "03/04/2025" is 3 April,
    never 4 March: the issuing vendor's locale cannot be inferred from
    the text, so no swap is ever attempted.

    Example:
        >>> normalizer = DateNormalizer()
        >>> normalizer.normalize("11/10/2025")
        '2025-10-11'
        >>> normalizer.from_parts("3", "4", "2025")
        '2025-04-03'
    """

    DAY_FIRST_PATTERN = re.compile(r'^\s*(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4})\s*$')

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or get_logger(__name__)

    def normalize(self, date_str: str) -> Optional[str]:
        """
        Normalize a "D/M/YYYY" string.

        Args:
            date_str: Date string with "/", "-" or "." separators.

        Returns:
            ISO date string, or None if the string is not a D/M/Y triple.
        """
        if not date_str:
            return None

        match = self.DAY_FIRST_PATTERN.match(date_str)
        if not match:
            self.logger.debug(f"Could not parse date: {date_str}")
            return None

        return self.from_parts(*match.groups())

    def from_parts(self, day: str, month: str, year: str) -> str:
        """
        Reformat an already matched triple, zero-padding day and month.

        The text is reported as printed; no calendar check is made.

        Args:
            day: Day digits.
            month: Month digits.
            year: Four-digit year.

        Returns:
            ISO date string.
        """
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


class AmountNormalizer:
    """
    Normalizes currency/amount strings to floats.

    Handles currency symbols and codes and thousands separators,
    including Indian digit grouping ("1,23,456.00").

    Example:
        >>> normalizer = AmountNormalizer()
        >>> normalizer.to_float("₹1,234.50")
        1234.5
        >>> normalizer.normalize("Rs. 45.00")
        '45.00'
    """

    CURRENCY_SYMBOLS = ['₹', '$', '€', '£']
    CURRENCY_CODES = ['Rs.', 'Rs', 'INR', 'USD']

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        """
        Initialize the amount normalizer with configuration.

        Args:
            logger: Logger for unparseable amounts. Defaults to the module logger.
        """
        self.logger = logger or get_logger(__name__)
        self.thousands_separator = get_config(
            "postprocessing.amount.thousands_separator",
            ","
        )

    def normalize(self, amount_str: str) -> Optional[str]:
        """
        Normalize an amount string to a plain two-decimal string.

        Args:
            amount_str: Input amount string (e.g., "₹1,234.50").

        Returns:
            Normalized amount string (e.g., "1234.50") or None.
        """
        value = self.to_float(amount_str)
        if value is None:
            return None
        return f"{value:.2f}"

    def to_float(self, amount_str: str) -> Optional[float]:
        """
        Convert an amount string to float.

        Args:
            amount_str: Amount string to convert.

        Returns:
            Float value or None.
        """
        if not amount_str:
            return None

        cleaned = self._clean_amount_string(amount_str)
        if not cleaned:
            return None

        try:
            return float(cleaned)
        except ValueError:
            self.logger.debug(f"Could not parse amount: {amount_str}")
            return None

    def _clean_amount_string(self, amount_str: str) -> str:
        """
        Strip currency markers, whitespace and thousands separators.

        Args:
            amount_str: Raw amount string.

        Returns:
            Cleaned amount string.
        """
        amount_str = amount_str.strip()

        for symbol in self.CURRENCY_SYMBOLS:
            amount_str = amount_str.replace(symbol, '')

        # Codes only as a prefix, "Rs." before "Rs"
        for code in self.CURRENCY_CODES:
            if amount_str[:len(code)].lower() == code.lower():
                amount_str = amount_str[len(code):]
                break

        amount_str = amount_str.replace(self.thousands_separator, '')
        return ''.join(amount_str.split())
