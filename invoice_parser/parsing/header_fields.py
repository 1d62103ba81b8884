"""
Header Field Extractor Module.

Extracts the invoice number, invoice date and store identifier from
one document segment.

Each field is read with an ordered list of strategies. A strategy is a
named matcher taking one line and returning the field value or None.
Strategies are tried in priority order; each one scans every line of
the segment before the next strategy is tried, and the first hit wins.
A field no strategy can find is recorded with a sentinel value, never
raised as an error.

Author: ML Engineering Team
"""

import logging
import re
from typing import Callable, Iterable, List, NamedTuple, Optional, Tuple

from config import get_config
from invoice_parser.utils.logger import get_logger
from invoice_parser.postprocessor.normalizers import DateNormalizer
from .models import DocumentSegment, HeaderFields, UNKNOWN_INVOICE_NO, UNKNOWN_STORE
from .patterns import DATE_TRIPLE, INVOICE_NO_LABEL

DEFAULT_INVOICE_PREFIXES = ["MUM"]
DEFAULT_STORE_TOKENS = ["OM SHREE ASHTAVINAYAK ENTERPRISE"]

STANDALONE_INVOICE_NO = re.compile(r'^([A-Z0-9]+/[A-Z0-9]+)$')
LABELED_DATE = re.compile(r'Invoice\s*Date\s*[:\-]?\s*' + DATE_TRIPLE, re.IGNORECASE)
ANY_DATE = re.compile(r'(?<!\d)' + DATE_TRIPLE + r'(?!\d)')


class Strategy(NamedTuple):
    """A named single-line matcher."""
    name: str
    match: Callable[[str], Optional[str]]


def run_strategies(
    strategies: Iterable[Strategy],
    lines: List[str]
) -> Tuple[Optional[str], Optional[str]]:
    """
    Try strategies in order over all lines.

    Args:
        strategies: Strategies in priority order.
        lines: Line contents to scan.

    Returns:
        Tuple of (value, strategy name), or (None, None) if nothing matched.
    """
    for strategy in strategies:
        for line in lines:
            value = strategy.match(line)
            if value:
                return value, strategy.name
    return None, None


# =============================================================================
# MATCHERS
# =============================================================================

def match_labeled_invoice_no(line: str) -> Optional[str]:
    """'Invoice No. : MUM2526/61782' -> 'MUM2526/61782'."""
    match = INVOICE_NO_LABEL.search(line)
    return match.group(1) if match else None


def match_standalone_invoice_no(line: str) -> Optional[str]:
    """A line holding nothing but 'ABC123/456'."""
    match = STANDALONE_INVOICE_NO.match(line)
    return match.group(1) if match else None


def embedded_invoice_no_matcher(prefixes: List[str]) -> Callable[[str], Optional[str]]:
    """
    Build a matcher for a known prefix + digits + slash + digits
    anywhere in a line, e.g. 'Ref MUM2526/61782 dated'.
    """
    if not prefixes:
        return lambda line: None

    alternatives = '|'.join(re.escape(prefix) for prefix in prefixes)
    pattern = re.compile(rf'\b((?:{alternatives})\d+/\d+)\b')

    def match_embedded_invoice_no(line: str) -> Optional[str]:
        match = pattern.search(line)
        return match.group(1) if match else None

    return match_embedded_invoice_no


def date_matcher(pattern: re.Pattern, normalizer: DateNormalizer) -> Callable[[str], Optional[str]]:
    """Build a matcher returning the ISO form of a day-first triple."""

    def match_date(line: str) -> Optional[str]:
        match = pattern.search(line)
        return normalizer.from_parts(*match.groups()) if match else None

    return match_date


def store_matcher(tokens: List[str]) -> Callable[[str], Optional[str]]:
    """Build a matcher returning any line that mentions a known store token."""
    lowered = [token.lower() for token in tokens if token]

    def match_store(line: str) -> Optional[str]:
        text = line.lower()
        return line.strip() if any(token in text for token in lowered) else None

    return match_store


# =============================================================================
# EXTRACTOR
# =============================================================================

class HeaderFieldExtractor:
    """
    Extracts header fields from a document segment.

    Attributes:
        invoice_no_strategies: Ordered strategies for the invoice number.
        date_strategies: Ordered strategies for the invoice date.
        store_strategies: Ordered strategies for the store identifier.

    Example:
        >>> extractor = HeaderFieldExtractor()
        >>> fields = extractor.extract(segment)
        >>> fields.invoice_no, fields.invoice_date
        ('MUM2526/61782', '2025-10-11')
    """

    def __init__(
        self,
        invoice_prefixes: Optional[List[str]] = None,
        store_tokens: Optional[List[str]] = None,
        logger: Optional[logging.Logger] = None
    ) -> None:
        """
        Initialize the extractor.

        Args:
            invoice_prefixes: Store-code prefixes of embedded invoice numbers.
            store_tokens: Tokens identifying the store line.
            logger: Logger receiving matching decisions.
        """
        if invoice_prefixes is None:
            invoice_prefixes = get_config(
                "parsing.invoice_number.prefixes",
                DEFAULT_INVOICE_PREFIXES
            )
        if store_tokens is None:
            store_tokens = get_config(
                "parsing.store.known_tokens",
                DEFAULT_STORE_TOKENS
            )

        self.logger = logger or get_logger(__name__)
        date_normalizer = DateNormalizer(logger=self.logger)

        self.invoice_no_strategies = [
            Strategy("labeled", match_labeled_invoice_no),
            Strategy("standalone", match_standalone_invoice_no),
            Strategy("embedded", embedded_invoice_no_matcher(list(invoice_prefixes))),
        ]
        self.date_strategies = [
            Strategy("labeled", date_matcher(LABELED_DATE, date_normalizer)),
            Strategy("unlabeled", date_matcher(ANY_DATE, date_normalizer)),
        ]
        self.store_strategies = [
            Strategy("known_token", store_matcher(list(store_tokens))),
        ]

    def extract(self, segment: DocumentSegment) -> HeaderFields:
        """
        Extract all header fields of a segment.

        Args:
            segment: Document segment to scan.

        Returns:
            HeaderFields with sentinels for anything not found.
        """
        lines = segment.contents
        return HeaderFields(
            invoice_no=self.extract_invoice_no(lines) or UNKNOWN_INVOICE_NO,
            invoice_date=self.extract_date(lines),
            store=self.extract_store(lines) or UNKNOWN_STORE,
        )

    def extract_invoice_no(self, lines: List[str]) -> Optional[str]:
        """Invoice number, or None if no strategy matched."""
        return self._run("invoice_no", self.invoice_no_strategies, lines)

    def extract_date(self, lines: List[str]) -> Optional[str]:
        """Invoice date as YYYY-MM-DD, or None if no strategy matched."""
        return self._run("invoice_date", self.date_strategies, lines)

    def extract_store(self, lines: List[str]) -> Optional[str]:
        """Store line, or None if no strategy matched."""
        return self._run("store", self.store_strategies, lines)

    def _run(self, field: str, strategies: List[Strategy], lines: List[str]) -> Optional[str]:
        value, strategy_name = run_strategies(strategies, lines)
        if value is None:
            self.logger.debug(f"{field}: not found in {len(lines)} lines")
        else:
            self.logger.debug(f"{field}: '{value}' (strategy: {strategy_name})")
        return value
