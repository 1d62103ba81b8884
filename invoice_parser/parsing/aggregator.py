"""
Aggregator / Validator Module.

Combines the header fields and line items of one segment into a
ParsedInvoice, computing totals, the estimated page count and the
validation flags. A segment without items produces no invoice at all:
this is the single gate between noise and a real invoice.

Author: ML Engineering Team
"""

import math
from datetime import date
from typing import Callable, List, Optional

from config import get_config
from .models import DocumentSegment, HeaderFields, LineItem, ParsedInvoice, ValidationFlags

# Rough number of extracted characters on one printed invoice page
CHARS_PER_PAGE = 3000
DEFAULT_EXPECTED_STORE_TOKEN = "R3309"


class InvoiceAggregator:
    """
    Builds ParsedInvoice objects from extracted segment data.

    Attributes:
        chars_per_page: Characters assumed per printed page.
        expected_store_token: Token the store line must contain for
            the invoice to be addressed to this business.
        today: Callable returning the current date.

    Example:
        >>> aggregator = InvoiceAggregator(today=lambda: date(2025, 10, 11))
        >>> invoice = aggregator.build(segment, fields, items, index=0)
        >>> invoice.validation.is_today
        True
    """

    def __init__(
        self,
        chars_per_page: Optional[int] = None,
        expected_store_token: Optional[str] = None,
        today: Optional[Callable[[], date]] = None
    ) -> None:
        if chars_per_page is None:
            chars_per_page = get_config("parsing.aggregator.chars_per_page", CHARS_PER_PAGE)
        if expected_store_token is None:
            expected_store_token = get_config(
                "parsing.store.expected_token",
                DEFAULT_EXPECTED_STORE_TOKEN
            )

        self.chars_per_page = max(1, int(chars_per_page))
        self.expected_store_token = expected_store_token
        self.today = today or date.today

    def build(
        self,
        segment: DocumentSegment,
        fields: HeaderFields,
        items: List[LineItem],
        index: int
    ) -> Optional[ParsedInvoice]:
        """
        Build the invoice for one segment.

        Args:
            segment: Source segment (used for the page estimate).
            fields: Extracted header fields.
            items: Extracted line items.
            index: Position among sibling invoices of the same input.

        Returns:
            ParsedInvoice, or None when the segment has no items.
        """
        if not items:
            return None

        today = self.today().isoformat()

        return ParsedInvoice(
            invoice_no=fields.invoice_no,
            invoice_date=fields.invoice_date or today,
            store=fields.store,
            items=list(items),
            total_qty=sum(item.qty for item in items),
            total_amount=round(sum(item.total for item in items), 2),
            page_count=self.estimate_page_count(segment),
            validation=ValidationFlags(
                is_today=fields.invoice_date == today,
                is_correct_store=self.is_correct_store(fields.store),
                is_valid=len(items) > 0,
            ),
            index=index,
            date_found=fields.invoice_date is not None,
        )

    def estimate_page_count(self, segment: DocumentSegment) -> int:
        """Ceiling of the segment's character count over characters per page."""
        return math.ceil(segment.char_count / self.chars_per_page)

    def is_correct_store(self, store: str) -> bool:
        """Whether the store line names the expected business."""
        if not self.expected_store_token:
            return False
        return self.expected_store_token.lower() in store.lower()
