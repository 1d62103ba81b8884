"""
Line Item Extractor Module.

Scans a document segment for the goods table and extracts its rows.

The scan is a two-state machine. It starts in SEARCHING_HEADER; the
first line carrying a table-header token moves it to IN_ITEMS and is
itself discarded. Inside the table, short lines are skipped as noise
(the state never reverts) and every other line is matched against a
fixed positional row pattern. Lines that do not match are skipped
silently: precision is preferred over recall on uncontrolled input.

Author: ML Engineering Team
"""

import logging
import re
from enum import Enum
from typing import List, Optional

from config import get_config
from invoice_parser.utils.logger import get_logger
from invoice_parser.postprocessor.normalizers import AmountNormalizer
from .models import DocumentSegment, LineItem
from .patterns import AMOUNT

# Lines shorter than this inside the table are treated as noise
MIN_ITEM_LINE_LENGTH = 10

# Tokens may be glued to neighbouring column names in extracted PDF text
TABLE_HEADER = re.compile(
    r'Sl\.?\s*(?:No|Item)|Item\s*(?:Code|Name)',
    re.IGNORECASE
)

# sl no | item code | item name | HSN | qty | [uom] | rate | total
ITEM_ROW = re.compile(
    r'^(?P<sl_no>\d{1,3})\s*'
    r'(?P<item_code>[A-Z0-9]{5})\s*'
    r'(?P<item_name>.+?)\s*'
    r'(?P<hsn_code>\d{8})\s*'
    r'(?P<qty>\d+)\s*'
    r'(?:[A-Z]{2,4}\.?\s*)?'
    rf'(?P<rate>{AMOUNT})\s*'
    rf'(?P<total>{AMOUNT})$'
)


class ScanState(Enum):
    SEARCHING_HEADER = "searching_header"
    IN_ITEMS = "in_items"


class LineItemExtractor:
    """
    Extracts line items from the goods table of a segment.

    Attributes:
        min_line_length: Minimum length of a candidate row.

    Example:
        >>> extractor = LineItemExtractor()
        >>> items = extractor.extract(segment)
        >>> [(item.item_code, item.qty) for item in items]
        [('A1B2C', 12), ('D3E4F', 6)]
    """

    def __init__(
        self,
        min_line_length: Optional[int] = None,
        logger: Optional[logging.Logger] = None
    ) -> None:
        """
        Initialize the extractor.

        Args:
            min_line_length: Override for the configured noise threshold.
            logger: Logger receiving scan decisions.
        """
        if min_line_length is None:
            min_line_length = get_config(
                "parsing.items.min_line_length",
                MIN_ITEM_LINE_LENGTH
            )

        self.min_line_length = int(min_line_length)
        self.logger = logger or get_logger(__name__)
        self.amount_normalizer = AmountNormalizer(logger=self.logger)

    def extract(self, segment: DocumentSegment) -> List[LineItem]:
        """
        Extract line items in order of appearance.

        Args:
            segment: Document segment to scan.

        Returns:
            List of LineItem; empty if no table header or no row matched.
        """
        state = ScanState.SEARCHING_HEADER
        items = []
        scanned = 0

        for line in segment:
            if state is ScanState.SEARCHING_HEADER:
                if TABLE_HEADER.search(line.content):
                    self.logger.debug(f"Found items header at line {line.index + 1}: {line.content}")
                    state = ScanState.IN_ITEMS
                continue

            scanned += 1
            if len(line.content) < self.min_line_length:
                continue

            item = self.parse_row(line.content)
            if item is not None:
                self.logger.debug(
                    f"Parsed item at line {line.index + 1}: {item.item_code} - "
                    f"{item.item_name} - Qty: {item.qty} - Total: {item.total}"
                )
                items.append(item)

        if state is ScanState.SEARCHING_HEADER:
            self.logger.debug("No items table header found")
        else:
            self.logger.debug(f"Scanned {scanned} table lines, extracted {len(items)} items")

        return items

    def parse_row(self, line: str) -> Optional[LineItem]:
        """
        Parse one table row.

        Args:
            line: Trimmed line content.

        Returns:
            LineItem, or None if the line is not a well-formed row.
        """
        match = ITEM_ROW.match(line)
        if not match:
            return None

        qty = int(match.group('qty'))
        rate = self.amount_normalizer.to_float(match.group('rate'))
        total = self.amount_normalizer.to_float(match.group('total'))
        if qty <= 0 or rate is None or total is None:
            return None

        return LineItem(
            sl_no=int(match.group('sl_no')),
            item_code=match.group('item_code'),
            item_name=match.group('item_name').strip(),
            hsn_code=match.group('hsn_code'),
            qty=qty,
            rate=rate,
            total=total,
        )
