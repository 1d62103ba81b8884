"""
Parsing Data Model.

This module defines the data structures produced by the parsing
pipeline, from single normalized lines up to the final result
envelope returned to callers.

Every object here is created and discarded within one parse call;
none of them is shared between calls.

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence
import json

# Sentinel values recorded when a field cannot be located
UNKNOWN_INVOICE_NO = "Unknown"
UNKNOWN_STORE = "Unknown Store"


@dataclass(frozen=True)
class RawLine:
    """
    A single trimmed, non-empty line of the source text.

    Attributes:
        index: Position of the line in the normalized sequence.
        content: Trimmed text of the line.
    """
    index: int
    content: str


@dataclass(frozen=True)
class DocumentSegment:
    """
    A contiguous block of lines believed to belong to one invoice.

    The segment does not copy lines: it keeps a reference to the full
    normalized sequence and owns only its boundary indices.

    Attributes:
        source: The complete normalized line sequence.
        start: Index of the first line (inclusive).
        end: Index after the last line (exclusive).
    """
    source: Sequence[RawLine]
    start: int
    end: int

    def __iter__(self) -> Iterator[RawLine]:
        for position in range(self.start, self.end):
            yield self.source[position]

    def __len__(self) -> int:
        return self.end - self.start

    @property
    def contents(self) -> List[str]:
        """Text of every line in the segment, in order."""
        return [line.content for line in self]

    @property
    def char_count(self) -> int:
        """Total number of characters across all lines."""
        return sum(len(line.content) for line in self)

    def __repr__(self) -> str:
        return f"DocumentSegment(lines {self.start}-{self.end}, count={len(self)})"


@dataclass(frozen=True)
class LineItem:
    """
    One row of a vendor invoice's goods table.

    The line total is read from the text as printed; it is never
    recomputed from quantity and rate, since vendor rounding may differ.

    Attributes:
        sl_no: Sequence number as printed.
        item_code: Vendor item code.
        item_name: Item description.
        hsn_code: Tax classification (HSN) code.
        qty: Quantity (positive).
        rate: Unit rate.
        total: Line total.
    """
    sl_no: int
    item_code: str
    item_name: str
    hsn_code: str
    qty: int
    rate: float
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'slNo': self.sl_no,
            'itemCode': self.item_code,
            'itemName': self.item_name,
            'hsnCode': self.hsn_code,
            'qty': self.qty,
            'rate': self.rate,
            'total': self.total,
        }


@dataclass(frozen=True)
class HeaderFields:
    """
    Header fields located in one document segment.

    Attributes:
        invoice_no: Invoice identifier or the "Unknown" sentinel.
        invoice_date: ISO date string, or None when absent.
        store: Store line or the "Unknown Store" sentinel.
    """
    invoice_no: str = UNKNOWN_INVOICE_NO
    invoice_date: Optional[str] = None
    store: str = UNKNOWN_STORE


@dataclass(frozen=True)
class ValidationFlags:
    """Derived signals used to route an invoice for manual review."""
    is_today: bool
    is_correct_store: bool
    is_valid: bool

    def to_dict(self) -> Dict[str, bool]:
        return {
            'isToday': self.is_today,
            'isCorrectStore': self.is_correct_store,
            'isValid': self.is_valid,
        }


@dataclass
class ParsedInvoice:
    """
    A fully parsed invoice. Only emitted when it has at least one item.

    Attributes:
        invoice_no: Invoice identifier ("Unknown" if not found).
        invoice_date: Invoice date as YYYY-MM-DD (today if not found).
        store: Store identifier ("Unknown Store" if not found).
        items: Line items in order of appearance.
        total_qty: Sum of item quantities.
        total_amount: Sum of item line totals.
        page_count: Estimated number of pages.
        validation: Validation flags.
        index: Zero-based position among invoices of the same input.
        date_found: False when invoice_date is the today fallback. Kept
            out of the envelope; used by result validation.
    """
    invoice_no: str
    invoice_date: str
    store: str
    items: List[LineItem]
    total_qty: int
    total_amount: float
    page_count: int
    validation: ValidationFlags
    index: int = 0
    date_found: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'invoiceNo': self.invoice_no,
            'invoiceDate': self.invoice_date,
            'store': self.store,
            'items': [item.to_dict() for item in self.items],
            'totalQty': self.total_qty,
            'totalAmount': self.total_amount,
            'pageCount': self.page_count,
            'validation': self.validation.to_dict(),
            'index': self.index,
        }

    def __repr__(self) -> str:
        return (
            f"ParsedInvoice("
            f"invoice={self.invoice_no}, "
            f"date={self.invoice_date}, "
            f"items={len(self.items)}, "
            f"total={self.total_amount:.2f})"
        )


@dataclass
class ParseResult:
    """
    Top-level result envelope of a parse call.

    On catastrophic failure ``success`` is False and ``error`` carries
    a human-readable message instead of invoices.

    Example:
        >>> result = parser.parse_text(text)
        >>> if result.success:
        ...     for invoice in result.invoices:
        ...         print(invoice.invoice_no, invoice.total_amount)
    """
    success: bool
    invoices: List[ParsedInvoice] = field(default_factory=list)
    total_lines: int = 0
    first_lines: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def total_invoices(self) -> int:
        return len(self.invoices)

    @classmethod
    def failure(cls, message: str) -> 'ParseResult':
        """Build a failed result carrying an error message."""
        return cls(success=False, error=message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the public dictionary format.

        Returns:
            ``{success, invoices, totalInvoices, debugInfo}`` or, on
            failure, ``{success: False, error}``.
        """
        if not self.success:
            return {'success': False, 'error': self.error}

        return {
            'success': True,
            'invoices': [invoice.to_dict() for invoice in self.invoices],
            'totalInvoices': self.total_invoices,
            'debugInfo': {
                'totalLines': self.total_lines,
                'firstLines': list(self.first_lines),
            },
        }

    def to_json(self, indent: int = 2) -> str:
        """
        Convert to JSON string.

        Args:
            indent: JSON indentation level.

        Returns:
            JSON string representation.
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
