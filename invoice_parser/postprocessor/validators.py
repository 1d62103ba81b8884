"""
Result Validators Module.

This module reviews a finished ParseResult before it is accepted
automatically. Parsing never fails on a missing field; this is where
such absences are turned into review messages:
    - No invoices found
    - Missing invoice date or number
    - Empty item list
    - Item code, quantity and rate checks

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from typing import List

from invoice_parser.utils.logger import get_logger
from invoice_parser.parsing.models import ParsedInvoice, ParseResult, UNKNOWN_INVOICE_NO

logger = get_logger(__name__)


@dataclass
class ValidationReport:
    """
    Outcome of reviewing a parse result.

    Attributes:
        errors: Human-readable problems, 1-based invoice/item numbering.
    """
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, error: str) -> None:
        """Add an error message."""
        self.errors.append(error)

    def to_dict(self) -> dict:
        return {'isValid': self.is_valid, 'errors': list(self.errors)}


class ResultValidator:
    """
    Validates parsed invoices before they are accepted.

    Example:
        >>> report = ResultValidator().validate(result)
        >>> report.is_valid
        False
        >>> report.errors
        ['Invoice 1, Item 2: Invalid rate']
    """

    def validate(self, result: ParseResult) -> ValidationReport:
        """
        Validate every invoice of a result.

        Args:
            result: ParseResult to review.

        Returns:
            ValidationReport listing every problem found.
        """
        report = ValidationReport()

        if not result.success:
            report.add_error(f"Parsing failed: {result.error}")
            return report

        if not result.invoices:
            report.add_error("No invoices found in document")
            return report

        for number, invoice in enumerate(result.invoices, 1):
            self._validate_invoice(invoice, number, report)

        if report.errors:
            logger.warning(f"Validation found {len(report.errors)} problem(s)")
        return report

    def _validate_invoice(
        self,
        invoice: ParsedInvoice,
        number: int,
        report: ValidationReport
    ) -> None:
        prefix = f"Invoice {number}"

        if not invoice.date_found or not invoice.invoice_date:
            report.add_error(f"{prefix}: Date not found")

        if not invoice.invoice_no or invoice.invoice_no == UNKNOWN_INVOICE_NO:
            report.add_error(f"{prefix}: Invoice number not found")

        if not invoice.items:
            report.add_error(f"{prefix}: No items found")

        for item_number, item in enumerate(invoice.items, 1):
            if not item.item_code:
                report.add_error(f"{prefix}, Item {item_number}: Item code missing")
            if item.qty <= 0:
                report.add_error(f"{prefix}, Item {item_number}: Invalid quantity")
            if item.rate <= 0:
                report.add_error(f"{prefix}, Item {item_number}: Invalid rate")
