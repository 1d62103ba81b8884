"""
Excel Exporter Module.

This module writes parse results to an Excel workbook using openpyxl.

Sheets:
    - Invoices: one row per parsed invoice, validation flags included
    - Items: one row per line item, keyed by invoice number

Author: ML Engineering Team
"""

from pathlib import Path
from typing import Dict, List, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from config import get_config
from invoice_parser.parsing.models import ParseResult
from invoice_parser.utils.logger import get_logger
from invoice_parser.utils.helpers import ensure_directory
from invoice_parser.utils.exceptions import ExcelExportError

logger = get_logger(__name__)


class ExcelExporter:
    """
    Exports parse results to Excel format.

    Attributes:
        invoice_sheet_name: Title of the invoice summary sheet.
        item_sheet_name: Title of the line item sheet.

    Example:
        >>> exporter = ExcelExporter()
        >>> exporter.export({"invoices.pdf": result}, "outputs/invoices.xlsx")
    """

    INVOICE_COLUMNS = [
        'Source File', 'Index', 'Invoice No', 'Invoice Date', 'Store',
        'Items', 'Total Qty', 'Total Amount', 'Pages',
        'Is Today', 'Correct Store', 'Valid',
    ]

    ITEM_COLUMNS = [
        'Source File', 'Invoice No', 'Sl No', 'Item Code', 'Item Name',
        'HSN Code', 'Qty', 'Rate', 'Total',
    ]

    HEADER_COLORS = {
        'invoices': "4472C4",
        'items': "548235",
    }

    def __init__(self) -> None:
        """Initialize the Excel exporter with configuration."""
        self.invoice_sheet_name = get_config("output.excel.invoice_sheet_name", "Invoices")
        self.item_sheet_name = get_config("output.excel.item_sheet_name", "Items")

        logger.debug("ExcelExporter initialized")

    def export(self, results: Dict[str, ParseResult], filepath: Union[str, Path]) -> str:
        """
        Export parse results to an Excel file.

        Args:
            results: Parse results keyed by source file name.
            filepath: Destination .xlsx path.

        Returns:
            Path to the created Excel file.

        Raises:
            ExcelExportError: If the workbook cannot be written.
        """
        filepath = Path(filepath)

        try:
            ensure_directory(filepath.parent)

            workbook = Workbook()
            invoice_sheet = workbook.active
            invoice_sheet.title = self.invoice_sheet_name
            item_sheet = workbook.create_sheet(title=self.item_sheet_name)

            invoice_rows, item_rows = self._build_rows(results)
            self._write_sheet(invoice_sheet, self.INVOICE_COLUMNS, invoice_rows, self.HEADER_COLORS['invoices'])
            self._write_sheet(item_sheet, self.ITEM_COLUMNS, item_rows, self.HEADER_COLORS['items'])

            workbook.save(filepath)
        except Exception as e:
            logger.error(f"Excel export failed: {e}")
            raise ExcelExportError(str(filepath), str(e))

        logger.info(
            f"Excel file saved: {filepath} "
            f"({len(invoice_rows)} invoices, {len(item_rows)} items)"
        )
        return str(filepath)

    def _build_rows(self, results: Dict[str, ParseResult]):
        invoice_rows: List[list] = []
        item_rows: List[list] = []

        for source, result in results.items():
            if not result.success:
                logger.warning(f"Skipping failed result for {source}: {result.error}")
                continue

            for invoice in result.invoices:
                invoice_rows.append([
                    source,
                    invoice.index,
                    invoice.invoice_no,
                    invoice.invoice_date,
                    invoice.store,
                    len(invoice.items),
                    invoice.total_qty,
                    invoice.total_amount,
                    invoice.page_count,
                    invoice.validation.is_today,
                    invoice.validation.is_correct_store,
                    invoice.validation.is_valid,
                ])
                for item in invoice.items:
                    item_rows.append([
                        source,
                        invoice.invoice_no,
                        item.sl_no,
                        item.item_code,
                        item.item_name,
                        item.hsn_code,
                        item.qty,
                        item.rate,
                        item.total,
                    ])

        return invoice_rows, item_rows

    @staticmethod
    def _write_sheet(sheet, columns: List[str], rows: List[list], color: str) -> None:
        """Write a header row and data rows with the shared table styling."""
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color=color, end_color=color, fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        for col, header_name in enumerate(columns, 1):
            cell = sheet.cell(row=1, column=col, value=header_name)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment
            cell.border = thin_border

        for row_num, row in enumerate(rows, 2):
            for col, value in enumerate(row, 1):
                cell = sheet.cell(row=row_num, column=col, value=value)
                cell.border = thin_border

        for col, header_name in enumerate(columns, 1):
            max_length = len(header_name)
            for row in rows:
                max_length = max(max_length, len(str(row[col - 1])))
            sheet.column_dimensions[get_column_letter(col)].width = min(max_length + 2, 50)

        sheet.freeze_panes = 'A2'
