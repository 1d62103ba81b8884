"""
Main Output Handler Module.

This module provides the OutputHandler class, which writes parse
results to disk. The destination suffix picks the format:

    - .json → the result envelope, pretty-printed
    - .xlsx → Invoices and Items sheets via ExcelExporter

Author: ML Engineering Team
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from config import get_config
from invoice_parser.parsing.models import ParseResult
from invoice_parser.utils.logger import get_logger
from invoice_parser.utils.helpers import ensure_directory, get_file_extension
from invoice_parser.utils.exceptions import OutputError, JSONExportError
from .excel_exporter import ExcelExporter

logger = get_logger(__name__)

Results = Union[ParseResult, Dict[str, ParseResult]]


class OutputHandler:
    """
    Writes parse results as JSON or Excel.

    A single ParseResult is written as its own envelope. A batch
    (results keyed by source file) is written as one combined file.

    Example:
        >>> handler = OutputHandler()
        >>> handler.save(result, "outputs/result.json")
        >>> handler.save({"a.pdf": first, "b.txt": second}, "outputs/batch.xlsx")
    """

    SUPPORTED_FORMATS = ('.json', '.xlsx')

    def __init__(self, json_indent: Optional[int] = None) -> None:
        """
        Initialize the output handler.

        Args:
            json_indent: Override for the configured JSON indentation.
        """
        if json_indent is None:
            json_indent = get_config("output.json.indent", 2)
        self.json_indent = json_indent

        self._excel_exporter = None

    @property
    def excel_exporter(self) -> ExcelExporter:
        """Get or create the Excel exporter."""
        if self._excel_exporter is None:
            self._excel_exporter = ExcelExporter()
        return self._excel_exporter

    def save(self, results: Results, output_path: Union[str, Path]) -> str:
        """
        Save results to the given path.

        Args:
            results: A single ParseResult or results keyed by source.
            output_path: Destination file; ``.json`` or ``.xlsx``.

        Returns:
            Path of the written file.

        Raises:
            OutputError: If the format is not supported.
            JSONExportError / ExcelExportError: If writing fails.
        """
        extension = get_file_extension(output_path)

        if extension == '.json':
            return self.to_json(results, output_path)
        if extension == '.xlsx':
            if isinstance(results, ParseResult):
                results = {Path(output_path).stem: results}
            return self.excel_exporter.export(results, output_path)

        raise OutputError(
            f"Unsupported output format: {extension or '(none)'}",
            {"supported_formats": list(self.SUPPORTED_FORMATS)}
        )

    def to_json(self, results: Results, output_path: Union[str, Path]) -> str:
        """Write results as pretty-printed JSON."""
        output_path = Path(output_path)

        try:
            ensure_directory(output_path.parent)
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(self.to_dict(results), f, indent=self.json_indent, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"JSON export failed: {e}")
            raise JSONExportError(str(output_path), str(e))

        logger.info(f"JSON file saved: {output_path}")
        return str(output_path)

    @staticmethod
    def to_dict(results: Results) -> Dict[str, Any]:
        """
        Convert results to a JSON-ready dictionary.

        A batch becomes ``{files: {source: envelope}, totalFiles,
        totalInvoices}``.
        """
        if isinstance(results, ParseResult):
            return results.to_dict()

        return {
            'files': {source: result.to_dict() for source, result in results.items()},
            'totalFiles': len(results),
            'totalInvoices': sum(result.total_invoices for result in results.values()),
        }
