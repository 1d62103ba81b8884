"""
Tests for JSON and Excel output.
"""

import json

import pytest
from openpyxl import load_workbook

from invoice_parser.output_handler import OutputHandler
from invoice_parser.parsing import ParseResult
from invoice_parser.utils.exceptions import OutputError


class TestJSONOutput:

    def test_single_result(self, parser, single_invoice_text, tmp_path):
        result = parser.parse_text(single_invoice_text)
        path = OutputHandler().save(result, tmp_path / "out" / "result.json")

        with open(path, encoding="utf-8") as f:
            assert json.load(f) == result.to_dict()

    def test_batch(self, parser, single_invoice_text, multi_invoice_text, tmp_path):
        results = {
            "one.txt": parser.parse_text(single_invoice_text),
            "two.txt": parser.parse_text(multi_invoice_text),
            "bad.pdf": ParseResult.failure("Corrupted or unreadable file: bad.pdf"),
        }
        path = OutputHandler(json_indent=None).save(results, tmp_path / "batch.json")

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        assert data['totalFiles'] == 3
        assert data['totalInvoices'] == 3
        assert data['files']['bad.pdf'] == {'success': False, 'error': "Corrupted or unreadable file: bad.pdf"}
        assert data['files']['two.txt']['invoices'][1]['invoiceNo'] == "MUM2526/61790"

    def test_non_ascii_is_kept(self, parser, tmp_path):
        result = parser.parse_text(
            "Invoice No: A/1\nSl No Item Code\n1 A1B2C Déjà Vu 73181500 1 ₹1.00 ₹1.00"
        )
        path = OutputHandler().save(result, tmp_path / "result.json")

        with open(path, encoding="utf-8") as f:
            assert "Déjà Vu" in f.read()


class TestExcelOutput:

    def test_sheets_and_rows(self, parser, multi_invoice_text, tmp_path):
        results = {
            "two.txt": parser.parse_text(multi_invoice_text),
            "bad.pdf": ParseResult.failure("boom"),
        }
        path = OutputHandler().save(results, tmp_path / "result.xlsx")

        workbook = load_workbook(path)
        assert workbook.sheetnames == ["Invoices", "Items"]

        invoices = list(workbook["Invoices"].iter_rows(values_only=True))
        assert invoices[0][:3] == ("Source File", "Index", "Invoice No")
        assert len(invoices) == 3
        assert invoices[1][:3] == ("two.txt", 0, "MUM2526/61782")
        assert invoices[1][7] == pytest.approx(1953.0)
        assert invoices[2][9:] == (False, True, True)

        items = list(workbook["Items"].iter_rows(values_only=True))
        assert len(items) == 4
        assert items[3][:4] == ("two.txt", "MUM2526/61790", 1, "G5H6J")

    def test_single_result_uses_file_stem_as_source(self, parser, single_invoice_text, tmp_path):
        path = OutputHandler().save(parser.parse_text(single_invoice_text), tmp_path / "october.xlsx")

        rows = list(load_workbook(path)["Invoices"].iter_rows(values_only=True))
        assert rows[1][0] == "october"


def test_unsupported_output_format(parser, tmp_path):
    with pytest.raises(OutputError):
        OutputHandler().save(parser.parse_text(""), tmp_path / "result.csv")
