"""
Tests for the parsing pipeline entry points.
"""

import json
import logging

import pytest

from invoice_parser.parsing import HeaderFieldExtractor, InvoiceParser, ParseResult


class TestParseText:

    def test_single_invoice(self, parser, single_invoice_text):
        result = parser.parse_text(single_invoice_text)

        assert result.success
        assert result.total_invoices == 1

        invoice = result.invoices[0]
        assert invoice.invoice_no == "MUM2526/61782"
        assert invoice.invoice_date == "2025-10-11"
        assert invoice.store == "OM SHREE ASHTAVINAYAK ENTERPRISE R3309"
        assert len(invoice.items) == 2
        assert invoice.total_qty == 18
        assert invoice.total_amount == pytest.approx(1953.0)
        assert invoice.page_count == 1
        assert invoice.index == 0
        assert invoice.validation.to_dict() == {
            'isToday': True,
            'isCorrectStore': True,
            'isValid': True,
        }

    def test_multiple_invoices_keep_order(self, parser, multi_invoice_text):
        result = parser.parse_text(multi_invoice_text)

        assert result.total_invoices == 2
        assert [inv.invoice_no for inv in result.invoices] == ["MUM2526/61782", "MUM2526/61790"]
        assert [inv.index for inv in result.invoices] == [0, 1]
        assert [len(inv.items) for inv in result.invoices] == [2, 1]
        assert result.invoices[1].invoice_date == "2025-10-12"
        assert result.invoices[1].validation.is_today is False
        assert result.invoices[1].total_amount == pytest.approx(200.0)

    def test_segments_without_items_are_dropped(self, parser, multi_invoice_text):
        text = "Invoice No: MUM1/1\nSl No Item Code\nnothing to see here\n" + multi_invoice_text
        result = parser.parse_text(text)

        assert [inv.invoice_no for inv in result.invoices] == ["MUM2526/61782", "MUM2526/61790"]
        assert [inv.index for inv in result.invoices] == [0, 1]

    def test_empty_text(self, parser):
        result = parser.parse_text("")

        assert result.to_dict() == {
            'success': True,
            'invoices': [],
            'totalInvoices': 0,
            'debugInfo': {'totalLines': 0, 'firstLines': []},
        }

    def test_non_text_input_is_a_failed_result(self, parser):
        result = parser.parse_text(None)

        assert result.success is False
        assert "normalize" in result.error
        assert result.to_dict() == {'success': False, 'error': result.error}

    def test_debug_info(self, fixed_today, single_invoice_text):
        result = InvoiceParser(today=fixed_today, debug_first_lines=3).parse_text(single_invoice_text)
        debug = result.to_dict()['debugInfo']

        assert debug['totalLines'] == 9
        assert debug['firstLines'] == [
            "OM SHREE ASHTAVINAYAK ENTERPRISE R3309",
            "TAX INVOICE",
            "Invoice No. : MUM2526/61782",
        ]

    def test_same_input_same_output(self, parser, multi_invoice_text):
        assert parser.parse_text(multi_invoice_text).to_json() == parser.parse_text(multi_invoice_text).to_json()

    def test_envelope_keys(self, parser, single_invoice_text):
        data = json.loads(parser.parse_text(single_invoice_text).to_json())
        invoice = data['invoices'][0]

        assert data['totalInvoices'] == 1
        assert set(invoice) == {
            'invoiceNo', 'invoiceDate', 'store', 'items', 'totalQty',
            'totalAmount', 'pageCount', 'validation', 'index',
        }
        assert invoice['items'][0] == {
            'slNo': 1,
            'itemCode': 'A1B2C',
            'itemName': 'Steel Bolt M8',
            'hsnCode': '73181500',
            'qty': 12,
            'rate': 150.0,
            'total': 1800.0,
        }

    def test_failing_segment_does_not_affect_siblings(self, fixed_today, multi_invoice_text, caplog):
        class FirstSegmentFails(HeaderFieldExtractor):
            def extract(self, segment):
                if segment.start == 0:
                    raise RuntimeError("boom")
                return super().extract(segment)

        logger = logging.getLogger("tests.parser")
        caplog.set_level(logging.WARNING, logger="tests.parser")

        parser = InvoiceParser(logger=logger, today=fixed_today, header_extractor=FirstSegmentFails())
        result = parser.parse_text(multi_invoice_text)

        assert result.success
        assert [inv.invoice_no for inv in result.invoices] == ["MUM2526/61790"]
        assert result.invoices[0].index == 0
        assert any("boom" in record.getMessage() for record in caplog.records)


class FakeExtractor:

    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error

    def extract_from_bytes(self, data, filename=None):
        if self.error:
            raise self.error
        return self.text

    def extract_from_file(self, filepath):
        if self.error:
            raise self.error
        return self.text


class TestParseBytesAndFile:

    def test_parse_bytes_uses_extractor(self, fixed_today, single_invoice_text):
        parser = InvoiceParser(today=fixed_today, text_extractor=FakeExtractor(single_invoice_text))
        result = parser.parse_bytes(b"%PDF-1.7 ...", filename="invoice.pdf")

        assert result.total_invoices == 1

    def test_extraction_failure_is_a_failed_result(self, fixed_today):
        parser = InvoiceParser(today=fixed_today, text_extractor=FakeExtractor(error=OSError("disk gone")))

        assert parser.parse_bytes(b"data").to_dict() == {'success': False, 'error': "disk gone"}
        assert parser.parse_file("invoice.pdf").error == "disk gone"

    def test_plain_text_bytes(self, parser, single_invoice_text):
        result = parser.parse_bytes(single_invoice_text.encode("utf-8"))

        assert result.invoices[0].invoice_no == "MUM2526/61782"

    def test_parse_text_file(self, parser, single_invoice_text, tmp_path):
        path = tmp_path / "invoice.txt"
        path.write_text(single_invoice_text, encoding="utf-8")

        result = parser.parse_file(path)

        assert result.total_invoices == 1
        assert result.invoices[0].items[0].total == pytest.approx(1800.0)

    def test_unsupported_file_format(self, parser, tmp_path):
        path = tmp_path / "invoice.doc"
        path.write_text("whatever")

        assert parser.parse_file(path).to_dict() == {
            'success': False,
            'error': "Unsupported file format: .doc",
        }

    def test_missing_file(self, parser, tmp_path):
        result = parser.parse_file(tmp_path / "missing.pdf")

        assert result.success is False
        assert result.error.startswith("File not found")


def test_failure_factory():
    result = ParseResult.failure("broken")

    assert result.total_invoices == 0
    assert result.to_dict() == {'success': False, 'error': "broken"}
