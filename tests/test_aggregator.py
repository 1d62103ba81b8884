"""
Tests for invoice aggregation and validation flags.
"""

from datetime import date

import pytest

from invoice_parser.parsing import (
    DocumentSegment,
    HeaderFields,
    InvoiceAggregator,
    LineItem,
    RawLine,
)

TODAY = date(2025, 10, 11)


def item(qty, total, rate=1.0):
    return LineItem(1, "A1B2C", "Bolt", "73181500", qty, rate, total)


def segment(*contents):
    lines = [RawLine(index, content) for index, content in enumerate(contents)]
    return DocumentSegment(lines, 0, len(lines))


@pytest.fixture
def aggregator():
    return InvoiceAggregator(chars_per_page=3000, expected_store_token="R3309", today=lambda: TODAY)


class TestInvoiceAggregator:

    def test_no_items_produces_no_invoice(self, aggregator):
        assert aggregator.build(segment("header"), HeaderFields(), [], 0) is None

    def test_totals(self, aggregator):
        items = [item(12, 1800.0), item(6, 153.0), item(1, 0.1), item(1, 0.2)]
        invoice = aggregator.build(segment("x"), HeaderFields(), items, 0)

        assert invoice.total_qty == 20
        assert invoice.total_amount == 1953.3

    def test_header_fields_are_carried(self, aggregator):
        fields = HeaderFields("MUM2526/61782", "2025-10-11", "OM SHREE R3309")
        invoice = aggregator.build(segment("x"), fields, [item(1, 1.0)], 3)

        assert invoice.invoice_no == "MUM2526/61782"
        assert invoice.invoice_date == "2025-10-11"
        assert invoice.store == "OM SHREE R3309"
        assert invoice.index == 3
        assert invoice.date_found is True

    def test_validation_flags(self, aggregator):
        fields = HeaderFields("MUM2526/61782", "2025-10-11", "om shree r3309")
        invoice = aggregator.build(segment("x"), fields, [item(1, 1.0)], 0)

        assert invoice.validation.is_today is True
        assert invoice.validation.is_correct_store is True
        assert invoice.validation.is_valid is True

    def test_other_date_and_store(self, aggregator):
        fields = HeaderFields("MUM2526/61782", "2025-10-10", "Unknown Store")
        invoice = aggregator.build(segment("x"), fields, [item(1, 1.0)], 0)

        assert invoice.validation.is_today is False
        assert invoice.validation.is_correct_store is False

    def test_missing_date_falls_back_to_today_but_is_not_today(self, aggregator):
        invoice = aggregator.build(segment("x"), HeaderFields(), [item(1, 1.0)], 0)

        assert invoice.invoice_date == "2025-10-11"
        assert invoice.validation.is_today is False
        assert invoice.date_found is False
        assert "dateFound" not in invoice.to_dict()
        assert "date_found" not in invoice.to_dict()

    @pytest.mark.parametrize("chars, pages", [(1, 1), (3000, 1), (3001, 2), (9000, 3)])
    def test_page_estimate(self, aggregator, chars, pages):
        assert aggregator.estimate_page_count(segment("x" * chars)) == pages

    def test_page_estimate_sums_all_lines(self, aggregator):
        assert aggregator.estimate_page_count(segment("x" * 2000, "y" * 2000)) == 2
