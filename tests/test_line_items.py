"""
Tests for line item extraction.
"""

import pytest

from invoice_parser.parsing import LineItemExtractor, LineItem


class TestParseRow:

    def setup_method(self):
        self.extractor = LineItemExtractor()

    def test_row_with_unit_and_currency(self):
        item = self.extractor.parse_row("1 A1B2C Steel Bolt M8 73181500 12 NOS ₹150.00 ₹1,800.00")

        assert item == LineItem(
            sl_no=1,
            item_code="A1B2C",
            item_name="Steel Bolt M8",
            hsn_code="73181500",
            qty=12,
            rate=150.0,
            total=1800.0,
        )

    def test_row_without_unit(self):
        item = self.extractor.parse_row("12 Z9Y8X Copper Wire 85444999 3 1,234.50 3,703.50")

        assert item.sl_no == 12
        assert item.qty == 3
        assert item.rate == pytest.approx(1234.5)
        assert item.total == pytest.approx(3703.5)

    def test_rs_prefix(self):
        item = self.extractor.parse_row("4 Q1W2E Tape Roll 39191000 2 Rs.45.00 Rs. 90.00")

        assert item.rate == pytest.approx(45.0)
        assert item.total == pytest.approx(90.0)

    def test_glued_columns(self):
        item = self.extractor.parse_row("3P0O9ISealant Tube3214100010NOS55.00550.00")

        assert item.item_code == "P0O9I"
        assert item.item_name == "Sealant Tube"
        assert item.hsn_code == "32141000"
        assert item.qty == 10
        assert item.total == pytest.approx(550.0)

    def test_total_is_read_not_computed(self):
        item = self.extractor.parse_row("1 A1B2C Steel Bolt 73181500 3 NOS 3.33 10.00")

        assert item.total == pytest.approx(10.0)

    def test_zero_quantity_is_rejected(self):
        assert self.extractor.parse_row("3 K7L8M Spring Clip 73182900 0 NOS 5.00 0.00") is None

    @pytest.mark.parametrize("line", [
        "Total 18 1,953.00",
        "1 A1B2C Steel Bolt 7318150 12 NOS 150.00 1800.00",
        "1 A1B2C Steel Bolt 73181500 12 NOS 150 1800",
        "1 a1b2c Steel Bolt 73181500 12 NOS 150.00 1800.00",
    ])
    def test_malformed_rows(self, line):
        assert self.extractor.parse_row(line) is None


class TestExtract:

    def test_extracts_rows_after_header(self, segment_of, single_invoice_text):
        items = LineItemExtractor().extract(segment_of(single_invoice_text))

        assert [item.item_code for item in items] == ["A1B2C", "D3E4F"]
        assert [item.qty for item in items] == [12, 6]

    def test_rows_before_header_are_ignored(self, segment_of):
        text = (
            "1 A1B2C Steel Bolt M8 73181500 12 NOS 150.00 1,800.00\n"
            "Sl.Item Description\n"
            "2 D3E4F Hex Nut M8 73181600 6 PCS 25.50 153.00\n"
        )
        items = LineItemExtractor().extract(segment_of(text))

        assert [item.sl_no for item in items] == [2]

    def test_no_header_means_no_items(self, segment_of):
        text = "1 A1B2C Steel Bolt M8 73181500 12 NOS 150.00 1,800.00"
        assert LineItemExtractor().extract(segment_of(text)) == []

    def test_short_lines_do_not_end_the_table(self, segment_of):
        text = (
            "Item Name HSN Qty\n"
            "1 A1B2C Steel Bolt M8 73181500 12 NOS 150.00 1,800.00\n"
            "Page 2\n"
            "2 D3E4F Hex Nut M8 73181600 6 PCS 25.50 153.00\n"
        )
        items = LineItemExtractor().extract(segment_of(text))

        assert len(items) == 2

    def test_min_line_length_is_configurable(self, segment_of):
        text = (
            "Item Code\n"
            "1 A1B2C Bolt 73181500 1 1.00 1.00\n"
        )
        assert len(LineItemExtractor().extract(segment_of(text))) == 1
        assert LineItemExtractor(min_line_length=100).extract(segment_of(text)) == []

    def test_header_present_but_no_row_matches(self, segment_of):
        text = "Sl No Item Code\nthis line does not look like an item row\nneither does this one"
        assert LineItemExtractor().extract(segment_of(text)) == []

    def test_header_with_glued_column_names(self, segment_of):
        text = (
            "Sl.ItemCodeDescriptionHSNQtyUOMRateAmount\n"
            "1 A1B2C Steel Bolt M8 73181500 12 NOS 150.00 1,800.00\n"
        )
        items = LineItemExtractor().extract(segment_of(text))

        assert [item.item_code for item in items] == ["A1B2C"]
        assert items[0].total == 1800.0

    def test_header_starting_with_glued_item_code(self, segment_of):
        text = (
            "ItemCodeDescription HSN Qty\n"
            "1 A1B2C Steel Bolt M8 73181500 12 NOS 150.00 1,800.00\n"
        )
        assert len(LineItemExtractor().extract(segment_of(text))) == 1
