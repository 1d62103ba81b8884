"""
Tests for splitting concatenated invoices.
"""

from invoice_parser.parsing import DocumentSplitter, LineNormalizer


def normalize(text):
    return LineNormalizer().normalize(text)


class TestDocumentSplitter:

    def test_no_marker_keeps_single_segment(self):
        lines = normalize("some header\nSl No Item Code\nrow")
        segments = DocumentSplitter().split(lines)

        assert len(segments) == 1
        assert (segments[0].start, segments[0].end) == (0, 3)

    def test_single_marker_keeps_single_segment(self, single_invoice_text):
        lines = normalize(single_invoice_text)
        segments = DocumentSplitter().split(lines)

        assert len(segments) == 1
        assert len(segments[0]) == len(lines)

    def test_splits_at_every_marker(self):
        lines = normalize(
            "Invoice No: A/1\nrow a\n"
            "Invoice No - B/2\nrow b\nrow b2\n"
            "invoice no. : C/3\nrow c"
        )
        segments = DocumentSplitter().split(lines)

        assert [(s.start, s.end) for s in segments] == [(0, 2), (2, 5), (5, 7)]
        assert segments[1].contents == ["Invoice No - B/2", "row b", "row b2"]

    def test_lines_before_first_marker_are_not_in_any_segment(self):
        lines = normalize("preamble\nInvoice No: A/1\nrow a\nInvoice No: B/2\nrow b")
        segments = DocumentSplitter().split(lines)

        assert segments[0].start == 1
        assert "preamble" not in segments[0].contents

    def test_threshold_can_be_raised(self):
        lines = normalize("Invoice No: A/1\nrow\nInvoice No: B/2\nrow")
        segments = DocumentSplitter(min_markers_to_split=3).split(lines)

        assert len(segments) == 1

    def test_threshold_never_drops_below_two(self):
        lines = normalize("Invoice No: A/1\nrow")
        segments = DocumentSplitter(min_markers_to_split=1).split(lines)

        assert len(segments) == 1
        assert segments[0].start == 0

    def test_repeated_marker_splits_by_default(self):
        lines = normalize("Invoice No: A/1\npage 1\nInvoice No: A/1\npage 2\nInvoice No: B/2\nrow")
        segments = DocumentSplitter().split(lines)

        assert len(segments) == 3

    def test_merge_repeated_markers(self):
        lines = normalize("Invoice No: A/1\npage 1\nInvoice No: a/1\npage 2\nInvoice No: B/2\nrow")
        segments = DocumentSplitter(merge_repeated_markers=True).split(lines)

        assert [(s.start, s.end) for s in segments] == [(0, 4), (4, 6)]

    def test_find_markers_records_invoice_numbers(self, multi_invoice_text):
        markers = DocumentSplitter().find_markers(normalize(multi_invoice_text))

        assert [m.invoice_no for m in markers] == ["MUM2526/61782", "MUM2526/61790"]

    def test_empty_input(self):
        segments = DocumentSplitter().split([])

        assert len(segments) == 1
        assert len(segments[0]) == 0
