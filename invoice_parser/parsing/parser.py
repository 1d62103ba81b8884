"""
Invoice Parser Module.

This module provides the InvoiceParser class, the public entry point
of the parsing engine. It composes the pipeline stages:

    raw text → LineNormalizer → DocumentSplitter → per segment:
    HeaderFieldExtractor + LineItemExtractor → InvoiceAggregator
    → ParseResult

Segments without items are dropped. A segment whose parsing fails
unexpectedly is logged and dropped without affecting its siblings;
any other failure becomes a ``success=False`` result. Nothing is
retried: the pipeline is deterministic.

Author: ML Engineering Team
"""

import logging
from datetime import date
from pathlib import Path
from typing import Callable, Optional, Union

from config import get_config
from invoice_parser.utils.logger import get_logger
from invoice_parser.utils.exceptions import InvoiceParsingError
from .aggregator import InvoiceAggregator
from .header_fields import HeaderFieldExtractor
from .line_items import LineItemExtractor
from .lines import LineNormalizer
from .models import DocumentSegment, ParsedInvoice, ParseResult
from .splitter import DocumentSplitter

# Number of leading lines echoed in the debug block of a result
DEBUG_FIRST_LINES = 10


class InvoiceParser:
    """
    Parses vendor invoice text into structured, validated invoices.

    The parser holds no state between calls, so one instance can serve
    concurrent parse calls.

    Attributes:
        normalizer: LineNormalizer stage.
        splitter: DocumentSplitter stage.
        header_extractor: HeaderFieldExtractor stage.
        item_extractor: LineItemExtractor stage.
        aggregator: InvoiceAggregator stage.
        logger: Logger receiving pipeline decisions.

    Example:
        >>> parser = InvoiceParser()
        >>> result = parser.parse_text(text)
        >>> result.total_invoices
        2
        >>> result.to_dict()["invoices"][0]["invoiceNo"]
        'MUM2526/61782'
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        today: Optional[Callable[[], date]] = None,
        text_extractor=None,
        splitter: Optional[DocumentSplitter] = None,
        header_extractor: Optional[HeaderFieldExtractor] = None,
        item_extractor: Optional[LineItemExtractor] = None,
        aggregator: Optional[InvoiceAggregator] = None,
        debug_first_lines: Optional[int] = None
    ) -> None:
        """
        Initialize the parser.

        Args:
            logger: Logger receiving pipeline decisions. Defaults to the
                module logger; pass any logging.Logger to observe them.
            today: Callable returning the current date (for the date
                fallback and the isToday flag).
            text_extractor: Object with extract_from_bytes() and
                extract_from_file(). Defaults to TextExtractor, created
                on first use.
            splitter: Custom splitter stage.
            header_extractor: Custom header field stage.
            item_extractor: Custom line item stage.
            aggregator: Custom aggregation stage.
            debug_first_lines: Number of lines echoed in debug info.
        """
        self.logger = logger or get_logger(__name__)

        if debug_first_lines is None:
            debug_first_lines = get_config("parsing.debug.first_lines", DEBUG_FIRST_LINES)
        self.debug_first_lines = int(debug_first_lines)

        self.normalizer = LineNormalizer()
        self.splitter = splitter or DocumentSplitter(logger=self.logger)
        self.header_extractor = header_extractor or HeaderFieldExtractor(logger=self.logger)
        self.item_extractor = item_extractor or LineItemExtractor(logger=self.logger)
        self.aggregator = aggregator or InvoiceAggregator(today=today)
        self._text_extractor = text_extractor

    @property
    def text_extractor(self):
        """Get or create the text extraction collaborator."""
        if self._text_extractor is None:
            from invoice_parser.input_handler import TextExtractor
            self._text_extractor = TextExtractor()
        return self._text_extractor

    def parse_text(self, text: str) -> ParseResult:
        """
        Run the full pipeline on extracted text.

        Args:
            text: Raw text of one or more concatenated invoices.

        Returns:
            ParseResult; ``success=False`` with an error message if a
            stage fails unexpectedly.
        """
        try:
            lines = self.normalizer.normalize(text)

            self.logger.debug(f"Total lines: {len(lines)}")
            for line in lines[:self.debug_first_lines]:
                self.logger.debug(f"{line.index + 1}: {line.content}")

            segments = self.splitter.split(lines)
            self.logger.debug(f"Processing {len(segments)} candidate invoice(s)")

            invoices = []
            for position, segment in enumerate(segments):
                invoice = self._parse_segment(segment, position, len(invoices))
                if invoice is not None:
                    invoices.append(invoice)

            self.logger.info(f"Parsed {len(invoices)} invoice(s) from {len(lines)} lines")

            return ParseResult(
                success=True,
                invoices=invoices,
                total_lines=len(lines),
                first_lines=[line.content for line in lines[:self.debug_first_lines]],
            )

        except Exception as e:
            self.logger.error(f"Error parsing invoice text: {e}")
            return ParseResult.failure(str(e))

    def parse_bytes(self, data: bytes, filename: Optional[str] = None) -> ParseResult:
        """
        Extract text from a document buffer, then parse it.

        Args:
            data: Raw document bytes (PDF, image or plain text).
            filename: Optional original filename, used to pick a backend.

        Returns:
            ParseResult; extraction failures give ``success=False``.
        """
        try:
            text = self.text_extractor.extract_from_bytes(data, filename=filename)
        except InvoiceParsingError as e:
            self.logger.error(f"Error extracting text from buffer: {e}")
            return ParseResult.failure(e.message)
        except Exception as e:
            self.logger.error(f"Error extracting text from buffer: {e}")
            return ParseResult.failure(str(e))

        return self.parse_text(text)

    def parse_file(self, filepath: Union[str, Path]) -> ParseResult:
        """
        Extract text from a document file, then parse it.

        Args:
            filepath: Path to a .pdf, .txt or image file.

        Returns:
            ParseResult; extraction failures give ``success=False``.
        """
        try:
            text = self.text_extractor.extract_from_file(filepath)
        except InvoiceParsingError as e:
            self.logger.error(f"Error parsing invoice file {filepath}: {e}")
            return ParseResult.failure(e.message)
        except Exception as e:
            self.logger.error(f"Error parsing invoice file {filepath}: {e}")
            return ParseResult.failure(str(e))

        return self.parse_text(text)

    def _parse_segment(
        self,
        segment: DocumentSegment,
        position: int,
        index: int
    ) -> Optional[ParsedInvoice]:
        """
        Parse one segment, dropping it on unexpected failure.

        Args:
            segment: Segment to parse.
            position: Position of the segment among all segments.
            index: Index the invoice receives if it is kept.

        Returns:
            ParsedInvoice, or None if the segment has no items or failed.
        """
        try:
            fields = self.header_extractor.extract(segment)
            items = self.item_extractor.extract(segment)
            invoice = self.aggregator.build(segment, fields, items, index)
        except Exception as e:
            self.logger.warning(f"Invoice segment {position + 1} failed, skipping: {e}")
            return None

        if invoice is None:
            self.logger.debug(f"Invoice segment {position + 1} has no items, skipping")
        else:
            self.logger.debug(
                f"Invoice segment {position + 1} created with {len(invoice.items)} items"
            )
        return invoice
