"""
Document Splitter Module.

Decides whether normalized text holds one invoice or several
concatenated invoices, and partitions the lines accordingly.

Splitting is only triggered by repeated evidence: a wrong split
corrupts two invoices, while a missed split merely yields one
oversized invoice. The heuristic therefore leans towards
under-splitting.

Author: ML Engineering Team
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from config import get_config
from invoice_parser.utils.logger import get_logger
from .models import DocumentSegment, RawLine
from .patterns import INVOICE_NO_LABEL

# Fewer header markers than this keeps the whole text as one segment
MIN_MARKERS_TO_SPLIT = 2


@dataclass(frozen=True)
class HeaderMarker:
    """A line announcing the start of an invoice."""
    line_index: int
    invoice_no: str


class DocumentSplitter:
    """
    Partitions a line sequence into document segments.

    Attributes:
        min_markers_to_split: Markers required before the text is split.
        merge_repeated_markers: When True, a marker repeating the invoice
            number that opened the current segment (a header reprinted on
            each page) does not open a new segment.

    Example:
        >>> splitter = DocumentSplitter()
        >>> segments = splitter.split(lines)
        >>> [len(s) for s in segments]
        [42, 37]
    """

    def __init__(
        self,
        min_markers_to_split: Optional[int] = None,
        merge_repeated_markers: Optional[bool] = None,
        logger: Optional[logging.Logger] = None
    ) -> None:
        """
        Initialize the splitter.

        Args:
            min_markers_to_split: Override for the configured threshold.
            merge_repeated_markers: Override for the configured merge policy.
            logger: Logger receiving splitting decisions.
        """
        if min_markers_to_split is None:
            min_markers_to_split = get_config(
                "parsing.splitter.min_markers_to_split",
                MIN_MARKERS_TO_SPLIT
            )
        if merge_repeated_markers is None:
            merge_repeated_markers = get_config(
                "parsing.splitter.merge_repeated_markers",
                False
            )

        self.min_markers_to_split = max(2, int(min_markers_to_split))
        self.merge_repeated_markers = bool(merge_repeated_markers)
        self.logger = logger or get_logger(__name__)

    def find_markers(self, lines: Sequence[RawLine]) -> List[HeaderMarker]:
        """
        Find every header marker, in order of appearance.

        Args:
            lines: Normalized lines.

        Returns:
            List of HeaderMarker.
        """
        markers = []
        for line in lines:
            match = INVOICE_NO_LABEL.search(line.content)
            if match:
                markers.append(HeaderMarker(line.index, match.group(1)))
                self.logger.debug(
                    f"Found invoice number '{match.group(1)}' at line {line.index + 1}"
                )
        return markers

    def split(self, lines: Sequence[RawLine]) -> List[DocumentSegment]:
        """
        Split lines into document segments.

        Args:
            lines: Normalized lines.

        Returns:
            One segment per header marker when enough markers are found,
            otherwise a single segment covering every line.
        """
        markers = self.find_markers(lines)
        self.logger.debug(f"Found {len(markers)} invoice header marker(s)")

        if self.merge_repeated_markers:
            markers = self._merge_repeated(markers)

        if len(markers) < self.min_markers_to_split:
            self.logger.debug("Treating entire document as one invoice")
            return [DocumentSegment(lines, 0, len(lines))]

        segments = []
        for position, marker in enumerate(markers):
            if position + 1 < len(markers):
                end = markers[position + 1].line_index
            else:
                end = len(lines)
            segment = DocumentSegment(lines, marker.line_index, end)
            self.logger.debug(
                f"Invoice '{marker.invoice_no}': lines {segment.start + 1} to {segment.end} "
                f"({len(segment)} lines)"
            )
            segments.append(segment)

        return segments

    def _merge_repeated(self, markers: List[HeaderMarker]) -> List[HeaderMarker]:
        """Drop markers that repeat the invoice number of the open segment."""
        merged = []
        for marker in markers:
            if merged and merged[-1].invoice_no.upper() == marker.invoice_no.upper():
                self.logger.debug(
                    f"Invoice number '{marker.invoice_no}' repeated at line "
                    f"{marker.line_index + 1}, keeping it in the same invoice"
                )
                continue
            merged.append(marker)
        return merged
