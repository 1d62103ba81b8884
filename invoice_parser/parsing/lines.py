"""
Line Normalizer Module.

Splits raw extracted text into trimmed, non-empty lines. This is the
first stage of the parsing pipeline; an empty input simply yields an
empty sequence.

Author: ML Engineering Team
"""

from typing import List

from invoice_parser.utils.exceptions import ParsingError
from .models import RawLine


class LineNormalizer:
    """
    Splits a text blob into an ordered sequence of RawLine.

    Blank and whitespace-only lines are removed and every remaining
    line is trimmed. Line indices refer to the normalized sequence.

    Example:
        >>> LineNormalizer().normalize("  Invoice No. : MUM2526/1 \\n\\n Total ")
        [RawLine(index=0, content='Invoice No. : MUM2526/1'), RawLine(index=1, content='Total')]
    """

    def normalize(self, text: str) -> List[RawLine]:
        """
        Normalize a text blob into lines.

        Args:
            text: Raw text from the extraction step.

        Returns:
            List of RawLine in original order.

        Raises:
            ParsingError: If the input is not text.
        """
        if not isinstance(text, str):
            raise ParsingError(
                "normalize",
                f"expected text, got {type(text).__name__}"
            )

        # splitlines() also handles \r\n and form feeds between PDF pages
        contents = (line.strip() for line in text.splitlines())
        return [
            RawLine(index=index, content=content)
            for index, content in enumerate(c for c in contents if c)
        ]
