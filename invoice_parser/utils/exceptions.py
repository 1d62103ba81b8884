"""
Custom Exceptions Module.

This module defines all custom exceptions used throughout the invoice
parsing engine. A field that cannot be located in the text is never an
exception: it is recorded with a sentinel value. Exceptions are reserved
for genuine failures (unreadable input, broken backends, export errors).

Exception Hierarchy:
    InvoiceParsingError (base)
    ├── InputError
    │   ├── UnsupportedFileTypeError
    │   ├── FileNotFoundError
    │   └── CorruptedFileError
    ├── OCRError
    │   ├── OCREngineNotAvailableError
    │   └── OCRProcessingError
    ├── ParsingError
    └── OutputError
        ├── JSONExportError
        └── ExcelExportError
"""


class InvoiceParsingError(Exception):
    """
    Base exception for all invoice parsing errors.

    All custom exceptions in this package inherit from this class,
    allowing for easy catching of all package-specific errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(InvoiceParsingError):
    """Base exception for input handling errors."""
    pass


class UnsupportedFileTypeError(InputError):
    """
    Raised when an unsupported file type is provided.

    Example:
        >>> raise UnsupportedFileTypeError(".doc", [".pdf", ".txt"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file format: {file_type}"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)


class FileNotFoundError(InputError):
    """Raised when input file cannot be found."""

    def __init__(self, filepath: str):
        message = f"File not found: {filepath}"
        details = {"filepath": filepath}
        super().__init__(message, details)


class CorruptedFileError(InputError):
    """Raised when a document appears to be corrupted or unreadable."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Corrupted or unreadable file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# OCR ERRORS
# =============================================================================

class OCRError(InvoiceParsingError):
    """Base exception for OCR-related errors."""
    pass


class OCREngineNotAvailableError(OCRError):
    """Raised when the OCR engine is not available."""

    def __init__(self, engine_name: str):
        message = f"OCR engine not available: {engine_name}"
        details = {"engine": engine_name}
        super().__init__(message, details)


class OCRProcessingError(OCRError):
    """Raised when OCR processing fails."""

    def __init__(self, source: str, reason: str = None):
        message = f"OCR processing failed for: {source}"
        details = {"source": source, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# PARSING ERRORS
# =============================================================================

class ParsingError(InvoiceParsingError):
    """
    Raised when a parsing stage fails unexpectedly.

    Absent fields never raise this; it wraps genuine defects so the
    orchestrator can report them as a failed result.
    """

    def __init__(self, stage: str, reason: str = None):
        message = f"Parsing failed at stage: {stage}"
        details = {"stage": stage, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputError(InvoiceParsingError):
    """Base exception for output handling errors."""
    pass


class JSONExportError(OutputError):
    """Raised when JSON export fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export JSON file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


class ExcelExportError(OutputError):
    """Raised when Excel export fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export Excel file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'InvoiceParsingError',
    'InputError',
    'UnsupportedFileTypeError',
    'FileNotFoundError',
    'CorruptedFileError',
    'OCRError',
    'OCREngineNotAvailableError',
    'OCRProcessingError',
    'ParsingError',
    'OutputError',
    'JSONExportError',
    'ExcelExportError',
]
