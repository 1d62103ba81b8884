"""
Helper Utilities Module.

Small filesystem helpers shared by the input and output handlers.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - get_file_extension: Extract file extension safely
    - generate_timestamp: Generate formatted timestamps
"""

from datetime import datetime
from pathlib import Path
from typing import Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it and its parents if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Example:
        >>> ensure_directory("outputs/reports")
        PosixPath('outputs/reports')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Return the lowercase extension of a filepath, including the dot.

    Example:
        >>> get_file_extension("invoice.PDF")
        '.pdf'
        >>> get_file_extension("noextension")
        ''
    """
    return Path(filepath).suffix.lower()


def generate_timestamp(format_str: str = "%Y%m%d_%H%M%S") -> str:
    """
    Generate a formatted timestamp string.

    Example:
        >>> generate_timestamp("%Y-%m-%d")
        '2026-01-21'
    """
    return datetime.now().strftime(format_str)
