"""Base types and utilities for bibliography parsing."""

from typing import NamedTuple

from bibunify.models import Record

__all__ = [
    "OUTPUT_PREFIX",
    "BIB_EXTENSION",
    "ParseResult",
    "ParseError",
    "NoInputFilesError",
    "detect_encoding",
    "normalize_line_endings",
]

# Files written by bibunify start with this prefix and are never read back
OUTPUT_PREFIX = "[bibunify]"
BIB_EXTENSION = ".bib"


class ParseResult(NamedTuple):
    """Result of parsing a bibliography file.

    Supports tuple unpacking: ``records, warnings, errors = parse_bibtex(...)``.

    Attributes
    ----------
    records : list[Record]
        Parsed records, in file order.
    warnings : list[str]
        Warning messages.
    errors : list[str]
        Error messages.
    """

    records: list[Record]
    warnings: list[str]
    errors: list[str]


class ParseError(Exception):
    """Raised when a bibliography file cannot be parsed."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
    ) -> None:
        """Initialize parse error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where error occurred.
        """
        super().__init__(message)
        self.file = file


class NoInputFilesError(FileNotFoundError):
    """Raised when an input directory holds no bibliography file to merge."""


def detect_encoding(file_bytes: bytes) -> str:
    """Detect encoding of file bytes using deterministic strategy.

    Parameters
    ----------
    file_bytes : bytes
        Complete file content as bytes.

    Returns
    -------
    str
        Detected encoding (utf-8-sig, utf-8 or latin-1).
    """
    if file_bytes.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"

    try:
        file_bytes.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        pass

    return "latin-1"


def normalize_line_endings(content: str) -> str:
    """Normalize line endings to LF."""
    content = content.replace("\r\n", "\n")
    return content.replace("\r", "\n")
