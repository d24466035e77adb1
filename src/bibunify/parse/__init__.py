"""Bibliography file discovery and parsing."""

from bibunify.parse.base import (
    OUTPUT_PREFIX,
    NoInputFilesError,
    ParseError,
    ParseResult,
)
from bibunify.parse.bibtex import parse_bibtex
from bibunify.parse.ingestion import (
    FileIngestionResult,
    discover_bib_files,
    include_path,
    ingest_file,
    ingest_folder,
)

__all__ = [
    "OUTPUT_PREFIX",
    "FileIngestionResult",
    "NoInputFilesError",
    "ParseError",
    "ParseResult",
    "discover_bib_files",
    "include_path",
    "ingest_file",
    "ingest_folder",
    "parse_bibtex",
]
