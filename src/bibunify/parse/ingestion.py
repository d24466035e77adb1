"""Multi-file ingestion: discovery, decoding and parsing of .bib files."""

from dataclasses import dataclass
from pathlib import Path

from bibunify.models import Record
from bibunify.parse.base import (
    BIB_EXTENSION,
    OUTPUT_PREFIX,
    NoInputFilesError,
    ParseError,
    detect_encoding,
    normalize_line_endings,
)
from bibunify.parse.bibtex import parse_bibtex

__all__ = [
    "FileIngestionResult",
    "discover_bib_files",
    "include_path",
    "ingest_file",
    "ingest_folder",
]


@dataclass(frozen=True)
class FileIngestionResult:
    """Immutable result of ingesting a single file.

    Attributes
    ----------
    filename : str
        Name of the file (basename).
    encoding_used : str
        Encoding used to decode file.
    records_parsed : int
        Number of records successfully parsed.
    warnings : tuple[str, ...]
        Warning messages.
    """

    filename: str
    encoding_used: str
    records_parsed: int
    warnings: tuple[str, ...] = ()


def include_path(path: Path) -> bool:
    """Check whether a file takes part in the unification.

    It must be a ``.bib`` file and must not be the output of a previous
    run (name starting with ``[bibunify]``).
    """
    return path.suffix == BIB_EXTENSION and not path.name.startswith(OUTPUT_PREFIX)


def discover_bib_files(directory: Path) -> list[Path]:
    """List the .bib files of a directory (non-recursive), sorted by name.

    Raises
    ------
    FileNotFoundError
        If the directory does not exist.
    NotADirectoryError
        If the path is not a directory.
    """
    directory = Path(directory)
    if not directory.exists():
        raise FileNotFoundError(f"Folder not found: {directory}")
    if not directory.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {directory}")

    return sorted(
        (p for p in directory.iterdir() if p.is_file() and include_path(p)),
        key=lambda p: p.name,
    )


def ingest_file(file_path: Path) -> tuple[list[Record], FileIngestionResult]:
    """Read, decode and parse one .bib file.

    Parameters
    ----------
    file_path : Path
        Path to file to ingest.

    Returns
    -------
    tuple[list[Record], FileIngestionResult]
        Parsed records in file order and per-file statistics.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ParseError
        If the file contains malformed entries.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    file_bytes = file_path.read_bytes()
    encoding = detect_encoding(file_bytes)
    content = normalize_line_endings(file_bytes.decode(encoding))

    records, warnings, errors = parse_bibtex(file_path, content)

    if errors:
        raise ParseError(
            f"Failed to parse {file_path.name}: {'; '.join(errors)}",
            file=str(file_path),
        )

    result = FileIngestionResult(
        filename=file_path.name,
        encoding_used=encoding,
        records_parsed=len(records),
        warnings=tuple(warnings),
    )
    return records, result


def ingest_folder(
    folder_path: Path,
) -> tuple[list[list[Record]], list[FileIngestionResult]]:
    """Ingest every .bib file of a folder, one record source per file.

    Parameters
    ----------
    folder_path : Path
        Directory containing .bib files.

    Returns
    -------
    tuple[list[list[Record]], list[FileIngestionResult]]
        Sources in discovery order and their per-file results.

    Raises
    ------
    NoInputFilesError
        If the folder contains no eligible .bib file.
    ParseError
        If any file fails to parse.
    """
    files = discover_bib_files(folder_path)
    if not files:
        raise NoInputFilesError(f"No .bib files in the input directory: {folder_path}")

    sources: list[list[Record]] = []
    results: list[FileIngestionResult] = []
    for file_path in files:
        records, result = ingest_file(file_path)
        sources.append(records)
        results.append(result)

    return sources, results
