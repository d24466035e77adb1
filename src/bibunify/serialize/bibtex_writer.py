"""BibTeX and BibLaTeX writer for records and collections."""

from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from bibunify.models import Record

__all__ = [
    "OutputFormat",
    "format_record",
    "format_collection",
    "write_collection",
]


class OutputFormat(str, Enum):
    """Dialect used when rendering records."""

    BIBTEX = "bibtex"
    BIBLATEX = "biblatex"


# BibTeX name -> BibLaTeX name
_BIBLATEX_FIELD_NAMES: dict[str, str] = {
    "journal": "journaltitle",
    "address": "location",
    "school": "institution",
    "annote": "annotation",
    "archiveprefix": "eprinttype",
    "primaryclass": "eprintclass",
}
_BIBTEX_FIELD_NAMES: dict[str, str] = {v: k for k, v in _BIBLATEX_FIELD_NAMES.items()}

_INDENT = "  "


def _dialect_fields(record: Record, output_format: OutputFormat) -> list[tuple[str, str]]:
    """Return (name, value) pairs renamed for the target dialect."""
    if output_format is OutputFormat.BIBLATEX:
        mapping = _BIBLATEX_FIELD_NAMES
        has_date = "date" in record.fields
        pairs = []
        for name, value in record.fields.items():
            if name == "year" and not has_date:
                pairs.append(("date", value))
            else:
                pairs.append((mapping.get(name, name), value))
        return pairs

    mapping = _BIBTEX_FIELD_NAMES
    has_year = "year" in record.fields
    pairs = []
    for name, value in record.fields.items():
        if name == "date" and not has_year and value[:4].isdigit():
            pairs.append(("year", value[:4]))
        else:
            pairs.append((mapping.get(name, name), value))
    return pairs


def format_record(record: Record, output_format: OutputFormat | str = OutputFormat.BIBTEX) -> str:
    """Format a record as a single BibTeX/BibLaTeX entry.

    Parameters
    ----------
    record : Record
        Record to format.
    output_format : OutputFormat | str, optional
        Target dialect, by default BibTeX.

    Returns
    -------
    str
        Entry string without trailing newline.
    """
    output_format = OutputFormat(output_format)
    lines = [f"@{record.entry_type}{{{record.identifier},"]

    for name, value in _dialect_fields(record, output_format):
        lines.append(f"{_INDENT}{name} = {{{value}}},")

    lines.append("}")
    return "\n".join(lines)


def format_collection(
    records: Iterable[Record],
    output_format: OutputFormat | str = OutputFormat.BIBTEX,
) -> str:
    """Format records as a bibliography string.

    Entries are separated by a blank line; the result ends with a newline
    unless there are no records.
    """
    entries = [format_record(record, output_format) for record in records]
    if not entries:
        return ""
    return "\n\n".join(entries) + "\n"


def write_collection(
    records: Iterable[Record],
    output_path: Path,
    output_format: OutputFormat | str = OutputFormat.BIBTEX,
) -> None:
    """Write records to a .bib file.

    Parameters
    ----------
    records : Iterable[Record]
        Records to write, in order.
    output_path : Path
        Output file path. Parent directories are created.
    output_format : OutputFormat | str, optional
        Target dialect, by default BibTeX.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(format_collection(records, output_format))
