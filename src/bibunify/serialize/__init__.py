"""Record serialization to BibTeX and BibLaTeX."""

from bibunify.serialize.bibtex_writer import (
    OutputFormat,
    format_collection,
    format_record,
    write_collection,
)

__all__ = [
    "OutputFormat",
    "format_record",
    "format_collection",
    "write_collection",
]
