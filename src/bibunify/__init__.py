"""Merge BibTeX bibliographies into one deduplicated bibliography.

This package provides:
- Data models (bibunify.models) — records and collections
- Parsing (bibunify.parse) — .bib discovery and parsing
- Scoring (bibunify.scoring) — normalized title similarity
- Unify (bibunify.unify) — duplicate detection, resolution and merge
- Serialize (bibunify.serialize) — BibTeX/BibLaTeX output
- Engine (bibunify.engine) — run configuration
- Audit (bibunify.audit) — structured event logging
- CLI (bibunify.cli) — command-line interface
- Public API (bibunify.api) — high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from bibunify.api import (
    parse_file,
    parse_folder,
    unify,
    write_bibliography,
)
from bibunify.engine import UnifyConfig, UnifyRunResult
from bibunify.models import Collection, Record
from bibunify.parse import NoInputFilesError, ParseError
from bibunify.scoring import Algorithm
from bibunify.serialize import OutputFormat
from bibunify.unify import MergeResult, merge_all

__all__ = [
    "__version__",
    "__license__",
    "Algorithm",
    "Collection",
    "MergeResult",
    "NoInputFilesError",
    "OutputFormat",
    "ParseError",
    "Record",
    "UnifyConfig",
    "UnifyRunResult",
    "merge_all",
    "parse_file",
    "parse_folder",
    "unify",
    "write_bibliography",
]
