"""Shared data types for bibunify.

Domain-specific types live closer to their consumers:
- Configuration → bibunify.engine.config
- Merge verdicts and results → bibunify.unify.models
"""

from bibunify.models.records import (
    Collection,
    DuplicateIdentifierError,
    Record,
    format_verbatim,
)

__all__ = [
    "Record",
    "Collection",
    "DuplicateIdentifierError",
    "format_verbatim",
]
