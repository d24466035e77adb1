"""Record and collection data models for bibunify.

A record is one bibliographic entry: a citation key, an entry type and an
ordered bag of raw field values as they appeared in the source file. A
collection is an ordered, key-unique set of records.
"""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from typing import Any

__all__ = [
    "Record",
    "Collection",
    "DuplicateIdentifierError",
    "format_verbatim",
]

_WHITESPACE_RE = re.compile(r"\s+")
_ESCAPED_BRACE_RE = re.compile(r"\\([{}])")
_OPEN_PLACEHOLDER = "\x00"
_CLOSE_PLACEHOLDER = "\x01"


def format_verbatim(value: str) -> str:
    """Render a raw BibTeX field value as plain text.

    Grouping braces are dropped, escaped braces are kept as literal
    characters and whitespace runs collapse to a single space.

    Parameters
    ----------
    value : str
        Raw field value (without the outer delimiters).

    Returns
    -------
    str
        Verbatim-formatted text.

    Examples
    --------
        >>> format_verbatim("The {Runabout}  Inference-Ticket")
        'The Runabout Inference-Ticket'
    """
    text = _ESCAPED_BRACE_RE.sub(
        lambda m: _OPEN_PLACEHOLDER if m.group(1) == "{" else _CLOSE_PLACEHOLDER,
        value,
    )
    text = text.replace("{", "").replace("}", "")
    text = text.replace(_OPEN_PLACEHOLDER, "{").replace(_CLOSE_PLACEHOLDER, "}")
    return _WHITESPACE_RE.sub(" ", text).strip()


@dataclass
class Record:
    """One bibliographic entry.

    Two records are equal when identifier, entry type and every field value
    are equal (field order is irrelevant).

    Attributes
    ----------
    identifier : str
        Citation key, unique within a collection.
    entry_type : str
        Lower-cased entry type (e.g., 'article', 'book').
    fields : dict[str, str]
        Lower-cased field name to raw value, in source order.
    """

    identifier: str
    entry_type: str = "misc"
    fields: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Reject records without citation key."""
        if not isinstance(self.identifier, str) or not self.identifier.strip():
            raise ValueError(f"Record identifier must be a non-empty string, got {self.identifier!r}")
        self.entry_type = self.entry_type.lower()
        self.fields = {name.lower(): value for name, value in self.fields.items()}

    @property
    def title(self) -> str | None:
        """Verbatim-formatted title, or None when absent or blank."""
        return self._verbatim("title")

    @property
    def doi(self) -> str | None:
        """Verbatim-formatted DOI, or None when absent or blank."""
        return self._verbatim("doi")

    def _verbatim(self, name: str) -> str | None:
        raw = self.fields.get(name)
        if raw is None:
            return None
        value = format_verbatim(raw)
        return value or None

    def with_identifier(self, identifier: str) -> "Record":
        """Return a copy of this record under another citation key."""
        return replace(self, identifier=identifier, fields=dict(self.fields))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "identifier": self.identifier,
            "entry_type": self.entry_type,
            "fields": dict(self.fields),
        }


class DuplicateIdentifierError(KeyError):
    """Raised when inserting a record whose identifier is already present."""


class Collection:
    """Ordered set of records, unique by identifier.

    Iteration yields records in insertion order.
    """

    def __init__(self, records: Iterable[Record] | None = None) -> None:
        """Initialize collection.

        Parameters
        ----------
        records : Iterable[Record] | None, optional
            Records to insert, in order.

        Raises
        ------
        DuplicateIdentifierError
            If two of the records share an identifier.
        """
        self._records: dict[str, Record] = {}
        for record in records or ():
            self.insert(record)

    def insert(self, record: Record) -> None:
        """Append a record as the new last element.

        Raises
        ------
        DuplicateIdentifierError
            If the record's identifier is already present. Callers allocate
            a free identifier before inserting.
        """
        if record.identifier in self._records:
            raise DuplicateIdentifierError(record.identifier)
        self._records[record.identifier] = record

    def remove(self, identifier: str) -> Record:
        """Remove and return the record stored under ``identifier``.

        Raises
        ------
        KeyError
            If no record has that identifier.
        """
        return self._records.pop(identifier)

    def get(self, identifier: str) -> Record | None:
        """Return the record stored under ``identifier``, if any."""
        return self._records.get(identifier)

    def identifiers(self) -> list[str]:
        """Return identifiers in insertion order."""
        return list(self._records)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._records

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Collection):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"Collection({self.identifiers()!r})"
