"""Data models for duplicate classification, resolution and merge results."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from bibunify.models import Collection

__all__ = [
    "Verdict",
    "MatchRule",
    "Classification",
    "Resolution",
    "PromptChoice",
    "MergeResult",
]

# (rendered incumbent, rendered candidate) -> 1, 2 or 3
PromptChoice = Callable[[str, str], int]


class Verdict(str, Enum):
    """Outcome of comparing an incoming record with one already merged."""

    IDENTICAL = "identical"
    DUPLICATE = "duplicate"
    DISTINCT = "distinct"


class MatchRule(str, Enum):
    """Rule that produced a verdict, in evaluation order."""

    IDENTICAL = "identical"
    IDENTIFIER = "identifier"
    DOI = "doi"
    TITLE_EXACT = "title_exact"
    TITLE_SIMILAR = "title_similar"
    NONE = "none"


class Resolution(str, Enum):
    """Which record of a duplicate pair survives."""

    KEEP_INCUMBENT = "keep_incumbent"
    KEEP_CANDIDATE = "keep_candidate"
    KEEP_BOTH = "keep_both"


@dataclass(frozen=True)
class Classification:
    """Verdict with the rule that fired.

    Attributes
    ----------
    verdict : Verdict
        Classification outcome.
    rule : MatchRule
        Rule that produced the verdict.
    similarity : float | None
        Title similarity when the fuzzy rule was evaluated, else None.
    """

    verdict: Verdict
    rule: MatchRule
    similarity: float | None = None


@dataclass
class MergeResult:
    """Accumulated bibliography and duplicate counts.

    Attributes
    ----------
    collection : Collection
        Unified collection, in insertion order.
    duplicates_removed : int
        Duplicates eliminated across all sources.
    per_source : list[int]
        Duplicates eliminated per source, in source order.
    """

    collection: Collection
    duplicates_removed: int = 0
    per_source: list[int] = field(default_factory=list)
