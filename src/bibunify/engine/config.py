"""Run configuration and result dataclasses."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from bibunify.scoring import Algorithm
from bibunify.serialize import OutputFormat

__all__ = ["UnifyConfig", "UnifyRunResult"]


@dataclass(frozen=True)
class UnifyConfig:
    """Configuration for one unification run.

    Immutable for the duration of a run and passed explicitly to every
    component that needs it.

    Attributes
    ----------
    similarity_threshold : float
        Minimum title similarity (0.0-1.0) for a fuzzy duplicate. 1.0
        disables fuzzy matching (default: 1.0).
    algorithm : Algorithm
        String similarity algorithm (default: Levenshtein).
    silent : bool
        If True, never ask which duplicate to keep; the record already in
        the bibliography wins (default: False).
    output_format : OutputFormat
        Dialect used to render records (default: BibTeX).
    """

    similarity_threshold: float = 1.0
    algorithm: Algorithm = Algorithm.LEVENSHTEIN
    silent: bool = False
    output_format: OutputFormat = OutputFormat.BIBTEX

    def __post_init__(self) -> None:
        """Coerce enum names and validate."""
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ValueError(
                f"similarity_threshold must be in [0, 1], got {self.similarity_threshold}"
            )

        # frozen: assign through object.__setattr__
        object.__setattr__(self, "similarity_threshold", float(self.similarity_threshold))
        object.__setattr__(self, "algorithm", Algorithm.from_name(self.algorithm))
        object.__setattr__(self, "output_format", OutputFormat(self.output_format))

    @property
    def fuzzy_enabled(self) -> bool:
        """Whether fuzzy title comparison is active."""
        return self.similarity_threshold < 1.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "similarity_threshold": self.similarity_threshold,
            "algorithm": self.algorithm.value,
            "silent": self.silent,
            "output_format": self.output_format.value,
        }


@dataclass
class UnifyRunResult:
    """Results from a file-to-file unification run.

    Attributes
    ----------
    output_path : Path
        Path of the written bibliography.
    total_records : int
        Records parsed across all input files.
    unique_records : int
        Records in the unified bibliography.
    duplicates_removed : int
        Duplicates eliminated during the merge.
    files : list[str]
        Input file names, in merge order.
    """

    output_path: Path
    total_records: int
    unique_records: int
    duplicates_removed: int
    files: list[str]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "output_path": str(self.output_path),
            "total_records": self.total_records,
            "unique_records": self.unique_records,
            "duplicates_removed": self.duplicates_removed,
            "files": list(self.files),
        }
