"""Bibliography unification core.

Components, leaf-first:
- classifier — Identical / Duplicate / Distinct verdict for a record pair
- resolution — which record of a duplicate pair survives
- allocator — collision-free citation keys
- driver — folds sources into one collection
"""

from bibunify.unify.allocator import allocate_identifier
from bibunify.unify.classifier import classify, classify_with_reason
from bibunify.unify.driver import merge_all, merge_one
from bibunify.unify.models import (
    Classification,
    MatchRule,
    MergeResult,
    PromptChoice,
    Resolution,
    Verdict,
)
from bibunify.unify.resolution import resolve

__all__ = [
    "Classification",
    "MatchRule",
    "MergeResult",
    "PromptChoice",
    "Resolution",
    "Verdict",
    "allocate_identifier",
    "classify",
    "classify_with_reason",
    "merge_all",
    "merge_one",
    "resolve",
]
