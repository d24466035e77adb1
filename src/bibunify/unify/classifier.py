"""Duplicate classification for a pair of records.

Rules are evaluated in a fixed order and the first one that fires decides
the verdict:

1. field-set equality          -> IDENTICAL
2. same citation key           -> DUPLICATE
3. same non-empty DOI          -> DUPLICATE
4. same non-empty title        -> DUPLICATE
5. title similarity >= threshold (only when threshold < 1.0) -> DUPLICATE
6. otherwise                   -> DISTINCT

Identifier and DOI equality short-circuit before any title work; exact
title equality short-circuits before the string similarity algorithms.
"""

from bibunify.engine.config import UnifyConfig
from bibunify.models import Record
from bibunify.scoring import score
from bibunify.unify.models import Classification, MatchRule, Verdict

__all__ = ["classify", "classify_with_reason"]

_DISTINCT = Classification(Verdict.DISTINCT, MatchRule.NONE)


def classify_with_reason(
    candidate: Record,
    incumbent: Record,
    config: UnifyConfig,
) -> Classification:
    """Classify a candidate against an incumbent and report the rule used.

    Parameters
    ----------
    candidate : Record
        Incoming record.
    incumbent : Record
        Record already in the unified collection.
    config : UnifyConfig
        Threshold and algorithm for fuzzy title matching.

    Returns
    -------
    Classification
        Verdict, rule and (for rule 5) the similarity score.
    """
    if candidate == incumbent:
        return Classification(Verdict.IDENTICAL, MatchRule.IDENTICAL)

    if candidate.identifier == incumbent.identifier:
        return Classification(Verdict.DUPLICATE, MatchRule.IDENTIFIER)

    doi_a, doi_b = candidate.doi, incumbent.doi
    if doi_a and doi_b and doi_a == doi_b:
        return Classification(Verdict.DUPLICATE, MatchRule.DOI)

    title_a, title_b = candidate.title, incumbent.title
    if not title_a or not title_b:
        return _DISTINCT

    if title_a == title_b:
        return Classification(Verdict.DUPLICATE, MatchRule.TITLE_EXACT)

    if not config.fuzzy_enabled:
        return _DISTINCT

    similarity = score(title_a, title_b, config.algorithm)
    if similarity >= config.similarity_threshold:
        return Classification(Verdict.DUPLICATE, MatchRule.TITLE_SIMILAR, similarity)

    return Classification(Verdict.DISTINCT, MatchRule.NONE, similarity)


def classify(candidate: Record, incumbent: Record, config: UnifyConfig) -> Verdict:
    """Classify a candidate against an incumbent.

    See :func:`classify_with_reason` for the rule order.
    """
    return classify_with_reason(candidate, incumbent, config).verdict
