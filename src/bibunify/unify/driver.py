"""Merge driver: folds record sources into one unified collection.

Each incoming record is compared with the records already merged, in
insertion order. The first comparison that is not DISTINCT decides what
happens, except that a KEEP_BOTH resolution lets the scan carry on with the
remaining records. A record that survives the scan is appended under a
free citation key.
"""

from collections.abc import Iterable, Sequence

from bibunify.audit.logger import AuditLogger
from bibunify.engine.config import UnifyConfig
from bibunify.models import Collection, Record
from bibunify.unify.allocator import allocate_identifier
from bibunify.unify.classifier import classify_with_reason
from bibunify.unify.models import (
    Classification,
    MergeResult,
    PromptChoice,
    Resolution,
    Verdict,
)
from bibunify.unify.resolution import resolve

__all__ = ["merge_all", "merge_one"]


def merge_all(
    sources: Sequence[Iterable[Record]],
    config: UnifyConfig,
    *,
    prompt_choice: PromptChoice | None = None,
    audit_logger: AuditLogger | None = None,
) -> MergeResult:
    """Merge several record sources into one deduplicated collection.

    Parameters
    ----------
    sources : Sequence[Iterable[Record]]
        Record sources, merged in the given order.
    config : UnifyConfig
        Run configuration.
    prompt_choice : PromptChoice | None, optional
        Interactive choice provider; required unless ``config.silent``
        and a duplicate needs resolving.
    audit_logger : AuditLogger | None, optional
        Receives duplicate, key reassignment and per-source events.

    Returns
    -------
    MergeResult
        Unified collection and duplicate counts.

    Examples
    --------
        >>> result = merge_all([records_a, records_b], UnifyConfig(silent=True))
        >>> len(result.collection), result.duplicates_removed
    """
    result = MergeResult(collection=Collection())

    for index, source in enumerate(sources):
        records_before = len(result.collection)
        removed = merge_one(
            source,
            result.collection,
            config,
            prompt_choice=prompt_choice,
            audit_logger=audit_logger,
        )
        result.per_source.append(removed)
        result.duplicates_removed += removed

        if audit_logger:
            audit_logger.source_merged(
                source_index=index,
                records_added=len(result.collection) - records_before,
                duplicates_removed=removed,
                collection_size=len(result.collection),
            )

    return result


def merge_one(
    source: Iterable[Record],
    target: Collection,
    config: UnifyConfig,
    *,
    prompt_choice: PromptChoice | None = None,
    audit_logger: AuditLogger | None = None,
) -> int:
    """Merge one record source into ``target`` in place.

    Parameters
    ----------
    source : Iterable[Record]
        Incoming records, consumed in order.
    target : Collection
        Unified collection, mutated in place.
    config : UnifyConfig
        Run configuration.
    prompt_choice : PromptChoice | None, optional
        Interactive choice provider.
    audit_logger : AuditLogger | None, optional
        Event sink.

    Returns
    -------
    int
        Number of duplicates eliminated from this source.
    """
    duplicates = 0

    for candidate in source:
        add_candidate = True
        replaced_identifier: str | None = None

        for incumbent in target:
            classification = classify_with_reason(candidate, incumbent, config)
            if classification.verdict is Verdict.DISTINCT:
                continue

            if classification.verdict is Verdict.IDENTICAL:
                resolution = Resolution.KEEP_INCUMBENT
            else:
                resolution = resolve(incumbent, candidate, config, prompt_choice)

            if audit_logger:
                _log_duplicate(audit_logger, candidate, incumbent, classification, resolution)

            if resolution is Resolution.KEEP_BOTH:
                continue

            duplicates += 1
            if resolution is Resolution.KEEP_INCUMBENT:
                add_candidate = False
            else:
                replaced_identifier = incumbent.identifier
            break

        # Remove before inserting: the candidate may carry the same key.
        if replaced_identifier is not None:
            target.remove(replaced_identifier)

        if add_candidate:
            _insert(candidate, target, audit_logger)

    return duplicates


def _insert(record: Record, target: Collection, audit_logger: AuditLogger | None) -> None:
    """Append ``record`` to ``target`` under a free citation key."""
    identifier = allocate_identifier(record.identifier, target)
    if identifier != record.identifier:
        if audit_logger:
            audit_logger.identifier_reassigned(record.identifier, identifier)
        record = record.with_identifier(identifier)
    target.insert(record)


def _log_duplicate(
    audit_logger: AuditLogger,
    candidate: Record,
    incumbent: Record,
    classification: Classification,
    resolution: Resolution,
) -> None:
    audit_logger.duplicate_detected(
        candidate=candidate.identifier,
        incumbent=incumbent.identifier,
        verdict=classification.verdict.value,
        rule=classification.rule.value,
        resolution=resolution.value,
        similarity=classification.similarity,
    )
