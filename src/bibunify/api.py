"""Public API for unifying bibliographies.

This module provides the main public API for bibunify, enabling:
- Parsing .bib files and folders into Record objects
- Merging record sources into one deduplicated collection
- Running the complete folder-to-file unification
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from bibunify.audit import RunContext
from bibunify.engine.config import UnifyConfig, UnifyRunResult
from bibunify.models import Record
from bibunify.parse import OUTPUT_PREFIX, ingest_file, ingest_folder
from bibunify.serialize import OutputFormat, write_collection
from bibunify.unify import PromptChoice, merge_all
from bibunify.utils import calculate_file_sha256

__all__ = [
    "DEFAULT_OUTPUT_NAME",
    "parse_file",
    "parse_folder",
    "unify",
    "write_bibliography",
]

DEFAULT_OUTPUT_NAME = f"{OUTPUT_PREFIX}bibliography.bib"


def parse_file(path: str | Path) -> list[Record]:
    """Parse a single .bib file.

    Parameters
    ----------
    path : str | Path
        Path to file to parse.

    Returns
    -------
    list[Record]
        Parsed records, in file order.

    Raises
    ------
    FileNotFoundError
        If file does not exist.
    ParseError
        If the file contains malformed entries.

    Examples
    --------
        >>> from bibunify import parse_file
        >>> records = parse_file("references.bib")
        >>> for record in records:
        ...     print(record.identifier, record.title)
    """
    records, _ = ingest_file(Path(path))
    return records


def parse_folder(path: str | Path) -> list[list[Record]]:
    """Parse every .bib file of a folder.

    Files written by previous runs (``[bibunify]*.bib``) are skipped.

    Parameters
    ----------
    path : str | Path
        Folder containing .bib files.

    Returns
    -------
    list[list[Record]]
        One record list per file, files sorted by name.

    Raises
    ------
    FileNotFoundError
        If folder does not exist.
    NoInputFilesError
        If the folder has no .bib file.
    ParseError
        If any file fails to parse.
    """
    sources, _ = ingest_folder(Path(path))
    return sources


def write_bibliography(
    records: Iterable[Record],
    path: str | Path,
    output_format: OutputFormat | str = OutputFormat.BIBTEX,
) -> None:
    """Write records to a .bib file in BibTeX or BibLaTeX format."""
    write_collection(records, Path(path), output_format)


def unify(
    input_dir: str | Path,
    *,
    output: str | Path | None = None,
    config: UnifyConfig | None = None,
    prompt_choice: PromptChoice | None = None,
    events_path: str | Path | None = None,
) -> UnifyRunResult:
    """Unify all .bib files of a folder into one deduplicated bibliography.

    Parameters
    ----------
    input_dir : str | Path
        Folder containing .bib files.
    output : str | Path | None, optional
        Output .bib path. Defaults to ``[bibunify]bibliography.bib``
        inside ``input_dir``.
    config : UnifyConfig | None, optional
        Run configuration, by default ``UnifyConfig()``.
    prompt_choice : PromptChoice | None, optional
        Interactive choice provider. Non-silent runs default to the
        terminal prompt.
    events_path : str | Path | None, optional
        If given, structured audit events are appended to this JSONL file.

    Returns
    -------
    UnifyRunResult
        Output path and record counts.

    Raises
    ------
    ValueError
        If ``output`` is not a .bib path.
    FileNotFoundError
        If ``input_dir`` does not exist.
    NoInputFilesError
        If ``input_dir`` has no .bib file.
    ParseError
        If any input file fails to parse.

    Examples
    --------
        >>> from bibunify import UnifyConfig, unify
        >>> result = unify("refs/", config=UnifyConfig(similarity_threshold=0.9, silent=True))
        >>> print(result.duplicates_removed, result.output_path)
    """
    input_dir = Path(input_dir)
    config = config or UnifyConfig()

    output_path = Path(output) if output is not None else input_dir / DEFAULT_OUTPUT_NAME
    if output_path.suffix != ".bib":
        raise ValueError(f"Output must be a path to a .bib file, got {output_path}")

    if not config.silent and prompt_choice is None:
        from bibunify.cli.prompt import terminal_prompt_choice

        prompt_choice = terminal_prompt_choice

    if events_path is None:
        return _run(input_dir, output_path, config, prompt_choice, None)

    parameters = {
        **config.to_dict(),
        "input_dir": str(input_dir),
        "output": str(output_path),
    }
    with RunContext.start(events_path=Path(events_path), parameters=parameters) as run:
        result = _run(input_dir, output_path, config, prompt_choice, run)
        run.records_processed = result.total_records
    return result


def _run(
    input_dir: Path,
    output_path: Path,
    config: UnifyConfig,
    prompt_choice: PromptChoice | None,
    run: RunContext | None,
) -> UnifyRunResult:
    """Parse, merge and write, recording stages when ``run`` is given."""
    if run:
        run.start_stage("parse")

    sources, file_results = ingest_folder(input_dir)
    total_records = sum(len(source) for source in sources)

    if run:
        for file_result in file_results:
            for warning in file_result.warnings:
                run.audit_logger.parse_warning(file_result.filename, warning)
        run.finish_stage(
            "parse",
            counters={"files": len(file_results), "records": total_records},
        )
        run.start_stage("unify", expected_records=total_records)

    merged = merge_all(
        sources,
        config,
        prompt_choice=prompt_choice,
        audit_logger=run.audit_logger if run else None,
    )

    if run:
        run.finish_stage(
            "unify",
            counters={
                "records_in": total_records,
                "records_out": len(merged.collection),
                "duplicates_removed": merged.duplicates_removed,
            },
        )
        run.start_stage("write")

    write_collection(merged.collection, output_path, config.output_format)

    if run:
        run.audit_logger.artifact_written(
            path=str(output_path),
            sha256=calculate_file_sha256(output_path),
            record_count=len(merged.collection),
        )
        run.finish_stage("write")

    return UnifyRunResult(
        output_path=output_path,
        total_records=total_records,
        unique_records=len(merged.collection),
        duplicates_removed=merged.duplicates_removed,
        files=[r.filename for r in file_results],
    )
