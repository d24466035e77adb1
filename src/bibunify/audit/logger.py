"""JSONL event log for unification runs.

Every event is one JSON object on its own line, appended and flushed
immediately so an interrupted run still leaves a readable log. Several runs
may append to the same file; ``run_id`` tells them apart.
"""

from pathlib import Path
from typing import Any

from bibunify.audit.models import LOG_LEVELS, LogEvent
from bibunify.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """Append-only event writer bound to one run.

    Attributes
    ----------
    run_id : str
        Run identifier stamped on every event.
    log_path : Path
        Events file (created with its parent directories).
    current_stage : str | None
        Stage between ``stage_started`` and ``stage_finished``; events
        written meanwhile default to it.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        self.run_id = run_id
        self.log_path = Path(log_path)
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        """Whether the events file has been closed."""
        return self._file.closed

    def close(self) -> None:
        """Close the events file. Safe to call twice."""
        if not self._file.closed:
            self._file.close()

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        rid: str | None = None,
    ) -> None:
        """Append one event.

        Parameters
        ----------
        event_type : str
            Event name.
        data : dict[str, Any] | None, optional
            JSON-serializable payload.
        level : str, optional
            "DEBUG", "INFO", "WARN" or "ERROR".
        stage : str | None, optional
            Overrides ``current_stage``.
        rid : str | None, optional
            Citation key the event is about.

        Raises
        ------
        ValueError
            If ``level`` is unknown.
        """
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {level!r}")

        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data or {},
            stage=stage if stage is not None else self.current_stage,
            rid=rid,
        )
        self._file.write(log_event.to_json() + "\n")
        self._file.flush()

    # ------------------------------------------------------------------
    # Run lifecycle
    # ------------------------------------------------------------------

    def run_started(self, command: list[str], parameters: dict[str, Any]) -> None:
        """Log the command line and run parameters."""
        self.event("run_started", data={"command": command, "parameters": parameters})

    def run_finished(
        self,
        status: str,
        duration_seconds: float,
        records_processed: int | None = None,
    ) -> None:
        """Log the run outcome ("success" or "failed")."""
        data: dict[str, Any] = {"status": status, "duration_seconds": duration_seconds}
        if records_processed is not None:
            data["records_processed"] = records_processed
        self.event("run_finished", data=data, stage=None)

    def stage_started(self, stage: str, expected_records: int | None = None) -> None:
        """Enter ``stage``; later events default to it."""
        self.current_stage = stage
        data = {} if expected_records is None else {"expected_records": expected_records}
        self.event("stage_started", data=data)

    def stage_finished(
        self,
        stage: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Leave ``stage`` and log its duration and counters."""
        data: dict[str, Any] = {"duration_seconds": duration_seconds}
        if counters:
            data["counters"] = counters
        self.event("stage_finished", data=data, stage=stage)
        self.current_stage = None

    def error(self, exception_class: str, message: str, traceback: str | None = None) -> None:
        """Log a failure in the current stage."""
        data = {"exception_class": exception_class, "message": message}
        if traceback is not None:
            data["traceback"] = traceback
        self.event("error", data=data, level="ERROR")

    # ------------------------------------------------------------------
    # Unification events
    # ------------------------------------------------------------------

    def parse_warning(self, file: str, message: str) -> None:
        """Log a recoverable problem found while parsing ``file``."""
        self.event("parse_warning", data={"file": file, "message": message}, level="WARN")

    def duplicate_detected(
        self,
        candidate: str,
        incumbent: str,
        verdict: str,
        rule: str,
        resolution: str,
        similarity: float | None = None,
    ) -> None:
        """Log an incoming record matching one already merged.

        ``rid`` is the incoming record's key; ``data.incumbent`` the key it
        matched.
        """
        self.event(
            "duplicate_detected",
            data={
                "incumbent": incumbent,
                "verdict": verdict,
                "rule": rule,
                "similarity": similarity,
                "resolution": resolution,
            },
            rid=candidate,
        )

    def identifier_reassigned(self, old: str, new: str) -> None:
        """Log a record stored under a suffixed key because ``old`` was taken."""
        self.event("identifier_reassigned", data={"old": old, "new": new}, rid=old)

    def source_merged(
        self,
        source_index: int,
        records_added: int,
        duplicates_removed: int,
        collection_size: int,
    ) -> None:
        """Log the outcome of merging one source."""
        self.event(
            "source_merged",
            data={
                "source_index": source_index,
                "records_added": records_added,
                "duplicates_removed": duplicates_removed,
                "collection_size": collection_size,
            },
        )

    def artifact_written(self, path: str, sha256: str, record_count: int | None = None) -> None:
        """Log an output file and its content hash."""
        data: dict[str, Any] = {"path": path, "sha256": sha256}
        if record_count is not None:
            data["record_count"] = record_count
        self.event("artifact_written", data=data)
