"""Run lifecycle on top of the audit logger."""

import sys
import time
import traceback
from pathlib import Path
from typing import Any

from bibunify.audit.helpers import generate_run_id, runtime_info
from bibunify.audit.logger import AuditLogger

__all__ = ["RunContext"]


class RunContext:
    """One unification run: its id, its logger and its stage timers.

    Used as a context manager, the run is finished on exit: "success" when
    the block completes, "failed" (after logging the exception) when it
    raises. The exception is not suppressed.

    Attributes
    ----------
    run_id : str
        Run identifier.
    audit_logger : AuditLogger
        Logger writing this run's events.
    records_processed : int | None
        Reported in run_finished when set.
    """

    def __init__(self, run_id: str, audit_logger: AuditLogger) -> None:
        self.run_id = run_id
        self.audit_logger = audit_logger
        self.records_processed: int | None = None
        self._started = time.perf_counter()
        self._stage_starts: dict[str, float] = {}

    @classmethod
    def start(
        cls,
        events_path: Path,
        parameters: dict[str, Any],
        command_argv: list[str] | None = None,
    ) -> "RunContext":
        """Open the events file and log run_started.

        Parameters
        ----------
        events_path : Path
            JSONL file receiving the events (appended to).
        parameters : dict[str, Any]
            Run configuration; package and Python versions are added.
        command_argv : list[str] | None, optional
            Command line to record, by default ``sys.argv``.
        """
        run_id = generate_run_id()
        audit_logger = AuditLogger(run_id=run_id, log_path=events_path)
        audit_logger.run_started(
            command=command_argv or sys.argv,
            parameters={**parameters, **runtime_info()},
        )
        return cls(run_id=run_id, audit_logger=audit_logger)

    def start_stage(self, stage_name: str, expected_records: int | None = None) -> None:
        """Start timing ``stage_name`` and log stage_started."""
        self._stage_starts[stage_name] = time.perf_counter()
        self.audit_logger.stage_started(stage_name, expected_records=expected_records)

    def finish_stage(self, stage_name: str, counters: dict[str, int] | None = None) -> None:
        """Log stage_finished with the stage's duration.

        Raises
        ------
        ValueError
            If the stage was never started.
        """
        started = self._stage_starts.pop(stage_name, None)
        if started is None:
            raise ValueError(f"Stage not started: {stage_name}")

        self.audit_logger.stage_finished(
            stage_name,
            duration_seconds=time.perf_counter() - started,
            counters=counters,
        )

    def record_error(self, exception: BaseException, include_traceback: bool = False) -> None:
        """Log ``exception`` against the current stage."""
        tb = None
        if include_traceback:
            tb = "".join(traceback.format_exception(exception))

        self.audit_logger.error(type(exception).__name__, str(exception), traceback=tb)

    def finish(self, status: str = "success") -> None:
        """Log run_finished and close the events file."""
        self.audit_logger.run_finished(
            status=status,
            duration_seconds=time.perf_counter() - self._started,
            records_processed=self.records_processed,
        )
        self.audit_logger.close()

    def __enter__(self) -> "RunContext":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if exc_type is not None:
            self.record_error(exc_val, include_traceback=True)
            self.finish(status="failed")
        else:
            self.finish(status="success")
