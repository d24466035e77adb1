"""Audit event record."""

import json
from dataclasses import asdict, dataclass
from typing import Any

__all__ = ["LogEvent", "LOG_LEVELS"]

LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARN", "ERROR"})


@dataclass(frozen=True)
class LogEvent:
    """One line of the events file.

    Attributes
    ----------
    ts : str
        UTC timestamp with microseconds.
    run_id : str
        Run the event belongs to.
    level : str
        One of ``LOG_LEVELS``.
    event : str
        Event name, e.g. ``duplicate_detected``.
    data : dict[str, Any]
        Event payload.
    stage : str | None
        Stage running when the event was written (parse, unify, write).
    rid : str | None
        Citation key of the record the event is about.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any]
    stage: str | None = None
    rid: str | None = None

    def to_json(self) -> str:
        """Compact JSON, non-ASCII kept as-is."""
        return json.dumps(asdict(self), ensure_ascii=False, separators=(",", ":"))
