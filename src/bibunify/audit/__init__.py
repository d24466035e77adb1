"""Structured JSONL event log for unification runs.

- AuditLogger: writes one JSON event per line
- RunContext: run and stage lifecycle, failure recording
- LogEvent: the event record
"""

from bibunify.audit.context import RunContext
from bibunify.audit.helpers import generate_run_id
from bibunify.audit.logger import AuditLogger
from bibunify.audit.models import LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "RunContext",
    "generate_run_id",
]
