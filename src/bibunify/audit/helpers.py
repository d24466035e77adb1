"""Run identifiers and runtime details recorded with each run."""

import importlib.metadata
import platform
import secrets

from bibunify.utils import get_iso_timestamp

__all__ = ["generate_run_id", "runtime_info"]


def generate_run_id() -> str:
    """Return ``<UTC timestamp>__<8 hex digits>``; ids sort by start time."""
    return f"{get_iso_timestamp()}__{secrets.token_hex(4)}"


def runtime_info() -> dict[str, str]:
    """Package and interpreter versions for the run_started event."""
    try:
        package_version = importlib.metadata.version("bibunify")
    except importlib.metadata.PackageNotFoundError:
        package_version = "unknown"

    return {
        "package_version": package_version,
        "python_version": platform.python_version(),
    }
