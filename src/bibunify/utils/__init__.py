"""Small helpers shared by the audit log and the API."""

import hashlib
from datetime import UTC, datetime
from pathlib import Path

__all__ = [
    "calculate_file_sha256",
    "get_iso_timestamp",
]


def get_iso_timestamp() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.ffffffZ``."""
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def calculate_file_sha256(path: Path | str) -> str:
    """Hash a file's contents.

    Returns
    -------
    str
        ``sha256:<hex digest>``.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    with Path(path).open("rb") as f:
        digest = hashlib.file_digest(f, "sha256")
    return f"sha256:{digest.hexdigest()}"
