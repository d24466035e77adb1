"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from bibunify.engine import UnifyConfig  # noqa: E402
from bibunify.models import Record  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "bib"


@pytest.fixture
def make_record() -> Callable[..., Record]:
    """Factory for test records with minimal boilerplate.

    ``title`` and ``doi`` are stored as fields when given; any other field
    can be passed as a keyword argument.
    """

    def _factory(
        identifier: str = "key_001",
        *,
        title: str | None = None,
        doi: str | None = None,
        entry_type: str = "article",
        **extra_fields: str,
    ) -> Record:
        fields: dict[str, str] = {}
        if title is not None:
            fields["title"] = title
        if doi is not None:
            fields["doi"] = doi
        fields.update(extra_fields)
        return Record(identifier=identifier, entry_type=entry_type, fields=fields)

    return _factory


@pytest.fixture
def silent_config() -> UnifyConfig:
    """Silent configuration with fuzzy matching disabled."""
    return UnifyConfig(similarity_threshold=1.0, silent=True)


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the .bib fixture files."""
    return FIXTURES_DIR


@pytest.fixture
def bib_dir(tmp_path: Path) -> Path:
    """Temporary folder holding copies of test1.bib and test2.bib."""
    folder = tmp_path / "bib"
    folder.mkdir()
    for name in ("test1.bib", "test2.bib"):
        (folder / name).write_bytes((FIXTURES_DIR / name).read_bytes())
    return folder
