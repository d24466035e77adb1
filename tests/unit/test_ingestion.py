"""Unit tests for file discovery and ingestion."""

from pathlib import Path

import pytest

from bibunify.parse import (
    NoInputFilesError,
    ParseError,
    discover_bib_files,
    include_path,
    ingest_file,
    ingest_folder,
)
from bibunify.parse.base import detect_encoding, normalize_line_endings


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("refs.bib", True),
        ("[bibunify]bibliography.bib", False),
        ("[bibunify]other.bib", False),
        ("notes.txt", False),
        ("refs.BIB", False),
        ("refs.bib.bak", False),
    ],
)
def test_include_path(name: str, expected: bool) -> None:
    """Test only .bib files not written by a previous run are included."""
    assert include_path(Path(name)) is expected


@pytest.mark.unit
def test_discover_sorted_by_name(tmp_path: Path) -> None:
    """Test discovery order is the file name order."""
    for name in ("b.bib", "a.bib", "c.txt", "[bibunify]bibliography.bib"):
        (tmp_path / name).write_text("", encoding="utf-8")
    (tmp_path / "sub.bib").mkdir()

    files = discover_bib_files(tmp_path)

    assert [f.name for f in files] == ["a.bib", "b.bib"]


@pytest.mark.unit
def test_discover_missing_folder(tmp_path: Path) -> None:
    """Test a missing folder raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError, match="Folder not found"):
        discover_bib_files(tmp_path / "nope")


@pytest.mark.unit
def test_discover_file_instead_of_folder(tmp_path: Path) -> None:
    """Test a regular file path raises NotADirectoryError."""
    path = tmp_path / "refs.bib"
    path.write_text("", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        discover_bib_files(path)


@pytest.mark.unit
def test_ingest_folder_one_source_per_file(bib_dir: Path) -> None:
    """Test each file becomes one record source, in name order."""
    sources, results = ingest_folder(bib_dir)

    assert [r.filename for r in results] == ["test1.bib", "test2.bib"]
    assert [len(s) for s in sources] == [8, 6]
    assert [r.records_parsed for r in results] == [8, 6]
    assert results[0].warnings == ("test1.bib:1: Skipping @COMMENT entry",)
    assert results[1].warnings == ()


@pytest.mark.unit
def test_ingest_folder_without_bib_files(tmp_path: Path) -> None:
    """Test a folder with only previous outputs is an error."""
    (tmp_path / "[bibunify]bibliography.bib").write_text("@misc{K}", encoding="utf-8")

    with pytest.raises(NoInputFilesError, match="No .bib files"):
        ingest_folder(tmp_path)


@pytest.mark.unit
def test_no_input_files_is_a_file_not_found_error() -> None:
    """Test callers catching FileNotFoundError also catch NoInputFilesError."""
    assert issubclass(NoInputFilesError, FileNotFoundError)


@pytest.mark.unit
def test_ingest_file_missing(tmp_path: Path) -> None:
    """Test a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError, match="File not found"):
        ingest_file(tmp_path / "missing.bib")


@pytest.mark.unit
def test_ingest_malformed_file_raises_parse_error(fixtures_dir: Path, tmp_path: Path) -> None:
    """Test a file with an unclosed entry fails with its path attached."""
    path = tmp_path / "x.bib"
    path.write_bytes((fixtures_dir / "malformed.bib.txt").read_bytes())

    with pytest.raises(ParseError, match="Failed to parse x.bib") as exc_info:
        ingest_file(path)

    assert exc_info.value.file == str(path)
    assert "Unclosed entry @article" in str(exc_info.value)


@pytest.mark.unit
def test_ingest_file_with_malformed_field_raises_parse_error(tmp_path: Path) -> None:
    """Test a field missing its '=' fails the file rather than losing the field."""
    path = tmp_path / "x.bib"
    path.write_text("@article{K, author Nobody, title = {T}}\n", encoding="utf-8")

    with pytest.raises(ParseError, match="Malformed field in entry K"):
        ingest_file(path)


@pytest.mark.unit
def test_ingest_folder_stops_on_malformed_file(fixtures_dir: Path, bib_dir: Path) -> None:
    """Test one malformed file fails the whole folder."""
    (bib_dir / "x.bib").write_bytes((fixtures_dir / "malformed.bib.txt").read_bytes())

    with pytest.raises(ParseError):
        ingest_folder(bib_dir)


@pytest.mark.unit
def test_ingest_latin1_file(tmp_path: Path) -> None:
    """Test non-UTF-8 files are decoded as Latin-1."""
    path = tmp_path / "legacy.bib"
    path.write_bytes("@book{G, author = {Gödel, Kurt}}\r\n".encode("latin-1"))

    records, result = ingest_file(path)

    assert result.encoding_used == "latin-1"
    assert records[0].fields["author"] == "Gödel, Kurt"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"\xef\xbb\xbf@misc{K}", "utf-8-sig"),
        ("@misc{K, note = {ü}}".encode(), "utf-8"),
        (b"@misc{K, note = {\xfc}}", "latin-1"),
    ],
)
def test_detect_encoding(data: bytes, expected: str) -> None:
    """Test BOM, UTF-8 and Latin-1 fallback detection."""
    assert detect_encoding(data) == expected


@pytest.mark.unit
def test_normalize_line_endings() -> None:
    """Test CRLF and CR become LF."""
    assert normalize_line_endings("a\r\nb\rc\n") == "a\nb\nc\n"
