"""BibTeX format parser.

Entries: @<entrytype>{citekey, field = {value}, ...} (parentheses are also
accepted as entry delimiters). Values may be braced, quoted, bare (numbers
and macro names) or ``#``-concatenations of those.
@STRING entries define macros, expanded in the fields of later entries.
@PREAMBLE and @COMMENT entries are skipped.
Text outside entries is ignored, as BibTeX does.
Reference: http://www.bibtex.org/Format/
"""

import re
from pathlib import Path

from bibunify.models import Record
from bibunify.parse.base import ParseResult

ENTRY_START_PATTERN = re.compile(r"@\s*(\w+)\s*([{(])")
FIELD_NAME_PATTERN = re.compile(r"([\w\-:.+/]+)\s*=\s*")
SKIPPED_ENTRY_TYPES = frozenset({"preamble", "comment"})

_WHITESPACE_RE = re.compile(r"\s+")


def parse_bibtex(file_path: Path, content: str) -> ParseResult:
    """Parse BibTeX content and return records.

    Parameters
    ----------
    file_path : Path
        Path to the BibTeX file (used in messages only).
    content : str
        Decoded file content with normalized line endings.

    Returns
    -------
    ParseResult
        Records, warnings, and errors. An entry with a malformed field is
        reported as an error and not returned.
    """
    warnings: list[str] = []
    errors: list[str] = []
    records: list[Record] = []
    # Macro names are case-insensitive
    macros: dict[str, str] = {}

    pos = 0
    while True:
        match = ENTRY_START_PATTERN.search(content, pos)
        if not match:
            break

        line = content.count("\n", 0, match.start()) + 1
        location = f"{file_path.name}:{line}"
        entry_type = match.group(1).lower()
        body_start = match.end()
        body_end = _find_closing_delimiter(
            content,
            body_start,
            match.group(2),
            quotes_delimit=entry_type != "comment",
        )

        if body_end == -1:
            errors.append(f"{location}: Unclosed entry @{entry_type}")
            pos = body_start
            continue

        pos = body_end + 1
        body = content[body_start:body_end]

        if entry_type in SKIPPED_ENTRY_TYPES:
            warnings.append(f"{location}: Skipping @{entry_type.upper()} entry")
            continue

        if entry_type == "string":
            definitions = _parse_fields(body, "@string", location, macros, warnings, errors)
            if definitions is not None:
                macros.update(definitions)
            continue

        citekey, fields_text = _split_citekey(body)
        if not citekey:
            errors.append(f"{location}: Entry @{entry_type} has no citation key")
            continue

        fields = _parse_fields(fields_text, citekey, location, macros, warnings, errors)
        if fields is not None:
            records.append(Record(identifier=citekey, entry_type=entry_type, fields=fields))

    return ParseResult(records, warnings, errors)


def _find_closing_delimiter(
    content: str,
    start: int,
    open_delim: str,
    quotes_delimit: bool = True,
) -> int:
    """Return the index of the delimiter closing the entry opened before ``start``.

    With ``quotes_delimit`` off (@COMMENT bodies) only braces and
    parentheses count.
    """
    close_delim = "}" if open_delim == "{" else ")"
    brace_depth = 0
    in_quotes = False
    escape_next = False

    for i in range(start, len(content)):
        char = content[i]
        if escape_next:
            escape_next = False
            continue

        if char == "\\":
            escape_next = True
            continue

        if char == '"' and brace_depth == 0 and quotes_delimit:
            in_quotes = not in_quotes
        elif char == "{":
            brace_depth += 1
        elif char == "}":
            if brace_depth == 0:
                if close_delim == "}" and not in_quotes:
                    return i
            else:
                brace_depth -= 1
        elif char == ")" and close_delim == ")" and brace_depth == 0 and not in_quotes:
            return i

    return -1


def _split_citekey(body: str) -> tuple[str, str]:
    comma = body.find(",")
    if comma == -1:
        citekey, rest = body.strip(), ""
    else:
        citekey, rest = body[:comma].strip(), body[comma + 1 :]

    # "@article{title = ...}" has no key at all
    if "=" in citekey or any(c.isspace() for c in citekey):
        return "", rest
    return citekey, rest


def _parse_fields(
    content: str,
    citekey: str,
    location: str,
    macros: dict[str, str],
    warnings: list[str],
    errors: list[str],
) -> dict[str, str] | None:
    """Parse ``name = value`` pairs; None when a field is malformed."""
    fields: dict[str, str] = {}

    i = 0
    while i < len(content):
        # Skip whitespace and stray commas
        while i < len(content) and (content[i].isspace() or content[i] == ","):
            i += 1
        if i >= len(content):
            break

        field_match = FIELD_NAME_PATTERN.match(content, i)
        if not field_match:
            errors.append(
                f"{location}: Malformed field in entry {citekey}: {content[i:i + 30]!r}"
            )
            return None

        field_name = field_match.group(1).lower()
        i = field_match.end()

        parts: list[str] = []
        while True:
            value, i = _parse_value(content, i, citekey, macros, warnings)
            parts.append(value)

            j = i
            while j < len(content) and content[j].isspace():
                j += 1
            if j < len(content) and content[j] == "#":
                i = j + 1
                while i < len(content) and content[i].isspace():
                    i += 1
                continue
            break

        value = _WHITESPACE_RE.sub(" ", "".join(parts)).strip()

        if field_name in fields:
            warnings.append(f"{citekey}: Duplicate field '{field_name}' ignored")
        else:
            fields[field_name] = value

    return fields


def _parse_value(
    content: str,
    start: int,
    citekey: str,
    macros: dict[str, str],
    warnings: list[str],
) -> tuple[str, int]:
    if start >= len(content):
        return "", start
    if content[start] == "{":
        return _parse_braced_value(content, start)
    if content[start] == '"':
        return _parse_quoted_value(content, start)

    token, end = _parse_bare_value(content, start)
    if not token or token.isdigit():
        return token, end

    expansion = macros.get(token.lower())
    if expansion is None:
        warnings.append(f"{citekey}: Undefined macro '{token}' kept as text")
        return token, end
    return expansion, end


def _parse_braced_value(content: str, start: int) -> tuple[str, int]:
    brace_depth = 0
    value_chars: list[str] = []
    i = start

    while i < len(content):
        char = content[i]
        if char == "\\" and i + 1 < len(content):
            value_chars.append(content[i : i + 2])
            i += 2
            continue
        if char == "{":
            brace_depth += 1
            if brace_depth > 1:
                value_chars.append(char)
        elif char == "}":
            brace_depth -= 1
            if brace_depth == 0:
                return "".join(value_chars), i + 1
            value_chars.append(char)
        else:
            value_chars.append(char)
        i += 1

    return "".join(value_chars), i


def _parse_quoted_value(content: str, start: int) -> tuple[str, int]:
    i = start + 1  # skip opening quote
    value_chars: list[str] = []
    brace_depth = 0

    while i < len(content):
        char = content[i]
        if char == "\\" and i + 1 < len(content):
            value_chars.append(content[i : i + 2])
            i += 2
            continue
        if char == "{":
            brace_depth += 1
        elif char == "}":
            brace_depth -= 1
        elif char == '"' and brace_depth == 0:
            return "".join(value_chars), i + 1
        value_chars.append(char)
        i += 1

    return "".join(value_chars), i


def _parse_bare_value(content: str, start: int) -> tuple[str, int]:
    value_chars: list[str] = []
    i = start

    while i < len(content) and content[i] not in ",#}" and not content[i].isspace():
        value_chars.append(content[i])
        i += 1

    return "".join(value_chars).strip(), i
