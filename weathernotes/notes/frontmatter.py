"""Frontmatter extraction: the `---` delimited header at the top of a note.

Only a flat ``key: value`` grammar is understood. Indented lines and list
items are accepted as continuations of the preceding key so that notes
carrying ``tags:`` lists or similar still parse, but a continuation under a
required key is rejected instead of being silently ignored.
"""

import re
from datetime import date, datetime

from weathernotes.errors import MetadataError, MissingFrontmatterError
from weathernotes.models.note import NoteMeta

DELIMITER = "---"

CITY_KEYS = ("city", "city-place")
ARRIVAL_KEY = "arrival"
DEPARTURE_KEY = "departure"
REQUIRED_KEYS = frozenset((*CITY_KEYS, ARRIVAL_KEY, DEPARTURE_KEY))

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_KEY_RE = re.compile(r"^([A-Za-z0-9_][A-Za-z0-9_.-]*)\s*:(.*)$")


def split_frontmatter(text: str) -> tuple[list[str], int]:
    """Return the header lines and the index of the closing delimiter line.

    Raises MissingFrontmatterError when the document does not open with the
    delimiter, MetadataError when the header is never closed.
    """
    lines = text.splitlines()
    if not lines or lines[0].lstrip("\ufeff").strip() != DELIMITER:
        raise MissingFrontmatterError("no frontmatter header at start of note")
    for idx in range(1, len(lines)):
        if lines[idx].strip() == DELIMITER:
            return lines[1:idx], idx
    raise MetadataError("frontmatter header is not terminated by '---'")


def parse_header(lines: list[str]) -> dict[str, str]:
    """Parse header lines into a flat mapping of key to unquoted value."""
    values: dict[str, str] = {}
    current_key: str | None = None

    for lineno, raw in enumerate(lines, start=2):
        if not raw.strip() or raw.lstrip().startswith("#"):
            continue

        if raw[0] in " \t" or raw.lstrip().startswith("- "):
            if current_key is None:
                raise MetadataError(
                    f"line {lineno}: continuation line before any key"
                )
            if current_key in REQUIRED_KEYS:
                raise MetadataError(
                    f"line {lineno}: '{current_key}' must be a single value"
                )
            continue

        m = _KEY_RE.match(raw)
        if m is None:
            raise MetadataError(f"line {lineno}: expected 'key: value', got {raw!r}")

        key = m.group(1)
        if key in values and key in REQUIRED_KEYS:
            raise MetadataError(f"line {lineno}: duplicate key '{key}'")
        values[key] = _unquote(m.group(2).strip())
        current_key = key

    return values


def extract_meta(text: str) -> NoteMeta:
    """Extract and validate city, arrival and departure from a note."""
    header, _ = split_frontmatter(text)
    values = parse_header(header)

    city = ""
    for key in CITY_KEYS:
        if values.get(key, "").strip():
            city = values[key].strip()
            break
    if not city:
        raise MetadataError("missing 'city'")

    arrival = _parse_date(values, ARRIVAL_KEY)
    departure = _parse_date(values, DEPARTURE_KEY)
    return NoteMeta(city=city, arrival=arrival, departure=departure)


def _parse_date(values: dict[str, str], key: str) -> date:
    raw = values.get(key, "")
    if not raw:
        raise MetadataError(f"missing '{key}' (YYYY-MM-DD)")
    if not _DATE_RE.match(raw):
        raise MetadataError(f"'{key}' must be YYYY-MM-DD, got {raw!r}")
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError as e:
        raise MetadataError(f"'{key}' is not a valid date: {raw!r}") from e


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value
