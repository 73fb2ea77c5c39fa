"""Insert or replace the managed weather block inside a note.

The note is treated as a sequence of lines. The managed block is the span
from the begin marker line to the end marker line, inclusive. Everything
outside that span (or outside the insertion point) is passed through with
its original bytes, line endings included.
"""

import logging
import re

from weathernotes.errors import UpsertError

logger = logging.getLogger(__name__)

# Marker and heading text is shared with notes written by earlier runs;
# changing it orphans their blocks.
HEADING = "## Weather Forecast"
BEGIN_MARKER = "<!-- WEATHER:BEGIN -->"
END_MARKER = "<!-- WEATHER:END -->"

_HEADING_RE = re.compile(r"^##\s*Weather Forecast\s*$")


def _eol(line: str) -> str:
    if line.endswith("\r\n"):
        return "\r\n"
    if line.endswith(("\n", "\r")):
        return line[-1]
    return ""


def _detect_newline(text: str) -> str:
    idx = text.find("\n")
    if idx > 0 and text[idx - 1] == "\r":
        return "\r\n"
    return "\n"


def find_block(lines: list[str]) -> tuple[int, int] | None:
    """Locate the first begin/end marker pair.

    Returns (begin_index, end_index) or None when no markers exist. Raises
    UpsertError when any marker in the document is unpaired or nested.
    """
    first: tuple[int, int] | None = None
    open_at: int | None = None
    extra_pairs = 0

    for idx, line in enumerate(lines):
        stripped = line.strip()
        if stripped == BEGIN_MARKER:
            if open_at is not None:
                raise UpsertError(
                    f"begin marker on line {idx + 1} while block opened on "
                    f"line {open_at + 1} is still open"
                )
            open_at = idx
        elif stripped == END_MARKER:
            if open_at is None:
                raise UpsertError(
                    f"end marker on line {idx + 1} has no matching begin marker"
                )
            if first is None:
                first = (open_at, idx)
            else:
                extra_pairs += 1
            open_at = None

    if open_at is not None:
        raise UpsertError(
            f"begin marker on line {open_at + 1} has no matching end marker"
        )
    if extra_pairs:
        logger.warning(
            "Found %d additional weather block(s); only the first is updated",
            extra_pairs,
        )
    return first


def find_heading(lines: list[str]) -> int | None:
    """Index of the first weather section heading line, if any."""
    for idx, line in enumerate(lines):
        if _HEADING_RE.match(line.rstrip("\r\n")):
            return idx
    return None


def build_block(fragment: str, newline: str = "\n", trailing: str = "\n") -> str:
    """Wrap a rendered fragment in the managed block markers."""
    body = fragment.splitlines()
    for line in body:
        if line.strip() in (BEGIN_MARKER, END_MARKER):
            raise UpsertError("rendered fragment contains a block marker line")
    parts = [BEGIN_MARKER, *body, END_MARKER]
    return newline.join(parts) + trailing


def upsert_weather_block(text: str, fragment: str) -> str:
    """Return the note text with the weather block replaced or inserted.

    1. An existing block is replaced in place, markers included.
    2. Otherwise the block goes directly below the first section heading.
    3. Otherwise the heading and block are appended, after a blank line.
    """
    newline = _detect_newline(text)
    lines = text.splitlines(keepends=True)

    span = find_block(lines)
    if span is not None:
        begin, end = span
        block = build_block(fragment, newline, _eol(lines[end]))
        return "".join(lines[:begin]) + block + "".join(lines[end + 1:])

    heading_idx = find_heading(lines)
    if heading_idx is not None:
        heading = lines[heading_idx]
        if not _eol(heading):
            heading += newline
        block = build_block(fragment, newline, newline)
        return (
            "".join(lines[:heading_idx])
            + heading
            + block
            + "".join(lines[heading_idx + 1:])
        )

    prefix = text
    content = text.rstrip("\r\n")
    if content:
        breaks = len(text[len(content):].splitlines())
        if breaks < 2:
            prefix += newline * (2 - breaks)
    return prefix + HEADING + newline + build_block(fragment, newline, newline)
