"""Plain-text journal file format.

A journal file looks like::

    <document name>
    2024 Jan 01 09:30:00 +0000|first version of the first entry
    2024 Jan 02 18:05:12 +0000|second version of the first entry
    ;
    2024 Jan 03 07:00:00 +0100|the second entry
    ;

Each entry is its commits, oldest first, one per line, closed by a line
holding only ``;``. Blank lines between entries are ignored. Backslashes,
newlines, and carriage returns in commit text and in the name are escaped as
``\\\\``, ``\\n`` and ``\\r`` so that every commit fits on one line. A ``|``
in the text needs no escaping because the timestamp never contains one, and
a commit line can never be a lone ``;``.

``parse(serialize(document)) == document`` holds for every document. Commits
are stamped at whole seconds on a whole-minute UTC offset, which is exactly
what a timestamp line can hold.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import List

from dated_diary.runtime.telemetry import span

from .commit import Commit
from .document import Document
from .entry import Entry
from .errors import ParseError

ENTRY_TERMINATOR = ";"
FIELD_SEPARATOR = "|"
TIMESTAMP_FORMAT = "YYYY Mon DD HH:MM:SS +ZZZZ"

# Spelled out so the format does not follow the process locale.
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_MONTH_NUMBERS = {name: number for number, name in enumerate(_MONTHS, start=1)}

_TIMESTAMP_RE = re.compile(
    r"(?P<year>\d{4}) (?P<month>[A-Z][a-z]{2}) (?P<day>\d{2}) "
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2}) "
    r"(?P<sign>[+-])(?P<off_h>\d{2})(?P<off_m>\d{2})",
    re.ASCII,
)

_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", "n": "\n", "r": "\r"}


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ``YYYY Mon DD HH:MM:SS +ZZZZ``.

    Sub-second precision and sub-minute offsets are dropped.
    """

    offset = moment.utcoffset() or timedelta(0)
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return (
        f"{moment.year:04d} {_MONTHS[moment.month - 1]} {moment.day:02d} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} "
        f"{sign}{minutes // 60:02d}{minutes % 60:02d}"
    )


def parse_timestamp(raw: str) -> datetime:
    """Inverse of ``format_timestamp``; raises ``ValueError`` on bad input."""

    match = _TIMESTAMP_RE.fullmatch(raw)
    if match is None:
        raise ValueError(f"timestamp {raw!r} does not match '{TIMESTAMP_FORMAT}'")
    month = _MONTH_NUMBERS.get(match["month"])
    if month is None:
        raise ValueError(f"unknown month {match['month']!r}")

    if int(match["off_m"]) > 59:
        raise ValueError(f"utc offset minutes out of range in {raw!r}")
    offset = timedelta(hours=int(match["off_h"]), minutes=int(match["off_m"]))
    if offset >= timedelta(days=1):
        raise ValueError(f"utc offset out of range in {raw!r}")
    if match["sign"] == "-":
        offset = -offset
    tz = timezone.utc if not offset else timezone(offset)

    return datetime(
        int(match["year"]),
        month,
        int(match["day"]),
        int(match["hour"]),
        int(match["minute"]),
        int(match["second"]),
        tzinfo=tz,
    )


def escape_text(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def unescape_text(raw: str) -> str:
    """Undo ``escape_text``; raises ``ValueError`` on a dangling or unknown escape."""

    out: List[str] = []
    chars = iter(raw)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        code = next(chars, None)
        if code is None:
            raise ValueError("dangling backslash at end of line")
        if code not in _UNESCAPES:
            raise ValueError(f"unknown escape sequence '\\{code}'")
        out.append(_UNESCAPES[code])
    return "".join(out)


def serialize(document: Document) -> str:
    lines = [escape_text(document.name)]
    for entry in document:
        for commit in entry.history:
            lines.append(
                f"{format_timestamp(commit.timestamp)}{FIELD_SEPARATOR}"
                f"{escape_text(commit.text)}"
            )
        lines.append(ENTRY_TERMINATOR)
    return "\n".join(lines) + "\n"


def parse(text: str) -> Document:
    """Build a ``Document`` from journal text, raising ``ParseError`` on bad input."""

    with span("codec::parse", component="codec", metadata={"chars": len(text)}):
        return _parse(text)


def _parse(text: str) -> Document:
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    if not lines:
        raise ParseError("missing document name line", line_number=1, source=text)

    lines = [line[:-1] if line.endswith("\r") else line for line in lines]

    try:
        name = unescape_text(lines[0])
    except ValueError as exc:
        raise ParseError(
            str(exc), line_number=1, line=lines[0], source=text
        ) from exc

    document = Document(name=name)
    pending: List[Commit] = []
    for line_number, line in enumerate(lines[1:], start=2):
        if line == ENTRY_TERMINATOR:
            if not pending:
                raise ParseError(
                    "entry terminator without any commits",
                    line_number=line_number,
                    line=line,
                    source=text,
                )
            document.append(Entry.from_commits(pending))
            pending = []
            continue
        if not pending and not line.strip():
            continue
        pending.append(_parse_commit(line, line_number, text))

    if pending:
        raise ParseError(
            f"entry is not terminated by '{ENTRY_TERMINATOR}'",
            line_number=len(lines),
            line=lines[-1],
            source=text,
        )
    return document


def _parse_commit(line: str, line_number: int, source: str) -> Commit:
    raw_timestamp, separator, raw_text = line.partition(FIELD_SEPARATOR)
    if not separator:
        raise ParseError(
            f"commit line has no '{FIELD_SEPARATOR}' delimiter",
            line_number=line_number,
            line=line,
            source=source,
        )
    try:
        timestamp = parse_timestamp(raw_timestamp)
        text = unescape_text(raw_text)
    except ValueError as exc:
        raise ParseError(
            str(exc), line_number=line_number, line=line, source=source
        ) from exc
    return Commit(timestamp=timestamp, text=text)


__all__ = [
    "ENTRY_TERMINATOR",
    "FIELD_SEPARATOR",
    "TIMESTAMP_FORMAT",
    "escape_text",
    "format_timestamp",
    "parse",
    "parse_timestamp",
    "serialize",
    "unescape_text",
]
