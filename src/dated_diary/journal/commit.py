"""Immutable timestamped snapshots of an entry's text."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional


def now() -> datetime:
    """Current UTC time at the file format's one-second resolution."""

    return datetime.now(timezone.utc).replace(microsecond=0)


def _offset_seconds(moment: datetime) -> int:
    offset = moment.utcoffset()
    return int(offset.total_seconds()) if offset is not None else 0


def to_file_resolution(moment: datetime) -> datetime:
    """Drop sub-second precision and move onto a whole-minute UTC offset.

    The instant is kept when the offset changes; only the wall-clock
    rendering moves.
    """

    moment = moment.replace(microsecond=0)
    seconds = _offset_seconds(moment)
    if seconds % 60:
        minutes = abs(seconds) // 60
        whole = timedelta(minutes=minutes if seconds > 0 else -minutes)
        moment = moment.astimezone(timezone(whole))
    return moment


@dataclass(frozen=True, slots=True)
class Commit:
    timestamp: datetime
    text: str

    def __post_init__(self) -> None:
        if self.timestamp.tzinfo is None:
            raise ValueError("Commit timestamps must be timezone-aware")
        if self.timestamp.microsecond or _offset_seconds(self.timestamp) % 60:
            raise ValueError(
                "Commit timestamps must be whole seconds with a whole-minute "
                "offset; use Commit.create to normalise them"
            )

    @classmethod
    def create(cls, text: str, *, at: Optional[datetime] = None) -> "Commit":
        moment = now() if at is None else to_file_resolution(at)
        return cls(timestamp=moment, text=text)


__all__ = ["Commit", "now", "to_file_resolution"]
