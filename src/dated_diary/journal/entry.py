"""Journal entries: append-only commit histories."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from .commit import Commit
from .errors import EmptyHistoryError


@dataclass(slots=True)
class Entry:
    """One journal item and every revision it has been through.

    An entry always holds at least one commit; construction with an empty
    history raises ``EmptyHistoryError``. Commits are only ever appended.
    """

    _history: List[Commit]

    def __post_init__(self) -> None:
        self._history = list(self._history)
        if not self._history:
            raise EmptyHistoryError("An entry needs at least one commit")

    @classmethod
    def new_with(cls, text: str, *, at: Optional[datetime] = None) -> "Entry":
        return cls([Commit.create(text, at=at)])

    @classmethod
    def from_commits(cls, commits: Iterable[Commit]) -> "Entry":
        return cls(list(commits))

    def revise(self, text: str, *, at: Optional[datetime] = None) -> Commit:
        commit = Commit.create(text, at=at)
        self._history.append(commit)
        return commit

    def current(self) -> Commit:
        return self._history[-1]

    @property
    def history(self) -> Tuple[Commit, ...]:
        return tuple(self._history)

    @property
    def created(self) -> datetime:
        return self._history[0].timestamp

    @property
    def modified(self) -> datetime:
        return self._history[-1].timestamp

    def __len__(self) -> int:
        return len(self._history)


__all__ = ["Entry"]
