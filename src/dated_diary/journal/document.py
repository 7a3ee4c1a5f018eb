"""The journal document: a name plus entries in creation order."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from os import PathLike
from typing import Iterator, List, Optional, Tuple, Union

from .commit import Commit
from .entry import Entry
from .errors import EntryIndexError

PathArg = Union[str, "PathLike[str]"]


@dataclass(slots=True)
class Document:
    """Entries are stored oldest first and addressed by that index.

    Showing newest entries first is a read-time concern; use
    ``newest_first`` rather than inverting indices by hand.
    """

    name: str = ""
    _entries: List[Entry] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._entries = list(self._entries)

    @property
    def entries(self) -> Tuple[Entry, ...]:
        return tuple(self._entries)

    def append(self, entry: Entry) -> int:
        self._entries.append(entry)
        return len(self._entries) - 1

    def add_entry(self, text: str, *, at: Optional[datetime] = None) -> int:
        """Start a new entry with ``text`` and return its index."""

        return self.append(Entry.new_with(text, at=at))

    def entry(self, index: int) -> Entry:
        if not 0 <= index < len(self._entries):
            raise EntryIndexError(index, len(self._entries))
        return self._entries[index]

    def revise(
        self, index: int, text: str, *, at: Optional[datetime] = None
    ) -> Commit:
        return self.entry(index).revise(text, at=at)

    def newest_first(self) -> Iterator[Tuple[int, Entry]]:
        """Yield ``(index, entry)`` pairs from the newest entry back."""

        for index in range(len(self._entries) - 1, -1, -1):
            yield index, self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    @classmethod
    def load(cls, path: PathArg) -> "Document":
        from .storage import load_document

        return load_document(path)

    def save(self, path: PathArg) -> None:
        from .storage import save_document

        save_document(self, path)


__all__ = ["Document", "PathArg"]
