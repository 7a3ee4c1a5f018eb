"""Exceptions raised by the journal model, codec, and file I/O."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class JournalError(RuntimeError):
    """Base class for every error the journal layer raises."""


class ParseError(JournalError):
    """Raised when text does not follow the journal file format.

    ``source`` keeps the complete unparsed input so callers can show it.
    """

    def __init__(
        self,
        message: str,
        *,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
        source: Optional[str] = None,
    ) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line
        self.source = source


class EmptyHistoryError(JournalError):
    """Raised when an entry would be built without any commits."""


class EntryIndexError(JournalError, IndexError):
    """Raised when an entry index does not exist in the document."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"No entry at index {index} (document has {size})")
        self.index = index
        self.size = size


class LoadError(JournalError):
    """Raised when a journal file cannot be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot load {path}: {reason}")
        self.path = path


class SaveError(JournalError):
    """Raised when a journal file cannot be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot save {path}: {reason}")
        self.path = path


__all__ = [
    "JournalError",
    "ParseError",
    "EmptyHistoryError",
    "EntryIndexError",
    "LoadError",
    "SaveError",
]
