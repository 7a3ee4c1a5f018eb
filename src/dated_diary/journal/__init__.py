"""Versioned journal model, its file format, and file I/O."""

from .codec import format_timestamp, parse, parse_timestamp, serialize
from .commit import Commit
from .document import Document
from .entry import Entry
from .errors import (
    EmptyHistoryError,
    EntryIndexError,
    JournalError,
    LoadError,
    ParseError,
    SaveError,
)
from .storage import load_document, save_document

__all__ = [
    "Commit",
    "Entry",
    "Document",
    "serialize",
    "parse",
    "format_timestamp",
    "parse_timestamp",
    "load_document",
    "save_document",
    "JournalError",
    "ParseError",
    "EmptyHistoryError",
    "EntryIndexError",
    "LoadError",
    "SaveError",
]
