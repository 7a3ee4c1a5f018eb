"""Character classes and word boundaries for word-wise cursor motions."""

from __future__ import annotations

import string
from enum import Enum
from typing import Sequence

_PUNCTUATION = frozenset(string.punctuation)


class CharKind(Enum):
    WHITESPACE = "whitespace"
    PUNCTUATION = "punctuation"
    OTHER = "other"


def char_kind(ch: str) -> CharKind:
    if ch.isspace():
        return CharKind.WHITESPACE
    if ch in _PUNCTUATION:
        return CharKind.PUNCTUATION
    return CharKind.OTHER


def next_word_start(text: Sequence[str], position: int) -> int:
    """Return the start of the word after ``position``, or ``len(text)``.

    A word is a run of characters of the same non-whitespace kind, so
    ``"foo.bar"`` has three words.
    """

    end = len(text)
    pos = max(0, position)
    if pos >= end:
        return end
    kind = char_kind(text[pos])
    if kind is not CharKind.WHITESPACE:
        while pos < end and char_kind(text[pos]) is kind:
            pos += 1
    while pos < end and char_kind(text[pos]) is CharKind.WHITESPACE:
        pos += 1
    return pos


def prev_word_start(text: Sequence[str], position: int) -> int:
    """Return the start of the word before ``position``, or ``0``."""

    pos = min(position, len(text))
    while pos > 0 and char_kind(text[pos - 1]) is CharKind.WHITESPACE:
        pos -= 1
    if pos == 0:
        return 0
    kind = char_kind(text[pos - 1])
    while pos > 0 and char_kind(text[pos - 1]) is kind:
        pos -= 1
    return pos


__all__ = ["CharKind", "char_kind", "next_word_start", "prev_word_start"]
