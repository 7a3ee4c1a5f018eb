"""Editable text buffer used while composing or revising an entry."""

from .gap_buffer import GAP_GROWTH, EditBuffer
from .words import CharKind, char_kind, next_word_start, prev_word_start

__all__ = [
    "EditBuffer",
    "GAP_GROWTH",
    "CharKind",
    "char_kind",
    "next_word_start",
    "prev_word_start",
]
