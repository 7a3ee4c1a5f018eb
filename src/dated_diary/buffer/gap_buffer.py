"""Gap buffer holding the text of the entry currently being composed."""

from __future__ import annotations

from typing import List

from dated_diary.runtime import telemetry

from .words import next_word_start, prev_word_start

GAP_GROWTH = 256
# Below this many steps, home/end walk the gap; above it they rebuild the slots.
JUMP_THRESHOLD = 100
# shrink() only compacts once the gap is this many growth blocks wide.
SHRINK_FACTOR = 4

_FILL = " "


class EditBuffer:
    """Mutable text with a cursor, stored as slots around a movable gap.

    The gap is the inclusive slot range ``[gap_start, gap_end]``; its contents
    are garbage. The logical text is everything before ``gap_start`` followed
    by everything after ``gap_end``, and the cursor sits at ``gap_start``.
    The gap is never empty, so an insert always has a free slot.

    Every operation is total: moving or deleting past either end of the
    text is a no-op.
    """

    def __init__(self, *, growth: int = GAP_GROWTH) -> None:
        if growth < 1:
            raise ValueError("growth must be positive")
        self._growth = growth
        self._slots: List[str] = [_FILL] * growth
        self._gap_start = 0
        self._gap_end = growth - 1

    @classmethod
    def from_text(cls, text: str, *, growth: int = GAP_GROWTH) -> "EditBuffer":
        """Return a buffer holding ``text`` with the cursor at its end."""

        buffer = cls(growth=growth)
        buffer._slots = list(text) + [_FILL] * growth
        buffer._gap_start = len(text)
        buffer._gap_end = len(text) + growth - 1
        return buffer

    @property
    def cursor(self) -> int:
        return self._gap_start

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def _gap_len(self) -> int:
        return self._gap_end - self._gap_start + 1

    def _post_gap_len(self) -> int:
        return len(self._slots) - 1 - self._gap_end

    def __len__(self) -> int:
        return len(self._slots) - self._gap_len()

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"EditBuffer(text={self.to_text()!r}, cursor={self._gap_start})"

    def to_text(self) -> str:
        return "".join(self._slots[: self._gap_start]) + "".join(
            self._slots[self._gap_end + 1 :]
        )

    def insert(self, ch: str) -> None:
        """Insert ``ch`` before the cursor; longer strings go in one by one."""

        for char in ch:
            self._slots[self._gap_start] = char
            self._gap_start += 1
            if self._gap_start > self._gap_end:
                self._grow()

    def delete_before(self) -> None:
        if self._gap_start > 0:
            self._gap_start -= 1

    def delete_after(self) -> None:
        if self._gap_end < len(self._slots) - 1:
            self._gap_end += 1

    def move_left(self) -> None:
        if self._gap_start > 0:
            self._slots[self._gap_end] = self._slots[self._gap_start - 1]
            self._gap_start -= 1
            self._gap_end -= 1

    def move_right(self) -> None:
        if self._gap_end < len(self._slots) - 1:
            self._slots[self._gap_start] = self._slots[self._gap_end + 1]
            self._gap_start += 1
            self._gap_end += 1

    def move_home(self) -> None:
        if self._gap_start < JUMP_THRESHOLD:
            for _ in range(self._gap_start):
                self.move_left()
            return
        before = self._slots[: self._gap_start]
        gap = self._slots[self._gap_start : self._gap_end + 1]
        after = self._slots[self._gap_end + 1 :]
        self._slots = gap + before + after
        self._gap_start = 0
        self._gap_end = len(gap) - 1

    def move_end(self) -> None:
        remaining = self._post_gap_len()
        if remaining < JUMP_THRESHOLD:
            for _ in range(remaining):
                self.move_right()
            return
        before = self._slots[: self._gap_start]
        gap = self._slots[self._gap_start : self._gap_end + 1]
        after = self._slots[self._gap_end + 1 :]
        self._slots = before + after + gap
        self._gap_start = len(before) + len(after)
        self._gap_end = len(self._slots) - 1

    def move_word_left(self) -> None:
        target = prev_word_start(self.to_text(), self._gap_start)
        for _ in range(self._gap_start - target):
            self.move_left()

    def move_word_right(self) -> None:
        target = next_word_start(self.to_text(), self._gap_start)
        for _ in range(target - self._gap_start):
            self.move_right()

    def clear(self) -> None:
        self._slots = [_FILL] * self._growth
        self._gap_start = 0
        self._gap_end = self._growth - 1

    def trim_trailing_whitespace(self) -> None:
        """Drop whitespace from the logical end of the text.

        Trailing slots after the gap are cut off the end of the slot list;
        once those run out, whitespace just before the gap is absorbed into
        it.
        """

        while self._gap_end < len(self._slots) - 1:
            if not self._slots[-1].isspace():
                return
            self._slots.pop()
        while self._gap_start > 0 and self._slots[self._gap_start - 1].isspace():
            self._gap_start -= 1

    def shrink(self) -> bool:
        """Compact an oversized gap back to one growth block.

        Only call this between edits (e.g. from an idle timer). Returns
        whether anything was reclaimed.
        """

        gap_len = self._gap_len()
        if gap_len <= SHRINK_FACTOR * self._growth:
            return False
        del self._slots[self._gap_start + self._growth : self._gap_end + 1]
        self._gap_end = self._gap_start + self._growth - 1
        telemetry.record_event(
            "buffer.shrink",
            level="debug",
            data={"reclaimed": gap_len - self._growth, "capacity": len(self._slots)},
        )
        return True

    def _grow(self) -> None:
        # Called right after the gap closed, so the new block lands at the cursor.
        self._slots[self._gap_start : self._gap_start] = [_FILL] * self._growth
        self._gap_end += self._growth


__all__ = ["EditBuffer", "GAP_GROWTH", "JUMP_THRESHOLD", "SHRINK_FACTOR"]
