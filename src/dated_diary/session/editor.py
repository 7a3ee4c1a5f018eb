"""Editing session tying one EditBuffer to one Document."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from dated_diary.buffer import EditBuffer
from dated_diary.journal import Document
from dated_diary.journal.document import PathArg
from dated_diary.runtime import telemetry


class EditorMode(str, Enum):
    NORMAL = "normal"
    WRITING = "writing"
    EDITING = "editing"


class EditSession:
    """Owns the document being worked on and the draft being typed.

    In ``WRITING`` mode the draft becomes a new entry on commit; in
    ``EDITING`` mode it becomes a new commit on ``revision_index``. Nothing
    reaches the document until ``commit`` succeeds, so ``cancel`` can always
    drop the draft.
    """

    def __init__(
        self,
        document: Optional[Document] = None,
        *,
        path: Optional[PathArg] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.document = document if document is not None else Document()
        self.path: Optional[Path] = Path(path) if path is not None else None
        self.mode = EditorMode.NORMAL
        self.buffer: Optional[EditBuffer] = None
        self.revision_index: Optional[int] = None
        self.dirty = False
        self._clock = clock

    @classmethod
    def open(
        cls, path: PathArg, *, clock: Optional[Callable[[], datetime]] = None
    ) -> "EditSession":
        """Load the journal at ``path``, or start an empty one if it is missing."""

        target = Path(path)
        if target.exists():
            document = Document.load(target)
        else:
            document = Document(name=target.stem)
        return cls(document, path=target, clock=clock)

    @property
    def draft(self) -> str:
        return self.buffer.to_text() if self.buffer is not None else ""

    def begin_entry(self) -> EditBuffer:
        self.buffer = EditBuffer()
        self.revision_index = None
        self.mode = EditorMode.WRITING
        return self.buffer

    def begin_revision(self, index: int) -> EditBuffer:
        """Start revising entry ``index`` from its current text.

        Raises ``EntryIndexError`` if the entry does not exist; the session is
        left unchanged in that case.
        """

        current = self.document.entry(index).current()
        self.buffer = EditBuffer.from_text(current.text)
        self.revision_index = index
        self.mode = EditorMode.EDITING
        return self.buffer

    def commit(self) -> Optional[int]:
        """Freeze the draft into the document and return the entry index.

        Trailing whitespace is trimmed first. An empty draft commits nothing
        and returns ``None``.
        """

        if self.buffer is None or self.mode is EditorMode.NORMAL:
            return None

        if not self.buffer.to_text().rstrip():
            return None
        self.buffer.trim_trailing_whitespace()
        text = self.buffer.to_text()

        with telemetry.span(
            "session::commit", component="session", metadata={"mode": self.mode.value}
        ):
            at = self._clock() if self._clock else None
            if self.mode is EditorMode.WRITING or self.revision_index is None:
                index = self.document.add_entry(text, at=at)
                self.buffer.clear()
                event = "entry.create"
            else:
                index = self.revision_index
                self.document.revise(index, text, at=at)
                self._leave_editing()
                event = "entry.revise"

        self.dirty = True
        telemetry.record_event(
            event,
            data={"index": index, "revisions": len(self.document.entry(index))},
        )
        return index

    def cancel(self) -> None:
        if self.mode is not EditorMode.NORMAL:
            telemetry.record_event(
                "session.cancel",
                level="debug",
                data={"mode": self.mode.value, "discarded": len(self.draft)},
            )
        self._leave_editing()

    def save(self, path: Optional[PathArg] = None) -> Path:
        """Write the document to ``path`` (or the session path) and return it."""

        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("No path given and the session has no file yet")
        self.document.save(target)
        self.path = target
        self.dirty = False
        return target

    def idle(self) -> None:
        """Maintenance between keystrokes."""

        if self.buffer is not None:
            self.buffer.shrink()

    def _leave_editing(self) -> None:
        self.buffer = None
        self.revision_index = None
        self.mode = EditorMode.NORMAL


__all__ = ["EditorMode", "EditSession"]
