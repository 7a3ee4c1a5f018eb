"""UI-agnostic controller turning key presses into session operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from dated_diary.journal import EntryIndexError, JournalError
from dated_diary.runtime import telemetry
from dated_diary.session import EditorMode, EditSession


HELP_SECTIONS: Tuple[Tuple[str, Tuple[Tuple[str, str], ...]], ...] = (
    (
        "NORMAL",
        (
            ("i", "write a new entry"),
            ("e", "revise the selected entry"),
            ("w", "save"),
            ("q", "quit"),
            ("Up/Down", "select an entry"),
            ("Esc", "clear the selection"),
            ("?", "this help"),
        ),
    ),
    (
        "WRITE/REVISE",
        (
            ("Enter", "commit the draft"),
            ("Esc", "discard the draft"),
            ("Ctrl+Left/Right", "move by word"),
            ("Home/End", "start or end of the draft"),
        ),
    ),
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class KeyInput:
    """Normalized key event."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class EntryView:
    index: int
    text: str
    created: datetime
    modified: datetime
    revisions: int
    selected: bool = False


@dataclass(slots=True)
class InputView:
    mode: EditorMode
    text: str
    cursor: int


@dataclass(slots=True)
class DiaryUIHooks:
    """Callbacks the controller uses to push state into widgets."""

    update_entries: Callable[[Sequence[EntryView]], None]
    update_input: Callable[[InputView], None] = _noop
    update_status: Callable[[str], None] = _noop
    update_help: Callable[[bool], None] = _noop
    log: Callable[[str], None] = _noop


class DiaryController:
    """Routes keys by editor mode, mirroring a modal terminal diary.

    Entries are listed newest first. ``selected`` is a position in that
    list, not a storage index.
    """

    def __init__(self, session: EditSession, hooks: DiaryUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self.selected: Optional[int] = None
        self.quit_requested = False
        self._quit_armed = False
        self.help_visible = False
        self._refresh()

    def handle_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> str:
        """Dispatch one key and return the status line it produced."""

        event = KeyInput(
            key=key, text=text, modifiers=tuple(str(m).upper() for m in modifiers)
        )
        self.hooks.log(f"key -> {event.key!r} mode={self.session.mode.value}")
        if self.help_visible:
            status = self._dismiss_help()
        elif self.session.mode is EditorMode.NORMAL:
            status = self._handle_normal(event)
        else:
            status = self._handle_typing(event)
        if status:
            self.hooks.update_status(status)
        self._refresh()
        return status

    def idle(self) -> None:
        self.session.idle()

    def _handle_normal(self, event: KeyInput) -> str:
        if event.key != "q":
            self._quit_armed = False

        if event.key == "i":
            self.selected = None
            self.session.begin_entry()
            return "writing"
        if event.key == "e":
            return self._begin_revision()
        if event.key == "w":
            return self._save()
        if event.key == "q":
            return self._request_quit()
        if event.key == "?":
            self.help_visible = True
            self.hooks.update_help(True)
            return "help: press any key to return"
        if event.key == "UP":
            self._select_newer()
        elif event.key == "DOWN":
            self._select_older()
        elif event.key == "ESC":
            self.selected = None
        return ""

    def _handle_typing(self, event: KeyInput) -> str:
        buffer = self.session.buffer
        if buffer is None:  # pragma: no cover - session keeps these in step
            self.session.cancel()
            return "normal"

        key = event.key
        word = "CTRL" in event.modifiers
        if key == "ENTER":
            mode = self.session.mode
            index = self.session.commit()
            if index is None:
                return "nothing to commit"
            verb = "revised" if mode is EditorMode.EDITING else "added"
            return f"{verb} entry {index + 1}"
        if key == "ESC":
            self.session.cancel()
            return "cancelled"
        if key == "BACKSPACE":
            buffer.delete_before()
        elif key == "DELETE":
            buffer.delete_after()
        elif key == "LEFT" and word:
            buffer.move_word_left()
        elif key == "LEFT":
            buffer.move_left()
        elif key == "RIGHT" and word:
            buffer.move_word_right()
        elif key == "RIGHT":
            buffer.move_right()
        elif key == "HOME":
            buffer.move_home()
        elif key == "END":
            buffer.move_end()
        elif event.text and event.text.isprintable():
            buffer.insert(event.text)
        return ""

    def _begin_revision(self) -> str:
        if self.selected is None:
            self.session.begin_entry()
            return "writing"
        try:
            index = self._storage_index(self.selected)
            self.session.begin_revision(index)
        except EntryIndexError as exc:
            self.selected = None
            return f"error: {exc}"
        self.selected = None
        return f"revising entry {index + 1}"

    def _save(self) -> str:
        try:
            path = self.session.save()
        except (JournalError, ValueError) as exc:
            telemetry.record_event(
                "ui.save_failed", level="warning", data={"reason": str(exc)}
            )
            return f"error: {exc}"
        return f"saved {path}"

    def _dismiss_help(self) -> str:
        self.help_visible = False
        self.hooks.update_help(False)
        return "normal"

    def _request_quit(self) -> str:
        if self.session.dirty and not self._quit_armed:
            self._quit_armed = True
            return "unsaved changes: w to save, q again to quit"
        self.quit_requested = True
        return "quit"

    def _storage_index(self, position: int) -> int:
        for shown, (index, _entry) in enumerate(self.session.document.newest_first()):
            if shown == position:
                return index
        raise EntryIndexError(position, len(self.session.document))

    def _select_older(self) -> None:
        count = len(self.session.document)
        if count == 0:
            self.selected = None
        elif self.selected is None:
            self.selected = 0
        else:
            self.selected = min(self.selected + 1, count - 1)

    def _select_newer(self) -> None:
        if self.selected is None or self.selected == 0:
            self.selected = None
        else:
            self.selected -= 1

    def entry_views(self) -> List[EntryView]:
        views = []
        for shown, (index, entry) in enumerate(self.session.document.newest_first()):
            views.append(
                EntryView(
                    index=index,
                    text=entry.current().text,
                    created=entry.created,
                    modified=entry.modified,
                    revisions=len(entry),
                    selected=shown == self.selected,
                )
            )
        return views

    def input_view(self) -> InputView:
        buffer = self.session.buffer
        return InputView(
            mode=self.session.mode,
            text=self.session.draft,
            cursor=buffer.cursor if buffer is not None else 0,
        )

    def _refresh(self) -> None:
        self.hooks.update_entries(self.entry_views())
        self.hooks.update_input(self.input_view())


__all__ = [
    "HELP_SECTIONS",
    "DiaryController",
    "DiaryUIHooks",
    "EntryView",
    "InputView",
    "KeyInput",
]
