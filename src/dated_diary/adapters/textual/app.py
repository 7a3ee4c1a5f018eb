"""Textual terminal front end for the diary."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import VerticalScroll
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use dated_diary.adapters.textual.app"
    ) from exc

from dated_diary.journal import JournalError, format_timestamp
from dated_diary.runtime import telemetry
from dated_diary.session import EditorMode, EditSession

from .controller import (
    HELP_SECTIONS,
    DiaryController,
    DiaryUIHooks,
    EntryView,
    InputView,
)

CURSOR_MARK = "▏"


def render_entries(entries: Sequence[EntryView]) -> str:
    if not entries:
        return "(no entries yet: press i to write one)"
    lines = []
    for view in entries:
        marker = ">" if view.selected else " "
        stamp = format_timestamp(view.created)
        if view.revisions > 1:
            stamp += f" (rev {view.revisions}, {format_timestamp(view.modified)})"
        lines.append(f"{marker} {stamp}\n    {view.text}")
    return "\n".join(lines)


def render_input(view: InputView) -> str:
    if view.mode is EditorMode.NORMAL:
        return "-- NORMAL --  i write  e revise  w save  q quit  ? help"
    prefix = "write> " if view.mode is EditorMode.WRITING else "revise> "
    return prefix + view.text[: view.cursor] + CURSOR_MARK + view.text[view.cursor :]


def render_help() -> str:
    lines = ["COMMAND LIST"]
    for title, commands in HELP_SECTIONS:
        lines.append("")
        lines.append(title)
        width = max(len(key) for key, _ in commands)
        for key, description in commands:
            lines.append(f"  {key:<{width}}  {description}")
    lines.append("")
    lines.append("Press any key to move on.")
    return "\n".join(lines)


class DiaryApp(App[None]):
    """Entry list on top, draft line and status line underneath."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#entries {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#input-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#help {
		display: none;
		height: 1fr;
		border: round $accent;
		padding: 1 2;
	}

	#status-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
    ]

    def __init__(self, session: EditSession) -> None:
        super().__init__()
        self.session = session
        self.controller: DiaryController | None = None
        self._entries_widget: Static | None = None
        self._input_widget: Static | None = None
        self._status_widget: Static | None = None
        self._help_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with VerticalScroll(id="entries"):
            self._entries_widget = Static("", markup=False)
            yield self._entries_widget
        self._help_widget = Static(render_help(), id="help", markup=False)
        yield self._help_widget
        self._input_widget = Static("", id="input-line", markup=False)
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._input_widget
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.session.document.name or "dated-diary"
        hooks = DiaryUIHooks(
            update_entries=self._update_entries,
            update_input=self._update_input,
            update_status=self._update_status,
            update_help=self._update_help,
        )
        self.controller = DiaryController(self.session, hooks)
        self.set_interval(5.0, self.controller.idle)

    def on_key(self, event: events.Key) -> None:
        if not self.controller:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.controller.handle_key(key, text=text, modifiers=modifiers)
        event.stop()
        if self.controller.quit_requested:
            self.exit()

    def _update_entries(self, entries: Sequence[EntryView]) -> None:
        if self._entries_widget:
            self._entries_widget.update(render_entries(entries))

    def _update_input(self, view: InputView) -> None:
        if self._input_widget:
            self._input_widget.update(render_input(view))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _update_help(self, visible: bool) -> None:
        if self._help_widget:
            self._help_widget.display = visible

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key == "ctrl+c":
            return None
        if key.startswith("ctrl+") and key[5:] in {"left", "right"}:
            return (key[5:].upper(), None, ("CTRL",))
        if key == "escape":
            return ("ESC", None, ())
        if key in {"enter", "return"}:
            return ("ENTER", None, ())
        if key in {"backspace", "delete", "left", "right", "up", "down", "home", "end"}:
            return (key.upper(), None, ())
        if event.character and event.is_printable:
            return (event.character, event.character, ())
        return None


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Keep a dated diary in the terminal.")
    parser.add_argument(
        "path",
        nargs="?",
        default="diary.txt",
        help="Journal file to open; created on first save (default: diary.txt)",
    )
    parser.add_argument(
        "--name",
        default=None,
        help="Document name to use instead of the one stored in the file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Minimum log level written to the log file",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    # The terminal is owned by Textual, so logs go to the file preset.
    telemetry.configure(preset="production", level=args.log_level)
    try:
        session = EditSession.open(args.path)
    except JournalError as exc:
        raise SystemExit(f"dated-diary: {exc}") from exc
    if args.name is not None:
        session.document.name = args.name
    DiaryApp(session).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
