from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from dated_diary.adapters.textual import (
    HELP_SECTIONS,
    DiaryController,
    DiaryUIHooks,
    EntryView,
    InputView,
)
from dated_diary.journal import Document, load_document
from dated_diary.session import EditorMode, EditSession


class Recorder:
    def __init__(self) -> None:
        self.entries: List[Sequence[EntryView]] = []
        self.inputs: List[InputView] = []
        self.statuses: List[str] = []
        self.help: List[bool] = []

    def hooks(self) -> DiaryUIHooks:
        return DiaryUIHooks(
            update_entries=self.entries.append,
            update_input=self.inputs.append,
            update_status=self.statuses.append,
            update_help=self.help.append,
        )


def make_controller(
    path: Optional[Path] = None,
) -> tuple[DiaryController, Recorder]:
    recorder = Recorder()
    session = EditSession(Document(name="test"), path=path)
    return DiaryController(session, recorder.hooks()), recorder


def type_text(controller: DiaryController, text: str) -> None:
    for ch in text:
        controller.handle_key(ch, text=ch)


def write_entries(controller: DiaryController, *texts: str) -> None:
    controller.handle_key("i", text="i")
    for text in texts:
        type_text(controller, text)
        controller.handle_key("ENTER")
    controller.handle_key("ESC")


def test_controller_publishes_initial_state() -> None:
    _controller, recorder = make_controller()

    assert recorder.entries == [[]]
    assert recorder.inputs[-1].mode is EditorMode.NORMAL


def test_writing_entries_through_keys() -> None:
    controller, recorder = make_controller()

    controller.handle_key("i", text="i")
    type_text(controller, "helo")
    controller.handle_key("LEFT")
    type_text(controller, "l")
    status = controller.handle_key("ENTER")

    assert status == "added entry 1"
    assert controller.session.document.entry(0).current().text == "hello"
    assert recorder.inputs[-1].mode is EditorMode.WRITING
    assert recorder.inputs[-1].text == ""


def test_entries_are_listed_newest_first() -> None:
    controller, recorder = make_controller()

    write_entries(controller, "one", "two", "three")

    latest = recorder.entries[-1]
    assert [view.text for view in latest] == ["three", "two", "one"]
    assert [view.index for view in latest] == [2, 1, 0]


def test_revising_selected_entry_uses_storage_index() -> None:
    controller, recorder = make_controller()
    write_entries(controller, "one", "two", "three")

    controller.handle_key("DOWN")
    controller.handle_key("DOWN")
    assert [view.selected for view in recorder.entries[-1]] == [False, True, False]

    status = controller.handle_key("e", text="e")
    assert status == "revising entry 2"
    assert recorder.inputs[-1].text == "two"

    type_text(controller, "!")
    assert controller.handle_key("ENTER") == "revised entry 2"

    entry = controller.session.document.entry(1)
    assert [commit.text for commit in entry.history] == ["two", "two!"]
    assert controller.session.mode is EditorMode.NORMAL
    assert controller.selected is None


def test_selection_stops_at_oldest_and_clears_past_newest() -> None:
    controller, _recorder = make_controller()
    write_entries(controller, "a", "b")

    for _ in range(5):
        controller.handle_key("DOWN")
    assert controller.selected == 1

    controller.handle_key("UP")
    controller.handle_key("UP")
    assert controller.selected is None


def test_edit_without_selection_starts_new_entry() -> None:
    controller, _recorder = make_controller()

    assert controller.handle_key("e", text="e") == "writing"
    assert controller.session.mode is EditorMode.WRITING


def test_escape_cancels_revision() -> None:
    controller, _recorder = make_controller()
    write_entries(controller, "keep me")
    controller.handle_key("DOWN")
    controller.handle_key("e", text="e")
    type_text(controller, " not")

    assert controller.handle_key("ESC") == "cancelled"
    assert len(controller.session.document.entry(0)) == 1


def test_cursor_keys_edit_the_draft() -> None:
    controller, recorder = make_controller()
    controller.handle_key("i", text="i")
    type_text(controller, "one two three")

    controller.handle_key("LEFT", modifiers=("ctrl",))
    controller.handle_key("BACKSPACE")
    controller.handle_key("HOME")
    controller.handle_key("DELETE")
    controller.handle_key("END")
    type_text(controller, ".")

    assert recorder.inputs[-1].text == "ne twothree."
    assert recorder.inputs[-1].cursor == len("ne twothree.")


def test_non_printable_text_is_ignored() -> None:
    controller, recorder = make_controller()
    controller.handle_key("i", text="i")

    controller.handle_key("TAB", text="\t")

    assert recorder.inputs[-1].text == ""


def test_empty_commit_reports_nothing() -> None:
    controller, _recorder = make_controller()
    controller.handle_key("i", text="i")

    assert controller.handle_key("ENTER") == "nothing to commit"
    assert len(controller.session.document) == 0


def test_save_writes_file(tmp_path: Path) -> None:
    path = tmp_path / "diary.txt"
    controller, recorder = make_controller(path)
    write_entries(controller, "saved entry")

    status = controller.handle_key("w", text="w")

    assert status == f"saved {path}"
    assert recorder.statuses[-1] == status
    assert load_document(path).entry(0).current().text == "saved entry"


def test_save_without_path_reports_error() -> None:
    controller, _recorder = make_controller()

    status = controller.handle_key("w", text="w")

    assert status.startswith("error:")


def test_quit_with_unsaved_changes_needs_confirmation() -> None:
    controller, _recorder = make_controller()
    write_entries(controller, "unsaved")

    controller.handle_key("q", text="q")
    assert controller.quit_requested is False

    controller.handle_key("q", text="q")
    assert controller.quit_requested is True


def test_quit_when_clean_is_immediate() -> None:
    controller, _recorder = make_controller()

    controller.handle_key("q", text="q")

    assert controller.quit_requested is True


def test_help_opens_from_normal_mode_and_any_key_closes_it() -> None:
    controller, recorder = make_controller()
    write_entries(controller, "one")

    status = controller.handle_key("?", text="?")
    assert status == "help: press any key to return"
    assert controller.help_visible is True

    controller.handle_key("i", text="i")

    assert recorder.help == [True, False]
    assert controller.help_visible is False
    assert controller.session.mode is EditorMode.NORMAL


def test_question_mark_while_writing_is_text() -> None:
    controller, recorder = make_controller()
    controller.handle_key("i", text="i")

    controller.handle_key("?", text="?")

    assert recorder.help == []
    assert recorder.inputs[-1].text == "?"


def test_help_table_lists_every_normal_mode_key() -> None:
    normal = dict(HELP_SECTIONS)["NORMAL"]

    assert [key for key, _ in normal][:4] == ["i", "e", "w", "q"]
