from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from dated_diary.journal import (
    Commit,
    Document,
    EmptyHistoryError,
    Entry,
    EntryIndexError,
    JournalError,
)

T1 = datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc)
T2 = T1 + timedelta(hours=5)
T3 = T1 + timedelta(days=2)


def test_commit_is_immutable() -> None:
    commit = Commit(timestamp=T1, text="hello")

    with pytest.raises(dataclasses.FrozenInstanceError):
        commit.text = "changed"  # type: ignore[misc]


def test_commit_requires_aware_timestamp() -> None:
    with pytest.raises(ValueError):
        Commit(timestamp=datetime(2024, 1, 1), text="naive")


def test_commit_create_defaults_to_whole_second_utc() -> None:
    commit = Commit.create("now")

    assert commit.timestamp.tzinfo is not None
    assert commit.timestamp.utcoffset() == timedelta(0)
    assert commit.timestamp.microsecond == 0


def test_commit_create_truncates_explicit_timestamp() -> None:
    commit = Commit.create("late", at=T1.replace(microsecond=500000))

    assert commit.timestamp == T1
    assert commit.timestamp.microsecond == 0


def test_commit_create_moves_sub_minute_offset_to_whole_minutes() -> None:
    odd = timezone(timedelta(hours=5, minutes=30, seconds=20))
    moment = datetime(2024, 1, 1, 12, 0, 0, tzinfo=odd)

    commit = Commit.create("odd zone", at=moment)

    assert commit.timestamp == moment
    assert commit.timestamp.utcoffset() == timedelta(hours=5, minutes=30)


@pytest.mark.parametrize(
    "moment",
    [
        T1.replace(microsecond=1),
        T1.replace(tzinfo=timezone(timedelta(seconds=30))),
    ],
)
def test_commit_rejects_timestamps_the_file_cannot_hold(moment: datetime) -> None:
    with pytest.raises(ValueError):
        Commit(timestamp=moment, text="too precise")


def test_entry_new_with_has_single_commit() -> None:
    entry = Entry.new_with("first", at=T1)

    assert len(entry) == 1
    assert entry.current() == Commit(T1, "first")
    assert entry.created == entry.modified == T1


def test_revise_appends_without_touching_history() -> None:
    entry = Entry.new_with("t1", at=T1)
    first = entry.current()

    entry.revise("t2", at=T2)

    assert len(entry.history) == 2
    assert entry.history[0] is first
    assert entry.history[0] == Commit(T1, "t1")
    assert entry.current().text == "t2"
    assert entry.created == T1
    assert entry.modified == T2


def test_history_is_a_read_only_view() -> None:
    entry = Entry.new_with("only", at=T1)

    history = entry.history
    assert isinstance(history, tuple)
    entry.revise("more", at=T2)
    assert len(history) == 1


@pytest.mark.parametrize("commits", [[], ()])
def test_entry_cannot_be_empty(commits) -> None:
    with pytest.raises(EmptyHistoryError):
        Entry.from_commits(commits)
    with pytest.raises(EmptyHistoryError):
        Entry([])


def test_entry_copies_incoming_commits() -> None:
    source = [Commit(T1, "a")]
    entry = Entry.from_commits(source)

    source.append(Commit(T2, "b"))

    assert len(entry) == 1


def test_document_keeps_creation_order() -> None:
    document = Document(name="journal")

    assert document.add_entry("first", at=T1) == 0
    assert document.add_entry("second", at=T2) == 1
    assert document.add_entry("third", at=T3) == 2

    assert [entry.current().text for entry in document] == ["first", "second", "third"]
    assert len(document) == 3


def test_newest_first_is_a_pure_reversal() -> None:
    document = Document(name="journal")
    for text in ("a", "b", "c"):
        document.add_entry(text, at=T1)

    listed = [(index, entry.current().text) for index, entry in document.newest_first()]

    assert listed == [(2, "c"), (1, "b"), (0, "a")]
    assert [entry.current().text for entry in document.entries] == ["a", "b", "c"]


def test_document_revise_targets_storage_index() -> None:
    document = Document()
    document.add_entry("a", at=T1)
    document.add_entry("b", at=T1)

    commit = document.revise(0, "a2", at=T2)

    assert commit == Commit(T2, "a2")
    assert len(document.entry(0)) == 2
    assert len(document.entry(1)) == 1


@pytest.mark.parametrize("index", [-1, 2, 100])
def test_entry_lookup_out_of_range(index: int) -> None:
    document = Document()
    document.add_entry("a", at=T1)
    document.add_entry("b", at=T1)

    with pytest.raises(EntryIndexError) as excinfo:
        document.entry(index)

    assert excinfo.value.index == index
    assert excinfo.value.size == 2
    assert isinstance(excinfo.value, IndexError)
    assert isinstance(excinfo.value, JournalError)


def test_revise_missing_entry_raises() -> None:
    with pytest.raises(EntryIndexError):
        Document().revise(0, "nothing here")


def test_documents_compare_structurally() -> None:
    left = Document(name="j", _entries=[Entry.new_with("x", at=T1)])
    right = Document(name="j")
    right.add_entry("x", at=T1)

    assert left == right
    right.revise(0, "y", at=T2)
    assert left != right


def test_entry_constructor_requires_a_history() -> None:
    with pytest.raises(TypeError):
        Entry()  # type: ignore[call-arg]
