"""Textual front end; the controller is importable without a terminal."""

from .controller import (
    HELP_SECTIONS,
    DiaryController,
    DiaryUIHooks,
    EntryView,
    InputView,
    KeyInput,
)

__all__ = [
    "HELP_SECTIONS",
    "DiaryController",
    "DiaryUIHooks",
    "EntryView",
    "InputView",
    "KeyInput",
]
