"""Editing session state machine."""

from .editor import EditorMode, EditSession

__all__ = ["EditorMode", "EditSession"]
