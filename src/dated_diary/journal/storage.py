"""Reading and writing journal files."""

from __future__ import annotations

from pathlib import Path

from dated_diary.runtime import telemetry

from .codec import parse, serialize
from .document import Document, PathArg
from .errors import LoadError, SaveError

ENCODING = "utf-8"


def load_document(path: PathArg) -> Document:
    """Read and parse the journal at ``path``.

    Raises ``LoadError`` when the file cannot be read or decoded and
    ``ParseError`` when its contents are malformed.
    """

    target = Path(path)
    with telemetry.span(
        "storage::load", component="storage", metadata={"path": target}
    ):
        try:
            # newline="" keeps "\r" visible to the codec instead of translating it.
            with target.open("r", encoding=ENCODING, newline="") as handle:
                text = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise LoadError(target, str(exc)) from exc
        document = parse(text)

    telemetry.record_event(
        "document.load",
        data={"path": target, "name": document.name, "entries": len(document)},
    )
    return document


def save_document(document: Document, path: PathArg) -> None:
    """Serialize ``document`` and write it to ``path``, raising ``SaveError``."""

    target = Path(path)
    text = serialize(document)
    with telemetry.span(
        "storage::save", component="storage", metadata={"path": target}
    ):
        try:
            with target.open("w", encoding=ENCODING, newline="") as handle:
                handle.write(text)
        except OSError as exc:
            raise SaveError(target, str(exc)) from exc

    telemetry.record_event(
        "document.save",
        data={"path": target, "entries": len(document), "bytes": len(text)},
    )


__all__ = ["load_document", "save_document"]
