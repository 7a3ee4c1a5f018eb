"""Personal journal with append-only entry revisions."""

__all__ = [
    "adapters",
    "buffer",
    "journal",
    "runtime",
    "session",
]

__version__ = "0.1.0"
