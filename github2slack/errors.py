"""Error types raised by the notifier core."""

from __future__ import annotations


class MalformedPayloadError(ValueError):
    """A recognized event is missing a field its message needs."""

    def __init__(self, path: str, reason: str = "missing") -> None:
        self.path = path
        super().__init__(f"payload field {path!r} is {reason}")


class TableError(ValueError):
    """A mention or channel table file has the wrong shape."""
