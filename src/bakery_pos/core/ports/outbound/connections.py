from __future__ import annotations

from typing import Protocol


class Connection(Protocol):
    """A live terminal session as seen by the notifier."""

    @property
    def label(self) -> str: ...

    def is_ready(self) -> bool: ...

    def send(self, message: str) -> None:
        """Hands ``message`` to the transport without waiting for delivery."""
        ...
