"""Caller-owned progress reporting."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

Listener = Callable[[Optional[str]], None]


class ProgressContext:
    """Tracks active loading states and tells a listener what to show.

    The listener receives the message of the most recently started state that
    is still active, or ``None`` once everything has finished.
    """

    def __init__(self, listener: Optional[Listener] = None):
        self._listener = listener
        self._states: dict[str, str] = {}

    @property
    def active(self) -> bool:
        return bool(self._states)

    @property
    def message(self) -> Optional[str]:
        if not self._states:
            return None
        return next(reversed(self._states.values()))

    def start(self, key: str, message: str) -> None:
        self._states.pop(key, None)
        self._states[key] = message
        self._notify()

    def finish(self, key: str) -> None:
        self._states.pop(key, None)
        self._notify()

    @contextmanager
    def track(self, key: str, message: str) -> Iterator[None]:
        self.start(key, message)
        try:
            yield
        finally:
            self.finish(key)

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener(self.message)
