"""Window stack error types."""

from __future__ import annotations


class WindowStackError(Exception):
    """Base error for window stack failures."""


class WindowNotFoundError(WindowStackError, LookupError):
    """No live window of the requested kind is in the stack."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"window not found: {kind}")
        self.kind = kind


class WindowDestroyedError(WindowStackError, RuntimeError):
    """A released window was asked to transition."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"window already destroyed: {kind}")
        self.kind = kind
