"""Public window lifecycle contracts."""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class WindowCategory(Enum):
    """Visual layer a window attaches to."""

    NORMAL = "normal"
    MODAL = "modal"


class WindowState(Enum):
    """Visual sub-lifecycle of one window."""

    CREATED = "created"
    SHOWING = "showing"
    SHOWN = "shown"
    HIDING = "hiding"
    HIDDEN = "hidden"
    CLOSED = "closed"


class TransitionState(Enum):
    """Animated phase a window is currently in."""

    NONE = "none"
    OPENING = "opening"
    CLOSING = "closing"


class WindowView(Protocol):
    """Read-only window surface carried by lifecycle events."""

    @property
    def kind(self) -> str: ...

    @property
    def category(self) -> WindowCategory: ...

    @property
    def hide_other(self) -> bool: ...

    @property
    def state(self) -> WindowState: ...

    @property
    def is_hidden(self) -> bool: ...

    @property
    def is_focused(self) -> bool: ...

    @property
    def is_in_transition(self) -> bool: ...
