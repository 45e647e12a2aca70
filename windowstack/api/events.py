"""Public event bus API contracts and window lifecycle events."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from windowstack.api.windows import WindowView

TEvent = TypeVar("TEvent")


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


class EventBus(Protocol):
    """Public in-process pub/sub contract."""

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Subscribe handler for event type."""

    def unsubscribe(self, subscription: Subscription) -> None:
        """Unsubscribe token."""

    def publish(self, event: object) -> int:
        """Publish event and return invocation count."""


@dataclass(frozen=True, slots=True)
class WindowEvent:
    """Base shape for every event that concerns one window."""

    window: WindowView


@dataclass(frozen=True, slots=True)
class WindowCreated(WindowEvent):
    pass


@dataclass(frozen=True, slots=True)
class WindowOpened(WindowEvent):
    pass


@dataclass(frozen=True, slots=True)
class WindowShown(WindowEvent):
    pass


@dataclass(frozen=True, slots=True)
class WindowHidden(WindowEvent):
    pass


@dataclass(frozen=True, slots=True)
class WindowClosed(WindowEvent):
    pass


@dataclass(frozen=True, slots=True)
class WindowFocused(WindowEvent):
    pass


@dataclass(frozen=True, slots=True)
class WindowBacked(WindowEvent):
    pass


@dataclass(frozen=True, slots=True)
class WindowFocusChanged(WindowEvent):
    """Window-level event published when the focus flag flips."""

    focused: bool


@dataclass(frozen=True, slots=True)
class AllWindowsClosed:
    """Published once after `close_all` processed every stack entry."""


def create_event_bus() -> EventBus:
    """Create default event bus implementation."""
    from windowstack.runtime.events import RuntimeEventBus

    return RuntimeEventBus()
