from __future__ import annotations

import logging
from dataclasses import dataclass

from windowstack.api.events import WindowClosed, WindowEvent, WindowOpened, create_event_bus
from windowstack.runtime.events import EventBus, RuntimeEventBus
from windowstack.runtime.registry import WindowTemplate
from windowstack.runtime.window import Window


@dataclass(frozen=True, slots=True)
class BaseEvent:
    name: str


@dataclass(frozen=True, slots=True)
class DerivedEvent(BaseEvent):
    code: int


def test_event_bus_publish_invokes_subscribers() -> None:
    bus = EventBus()
    seen: list[str] = []
    bus.subscribe(BaseEvent, lambda event: seen.append(event.name))

    invoked = bus.publish(BaseEvent(name="hello"))

    assert invoked == 1
    assert seen == ["hello"]


def test_event_bus_supports_polymorphic_subscription() -> None:
    bus = EventBus()
    seen: list[str] = []
    bus.subscribe(BaseEvent, lambda event: seen.append(event.name))

    invoked = bus.publish(DerivedEvent(name="child", code=42))

    assert invoked == 1
    assert seen == ["child"]


def test_event_bus_unsubscribe_stops_dispatch() -> None:
    bus = EventBus()
    seen: list[str] = []
    subscription = bus.subscribe(BaseEvent, lambda event: seen.append(event.name))
    bus.unsubscribe(subscription)

    invoked = bus.publish(BaseEvent(name="ignored"))

    assert invoked == 0
    assert seen == []
    assert bus.subscription_count == 0


def test_event_bus_window_event_base_receives_every_lifecycle_event() -> None:
    bus = RuntimeEventBus()
    window = Window(WindowTemplate("dialog"))
    seen: list[str] = []
    bus.subscribe(WindowEvent, lambda event: seen.append(type(event).__name__))
    bus.subscribe(WindowClosed, lambda event: seen.append("closed-only"))

    bus.publish(WindowOpened(window))
    bus.publish(WindowClosed(window))

    assert seen == ["WindowOpened", "WindowClosed", "closed-only"]


def test_event_bus_handler_subscribing_during_publish_waits_for_next_event() -> None:
    bus = RuntimeEventBus()
    seen: list[str] = []

    def late(event: BaseEvent) -> None:
        seen.append(f"late:{event.name}")

    def first(event: BaseEvent) -> None:
        seen.append(f"first:{event.name}")
        if len(seen) == 1:
            bus.subscribe(BaseEvent, late)

    bus.subscribe(BaseEvent, first)

    assert bus.publish(BaseEvent(name="a")) == 1
    assert bus.publish(BaseEvent(name="b")) == 2
    assert seen == ["first:a", "first:b", "late:b"]


def test_event_bus_clear_drops_all_subscriptions() -> None:
    bus = RuntimeEventBus()
    bus.subscribe(BaseEvent, lambda event: None)
    bus.subscribe(DerivedEvent, lambda event: None)

    bus.clear()

    assert bus.publish(DerivedEvent(name="x", code=1)) == 0


def test_event_bus_trace_logs_published_type(caplog) -> None:
    bus = RuntimeEventBus(trace=True)

    with caplog.at_level(logging.DEBUG, logger="windowstack.runtime.events"):
        bus.publish(BaseEvent(name="traced"))

    assert "event_publish type=BaseEvent" in caplog.text


def test_create_event_bus_returns_runtime_bus() -> None:
    assert isinstance(create_event_bus(), RuntimeEventBus)
