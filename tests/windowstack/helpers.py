from __future__ import annotations

from dataclasses import dataclass, field

from windowstack.api.events import AllWindowsClosed, WindowEvent
from windowstack.runtime.config import WindowStackConfig
from windowstack.runtime.coroutines import CoroutineRunner
from windowstack.runtime.events import RuntimeEventBus
from windowstack.runtime.layers import (
    HeadlessCanvasGroup,
    HeadlessInputBlocker,
    HeadlessLayerProvider,
    HeadlessSelection,
)
from windowstack.runtime.registry import WindowRegistry, WindowTemplate
from windowstack.runtime.window_manager import WindowManager


class Control:
    """Weak-referenceable stand-in for an interactive control."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Control({self.name!r})"


class FakeAnimator:
    def __init__(self, length: float = 0.5) -> None:
        self.length = length
        self.in_transition = False
        self.calls: list[str] = []

    def play_open_animation(self) -> None:
        self.calls.append("open")

    def play_close_animation(self) -> None:
        self.calls.append("close")

    def is_in_transition(self, layer_index: int) -> bool:
        return self.in_transition

    def state_length(self, layer_index: int) -> float:
        return self.length

    def skip_to_end(self, layer_index: int) -> None:
        self.calls.append("skip_to_end")


class FakeAnimationBackend:
    def __init__(self, animators: dict[str, FakeAnimator] | None = None) -> None:
        self.animators = dict(animators or {})

    def animator_for(self, kind: str) -> FakeAnimator | None:
        return self.animators.get(kind)


class EventRecorder:
    """Collects window lifecycle events as `(event name, kind)` pairs."""

    def __init__(self, bus: RuntimeEventBus) -> None:
        self.events: list[object] = []
        bus.subscribe(WindowEvent, self.events.append)
        bus.subscribe(AllWindowsClosed, self.events.append)

    def names(self, *event_types: type[object]) -> list[tuple[str, str | None]]:
        result: list[tuple[str, str | None]] = []
        for event in self.events:
            if event_types and not isinstance(event, event_types):
                continue
            kind = event.window.kind if isinstance(event, WindowEvent) else None
            result.append((type(event).__name__, kind))
        return result

    def clear(self) -> None:
        self.events.clear()


@dataclass(slots=True)
class Harness:
    manager: WindowManager
    runner: CoroutineRunner
    layers: HeadlessLayerProvider
    selection: HeadlessSelection
    blocker: HeadlessInputBlocker
    canvas: HeadlessCanvasGroup
    recorder: EventRecorder
    animations: FakeAnimationBackend = field(default_factory=FakeAnimationBackend)

    def open(self, kind: str, animate: bool = False):
        window = self.manager.create(kind)
        assert window is not None
        self.manager.open(window, animate=animate)
        return window

    def kinds(self) -> list[str]:
        return [window.kind for window in self.manager.windows]

    def focused_count(self) -> int:
        return sum(1 for window in self.manager.windows if window.is_focused)


def build_harness(
    *templates: WindowTemplate,
    animators: dict[str, FakeAnimator] | None = None,
    config: WindowStackConfig | None = None,
) -> Harness:
    runner = CoroutineRunner()
    layers = HeadlessLayerProvider()
    selection = HeadlessSelection()
    blocker = HeadlessInputBlocker()
    canvas = HeadlessCanvasGroup()
    animations = FakeAnimationBackend(animators)
    events = RuntimeEventBus()
    recorder = EventRecorder(events)
    manager = WindowManager(
        registry=WindowRegistry(templates),
        runner=runner,
        layers=layers,
        selection=selection,
        animations=animations,
        input_blocker=blocker,
        canvas=canvas,
        events=events,
        config=config,
    )
    return Harness(
        manager=manager,
        runner=runner,
        layers=layers,
        selection=selection,
        blocker=blocker,
        canvas=canvas,
        recorder=recorder,
        animations=animations,
    )


class FakeSurface:
    def __init__(self) -> None:
        self.active: bool | None = None
        self.interactable: bool | None = None

    def set_active(self, active: bool) -> None:
        self.active = active

    def set_interactable(self, interactable: bool) -> None:
        self.interactable = interactable
