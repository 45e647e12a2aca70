"""Window stack composition entry points."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from windowstack.api.ports import (
    AnimationBackend,
    CanvasGroup,
    InputBlocker,
    LayerProvider,
    SelectionPort,
)

if TYPE_CHECKING:
    from windowstack.runtime.config import WindowStackConfig
    from windowstack.runtime.host import WindowStackHost
    from windowstack.runtime.registry import WindowTemplate


def create_window_stack_host(
    templates: Iterable["WindowTemplate"] = (),
    *,
    layers: LayerProvider | None = None,
    selection: SelectionPort | None = None,
    animations: AnimationBackend | None = None,
    input_blocker: InputBlocker | None = None,
    canvas: CanvasGroup | None = None,
    config: "WindowStackConfig | None" = None,
    time_source: Callable[[], float] | None = None,
) -> "WindowStackHost":
    """Compose registry, runner, manager and frame clock.

    Collaborators left as `None` fall back to headless implementations, and
    config falls back to environment-loaded values.
    """
    from windowstack.runtime.config import load_window_stack_config
    from windowstack.runtime.coroutines import CoroutineRunner
    from windowstack.runtime.host import WindowStackHost
    from windowstack.runtime.layers import (
        HeadlessCanvasGroup,
        HeadlessInputBlocker,
        HeadlessLayerProvider,
        HeadlessSelection,
        NoAnimationBackend,
    )
    from windowstack.runtime.logging import setup_logging
    from windowstack.runtime.registry import WindowRegistry
    from windowstack.runtime.time import FrameClock
    from windowstack.runtime.window_manager import WindowManager

    resolved_config = config or load_window_stack_config()
    setup_logging(resolved_config)
    runner = CoroutineRunner()
    manager = WindowManager(
        registry=WindowRegistry(templates),
        runner=runner,
        layers=layers or HeadlessLayerProvider(),
        selection=selection or HeadlessSelection(),
        animations=animations or NoAnimationBackend(),
        input_blocker=input_blocker or HeadlessInputBlocker(),
        canvas=canvas or HeadlessCanvasGroup(),
        config=resolved_config,
    )
    clock = FrameClock(
        time_source=time_source,
        max_delta_seconds=resolved_config.max_frame_delta_seconds,
    )
    return WindowStackHost(manager=manager, runner=runner, clock=clock)
