"""Public window stack API contracts."""

from windowstack.api.composition import create_window_stack_host
from windowstack.api.events import (
    AllWindowsClosed,
    EventBus,
    Subscription,
    WindowBacked,
    WindowClosed,
    WindowCreated,
    WindowEvent,
    WindowFocusChanged,
    WindowFocused,
    WindowHidden,
    WindowOpened,
    WindowShown,
    create_event_bus,
)
from windowstack.api.logging import LoggingConfig, configure_logging
from windowstack.api.ports import (
    AnimationBackend,
    Animator,
    CanvasGroup,
    InputBlocker,
    LayerProvider,
    LayerRoot,
    SelectionPort,
    Surface,
)
from windowstack.api.windows import TransitionState, WindowCategory, WindowState, WindowView

__all__ = [
    "AllWindowsClosed",
    "AnimationBackend",
    "Animator",
    "CanvasGroup",
    "EventBus",
    "InputBlocker",
    "LayerProvider",
    "LayerRoot",
    "LoggingConfig",
    "SelectionPort",
    "Subscription",
    "Surface",
    "TransitionState",
    "WindowBacked",
    "WindowCategory",
    "WindowClosed",
    "WindowCreated",
    "WindowEvent",
    "WindowFocusChanged",
    "WindowFocused",
    "WindowHidden",
    "WindowOpened",
    "WindowShown",
    "WindowState",
    "WindowView",
    "configure_logging",
    "create_event_bus",
    "create_window_stack_host",
]
