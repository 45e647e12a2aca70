"""Window stack runtime modules."""

from windowstack.api.events import Subscription
from windowstack.runtime.animation import AnimationWaiter
from windowstack.runtime.config import WindowStackConfig, load_window_stack_config
from windowstack.runtime.coroutines import CoroutineRunner, Routine, YieldInstruction
from windowstack.runtime.errors import WindowDestroyedError, WindowNotFoundError, WindowStackError
from windowstack.runtime.events import EventBus
from windowstack.runtime.host import WindowStackHost
from windowstack.runtime.layers import (
    HeadlessCanvasGroup,
    HeadlessInputBlocker,
    HeadlessLayerProvider,
    HeadlessLayerRoot,
    HeadlessSelection,
    NoAnimationBackend,
)
from windowstack.runtime.logging import setup_logging
from windowstack.runtime.registry import WindowRegistry, WindowTemplate
from windowstack.runtime.time import FrameClock, TimeContext
from windowstack.runtime.window import Window
from windowstack.runtime.window_manager import WindowManager

__all__ = [
    "AnimationWaiter",
    "CoroutineRunner",
    "EventBus",
    "FrameClock",
    "HeadlessCanvasGroup",
    "HeadlessInputBlocker",
    "HeadlessLayerProvider",
    "HeadlessLayerRoot",
    "HeadlessSelection",
    "NoAnimationBackend",
    "Routine",
    "Subscription",
    "TimeContext",
    "Window",
    "WindowDestroyedError",
    "WindowManager",
    "WindowNotFoundError",
    "WindowRegistry",
    "WindowStackConfig",
    "WindowStackError",
    "WindowStackHost",
    "YieldInstruction",
    "load_window_stack_config",
    "setup_logging",
]
