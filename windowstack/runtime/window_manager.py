"""Window stack controller."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from windowstack.api.events import (
    AllWindowsClosed,
    Subscription,
    TEvent,
    WindowBacked,
    WindowClosed,
    WindowCreated,
    WindowFocused,
    WindowHidden,
    WindowOpened,
    WindowShown,
)
from windowstack.api.ports import (
    AnimationBackend,
    CanvasGroup,
    InputBlocker,
    LayerProvider,
    SelectionPort,
    Surface,
)
from windowstack.api.windows import WindowState
from windowstack.runtime.config import WindowStackConfig
from windowstack.runtime.coroutines import CoroutineRunner, Routine, RoutineGenerator
from windowstack.runtime.errors import WindowNotFoundError
from windowstack.runtime.events import RuntimeEventBus
from windowstack.runtime.layers import HeadlessCanvasGroup
from windowstack.runtime.registry import WindowRegistry, WindowTemplate
from windowstack.runtime.window import Window

logger = logging.getLogger(__name__)

MIN_CANVAS_ALPHA = 0.0
MAX_CANVAS_ALPHA = 1.0

SurfaceFactory = Callable[[WindowTemplate], Surface | None]


class WindowManager:
    """Ordered stack of live windows and the sequences that mutate it.

    At most one open/close sequence runs at a time. Starting a new one first
    forces every in-flight transition to its settled state and runs the
    previous sequence to its end, so no window is left half-transitioned.
    Requests issued from event handlers or hooks while a sequence step runs
    are queued and start once that sequence has finished.
    Rejected requests log a warning and leave the stack untouched.
    """

    def __init__(
        self,
        *,
        registry: WindowRegistry,
        runner: CoroutineRunner,
        layers: LayerProvider,
        selection: SelectionPort | None = None,
        animations: AnimationBackend | None = None,
        input_blocker: InputBlocker | None = None,
        canvas: CanvasGroup | None = None,
        surface_factory: SurfaceFactory | None = None,
        events: RuntimeEventBus | None = None,
        config: WindowStackConfig | None = None,
    ) -> None:
        self._config = config or WindowStackConfig()
        self._registry = registry
        self._runner = runner
        self._layers = layers
        self._selection = selection
        self._animations = animations
        self._input_blocker = input_blocker
        self._canvas: CanvasGroup = canvas if canvas is not None else HeadlessCanvasGroup()
        self._surface_factory = surface_factory
        self._events = events or RuntimeEventBus(trace=self._config.events_trace_enabled)
        self._windows: list[Window] = []
        self._focused: Window | None = None
        self._window_routine: Routine | None = None
        self._sequence_window: Window | None = None
        self._close_all_routine: Routine | None = None
        self._deferral_depth = 0
        self._pending_requests: deque[tuple[Callable[[Window, bool], None], Window, bool]] = deque()
        self._canvas_routine: Routine | None = None
        self._canvas_visible = True
        self._interaction_blocked = False
        if self._config.block_interaction_on_start:
            self.set_block_interaction(True)

    @property
    def events(self) -> RuntimeEventBus:
        return self._events

    @property
    def registry(self) -> WindowRegistry:
        return self._registry

    @property
    def focused_window(self) -> Window | None:
        return self._focused

    @property
    def window_count(self) -> int:
        return len(self._windows)

    @property
    def windows(self) -> tuple[Window, ...]:
        """Return bottom-to-top stack snapshot."""
        return tuple(self._windows)

    @property
    def is_canvas_visible(self) -> bool:
        return self._canvas_visible

    @property
    def canvas_alpha(self) -> float:
        return self._canvas.alpha

    @property
    def is_interaction_blocked(self) -> bool:
        return self._interaction_blocked

    @property
    def is_transitioning(self) -> bool:
        """Return whether an open/close sequence is still in flight."""
        routine = self._window_routine
        return routine is not None and routine.is_running

    @property
    def is_closing_all(self) -> bool:
        routine = self._close_all_routine
        return routine is not None and routine.is_running

    def subscribe(self, event_type: type[TEvent], handler: Callable[[TEvent], None]) -> Subscription:
        """Subscribe to manager lifecycle events."""
        return self._events.subscribe(event_type, handler)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._events.unsubscribe(subscription)

    # Lookups

    def exists(self, kind: str) -> bool:
        return any(window.kind == kind for window in self._windows)

    def get_window(self, kind: str) -> Window:
        """Return the live window of `kind` or raise `WindowNotFoundError`."""
        for window in self._windows:
            if window.kind == kind:
                return window
        raise WindowNotFoundError(kind)

    def get_top_window(self) -> Window | None:
        """Return the topmost window that is not hidden."""
        for window in reversed(self._windows):
            if not window.is_hidden:
                return window
        return None

    # Creation

    def create(self, kind: str) -> Window | None:
        """Build a deactivated window of `kind`; it joins the stack on `open`."""
        template = self._registry.get(kind)
        if template is None:
            logger.warning("window_create_rejected kind=%s reason=not_registered", kind)
            return None
        animator = self._animations.animator_for(kind) if self._animations is not None else None
        surface = self._surface_factory(template) if self._surface_factory is not None else None
        layer = template.animation_layer
        window = template.window_type(
            template,
            closer=self,
            selection=self._selection,
            animator=animator,
            surface=surface,
            animation_layer=self._config.animation_layer if layer is None else layer,
        )
        window.set_active(False)
        window.create()
        self._events.publish(WindowCreated(window))
        if self.exists(kind):
            logger.warning("window_create_duplicate kind=%s", kind)
        return window

    def get_or_create(self, kind: str) -> Window | None:
        """Return the live window of `kind`, creating one when absent."""
        if self.exists(kind):
            return self.get_window(kind)
        window = self.create(kind)
        if window is None:
            logger.warning("window_get_or_create_failed kind=%s", kind)
        return window

    # Sequences

    def open(self, window: Window | None, animate: bool = True) -> None:
        """Push `window` onto the stack and show it."""
        if window is None or not self._can_open(window):
            return
        if self._defer_request(self.open, window, animate):
            return
        self._preempt_sequence()
        # The preempted sequence may have run deferred requests of its own.
        if not self._can_open(window):
            return
        with self._deferring_requests():
            self._unfocus_window()
        self._start_sequence(window, self._open_sequence(window, animate), name=f"open:{window.kind}")

    def close(self, window: Window | None, animate: bool = True) -> None:
        """Remove `window` from the stack, hide it and release it."""
        if window is None or not self._can_close(window):
            return
        if self._defer_request(self.close, window, animate):
            return
        self._preempt_sequence()
        if not self._can_close(window):
            return
        with self._deferring_requests():
            self._unfocus_window()
        self._start_sequence(window, self._close_sequence(window, animate), name=f"close:{window.kind}")

    def close_all(self) -> None:
        """Close every visible window top to bottom, one tick apart."""
        if self.is_closing_all:
            return
        routine = self._runner.start(self._close_all_sequence(), name="close_all")
        self._close_all_routine = routine if routine.is_running else None

    def hardware_back(self) -> None:
        """Forward the back action to the focused window."""
        window = self._focused
        if window is None:
            return
        window.back()
        self._events.publish(WindowBacked(window))

    def set_block_interaction(self, blocking: bool) -> None:
        self._interaction_blocked = blocking
        if self._input_blocker is not None:
            self._input_blocker.set_blocking(blocking)

    # Canvas

    def hide_canvas(self) -> None:
        if not self._canvas_visible:
            return
        self._canvas_visible = False
        self._start_canvas_fade(MIN_CANVAS_ALPHA)

    def show_canvas(self) -> None:
        if self._canvas_visible:
            return
        self._canvas_visible = True
        self._start_canvas_fade(MAX_CANVAS_ALPHA)

    def _start_canvas_fade(self, target_alpha: float) -> None:
        if self._canvas_routine is not None:
            self._runner.stop(self._canvas_routine)
        routine = self._runner.start(self._fade_canvas(target_alpha), name="canvas_fade")
        self._canvas_routine = routine if routine.is_running else None

    def _fade_canvas(self, target_alpha: float) -> RoutineGenerator:
        duration = self._config.canvas_fade_seconds
        start_alpha = self._canvas.alpha
        elapsed = 0.0
        while elapsed < duration:
            self._canvas.alpha = start_alpha + (target_alpha - start_alpha) * (elapsed / duration)
            delta = yield None
            elapsed += delta
        self._canvas.alpha = target_alpha
        self._canvas_routine = None

    # Sequence bodies

    def _open_sequence(self, window: Window, animate: bool) -> RoutineGenerator:
        logger.debug("window_open_start kind=%s animate=%s", window.kind, animate)
        self.set_block_interaction(True)
        if window.hide_other:
            self._hide_from_top()
        self._windows.append(window)
        root = self._layers.root_for(window.category)
        root.attach(window)
        root.bring_to_top(window)
        window.open()
        self._events.publish(WindowOpened(window))
        window.showing()
        if animate:
            yield from window.play_show_animation()
        if window.state is not WindowState.SHOWN:
            window.show()
        self._events.publish(WindowShown(window))
        self._set_focus_window(window)
        self._end_sequence(window)
        self.set_block_interaction(False)
        logger.debug("window_open_done kind=%s", window.kind)

    def _close_sequence(self, window: Window, animate: bool) -> RoutineGenerator:
        logger.debug("window_close_start kind=%s animate=%s", window.kind, animate)
        self.set_block_interaction(True)
        self._windows.remove(window)
        if window.hide_other:
            self._show_from_top()
        window.hiding()
        if animate:
            yield from window.play_hide_animation()
        # A skipped close transition already settled hidden and closed.
        if window.state is not WindowState.CLOSED:
            window.hide()
        self._events.publish(WindowHidden(window))
        if window.state is not WindowState.CLOSED:
            window.close()
        self._events.publish(WindowClosed(window))
        top = self.get_top_window()
        if top is not None:
            self._set_focus_window(top)
        self._end_sequence(window)
        self._layers.root_for(window.category).detach(window)
        window.before_destroy()
        window.destroy()
        self.set_block_interaction(False)
        logger.debug("window_close_done kind=%s", window.kind)

    def _close_all_sequence(self) -> RoutineGenerator:
        index = len(self._windows) - 1
        while index >= 0:
            if index < len(self._windows):
                window = self._windows[index]
                if not window.is_hidden:
                    self.close(window, animate=False)
            yield None
            index -= 1
        self._close_all_routine = None
        self._events.publish(AllWindowsClosed())

    def _hide_from_top(self) -> None:
        for window in reversed(self._windows):
            window.hiding()
            window.hide()
            self._events.publish(WindowHidden(window))
            if window.hide_other:
                return

    def _show_from_top(self) -> None:
        for window in reversed(self._windows):
            window.showing()
            window.show()
            self._events.publish(WindowShown(window))
            if window.hide_other:
                return

    # Sequence bookkeeping

    def _start_sequence(self, window: Window, body: RoutineGenerator, *, name: str) -> None:
        self._sequence_window = window
        routine = self._runner.start(self._run_sequence(body), name=name)
        if routine.is_running:
            self._window_routine = routine

    def _run_sequence(self, body: RoutineGenerator) -> RoutineGenerator:
        """Drive one sequence body, then run requests it deferred.

        Once a request was deferred the body no longer suspends: in-flight
        transitions are skipped so it reaches its terminal step right away.
        """
        sent: float | None = None
        while True:
            self._deferral_depth += 1
            try:
                instruction = next(body) if sent is None else body.send(sent)
            except StopIteration:
                break
            except Exception:
                self._pending_requests.clear()
                raise
            finally:
                self._deferral_depth -= 1
            if self._pending_requests:
                self._skip_windows_transition()
                sent = 0.0
                continue
            sent = yield instruction
        self._window_routine = None
        while self._pending_requests:
            request, window, animate = self._pending_requests.popleft()
            request(window, animate)

    @contextmanager
    def _deferring_requests(self) -> Iterator[None]:
        self._deferral_depth += 1
        try:
            yield
        finally:
            self._deferral_depth -= 1

    def _defer_request(self, request: Callable[[Window, bool], None], window: Window, animate: bool) -> bool:
        """Queue a request issued while a sequence step is on the call stack."""
        if self._deferral_depth == 0:
            return False
        logger.debug("window_request_deferred action=%s kind=%s", request.__name__, window.kind)
        self._pending_requests.append((request, window, animate))
        return True

    def _end_sequence(self, window: Window) -> None:
        if self._sequence_window is window:
            self._sequence_window = None
        self._window_routine = None

    def _preempt_sequence(self) -> None:
        routine = self._window_routine
        # Completing a sequence runs the requests it deferred, which may start another.
        while routine is not None and routine.is_running:
            logger.debug("window_sequence_preempted name=%s", routine.name)
            self._window_routine = None
            self._skip_windows_transition()
            self._runner.complete(routine)
            routine = self._window_routine
        self._window_routine = None

    def _skip_windows_transition(self) -> None:
        with self._deferring_requests():
            for window in reversed(self._windows):
                if window.is_in_transition:
                    window.skip_transition()
            # A closing window has already left the stack.
            pending = self._sequence_window
            if pending is not None and pending.is_in_transition and not self._is_live(pending):
                pending.skip_transition()

    def _can_open(self, window: Window) -> bool:
        if window.is_destroyed:
            logger.warning("window_open_rejected kind=%s reason=destroyed", window.kind)
            return False
        if self.exists(window.kind):
            logger.warning("window_open_rejected kind=%s reason=duplicate_kind", window.kind)
            return False
        return True

    def _can_close(self, window: Window) -> bool:
        if not self._is_live(window):
            logger.warning("window_close_rejected kind=%s reason=not_in_stack", window.kind)
            return False
        return True

    # Focus

    def _unfocus_window(self) -> None:
        focused = self._focused
        if focused is None:
            return
        if not focused.is_focused:
            logger.warning("window_unfocus_inconsistent kind=%s", focused.kind)
            return
        focused.set_focus(False)
        self._focused = None

    def _set_focus_window(self, window: Window) -> None:
        if not self._is_live(window):
            logger.warning("window_focus_rejected kind=%s reason=not_in_stack", window.kind)
            return
        if window.is_hidden:
            logger.warning("window_focus_rejected kind=%s reason=hidden", window.kind)
            return
        self._unfocus_window()
        window.set_focus(True)
        self._focused = window
        self._events.publish(WindowFocused(window))

    def _is_live(self, window: Window) -> bool:
        return any(entry is window for entry in self._windows)
