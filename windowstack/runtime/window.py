"""Window lifecycle state machine."""

from __future__ import annotations

import logging
import weakref
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from windowstack.api.events import (
    WindowBacked,
    WindowClosed,
    WindowCreated,
    WindowFocusChanged,
    WindowHidden,
    WindowOpened,
    WindowShown,
)
from windowstack.api.ports import Animator, SelectionPort, Surface
from windowstack.api.windows import TransitionState, WindowCategory, WindowState
from windowstack.runtime.animation import AnimationWaiter
from windowstack.runtime.coroutines import RoutineGenerator
from windowstack.runtime.errors import WindowDestroyedError
from windowstack.runtime.events import RuntimeEventBus

if TYPE_CHECKING:
    from windowstack.runtime.registry import WindowTemplate

logger = logging.getLogger(__name__)


class WindowCloser(Protocol):
    """Manager surface a window uses to request its own close."""

    def close(self, window: Window | None, animate: bool = True) -> None: ...


class _TransitionWait:
    """Animation wait that also ends when the transition is skipped."""

    __slots__ = ("_window", "_waiter")

    def __init__(self, window: Window, waiter: AnimationWaiter) -> None:
        self._window = window
        self._waiter = waiter

    def keep_waiting(self, delta_seconds: float) -> bool:
        if not self._window.is_in_transition:
            return False
        return self._waiter.keep_waiting(delta_seconds)


class Window:
    """One stack entry with its own open/show/hide/close sub-lifecycle.

    The manager drives the public transition methods; subclasses customise
    behaviour through the `on_*` hooks. Hook exceptions propagate to the caller.
    """

    def __init__(
        self,
        template: WindowTemplate,
        *,
        closer: WindowCloser | None = None,
        selection: SelectionPort | None = None,
        animator: Animator | None = None,
        surface: Surface | None = None,
        animation_layer: int = 0,
    ) -> None:
        self.template = template
        self.events = RuntimeEventBus()
        self._closer = closer
        self._selection = selection
        self._animator = animator
        self._surface = surface
        self._animation_layer = animation_layer
        self._last_selected: Callable[[], object | None] | None = None
        self.state = WindowState.CREATED
        self.transition_state = TransitionState.NONE
        self.is_hidden = False
        self.is_focused = False
        self.is_in_transition = False
        self.is_active = True
        self.is_destroyed = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} kind={self.kind!r} state={self.state.value}>"

    @property
    def kind(self) -> str:
        return self.template.kind

    @property
    def category(self) -> WindowCategory:
        return self.template.category

    @property
    def hide_other(self) -> bool:
        return self.template.hide_other

    @property
    def default_control(self) -> object | None:
        return self.template.default_control

    @property
    def animator(self) -> Animator | None:
        return self._animator

    @property
    def last_selected_control(self) -> object | None:
        if self._last_selected is None:
            return None
        return self._last_selected()

    def create(self) -> None:
        self._ensure_alive()
        self.on_create()
        self.events.publish(WindowCreated(self))

    def open(self) -> None:
        self._ensure_alive()
        self.on_open()
        self.events.publish(WindowOpened(self))

    def close(self) -> None:
        self._ensure_alive()
        self.state = WindowState.CLOSED
        self.on_close()
        self.events.publish(WindowClosed(self))

    def showing(self) -> None:
        """Start becoming visible."""
        self._ensure_alive()
        self.is_hidden = False
        self.set_active(True)
        self.state = WindowState.SHOWING
        self.on_showing()

    def play_show_animation(self) -> RoutineGenerator:
        """Play the open clip and suspend until it ends or is skipped."""
        self._ensure_alive()
        self.is_in_transition = True
        self.transition_state = TransitionState.OPENING
        if self._animator is None:
            return
        self._animator.play_open_animation()
        yield _TransitionWait(self, AnimationWaiter(self._animator, self._animation_layer))

    def show(self) -> None:
        """Settle in the shown state."""
        self._ensure_alive()
        self._settle_animation()
        self.state = WindowState.SHOWN
        if self.is_focused:
            self._restore_selection()
        self.on_shown()
        self.events.publish(WindowShown(self))

    def hiding(self) -> None:
        """Start becoming hidden."""
        self._ensure_alive()
        self.state = WindowState.HIDING
        self.on_hiding()

    def play_hide_animation(self) -> RoutineGenerator:
        """Play the close clip and suspend until it ends or is skipped."""
        self._ensure_alive()
        self.is_in_transition = True
        self.transition_state = TransitionState.CLOSING
        if self._animator is None:
            return
        self._animator.play_close_animation()
        yield _TransitionWait(self, AnimationWaiter(self._animator, self._animation_layer))

    def hide(self) -> None:
        """Settle in the hidden state."""
        self._ensure_alive()
        self._settle_animation()
        self.is_hidden = True
        if self.is_focused and self._selection is not None:
            self._selection.set_selected(None)
        self.set_active(False)
        self.state = WindowState.HIDDEN
        self.on_hidden()
        self.events.publish(WindowHidden(self))

    def set_focus(self, focused: bool) -> None:
        flipped = self.is_focused != focused
        self.is_focused = focused
        if self._surface is not None:
            self._surface.set_interactable(focused)
        if focused:
            self._restore_selection()
        elif self._selection is not None:
            self._selection.set_selected(None)
        if flipped:
            self.events.publish(WindowFocusChanged(self, focused))

    def select(self, control: object | None) -> None:
        """Select a control inside this window and remember it for refocus."""
        if self._selection is not None:
            self._selection.set_selected(control)
        if control is None:
            return
        try:
            self._last_selected = weakref.ref(control)
        except TypeError:
            # Plain ids (str, int) cannot be weakly referenced; hold them directly.
            self._last_selected = lambda: control

    def back(self) -> None:
        self.on_back()
        self.events.publish(WindowBacked(self))

    def skip_transition(self) -> None:
        """Jump an in-flight transition straight to its settled state."""
        if not self.is_in_transition:
            return
        logger.debug("window_transition_skipped kind=%s state=%s", self.kind, self.transition_state.value)
        if self.transition_state is TransitionState.OPENING:
            self.show()
        elif self.transition_state is TransitionState.CLOSING:
            self.hide()
            self.close()

    def set_active(self, active: bool) -> None:
        self.is_active = active
        if self._surface is not None:
            self._surface.set_active(active)

    def destroy(self) -> None:
        """Release the window; no further transitions are possible."""
        self.is_destroyed = True
        self._closer = None
        self._last_selected = None

    # Hooks

    def on_create(self) -> None:
        pass

    def on_open(self) -> None:
        pass

    def on_close(self) -> None:
        pass

    def on_showing(self) -> None:
        pass

    def on_shown(self) -> None:
        pass

    def on_hiding(self) -> None:
        pass

    def on_hidden(self) -> None:
        pass

    def on_back(self) -> None:
        """Default back action closes this window with animation."""
        if self._closer is not None:
            self._closer.close(self, animate=True)

    def before_destroy(self) -> None:
        """Teardown hook run after the window left its layer root."""

    def _restore_selection(self) -> None:
        target = self.last_selected_control
        if target is None:
            target = self.default_control
        if target is not None:
            self.select(target)

    def _settle_animation(self) -> None:
        if self._animator is not None and self.is_in_transition:
            self._animator.skip_to_end(self._animation_layer)
        self.is_in_transition = False
        self.transition_state = TransitionState.NONE

    def _ensure_alive(self) -> None:
        if self.is_destroyed:
            raise WindowDestroyedError(self.kind)
