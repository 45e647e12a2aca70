from __future__ import annotations

import gc

import pytest

from tests.windowstack.helpers import Control, FakeAnimator
from windowstack.api.events import WindowEvent, WindowFocusChanged
from windowstack.api.windows import TransitionState, WindowState
from windowstack.runtime.errors import WindowDestroyedError
from windowstack.runtime.layers import HeadlessSelection
from windowstack.runtime.registry import WindowTemplate
from windowstack.runtime.window import Window


class RecordingWindow(Window):
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.hooks: list[str] = []

    def on_create(self) -> None:
        self.hooks.append("create")

    def on_open(self) -> None:
        self.hooks.append("open")

    def on_showing(self) -> None:
        self.hooks.append("showing")

    def on_shown(self) -> None:
        self.hooks.append("shown")

    def on_hiding(self) -> None:
        self.hooks.append("hiding")

    def on_hidden(self) -> None:
        self.hooks.append("hidden")

    def on_close(self) -> None:
        self.hooks.append("close")


class _Closer:
    def __init__(self) -> None:
        self.requests: list[tuple[Window | None, bool]] = []

    def close(self, window: Window | None, animate: bool = True) -> None:
        self.requests.append((window, animate))


def _event_names(window: Window) -> list[str]:
    names: list[str] = []
    window.events.subscribe(WindowEvent, lambda event: names.append(type(event).__name__))
    return names


def test_window_exposes_template_attributes() -> None:
    control = Control("ok")
    template = WindowTemplate("dialog", hide_other=True, default_control=control)
    window = Window(template)

    assert window.kind == "dialog"
    assert window.hide_other is True
    assert window.default_control is control
    assert window.state is WindowState.CREATED
    assert window.transition_state is TransitionState.NONE
    assert window.is_hidden is False
    assert window.is_focused is False
    assert window.is_in_transition is False


def test_lifecycle_runs_hooks_and_publishes_window_events() -> None:
    window = RecordingWindow(WindowTemplate("dialog"))
    names = _event_names(window)

    window.create()
    window.open()
    window.showing()
    window.show()
    window.hiding()
    window.hide()
    window.close()

    assert window.hooks == ["create", "open", "showing", "shown", "hiding", "hidden", "close"]
    assert names == ["WindowCreated", "WindowOpened", "WindowShown", "WindowHidden", "WindowClosed"]
    assert window.state is WindowState.CLOSED
    assert window.is_hidden is True
    assert window.is_active is False


def test_show_animation_without_animator_does_not_suspend() -> None:
    window = Window(WindowTemplate("dialog"))
    window.showing()

    assert list(window.play_show_animation()) == []
    assert window.is_in_transition is True
    assert window.transition_state is TransitionState.OPENING

    window.show()
    assert window.is_in_transition is False
    assert window.transition_state is TransitionState.NONE


def test_show_animation_suspends_until_animator_finishes() -> None:
    animator = FakeAnimator(length=0.2)
    window = Window(WindowTemplate("dialog"), animator=animator)
    window.showing()

    wait = next(window.play_show_animation())

    assert animator.calls == ["open"]
    assert wait.keep_waiting(0.1) is True
    assert wait.keep_waiting(0.1) is False


def test_skip_transition_settles_opening_window_as_shown() -> None:
    animator = FakeAnimator(length=1.0)
    window = Window(WindowTemplate("dialog"), animator=animator)
    names = _event_names(window)
    window.showing()
    wait = next(window.play_show_animation())

    window.skip_transition()

    assert window.state is WindowState.SHOWN
    assert window.is_in_transition is False
    assert window.transition_state is TransitionState.NONE
    assert animator.calls == ["open", "skip_to_end"]
    assert names == ["WindowShown"]
    assert wait.keep_waiting(0.0) is False


def test_skip_transition_settles_closing_window_as_closed() -> None:
    animator = FakeAnimator(length=1.0)
    window = Window(WindowTemplate("dialog"), animator=animator)
    window.showing()
    window.show()
    names = _event_names(window)
    window.hiding()
    next(window.play_hide_animation())

    window.skip_transition()

    assert window.state is WindowState.CLOSED
    assert window.is_hidden is True
    assert window.is_in_transition is False
    assert names == ["WindowHidden", "WindowClosed"]


def test_skip_transition_is_noop_when_settled() -> None:
    window = Window(WindowTemplate("dialog"))
    names = _event_names(window)
    window.showing()
    window.show()
    names.clear()

    window.skip_transition()

    assert window.state is WindowState.SHOWN
    assert names == []


def test_set_focus_publishes_only_when_flag_flips() -> None:
    window = Window(WindowTemplate("dialog"))
    changes: list[bool] = []
    window.events.subscribe(WindowFocusChanged, lambda event: changes.append(event.focused))

    window.set_focus(True)
    window.set_focus(True)
    window.set_focus(False)
    window.set_focus(False)

    assert changes == [True, False]
    assert window.is_focused is False


def test_focus_prefers_last_selected_over_default_control() -> None:
    default = Control("default")
    other = Control("other")
    selection = HeadlessSelection()
    window = Window(WindowTemplate("dialog", default_control=default), selection=selection)

    window.set_focus(True)
    assert selection.selected is default

    window.select(other)
    window.set_focus(False)
    assert selection.selected is None

    window.set_focus(True)
    assert selection.selected is other
    assert window.last_selected_control is other


def test_last_selected_control_is_not_kept_alive() -> None:
    selection = HeadlessSelection()
    window = Window(WindowTemplate("dialog"), selection=selection)
    control = Control("transient")
    window.select(control)
    window.set_focus(False)

    del control
    gc.collect()

    assert window.last_selected_control is None
    window.set_focus(True)
    assert selection.selected is None


def test_hide_clears_selection_of_focused_window() -> None:
    selection = HeadlessSelection()
    window = Window(WindowTemplate("dialog", default_control=Control("ok")), selection=selection)
    window.showing()
    window.show()
    window.set_focus(True)

    window.hiding()
    window.hide()

    assert selection.selected is None


def test_back_requests_animated_close_then_publishes() -> None:
    closer = _Closer()
    window = Window(WindowTemplate("dialog"), closer=closer)
    names = _event_names(window)

    window.back()

    assert closer.requests == [(window, True)]
    assert names == ["WindowBacked"]


def test_destroyed_window_rejects_transitions() -> None:
    window = Window(WindowTemplate("dialog"))
    window.destroy()

    assert window.is_destroyed is True
    with pytest.raises(WindowDestroyedError):
        window.open()
    with pytest.raises(WindowDestroyedError):
        window.showing()


def test_hook_errors_propagate() -> None:
    class BrokenWindow(Window):
        def on_open(self) -> None:
            raise RuntimeError("boom")

    window = BrokenWindow(WindowTemplate("broken"))

    with pytest.raises(RuntimeError, match="boom"):
        window.open()


def test_select_remembers_controls_that_cannot_be_weakly_referenced() -> None:
    selection = HeadlessSelection()
    window = Window(WindowTemplate("dialog", default_control="ok_button"), selection=selection)

    window.set_focus(True)
    assert selection.selected == "ok_button"

    window.select(3)
    window.set_focus(False)
    window.set_focus(True)

    assert window.last_selected_control == 3
    assert selection.selected == 3
