"""Collaborator ports consumed by the window stack."""

from __future__ import annotations

from typing import Protocol

from windowstack.api.windows import WindowCategory, WindowView


class Animator(Protocol):
    """Animation player handle for one window."""

    def play_open_animation(self) -> None:
        """Trigger the open clip."""

    def play_close_animation(self) -> None:
        """Trigger the close clip."""

    def is_in_transition(self, layer_index: int) -> bool:
        """Return whether the layer is blending between clips."""

    def state_length(self, layer_index: int) -> float:
        """Return current clip length in seconds."""

    def skip_to_end(self, layer_index: int) -> None:
        """Jump current clip to its last frame."""


class AnimationBackend(Protocol):
    """Resolves the animator of a window kind; `None` means instant transitions."""

    def animator_for(self, kind: str) -> Animator | None: ...


class Surface(Protocol):
    """Visual surface owned by one window."""

    def set_active(self, active: bool) -> None: ...

    def set_interactable(self, interactable: bool) -> None: ...


class LayerRoot(Protocol):
    """Visual container windows attach to."""

    def attach(self, window: WindowView) -> None: ...

    def detach(self, window: WindowView) -> None: ...

    def bring_to_top(self, window: WindowView) -> None: ...


class LayerProvider(Protocol):
    """Maps a window category to its layer root."""

    def root_for(self, category: WindowCategory) -> LayerRoot: ...


class SelectionPort(Protocol):
    """Globally selected interactive control."""

    def set_selected(self, control: object | None) -> None: ...


class InputBlocker(Protocol):
    """Overlay that swallows pointer input while engaged."""

    def set_blocking(self, blocking: bool) -> None: ...


class CanvasGroup(Protocol):
    """Opacity of the whole UI layer."""

    alpha: float
