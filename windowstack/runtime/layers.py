"""Headless collaborator implementations for the window stack."""

from __future__ import annotations

from windowstack.api.ports import Animator
from windowstack.api.windows import WindowCategory, WindowView


class HeadlessLayerRoot:
    """Ordered child list standing in for a visual container."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._children: list[WindowView] = []

    def attach(self, window: WindowView) -> None:
        if any(child is window for child in self._children):
            return
        self._children.append(window)

    def detach(self, window: WindowView) -> None:
        self._children = [child for child in self._children if child is not window]

    def bring_to_top(self, window: WindowView) -> None:
        self.detach(window)
        self._children.append(window)

    def children(self) -> tuple[WindowView, ...]:
        """Return back-to-front child snapshot."""
        return tuple(self._children)


class HeadlessLayerProvider:
    """Normal and modal roots kept in memory."""

    def __init__(self) -> None:
        self.normal = HeadlessLayerRoot("normal")
        self.modal = HeadlessLayerRoot("modal")

    def root_for(self, category: WindowCategory) -> HeadlessLayerRoot:
        if category is WindowCategory.MODAL:
            return self.modal
        return self.normal


class HeadlessSelection:
    """Records the globally selected control."""

    def __init__(self) -> None:
        self.selected: object | None = None

    def set_selected(self, control: object | None) -> None:
        self.selected = control


class HeadlessInputBlocker:
    def __init__(self) -> None:
        self.blocking = False

    def set_blocking(self, blocking: bool) -> None:
        self.blocking = blocking


class HeadlessCanvasGroup:
    def __init__(self, alpha: float = 1.0) -> None:
        self.alpha = alpha


class NoAnimationBackend:
    """Backend without animators; every transition is instant."""

    def animator_for(self, kind: str) -> Animator | None:
        return None
