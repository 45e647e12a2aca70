"""Window template registry keyed by window kind."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from windowstack.api.windows import WindowCategory
from windowstack.runtime.window import Window


@dataclass(frozen=True, slots=True)
class WindowTemplate:
    """Constructible description of one window kind."""

    kind: str
    window_type: type[Window] = Window
    category: WindowCategory = WindowCategory.NORMAL
    hide_other: bool = False
    default_control: object | None = None
    animation_layer: int | None = None


class WindowRegistry:
    """Maps a window kind to the template used to build it."""

    def __init__(self, templates: Iterable[WindowTemplate] = ()) -> None:
        self._templates: dict[str, WindowTemplate] = {}
        for template in templates:
            self.register(template)

    def register(self, template: WindowTemplate) -> WindowTemplate:
        """Register one template. Kinds must be unique."""
        kind = template.kind
        if not kind.strip():
            raise ValueError("window kind must not be empty")
        if kind in self._templates:
            raise ValueError(f"window kind already registered: {kind}")
        self._templates[kind] = template
        return template

    def get(self, kind: str) -> WindowTemplate | None:
        return self._templates.get(kind)

    def contains(self, kind: str) -> bool:
        return kind in self._templates

    def kinds(self) -> tuple[str, ...]:
        """Return registered kinds in registration order."""
        return tuple(self._templates)
