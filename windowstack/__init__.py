"""Window stack controller and per-window lifecycle state machine."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from windowstack.runtime.host import WindowStackHost
    from windowstack.runtime.registry import WindowTemplate


def create_host(*templates: "WindowTemplate") -> "WindowStackHost":
    """Compose a headless host for the given window templates."""
    from windowstack.api.composition import create_window_stack_host

    return create_window_stack_host(templates)


__all__ = ["create_host"]
