"""Suspension primitive that waits for an animator clip to finish."""

from __future__ import annotations

from windowstack.api.ports import Animator

END_FRAME_NORMALIZED_TIME = 1.0


class AnimationWaiter:
    """Yield instruction resolving once the current clip reached its end frame.

    Playback progress is accumulated from the unscaled tick delta, so a global
    time-scale pause does not stall UI transitions. With no animator the wait
    resolves immediately.
    """

    __slots__ = ("_animator", "_layer_index", "_normalized_time")

    def __init__(self, animator: Animator | None, layer_index: int = 0) -> None:
        self._animator = animator
        self._layer_index = layer_index
        self._normalized_time = 0.0

    @property
    def normalized_time(self) -> float:
        return self._normalized_time

    def keep_waiting(self, delta_seconds: float) -> bool:
        animator = self._animator
        if animator is None:
            return False
        if animator.is_in_transition(self._layer_index):
            return True
        length = animator.state_length(self._layer_index)
        if length <= 0.0:
            return False
        self._normalized_time += delta_seconds / length
        return self._normalized_time < END_FRAME_NORMALIZED_TIME
