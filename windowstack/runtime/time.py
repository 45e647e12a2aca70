"""Frame timing primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from time import monotonic


@dataclass(frozen=True, slots=True)
class TimeContext:
    """Per-frame timing context.

    `delta_seconds` honours the clock time scale; `unscaled_delta_seconds` does
    not, so UI transitions keep running while gameplay time is paused.
    """

    frame_index: int
    delta_seconds: float
    unscaled_delta_seconds: float
    elapsed_seconds: float


class FrameClock:
    """Monotonic frame clock with bounded frame deltas."""

    def __init__(
        self,
        *,
        time_source: Callable[[], float] | None = None,
        max_delta_seconds: float = 0.25,
        time_scale: float = 1.0,
    ) -> None:
        if time_scale < 0.0:
            raise ValueError("time_scale must be >= 0")
        self._time_source = time_source or monotonic
        self._max_delta_seconds = max_delta_seconds
        self._time_scale = time_scale
        self._last_seconds: float | None = None
        self._elapsed_seconds = 0.0

    @property
    def time_scale(self) -> float:
        return self._time_scale

    @time_scale.setter
    def time_scale(self, value: float) -> None:
        if value < 0.0:
            raise ValueError("time_scale must be >= 0")
        self._time_scale = value

    def next(self, frame_index: int) -> TimeContext:
        """Advance the clock and return the next frame context."""
        now = self._time_source()
        if self._last_seconds is None:
            unscaled = 0.0
        else:
            raw_delta = now - self._last_seconds
            non_negative_delta = max(0.0, raw_delta)
            unscaled = min(non_negative_delta, self._max_delta_seconds)
        self._last_seconds = now
        delta = unscaled * self._time_scale
        self._elapsed_seconds += delta
        return TimeContext(
            frame_index=frame_index,
            delta_seconds=delta,
            unscaled_delta_seconds=unscaled,
            elapsed_seconds=self._elapsed_seconds,
        )
