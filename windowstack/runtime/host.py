"""Per-frame driver for the window stack."""

from __future__ import annotations

import logging

from windowstack.runtime.coroutines import CoroutineRunner
from windowstack.runtime.time import FrameClock, TimeContext
from windowstack.runtime.window_manager import WindowManager

logger = logging.getLogger(__name__)


class WindowStackHost:
    """Binds a frame clock to the routine runner behind a window manager.

    The embedding application calls `frame()` once per rendered frame; the
    host owns no loop of its own.
    """

    def __init__(
        self,
        *,
        manager: WindowManager,
        runner: CoroutineRunner,
        clock: FrameClock | None = None,
    ) -> None:
        self._manager = manager
        self._runner = runner
        self._clock = clock or FrameClock()
        self._frame_index = 0
        self._last_context: TimeContext | None = None

    @property
    def manager(self) -> WindowManager:
        return self._manager

    @property
    def runner(self) -> CoroutineRunner:
        return self._runner

    @property
    def clock(self) -> FrameClock:
        return self._clock

    @property
    def frame_index(self) -> int:
        return self._frame_index

    @property
    def last_context(self) -> TimeContext | None:
        return self._last_context

    def frame(self) -> TimeContext:
        """Sample the clock and resume routines with the unscaled delta."""
        context = self._clock.next(self._frame_index)
        self._frame_index += 1
        self._last_context = context
        resumed = self._runner.tick(context.unscaled_delta_seconds)
        if resumed:
            logger.debug(
                "window_stack_frame index=%d resumed=%d active=%d",
                context.frame_index,
                resumed,
                self._runner.active_count,
            )
        return context

    def run_until_idle(self, *, max_frames: int = 600) -> int:
        """Run frames until no routine is active. Returns frames executed."""
        if max_frames <= 0:
            raise ValueError("max_frames must be > 0")
        executed = 0
        while self._runner.active_count and executed < max_frames:
            self.frame()
            executed += 1
        return executed
