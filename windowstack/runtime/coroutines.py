"""Cooperative routine runner driven by frame ticks."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from typing import Protocol


class YieldInstruction(Protocol):
    """Suspension condition a routine may yield."""

    def keep_waiting(self, delta_seconds: float) -> bool:
        """Return whether the routine must stay suspended after `delta_seconds`."""


# Routines receive the unscaled tick delta as the value of each `yield`.
RoutineGenerator = Generator[YieldInstruction | None, float, None]


@dataclass(slots=True, eq=False)
class Routine:
    """Handle of one started routine."""

    routine_id: int
    name: str
    generator: RoutineGenerator
    wait: YieldInstruction | None = None
    finished: bool = False
    cancelled: bool = False

    @property
    def is_running(self) -> bool:
        return not (self.finished or self.cancelled)


class CoroutineRunner:
    """Runs generator routines with explicit per-tick suspension points.

    Yielding `None` suspends exactly one tick. Yielding a `YieldInstruction`
    suspends until its `keep_waiting` returns False; it is checked once with a
    zero delta when yielded, so an already-satisfied wait does not cost a tick.
    """

    def __init__(self) -> None:
        self._next_routine_id = 1
        self._routines: dict[int, Routine] = {}
        self._tick_count = 0

    @property
    def active_count(self) -> int:
        """Return count of routines still running."""
        return len(self._routines)

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def start(self, generator: RoutineGenerator, *, name: str = "routine") -> Routine:
        """Start a routine and run it up to its first suspension point."""
        routine = Routine(routine_id=self._next_routine_id, name=name, generator=generator)
        self._next_routine_id += 1
        self._routines[routine.routine_id] = routine
        self._resume(routine, None)
        return routine

    def stop(self, routine: Routine) -> None:
        """Cancel a routine without running the rest of it."""
        if not routine.is_running:
            return
        routine.cancelled = True
        routine.wait = None
        self._routines.pop(routine.routine_id, None)
        routine.generator.close()

    def complete(self, routine: Routine) -> None:
        """Run a routine to its end immediately, ignoring pending waits.

        Only for routines whose suspension points are bounded by state rather
        than by elapsed time; a time-driven loop would never end here.
        """
        while routine.is_running:
            routine.wait = None
            self._advance(routine, 0.0)

    def tick(self, delta_seconds: float) -> int:
        """Resume routines whose suspension ended. Returns resumed count."""
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        self._tick_count += 1
        resumed = 0
        for routine in tuple(self._routines.values()):
            if not routine.is_running:
                continue
            wait = routine.wait
            if wait is not None and wait.keep_waiting(delta_seconds):
                continue
            routine.wait = None
            self._resume(routine, delta_seconds)
            resumed += 1
        return resumed

    def _resume(self, routine: Routine, delta_seconds: float | None) -> None:
        sent = delta_seconds
        while routine.is_running:
            instruction = self._advance(routine, sent)
            if not routine.is_running or instruction is None:
                return
            if instruction.keep_waiting(0.0):
                routine.wait = instruction
                return
            sent = 0.0

    def _advance(self, routine: Routine, sent: float | None) -> YieldInstruction | None:
        try:
            if sent is None:
                return next(routine.generator)
            return routine.generator.send(sent)
        except StopIteration:
            self._finish(routine)
            return None
        except Exception:
            self._finish(routine)
            raise

    def _finish(self, routine: Routine) -> None:
        routine.finished = True
        routine.wait = None
        self._routines.pop(routine.routine_id, None)
