"""Thread-safe lap stopwatch."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .clock import NS_PER_MS, Clock, monotonic_clock
from .errors import InvalidStateError
from .summary import LapSummary


class StopwatchState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class StopwatchSnapshot:
    """State, laps and elapsed time read under one lock acquisition."""

    id: str
    state: StopwatchState
    laps: Tuple[float, ...]
    elapsed_ms: float


class Stopwatch:
    """A named stopwatch that many threads may drive at once.

    Instances are handed out by :class:`~lapwatch.core.registry.StopwatchRegistry`;
    do not construct them directly. ``start``, ``lap``, ``stop`` and ``reset``
    are serialised by one lock, which also guards the snapshots returned by
    :meth:`lap_times`, so readers never observe a half-applied update.

    Args:
        stopwatch_id: Immutable identifier, validated by the registry.
        clock: Callable returning the current instant in nanoseconds.
    """

    def __init__(self, stopwatch_id: str, clock: Optional[Clock] = None):
        self._id = stopwatch_id
        self._clock: Clock = clock or monotonic_clock
        self._lock = threading.Lock()
        self._running = False
        self._start_ns = 0
        self._last_lap_ns = 0
        self._laps: List[float] = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    @property
    def state(self) -> StopwatchState:
        return StopwatchState.RUNNING if self.running else StopwatchState.IDLE

    def start(self) -> None:
        """Move from idle to running.

        Raises:
            InvalidStateError: if the stopwatch is already running.
        """

        with self._lock:
            if self._running:
                raise InvalidStateError(f"stopwatch {self._id!r} is already running")
            now = self._clock()
            self._start_ns = now
            self._last_lap_ns = now
            self._running = True

    def lap(self) -> float:
        """Record the time since the previous boundary and return it in ms.

        Raises:
            InvalidStateError: if the stopwatch is not running.
        """

        with self._lock:
            return self._close_lap()

    def stop(self) -> float:
        """Record a final lap, go idle and return that lap in ms.

        Raises:
            InvalidStateError: if the stopwatch is not running.
        """

        with self._lock:
            duration = self._close_lap()
            self._running = False
            return duration

    def reset(self) -> None:
        """Go idle and drop every recorded lap, whatever the current state."""

        with self._lock:
            self._running = False
            self._start_ns = 0
            self._last_lap_ns = 0
            self._laps = []

    def lap_times(self) -> Tuple[float, ...]:
        """Return a read-only snapshot of the recorded laps in milliseconds."""

        with self._lock:
            return tuple(self._laps)

    def elapsed_ms(self) -> float:
        """Total of recorded laps plus the open segment while running."""

        with self._lock:
            return self._elapsed_ms()

    def snapshot(self) -> StopwatchSnapshot:
        with self._lock:
            return StopwatchSnapshot(
                id=self._id,
                state=StopwatchState.RUNNING if self._running else StopwatchState.IDLE,
                laps=tuple(self._laps),
                elapsed_ms=self._elapsed_ms(),
            )

    def summary(self) -> LapSummary:
        return LapSummary.from_laps(self.lap_times())

    # caller must hold self._lock
    def _elapsed_ms(self) -> float:
        total = float(sum(self._laps))
        if self._running:
            total += max(0, self._clock() - self._last_lap_ns) / NS_PER_MS
        return total

    # caller must hold self._lock
    def _close_lap(self) -> float:
        if not self._running:
            raise InvalidStateError(f"stopwatch {self._id!r} is not running")
        now = self._clock()
        # a clock stepping backwards yields a zero lap and keeps the boundary
        if now < self._last_lap_ns:
            now = self._last_lap_ns
        duration = (now - self._last_lap_ns) / NS_PER_MS
        self._last_lap_ns = now
        self._laps.append(duration)
        return duration

    def __repr__(self) -> str:
        return f"Stopwatch(id={self._id!r}, state={self.state.value})"


__all__ = ["Stopwatch", "StopwatchSnapshot", "StopwatchState"]
