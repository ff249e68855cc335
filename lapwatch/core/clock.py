"""Injectable time sources.

A clock is any zero-argument callable returning an integer number of
nanoseconds. Only differences between readings are ever used, so the epoch
does not matter.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Iterable, List

NS_PER_MS = 1_000_000

Clock = Callable[[], int]


def monotonic_clock() -> int:
    return time.monotonic_ns()


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start_ns: int = 0):
        self._now = int(start_ns)
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            return self._now

    def advance(self, ms: float = 0.0, ns: int = 0) -> int:
        with self._lock:
            self._now += int(ms * NS_PER_MS) + int(ns)
            return self._now

    def set(self, now_ns: int) -> None:
        with self._lock:
            self._now = int(now_ns)


class SequenceClock:
    """Clock replaying a fixed list of instants, one per reading."""

    def __init__(self, instants_ns: Iterable[int]):
        self._instants: List[int] = [int(t) for t in instants_ns]
        self._index = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            if self._index >= len(self._instants):
                raise IndexError("clock sequence exhausted")
            now = self._instants[self._index]
            self._index += 1
            return now

    @property
    def remaining(self) -> int:
        with self._lock:
            return len(self._instants) - self._index


__all__ = ["Clock", "ManualClock", "SequenceClock", "NS_PER_MS", "monotonic_clock"]
