"""Registry enforcing unique stopwatch identifiers."""

from __future__ import annotations

import threading
from typing import Dict, List, Optional

from .clock import Clock, monotonic_clock
from .errors import DuplicateIdError, InvalidArgumentError, UnknownIdError
from .stopwatch import Stopwatch


class StopwatchRegistry:
    """Create and enumerate stopwatches safely from many threads.

    Owned by the host application; every stopwatch it creates shares the
    registry's clock.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self.clock: Clock = clock or monotonic_clock
        self._entries: Dict[str, Stopwatch] = {}
        self._lock = threading.Lock()

    def create(self, stopwatch_id: str) -> Stopwatch:
        """Register and return a new idle stopwatch.

        Raises:
            InvalidArgumentError: if ``stopwatch_id`` is empty, ``None`` or not a string.
            DuplicateIdError: if the id is already registered.
        """

        if not isinstance(stopwatch_id, str) or not stopwatch_id:
            raise InvalidArgumentError("id is empty or not a string")
        stopwatch = Stopwatch(stopwatch_id, self.clock)
        with self._lock:
            if stopwatch_id in self._entries:
                raise DuplicateIdError(stopwatch_id)
            self._entries[stopwatch_id] = stopwatch
        return stopwatch

    def get(self, stopwatch_id: str) -> Stopwatch:
        with self._lock:
            try:
                return self._entries[stopwatch_id]
            except KeyError:
                raise UnknownIdError(stopwatch_id) from None

    def list(self) -> List[Stopwatch]:
        """Snapshot of every registered stopwatch, in creation order."""

        with self._lock:
            return list(self._entries.values())

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def __contains__(self, stopwatch_id: object) -> bool:
        with self._lock:
            return stopwatch_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["StopwatchRegistry"]
