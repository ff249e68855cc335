"""Fan stopwatch events out to websocket subscribers using asyncio queues."""

from __future__ import annotations

import asyncio
import itertools
import time
from typing import Any, Dict, List


class EventBroadcaster:
    """Every subscriber gets its own queue; events are numbered in publish order."""

    def __init__(self):
        self.connections: List[asyncio.Queue] = []
        self._lock = asyncio.Lock()
        self._sequence = itertools.count(1)

    async def register(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue()
        async with self._lock:
            self.connections.append(queue)
        return queue

    async def unregister(self, queue: asyncio.Queue) -> None:
        async with self._lock:
            if queue in self.connections:
                self.connections.remove(queue)

    async def publish(self, event: str, stopwatch_id: str, **payload: Any) -> Dict[str, Any]:
        message: Dict[str, Any] = {
            "seq": next(self._sequence),
            "event": event,
            "id": stopwatch_id,
            "ts": time.time(),
            **payload,
        }
        async with self._lock:
            for queue in self.connections:
                queue.put_nowait(message)
        return message


__all__ = ["EventBroadcaster"]
