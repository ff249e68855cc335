"""Drive one shared stopwatch from many worker threads."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Tuple

from ..core.registry import StopwatchRegistry
from ..core.summary import LapSummary
from ..utils.logging import logger


@dataclass
class RaceConfig:
    workers: int = 4
    laps_per_worker: int = 25
    stopwatch_id: str = "race"


@dataclass
class RaceResult:
    stopwatch_id: str
    laps: Tuple[float, ...]
    summary: LapSummary
    expected_laps: int


class RaceRunner:
    """Start a stopwatch, let every worker lap it, then stop it.

    All workers wait on a barrier so their ``lap()`` calls actually overlap.
    The final ``stop()`` contributes one more lap, so a clean run records
    ``workers * laps_per_worker + 1`` entries.
    """

    def __init__(self, registry: StopwatchRegistry, config: RaceConfig):
        if config.workers < 1 or config.laps_per_worker < 0:
            raise ValueError("workers must be >= 1 and laps_per_worker >= 0")
        self.registry = registry
        self.config = config

    def _worker(self, stopwatch, barrier: threading.Barrier) -> int:
        barrier.wait()
        for _ in range(self.config.laps_per_worker):
            stopwatch.lap()
        return self.config.laps_per_worker

    def run(self) -> RaceResult:
        cfg = self.config
        stopwatch = self.registry.create(cfg.stopwatch_id)
        barrier = threading.Barrier(cfg.workers)
        logger.info("Race {id}: {workers} workers x {laps} laps", id=cfg.stopwatch_id, workers=cfg.workers, laps=cfg.laps_per_worker)

        stopwatch.start()
        with ThreadPoolExecutor(max_workers=cfg.workers, thread_name_prefix="racer") as pool:
            futures = [pool.submit(self._worker, stopwatch, barrier) for _ in range(cfg.workers)]
            done = sum(f.result() for f in futures)
        stopwatch.stop()

        laps = stopwatch.lap_times()
        expected = done + 1
        if len(laps) != expected:
            raise RuntimeError(f"lost lap updates: expected {expected}, recorded {len(laps)}")
        summary = LapSummary.from_laps(laps)
        logger.info(
            "Race {id} finished: {count} laps, total={total:.3f} ms, mean={mean:.4f} ms",
            id=cfg.stopwatch_id,
            count=summary.count,
            total=summary.total_ms,
            mean=summary.mean_ms,
        )
        return RaceResult(stopwatch_id=cfg.stopwatch_id, laps=laps, summary=summary, expected_laps=expected)


__all__ = ["RaceConfig", "RaceResult", "RaceRunner"]
