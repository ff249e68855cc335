from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from lapwatch.core.summary import LapSummary


def test_empty_summary():
    summary = LapSummary.from_laps([])
    assert summary.count == 0
    assert summary.mean_ms == 0.0
    assert summary.as_dict()["total_ms"] == 0.0


def test_summary_statistics():
    summary = LapSummary.from_laps((2.0, 6.0, 4.0))
    assert summary.count == 3
    assert summary.total_ms == 12.0
    assert summary.mean_ms == 4.0
    assert summary.best_ms == 2.0
    assert summary.worst_ms == 6.0


def test_stopwatch_summary(registry, clock):
    sw = registry.create("summary")
    sw.start()
    clock.advance(ms=1)
    sw.lap()
    clock.advance(ms=3)
    sw.stop()
    assert sw.summary() == LapSummary(count=2, total_ms=4.0, best_ms=1.0, worst_ms=3.0)
