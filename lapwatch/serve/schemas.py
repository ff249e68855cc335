"""Pydantic models for FastAPI I/O."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from ..core.stopwatch import Stopwatch, StopwatchState
from ..core.summary import LapSummary


class CreateStopwatch(BaseModel):
    id: str = Field(..., description="Unique, non-empty stopwatch identifier")


class StopwatchModel(BaseModel):
    id: str
    state: StopwatchState
    laps: List[float]
    elapsed_ms: float

    @classmethod
    def from_stopwatch(cls, stopwatch: Stopwatch) -> "StopwatchModel":
        snap = stopwatch.snapshot()
        return cls(id=snap.id, state=snap.state, laps=list(snap.laps), elapsed_ms=snap.elapsed_ms)


class LapModel(BaseModel):
    id: str
    lap_ms: float
    lap_index: int
    state: StopwatchState


class SummaryModel(BaseModel):
    id: str
    count: int
    total_ms: float
    mean_ms: float
    best_ms: float
    worst_ms: float

    @classmethod
    def from_summary(cls, stopwatch_id: str, summary: LapSummary) -> "SummaryModel":
        return cls(
            id=stopwatch_id,
            count=summary.count,
            total_ms=summary.total_ms,
            mean_ms=summary.mean_ms,
            best_ms=summary.best_ms,
            worst_ms=summary.worst_ms,
        )


__all__ = ["CreateStopwatch", "StopwatchModel", "LapModel", "SummaryModel"]
