"""Aggregate statistics over a lap snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable


@dataclass(frozen=True)
class LapSummary:
    """Aggregated lap statistics, all in milliseconds."""

    count: int = 0
    total_ms: float = 0.0
    best_ms: float = 0.0
    worst_ms: float = 0.0

    @classmethod
    def from_laps(cls, laps: Iterable[float]) -> "LapSummary":
        values = list(laps)
        if not values:
            return cls()
        return cls(count=len(values), total_ms=float(sum(values)), best_ms=min(values), worst_ms=max(values))

    @property
    def mean_ms(self) -> float:
        return self.total_ms / self.count if self.count else 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            "count": float(self.count),
            "total_ms": self.total_ms,
            "mean_ms": self.mean_ms,
            "best_ms": self.best_ms,
            "worst_ms": self.worst_ms,
        }


__all__ = ["LapSummary"]
