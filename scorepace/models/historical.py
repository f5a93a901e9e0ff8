"""Historical scoring summaries built from schedule text."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class TeamHistoricalStats:
    """
    Summary of a team's recent final scores.
    
    ``scores`` is most-recent-first, as schedules are pasted.  All derived
    reals are rounded to one decimal.
    """
    
    scores: Tuple[int, ...]
    avg: float
    median: float
    min: int
    max: int
    std_dev: float
    recent_avg: float
    previous_avg: float
    trend: float
    
    @property
    def count(self) -> int:
        return len(self.scores)
    
    def to_dict(self) -> dict:
        return {
            "scores": list(self.scores),
            "count": self.count,
            "avg": self.avg,
            "median": self.median,
            "min": self.min,
            "max": self.max,
            "std_dev": self.std_dev,
            "recent_avg": self.recent_avg,
            "previous_avg": self.previous_avg,
            "trend": self.trend,
        }


@dataclass(frozen=True)
class CombinedHistoricalTotal:
    """Expected game total from both teams' histories."""
    
    avg: float
    std_dev: float
    min: int
    max: int
    
    def to_dict(self) -> dict:
        return {"avg": self.avg, "std_dev": self.std_dev, "min": self.min, "max": self.max}
