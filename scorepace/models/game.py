"""Score event and game point models."""

from dataclasses import dataclass

from ..config import GAME_SECONDS, NUM_QUARTERS


def format_clock(seconds: int) -> str:
    """Format elapsed seconds as ``M:SS`` (``701 -> '11:41'``)."""
    seconds = int(seconds)
    return f"{seconds // 60}:{seconds % 60:02d}"


@dataclass(frozen=True)
class ScoreEvent:
    """One observed score at a moment of the game."""
    
    elapsed_seconds: int
    home: int
    away: int
    quarter: int
    play_text: str = ""
    
    def __post_init__(self):
        """Validate event data."""
        if not 0 <= self.elapsed_seconds <= GAME_SECONDS:
            raise ValueError(
                f"Elapsed seconds must be between 0 and {GAME_SECONDS}, got {self.elapsed_seconds}"
            )
        
        if self.home < 0 or self.away < 0:
            raise ValueError(f"Scores must be non-negative, got {self.home}-{self.away}")
        
        if not 1 <= self.quarter <= NUM_QUARTERS:
            raise ValueError(f"Quarter must be between 1 and {NUM_QUARTERS}, got {self.quarter}")
    
    @property
    def total(self) -> int:
        return self.home + self.away
    
    @property
    def clock(self) -> str:
        return format_clock(self.elapsed_seconds)
    
    def to_dict(self) -> dict:
        """Convert event to dictionary."""
        return {
            "elapsed_seconds": self.elapsed_seconds,
            "time": self.clock,
            "home": self.home,
            "away": self.away,
            "quarter": self.quarter,
            "play_text": self.play_text,
        }


@dataclass(frozen=True)
class GamePoint:
    """
    A score event annotated with its velocity and final-score projection.
    
    Velocities are stored in points/second; ``velocity_per_minute`` is the
    display unit.  ``error`` is measured against the last observed total of
    the sequence the point was computed from.
    """
    
    event: ScoreEvent
    total_velocity: float
    home_velocity: float
    away_velocity: float
    predicted_total: int
    predicted_home: int
    predicted_away: int
    error: int
    
    @property
    def elapsed_seconds(self) -> int:
        return self.event.elapsed_seconds
    
    @property
    def home(self) -> int:
        return self.event.home
    
    @property
    def away(self) -> int:
        return self.event.away
    
    @property
    def total(self) -> int:
        return self.event.total
    
    @property
    def quarter(self) -> int:
        return self.event.quarter
    
    @property
    def time_remaining(self) -> int:
        return GAME_SECONDS - self.event.elapsed_seconds
    
    @property
    def velocity_per_minute(self) -> float:
        return self.total_velocity * 60
    
    def to_dict(self) -> dict:
        """Convert game point to dictionary."""
        data = self.event.to_dict()
        data.update({
            "total": self.total,
            "velocity": self.velocity_per_minute,
            "home_velocity": self.home_velocity * 60,
            "away_velocity": self.away_velocity * 60,
            "predicted_total": self.predicted_total,
            "predicted_home": self.predicted_home,
            "predicted_away": self.predicted_away,
            "error": self.error,
        })
        return data
