"""
Tuned constants and engine configuration.

Every constant below was fitted by hand against observed NBA timelines.
Values are exact; change them only together with a re-check of the
prediction bounds in the test-suite.
"""

from dataclasses import dataclass

# Game clock
GAME_SECONDS = 2880
QUARTER_SECONDS = 720
NUM_QUARTERS = 4

# Velocity window (seconds)
MIN_VELOCITY_WINDOW = 30
MAX_VELOCITY_WINDOW = 720
VELOCITY_WINDOW_STEP = 30
DEFAULT_VELOCITY_WINDOW = 120
MIN_EFFECTIVE_WINDOW = 180  # never look back less than 3 minutes
MIN_WINDOW_SPAN = 60
SCORING_PERIOD_SECONDS = 15

# Shot-outcome weighting
TURNOVER_MISS_WEIGHT = 0.5
DEFAULT_SCORING_FREQUENCY = 0.5
DEFAULT_EVENT_DENSITY = 0.1
DEFAULT_SHOOTING_EFFICIENCY = 0.5
SHOOTING_EFFICIENCY_BASE = 0.2
SHOOTING_EFFICIENCY_ANCHOR = 0.35  # make rate mapped to the base value
SHOOTING_EFFICIENCY_SLOPE = 2.67  # 0.35 -> 0.2, 0.5 -> 0.6, 0.65 -> 1.0
SHOOTING_EFFICIENCY_MIN = 0.15
SHOOTING_EFFICIENCY_MAX = 1.0

PACE_WEIGHTS = {
    "scoring_frequency": 0.40,
    "event_density": 0.15,
    "shooting_efficiency": 0.45,
}
PACE_FACTOR_FLOOR = 0.5

VELOCITY_MIN_RATIO = 0.5
VELOCITY_MAX_RATIO = 2.0

# Prediction
RECENT_VELOCITY_WEIGHT = 0.7
HISTORICAL_BLEND_START = 0.10
HISTORICAL_WEIGHT_SCALE = 0.3
HISTORICAL_WEIGHT_MIN = 0.05
HISTORICAL_WEIGHT_MAX = 0.25
PACE_DIFF_THRESHOLD = 0.2
PACE_DIFF_PENALTY = 0.5
PREDICTED_TOTAL_FLOOR = 150
PREDICTED_TOTAL_CEILING = 350

# Historical score parsing
RESULT_SCORE_RANGE = (70, 200)
BARE_SCORE_RANGE = (80, 200)
RECENT_GAMES = 5

# Confidence.  The weights add up to 1.20; they are not normalized.
CONFIDENCE_WEIGHTS = {
    "data": 0.20,
    "stability": 0.25,
    "error": 0.20,
    "time": 0.15,
    "quarter": 0.20,
    "betting": 0.12,
    "historical": 0.08,
}
MIN_BASE_CONFIDENCE = 30.0
MAX_BASE_CONFIDENCE = 95.0
MAX_THRESHOLD_CONFIDENCE = 99.0
FULL_DATA_POINTS = 30
FALLBACK_FINAL_TOTAL = 100
FALLBACK_ERROR_STD = 10.0
SINGLE_QUOTE_MAX_DISTANCE = 50.0
TWO_QUOTE_MAX_DISTANCE = 30.0
LADDER_STEP = 2
LADDER_MAX_POINTS = 20


@dataclass
class EngineConfig:
    """User-adjustable knobs for one recomputation pass."""

    velocity_window: int = DEFAULT_VELOCITY_WINDOW
    min_effective_window: int = MIN_EFFECTIVE_WINDOW
    min_window_span: int = MIN_WINDOW_SPAN
    scoring_period: int = SCORING_PERIOD_SECONDS
    recent_velocity_weight: float = RECENT_VELOCITY_WEIGHT
    historical_blend_start: float = HISTORICAL_BLEND_START

    def __post_init__(self):
        if not MIN_VELOCITY_WINDOW <= self.velocity_window <= MAX_VELOCITY_WINDOW:
            raise ValueError(
                f"Velocity window must be between {MIN_VELOCITY_WINDOW} and "
                f"{MAX_VELOCITY_WINDOW} seconds, got {self.velocity_window}"
            )
        if self.velocity_window % VELOCITY_WINDOW_STEP != 0:
            raise ValueError(
                f"Velocity window must be a multiple of {VELOCITY_WINDOW_STEP} seconds, "
                f"got {self.velocity_window}"
            )
        if self.scoring_period <= 0:
            raise ValueError(f"Scoring period must be positive, got {self.scoring_period}")
        if not 0.0 <= self.recent_velocity_weight <= 1.0:
            raise ValueError(
                f"Recent velocity weight must be between 0 and 1, got {self.recent_velocity_weight}"
            )

    @property
    def effective_window(self) -> int:
        """Look-back actually used by the velocity estimator."""
        return max(self.velocity_window, self.min_effective_window)
