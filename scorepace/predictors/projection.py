"""
Final-score projection.

Final = current score + weighted velocity x time remaining, optionally
pulled toward the teams' historical total early in the game, then bounded
to a plausible NBA range.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..config import (
    GAME_SECONDS,
    HISTORICAL_WEIGHT_MAX,
    HISTORICAL_WEIGHT_MIN,
    HISTORICAL_WEIGHT_SCALE,
    PACE_DIFF_PENALTY,
    PACE_DIFF_THRESHOLD,
    PREDICTED_TOTAL_CEILING,
    PREDICTED_TOTAL_FLOOR,
    EngineConfig,
)
from ..models.game import GamePoint, ScoreEvent
from ..numeric import clamp, round_half_up
from .velocity import VelocityEstimate, estimate_velocity


@dataclass(frozen=True)
class Projection:
    """Projected final scores."""

    total: int
    home: int
    away: int


def clamp_predicted_total(predicted_total: float, current_total: int) -> int:
    """Bound a projected total to [max(current, 150), 350]."""
    low = max(current_total, PREDICTED_TOTAL_FLOOR)
    return int(clamp(predicted_total, low, PREDICTED_TOTAL_CEILING))


def historical_weight(progress: float, pace_diff: float) -> float:
    """Share of the historical average in the blended total."""
    weight = clamp((1 - progress) * HISTORICAL_WEIGHT_SCALE, HISTORICAL_WEIGHT_MIN, HISTORICAL_WEIGHT_MAX)
    if pace_diff > PACE_DIFF_THRESHOLD:
        weight *= PACE_DIFF_PENALTY
    return weight


def project_final_score(
    event: ScoreEvent,
    velocity: VelocityEstimate,
    historical_avg_total: Optional[float] = None,
    config: Optional[EngineConfig] = None,
    first_event: bool = False,
) -> Projection:
    """
    Project the final score from one event.

    Args:
        event: Current score event
        velocity: Velocity estimate at the event
        historical_avg_total: Combined historical average total, if known
        config: Engine configuration
        first_event: True for the first event of a sequence, which has no
            velocity and is projected at its current score

    Returns:
        Projection with every component at or above the current score
    """
    config = config or EngineConfig()
    elapsed = event.elapsed_seconds
    current_total = event.total

    if first_event or elapsed <= 0:
        return Projection(
            total=clamp_predicted_total(current_total, current_total),
            home=event.home,
            away=event.away,
        )

    progress = elapsed / GAME_SECONDS
    remaining = GAME_SECONDS - elapsed
    recent = config.recent_velocity_weight

    weighted_total = velocity.total * recent + (current_total / elapsed) * (1 - recent)
    weighted_home = velocity.home * recent + (event.home / elapsed) * (1 - recent)
    weighted_away = velocity.away * recent + (event.away / elapsed) * (1 - recent)

    predicted_total = round_half_up(current_total + weighted_total * remaining)
    predicted_home = round_half_up(event.home + weighted_home * remaining)
    predicted_away = round_half_up(event.away + weighted_away * remaining)

    if historical_avg_total and historical_avg_total > 0 and progress > config.historical_blend_start:
        projection = current_total / progress
        pace_diff = abs(projection - historical_avg_total) / historical_avg_total
        weight = historical_weight(progress, pace_diff)
        predicted_total = round_half_up(predicted_total * (1 - weight) + historical_avg_total * weight)

    predicted_total = max(predicted_total, current_total)
    predicted_home = max(predicted_home, event.home)
    predicted_away = max(predicted_away, event.away)

    # No scoring at all yet: fall back to straight proportional extrapolation.
    if weighted_total == 0:
        predicted_total = round_half_up(current_total / progress)
        predicted_home = round_half_up(event.home / progress)
        predicted_away = round_half_up(event.away / progress)

    return Projection(
        total=clamp_predicted_total(predicted_total, current_total),
        home=predicted_home,
        away=predicted_away,
    )


def predict_series(
    events: Sequence[ScoreEvent],
    config: Optional[EngineConfig] = None,
    historical_avg_total: Optional[float] = None,
) -> List[GamePoint]:
    """
    Annotate every event with its velocity and projection.

    Each point's error is measured against the last event's total, so the
    error column is only meaningful for a completed (or retrospective)
    sequence.
    """
    config = config or EngineConfig()
    if not events:
        return []

    final_total = events[-1].total
    points = []
    for index, event in enumerate(events):
        velocity = estimate_velocity(events, index, config)
        projection = project_final_score(event, velocity, historical_avg_total, config, first_event=index == 0)
        points.append(GamePoint(
            event=event,
            total_velocity=velocity.total,
            home_velocity=velocity.home,
            away_velocity=velocity.away,
            predicted_total=projection.total,
            predicted_home=projection.home,
            predicted_away=projection.away,
            error=abs(projection.total - final_total),
        ))
    return points
