"""
Windowed scoring-velocity estimation.

The raw rate over the recent window is damped by a pace factor built from
how often the window actually produced points and, when play descriptions
are available, how well the teams were shooting.  The result is kept
within a band around the game-long scoring rate so a short burst cannot
dominate the projection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..config import (
    DEFAULT_EVENT_DENSITY,
    DEFAULT_SCORING_FREQUENCY,
    DEFAULT_SHOOTING_EFFICIENCY,
    PACE_FACTOR_FLOOR,
    PACE_WEIGHTS,
    SHOOTING_EFFICIENCY_ANCHOR,
    SHOOTING_EFFICIENCY_BASE,
    SHOOTING_EFFICIENCY_MAX,
    SHOOTING_EFFICIENCY_MIN,
    SHOOTING_EFFICIENCY_SLOPE,
    TURNOVER_MISS_WEIGHT,
    VELOCITY_MAX_RATIO,
    VELOCITY_MIN_RATIO,
    EngineConfig,
)
from ..models.game import ScoreEvent
from ..numeric import clamp, safe_div

logger = logging.getLogger(__name__)

MISS = "miss"
MAKE = "make"
TURNOVER = "turnover"


@dataclass(frozen=True)
class VelocityEstimate:
    """Scoring rates in points/second."""

    total: float
    home: float
    away: float

    @classmethod
    def zero(cls) -> "VelocityEstimate":
        return cls(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class PaceProfile:
    """Scoring-frequency and shot-outcome tallies for one window."""

    total_periods: int
    scoring_periods: int
    total_events: int
    made_shots: float
    missed_shots: float

    @property
    def scoring_frequency(self) -> float:
        return safe_div(self.scoring_periods, self.total_periods, DEFAULT_SCORING_FREQUENCY)

    @property
    def event_density(self) -> float:
        return safe_div(self.scoring_periods, self.total_events, DEFAULT_EVENT_DENSITY)

    @property
    def shooting_efficiency(self) -> float:
        attempts = self.made_shots + self.missed_shots
        if attempts <= 0:
            return DEFAULT_SHOOTING_EFFICIENCY
        make_rate = self.made_shots / attempts
        efficiency = SHOOTING_EFFICIENCY_BASE + (make_rate - SHOOTING_EFFICIENCY_ANCHOR) * SHOOTING_EFFICIENCY_SLOPE
        return clamp(efficiency, SHOOTING_EFFICIENCY_MIN, SHOOTING_EFFICIENCY_MAX)

    @property
    def combined_frequency(self) -> float:
        return (
            self.scoring_frequency * PACE_WEIGHTS["scoring_frequency"]
            + self.event_density * PACE_WEIGHTS["event_density"]
            + self.shooting_efficiency * PACE_WEIGHTS["shooting_efficiency"]
        )

    @property
    def pace_factor(self) -> float:
        """Maps combined frequency 0 -> 0.5 and 1 -> 1.0."""
        return PACE_FACTOR_FLOOR + self.combined_frequency * (1 - PACE_FACTOR_FLOOR)


def classify_play(play_text: Optional[str]) -> Optional[str]:
    """
    Classify a play description as a miss, a make or a turnover.

    Misses are checked first so "misses free throw" never counts as a make.
    """
    if not play_text:
        return None
    text = play_text.lower()
    if "misses" in text or "miss " in text or " missed" in text or ("miss" in text and "makes" not in text):
        return MISS
    if "makes" in text or "make " in text:
        return MAKE
    if "turnover" in text or "turn over" in text:
        return TURNOVER
    return None


def build_pace_profile(window: Sequence[ScoreEvent], start: int, span: int, period: int) -> PaceProfile:
    """
    Bucket the window into fixed sub-periods starting at ``start``.

    A sub-period counts as scoring when two consecutive events inside it
    show a different total.
    """
    total_periods = span // period
    scoring_periods = 0
    total_events = 0
    made = 0.0
    missed = 0.0

    for index in range(total_periods):
        period_start = start + index * period
        period_end = period_start + period
        in_period = [e for e in window if period_start <= e.elapsed_seconds < period_end]
        total_events += len(in_period)

        for event in in_period:
            outcome = classify_play(event.play_text)
            if outcome == MISS:
                missed += 1
            elif outcome == MAKE:
                made += 1
            elif outcome == TURNOVER:
                missed += TURNOVER_MISS_WEIGHT

        for previous, current in zip(in_period, in_period[1:]):
            if previous.total != current.total:
                scoring_periods += 1
                break

    return PaceProfile(
        total_periods=total_periods,
        scoring_periods=scoring_periods,
        total_events=total_events,
        made_shots=made,
        missed_shots=missed,
    )


def _newest_scoring_event(window: List[ScoreEvent]) -> ScoreEvent:
    """Last event of the window, stepping back past a tail that ties the oldest score."""
    oldest = window[0]
    newest = window[-1]
    if newest.home == oldest.home and newest.away == oldest.away and len(window) > 2:
        for event in reversed(window[:-1]):
            if event.home != oldest.home or event.away != oldest.away:
                return event
    return newest


def estimate_velocity(
    events: Sequence[ScoreEvent],
    index: int,
    config: Optional[EngineConfig] = None,
) -> VelocityEstimate:
    """
    Estimate scoring velocity at ``events[index]``.

    Args:
        events: Finalized, time-ordered score events
        index: Position of the event being evaluated
        config: Engine configuration (window size, span gates)

    Returns:
        VelocityEstimate in points/second
    """
    config = config or EngineConfig()
    if index < 1:
        return VelocityEstimate.zero()

    current = events[index]
    elapsed = current.elapsed_seconds
    if elapsed <= 0:
        return VelocityEstimate.zero()

    overall_rate = current.total / elapsed
    # The per-team fallback is not subject to the minimum-span gate.
    fallback = VelocityEstimate(
        total=overall_rate,
        home=current.home / elapsed,
        away=current.away / elapsed,
    )

    window_start = elapsed - config.effective_window
    window = [e for e in events[: index + 1] if e.elapsed_seconds >= window_start]
    if len(window) < 2:
        logger.debug(f"t={elapsed}: fewer than 2 events in window, using overall rate")
        return fallback

    oldest = window[0]
    newest = _newest_scoring_event(window)
    span = newest.elapsed_seconds - oldest.elapsed_seconds
    if span <= 0 or span < config.min_window_span:
        logger.debug(f"t={elapsed}: window span {span}s too short, using overall rate")
        return fallback

    profile = build_pace_profile(window, oldest.elapsed_seconds, span, config.scoring_period)
    pace = profile.pace_factor

    total_velocity = (newest.total - oldest.total) / span * pace
    home_velocity = (newest.home - oldest.home) / span * pace
    away_velocity = (newest.away - oldest.away) / span * pace

    max_velocity = overall_rate * VELOCITY_MAX_RATIO
    min_velocity = overall_rate * VELOCITY_MIN_RATIO
    return VelocityEstimate(
        total=clamp(total_velocity, min_velocity, max_velocity),
        home=clamp(home_velocity, 0.0, max_velocity),
        away=clamp(away_velocity, 0.0, max_velocity),
    )
