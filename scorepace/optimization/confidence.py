"""
Heuristic confidence scoring for final-total predictions.

Base confidence is a weighted sum of seven factors (amount of data, error
stability, current error, time remaining, quarter, market agreement and
historical agreement).  Confidence that the final total reaches a given
target widens from the base value as the target drops below the
prediction, using the spread of the series' own prediction errors.

These are trust scores, not calibrated probabilities.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from ..config import (
    CONFIDENCE_WEIGHTS,
    FALLBACK_ERROR_STD,
    FALLBACK_FINAL_TOTAL,
    FULL_DATA_POINTS,
    GAME_SECONDS,
    LADDER_MAX_POINTS,
    LADDER_STEP,
    MAX_BASE_CONFIDENCE,
    MAX_THRESHOLD_CONFIDENCE,
    MIN_BASE_CONFIDENCE,
    SINGLE_QUOTE_MAX_DISTANCE,
    TWO_QUOTE_MAX_DISTANCE,
)
from ..models.betting import BettingQuote
from ..models.game import GamePoint
from ..models.historical import CombinedHistoricalTotal
from ..numeric import clamp, round1, round_half_up


@dataclass(frozen=True)
class ErrorProfile:
    """Spread of prediction errors over a completed series."""

    count: int
    avg_error: float
    error_std_dev: float
    final_total: int

    @classmethod
    def from_points(cls, points: Sequence[GamePoint]) -> "ErrorProfile":
        if not points:
            return cls(count=0, avg_error=0.0, error_std_dev=0.0, final_total=0)
        errors = np.asarray([p.error for p in points], dtype=float)
        return cls(
            count=len(points),
            avg_error=float(errors.mean()),
            error_std_dev=float(errors.std()),
            final_total=points[-1].total,
        )

    @property
    def average_accuracy(self) -> float:
        """Mean accuracy of the series' predictions, in percent."""
        if not self.count or not self.final_total:
            return 0.0
        return round1(100 - self.avg_error / self.final_total * 100)

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "avg_error": self.avg_error,
            "error_std_dev": self.error_std_dev,
            "final_total": self.final_total,
            "average_accuracy": self.average_accuracy,
        }


@dataclass(frozen=True)
class ThresholdConfidence:
    """Confidence that the final total reaches ``target_score``."""

    points_down: int
    target_score: int
    confidence: int

    def to_dict(self) -> dict:
        return {
            "points_down": self.points_down,
            "target_score": self.target_score,
            "confidence": self.confidence,
        }


def betting_factor(predicted_total: float, quotes: Sequence[BettingQuote] = ()) -> float:
    """
    Agreement between the prediction and the market lines.

    With one quote, trust grows with proximity to the line scaled by the
    quote's confidence.  With two, confidence is interpolated between the
    lower and the higher line and decays with distance outside them.
    """
    if not quotes:
        return 1.0

    ordered = sorted(quotes, key=lambda q: q.line)[:2]
    low = ordered[0]
    distance = abs(predicted_total - low.line)

    if len(ordered) == 1:
        alignment = max(0.0, 1 - distance / SINGLE_QUOTE_MAX_DISTANCE)
        return 0.7 + alignment * 0.3 * low.confidence

    high = ordered[1]
    if low.line <= predicted_total <= high.line:
        spread = high.line - low.line
        if spread <= 0:
            return 1.0
        position = (predicted_total - low.line) / spread
        interpolated = low.confidence - (low.confidence - high.confidence) * position
        return 0.7 + interpolated * 0.3

    if predicted_total < low.line:
        ratio = min(1.0, distance / TWO_QUOTE_MAX_DISTANCE)
        return 0.6 + low.confidence * 0.4 * (1 - ratio * 0.5)

    ratio = min(1.0, (predicted_total - high.line) / TWO_QUOTE_MAX_DISTANCE)
    return 0.5 + high.confidence * 0.5 * (1 - ratio)


def historical_factor(predicted_total: float, historical_total: Optional[CombinedHistoricalTotal]) -> float:
    """Boost within one historical std-dev, penalize beyond two."""
    if historical_total is None:
        return 1.0
    difference = abs(predicted_total - historical_total.avg)
    if difference < historical_total.std_dev:
        return 1.05
    if difference < 2 * historical_total.std_dev:
        return 0.95
    return 0.85


def confidence_factors(
    point: GamePoint,
    profile: ErrorProfile,
    quotes: Sequence[BettingQuote] = (),
    historical_total: Optional[CombinedHistoricalTotal] = None,
) -> dict:
    """The seven base-confidence factors, keyed like ``CONFIDENCE_WEIGHTS``."""
    final_total = profile.final_total or FALLBACK_FINAL_TOTAL
    error_ratio = point.error / (profile.avg_error or 1)

    return {
        "data": min(1.0, profile.count / FULL_DATA_POINTS),
        "stability": max(0.3, 1 - profile.error_std_dev / final_total),
        "error": max(0.4, 1 - (error_ratio - 1) * 0.3),
        "time": max(0.5, 1 - (point.time_remaining / GAME_SECONDS) * 0.3),
        "quarter": min(1.1, 0.7 + point.quarter * 0.1),
        "betting": betting_factor(point.predicted_total, quotes),
        "historical": historical_factor(point.predicted_total, historical_total),
    }


def base_confidence(
    point: GamePoint,
    profile: ErrorProfile,
    quotes: Sequence[BettingQuote] = (),
    historical_total: Optional[CombinedHistoricalTotal] = None,
) -> float:
    """
    Overall trust in ``point``'s prediction, in percent.

    Args:
        point: Point whose prediction is scored
        profile: Error profile of the full series
        quotes: Zero to two market quotes
        historical_total: Combined historical total, if known

    Returns:
        Confidence clamped to [30, 95]
    """
    factors = confidence_factors(point, profile, quotes, historical_total)
    score = sum(factors[name] * weight for name, weight in CONFIDENCE_WEIGHTS.items()) * 100
    return clamp(score, MIN_BASE_CONFIDENCE, MAX_BASE_CONFIDENCE)


def threshold_std_dev(profile: ErrorProfile) -> float:
    """Error spread used for z-scores, with fallbacks for a flat series."""
    return profile.error_std_dev or profile.avg_error * 0.5 or FALLBACK_ERROR_STD


def confidence_at_threshold(
    point: GamePoint,
    profile: ErrorProfile,
    target_score: float,
    base_confidence_pct: float,
) -> float:
    """
    Confidence (percent) that the final total reaches ``target_score``.

    Targets at or above the prediction get half the base confidence; below
    it, confidence climbs toward certainty in three linear segments of the
    error z-score.
    """
    points_below = point.predicted_total - target_score
    if points_below <= 0:
        return clamp(base_confidence_pct * 0.5, 0.0, MAX_THRESHOLD_CONFIDENCE)

    base = base_confidence_pct / 100
    z = points_below / threshold_std_dev(profile)

    if z <= 1:
        confidence = base + (1 - base) * z * 0.3
    elif z <= 2:
        confidence = base + (1 - base) * (0.3 + (z - 1) * 0.4)
    else:
        confidence = base + (1 - base) * 0.9

    return clamp(confidence * 100, 0.0, MAX_THRESHOLD_CONFIDENCE)


def confidence_ladder(
    point: GamePoint,
    profile: ErrorProfile,
    base_confidence_pct: float,
) -> List[ThresholdConfidence]:
    """Confidence for targets 2, 4, ... 20 points below the prediction."""
    ladder = []
    for points_down in range(LADDER_STEP, LADDER_MAX_POINTS + 1, LADDER_STEP):
        target = point.predicted_total - points_down
        confidence = confidence_at_threshold(point, profile, target, base_confidence_pct)
        ladder.append(ThresholdConfidence(points_down, target, round_half_up(confidence)))
    return ladder
