"""
Expected value of an over bet priced as "pay ``cost`` to win 1".

The price implies a probability of ``cost``; the bet is favorable when the
engine's confidence that the total reaches the target is higher.
"""

from ..models.betting import BetSlip, BettingAnalysis
from ..models.game import GamePoint
from ..numeric import round1, round2, round_half_up
from .confidence import ErrorProfile, confidence_at_threshold

FAVORABLE = "favorable"
UNFAVORABLE = "unfavorable"
NEUTRAL = "neutral"


def evaluate_bet(confidence_pct: float, slip: BetSlip) -> BettingAnalysis:
    """
    Compare a confidence against the slip's implied probability.

    Args:
        confidence_pct: Confidence (0-100) that the total reaches the target
        slip: Bet target and cost

    Returns:
        BettingAnalysis with EV per unit staked
    """
    implied_probability = slip.cost * 100
    expected_value = confidence_pct / 100 - slip.cost

    if confidence_pct > implied_probability:
        recommendation = FAVORABLE
    elif confidence_pct < implied_probability:
        recommendation = UNFAVORABLE
    else:
        recommendation = NEUTRAL

    return BettingAnalysis(
        target_score=slip.target_score,
        cost=slip.cost,
        confidence=round_half_up(confidence_pct),
        implied_probability=round1(implied_probability),
        expected_value=round2(expected_value),
        recommendation=recommendation,
    )


def analyze_bet(
    point: GamePoint,
    profile: ErrorProfile,
    slip: BetSlip,
    base_confidence_pct: float,
) -> BettingAnalysis:
    """Price ``slip`` against the prediction at ``point``."""
    confidence = confidence_at_threshold(point, profile, slip.target_score, base_confidence_pct)
    return evaluate_bet(confidence, slip)
