"""Value objects passed between the engine stages."""

from .betting import BetSlip, BettingAnalysis, BettingQuote
from .game import GamePoint, ScoreEvent, format_clock
from .historical import CombinedHistoricalTotal, TeamHistoricalStats

__all__ = [
    "BetSlip",
    "BettingAnalysis",
    "BettingQuote",
    "CombinedHistoricalTotal",
    "GamePoint",
    "ScoreEvent",
    "TeamHistoricalStats",
    "format_clock",
]
