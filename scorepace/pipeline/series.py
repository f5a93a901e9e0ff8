"""End-to-end recomputation: raw game text in, derived series out.

Every call rebuilds the whole series from the inputs it is given.  Nothing
is cached or shared between calls, so separate games can be processed in
parallel and a superseded result can simply be discarded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..config import EngineConfig
from ..data.historical import combine_historical_totals, team_stats_from_text
from ..data.normalize import (
    INPUT_COMBINED,
    ParseError,
    normalize_combined_text,
    normalize_csv_text,
    normalize_quarter_blocks,
)
from ..models.betting import BetSlip, BettingAnalysis, BettingQuote
from ..models.game import GamePoint, ScoreEvent
from ..models.historical import CombinedHistoricalTotal, TeamHistoricalStats
from ..optimization.betting import analyze_bet
from ..optimization.confidence import (
    ErrorProfile,
    ThresholdConfidence,
    base_confidence,
    confidence_ladder,
)
from ..predictors.projection import predict_series

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameInputs:
    """Complete snapshot of the raw inputs for one game."""

    quarter_blocks: Tuple[Optional[str], ...] = ()
    combined_text: Optional[str] = None
    csv_text: Optional[str] = None
    home_history: Optional[str] = None
    away_history: Optional[str] = None
    quotes: Tuple[BettingQuote, ...] = ()
    bet_slip: Optional[BetSlip] = None
    selected_index: Optional[int] = None

    def __post_init__(self):
        if len(self.quotes) > 2:
            raise ValueError(f"At most two betting quotes are supported, got {len(self.quotes)}")


@dataclass(frozen=True)
class PointAnalysis:
    """Confidence and betting read-out for one selected point."""

    index: int
    base_confidence: float
    ladder: Tuple[ThresholdConfidence, ...] = ()
    betting: Optional[BettingAnalysis] = None

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "base_confidence": self.base_confidence,
            "ladder": [rung.to_dict() for rung in self.ladder],
            "betting": self.betting.to_dict() if self.betting else None,
        }


@dataclass(frozen=True)
class DerivedSeries:
    """Everything derived from one :class:`GameInputs` snapshot."""

    events: Tuple[ScoreEvent, ...]
    points: Tuple[GamePoint, ...]
    error_profile: ErrorProfile
    home_stats: Optional[TeamHistoricalStats] = None
    away_stats: Optional[TeamHistoricalStats] = None
    historical_total: Optional[CombinedHistoricalTotal] = None
    analysis: Optional[PointAnalysis] = None

    @property
    def final_point(self) -> GamePoint:
        return self.points[-1]

    def to_dict(self) -> dict:
        return {
            "points": [p.to_dict() for p in self.points],
            "error_profile": self.error_profile.to_dict(),
            "home_stats": self.home_stats.to_dict() if self.home_stats else None,
            "away_stats": self.away_stats.to_dict() if self.away_stats else None,
            "historical_total": self.historical_total.to_dict() if self.historical_total else None,
            "analysis": self.analysis.to_dict() if self.analysis else None,
        }


def normalize_inputs(inputs: GameInputs) -> List[ScoreEvent]:
    """
    Pick the game input shape and normalize it.

    Quarter blocks take priority over combined text, which takes priority
    over an uploaded file.

    Raises:
        ParseError: If the chosen input yields no rows, or no input is given
    """
    if any(block and block.strip() for block in inputs.quarter_blocks):
        return normalize_quarter_blocks(inputs.quarter_blocks)
    if inputs.combined_text and inputs.combined_text.strip():
        return normalize_combined_text(inputs.combined_text)
    if inputs.csv_text and inputs.csv_text.strip():
        return normalize_csv_text(inputs.csv_text)
    raise ParseError("No game data provided", INPUT_COMBINED)


def analyze_point(
    points: Sequence[GamePoint],
    index: int,
    profile: ErrorProfile,
    quotes: Tuple[BettingQuote, ...] = (),
    historical_total: Optional[CombinedHistoricalTotal] = None,
    bet_slip: Optional[BetSlip] = None,
) -> PointAnalysis:
    """
    Confidence, ladder and optional bet analysis at ``points[index]``.

    Negative indices count from the end, as with list indexing.
    """
    if not points:
        raise ValueError("Cannot analyze an empty series")
    if not -len(points) <= index < len(points):
        raise ValueError(f"Point index {index} out of range for {len(points)} points")

    index = index % len(points)
    point = points[index]
    confidence = base_confidence(point, profile, quotes, historical_total)
    betting = analyze_bet(point, profile, bet_slip, confidence) if bet_slip else None

    return PointAnalysis(
        index=index,
        base_confidence=confidence,
        ladder=tuple(confidence_ladder(point, profile, confidence)),
        betting=betting,
    )


def compute_series(inputs: GameInputs, config: Optional[EngineConfig] = None) -> DerivedSeries:
    """
    Recompute the full derived series for one game.

    Args:
        inputs: Raw game text, histories, market quotes and bet slip
        config: Engine configuration

    Returns:
        DerivedSeries with one GamePoint per normalized event

    Raises:
        ParseError: If the game input yields no usable rows
    """
    config = config or EngineConfig()
    events = tuple(normalize_inputs(inputs))

    home_stats = team_stats_from_text(inputs.home_history, "home")
    away_stats = team_stats_from_text(inputs.away_history, "away")
    historical_total = combine_historical_totals(home_stats, away_stats)
    historical_avg = historical_total.avg if historical_total else None

    points = tuple(predict_series(events, config, historical_avg))
    profile = ErrorProfile.from_points(points)

    index = inputs.selected_index if inputs.selected_index is not None else len(points) - 1
    analysis = analyze_point(points, index, profile, inputs.quotes, historical_total, inputs.bet_slip)

    logger.info(
        f"Computed {len(points)} points (window {config.velocity_window}s); "
        f"final prediction {points[-1].predicted_total}"
    )
    return DerivedSeries(
        events=events,
        points=points,
        error_profile=profile,
        home_stats=home_stats,
        away_stats=away_stats,
        historical_total=historical_total,
        analysis=analysis,
    )
