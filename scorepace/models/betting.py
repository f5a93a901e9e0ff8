"""Betting market inputs and the expected-value result."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BettingQuote:
    """A market over/under line with the user's confidence in it."""
    
    line: float
    confidence_pct: float
    
    def __post_init__(self):
        if not 0 <= self.confidence_pct <= 100:
            raise ValueError(
                f"Quote confidence must be between 0 and 100, got {self.confidence_pct}"
            )
    
    @property
    def confidence(self) -> float:
        """Confidence as a fraction (0 to 1)."""
        return self.confidence_pct / 100.0


@dataclass(frozen=True)
class BetSlip:
    """A bet that the final total reaches ``target_score``, costing ``cost`` to win 1."""
    
    target_score: float
    cost: float
    
    def __post_init__(self):
        if not 0 < self.cost < 1:
            raise ValueError(f"Bet cost must be between 0 and 1 (exclusive), got {self.cost}")


@dataclass(frozen=True)
class BettingAnalysis:
    """Engine confidence compared against the price of a bet slip."""
    
    target_score: float
    cost: float
    confidence: int
    implied_probability: float
    expected_value: float
    recommendation: str
    
    @property
    def is_favorable(self) -> bool:
        return self.recommendation == "favorable"
    
    def to_dict(self) -> dict:
        return {
            "target_score": self.target_score,
            "cost": self.cost,
            "confidence": self.confidence,
            "implied_probability": self.implied_probability,
            "expected_value": self.expected_value,
            "recommendation": self.recommendation,
        }
