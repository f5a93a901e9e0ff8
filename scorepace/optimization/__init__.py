"""Confidence scoring and bet evaluation."""

from .betting import analyze_bet, evaluate_bet
from .confidence import ErrorProfile, base_confidence, confidence_at_threshold, confidence_ladder
