"""
Historical scoring statistics from pasted schedule/result text.

Schedules are usually copied straight from a team page, e.g.::

    DATE        OPPONENT  RESULT     W-L
    Wed, 10/22  @ NY      L119-111   0-1
    Fri, 10/24  @ BKN     W131-124   1-1

The team's own score is the first number of a win and the second number of
a loss.  Lines without a result column fall back to the first plausible
three-digit score, and a text with no such lines at all is read as a plain
list of numbers.
"""

from __future__ import annotations

import logging
import math
import re
from typing import List, Optional, Sequence

import numpy as np

from ..config import BARE_SCORE_RANGE, RECENT_GAMES, RESULT_SCORE_RANGE
from ..models.historical import CombinedHistoricalTotal, TeamHistoricalStats
from ..numeric import round1, round_half_up

logger = logging.getLogger(__name__)

_RESULT_PREFIX_RE = re.compile(r"^[WL]\d+-\d+")
_RESULT_RE = re.compile(r"([WL])(\d+)-(\d+)")
_THREE_DIGIT_RE = re.compile(r"\b(\d{3})\b")
_MULTI_SPACE_RE = re.compile(r"\s{2,}")
_LOOSE_SPLIT_RE = re.compile(r"[,\s]+")


def _is_header(line: str) -> bool:
    upper = line.upper()
    return "DATE" in upper and ("OPPONENT" in upper or "RESULT" in upper)


def _in_range(value: float, bounds) -> bool:
    low, high = bounds
    return low <= value <= high


def extract_result_score(line: str) -> Optional[int]:
    """
    Team score from a ``W131-124`` / ``L119-111`` result token.

    Returns None when the line carries no result token or the score is
    outside the plausible range.
    """
    parts = line.split("\t")
    if len(parts) < 3:
        parts = _MULTI_SPACE_RE.split(line)

    result = None
    for part in parts:
        token = part.strip()
        if _RESULT_PREFIX_RE.match(token):
            result = token
            break
    if result is None:
        match = _RESULT_RE.search(line)
        if match is None:
            return None
        result = match.group(0)

    match = _RESULT_RE.search(result)
    outcome, first, second = match.group(1), int(match.group(2)), int(match.group(3))
    score = first if outcome == "W" else second
    return score if _in_range(score, RESULT_SCORE_RANGE) else None


def parse_historical_scores(text: Optional[str]) -> List[int]:
    """
    Extract a team's past final scores, most recent first.

    Args:
        text: Free-form schedule or score list

    Returns:
        List of scores (may be empty)
    """
    if not text or not text.strip():
        return []

    scores: List[int] = []
    for line in text.strip().splitlines():
        line = line.strip()
        if not line or _is_header(line):
            continue

        if _RESULT_RE.search(line):
            score = extract_result_score(line)
            if score is not None:
                scores.append(score)
            continue

        for token in _THREE_DIGIT_RE.findall(line):
            value = int(token)
            if _in_range(value, BARE_SCORE_RANGE):
                scores.append(value)
                break

    if scores:
        return scores

    fallback = []
    for token in _LOOSE_SPLIT_RE.split(text.strip()):
        try:
            value = float(token)
        except ValueError:
            continue
        if math.isfinite(value) and _in_range(value, BARE_SCORE_RANGE):
            fallback.append(round_half_up(value))
    return fallback


def compute_team_stats(scores: Sequence[int]) -> Optional[TeamHistoricalStats]:
    """
    Summarize a most-recent-first score list.

    Returns None for an empty list.
    """
    if not scores:
        return None

    values = np.asarray(scores, dtype=float)
    avg = float(values.mean())

    recent = values[:RECENT_GAMES]
    previous = values[RECENT_GAMES:2 * RECENT_GAMES]
    recent_avg = float(recent.mean())
    previous_avg = float(previous.mean()) if previous.size else avg

    return TeamHistoricalStats(
        scores=tuple(int(s) for s in scores),
        avg=round1(avg),
        median=round1(float(np.median(values))),
        min=int(values.min()),
        max=int(values.max()),
        std_dev=round1(float(values.std())),
        recent_avg=round1(recent_avg),
        previous_avg=round1(previous_avg),
        trend=round1(recent_avg - previous_avg),
    )


def team_stats_from_text(text: Optional[str], label: str = "team") -> Optional[TeamHistoricalStats]:
    """Parse and summarize one team's history block."""
    scores = parse_historical_scores(text)
    if not scores:
        if text and text.strip():
            logger.warning(f"No historical scores found in {label} history")
        return None
    logger.info(f"Found {len(scores)} historical scores for {label}")
    return compute_team_stats(scores)


def combine_historical_totals(
    home: Optional[TeamHistoricalStats],
    away: Optional[TeamHistoricalStats],
) -> Optional[CombinedHistoricalTotal]:
    """Expected game total from both teams; None unless both are known."""
    if home is None or away is None:
        return None

    return CombinedHistoricalTotal(
        avg=round1(home.avg + away.avg),
        std_dev=round1(math.sqrt(home.std_dev ** 2 + away.std_dev ** 2)),
        min=home.min + away.min,
        max=home.max + away.max,
    )
