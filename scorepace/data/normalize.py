"""
Play-by-play text normalization.

Converts pasted or uploaded score timelines into an ordered, deduplicated
sequence of :class:`ScoreEvent` objects.  Three input shapes are accepted:

* four independent per-quarter blocks (``TIME  PLAY  HOME  AWAY`` rows),
* one combined block whose quarter boundaries are inferred,
* a plain CSV-like file (``time,home,away[,...]``, elapsed game clock).

Parsing is lenient: a malformed row is dropped and parsing continues.  Only
an input that yields no rows at all is an error.  No I/O here.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence

from ..config import GAME_SECONDS, NUM_QUARTERS, QUARTER_SECONDS
from ..models.game import ScoreEvent
from ..numeric import round_half_up

logger = logging.getLogger(__name__)

EMPTY_INPUT = "EmptyInput"

INPUT_QUARTERS = "quarters"
INPUT_COMBINED = "combined"
INPUT_CSV = "csv"

_INT_PREFIX_RE = re.compile(r"^\+?(\d+)")
_QUARTER_NUMBER_RE = re.compile(r"([1-4])(st|nd|rd|th)?", re.IGNORECASE)
_LOOSE_SPLIT_RE = re.compile(r"[,\s]+")
_LEADING_CLOCK_RE = re.compile(r"^\s*\d+:\d+(\.\d+)?")

ROLLOVER_MIN_MINUTES = 11
ROLLOVER_MAX_PREVIOUS = 600  # 10:00 remaining


class ParseError(ValueError):
    """Raised when a whole game input yields zero usable rows."""

    def __init__(self, message: str, input_kind: str):
        super().__init__(message)
        self.kind = EMPTY_INPUT
        self.input_kind = input_kind


# ── Token helpers ─────────────────────────────────────────────────────────────

def _leading_int(token: str) -> Optional[int]:
    """Parse the leading digits of a token (``'34 '`` -> 34, ``'x'`` -> None)."""
    match = _INT_PREFIX_RE.match(token.strip())
    return int(match.group(1)) if match else None


def _is_header(line: str) -> bool:
    upper = line.upper()
    return "TIME" in upper and "PLAY" in upper


def _is_marker(line: str) -> bool:
    lower = line.lower()
    return "end of" in lower or "quarter" in lower


def split_row(line: str) -> List[str]:
    """Split a row on tabs, then commas, then any run of commas/whitespace."""
    parts = [p.strip() for p in line.split("\t") if p.strip()]
    if len(parts) < 3:
        parts = [p.strip() for p in line.split(",") if p.strip()]
    if len(parts) < 3:
        parts = [p for p in _LOOSE_SPLIT_RE.split(line.strip()) if p]
    return parts


def _clock_seconds(raw: str) -> Optional[int]:
    parts = raw.split(":")
    if len(parts) != 2:
        return None
    minutes = _leading_int(parts[0])
    seconds = _leading_int(parts[1])
    if minutes is None or seconds is None:
        return None
    return minutes * 60 + seconds


# ── Time parsing ──────────────────────────────────────────────────────────────

def parse_time(raw: Optional[str], quarter: int = 1) -> Optional[int]:
    """
    Convert a quarter clock reading to elapsed game seconds.

    Accepts ``MM:SS`` (time remaining in a 12-minute quarter) or a bare
    decimal such as ``58.5`` (seconds remaining).

    Args:
        raw: Clock text as shown in the play-by-play
        quarter: Quarter the reading belongs to (1-based)

    Returns:
        Elapsed seconds since tip-off, or None for end-of-quarter and
        unparseable text
    """
    if not raw:
        return None
    text = raw.strip()
    if not text or "end" in text.lower():
        return None

    if "." in text and ":" not in text:
        try:
            remaining = float(text)
        except ValueError:
            return None
    else:
        remaining = _clock_seconds(text)
        if remaining is None:
            return None

    if not 0 <= remaining <= QUARTER_SECONDS:
        return None
    return (quarter - 1) * QUARTER_SECONDS + round_half_up(QUARTER_SECONDS - remaining)


def parse_elapsed_clock(raw: Optional[str]) -> Optional[int]:
    """Parse an elapsed game clock (``M:SS`` or bare seconds) as written by the CSV exporter."""
    if not raw:
        return None
    text = raw.strip()
    if ":" in text:
        elapsed = _clock_seconds(text)
    else:
        try:
            elapsed = round_half_up(float(text))
        except (ValueError, OverflowError):
            return None
    if elapsed is None or not 0 <= elapsed <= GAME_SECONDS:
        return None
    return elapsed


# ── Row parsing ───────────────────────────────────────────────────────────────

def parse_row(line: str, quarter: int) -> Optional[ScoreEvent]:
    """
    Parse one play-by-play row into a ScoreEvent.

    The first token is the clock, the last two tokens are the home and away
    scores and anything in between is the play description.  Returns None
    if the row cannot be used.
    """
    parts = split_row(line)
    if len(parts) < 3:
        return None

    elapsed = parse_time(parts[0], quarter)
    if elapsed is None:
        return None

    home = _leading_int(parts[-2])
    away = _leading_int(parts[-1])
    if home is None or away is None:
        return None

    try:
        return ScoreEvent(
            elapsed_seconds=elapsed,
            home=home,
            away=away,
            quarter=quarter,
            play_text=" ".join(parts[1:-2]),
        )
    except ValueError as e:
        logger.debug(f"Dropping row {line!r}: {e}")
        return None


def parse_quarter_block(text: str, quarter: int) -> List[ScoreEvent]:
    """Parse one quarter's pasted rows; every row belongs to ``quarter``."""
    events = []
    for line in text.strip().splitlines():
        line = line.strip()
        if not line or _is_header(line) or _is_marker(line):
            continue
        event = parse_row(line, quarter)
        if event is None:
            logger.debug(f"Q{quarter}: skipped row {line!r}")
            continue
        events.append(event)
    return events


def _marker_quarter(line: str, current: int) -> int:
    """Quarter in effect after an explicit marker line."""
    # "12:00  Start of the 2nd Quarter": the clock is not the quarter number.
    match = _QUARTER_NUMBER_RE.search(_LEADING_CLOCK_RE.sub("", line))
    if not match:
        return current
    number = int(match.group(1))
    if "end of" in line.lower():
        return number + 1
    return number


def parse_combined_text(text: str) -> List[ScoreEvent]:
    """
    Parse a whole game pasted as one block.

    Quarter boundaries come from explicit markers ("End of 1st Quarter",
    "2nd Quarter").  Between markers, a clock reading of 11:00 or more that
    follows a reading under 10:00 starts the next quarter.
    """
    events = []
    quarter = 1
    last_clock: Optional[int] = None

    for line in text.strip().splitlines():
        line = line.strip()
        if not line or _is_header(line):
            continue

        if _is_marker(line):
            quarter = _marker_quarter(line, quarter)
            last_clock = None
            continue

        parts = split_row(line)
        if not parts:
            continue

        token = parts[0]
        if ":" in token and "." not in token:
            clock = _clock_seconds(token)
            if clock is not None:
                if (
                    clock // 60 >= ROLLOVER_MIN_MINUTES
                    and last_clock is not None
                    and last_clock < ROLLOVER_MAX_PREVIOUS
                ):
                    quarter += 1
                    logger.debug(f"Clock reset to {token}; inferred quarter {quarter}")
                last_clock = clock

        if quarter > NUM_QUARTERS:
            logger.debug(f"Dropping overtime row {line!r}")
            continue

        event = parse_row(line, quarter)
        if event is not None:
            events.append(event)

    return events


def parse_csv_text(text: str) -> List[ScoreEvent]:
    """
    Parse an uploaded ``time,home,away[,...]`` file.

    ``time`` is the elapsed game clock, the same format the exporter writes.
    A first line mentioning "time" is treated as a header.
    """
    lines = text.strip().splitlines()
    if not lines:
        return []

    start = 1 if "time" in lines[0].lower() else 0
    events = []
    for line in lines[start:]:
        parts = [p for p in _LOOSE_SPLIT_RE.split(line.strip()) if p]
        if len(parts) < 3:
            continue

        elapsed = parse_elapsed_clock(parts[0])
        home = _leading_int(parts[1])
        away = _leading_int(parts[2])
        if elapsed is None or home is None or away is None:
            logger.debug(f"Skipped file row {line!r}")
            continue

        quarter = min(elapsed // QUARTER_SECONDS + 1, NUM_QUARTERS)
        try:
            events.append(ScoreEvent(elapsed, home, away, quarter, " ".join(parts[3:])))
        except ValueError as e:
            logger.debug(f"Dropping file row {line!r}: {e}")

    return events


# ── Finalization ──────────────────────────────────────────────────────────────

def finalize_events(events: Iterable[ScoreEvent]) -> List[ScoreEvent]:
    """
    Deduplicate, sort and enforce non-decreasing scores.

    Rows sharing the same elapsed second collapse to the last one parsed.
    After sorting, a row whose home or away score is below the previous
    kept row is removed.
    """
    by_time: Dict[int, ScoreEvent] = {}
    for event in events:
        by_time[event.elapsed_seconds] = event

    ordered = [by_time[t] for t in sorted(by_time)]

    kept: List[ScoreEvent] = []
    for event in ordered:
        if kept and (event.home < kept[-1].home or event.away < kept[-1].away):
            continue
        kept.append(event)

    dropped = len(ordered) - len(kept)
    if dropped:
        logger.warning(f"Removed {dropped} rows with decreasing scores")
    return kept


def normalize_quarter_blocks(blocks: Sequence[Optional[str]]) -> List[ScoreEvent]:
    """
    Normalize up to four per-quarter blocks (index 0 is the first quarter).

    Raises:
        ParseError: If no block yields a usable row
    """
    parsed: List[ScoreEvent] = []
    for index, block in enumerate(blocks[:NUM_QUARTERS]):
        if block and block.strip():
            parsed.extend(parse_quarter_block(block, index + 1))

    if not parsed:
        raise ParseError("Please enter data for at least one quarter", INPUT_QUARTERS)

    events = finalize_events(parsed)
    logger.info(f"Parsed {len(events)} score events from quarter blocks")
    return events


def normalize_combined_text(text: Optional[str]) -> List[ScoreEvent]:
    """
    Normalize one combined play-by-play block.

    Raises:
        ParseError: If the text yields no usable row
    """
    parsed = parse_combined_text(text) if text else []
    if not parsed:
        raise ParseError(
            "No valid data found. Paste play-by-play data with TIME, PLAY, HOME_SCORE, AWAY_SCORE columns",
            INPUT_COMBINED,
        )

    events = finalize_events(parsed)
    logger.info(f"Parsed {len(events)} score events from combined text")
    return events


def normalize_csv_text(text: Optional[str]) -> List[ScoreEvent]:
    """
    Normalize an uploaded CSV-like file.

    Raises:
        ParseError: If the file yields no usable row
    """
    parsed = parse_csv_text(text) if text else []
    if not parsed:
        raise ParseError("No valid data in file", INPUT_CSV)

    events = finalize_events(parsed)
    logger.info(f"Parsed {len(events)} score events from file")
    return events
