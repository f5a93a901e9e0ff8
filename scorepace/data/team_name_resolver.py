"""
Team-name detection for pasted schedule text.

Schedule pages start with a title such as "Houston Rockets Schedule
2025-26"; other pastes only mention the team somewhere near the top.  This
module finds a display name in the first lines of such text.  It is a
presentation helper: nothing in the prediction engine depends on it.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

# ---------------------------------------------------------------------------
# NBA franchises as (city, nickname).  "LA" is listed separately because
# the Clippers are usually written that way.
# ---------------------------------------------------------------------------

NBA_TEAMS: List[Tuple[str, str]] = [
    ("Atlanta", "Hawks"),
    ("Boston", "Celtics"),
    ("Brooklyn", "Nets"),
    ("Charlotte", "Hornets"),
    ("Chicago", "Bulls"),
    ("Cleveland", "Cavaliers"),
    ("Dallas", "Mavericks"),
    ("Denver", "Nuggets"),
    ("Detroit", "Pistons"),
    ("Golden State", "Warriors"),
    ("Houston", "Rockets"),
    ("Indiana", "Pacers"),
    ("LA", "Clippers"),
    ("Los Angeles", "Lakers"),
    ("Memphis", "Grizzlies"),
    ("Miami", "Heat"),
    ("Milwaukee", "Bucks"),
    ("Minnesota", "Timberwolves"),
    ("New Orleans", "Pelicans"),
    ("New York", "Knicks"),
    ("Oklahoma City", "Thunder"),
    ("Orlando", "Magic"),
    ("Philadelphia", "76ers"),
    ("Phoenix", "Suns"),
    ("Portland", "Trail Blazers"),
    ("Sacramento", "Kings"),
    ("San Antonio", "Spurs"),
    ("Toronto", "Raptors"),
    ("Utah", "Jazz"),
    ("Washington", "Wizards"),
]

SCAN_LINES = 10


def _alternation(words) -> str:
    # Longest first so "Los Angeles" wins over "LA".
    return "|".join(re.escape(w) for w in sorted(set(words), key=len, reverse=True))


_CITY_NICKNAME_RE = re.compile(
    rf"({_alternation(c for c, _ in NBA_TEAMS)})\s+({_alternation(n for _, n in NBA_TEAMS)})",
    re.IGNORECASE,
)
_SCHEDULE_RE = re.compile(r"(.+?)\s+Schedule", re.IGNORECASE)
_TITLE_PREFIX_RE = re.compile(r"^(More\s+)?(NBA\s+)?(Teams\s+)?", re.IGNORECASE)
_SEASON_SUFFIX_RE = re.compile(r"\s+\d{4}-\d{2}$")


def _schedule_title(line: str) -> Optional[str]:
    match = _SCHEDULE_RE.search(line)
    if not match:
        return None
    name = _TITLE_PREFIX_RE.sub("", match.group(1).strip()).strip()
    name = _SEASON_SUFFIX_RE.sub("", name).strip()
    return name or None


def detect_team_name(text: Optional[str]) -> Optional[str]:
    """
    Find a team display name in the first lines of pasted text.

    A "<name> Schedule" title is preferred; otherwise the first
    city + nickname pair found is returned as written.

    Examples::

        >>> detect_team_name("Houston Rockets Schedule 2025-26\\nDATE ...")
        'Houston Rockets'
        >>> detect_team_name("Fri, 10/24  vs Chicago Bulls  W131-124")
        'Chicago Bulls'
    """
    if not text or not text.strip():
        return None

    for line in text.strip().splitlines()[:SCAN_LINES]:
        line = line.strip()

        title = _schedule_title(line)
        if title:
            return title

        match = _CITY_NICKNAME_RE.search(line)
        if match:
            return match.group(0).strip()

    return None
