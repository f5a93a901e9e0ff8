"""Text normalization, historical parsing and file I/O."""

from .historical import combine_historical_totals, parse_historical_scores, team_stats_from_text
from .loader import GameDataLoader
from .normalize import ParseError, normalize_combined_text, normalize_csv_text, normalize_quarter_blocks
from .team_name_resolver import detect_team_name
