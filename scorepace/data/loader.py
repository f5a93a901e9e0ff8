"""Reading game text from disk and writing derived series back out."""

import json
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from ..models.game import GamePoint, format_clock

EXPORT_COLUMNS = ["time", "home", "away", "total", "predictedTotal", "velocity", "error"]

# Bulls at Cavaliers, first quarter, Dec 17 2024 (elapsed seconds, home, away).
SAMPLE_GAME = [
    (0, 0, 0), (43, 2, 0), (59, 2, 2), (72, 4, 2), (109, 4, 4),
    (121, 6, 4), (136, 9, 4), (151, 9, 6), (165, 12, 6), (183, 12, 8),
    (188, 15, 8), (202, 15, 11), (219, 17, 11), (246, 20, 11), (255, 20, 13),
    (270, 20, 16), (294, 23, 16), (360, 26, 16), (396, 28, 16), (405, 28, 18),
    (448, 28, 21), (515, 28, 24), (545, 28, 26), (575, 30, 26), (605, 30, 28),
    (636, 32, 28), (656, 32, 31), (688, 32, 33), (701, 34, 33),
]


class GameDataLoader:
    """Loads raw game inputs and exports derived series."""

    @staticmethod
    def read_text(file_path: Optional[str]) -> Optional[str]:
        """
        Read a whole text file.

        Args:
            file_path: Path to the file, or None

        Returns:
            File contents, or None when no path is given
        """
        if not file_path:
            return None
        return Path(file_path).read_text(encoding="utf-8")

    @staticmethod
    def sample_csv_text() -> str:
        """Sample first-quarter timeline in the uploadable file format."""
        lines = ["time,home,away"]
        lines.extend(f"{format_clock(t)},{home},{away}" for t, home, away in SAMPLE_GAME)
        return "\n".join(lines) + "\n"

    @staticmethod
    def series_to_frame(points: Sequence[GamePoint]) -> pd.DataFrame:
        """
        Tabulate a derived series.

        Columns are the export columns followed by quarter, elapsed seconds
        and the projected home/away scores.  ``velocity`` is points/minute.
        """
        rows = [
            {
                "time": format_clock(p.elapsed_seconds),
                "home": p.home,
                "away": p.away,
                "total": p.total,
                "predictedTotal": p.predicted_total,
                "velocity": p.velocity_per_minute,
                "error": p.error,
                "quarter": p.quarter,
                "elapsedSeconds": p.elapsed_seconds,
                "predictedHome": p.predicted_home,
                "predictedAway": p.predicted_away,
            }
            for p in points
        ]
        columns = EXPORT_COLUMNS + ["quarter", "elapsedSeconds", "predictedHome", "predictedAway"]
        return pd.DataFrame(rows, columns=columns)

    @staticmethod
    def export_csv(points: Sequence[GamePoint], file_path: Optional[str] = None) -> str:
        """
        Export the series as ``time,home,away,total,predictedTotal,velocity,error``.

        Args:
            points: Derived series
            file_path: Optional output path

        Returns:
            The CSV text (also written to ``file_path`` when given)
        """
        frame = GameDataLoader.series_to_frame(points)[EXPORT_COLUMNS].copy()
        frame["velocity"] = frame["velocity"].map(lambda v: f"{v:.2f}")
        csv_text = frame.to_csv(index=False, lineterminator="\n")
        if file_path:
            Path(file_path).write_text(csv_text, encoding="utf-8")
        return csv_text

    @staticmethod
    def save_report_json(report: dict, file_path: str) -> None:
        """Save a derived-series report as JSON."""
        with open(file_path, "w") as f:
            json.dump(report, f, indent=2)

    @staticmethod
    def create_sample_data(output_path: str) -> None:
        """
        Write the sample game as an uploadable ``time,home,away`` CSV.

        Args:
            output_path: Path to save sample data
        """
        Path(output_path).write_text(GameDataLoader.sample_csv_text(), encoding="utf-8")
