"""Tests for game file I/O and export."""

import json
import re

import pytest

from scorepace.data.loader import EXPORT_COLUMNS, SAMPLE_GAME, GameDataLoader
from scorepace.data.normalize import normalize_csv_text
from scorepace.pipeline.series import GameInputs, compute_series


@pytest.fixture
def sample_points():
    return compute_series(GameInputs(csv_text=GameDataLoader.sample_csv_text())).points


def test_sample_csv_text():
    lines = GameDataLoader.sample_csv_text().splitlines()

    assert lines[0] == "time,home,away"
    assert lines[1] == "0:00,0,0"
    assert lines[-1] == "11:41,34,33"
    assert len(lines) == len(SAMPLE_GAME) + 1


def test_create_sample_data(tmp_path):
    path = tmp_path / "sample_game.csv"
    GameDataLoader.create_sample_data(str(path))

    events = normalize_csv_text(GameDataLoader.read_text(str(path)))
    assert len(events) == 29
    assert (events[-1].elapsed_seconds, events[-1].home, events[-1].away) == (701, 34, 33)


def test_read_text_without_path():
    assert GameDataLoader.read_text(None) is None
    assert GameDataLoader.read_text("") is None


def test_read_text_missing_file(tmp_path):
    with pytest.raises(OSError):
        GameDataLoader.read_text(str(tmp_path / "missing.txt"))


class TestExport:
    """Tests for CSV export."""

    def test_header(self, sample_points):
        csv_text = GameDataLoader.export_csv(sample_points)
        assert csv_text.splitlines()[0] == ",".join(EXPORT_COLUMNS)

    def test_velocity_has_two_decimals(self, sample_points):
        rows = GameDataLoader.export_csv(sample_points).splitlines()[1:]

        assert len(rows) == 29
        for row in rows:
            velocity = row.split(",")[5]
            assert re.match(r"^-?\d+\.\d{2}$", velocity)

    def test_export_reimports(self, sample_points, tmp_path):
        path = tmp_path / "predictions.csv"
        GameDataLoader.export_csv(sample_points, str(path))

        events = normalize_csv_text(path.read_text())
        assert [(e.elapsed_seconds, e.home, e.away) for e in events] == [
            (p.elapsed_seconds, p.home, p.away) for p in sample_points
        ]

    def test_frame(self, sample_points):
        frame = GameDataLoader.series_to_frame(sample_points)

        assert list(frame.columns[: len(EXPORT_COLUMNS)]) == EXPORT_COLUMNS
        assert len(frame) == 29
        assert frame["elapsedSeconds"].is_monotonic_increasing
        assert (frame["predictedTotal"] >= frame["total"]).all()
        assert frame["velocity"].iloc[0] == 0.0

    def test_empty_frame(self):
        frame = GameDataLoader.series_to_frame([])
        assert frame.empty
        assert "predictedTotal" in frame.columns


def test_save_report_json(sample_points, tmp_path):
    path = tmp_path / "report.json"
    report = {"points": [p.to_dict() for p in sample_points[:3]]}
    GameDataLoader.save_report_json(report, str(path))

    with open(path) as f:
        assert json.load(f) == report
