"""Integration tests for full-series recomputation."""

import json

import pytest

from scorepace.config import EngineConfig
from scorepace.data.loader import SAMPLE_GAME, GameDataLoader
from scorepace.data.normalize import EMPTY_INPUT, ParseError
from scorepace.models.betting import BetSlip, BettingQuote
from scorepace.pipeline.series import GameInputs, analyze_point, compute_series

EARLY_GAME_CSV = "time,home,away\n0:00,0,0\n11:40,30,28\n"


@pytest.fixture
def sample_inputs():
    return GameInputs(csv_text=GameDataLoader.sample_csv_text())


class TestSampleGame:
    """The bundled sample game end to end."""

    def test_one_point_per_event(self, sample_inputs):
        series = compute_series(sample_inputs)

        assert len(series.points) == len(SAMPLE_GAME) == 29
        assert series.final_point.elapsed_seconds == 701
        assert (series.final_point.home, series.final_point.away) == (34, 33)

    def test_points_are_ordered_and_bounded(self, sample_inputs):
        points = compute_series(sample_inputs).points

        for earlier, later in zip(points, points[1:]):
            assert earlier.elapsed_seconds < later.elapsed_seconds
            assert earlier.home <= later.home
            assert earlier.away <= later.away

        for point in points:
            assert max(point.total, 150) <= point.predicted_total <= 350
            assert point.predicted_home >= point.home
            assert point.predicted_away >= point.away
            assert point.error == abs(point.predicted_total - 67)

    def test_recompute_is_deterministic(self, sample_inputs):
        assert compute_series(sample_inputs) == compute_series(sample_inputs)

    def test_window_changes_only_velocities(self, sample_inputs):
        short = compute_series(sample_inputs, EngineConfig(velocity_window=120))
        long = compute_series(sample_inputs, EngineConfig(velocity_window=600))
        assert short.events == long.events

    def test_results_are_immutable(self, sample_inputs):
        series = compute_series(sample_inputs)

        assert isinstance(series.events, tuple)
        assert isinstance(series.points, tuple)
        assert isinstance(series.analysis.ladder, tuple)
        with pytest.raises(AttributeError):
            series.points.append(series.final_point)

    def test_default_analysis_is_last_point(self, sample_inputs):
        series = compute_series(sample_inputs)

        assert series.analysis.index == 28
        assert 30.0 <= series.analysis.base_confidence <= 95.0
        assert len(series.analysis.ladder) == 10
        assert series.analysis.betting is None

    def test_report_is_json_serializable(self, sample_inputs):
        report = compute_series(sample_inputs).to_dict()
        decoded = json.loads(json.dumps(report))

        assert len(decoded["points"]) == 29
        assert decoded["historical_total"] is None
        assert decoded["error_profile"]["final_total"] == 67


class TestInputSelection:
    """Quarter blocks > combined text > file."""

    def test_quarter_blocks_win(self):
        inputs = GameInputs(
            quarter_blocks=("11:00\tA makes layup\t2\t0", None, None, None),
            combined_text="11:30\tB makes layup\t2\t0\n10:00\tC makes layup\t4\t0",
            csv_text=EARLY_GAME_CSV,
        )
        series = compute_series(inputs)
        assert [e.elapsed_seconds for e in series.events] == [60]

    def test_combined_text_beats_file(self):
        inputs = GameInputs(
            quarter_blocks=("", "  ", None, None),
            combined_text="11:30\tB makes layup\t2\t0\n10:00\tC makes layup\t4\t0",
            csv_text=EARLY_GAME_CSV,
        )
        series = compute_series(inputs)
        assert [e.elapsed_seconds for e in series.events] == [30, 120]

    def test_no_input(self):
        with pytest.raises(ParseError) as exc_info:
            compute_series(GameInputs())
        assert exc_info.value.kind == EMPTY_INPUT

    def test_unusable_file(self):
        with pytest.raises(ParseError) as exc_info:
            compute_series(GameInputs(csv_text="time,home,away\nnope\n"))
        assert exc_info.value.input_kind == "csv"


def test_tip_off_only():
    series = compute_series(GameInputs(csv_text="0:00,0,0\n"))

    point = series.final_point
    assert point.total_velocity == 0.0
    assert point.predicted_total == 150
    assert 30.0 <= series.analysis.base_confidence <= 95.0
    assert all(0 <= rung.confidence <= 99 for rung in series.analysis.ladder)


class TestHistoricalBlend:
    """Historical averages feed the projection and confidence."""

    def test_prediction_without_history(self):
        series = compute_series(GameInputs(csv_text=EARLY_GAME_CSV))
        assert series.final_point.predicted_total == 239
        assert series.historical_total is None

    def test_prediction_pulled_toward_history(self):
        series = compute_series(GameInputs(
            csv_text=EARLY_GAME_CSV,
            home_history="110",
            away_history="110",
        ))

        assert series.historical_total.avg == 220.0
        assert series.final_point.predicted_total == 235

    def test_one_sided_history_is_ignored(self):
        series = compute_series(GameInputs(csv_text=EARLY_GAME_CSV, home_history="110"))

        assert series.home_stats.avg == 110.0
        assert series.away_stats is None
        assert series.final_point.predicted_total == 239


class TestPointAnalysis:
    """Selected-point confidence and betting."""

    def test_selected_index(self, sample_inputs):
        inputs = GameInputs(csv_text=sample_inputs.csv_text, selected_index=10)
        assert compute_series(inputs).analysis.index == 10

    def test_negative_index_counts_from_end(self, sample_inputs):
        inputs = GameInputs(csv_text=sample_inputs.csv_text, selected_index=-2)
        assert compute_series(inputs).analysis.index == 27

    def test_index_out_of_range(self, sample_inputs):
        with pytest.raises(ValueError):
            compute_series(GameInputs(csv_text=sample_inputs.csv_text, selected_index=29))

    def test_empty_series(self):
        with pytest.raises(ValueError):
            analyze_point([], 0, None)

    def test_bet_slip(self, sample_inputs):
        inputs = GameInputs(
            csv_text=sample_inputs.csv_text,
            quotes=(BettingQuote(220, 70),),
            bet_slip=BetSlip(target_score=200, cost=0.55),
        )
        betting = compute_series(inputs).analysis.betting

        assert betting.target_score == 200
        assert betting.implied_probability == 55.0
        assert 0 <= betting.confidence <= 99

    def test_at_most_two_quotes(self):
        with pytest.raises(ValueError):
            GameInputs(quotes=(BettingQuote(210, 50), BettingQuote(220, 50), BettingQuote(230, 50)))
