"""Tests for play-by-play text normalization."""

import pytest

from scorepace.data.normalize import (
    EMPTY_INPUT,
    ParseError,
    finalize_events,
    normalize_combined_text,
    normalize_csv_text,
    normalize_quarter_blocks,
    parse_combined_text,
    parse_csv_text,
    parse_elapsed_clock,
    parse_quarter_block,
    parse_row,
    parse_time,
    split_row,
)
from scorepace.models.game import ScoreEvent


# ---------------------------------------------------------------------------
# Time parsing
# ---------------------------------------------------------------------------


class TestParseTime:
    """Tests for parse_time()."""

    def test_start_of_game(self):
        assert parse_time("12:00", 1) == 0

    def test_time_remaining_is_converted_to_elapsed(self):
        assert parse_time("11:41", 1) == 19

    def test_end_of_first_quarter(self):
        assert parse_time("0:00", 1) == 720

    def test_later_quarter_offset(self):
        assert parse_time("5:30", 2) == 720 + 720 - 330

    def test_decimal_seconds_remaining(self):
        # 720 - 58.5 = 661.5 rounds half-up to 662
        assert parse_time("58.5", 4) == 3 * 720 + 662

    def test_end_marker_is_rejected(self):
        assert parse_time("End of 1st Quarter", 1) is None

    def test_garbage_is_rejected(self):
        assert parse_time("abc", 1) is None
        assert parse_time("", 1) is None
        assert parse_time(None, 1) is None

    def test_clock_beyond_quarter_length_is_rejected(self):
        assert parse_time("13:00", 1) is None


class TestParseElapsedClock:
    """Tests for parse_elapsed_clock()."""

    def test_minutes_seconds(self):
        assert parse_elapsed_clock("11:41") == 701

    def test_bare_seconds(self):
        assert parse_elapsed_clock("43") == 43

    def test_beyond_regulation(self):
        assert parse_elapsed_clock("49:00") is None

    def test_garbage(self):
        assert parse_elapsed_clock("soon") is None


# ---------------------------------------------------------------------------
# Row parsing
# ---------------------------------------------------------------------------


class TestSplitRow:
    """Tests for split_row()."""

    def test_tab_separated(self):
        parts = split_row("11:45\tMitchell makes layup\t2\t0")
        assert parts == ["11:45", "Mitchell makes layup", "2", "0"]

    def test_comma_separated(self):
        assert split_row("0:43,2,0") == ["0:43", "2", "0"]

    def test_whitespace_fallback(self):
        assert split_row("0:43   2 0") == ["0:43", "2", "0"]


class TestParseRow:
    """Tests for parse_row()."""

    def test_espn_row(self):
        event = parse_row("11:45\tDonovan Mitchell makes 2-foot layup\t2\t0", 1)
        assert event == ScoreEvent(15, 2, 0, 1, "Donovan Mitchell makes 2-foot layup")

    def test_play_text_is_optional(self):
        event = parse_row("6:00,20,16", 1)
        assert event.elapsed_seconds == 360
        assert event.play_text == ""

    def test_missing_scores(self):
        assert parse_row("11:45\tJump ball\tCLE", 1) is None

    def test_bad_time(self):
        assert parse_row("xx\tMitchell makes layup\t2\t0", 1) is None

    def test_row_too_short(self):
        assert parse_row("11:45", 1) is None


def test_quarter_block_skips_header_and_markers():
    text = "\n".join([
        "TIME\tPLAY\tCLE\tCHI",
        "11:45\tMitchell makes layup\t2\t0",
        "",
        "10:59\tLaVine makes three\t2\t3",
        "End of the 1st Quarter",
    ])
    events = parse_quarter_block(text, 3)

    assert [e.elapsed_seconds for e in events] == [1440 + 15, 1440 + 61]
    assert all(e.quarter == 3 for e in events)


# ---------------------------------------------------------------------------
# Combined block
# ---------------------------------------------------------------------------


class TestCombinedText:
    """Tests for quarter inference in a single pasted block."""

    def test_clock_reset_starts_next_quarter(self):
        text = "\n".join([
            "TIME\tPLAY\tCLE\tCHI",
            "11:30\tA makes layup\t2\t0",
            "0:10\tB makes jumper\t30\t28",
            "11:40\tC makes three\t33\t28",
            "6:00\tD misses jumper\t40\t35",
        ])
        events = parse_combined_text(text)

        assert [e.quarter for e in events] == [1, 1, 2, 2]
        assert [e.elapsed_seconds for e in events] == [30, 710, 740, 1080]

    def test_end_marker_does_not_double_count(self):
        text = "\n".join([
            "1:00\tx makes layup\t20\t18",
            "End of 1st Quarter",
            "11:50\ty makes layup\t22\t18",
        ])
        events = parse_combined_text(text)

        assert [e.quarter for e in events] == [1, 2]
        assert events[1].elapsed_seconds == 730

    def test_start_marker_sets_quarter(self):
        text = "\n".join([
            "1:00\tx makes layup\t20\t18",
            "Start of 3rd Quarter",
            "11:00\ty makes layup\t60\t58",
        ])
        events = parse_combined_text(text)
        assert events[1].quarter == 3
        assert events[1].elapsed_seconds == 1440 + 60

    def test_clocked_markers_from_espn_paste(self):
        text = "\n".join([
            "11:30\tA makes layup\t2\t0",
            "0:05\tB makes jumper\t30\t28",
            "0:00\tEnd of the 1st Quarter",
            "12:00\tStart of the 2nd Quarter",
            "11:40\tC makes three\t33\t28",
            "6:00\tD makes jumper\t40\t35",
        ])
        events = parse_combined_text(text)

        assert [e.quarter for e in events] == [1, 1, 2, 2]
        assert [e.elapsed_seconds for e in events] == [30, 715, 740, 1080]
        assert len(normalize_combined_text(text)) == 4

    def test_overtime_rows_are_dropped(self):
        text = "\n".join([
            "0:30\tx makes layup\t100\t100",
            "End of 4th Quarter",
            "4:00\ty makes layup\t102\t100",
        ])
        events = parse_combined_text(text)
        assert len(events) == 1
        assert events[0].quarter == 1


# ---------------------------------------------------------------------------
# CSV file
# ---------------------------------------------------------------------------


def test_csv_text_uses_elapsed_clock():
    text = "time,home,away\n0:43,2,0\n2:16,9,4\n12:30,40,38\nbad,row,x\n"
    events = parse_csv_text(text)

    assert [e.elapsed_seconds for e in events] == [43, 136, 750]
    assert [e.quarter for e in events] == [1, 1, 2]


def test_csv_text_without_header():
    events = parse_csv_text("0:43,2,0\n1:12,4,2")
    assert len(events) == 2


# ---------------------------------------------------------------------------
# Finalization
# ---------------------------------------------------------------------------


class TestFinalizeEvents:
    """Tests for finalize_events()."""

    def test_duplicates_keep_last_parsed(self):
        events = finalize_events([
            ScoreEvent(100, 2, 0, 1),
            ScoreEvent(50, 1, 0, 1),
            ScoreEvent(100, 3, 0, 1),
        ])
        assert [(e.elapsed_seconds, e.home) for e in events] == [(50, 1), (100, 3)]

    def test_decreasing_scores_are_removed(self):
        events = finalize_events([
            ScoreEvent(10, 5, 0, 1),
            ScoreEvent(20, 3, 0, 1),
            ScoreEvent(30, 6, 2, 1),
        ])
        assert [e.elapsed_seconds for e in events] == [10, 30]

    def test_output_is_ordered(self):
        events = finalize_events([ScoreEvent(t, t // 10, t // 20, 1) for t in (300, 100, 200, 0)])
        for earlier, later in zip(events, events[1:]):
            assert earlier.elapsed_seconds < later.elapsed_seconds
            assert earlier.home <= later.home
            assert earlier.away <= later.away


# ---------------------------------------------------------------------------
# Whole-input errors
# ---------------------------------------------------------------------------


class TestParseErrors:
    """An input without a single usable row raises ParseError."""

    def test_quarter_blocks(self):
        with pytest.raises(ParseError) as exc_info:
            normalize_quarter_blocks(["", None, "   ", "no scores here"])
        assert exc_info.value.kind == EMPTY_INPUT
        assert exc_info.value.input_kind == "quarters"

    def test_combined_text(self):
        with pytest.raises(ParseError) as exc_info:
            normalize_combined_text("garbage\nmore garbage")
        assert exc_info.value.input_kind == "combined"

    def test_csv_header_only(self):
        with pytest.raises(ParseError) as exc_info:
            normalize_csv_text("time,home,away\n")
        assert exc_info.value.input_kind == "csv"

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            normalize_csv_text("")


def test_quarter_blocks_merge_in_order():
    q1 = "11:00\tA makes layup\t2\t0\n0:30\tB makes jumper\t28\t25"
    q2 = "11:30\tC makes three\t31\t25"
    events = normalize_quarter_blocks([q1, q2, None, None])

    assert [e.quarter for e in events] == [1, 1, 2]
    assert events[-1].elapsed_seconds == 750
