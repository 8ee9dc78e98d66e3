"""Tests for the three-day and 27-day feed parsers."""

import math

import pytest

from aurora_forecast.forecast.errors import FeedFormatError
from aurora_forecast.forecast.models import RawForecastEntry
from aurora_forecast.forecast.parsers import (
    filter_forecast_rows,
    format_three_day_label,
    parse_kp,
    parse_three_day,
    parse_twenty_seven_day,
    resolve_timezone,
)


def entry(time_tag: str, kp: str, status: str = "predicted") -> RawForecastEntry:
    return RawForecastEntry(time_tag=time_tag, kp=kp, status=status)


class TestFilterForecastRows:
    def test_drops_header_and_observed(self, three_day_rows: list):
        entries = filter_forecast_rows(three_day_rows)
        assert len(entries) == 5
        assert all(e.status != "observed" for e in entries)
        assert entries[0].time_tag == "2025-12-29 00:00:00"
        assert entries[0].status == "estimated"

    def test_observed_dropped_regardless_of_position(self):
        rows = [
            ["time_tag", "kp", "observed"],
            ["2025-01-01 00:00:00", "1.00", "predicted"],
            ["2025-01-01 03:00:00", "2.00", "observed"],
            ["2025-01-01 06:00:00", "3.00", "estimated"],
            ["2025-01-01 09:00:00", "4.00", "observed"],
        ]
        entries = filter_forecast_rows(rows)
        assert [e.kp for e in entries] == ["1.00", "3.00"]

    def test_header_only(self):
        assert filter_forecast_rows([["time_tag", "kp", "observed"]]) == []

    def test_short_row_is_format_error(self):
        with pytest.raises(FeedFormatError):
            filter_forecast_rows([["time_tag", "kp", "observed"], ["2025-01-01 00:00:00", "1.00"]])

    def test_not_a_list(self):
        with pytest.raises(FeedFormatError):
            filter_forecast_rows({"time_tag": "2025-01-01 00:00:00"})

    def test_null_kp_kept_as_empty_string(self):
        entries = filter_forecast_rows([["h", "h", "h"], ["2025-01-01 00:00:00", None, "predicted"]])
        assert entries[0].kp == ""


class TestParseThreeDay:
    def test_utc_scenario(self):
        series = parse_three_day([entry("2025-01-01 00:00:00", "3.33", "estimated")], "UTC")
        assert series.labels == ["Jan 1\n00:00"]
        assert series.data_points == [3.33]

    def test_none_means_no_data(self):
        assert parse_three_day(None, "UTC") is None

    def test_empty_input_gives_empty_series(self):
        series = parse_three_day([], "UTC")
        assert series is not None
        assert len(series) == 0

    def test_order_preserved(self, three_day_rows: list):
        series = parse_three_day(filter_forecast_rows(three_day_rows), "UTC")
        assert series.labels == [
            "Dec 29\n00:00",
            "Dec 29\n03:00",
            "Dec 29\n06:00",
            "Dec 29\n09:00",
            "Dec 29\n12:00",
        ]
        assert series.data_points == [3.33, 4.0, 5.33, 4.67, 2.0]

    def test_observed_entries_skipped(self):
        series = parse_three_day(
            [entry("2025-01-01 00:00:00", "1.0", "observed"), entry("2025-01-01 03:00:00", "2.0")],
            "UTC"
        )
        assert series.data_points == [2.0]

    def test_timezone_shifts_labels_only(self, three_day_rows: list):
        entries = filter_forecast_rows(three_day_rows)
        utc = parse_three_day(entries, "UTC")
        new_york = parse_three_day(entries, "America/New_York")

        assert len(new_york) == len(utc)
        assert new_york.data_points == utc.data_points
        assert new_york.labels[0] == "Dec 28\n19:00"
        assert new_york.labels[1] == "Dec 28\n22:00"
        assert new_york.labels[2] == "Dec 29\n01:00"

    def test_half_hour_offset(self):
        series = parse_three_day([entry("2025-06-01 00:00:00", "2.0")], "Asia/Kolkata")
        assert series.labels == ["Jun 1\n05:30"]

    def test_malformed_kp_is_nan(self):
        series = parse_three_day([entry("2025-01-01 00:00:00", "n/a"), entry("2025-01-01 03:00:00", "")], "UTC")
        assert len(series) == 2
        assert all(math.isnan(value) for value in series.data_points)

    def test_unknown_timezone(self):
        with pytest.raises(ValueError):
            parse_three_day([entry("2025-01-01 00:00:00", "1.0")], "Mars/Olympus_Mons")

    def test_malformed_timestamp(self):
        with pytest.raises(ValueError):
            parse_three_day([entry("yesterday", "1.0")], "UTC")


class TestFormatThreeDayLabel:
    def test_midnight_is_two_digit_zero(self):
        assert format_three_day_label("2025-03-09 00:00:00", resolve_timezone("UTC")) == "Mar 9\n00:00"

    def test_date_rolls_back_west_of_utc(self):
        label = format_three_day_label("2025-01-01 03:00:00", resolve_timezone("America/Los_Angeles"))
        assert label == "Dec 31\n19:00"


class TestParseTwentySevenDay:
    def test_data_row_scenario(self):
        series = parse_twenty_seven_day("2025 Dec 29     185           5          2")
        assert series.labels == ["Dec 29"]
        assert series.data_points == [2]

    def test_header_line_produces_nothing(self):
        series = parse_twenty_seven_day("Date        Flux   A    Kp")
        assert len(series) == 0

    def test_full_report(self, outlook_text: str):
        series = parse_twenty_seven_day(outlook_text)
        assert series.labels == ["Dec 29", "Dec 30", "Dec 31", "Jan 01", "Jan 02", "Jan 03"]
        assert series.data_points == [2, 3, 4, 5, 4, 3]

    def test_non_year_line_with_many_tokens_ignored(self):
        text = "Issued on Dec 29 at 0136 UTC by SWPC\n2025 Dec 29     185           5          2\n"
        series = parse_twenty_seven_day(text)
        assert series.labels == ["Dec 29"]

    def test_comment_with_year_after_hash_ignored(self):
        series = parse_twenty_seven_day("# 2025 Dec 29     185           5          2")
        assert len(series) == 0

    def test_short_data_row_dropped(self):
        text = "2025 Dec 29     185\n2025 Dec 30     180           8          3\n"
        series = parse_twenty_seven_day(text)
        assert series.labels == ["Dec 30"]
        assert series.data_points == [3]

    def test_leading_whitespace_and_blank_lines(self):
        text = "\n\n   2025 Dec 29\t185  5  2   \n\n"
        series = parse_twenty_seven_day(text)
        assert series.labels == ["Dec 29"]

    def test_file_order_kept(self):
        text = "2026 Jan 01 170 25 5\n2025 Dec 31 175 12 4\n"
        series = parse_twenty_seven_day(text)
        assert series.labels == ["Jan 01", "Dec 31"]

    def test_non_integer_kp_is_nan(self):
        series = parse_twenty_seven_day("2025 Dec 29 185 5 x")
        assert series.labels == ["Dec 29"]
        assert math.isnan(series.data_points[0])

    def test_empty_text(self):
        assert len(parse_twenty_seven_day("")) == 0

    def test_non_ascii_year_is_not_a_data_row(self):
        series = parse_twenty_seven_day("٢٠٢٥ Dec 29 185 5 ٢")
        assert len(series) == 0

    def test_non_ascii_kp_is_nan(self):
        series = parse_twenty_seven_day("2025 Dec 29 185 5 ٢")
        assert series.labels == ["Dec 29"]
        assert math.isnan(series.data_points[0])

    def test_form_feed_inside_row_is_whitespace(self):
        series = parse_twenty_seven_day("2025 Dec 29 185\x0c 5 2\r\n2025 Dec 30 180 8 3\r\n")
        assert series.labels == ["Dec 29", "Dec 30"]
        assert series.data_points == [2, 3]


class TestParseKp:
    @pytest.mark.parametrize("value, expected", [
        ("3.33", 3.33),
        ("4", 4.0),
        (" 2.67 ", 2.67),
        (".5", 0.5),
        ("5.", 5.0),
    ])
    def test_plain_numbers(self, value, expected):
        assert parse_kp(value) == expected

    @pytest.mark.parametrize("value", ["1_0", "inf", "-Infinity", "nan", "NaN", "", "n/a", "٣.33", None])
    def test_malformed_values_are_nan(self, value):
        assert math.isnan(parse_kp(value))
