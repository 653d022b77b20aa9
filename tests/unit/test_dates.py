"""Unit tests for date and time helpers."""

from datetime import date, datetime

import pytest

from routinelog.exceptions import ValidationError
from routinelog.models.firestore_types import LogDoc
from routinelog.util.dates import (
    format_date,
    format_time,
    parse_date,
    is_valid_date,
    is_valid_time,
    normalize_time_input,
    is_same_day,
    get_first_day_of_month,
    get_last_day_of_month,
    get_days_in_month,
    get_month_date_range,
    get_trailing_date_range,
    sort_logs_by_time,
    sort_logs_by_date_and_time,
)


def make_log(log_id, date_str, time_str):
    return LogDoc(id=log_id, date=date_str, time=time_str, itemId="i1", itemNameSnapshot="Spor")


class TestFormatting:

    def test_format_date_zero_pads(self):
        assert format_date(date(2024, 3, 1)) == "2024-03-01"
        assert format_date(datetime(987, 12, 9, 23, 59)) == "0987-12-09"

    def test_format_time_zero_pads(self):
        assert format_time(datetime(2024, 1, 1, 7, 5)) == "07:05"
        assert format_time(datetime(2024, 1, 1, 23, 59)) == "23:59"

    def test_parse_date_round_trips_format(self):
        assert parse_date("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["2024-2-1", "2023-02-29", "2024/02/01", "", "2024-13-01"])
    def test_parse_date_rejects_malformed(self, value):
        with pytest.raises(ValidationError):
            parse_date(value)
        assert is_valid_date(value) is False

    def test_is_valid_time(self):
        assert is_valid_time("00:00")
        assert is_valid_time("23:59")
        assert not is_valid_time("24:00")
        assert not is_valid_time("9:30")

    def test_is_same_day(self):
        assert is_same_day(datetime(2024, 5, 1, 0, 1), date(2024, 5, 1))
        assert not is_same_day(date(2024, 5, 1), date(2024, 5, 2))


class TestNormalizeTimeInput:

    @pytest.mark.parametrize("raw, expected", [
        ("", "00:00"),
        (None, "00:00"),
        ("9", "09:00"),
        ("14", "14:00"),
        ("143", "14:30"),
        ("0930", "09:30"),
        ("09:30", "09:30"),
        ("23:59", "23:59"),
        ("12345", "12:34"),
    ])
    def test_normalizes(self, raw, expected):
        assert normalize_time_input(raw) == expected

    @pytest.mark.parametrize("raw", ["24", "2400", "25:00", "1260", "0999"])
    def test_rejects_out_of_range(self, raw):
        with pytest.raises(ValidationError):
            normalize_time_input(raw)


class TestMonths:

    def test_month_bounds(self):
        assert get_first_day_of_month(2024, 2) == date(2024, 2, 1)
        assert get_last_day_of_month(2024, 2) == date(2024, 2, 29)
        assert get_last_day_of_month(2023, 2) == date(2023, 2, 28)
        assert len(get_days_in_month(2024, 1)) == 31

    def test_month_date_range(self):
        assert get_month_date_range(2024, 2) == ("2024-02-01", "2024-02-29")
        assert get_month_date_range(2024, 12) == ("2024-12-01", "2024-12-31")

    def test_trailing_range_includes_today(self):
        assert get_trailing_date_range(7, date(2024, 3, 3)) == ("2024-02-26", "2024-03-03")
        assert get_trailing_date_range(1, date(2024, 3, 3)) == ("2024-03-03", "2024-03-03")

    def test_trailing_range_requires_positive_days(self):
        with pytest.raises(ValidationError):
            get_trailing_date_range(0)


class TestSorting:

    def test_sort_by_time_is_stable(self):
        logs = [make_log("a", "2024-01-01", "10:00"), make_log("b", "2024-01-01", "08:00"),
                make_log("c", "2024-01-01", "10:00")]
        assert [log.id for log in sort_logs_by_time(logs)] == ["b", "a", "c"]

    def test_sort_by_date_and_time(self):
        logs = [make_log("a", "2024-01-02", "07:00"), make_log("b", "2024-01-01", "22:00"),
                make_log("c", "2024-01-02", "06:00")]
        assert [log.id for log in sort_logs_by_date_and_time(logs)] == ["b", "c", "a"]
