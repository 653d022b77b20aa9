"""
Date and time helpers for Routine Log.

Dates are stored as ``YYYY-MM-DD`` and times as ``HH:mm`` (zero padded, 24-hour)
so that lexicographic string order equals chronological order. Everything that
produces those strings goes through this module.
"""

import calendar
import re
from datetime import date, datetime, timedelta
from typing import List, Tuple, TypeVar, Sequence, Union

from routinelog.exceptions import ValidationError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

T = TypeVar("T")


def format_date(value: Union[date, datetime]) -> str:
    """
    Format a date to ``YYYY-MM-DD``.

    Args:
        value: date or datetime (local wall-clock date is used for datetimes)

    Returns:
        str: Zero padded date string

    Example:
        format_date(date(2024, 3, 1)) -> "2024-03-01"
    """
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def format_time(value: datetime) -> str:
    """Format a datetime to ``HH:mm``."""
    return f"{value.hour:02d}:{value.minute:02d}"


def parse_date(date_string: str) -> date:
    """
    Parse a ``YYYY-MM-DD`` string.

    Raises:
        ValidationError: If the string is not a valid calendar date
    """
    if not isinstance(date_string, str) or not DATE_PATTERN.match(date_string):
        raise ValidationError(f"Invalid date '{date_string}', expected YYYY-MM-DD", field="date")
    year, month, day = (int(part) for part in date_string.split("-"))
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValidationError(f"Invalid date '{date_string}': {e}", field="date") from e


def is_valid_date(date_string: str) -> bool:
    try:
        parse_date(date_string)
    except ValidationError:
        return False
    return True


def is_valid_time(time_string: str) -> bool:
    return isinstance(time_string, str) and bool(TIME_PATTERN.match(time_string))


def normalize_time_input(raw: str) -> str:
    """
    Turn free-form time input into ``HH:mm``.

    Only digits are considered (at most four):
        ""      -> "00:00"
        "9"     -> "09:00"
        "14"    -> "14:00"
        "143"   -> "14:30"
        "0930"  -> "09:30"
        "09:30" -> "09:30"

    Raises:
        ValidationError: If the hour is above 23 or the minute above 59
    """
    digits = re.sub(r"\D", "", raw or "")[:4]

    if not digits:
        return "00:00"

    if len(digits) <= 2:
        if int(digits) > 23:
            raise ValidationError("Hour cannot be greater than 23", field="time")
        return f"{digits.zfill(2)}:00"

    padded = digits.ljust(4, "0")
    hours, minutes = padded[:2], padded[2:]
    if int(hours) > 23:
        raise ValidationError("Hour cannot be greater than 23", field="time")
    if int(minutes) > 59:
        raise ValidationError("Minute cannot be greater than 59", field="time")
    return f"{hours}:{minutes}"


def is_same_day(first: Union[date, datetime], second: Union[date, datetime]) -> bool:
    return (first.year, first.month, first.day) == (second.year, second.month, second.day)


def get_first_day_of_month(year: int, month: int) -> date:
    """First day of ``month`` (1-12)."""
    return date(year, month, 1)


def get_last_day_of_month(year: int, month: int) -> date:
    """Last day of ``month`` (1-12)."""
    return date(year, month, calendar.monthrange(year, month)[1])


def get_days_in_month(year: int, month: int) -> List[date]:
    last_day = get_last_day_of_month(year, month)
    return [date(year, month, day) for day in range(1, last_day.day + 1)]


def get_month_date_range(year: int, month: int) -> Tuple[str, str]:
    """
    Inclusive ``(start, end)`` date strings for a month, for range queries.

    Example:
        get_month_date_range(2024, 2) -> ("2024-02-01", "2024-02-29")
    """
    return (
        format_date(get_first_day_of_month(year, month)),
        format_date(get_last_day_of_month(year, month)),
    )


def get_trailing_date_range(days: int, today: Union[date, None] = None) -> Tuple[str, str]:
    """Inclusive range covering the last ``days`` days, ending on ``today``."""
    if days <= 0:
        raise ValidationError("days must be a positive integer", field="days")
    end = today or date.today()
    start = end - timedelta(days=days - 1)
    return format_date(start), format_date(end)


def sort_logs_by_time(logs: Sequence[T]) -> List[T]:
    """Stable sort on the ``time`` attribute (``HH:mm`` string compare)."""
    return sorted(logs, key=lambda log: log.time)


def sort_logs_by_date_and_time(logs: Sequence[T]) -> List[T]:
    return sorted(logs, key=lambda log: (log.date, log.time))
