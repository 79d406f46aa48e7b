"""
Pure checks on reservation dates and times.

Every function here is total: malformed input yields False, never an
exception. Dates are "YYYY-MM-DD" and times zero-padded 24-hour "HH:MM".
"""
import re
from datetime import datetime, timezone

from .time import combine_local, parse_date, parse_time, to_minutes

# Matched with fullmatch, ASCII digits only.
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_TIME_RE = re.compile(r"([01][0-9]|2[0-3]):[0-5][0-9]")


def is_valid_date_format(s) -> bool:
    if not isinstance(s, str) or not _DATE_RE.fullmatch(s):
        return False
    try:
        parse_date(s)
    except ValueError:
        return False
    return True


def is_valid_time_format(s) -> bool:
    return isinstance(s, str) and bool(_TIME_RE.fullmatch(s))


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def is_future_date(s, *, now: datetime | None = None) -> bool:
    """
    True if the date is today or later. "Today" is the calendar day of `now`,
    so pass `now` in the service's time zone.
    """
    if not is_valid_date_format(s):
        return False
    return parse_date(s) >= _now(now).date()


def is_future_datetime(date_s, time_s, *, now: datetime | None = None) -> bool:
    """True if the wall-clock date and time, read in the zone of `now`, is strictly after `now`."""
    if not (is_valid_date_format(date_s) and is_valid_time_format(time_s)):
        return False
    current = _now(now)
    d, t = parse_date(date_s), parse_time(time_s)
    instant = combine_local(d, t, current.tzinfo) if current.tzinfo else datetime.combine(d, t)
    return instant > current


def is_within_business_hours(time_s, start: str = "09:00", end: str = "18:00") -> bool:
    if not all(is_valid_time_format(v) for v in (time_s, start, end)):
        return False
    return to_minutes(start) <= to_minutes(time_s) <= to_minutes(end)
