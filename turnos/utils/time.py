from datetime import date, datetime, time
from zoneinfo import ZoneInfo

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def get_zone(name: str | None) -> ZoneInfo:
    """Returns the ZoneInfo for a zone name, defaulting to UTC."""
    return ZoneInfo(name or "UTC")


def local_now(tz: ZoneInfo) -> datetime:
    return datetime.now(tz)


def parse_date(s: str) -> date:
    """Parses a strict YYYY-MM-DD string."""
    return datetime.strptime(s, DATE_FORMAT).date()


def parse_time(s: str) -> time:
    """Parses a strict HH:MM string."""
    return datetime.strptime(s, TIME_FORMAT).time()


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def format_time(t: time) -> str:
    """Formats a time-of-day at minute granularity, dropping any seconds."""
    return t.strftime(TIME_FORMAT)


def to_minutes(s: str) -> int:
    hours, minutes = s.split(":")
    return int(hours) * 60 + int(minutes)


def combine_local(d: date, t: time, tz: ZoneInfo) -> datetime:
    """Builds the timezone-aware instant of a wall-clock date and time in `tz`."""
    return datetime.combine(d, t).replace(tzinfo=tz)
