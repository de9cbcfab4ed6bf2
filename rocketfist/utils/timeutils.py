import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Tuple

import pytz

from rocketfist.errors.base_errors import InvalidInputError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """
    Normalises a datetime to aware UTC.

    SQLite hands back naive values for DateTime(timezone=True) columns; all
    stored timestamps are UTC, so a naive value is read as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def get_zone(name: str):
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        raise InvalidInputError(f"Unknown timezone: {name}")


def parse_iso_date(value: str, field: str) -> date:
    """Parses a strict YYYY-MM-DD string."""
    if value is None or not DATE_PATTERN.match(value):
        raise InvalidInputError(f"{field} must be a date in YYYY-MM-DD format")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidInputError(f"{field} is not a valid calendar date")


def parse_date_range(start: str, end: str, start_field: str, end_field: str) -> Tuple[date, date]:
    start_d = parse_iso_date(start, start_field)
    end_d = parse_iso_date(end, end_field)
    if start_d > end_d:
        raise InvalidInputError(f"{start_field} must be on or before {end_field}")
    return start_d, end_d


def local_day_window(start: date, end: date, tz_name: str) -> Tuple[datetime, datetime]:
    """
    Returns the UTC bounds [start 00:00, end+1 00:00) of full local days in tz_name.

    The upper bound is exclusive so that anything during the last second of
    ``end`` is still included.
    """
    zone = get_zone(tz_name)
    try:
        lower = zone.localize(datetime.combine(start, time.min)).astimezone(timezone.utc)
        upper = zone.localize(datetime.combine(end + timedelta(days=1), time.min)).astimezone(timezone.utc)
    except OverflowError:
        raise InvalidInputError("Date out of range")
    return lower, upper
