"""Local calendar-date helpers.

Every key produced here reflects the *local* calendar day of a timestamp.
Naive datetimes are read as local wall-clock time; aware datetimes are moved
into the system zone with ``astimezone()`` first. Nothing is ever routed
through UTC, which is what shifts late-evening entries onto the previous or
next day.
"""

import calendar
from datetime import date, datetime, time
from typing import Union

from chartdata.functional import Maybe, Nothing, Some

Timestamp = Union[datetime, date, str]


def parse_timestamp(value) -> Maybe[datetime]:
    """Parse ``value`` into a datetime, or ``Nothing()`` when it can't be read."""
    if isinstance(value, datetime):
        return Some(value)
    if isinstance(value, date):
        return Some(datetime.combine(value, time()))
    if not isinstance(value, str):
        return Nothing()
    return _clean_text(value).bind(_from_iso)


def _clean_text(value: str) -> Maybe[str]:
    text = value.strip()
    if not text:
        return Nothing()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return Some(text)


def _from_iso(text: str) -> Maybe[datetime]:
    try:
        return Some(datetime.fromisoformat(text))
    except ValueError:
        return Nothing()


def to_local(dt: datetime) -> datetime:
    """Naive local datetime, so naive and aware inputs compare safely."""
    if dt.tzinfo is not None and dt.utcoffset() is not None:
        return dt.astimezone().replace(tzinfo=None)
    return dt


def local_date(timestamp: Timestamp) -> date:
    if isinstance(timestamp, date) and not isinstance(timestamp, datetime):
        return timestamp
    day = parse_timestamp(timestamp).map(to_local).map(datetime.date)
    if day.is_none():
        raise ValueError(f"unparseable timestamp: {timestamp!r}")
    return day.get_or_else(None)


def to_date_key(timestamp: Timestamp) -> str:
    d = local_date(timestamp)
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def to_month_key(timestamp: Timestamp) -> str:
    d = local_date(timestamp)
    return f"{d.year:04d}-{d.month:02d}"


def month_label(month_key: str) -> str:
    """'2023-10' -> 'Oct 23'."""
    year, month = month_key.split("-")[:2]
    return date(int(year), int(month), 1).strftime("%b %y")


def day_label(date_key: str) -> str:
    """'2023-10-27' -> '27/10'. Anything that isn't a DateKey is returned as is."""
    parts = date_key.split("-")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return date_key
    return f"{int(parts[2])}/{int(parts[1])}"


def month_bounds(timestamp: Timestamp) -> tuple[date, date]:
    """First and last calendar day of the month containing ``timestamp``."""
    d = local_date(timestamp)
    last = calendar.monthrange(d.year, d.month)[1]
    return date(d.year, d.month, 1), date(d.year, d.month, last)
