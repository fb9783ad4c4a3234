"""
Wall Clock
All deadline and timestamp comparisons use naive UTC datetimes.
"""
from datetime import date, datetime, time, timezone
from typing import Union


def utcnow() -> datetime:
    """Current UTC time without tzinfo (matches stored column values)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def as_datetime(value: Union[datetime, date]) -> datetime:
    """Naive UTC datetime from a datetime or a bare date (midnight)"""
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise ValueError("must be a date")


def as_upper_bound(value: Union[datetime, date]) -> datetime:
    """Inclusive upper bound; a bare date covers the whole day"""
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.max)
    raise ValueError("must be a date")
