"""Utilities for working with timestamps and calendar dates in UTC."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Union

DateLike = Union[date, datetime, str]


def utc_now() -> datetime:
    """Return the current time as a timezone-aware ``datetime`` in UTC."""

    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Normalise ``dt`` to a timezone-aware UTC ``datetime``."""

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_timestamp(dt: Optional[datetime] = None) -> str:
    """Return ``dt`` (default: now) as ISO 8601 text with a ``Z`` suffix."""

    value = ensure_utc(dt or utc_now())
    text = value.isoformat(timespec="milliseconds")
    if text.endswith("+00:00"):
        return text[:-6] + "Z"
    return text


def utc_today() -> str:
    """Return today's UTC calendar date as ``YYYY-MM-DD``."""

    return utc_now().date().isoformat()


def to_iso_date(value: DateLike) -> str:
    """Return the ``YYYY-MM-DD`` form of a date, datetime or ISO string."""

    if isinstance(value, datetime):
        return ensure_utc(value).date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return parse_iso_date(value).isoformat()


def parse_iso_date(value: str) -> date:
    """Parse ``value`` as a calendar date.

    A full ISO timestamp is accepted and reduced to the calendar date it
    names, so a client sending ``2024-05-01T08:00:00Z`` lands on the same
    day.  Anything else after the date is rejected.
    """

    text = (value or "").strip()
    if not text:
        raise ValueError("Date is required")
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    except ValueError as exc:
        raise ValueError(f"Invalid date: {value!r}") from exc


__all__ = [
    "utc_now",
    "ensure_utc",
    "utc_timestamp",
    "utc_today",
    "to_iso_date",
    "parse_iso_date",
]
