"""
Calendar helpers for replacement-date arithmetic.

All instants handled here are timezone-aware. Naive datetimes are assumed to
be UTC, matching how product records store ISO 8601 strings.
"""
from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone
from typing import Union

from ..errors import InvalidDateError, InvalidInputError
from .timezone_utils import TimezoneUtils

InstantLike = Union[datetime, date, str]

SECONDS_PER_DAY = 86400


def parse_instant(value: InstantLike) -> datetime:
    """
    Parse a datetime, date or ISO 8601 string into an aware UTC datetime.

    Date-only strings ("2024-01-01") and bare dates resolve to UTC midnight.
    A trailing "Z" is accepted as UTC.

    Raises:
        InvalidDateError: if the value is empty or cannot be parsed.
    """
    if isinstance(value, datetime):
        return TimezoneUtils.ensure_timezone_aware(value).astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(value)

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidDateError(value) from exc
    return TimezoneUtils.ensure_timezone_aware(parsed).astimezone(timezone.utc)


def add_months(value: datetime, months: int) -> datetime:
    """
    Add calendar months, letting the day of month overflow into the next month.

    Jan 31 + 1 month lands on Mar 2 (or Mar 3 in a non-leap year) rather than
    being clamped to the end of February. Time of day and tzinfo are kept.

    Raises:
        InvalidInputError: if the result falls outside the supported calendar.
    """
    total = value.month - 1 + int(months)
    year = value.year + total // 12
    month = total % 12 + 1
    try:
        first_of_month = value.replace(year=year, month=month, day=1)
        return first_of_month + timedelta(days=value.day - 1)
    except (ValueError, OverflowError) as exc:
        raise InvalidInputError(f"Adding {months} month(s) to {value.isoformat()} is out of range") from exc


def days_remaining(target: InstantLike, now: datetime | None = None) -> int:
    """Whole days until ``target``, rounded up and never negative."""
    end = parse_instant(target)
    start = parse_instant(now) if now is not None else TimezoneUtils.utc_now()
    diff_days = math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)
    return diff_days if diff_days > 0 else 0


def truncate_to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def format_instant(value: InstantLike) -> str:
    """Format as ``YYYY-MM-DDTHH:mm:ss.sssZ`` in UTC."""
    instant = parse_instant(value)
    return instant.strftime("%Y-%m-%dT%H:%M:%S.") + f"{instant.microsecond // 1000:03d}Z"


def format_date(value: InstantLike) -> str:
    return parse_instant(value).date().isoformat()
