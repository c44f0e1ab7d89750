from __future__ import annotations

from datetime import datetime, timezone as dt_timezone

import pytz

DEFAULT_TIMEZONE = "UTC"


class TimezoneUtils:
    """Utilities for consistent timezone handling across the core."""

    @staticmethod
    def validate_timezone(tz_name: str | None) -> bool:
        """Return True when the timezone string exists in pytz."""
        return bool(tz_name) and tz_name in pytz.all_timezones_set

    @staticmethod
    def _get_timezone(tz_name: str):
        if not TimezoneUtils.validate_timezone(tz_name):
            raise ValueError(f"Invalid timezone: {tz_name}")
        return pytz.timezone(tz_name)

    @staticmethod
    def utc_now() -> datetime:
        """Return the current UTC timestamp (timezone aware)."""
        return datetime.now(dt_timezone.utc)

    @staticmethod
    def ensure_timezone_aware(
        dt: datetime | None, assume_utc: bool = True
    ) -> datetime | None:
        """Guarantee that a datetime carries timezone information."""
        if dt is None:
            return None
        if dt.tzinfo is None:
            if not assume_utc:
                raise ValueError("Naive datetime provided without explicit timezone handling.")
            return dt.replace(tzinfo=dt_timezone.utc)
        return dt

    @staticmethod
    def to_timezone(dt: datetime | None, tz_name: str | None) -> datetime | None:
        """Convert a datetime into ``tz_name``, falling back to UTC for unknown names."""
        if dt is None:
            return None
        target_name = tz_name if TimezoneUtils.validate_timezone(tz_name) else DEFAULT_TIMEZONE
        target = TimezoneUtils._get_timezone(target_name)
        return TimezoneUtils.ensure_timezone_aware(dt).astimezone(target)

    @staticmethod
    def format_for_user(
        dt: datetime | None, format_string: str = "%Y-%m-%d", tz_name: str | None = None
    ) -> str:
        """Format a datetime for presentation in the given timezone."""
        localized = TimezoneUtils.to_timezone(dt, tz_name)
        return localized.strftime(format_string) if localized else ""
