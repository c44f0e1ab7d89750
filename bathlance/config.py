from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .utils.timezone_utils import DEFAULT_TIMEZONE, TimezoneUtils

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_ENV_PREFIX = "BATHLANCE_"

# Average months of use per category, used when a product has no explicit
# period after opening.
DEFAULT_USAGE_PERIODS: Mapping[str, int] = MappingProxyType({
    "toothbrush": 3,
    "shampoo": 12,
    "conditioner": 12,
    "cleanser": 6,
    "body-wash": 12,
    "towel": 6,
    "razor-head": 1,
    "shower-ball": 1,
    "shower-filter": 3,
    "other": 6,
})

NOTIFICATION_DAYS_BEFORE = 7
FALLBACK_USAGE_MONTHS = 6
REPLACE_SOON_DAYS = 7
WATCH_DAYS = 30
MAX_STOCK = 50


class EnvReader:
    def __init__(self, data: Mapping[str, str] | None = None):
        self._data = dict(os.environ if data is None else data)
        self.warnings: list[str] = []

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def _value(self, key: str) -> str | None:
        value = self._data.get(key)
        if value is None:
            return None
        stripped = value.strip()
        return stripped if stripped else None

    def str(self, key: str, default: str | None = None) -> str | None:
        value = self._value(key)
        return value if value is not None else default

    def int(self, key: str, default: int = 0, *, minimum: int | None = None) -> int:
        value = self._value(key)
        if value is None:
            return default
        try:
            parsed = int(value)
        except ValueError:
            self.warn(f"{key} expected integer but received {value!r}; falling back to {default}.")
            return default
        if minimum is not None and parsed < minimum:
            self.warn(f"{key} must be >= {minimum} but received {parsed}; falling back to {default}.")
            return default
        return parsed

    def bool(self, key: str, default: bool = False) -> bool:
        value = self._value(key)
        if value is None:
            return default
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        self.warn(f"{key} expected boolean but received {value!r}; falling back to {default}.")
        return default


@dataclass(frozen=True)
class ReplacementSettings:
    notification_days: int = NOTIFICATION_DAYS_BEFORE
    fallback_usage_months: int = FALLBACK_USAGE_MONTHS
    replace_soon_days: int = REPLACE_SOON_DAYS
    watch_days: int = WATCH_DAYS
    max_stock: int = MAX_STOCK
    timezone: str = DEFAULT_TIMEZONE
    log_level: str = "WARNING"
    log_redact_pii: bool = True
    usage_periods: Mapping[str, int] = field(default_factory=lambda: DEFAULT_USAGE_PERIODS)
    warnings: tuple[str, ...] = ()


def _resolve_timezone(reader: EnvReader) -> str:
    candidate = reader.str(f"{_ENV_PREFIX}TIMEZONE", DEFAULT_TIMEZONE) or DEFAULT_TIMEZONE
    if TimezoneUtils.validate_timezone(candidate):
        return candidate
    reader.warn(f"{_ENV_PREFIX}TIMEZONE={candidate!r} is not a known timezone; using {DEFAULT_TIMEZONE}.")
    return DEFAULT_TIMEZONE


def load_settings(data: Mapping[str, str] | None = None) -> ReplacementSettings:
    """Build settings from environment variables (or an explicit mapping)."""
    reader = EnvReader(data)
    replace_soon_days = reader.int(f"{_ENV_PREFIX}REPLACE_SOON_DAYS", REPLACE_SOON_DAYS, minimum=0)
    watch_days = reader.int(f"{_ENV_PREFIX}WATCH_DAYS", WATCH_DAYS, minimum=0)
    if watch_days < replace_soon_days:
        reader.warn(
            f"{_ENV_PREFIX}WATCH_DAYS ({watch_days}) is below {_ENV_PREFIX}REPLACE_SOON_DAYS "
            f"({replace_soon_days}); using {replace_soon_days}."
        )
        watch_days = replace_soon_days

    return ReplacementSettings(
        notification_days=reader.int(f"{_ENV_PREFIX}NOTIFICATION_DAYS", NOTIFICATION_DAYS_BEFORE, minimum=0),
        fallback_usage_months=reader.int(f"{_ENV_PREFIX}FALLBACK_USAGE_MONTHS", FALLBACK_USAGE_MONTHS, minimum=0),
        replace_soon_days=replace_soon_days,
        watch_days=watch_days,
        max_stock=reader.int(f"{_ENV_PREFIX}MAX_STOCK", MAX_STOCK, minimum=0),
        timezone=_resolve_timezone(reader),
        log_level=reader.str("LOG_LEVEL", "WARNING") or "WARNING",
        log_redact_pii=reader.bool("LOG_REDACT_PII", True),
        warnings=tuple(reader.warnings),
    )
