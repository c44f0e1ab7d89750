import logging
from dataclasses import replace
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional, Union

from ..config import DEFAULT_USAGE_PERIODS, FALLBACK_USAGE_MONTHS, REPLACE_SOON_DAYS, WATCH_DAYS
from ..errors import InvalidDateError, InvalidInputError
from ..models import Product
from ..utils.date_math import add_months, days_remaining, parse_instant
from ..utils.timezone_utils import TimezoneUtils

logger = logging.getLogger(__name__)


class ExpiryStatus(Enum):
    """Replacement urgency shown on a product card"""
    FRESH = "fresh"
    WATCH = "watch"
    REPLACE_SOON = "replace_soon"
    EXPIRED = "expired"


class ExpiryService:
    """Centralized service for replacement-date calculations.

    The expiry date of a product is derived state: it is always recomputed from
    the registration (opening) date, the usage period after opening and, when
    both are known, the manufacturing date plus the pre-opening shelf life.
    Whichever limit is reached first wins.
    """

    def __init__(
        self,
        usage_periods: Optional[Mapping[str, int]] = None,
        fallback_months: int = FALLBACK_USAGE_MONTHS,
        replace_soon_days: int = REPLACE_SOON_DAYS,
        watch_days: int = WATCH_DAYS,
    ):
        self.usage_periods = DEFAULT_USAGE_PERIODS if usage_periods is None else usage_periods
        self.fallback_months = fallback_months
        self.replace_soon_days = replace_soon_days
        self.watch_days = watch_days

    @classmethod
    def from_settings(cls, settings) -> "ExpiryService":
        return cls(
            usage_periods=settings.usage_periods,
            fallback_months=settings.fallback_usage_months,
            replace_soon_days=settings.replace_soon_days,
            watch_days=settings.watch_days,
        )

    @staticmethod
    def calculate_expiry_date(
        registration_date: Union[datetime, str],
        period_after_opening_months: int,
        manufacturing_date: Optional[Union[datetime, str]] = None,
        expiry_period_before_opening_months: Optional[int] = None,
    ) -> datetime:
        """Return the earlier of the post-opening and pre-opening limits.

        Raises:
            InvalidInputError: if ``registration_date`` cannot be parsed.
        """
        try:
            opened_at = parse_instant(registration_date)
        except InvalidDateError as exc:
            raise InvalidInputError(f"Invalid registration date: {registration_date!r}") from exc
        if period_after_opening_months is None:
            raise InvalidInputError("A usage period after opening is required.")

        date_after_opening = add_months(opened_at, period_after_opening_months)

        if manufacturing_date and expiry_period_before_opening_months:
            try:
                manufactured_at = parse_instant(manufacturing_date)
            except InvalidDateError:
                logger.warning(f"Ignoring unparseable manufacturing date: {manufacturing_date!r}")
            else:
                date_before_opening = add_months(manufactured_at, expiry_period_before_opening_months)
                return min(date_before_opening, date_after_opening)

        return date_after_opening

    def resolve_period_after_opening(self, product: Product) -> int:
        """Explicit period, else the category average, else the fallback."""
        if product.period_after_opening is not None:
            return product.period_after_opening
        category_default = self.usage_periods.get(product.category)
        if category_default is not None:
            return category_default
        logger.debug(f"No usage period for category {product.category!r}; using {self.fallback_months} months")
        return self.fallback_months

    def expiry_for(self, product: Product, registration_date: Optional[datetime] = None) -> datetime:
        return self.calculate_expiry_date(
            registration_date or product.registration_date,
            self.resolve_period_after_opening(product),
            product.manufacturing_date,
            product.expiry_period_before_opening,
        )

    def refresh(self, product: Product) -> Product:
        """Return a copy of ``product`` with its expiry date recomputed."""
        return replace(product, expiry_date=self.expiry_for(product))

    def days_remaining(self, product: Product, now: Optional[datetime] = None) -> int:
        return days_remaining(product.expiry_date or self.expiry_for(product), now)

    def status(self, product: Product, now: Optional[datetime] = None) -> ExpiryStatus:
        remaining = self.days_remaining(product, now)
        if remaining <= 0:
            return ExpiryStatus.EXPIRED
        if remaining <= self.replace_soon_days:
            return ExpiryStatus.REPLACE_SOON
        if remaining <= self.watch_days:
            return ExpiryStatus.WATCH
        return ExpiryStatus.FRESH

    def life_remaining_percent(self, product: Product, now: Optional[datetime] = None) -> float:
        """Percentage of the usage window (opening to expiry) still left."""
        now_utc = parse_instant(now) if now is not None else TimezoneUtils.utc_now()
        expiry = product.expiry_date or self.expiry_for(product)

        total_life_seconds = (expiry - product.registration_date).total_seconds()
        if total_life_seconds <= 0:
            return 0.0

        time_remaining_seconds = (expiry - now_utc).total_seconds()
        percent = (time_remaining_seconds / total_life_seconds) * 100
        return round(max(0.0, min(100.0, percent)), 1)
