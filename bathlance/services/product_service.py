import logging
import uuid
from dataclasses import fields, replace
from datetime import datetime
from typing import Any, Optional, Union

from ..config import MAX_STOCK
from ..errors import InvalidDateError, InvalidInputError
from ..models import Product
from ..utils.date_math import parse_instant, truncate_to_millis
from ..utils.timezone_utils import TimezoneUtils
from .expiry_service import ExpiryService

logger = logging.getLogger(__name__)

# Changing any of these invalidates the stored expiry date.
EXPIRY_INPUT_FIELDS = frozenset({
    "registration_date",
    "category",
    "period_after_opening",
    "manufacturing_date",
    "expiry_period_before_opening",
})


class ProductService:
    """Builds and edits products so the expiry date always follows its inputs."""

    def __init__(self, expiry_service: Optional[ExpiryService] = None, max_stock: int = MAX_STOCK):
        self.expiry_service = expiry_service or ExpiryService()
        self.max_stock = max_stock

    def register(
        self,
        name: str,
        category: str,
        *,
        product_id: Optional[str] = None,
        manufacturing_date: Optional[Union[str, datetime]] = None,
        expiry_period_before_opening: Optional[int] = None,
        period_after_opening: Optional[int] = None,
        stock: int = 1,
        now: Optional[datetime] = None,
        **extra: Any,
    ) -> Product:
        """Create a freshly opened product with a computed expiry date."""
        if not name or not name.strip():
            raise InvalidInputError("Product name is required.")

        opened_at = truncate_to_millis(parse_instant(now) if now is not None else TimezoneUtils.utc_now())
        product = Product(
            id=product_id or str(uuid.uuid4()),
            name=name.strip(),
            category=category,
            registration_date=opened_at,
            manufacturing_date=manufacturing_date,
            expiry_period_before_opening=expiry_period_before_opening,
            period_after_opening=period_after_opening,
            stock=self.clamp_stock(stock),
            extra=dict(extra),
        )
        return self.expiry_service.refresh(product)

    def update(self, product: Product, **changes: Any) -> Product:
        """Apply edits and recompute the expiry date.

        ``expiry_date`` cannot be edited directly; stock is clamped into
        [0, max_stock] and an unset stock becomes 1.
        """
        allowed = {f.name for f in fields(Product)} - {"id", "expiry_date"}
        unknown = set(changes) - allowed
        if unknown:
            raise InvalidInputError(f"Cannot edit product field(s): {', '.join(sorted(unknown))}")

        if "registration_date" in changes:
            try:
                changes["registration_date"] = parse_instant(changes["registration_date"])
            except InvalidDateError as exc:
                raise InvalidInputError(f"Invalid registration date: {changes['registration_date']!r}") from exc
        if "stock" in changes:
            changes["stock"] = self.clamp_stock(changes["stock"])

        updated = replace(product, **changes)
        if EXPIRY_INPUT_FIELDS.intersection(changes) or updated.expiry_date is None:
            updated = self.expiry_service.refresh(updated)
            logger.debug(f"Recomputed expiry for product {product.id}: {updated.expiry_date}")
        return updated

    def clamp_stock(self, stock: Optional[int]) -> int:
        if stock is None:
            return 1
        try:
            value = int(stock)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"stock expected an integer but received {stock!r}") from exc
        return max(0, min(self.max_stock, value))
