import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..errors import InsufficientStockError
from ..models import Product, ReplacementResult, ShoppingListIntent
from ..utils.date_math import parse_instant, truncate_to_millis
from ..utils.timezone_utils import TimezoneUtils
from .expiry_service import ExpiryService

logger = logging.getLogger(__name__)


class ReplacementService:
    """Applies the "I opened a new one" transition to a product.

    One unopened unit is taken from stock, the opening date resets to now and
    the expiry date is recomputed. Manufacturing details carry over unchanged.
    """

    def __init__(self, expiry_service: Optional[ExpiryService] = None):
        self.expiry_service = expiry_service or ExpiryService()

    def replace(
        self,
        product: Product,
        already_on_shopping_list: bool = False,
        now: Optional[datetime] = None,
    ) -> ReplacementResult:
        """Return the replaced product and, when stock runs out, a shopping-list intent.

        Raises:
            InsufficientStockError: if no unopened unit is left. The product is not changed.
        """
        current_stock = product.effective_stock
        if current_stock <= 0:
            logger.info(f"Replacement rejected for product {product.id}: stock is {current_stock}")
            raise InsufficientStockError(product.id, product.name, current_stock)

        opened_at = truncate_to_millis(parse_instant(now) if now is not None else TimezoneUtils.utc_now())
        new_stock = current_stock - 1
        new_expiry = self.expiry_service.expiry_for(product, registration_date=opened_at)

        updated = replace(
            product,
            stock=new_stock,
            registration_date=opened_at,
            expiry_date=new_expiry,
        )

        intent = None
        if new_stock == 0 and not already_on_shopping_list:
            intent = ShoppingListIntent(product_id=product.id, product_name=product.name)
            logger.info(f"Last unit of product {product.id} opened; requesting shopping-list entry")

        return ReplacementResult(product=updated, shopping_list_intent=intent)
