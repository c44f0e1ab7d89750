"""Session-scoped replacement reminders.

Synopsis:
Decides when a product should trigger its one-time "replace soon" reminder and
which out-of-stock products should be queued for the shopping list. The
session state is owned by the caller and passed in explicitly.

Glossary:
- Lead time: number of days before expiry at which a reminder may fire.
- Session: lifetime of one NotificationState; reminders fire at most once per session.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Iterator, List, Optional, Set

from ..config import NOTIFICATION_DAYS_BEFORE
from ..errors import InvalidInputError
from ..models import Product, ReplacementReminder, ShoppingListIntent
from ..utils.date_math import days_remaining
from .expiry_service import ExpiryService

logger = logging.getLogger(__name__)


# --- NotificationState ---
# Purpose: Track which products were already reminded or queued this session.
class NotificationState:
    """Per-session record of product IDs that already produced a reminder."""

    def __init__(self, notified: Iterable[str] = (), restock_queued: Iterable[str] = ()):
        self._notified: Set[str] = set(notified)
        self._restock_queued: Set[str] = set(restock_queued)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._notified

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._notified))

    def __len__(self) -> int:
        return len(self._notified)

    def mark_notified(self, product_id: str) -> None:
        self._notified.add(product_id)

    def is_restock_queued(self, product_id: str) -> bool:
        return product_id in self._restock_queued

    def mark_restock_queued(self, product_id: str) -> None:
        self._restock_queued.add(product_id)

    def clear(self) -> None:
        """Forget everything, as when the session ends or data is wiped."""
        self._notified.clear()
        self._restock_queued.clear()

    def snapshot(self) -> dict:
        return {
            "notified": sorted(self._notified),
            "restockQueued": sorted(self._restock_queued),
        }


# --- NotificationService ---
# Purpose: Fire each product's replacement reminder at most once per session.
# Inputs: Products, caller-owned NotificationState, optional evaluation time.
# Outputs: ReplacementReminder / ShoppingListIntent events for the caller to present.
class NotificationService:
    def __init__(self, lead_days: int = NOTIFICATION_DAYS_BEFORE, expiry_service: Optional[ExpiryService] = None):
        if lead_days is None or int(lead_days) < 0:
            raise InvalidInputError(f"Notification lead time must be zero or more days, got {lead_days!r}")
        self.lead_days = int(lead_days)
        self.expiry_service = expiry_service or ExpiryService()

    def is_due(self, remaining_days: int) -> bool:
        return 0 < remaining_days <= self.lead_days

    def check_product(
        self,
        product: Product,
        state: NotificationState,
        now: Optional[datetime] = None,
    ) -> Optional[ReplacementReminder]:
        """Return a reminder and record it in ``state`` if the product is due."""
        if product.id in state:
            return None

        expiry = product.expiry_date or self.expiry_service.expiry_for(product)
        remaining = days_remaining(expiry, now)
        if not self.is_due(remaining):
            return None

        state.mark_notified(product.id)
        logger.info(f"Replacement reminder for product {product.id}: {remaining} day(s) left")
        return ReplacementReminder(
            product_id=product.id,
            product_name=product.name,
            days_remaining=remaining,
        )

    def check_products(
        self,
        products: Iterable[Product],
        state: NotificationState,
        now: Optional[datetime] = None,
    ) -> List[ReplacementReminder]:
        reminders = []
        for product in products:
            reminder = self.check_product(product, state, now)
            if reminder:
                reminders.append(reminder)
        return reminders

    @staticmethod
    def collect_restock_intents(
        products: Iterable[Product],
        shopping_list_product_ids: Iterable[str],
        state: NotificationState,
    ) -> List[ShoppingListIntent]:
        """Queue every out-of-stock product not already on the shopping list.

        Only products whose stock is exactly zero qualify; a missing stock
        counts as one unit.
        """
        on_list = set(shopping_list_product_ids)
        intents = []
        for product in products:
            if product.effective_stock != 0:
                continue
            if product.id in on_list or state.is_restock_queued(product.id):
                continue
            state.mark_restock_queued(product.id)
            intents.append(ShoppingListIntent(product_id=product.id, product_name=product.name))
        if intents:
            logger.info(f"Queued {len(intents)} out-of-stock product(s) for the shopping list")
        return intents
