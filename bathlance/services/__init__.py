"""
Replacement-schedule services.

Expiry computation, session reminders, the replace transition and product
registration/editing all delegate to a single ExpiryService.
"""

from .expiry_service import ExpiryService, ExpiryStatus
from .notification_service import NotificationService, NotificationState
from .product_service import ProductService
from .replacement_service import ReplacementService
from .shopping_links import build_shopping_links

__all__ = [
    'ExpiryService',
    'ExpiryStatus',
    'NotificationService',
    'NotificationState',
    'ProductService',
    'ReplacementService',
    'build_shopping_links',
]
