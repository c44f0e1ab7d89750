"""Replacement-schedule core for bathroom products."""
from .errors import BathlanceError, InsufficientStockError, InvalidDateError, InvalidInputError
from .models import Product, ProductCategory, ReplacementReminder, ReplacementResult, ShoppingListIntent
from .services import (
    ExpiryService,
    ExpiryStatus,
    NotificationService,
    NotificationState,
    ProductService,
    ReplacementService,
)

__all__ = [
    'BathlanceError',
    'InsufficientStockError',
    'InvalidDateError',
    'InvalidInputError',
    'Product',
    'ProductCategory',
    'ReplacementReminder',
    'ReplacementResult',
    'ShoppingListIntent',
    'ExpiryService',
    'ExpiryStatus',
    'NotificationService',
    'NotificationState',
    'ProductService',
    'ReplacementService',
]
