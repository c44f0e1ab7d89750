"""Models package - value types passed between the caller and the core"""
from .product import (
    Product,
    ProductCategory,
    ReplacementReminder,
    ReplacementResult,
    ShoppingListIntent,
)

__all__ = [
    'Product',
    'ProductCategory',
    'ReplacementReminder',
    'ReplacementResult',
    'ShoppingListIntent',
]
