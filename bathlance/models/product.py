from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from ..errors import InvalidDateError, InvalidInputError
from ..utils.date_math import format_instant, parse_instant


class ProductCategory(Enum):
    """Known bathroom product categories"""
    TOOTHBRUSH = "toothbrush"
    SHAMPOO = "shampoo"
    CONDITIONER = "conditioner"
    CLEANSER = "cleanser"
    BODY_WASH = "body-wash"
    TOWEL = "towel"
    RAZOR_HEAD = "razor-head"
    SHOWER_BALL = "shower-ball"
    SHOWER_FILTER = "shower-filter"
    OTHER = "other"


# Record keys owned by the core; anything else rides along in Product.extra.
_CORE_KEYS = {
    "id",
    "name",
    "category",
    "registrationDate",
    "expiryDate",
    "manufacturingDate",
    "expiryPeriodBeforeOpening",
    "periodAfterOpening",
    "stock",
}


@dataclass(frozen=True)
class Product:
    """A tracked product, passed into the core by value."""
    id: str
    name: str
    category: str
    registration_date: datetime
    expiry_date: Optional[datetime] = None
    manufacturing_date: Optional[Union[str, datetime]] = None
    expiry_period_before_opening: Optional[int] = None
    period_after_opening: Optional[int] = None
    stock: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        # Copies made with dataclasses.replace must not share the caller's dict.
        object.__setattr__(self, "extra", dict(self.extra or {}))

    @property
    def effective_stock(self) -> int:
        return 1 if self.stock is None else self.stock

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Product":
        """Build a product from a camelCase record as stored by the app."""
        product_id = data.get("id")
        if product_id in (None, ""):
            raise InvalidInputError("Product record is missing an id.")

        try:
            registration_date = parse_instant(data.get("registrationDate"))
        except InvalidDateError as exc:
            raise InvalidInputError(
                f"Product {product_id!r} has an invalid registrationDate: {data.get('registrationDate')!r}"
            ) from exc

        expiry_raw = data.get("expiryDate")
        expiry_date = None
        if expiry_raw:
            try:
                expiry_date = parse_instant(expiry_raw)
            except InvalidDateError:
                # Derived field; callers recompute it from the other inputs.
                expiry_date = None

        return cls(
            id=str(product_id),
            name=str(data.get("name") or ""),
            category=str(data.get("category") or ProductCategory.OTHER.value),
            registration_date=registration_date,
            expiry_date=expiry_date,
            manufacturing_date=data.get("manufacturingDate") or None,
            expiry_period_before_opening=_optional_int(data, "expiryPeriodBeforeOpening"),
            period_after_opening=_optional_int(data, "periodAfterOpening"),
            stock=_optional_int(data, "stock"),
            extra={key: value for key, value in data.items() if key not in _CORE_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        manufacturing = self.manufacturing_date
        if isinstance(manufacturing, datetime):
            manufacturing = format_instant(manufacturing)

        record: Dict[str, Any] = dict(self.extra)
        record.update({
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "registrationDate": format_instant(self.registration_date),
            "expiryDate": format_instant(self.expiry_date) if self.expiry_date else None,
            "manufacturingDate": manufacturing,
            "expiryPeriodBeforeOpening": self.expiry_period_before_opening,
            "periodAfterOpening": self.period_after_opening,
            "stock": self.stock,
        })
        return record


def _optional_int(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{key} expected an integer but received {value!r}") from exc


@dataclass(frozen=True)
class ReplacementReminder:
    """One-time reminder that a product is close to its replacement date."""
    product_id: str
    product_name: str
    days_remaining: int

    @property
    def message(self) -> str:
        unit = "day" if self.days_remaining == 1 else "days"
        return f'"{self.product_name}" is due for replacement in {self.days_remaining} {unit}.'

    def to_dict(self) -> Dict[str, Any]:
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "daysRemaining": self.days_remaining,
        }


@dataclass(frozen=True)
class ShoppingListIntent:
    """Request for the caller to add a product to its shopping list."""
    product_id: str
    product_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"productId": self.product_id, "productName": self.product_name}


@dataclass(frozen=True)
class ReplacementResult:
    product: Product
    shopping_list_intent: Optional[ShoppingListIntent] = None
