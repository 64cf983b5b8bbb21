"""Store state types: products, cart lines and the two slice snapshots.

Every type here is a frozen dataclass. Collections are tuples so a snapshot
handed to a subscriber can never be edited behind the store's back; reducers
build replacements with ``dataclasses.replace``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .errors import CatalogFormatError, errmsg


class SortKey(str, Enum):
    """Ordering applied to the visible product list."""

    NAME = "name"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    RATING = "rating"


class LoadStatus(str, Enum):
    """Catalog fetch status."""

    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _number(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _integer(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


@dataclass(frozen=True)
class Product:
    id: int
    title: str = ""
    description: str = ""
    brand: str = ""
    category: str = ""
    price: float = 0.0
    discount_percentage: float = 0.0
    rating: float = 0.0
    stock: int = 0
    thumbnail: str = ""
    images: tuple[str, ...] = ()

    @property
    def discounted_price(self) -> float:
        """Unit price after the advertised discount."""
        return self.price * (1 - self.discount_percentage / 100)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Product:
        """Build a Product from a raw catalog record.

        Text fields that are missing or not strings become ``""``. Numbers
        that cannot be parsed, or are NaN or infinite, become ``0``. Price and
        stock are floored at ``0`` and the discount is clamped to 0-100, so one
        sloppy record degrades instead of failing the whole catalog.

        Raises:
            CatalogFormatError: If the record is not a mapping or has no usable id.
        """
        if not isinstance(record, Mapping):
            raise CatalogFormatError(errmsg.NOT_A_RECORD)

        raw_id = record.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, (int, str)):
            raise CatalogFormatError(f"Product record has no usable id: {raw_id!r}")
        try:
            product_id = int(raw_id)
        except ValueError as e:
            raise CatalogFormatError("Product record has no usable id", e) from e

        images = record.get("images")
        if isinstance(images, (list, tuple)):
            images = tuple(i for i in images if isinstance(i, str))
        else:
            images = ()

        return cls(
            id=product_id,
            title=_text(record.get("title")),
            description=_text(record.get("description")),
            brand=_text(record.get("brand")),
            category=_text(record.get("category")),
            price=max(0.0, _number(record.get("price"))),
            discount_percentage=min(100.0, max(0.0, _number(record.get("discountPercentage")))),
            rating=_number(record.get("rating")),
            stock=max(0, _integer(record.get("stock"))),
            thumbnail=_text(record.get("thumbnail")),
            images=images,
        )


@dataclass(frozen=True)
class CartLine:
    product_id: int
    title: str
    unit_price: float
    image_ref: str = ""
    quantity: int = 1

    @property
    def subtotal(self) -> float:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class CartState:
    """Cart slice snapshot. ``total`` always equals the fold over ``lines``."""

    lines: tuple[CartLine, ...] = ()
    total: float = 0

    def line(self, product_id: int) -> Optional[CartLine]:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class CatalogState:
    """Catalog slice snapshot.

    ``products`` is the collection as fetched and is only ever replaced
    wholesale. ``categories`` is derived from it by the load reducer. The
    visible product list is not stored here; see ``shopstate.views``.
    """

    products: tuple[Product, ...] = ()
    search_text: str = ""
    category: str = ""
    sort_key: SortKey = SortKey.NAME
    status: LoadStatus = LoadStatus.IDLE
    error_message: Optional[str] = None
    categories: tuple[str, ...] = ()

    @property
    def is_loading(self) -> bool:
        return self.status == LoadStatus.LOADING

    @property
    def has_products(self) -> bool:
        return bool(self.products)
