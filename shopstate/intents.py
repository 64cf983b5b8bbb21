"""Intents: named requests to change store state.

Intents are plain frozen dataclasses. The store routes each one to the slice
that registered a reducer for its type (see ``shopstate.reducers``).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from .models import Product, SortKey


# ============================================================================
# Cart intents
# ============================================================================


@dataclass(frozen=True)
class AddItem:
    product_id: int
    title: str
    unit_price: float
    image_ref: str = ""

    @classmethod
    def from_product(cls, product: Product) -> AddItem:
        """Cart line fields for a catalog product, priced at its list price."""
        return cls(
            product_id=product.id,
            title=product.title,
            unit_price=product.price,
            image_ref=product.thumbnail,
        )


@dataclass(frozen=True)
class RemoveItem:
    product_id: int


@dataclass(frozen=True)
class SetQuantity:
    product_id: int
    quantity: int


@dataclass(frozen=True)
class ClearCart:
    pass


# ============================================================================
# Catalog intents
# ============================================================================


@dataclass(frozen=True)
class BeginLoad:
    pass


@dataclass(frozen=True)
class LoadSucceeded:
    products: Sequence[Product]


@dataclass(frozen=True)
class LoadFailed:
    message: str


@dataclass(frozen=True)
class SetSearchText:
    text: str


@dataclass(frozen=True)
class SetCategory:
    category: str


@dataclass(frozen=True)
class SetSortKey:
    sort_key: Union[SortKey, str]


@dataclass(frozen=True)
class ResetFilters:
    """Back to every category, sorted by name. Search text is kept."""


CartIntent = Union[AddItem, RemoveItem, SetQuantity, ClearCart]
CatalogIntent = Union[
    BeginLoad,
    LoadSucceeded,
    LoadFailed,
    SetSearchText,
    SetCategory,
    SetSortKey,
    ResetFilters,
]
