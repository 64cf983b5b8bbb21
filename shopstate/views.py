"""Derived views: the visible product list and the cart summary.

Both views are pure functions of slice state wrapped in memoizing selectors.
A selector recomputes only when one of its inputs changes: collections are
compared by identity (slices replace them wholesale, never edit them) and
scalars such as the search text by value.

Example::

    select_visible = make_visible_products_selector()

    products = select_visible(store.catalog)
    assert select_visible(store.catalog) is products  # nothing changed
"""

from __future__ import annotations

import math
import unicodedata
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from .cart import cart_total, item_count
from .config import DEFAULT_TAX_RATE
from .models import CartLine, CartState, CatalogState, Product, SortKey

T = TypeVar("T")
R = TypeVar("R")

# Category value that, like "", disables the category filter.
ALL_CATEGORIES = "all"


# ============================================================================
# Filtering and sorting
# ============================================================================


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _number(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return float(value)
    return 0.0


def matches_search(product: Product, needle: str) -> bool:
    """Case-insensitive substring match on title, description, category or brand.

    ``needle`` must already be casefolded. Fields that are missing or not
    strings count as empty.
    """
    return any(
        needle in _text(getattr(product, name, None)).casefold()
        for name in ("title", "description", "category", "brand")
    )


def filter_products(
    products: Iterable[Product], search_text: str, category: str
) -> list[Product]:
    """Apply the search and category filters, keeping source order."""
    working = list(products)

    if search_text:
        needle = search_text.casefold()
        working = [p for p in working if matches_search(p, needle)]

    if category and category != ALL_CATEGORIES:
        working = [p for p in working if getattr(p, "category", None) == category]

    return working


def _title_key(product: Product) -> tuple[str, str]:
    # Accent- and case-insensitive first; on a tie lowercase sorts before uppercase.
    title = _text(product.title)
    folded = unicodedata.normalize("NFKD", title)
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch))
    return (folded.casefold(), title.swapcase())


def sort_products(products: Iterable[Product], sort_key: SortKey) -> list[Product]:
    """Stable sort; products that compare equal keep their relative order."""
    if sort_key == SortKey.PRICE_ASC:
        return sorted(products, key=lambda p: _number(p.price))
    if sort_key == SortKey.PRICE_DESC:
        return sorted(products, key=lambda p: _number(p.price), reverse=True)
    if sort_key == SortKey.RATING:
        return sorted(products, key=lambda p: _number(p.rating), reverse=True)
    return sorted(products, key=_title_key)


def visible_products(
    products: Sequence[Product],
    search_text: str,
    category: str,
    sort_key: SortKey,
) -> tuple[Product, ...]:
    """The product list a consumer renders."""
    return tuple(sort_products(filter_products(products, search_text, category), sort_key))


# ============================================================================
# Cart summary
# ============================================================================


@dataclass(frozen=True)
class CartSummary:
    item_count: int = 0
    subtotal: float = 0
    tax: float = 0
    total: float = 0


def summarize_cart(lines: Sequence[CartLine], tax_rate: float = DEFAULT_TAX_RATE) -> CartSummary:
    subtotal = cart_total(lines)
    tax = subtotal * tax_rate
    return CartSummary(
        item_count=item_count(lines),
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
    )


# ============================================================================
# Memoizing selectors
# ============================================================================


def _unchanged(previous: Any, current: Any) -> bool:
    if previous is current:
        return True
    if isinstance(previous, (str, int, float, Enum)) and type(previous) is type(current):
        return previous == current
    return False


class Selector(Generic[T, R]):
    """Caches ``combiner(*inputs(state))`` against the last input values.

    All inputs are compared together: the cached result is reused only when
    every input is unchanged.
    """

    def __init__(
        self,
        inputs: Sequence[Callable[[T], Any]],
        combiner: Callable[..., R],
    ) -> None:
        if not inputs:
            raise ValueError("selector needs at least one input")
        self._inputs = tuple(inputs)
        self._combiner = combiner
        self._last_args: tuple[Any, ...] | None = None
        self._last_result: R | None = None
        self.recomputations = 0

    def __call__(self, state: T) -> R:
        args = tuple(select(state) for select in self._inputs)
        if self._last_args is not None and all(
            _unchanged(prev, cur) for prev, cur in zip(self._last_args, args)
        ):
            return self._last_result

        result = self._combiner(*args)
        self._last_args = args
        self._last_result = result
        self.recomputations += 1
        return result

    def reset_cache(self) -> None:
        self._last_args = None
        self._last_result = None


def create_selector(*inputs: Callable[[T], Any], combiner: Callable[..., R]) -> Selector[T, R]:
    """Build a Selector from input functions and a combiner."""
    return Selector(inputs, combiner)


def make_visible_products_selector() -> Selector[CatalogState, tuple[Product, ...]]:
    return create_selector(
        lambda catalog: catalog.products,
        lambda catalog: catalog.search_text,
        lambda catalog: catalog.category,
        lambda catalog: catalog.sort_key,
        combiner=visible_products,
    )


def make_cart_summary_selector(
    tax_rate: float = DEFAULT_TAX_RATE,
) -> Selector[CartState, CartSummary]:
    return create_selector(
        lambda cart: cart.lines,
        combiner=lambda lines: summarize_cart(lines, tax_rate),
    )
