"""Catalog slice reducers.

These reducers only touch source state: the fetched products, the filter
parameters and the load status. The visible list is derived afterwards by
``shopstate.views``; no reducer here filters or sorts.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from typing import Optional

from .intents import (
    BeginLoad,
    LoadFailed,
    LoadSucceeded,
    ResetFilters,
    SetCategory,
    SetSearchText,
    SetSortKey,
)
from .models import CatalogState, LoadStatus, Product, SortKey
from .reducers import ReducerRouter, reducer


def derive_categories(products: Iterable[Product]) -> tuple[str, ...]:
    """Distinct non-empty categories in first-seen order."""
    seen: dict[str, None] = {}
    for product in products:
        category = product.category
        if isinstance(category, str) and category:
            seen.setdefault(category, None)
    return tuple(seen)


def find_product(catalog: CatalogState, product_id: int) -> Optional[Product]:
    for product in catalog.products:
        if product.id == product_id:
            return product
    return None


def parse_sort_key(value) -> Optional[SortKey]:
    """Coerce a sort key or its string value; None if unrecognized."""
    try:
        return SortKey(value)
    except ValueError:
        return None


@reducer(BeginLoad)
def begin_load(state: CatalogState, intent: BeginLoad) -> CatalogState:
    return replace(state, status=LoadStatus.LOADING, error_message=None)


@reducer(LoadSucceeded)
def load_succeeded(state: CatalogState, intent: LoadSucceeded) -> CatalogState:
    products = tuple(intent.products)
    return replace(
        state,
        products=products,
        categories=derive_categories(products),
        status=LoadStatus.IDLE,
        error_message=None,
    )


@reducer(LoadFailed)
def load_failed(state: CatalogState, intent: LoadFailed) -> CatalogState:
    return replace(state, status=LoadStatus.ERROR, error_message=intent.message)


@reducer(SetSearchText)
def set_search_text(state: CatalogState, intent: SetSearchText) -> CatalogState:
    if intent.text == state.search_text:
        return state
    return replace(state, search_text=intent.text)


@reducer(SetCategory)
def set_category(state: CatalogState, intent: SetCategory) -> CatalogState:
    if intent.category == state.category:
        return state
    return replace(state, category=intent.category)


@reducer(SetSortKey)
def set_sort_key(state: CatalogState, intent: SetSortKey) -> CatalogState:
    sort_key = parse_sort_key(intent.sort_key)
    if sort_key is None or sort_key == state.sort_key:
        return state
    return replace(state, sort_key=sort_key)


@reducer(ResetFilters)
def reset_filters(state: CatalogState, intent: ResetFilters) -> CatalogState:
    if state.category == "" and state.sort_key == SortKey.NAME:
        return state
    return replace(state, category="", sort_key=SortKey.NAME)


catalog_router = (
    ReducerRouter("catalog", CatalogState)
    .on(begin_load)
    .on(load_succeeded)
    .on(load_failed)
    .on(set_search_text)
    .on(set_category)
    .on(set_sort_key)
    .on(reset_filters)
)
