"""Tests for the catalog slice reducers."""

import pytest

from shopstate import (
    BeginLoad,
    CatalogState,
    LoadFailed,
    LoadStatus,
    LoadSucceeded,
    ResetFilters,
    SetCategory,
    SetSearchText,
    SetSortKey,
    SortKey,
    catalog_router,
    derive_categories,
    find_product,
)

from .fixtures import BLUE_HAT, FULL_CATALOG, GREEN_SCARF, RED_SHOE, SCENARIO_CATALOG

NETWORK_ERROR = "network error"


def loaded(products=SCENARIO_CATALOG) -> CatalogState:
    return catalog_router.with_intents([BeginLoad(), LoadSucceeded(products)])


class TestLoading:
    def test_begin_load_sets_loading_and_clears_error(self):
        state = catalog_router.with_intents([LoadFailed(NETWORK_ERROR), BeginLoad()])

        assert state.status == LoadStatus.LOADING
        assert state.is_loading
        assert state.error_message is None

    def test_load_succeeded_replaces_products_and_categories(self):
        state = loaded()

        assert state.products == SCENARIO_CATALOG
        assert state.categories == ("shoes", "hats")
        assert state.status == LoadStatus.IDLE
        assert state.error_message is None

    def test_load_succeeded_accepts_list(self):
        state = catalog_router.reduce(CatalogState(), LoadSucceeded(list(FULL_CATALOG)))

        assert isinstance(state.products, tuple)
        assert state.products == FULL_CATALOG

    def test_load_succeeded_keeps_filters(self):
        state = catalog_router.with_intents(
            [SetSearchText("hat"), SetCategory("hats"), SetSortKey(SortKey.PRICE_DESC)]
        )

        state = catalog_router.reduce(state, LoadSucceeded(SCENARIO_CATALOG))

        assert state.search_text == "hat"
        assert state.category == "hats"
        assert state.sort_key == SortKey.PRICE_DESC

    def test_load_failed_records_message_keeps_products(self):
        state = catalog_router.reduce(loaded(), LoadFailed(NETWORK_ERROR))

        assert state.status == LoadStatus.ERROR
        assert state.error_message == NETWORK_ERROR
        assert state.products == SCENARIO_CATALOG


class TestFilterIntents:
    def test_set_search_text(self):
        state = catalog_router.reduce(CatalogState(), SetSearchText("shoe"))
        assert state.search_text == "shoe"

    def test_same_search_text_returns_same_state(self):
        state = catalog_router.reduce(CatalogState(), SetSearchText("shoe"))
        assert catalog_router.reduce(state, SetSearchText("shoe")) is state

    def test_set_category(self):
        state = catalog_router.reduce(CatalogState(), SetCategory("hats"))
        assert state.category == "hats"

    @pytest.mark.parametrize("value", ["price-asc", SortKey.PRICE_ASC])
    def test_set_sort_key_accepts_enum_or_string(self, value):
        state = catalog_router.reduce(CatalogState(), SetSortKey(value))
        assert state.sort_key is SortKey.PRICE_ASC

    def test_unknown_sort_key_is_ignored(self):
        state = CatalogState()
        assert catalog_router.reduce(state, SetSortKey("popularity")) is state

    def test_reset_filters_keeps_search_text(self):
        state = catalog_router.with_intents(
            [SetSearchText("shoe"), SetCategory("shoes"), SetSortKey("rating"), ResetFilters()]
        )

        assert state.category == ""
        assert state.sort_key == SortKey.NAME
        assert state.search_text == "shoe"

    def test_reset_filters_when_already_default_is_noop(self):
        state = CatalogState()
        assert catalog_router.reduce(state, ResetFilters()) is state


class TestCategories:
    def test_distinct_first_seen_order(self):
        assert derive_categories(FULL_CATALOG) == ("shoes", "hats", "accessories")

    def test_skips_empty_and_non_string(self):
        class Loose:
            def __init__(self, category):
                self.category = category

        assert derive_categories([Loose(""), Loose(None), Loose("hats")]) == ("hats",)


class TestFindProduct:
    def test_finds_by_id(self):
        assert find_product(loaded(FULL_CATALOG), GREEN_SCARF.id) is GREEN_SCARF

    def test_missing_returns_none(self):
        assert find_product(loaded(), 404) is None


class TestInitialState:
    def test_defaults(self):
        state = catalog_router.initial_state()

        assert state.products == ()
        assert state.search_text == ""
        assert state.category == ""
        assert state.sort_key == SortKey.NAME
        assert state.status == LoadStatus.IDLE
        assert state.error_message is None
        assert state.categories == ()
        assert not state.has_products

    def test_products_compare_by_value(self):
        assert loaded().products[0] == RED_SHOE
        assert loaded().products[1] == BLUE_HAT
