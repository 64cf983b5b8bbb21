"""shopstate: reactive cart and catalog state for a storefront client."""

from .errors import (
    ShopStateError,
    UnknownIntentError,
    CatalogSourceError,
    CatalogFormatError,
    CheckoutRejectedError,
    errmsg,
)
from .models import (
    SortKey,
    LoadStatus,
    Product,
    CartLine,
    CartState,
    CatalogState,
)
from .intents import (
    AddItem,
    RemoveItem,
    SetQuantity,
    ClearCart,
    BeginLoad,
    LoadSucceeded,
    LoadFailed,
    SetSearchText,
    SetCategory,
    SetSortKey,
    ResetFilters,
)
from .reducers import ReducerRouter, reducer, validate_reducer
from .cart import cart_router, cart_total, item_count
from .catalog import catalog_router, derive_categories, find_product
from .views import (
    ALL_CATEGORIES,
    CartSummary,
    Selector,
    create_selector,
    filter_products,
    sort_products,
    visible_products,
    summarize_cart,
    make_visible_products_selector,
    make_cart_summary_selector,
)
from .config import Settings, configure_logging
from .store import Store, StoreSnapshot
from .loader import (
    CatalogSource,
    StaticCatalogSource,
    JsonCatalogSource,
    CatalogLoader,
    parse_products,
)
from .checkout import (
    OrderReceipt,
    place_order,
    PAYMENT_CARD,
    PAYMENT_UPI,
    PAYMENT_COD,
)
from .debounce import Debouncer

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ShopStateError",
    "UnknownIntentError",
    "CatalogSourceError",
    "CatalogFormatError",
    "CheckoutRejectedError",
    "errmsg",
    # Models
    "SortKey",
    "LoadStatus",
    "Product",
    "CartLine",
    "CartState",
    "CatalogState",
    # Intents
    "AddItem",
    "RemoveItem",
    "SetQuantity",
    "ClearCart",
    "BeginLoad",
    "LoadSucceeded",
    "LoadFailed",
    "SetSearchText",
    "SetCategory",
    "SetSortKey",
    "ResetFilters",
    # Reducers
    "ReducerRouter",
    "reducer",
    "validate_reducer",
    "cart_router",
    "cart_total",
    "item_count",
    "catalog_router",
    "derive_categories",
    "find_product",
    # Views
    "ALL_CATEGORIES",
    "CartSummary",
    "Selector",
    "create_selector",
    "filter_products",
    "sort_products",
    "visible_products",
    "summarize_cart",
    "make_visible_products_selector",
    "make_cart_summary_selector",
    # Store
    "Settings",
    "configure_logging",
    "Store",
    "StoreSnapshot",
    # Loading
    "CatalogSource",
    "StaticCatalogSource",
    "JsonCatalogSource",
    "CatalogLoader",
    "parse_products",
    # Checkout
    "OrderReceipt",
    "place_order",
    "PAYMENT_CARD",
    "PAYMENT_UPI",
    "PAYMENT_COD",
    # Input
    "Debouncer",
]
