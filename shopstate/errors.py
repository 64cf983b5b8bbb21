"""Error types for the shopstate store."""

from typing import Optional


class errmsg:
    """Error message constants."""

    UNKNOWN_INTENT = "Unknown intent type"
    CART_EMPTY = "Cart is empty"
    UNKNOWN_PAYMENT_METHOD = "Unknown payment method"
    FETCH_FAILED = "Failed to fetch products"
    NOT_A_RECORD = "Product record must be a mapping"
    NOT_A_COLLECTION = "Product payload must be a list of records"
    LOADER_CLOSED = "Catalog loader is closed"


class ShopStateError(Exception):
    """Base class for shopstate errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class UnknownIntentError(ShopStateError, ValueError):
    """No store slice handles the dispatched intent."""

    def __init__(self, intent: object):
        super().__init__(f"{errmsg.UNKNOWN_INTENT}: {type(intent).__name__}")
        self.intent = intent


class CatalogSourceError(ShopStateError):
    """The catalog data source failed to deliver products."""


class CatalogFormatError(CatalogSourceError):
    """The catalog data source returned records outside the product schema."""


class CheckoutRejectedError(ShopStateError):
    """Order placement was rejected by a business rule."""
