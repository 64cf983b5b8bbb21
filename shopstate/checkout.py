"""Order placement on top of the cart slice."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

import structlog

from .errors import CheckoutRejectedError, errmsg
from .intents import ClearCart
from .models import CartLine
from .store import Store

logger = structlog.get_logger()

PAYMENT_CARD = "card"
PAYMENT_UPI = "upi"
PAYMENT_COD = "cod"

PAYMENT_METHODS = (PAYMENT_CARD, PAYMENT_UPI, PAYMENT_COD)

SHIPPING_COST = 0.0


@dataclass(frozen=True)
class OrderReceipt:
    order_id: str
    placed_at: datetime
    payment_method: str
    lines: tuple[CartLine, ...]
    subtotal: float
    tax: float
    shipping: float
    fee: float
    total: float


def place_order(store: Store, payment_method: str = PAYMENT_CARD) -> OrderReceipt:
    """Turn the current cart into an order receipt and empty the cart.

    Cash on delivery adds ``store.settings.cod_fee`` to the total.

    Raises:
        CheckoutRejectedError: If the cart is empty or the payment method
            is not one of PAYMENT_METHODS.
    """
    if payment_method not in PAYMENT_METHODS:
        raise CheckoutRejectedError(f"{errmsg.UNKNOWN_PAYMENT_METHOD}: {payment_method}")

    cart = store.cart
    if cart.is_empty():
        raise CheckoutRejectedError(errmsg.CART_EMPTY)

    summary = store.cart_summary
    fee = store.settings.cod_fee if payment_method == PAYMENT_COD else 0.0

    receipt = OrderReceipt(
        order_id=str(uuid.uuid4()),
        placed_at=datetime.now(timezone.utc),
        payment_method=payment_method,
        lines=cart.lines,
        subtotal=summary.subtotal,
        tax=summary.tax,
        shipping=SHIPPING_COST,
        fee=fee,
        total=summary.total + SHIPPING_COST + fee,
    )

    store.dispatch(ClearCart())

    logger.info(
        "order_placed",
        order_id=receipt.order_id,
        items=summary.item_count,
        total=receipt.total,
        payment_method=payment_method,
    )
    return receipt
