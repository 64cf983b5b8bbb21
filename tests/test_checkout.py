"""Tests for order placement."""

import uuid
from datetime import timezone

import pytest

from shopstate import (
    PAYMENT_COD,
    PAYMENT_UPI,
    AddItem,
    CheckoutRejectedError,
    Settings,
    Store,
    errmsg,
    place_order,
)

from .fixtures import BLUE_HAT, RED_SHOE


@pytest.fixture
def store():
    store = Store(settings=Settings(tax_rate=0.1, cod_fee=3.2))
    store.dispatch(AddItem.from_product(RED_SHOE))
    store.dispatch(AddItem.from_product(BLUE_HAT))
    store.dispatch(AddItem.from_product(BLUE_HAT))
    return store


class TestPlaceOrder:
    def test_receipt_totals(self, store):
        receipt = place_order(store)

        assert receipt.payment_method == "card"
        assert receipt.subtotal == 70
        assert receipt.tax == pytest.approx(7.0)
        assert receipt.shipping == 0
        assert receipt.fee == 0
        assert receipt.total == pytest.approx(77.0)
        assert [(l.product_id, l.quantity) for l in receipt.lines] == [(1, 1), (2, 2)]

    def test_receipt_identity(self, store):
        receipt = place_order(store, PAYMENT_UPI)

        assert uuid.UUID(receipt.order_id)
        assert receipt.placed_at.tzinfo is timezone.utc

    def test_cash_on_delivery_adds_fee(self, store):
        receipt = place_order(store, PAYMENT_COD)

        assert receipt.fee == 3.2
        assert receipt.total == pytest.approx(80.2)

    def test_clears_cart(self, store):
        seen = []
        store.subscribe(seen.append)

        place_order(store)

        assert store.cart.is_empty()
        assert store.cart.total == 0
        assert len(seen) == 1

    def test_empty_cart_rejected(self):
        with pytest.raises(CheckoutRejectedError, match=errmsg.CART_EMPTY):
            place_order(Store())

    def test_unknown_payment_method_rejected(self, store):
        with pytest.raises(CheckoutRejectedError, match="Unknown payment method: cheque"):
            place_order(store, "cheque")

        assert len(store.cart.lines) == 2

    def test_second_order_rejected_after_clear(self, store):
        place_order(store)

        with pytest.raises(CheckoutRejectedError):
            place_order(store)
