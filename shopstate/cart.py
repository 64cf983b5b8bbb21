"""Cart slice reducers.

Every reducer rebuilds ``total`` from the lines it returns with
``cart_total``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from .intents import AddItem, ClearCart, RemoveItem, SetQuantity
from .models import CartLine, CartState
from .reducers import ReducerRouter, reducer


def cart_total(lines: Iterable[CartLine]) -> float:
    """Sum of unit price times quantity over all lines."""
    return sum(line.unit_price * line.quantity for line in lines)


def item_count(lines: Iterable[CartLine]) -> int:
    """Number of units in the cart, for badge display."""
    return sum(line.quantity for line in lines)


def _with_lines(lines: tuple[CartLine, ...]) -> CartState:
    return CartState(lines=lines, total=cart_total(lines))


@reducer(AddItem)
def add_item(state: CartState, intent: AddItem) -> CartState:
    if state.line(intent.product_id) is not None:
        lines = tuple(
            replace(line, quantity=line.quantity + 1)
            if line.product_id == intent.product_id
            else line
            for line in state.lines
        )
    else:
        lines = (
            *state.lines,
            CartLine(
                product_id=intent.product_id,
                title=intent.title,
                unit_price=intent.unit_price,
                image_ref=intent.image_ref,
                quantity=1,
            ),
        )
    return _with_lines(lines)


@reducer(RemoveItem)
def remove_item(state: CartState, intent: RemoveItem) -> CartState:
    if state.line(intent.product_id) is None:
        return state
    return _with_lines(tuple(line for line in state.lines if line.product_id != intent.product_id))


@reducer(SetQuantity)
def set_quantity(state: CartState, intent: SetQuantity) -> CartState:
    # Below 1 is ignored, not clamped and not a removal. RemoveItem is the
    # only way a line leaves the cart.
    if intent.quantity < 1:
        return state
    current = state.line(intent.product_id)
    if current is None or current.quantity == intent.quantity:
        return state
    return _with_lines(
        tuple(
            replace(line, quantity=intent.quantity)
            if line.product_id == intent.product_id
            else line
            for line in state.lines
        )
    )


@reducer(ClearCart)
def clear_cart(state: CartState, intent: ClearCart) -> CartState:
    return CartState()


cart_router = (
    ReducerRouter("cart", CartState)
    .on(add_item)
    .on(remove_item)
    .on(set_quantity)
    .on(clear_cart)
)
