"""The store: slice state, intent dispatch and subscriber notification.

A dispatch runs in two phases. First the owning slice's reducer produces the
next source state. Then the memoized views are derived from it. Subscribers
are called with the resulting snapshot before ``dispatch`` returns.

Everything runs synchronously on the caller's thread. An intent dispatched
from inside a subscriber is queued and applied once the current notification
round has finished, so reducers never run re-entrantly.

Example::

    store = Store()
    unsubscribe = store.subscribe(render)

    store.dispatch(LoadSucceeded(products))
    store.dispatch(SetSearchText("shoe"))
    store.dispatch(AddItem.from_product(store.visible_products[0]))

    unsubscribe()
"""

from __future__ import annotations

import itertools
from collections import deque
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

import structlog

from .cart import cart_router, cart_total
from .catalog import catalog_router, derive_categories
from .config import Settings
from .errors import UnknownIntentError
from .models import CartState, CatalogState, Product
from .reducers import ReducerRouter
from .views import CartSummary, make_cart_summary_selector, make_visible_products_selector

logger = structlog.get_logger()


@dataclass(frozen=True)
class StoreSnapshot:
    """Full store state at one point in time, derived views included."""

    cart: CartState
    catalog: CatalogState
    visible_products: tuple[Product, ...]
    cart_summary: CartSummary


Listener = Callable[[StoreSnapshot], None]
Unsubscribe = Callable[[], None]


def _normalize_cart(cart: CartState) -> CartState:
    lines = tuple(cart.lines)
    total = cart_total(lines)
    if lines is cart.lines and cart.total == total:
        return cart
    return CartState(lines=lines, total=total)


def _normalize_catalog(catalog: CatalogState) -> CatalogState:
    products = tuple(catalog.products)
    categories = derive_categories(products)
    if products is catalog.products and categories == catalog.categories:
        return catalog
    return replace(catalog, products=products, categories=categories)


class Store:
    """An isolated cart + catalog store.

    Args:
        cart: Initial cart state. Its total is recomputed from its lines.
        catalog: Initial catalog state. Its categories are recomputed from
            its products.
        settings: Store settings; defaults apply when omitted.
    """

    def __init__(
        self,
        cart: Optional[CartState] = None,
        catalog: Optional[CatalogState] = None,
        *,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings if settings is not None else Settings()
        self.log = logger.bind(component="store")

        self._routers: tuple[ReducerRouter[Any], ...] = (cart_router, catalog_router)
        self._states: dict[str, Any] = {
            cart_router.name: _normalize_cart(cart if cart is not None else cart_router.initial_state()),
            catalog_router.name: _normalize_catalog(
                catalog if catalog is not None else catalog_router.initial_state()
            ),
        }

        self._select_visible = make_visible_products_selector()
        self._select_summary = make_cart_summary_selector(self.settings.tax_rate)

        self._listeners: dict[int, Listener] = {}
        self._tokens = itertools.count()
        self._dispatching = False
        self._queue: deque[object] = deque()

        self._snapshot = self._derive(None)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def cart(self) -> CartState:
        return self._states[cart_router.name]

    @property
    def catalog(self) -> CatalogState:
        return self._states[catalog_router.name]

    @property
    def visible_products(self) -> tuple[Product, ...]:
        return self._snapshot.visible_products

    @property
    def cart_summary(self) -> CartSummary:
        return self._snapshot.cart_summary

    @property
    def snapshot(self) -> StoreSnapshot:
        return self._snapshot

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, intent: object) -> StoreSnapshot:
        """Apply an intent and notify subscribers.

        Returns:
            The snapshot after the intent (and any intents queued by
            subscribers meanwhile) has been applied. A call made from inside
            a subscriber only queues the intent and returns the snapshot
            current at that moment.

        Raises:
            UnknownIntentError: If no slice handles the intent's type.
        """
        self._router_for(intent)

        if self._dispatching:
            self._queue.append(intent)
            self.log.debug("intent_queued", intent=type(intent).__name__)
            return self._snapshot

        self._dispatching = True
        try:
            self._apply(intent)
            while self._queue:
                self._apply(self._queue.popleft())
        finally:
            self._queue.clear()
            self._dispatching = False

        return self._snapshot

    def _router_for(self, intent: object) -> ReducerRouter[Any]:
        for router in self._routers:
            if router.handles(intent):
                return router
        raise UnknownIntentError(intent)

    def _apply(self, intent: object) -> None:
        router = self._router_for(intent)
        previous = self._states[router.name]
        current = router.reduce(previous, intent)

        if current is previous:
            self.log.debug("intent_ignored", intent=type(intent).__name__, slice=router.name)
        else:
            self._states[router.name] = current
            self.log.debug("intent_dispatched", intent=type(intent).__name__, slice=router.name)

        self._snapshot = self._derive(self._snapshot)
        self._notify(self._snapshot)

    def _derive(self, previous: Optional[StoreSnapshot]) -> StoreSnapshot:
        cart = self.cart
        catalog = self.catalog
        if previous is not None and previous.cart is cart and previous.catalog is catalog:
            return previous
        return StoreSnapshot(
            cart=cart,
            catalog=catalog,
            visible_products=self._select_visible(catalog),
            cart_summary=self._select_summary(cart),
        )

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Register ``listener`` to be called with every new snapshot.

        Returns:
            A function that removes the listener. Calling it more than once
            is harmless, and once it has been called the listener receives
            nothing further, even later in a notification round already
            under way.
        """
        token = next(self._tokens)
        self._listeners[token] = listener

        def unsubscribe() -> None:
            self._listeners.pop(token, None)

        return unsubscribe

    def _notify(self, snapshot: StoreSnapshot) -> None:
        for token, listener in list(self._listeners.items()):
            if token in self._listeners:
                listener(snapshot)
