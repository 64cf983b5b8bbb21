"""Catalog loading: the asynchronous boundary in front of the store.

A CatalogSource produces raw product records. CatalogLoader awaits it and
dispatches the outcome into the store as LoadSucceeded or LoadFailed. The
store itself never awaits anything.

Only the latest fetch may report back. Starting a new load cancels the one
in flight, and closing the loader cancels it too; a superseded fetch that
still completes has its result dropped instead of dispatched.

Example::

    loader = CatalogLoader(store, JsonCatalogSource("products.json"))
    await loader.load()
    ...
    loader.close()
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any, Optional, Protocol, Union

import structlog

from .config import Settings
from .errors import CatalogFormatError, CatalogSourceError, errmsg
from .intents import BeginLoad, LoadFailed, LoadSucceeded
from .models import Product
from .store import Store, StoreSnapshot

logger = structlog.get_logger()


class CatalogSource(Protocol):
    """Supplier of raw product records.

    Implementations raise CatalogSourceError (or CatalogFormatError) for
    failures they understand; anything else is reported as a generic fetch
    failure.
    """

    async def fetch_products(self) -> Any:
        """Return a list of product records, or a ``{"products": [...]}`` envelope."""
        ...


def parse_products(payload: Any) -> tuple[Product, ...]:
    """Turn a source payload into Products.

    Raises:
        CatalogFormatError: If the payload is not a list of records, or a
            record cannot become a Product.
    """
    if isinstance(payload, Mapping) and "products" in payload:
        payload = payload["products"]
    if isinstance(payload, (str, bytes)) or not isinstance(payload, Sequence):
        raise CatalogFormatError(errmsg.NOT_A_COLLECTION)
    return tuple(
        item if isinstance(item, Product) else Product.from_record(item) for item in payload
    )


class StaticCatalogSource:
    """In-memory source, for tests and fixtures."""

    def __init__(self, records: Iterable[Union[Mapping[str, Any], Product]]) -> None:
        self._records = list(records)

    async def fetch_products(self) -> list[Union[Mapping[str, Any], Product]]:
        return list(self._records)


class JsonCatalogSource:
    """Reads product records from a local JSON file off the event loop."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    @classmethod
    def from_settings(cls, settings: Settings) -> JsonCatalogSource:
        if not settings.catalog_path:
            raise ValueError("SHOPSTATE_CATALOG_PATH is not set")
        return cls(settings.catalog_path)

    async def fetch_products(self) -> Any:
        try:
            text = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        except OSError as e:
            raise CatalogSourceError(f"cannot read {self.path}", e) from e
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise CatalogFormatError(f"invalid JSON in {self.path}", e) from e


class CatalogLoader:
    """Fetches the catalog into a store, one live fetch at a time."""

    def __init__(self, store: Store, source: CatalogSource) -> None:
        self._store = store
        self._source = source
        self._generation = 0
        self._task: Optional[asyncio.Future] = None
        self._closed = False
        self.log = logger.bind(component="catalog_loader")

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, *, force: bool = False) -> asyncio.Task:
        """Schedule ``load`` on the running loop and return its task."""
        return asyncio.get_running_loop().create_task(self.load(force=force))

    async def load(self, *, force: bool = False) -> StoreSnapshot:
        """Fetch products into the store.

        Skipped when the catalog already holds products, unless ``force``.

        Returns:
            The store snapshot after the outcome was dispatched, or the
            current snapshot if this fetch was skipped or superseded.

        Raises:
            RuntimeError: If the loader has been closed.
        """
        if self._closed:
            raise RuntimeError(errmsg.LOADER_CLOSED)
        if self._store.catalog.has_products and not force:
            self.log.debug("catalog_fetch_skipped", products=len(self._store.catalog.products))
            return self._store.snapshot

        self._cancel_in_flight()
        self._generation += 1
        generation = self._generation

        self._store.dispatch(BeginLoad())
        self.log.info("catalog_fetch_started", generation=generation)

        task = asyncio.ensure_future(self._source.fetch_products())
        self._task = task
        try:
            products = parse_products(await task)
        except asyncio.CancelledError:
            if self._is_current(generation):
                raise
            return self._discard(generation)
        except CatalogSourceError as e:
            self.log.warning("catalog_fetch_failed", generation=generation, error=str(e))
            return self._finish(generation, LoadFailed(str(e)))
        except Exception as e:
            self.log.warning(
                "catalog_fetch_failed",
                generation=generation,
                error=str(e),
                error_type=type(e).__name__,
            )
            return self._finish(generation, LoadFailed(f"{errmsg.FETCH_FAILED}: {e}"))

        self.log.info("catalog_fetch_succeeded", generation=generation, products=len(products))
        return self._finish(generation, LoadSucceeded(products))

    def close(self) -> None:
        """Abandon any in-flight fetch and refuse further loads."""
        self._closed = True
        self._cancel_in_flight()

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation and not self._closed

    def _finish(self, generation: int, intent: object) -> StoreSnapshot:
        if not self._is_current(generation):
            return self._discard(generation)
        self._task = None
        return self._store.dispatch(intent)

    def _discard(self, generation: int) -> StoreSnapshot:
        self.log.info("catalog_fetch_discarded", generation=generation)
        return self._store.snapshot

    def _cancel_in_flight(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
