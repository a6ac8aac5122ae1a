"""
Catalog state controller.

Owns the current CatalogQuery and the product list shown for it. Every
query change starts a new generation; a product response is applied only
while its generation is still the latest one issued, so a slow response for
an old query can never overwrite the result of a newer query.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from techcart.error_handler import ErrorHandler
from techcart.integrations.contracts.catalog import CatalogQuery, Category, Product

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class CatalogState:
    status: LoadStatus = LoadStatus.IDLE
    query: CatalogQuery = CatalogQuery()
    generation: int = 0
    products: Tuple[Product, ...] = ()
    categories: Tuple[Category, ...] = ()
    error: bool = False
    error_detail: Optional[str] = None
    categories_error: bool = False


class CatalogStateController:
    def __init__(self, client, error_handler: Optional[ErrorHandler] = None):
        self.client = client
        self.error_handler = error_handler or ErrorHandler()
        self._generation = 0
        self._categories_loaded = False
        self._state = CatalogState()

    # --- Read side -------------------------------------------------------------

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def query(self) -> CatalogQuery:
        return self._state.query

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_loading(self) -> bool:
        return self._state.status is LoadStatus.LOADING

    @property
    def products(self) -> Tuple[Product, ...]:
        return self._state.products

    @property
    def categories(self) -> Tuple[Category, ...]:
        return self._state.categories

    # --- Operations ------------------------------------------------------------

    async def initialize(self) -> CatalogState:
        """Load categories (first call only), then the product list for the current query."""
        generation, query = self._begin(self._state.query)
        if not self._categories_loaded:
            await self._load_categories()
            if not self._is_current(generation):
                logger.debug("Skipping initial product fetch; generation %d superseded", generation)
                return self._state
        return await self._fetch_products(generation, query)

    async def set_term(self, term: str) -> CatalogState:
        generation, query = self._begin(self._state.query.with_term(term))
        return await self._fetch_products(generation, query)

    search = set_term

    async def set_category(self, slug: str) -> CatalogState:
        generation, query = self._begin(self._state.query.with_category(slug))
        return await self._fetch_products(generation, query)

    async def refresh(self) -> CatalogState:
        """Re-issue the current query as a new generation."""
        generation, query = self._begin(self._state.query)
        return await self._fetch_products(generation, query)

    # --- Internals -------------------------------------------------------------

    def _begin(self, query: CatalogQuery) -> Tuple[int, CatalogQuery]:
        # Must stay free of awaits: the generation is claimed the moment the
        # user acts, not when the event loop gets around to the request.
        self._generation += 1
        self._state = replace(self._state, status=LoadStatus.LOADING, query=query, generation=self._generation)
        return self._generation, query

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _load_categories(self) -> None:
        try:
            categories = await self.client.list_categories()
        except Exception as exc:
            self.error_handler.handle_exception(exc, context={"path": "/categories"})
            self._state = replace(self._state, categories_error=True)
            return
        self._categories_loaded = True
        self._state = replace(self._state, categories=tuple(categories), categories_error=False)
        logger.info("Loaded %d categories", len(categories))

    async def _fetch_products(self, generation: int, query: CatalogQuery) -> CatalogState:
        params = query.to_params()
        try:
            products = await self.client.list_products(params)
        except Exception as exc:
            if not self._is_current(generation):
                logger.debug("Dropping failed response for stale generation %d (current %d)", generation, self._generation)
                return self._state
            result = self.error_handler.handle_exception(exc, context={"path": "/products", "params": params})
            self._state = replace(
                self._state,
                status=LoadStatus.READY,
                products=(),
                error=True,
                error_detail=result.detail,
            )
            return self._state

        if not self._is_current(generation):
            logger.debug("Dropping stale products for generation %d (current %d)", generation, self._generation)
            return self._state

        self._state = replace(
            self._state,
            status=LoadStatus.READY,
            products=tuple(products),
            error=False,
            error_detail=None,
        )
        logger.info("Catalog generation %d ready: %d products params=%s", generation, len(products), params)
        return self._state
