"""
Storefront HTTP Client.

Talks to the storefront backend:
- GET  /categories, /products          catalog reference data and listings
- POST /cart                           bearer-authenticated cart mutation
- POST /auth/register, /auth/login     account endpoints

Login is the one form-encoded call; every other body is JSON.

Catalog reads are normalized into contract objects and raise on transport
or payload errors. Mutations return the raw httpx.Response so the caller can
map status codes into an ActionResult.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from techcart.integrations.contracts.catalog import CartRequest, Category, Product
from techcart.integrations.policy.response_wrappers import (
    IntegrationResponseError,
    normalize_categories,
    normalize_products,
)

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "http://localhost:8000"


class StorefrontAPIClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or DEFAULT_API_BASE).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            transport=self._transport,
        )

    # -- Catalog --

    async def list_categories(self) -> List[Category]:
        data = await self._get_json("/categories")
        return normalize_categories(data)

    async def list_products(self, params: Optional[Dict[str, str]] = None) -> List[Product]:
        params = {k: v for k, v in (params or {}).items() if v}
        data = await self._get_json("/products", params=params)
        return normalize_products(data)

    # -- Cart --

    async def create_cart_item(self, token: str, request: CartRequest) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"}
        async with self._client() as client:
            response = await client.post("/cart", json=request.to_payload(), headers=headers)
        logger.info("POST /cart product_id=%s status=%s", request.product_id, response.status_code)
        return response

    # -- Auth --

    async def register(self, username: str, email: str, password: str) -> httpx.Response:
        payload = {"username": username, "email": email, "password": password}
        async with self._client() as client:
            response = await client.post("/auth/register", json=payload)
        logger.info("POST /auth/register username=%s status=%s", username, response.status_code)
        return response

    async def login(self, username: str, password: str) -> httpx.Response:
        form = {"username": username, "password": password}
        async with self._client() as client:
            response = await client.post("/auth/login", data=form)
        logger.info("POST /auth/login username=%s status=%s", username, response.status_code)
        return response

    async def _get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        async with self._client() as client:
            response = await client.get(path, params=params or None)
            logger.debug("GET %s params=%s status=%s", path, params or {}, response.status_code)
            response.raise_for_status()
            try:
                return response.json()
            except ValueError as exc:
                raise IntegrationResponseError(f"{path} returned a non-JSON body.") from exc
