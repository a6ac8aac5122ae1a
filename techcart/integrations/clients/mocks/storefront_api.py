"""
Mock Storefront Client.

Purpose:
- Stands in for the storefront backend during development and demos
- Does NOT make any network calls
- Serves a small local PC-parts catalogue and a single in-memory user table

Behavior guidelines:
- list_products(...) filters by case-insensitive substring on name/brand and by category slug
- login(...) returns {"access_token": ...} for known credentials, 401 {"detail": ...} otherwise
- create_cart_item(...) accepts only tokens it issued

Swap:
Replace with clients/real_http/storefront_api.py when a backend URL is configured.
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any, Dict, List, Optional

import httpx

from techcart.integrations.contracts.catalog import CartRequest, Category, Product

DEFAULT_CATEGORIES: List[Dict[str, Any]] = [
    {"slug": "cpu", "name": "CPUs"},
    {"slug": "gpu", "name": "GPUs"},
    {"slug": "ram", "name": "Memory"},
]

DEFAULT_PRODUCTS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Ryzen 7 7800X3D", "brand": "AMD", "category": "cpu", "price": "449.00"},
    {"id": 2, "name": "Core i5-14600K", "brand": "Intel", "category": "cpu", "price": "319.99"},
    {"id": 3, "name": "GeForce RTX 4070", "brand": "NVIDIA", "category": "gpu", "price": "599.99"},
    {"id": 4, "name": "Radeon RX 7800 XT", "brand": "AMD", "category": "gpu", "price": "499.99"},
    {"id": 5, "name": "Vengeance 32GB DDR5", "brand": "Corsair", "category": "ram", "price": "114.99"},
]


class MockStorefrontClient:
    def __init__(
        self,
        products: Optional[List[Dict[str, Any]]] = None,
        categories: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        self._products = [
            Product(
                id=p["id"],
                name=p["name"],
                category=p["category"],
                price=Decimal(str(p["price"])),
                brand=p.get("brand"),
                image=p.get("image"),
            )
            for p in (products if products is not None else DEFAULT_PRODUCTS)
        ]
        self._categories = [
            Category(slug=c["slug"], name=c["name"])
            for c in (categories if categories is not None else DEFAULT_CATEGORIES)
        ]
        self._users: Dict[str, Dict[str, str]] = {}
        self._tokens: Dict[str, str] = {}
        self.cart_items: List[Dict[str, Any]] = []

    async def list_categories(self) -> List[Category]:
        return list(self._categories)

    async def list_products(self, params: Optional[Dict[str, str]] = None) -> List[Product]:
        params = params or {}
        term = (params.get("q") or "").lower()
        category = params.get("category")
        result = self._products
        if term:
            result = [p for p in result if term in p.name.lower() or term in (p.brand or "").lower()]
        if category:
            result = [p for p in result if p.category == category]
        return list(result)

    async def create_cart_item(self, token: str, request: CartRequest) -> httpx.Response:
        username = self._tokens.get(token)
        if username is None:
            return httpx.Response(401, json={"detail": "Could not validate credentials"})
        if not any(p.id == request.product_id for p in self._products):
            return httpx.Response(404, json={"detail": "Product not found"})
        self.cart_items.append({"username": username, **request.to_payload()})
        return httpx.Response(201, json={"ok": True})

    async def register(self, username: str, email: str, password: str) -> httpx.Response:
        if not username or not password:
            return httpx.Response(422, json={"detail": "Username and password are required"})
        if username in self._users:
            return httpx.Response(400, json={"detail": "Username already registered"})
        self._users[username] = {"email": email, "password": password}
        return httpx.Response(201, json={"username": username})

    async def login(self, username: str, password: str) -> httpx.Response:
        user = self._users.get(username)
        if user is None or user["password"] != password:
            return httpx.Response(401, json={"detail": "Incorrect credentials"})
        token = uuid.uuid4().hex
        self._tokens[token] = username
        return httpx.Response(200, json={"access_token": token, "token_type": "bearer"})
