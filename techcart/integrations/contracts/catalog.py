from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Dict, Optional, Union

"""
Catalog contracts.

Defines the shapes the storefront works with once data has left the wire:
- Product / Category as returned by the backend catalog endpoints
- CatalogQuery, the filter state owned by the catalog controller
- CartRequest, the body of a cart mutation

Both the real HTTP client and the mock client return these objects, so the
controllers never deal with raw dicts.
"""

ALL_CATEGORIES = "all"


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Category:
    slug: str
    name: str


@dataclass(frozen=True)
class Product:
    id: Union[int, str]
    name: str
    category: str
    price: Decimal                       # never negative
    brand: Optional[str] = None
    image: Optional[str] = None

    @property
    def display_brand(self) -> str:
        return self.brand or "—"

    @property
    def price_label(self) -> str:
        return f"${self.price:.2f}"


# ---------------------------------------------------------------------------
# Query / request shapes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CatalogQuery:
    """Current filter state. A blank slug or "all" means no category filter."""
    term: str = ""
    category_slug: str = ALL_CATEGORIES

    def with_term(self, term: Optional[str]) -> "CatalogQuery":
        return replace(self, term=term or "")

    def with_category(self, slug: Optional[str]) -> "CatalogQuery":
        return replace(self, category_slug=slug or ALL_CATEGORIES)

    def to_params(self) -> Dict[str, str]:
        """Request params for GET /products; empty values are omitted."""
        params: Dict[str, str] = {}
        term = self.term.strip()
        if term:
            params["q"] = term
        slug = self.category_slug.strip()
        if slug and slug.lower() != ALL_CATEGORIES:
            params["category"] = slug
        return params


@dataclass(frozen=True)
class CartRequest:
    product_id: Union[int, str]
    quantity: int = 1

    def to_payload(self) -> Dict[str, Any]:
        return {"product_id": self.product_id, "quantity": self.quantity}


@dataclass
class AuthForm:
    """Fields of the account panel. Email is only sent when registering."""
    username: str = ""
    password: str = ""
    email: str = ""
