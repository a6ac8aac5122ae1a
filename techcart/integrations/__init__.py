"""
Integrations layer.
This package contains all code used to communicate with the storefront backend:
- Catalog reads (categories, products)
- Cart mutations
- Account registration and login

Key rule:
- Controllers MUST NOT call the backend directly.
- Controllers call an integration client (under techcart/integrations/clients).
- The MOCK client is used when no backend URL is configured.
"""

from .contracts.catalog import (
    ALL_CATEGORIES,
    AuthForm,
    CartRequest,
    CatalogQuery,
    Category,
    Product,
)
from .contracts.results import ActionResult, ResultStatus
from .policy.response_wrappers import IntegrationResponseError

__all__ = [
    "ALL_CATEGORIES", "AuthForm", "CartRequest", "CatalogQuery", "Category", "Product",
    "ActionResult", "ResultStatus",
    "IntegrationResponseError",
]
