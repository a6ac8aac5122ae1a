"""
Storefront controllers: catalog browsing, gated cart mutations and account login.
"""
from .auth import AuthController, AuthMode
from .cart import CartMutator
from .catalog_state import CatalogState, CatalogStateController, LoadStatus
from .notifications import Notification, describe

__all__ = [
    "AuthController",
    "AuthMode",
    "CartMutator",
    "CatalogState",
    "CatalogStateController",
    "LoadStatus",
    "Notification",
    "describe",
]
