"""
Storefront wiring.

The one place where concrete implementations are chosen:
- Redis session store when redis_url is set, a JSON file when session_file is
  set, otherwise in-memory
- Mock backend when use_mock_backend is set, otherwise the real HTTP client
"""

import logging
from dataclasses import dataclass
from typing import Optional

from techcart.database.session_store import FileSessionStore, InMemorySessionStore, SessionStore
from techcart.error_handler import ErrorHandler
from techcart.integrations.clients.mocks.storefront_api import MockStorefrontClient
from techcart.integrations.clients.real_http.storefront_api import StorefrontAPIClient
from techcart.storefront.auth import AuthController
from techcart.storefront.cart import CartMutator
from techcart.storefront.catalog_state import CatalogStateController
from techcart.utils.config_loader import StorefrontConfig, load_storefront_config

logger = logging.getLogger(__name__)


@dataclass
class Storefront:
    client: object
    session_store: SessionStore
    catalog: CatalogStateController
    cart: CartMutator
    auth: AuthController


def build_session_store(config: StorefrontConfig) -> SessionStore:
    if config.redis_url:
        from techcart.database.redis_real import RedisSessionStore

        logger.info("Using Redis session store")
        return RedisSessionStore(url=config.redis_url, key=config.token_key)
    if config.session_file:
        logger.info("Using file session store at %s", config.session_file)
        return FileSessionStore(config.session_file, key=config.token_key)
    return InMemorySessionStore()


def build_client(config: StorefrontConfig):
    if config.use_mock_backend:
        logger.info("Using mock storefront backend")
        return MockStorefrontClient()
    return StorefrontAPIClient(base_url=config.api_base_url, timeout_seconds=config.timeout_seconds)


def build_storefront(
    config: Optional[StorefrontConfig] = None,
    client=None,
    session_store: Optional[SessionStore] = None,
) -> Storefront:
    config = config or load_storefront_config()
    client = client or build_client(config)
    session_store = session_store or build_session_store(config)
    error_handler = ErrorHandler()
    return Storefront(
        client=client,
        session_store=session_store,
        catalog=CatalogStateController(client, error_handler),
        cart=CartMutator(client, session_store, error_handler),
        auth=AuthController(client, session_store, error_handler),
    )
