"""
Gated cart mutation.

No token, no request: the session check happens locally before anything
touches the network. The cart itself lives on the server.
"""

import logging
from typing import Optional

from techcart.database.session_store import SessionStore
from techcart.error_handler import ErrorHandler
from techcart.integrations.contracts.catalog import CartRequest, Product
from techcart.integrations.contracts.results import ActionResult
from techcart.integrations.policy.response_wrappers import extract_detail, json_or_none

logger = logging.getLogger(__name__)

ADD_TO_CART_FAILED = "Could not add to cart"


class CartMutator:
    def __init__(self, client, session_store: SessionStore, error_handler: Optional[ErrorHandler] = None):
        self.client = client
        self.session_store = session_store
        self.error_handler = error_handler or ErrorHandler()

    async def add_to_cart(self, product: Product, quantity: int = 1) -> ActionResult:
        try:
            token = self.session_store.get()
        except Exception as exc:
            return self.error_handler.handle_exception(exc, context={"action": "read_session"})
        if not token:
            logger.info("Add to cart blocked for product_id=%s: no session", product.id)
            return ActionResult.unauthenticated()
        if quantity < 1:
            return ActionResult.failure(f"Quantity must be at least 1, got {quantity}")

        request = CartRequest(product_id=product.id, quantity=quantity)
        try:
            response = await self.client.create_cart_item(token, request)
        except Exception as exc:
            return self.error_handler.handle_exception(exc, context={"product_id": product.id})

        if response.is_success:
            return ActionResult.success()
        return ActionResult.failure(extract_detail(json_or_none(response), ADD_TO_CART_FAILED))
