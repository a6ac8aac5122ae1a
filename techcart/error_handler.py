"""Error handling helpers for storefront controllers."""
from typing import Any, Dict, Optional
import logging

import httpx
import redis

from techcart.integrations.contracts.results import ActionResult
from techcart.integrations.policy.response_wrappers import IntegrationResponseError

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Action failed. Please try again."
NETWORK_FAILURE = "Could not reach the store. Please try again."
SESSION_FAILURE = "Could not access your session. Please try again."

_EXPECTED = (httpx.HTTPError, IntegrationResponseError, redis.RedisError, OSError)


class ErrorHandler:
    def describe(self, exc: Exception) -> str:
        if isinstance(exc, httpx.HTTPStatusError):
            return f"Server responded with {exc.response.status_code}"
        if isinstance(exc, httpx.RequestError):
            return NETWORK_FAILURE
        if isinstance(exc, IntegrationResponseError):
            return "Received an unexpected response from the store."
        if isinstance(exc, (redis.RedisError, OSError)):
            return SESSION_FAILURE
        return GENERIC_FAILURE

    def handle_exception(self, exc: Exception, context: Optional[Dict[str, Any]] = None) -> ActionResult:
        if isinstance(exc, _EXPECTED):
            logger.error("Storefront action failed: %s context=%s", exc, context or {})
        else:
            logger.error("Unhandled exception in storefront action: %s", exc, exc_info=True)
        return ActionResult.failure(self.describe(exc))
