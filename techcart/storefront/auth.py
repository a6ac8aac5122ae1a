"""
Account panel logic: registration, login and the Login/Register mode toggle.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from techcart.database.session_store import SessionStore
from techcart.error_handler import ErrorHandler
from techcart.integrations.contracts.catalog import AuthForm
from techcart.integrations.contracts.results import ActionResult
from techcart.integrations.policy.response_wrappers import (
    IntegrationResponseError,
    extract_detail,
    json_or_none,
    normalize_login_response,
)

logger = logging.getLogger(__name__)

LOGIN_FAILED = "Login failed"
REGISTRATION_FAILED = "Registration failed"


class AuthMode(str, Enum):
    LOGIN = "login"
    REGISTER = "register"


class AuthController:
    def __init__(
        self,
        client,
        session_store: SessionStore,
        error_handler: Optional[ErrorHandler] = None,
        mode: AuthMode = AuthMode.LOGIN,
    ):
        self.client = client
        self.session_store = session_store
        self.error_handler = error_handler or ErrorHandler()
        self.mode = mode

    @property
    def is_authenticated(self) -> bool:
        return bool(self.session_store.get())

    def switch_mode(self, mode: AuthMode) -> AuthMode:
        self.mode = AuthMode(mode)
        return self.mode

    def toggle_mode(self) -> AuthMode:
        return self.switch_mode(AuthMode.REGISTER if self.mode is AuthMode.LOGIN else AuthMode.LOGIN)

    async def submit(self, form: AuthForm) -> ActionResult:
        """Send the form to whichever endpoint the current mode points at."""
        if self.mode is AuthMode.REGISTER:
            return await self.register(form.username, form.email, form.password)
        return await self.login(form.username, form.password)

    async def register(self, username: str, email: str, password: str) -> ActionResult:
        try:
            response = await self.client.register(username, email, password)
        except Exception as exc:
            return self.error_handler.handle_exception(exc, context={"action": "register"})

        if not response.is_success:
            detail = extract_detail(json_or_none(response), REGISTRATION_FAILED)
            logger.info("Registration rejected for %s: %s", username, detail)
            return ActionResult.failure(detail)

        # Registration never logs the user in; hand over to the login form.
        self.mode = AuthMode.LOGIN
        return ActionResult.success()

    async def login(self, username: str, password: str) -> ActionResult:
        try:
            response = await self.client.login(username, password)
        except Exception as exc:
            return self.error_handler.handle_exception(exc, context={"action": "login"})

        data = json_or_none(response)
        if not response.is_success:
            detail = extract_detail(data, LOGIN_FAILED)
            logger.info("Login rejected for %s: %s", username, detail)
            return ActionResult.failure(detail)

        try:
            token = normalize_login_response(data).access_token
        except IntegrationResponseError as exc:
            logger.error("Login for %s succeeded without a usable token: %s", username, exc)
            return ActionResult.failure(LOGIN_FAILED)

        try:
            self.session_store.set(token)
        except Exception as exc:
            return self.error_handler.handle_exception(exc, context={"action": "store_session"})
        logger.info("Logged in as %s", username)
        return ActionResult.success()
