"""
User-facing messages for action results.

Controllers return ActionResult values; whatever renders the storefront
(CLI, web view, chat bot) turns them into a notification with describe().
"""

from dataclasses import dataclass
from typing import Dict

from techcart.integrations.contracts.results import ActionResult, ResultStatus


@dataclass(frozen=True)
class Notification:
    level: str                           # "success" / "error" / "warning"
    message: str


SUCCESS_MESSAGES: Dict[str, str] = {
    "add_to_cart": "Added to cart",
    "login": "Logged in!",
    "register": "Registered! Now login.",
}

FAILURE_FALLBACKS: Dict[str, str] = {
    "add_to_cart": "Could not add to cart",
    "login": "Login failed",
    "register": "Registration failed",
}

LOGIN_REQUIRED = "Please login first"


def describe(action: str, result: ActionResult) -> Notification:
    if result.status is ResultStatus.UNAUTHENTICATED:
        return Notification("warning", LOGIN_REQUIRED)
    if result.status is ResultStatus.SUCCESS:
        return Notification("success", result.detail or SUCCESS_MESSAGES.get(action, "Done"))
    return Notification("error", result.detail or FAILURE_FALLBACKS.get(action, "Action failed"))
