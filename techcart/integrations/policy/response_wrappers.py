from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from techcart.integrations.contracts.catalog import Category, Product


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(message)
        self.payload = payload if payload is not None else {}


class CategoryResponseModel(BaseModel):
    slug: str = Field(min_length=1)
    name: str


class ProductResponseModel(BaseModel):
    id: Union[int, str]
    name: str
    category: str = ""
    price: Decimal = Field(ge=0)
    brand: Optional[str] = None
    image: Optional[str] = None


class LoginResponseModel(BaseModel):
    access_token: str = Field(min_length=1)
    token_type: str = "bearer"


def normalize_categories(raw: Any) -> List[Category]:
    items = _expect_list(raw, "categories")
    out: List[Category] = []
    for item in items:
        model = _build_model(CategoryResponseModel, item, raw)
        out.append(Category(slug=model.slug, name=model.name or model.slug))
    return out


def normalize_products(raw: Any) -> List[Product]:
    items = _expect_list(raw, "products")
    out: List[Product] = []
    for item in items:
        model = _build_model(ProductResponseModel, item, raw)
        out.append(
            Product(
                id=model.id,
                name=model.name,
                category=model.category,
                price=model.price,
                brand=model.brand or None,
                image=model.image or None,
            )
        )
    return out


def normalize_login_response(raw: Any) -> LoginResponseModel:
    if not isinstance(raw, dict):
        raise IntegrationResponseError("Login response is not a JSON object.", payload=raw)
    return _build_model(LoginResponseModel, raw, raw)


def extract_detail(raw: Any, fallback: str) -> str:
    """
    Pull a human readable message out of an error body.

    Handles the plain {"detail": "..."} shape as well as validation bodies
    where detail is a list of {"msg": "..."} entries.
    """
    if not isinstance(raw, dict):
        return fallback
    detail = raw.get("detail")
    if isinstance(detail, str) and detail.strip():
        return detail.strip()
    if isinstance(detail, list):
        messages = []
        for entry in detail:
            if isinstance(entry, dict) and entry.get("msg"):
                messages.append(str(entry["msg"]))
            elif isinstance(entry, str) and entry.strip():
                messages.append(entry.strip())
        if messages:
            return "; ".join(messages)
    return fallback


def _expect_list(raw: Any, label: str) -> List[Dict[str, Any]]:
    if not isinstance(raw, list):
        raise IntegrationResponseError(f"Expected a list of {label}, got {type(raw).__name__}.", payload=raw)
    return raw


def _build_model(model_type, payload: Any, raw: Any):
    if not isinstance(payload, dict):
        raise IntegrationResponseError(f"Expected an object, got {payload!r}", payload=raw)
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc


def json_or_none(response) -> Any:
    """Decoded JSON body of an httpx.Response, or None for empty/non-JSON bodies."""
    try:
        return response.json()
    except ValueError:
        return None
