"""
Configuration loader for the storefront client
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "storefront_config.yml"

# env var -> config field; first match wins for api_base_url
_ENV_OVERRIDES = {
    "STOREFRONT_API_URL": "api_base_url",
    "VITE_BACKEND_URL": "api_base_url",
    "STOREFRONT_TIMEOUT_SECONDS": "timeout_seconds",
    "STOREFRONT_TOKEN_KEY": "token_key",
    "REDIS_URL": "redis_url",
    "STOREFRONT_SESSION_FILE": "session_file",
}


class StorefrontConfig(BaseModel):
    """Storefront client configuration"""

    api_base_url: str = "http://localhost:8000"
    timeout_seconds: float = Field(default=20.0, gt=0)
    token_key: str = Field(default="token", min_length=1)
    redis_url: Optional[str] = None
    session_file: Optional[str] = None
    use_mock_backend: bool = False

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("api_base_url must not be empty")
        return value


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_name, field_name in _ENV_OVERRIDES.items():
        value = os.getenv(env_name, "").strip()
        if value and field_name not in overrides:
            overrides[field_name] = value
    mock = os.getenv("STOREFRONT_USE_MOCK", "").strip().lower()
    if mock:
        overrides["use_mock_backend"] = mock in ("1", "true", "yes")
    return overrides


def load_storefront_config(config_path: Optional[Path] = None) -> StorefrontConfig:
    """
    Load and validate storefront configuration

    Values come from the YAML file (when present), then environment
    variables (a .env file is loaded first) override them.

    Args:
        config_path: Path to config file. Defaults to config/storefront_config.yml

    Returns:
        Validated StorefrontConfig object

    Raises:
        ValidationError: If the merged config doesn't match the schema
    """
    load_dotenv()

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config_data: Dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug(f"No config file at {config_path}; using defaults and environment")

    config_data.update(_env_overrides())

    try:
        config = StorefrontConfig(**config_data)
        logger.info(f"Storefront API base URL: {config.api_base_url}")
        return config
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise
