"""
Session token storage.

Holds the single bearer credential issued by /auth/login. Components that
need the credential receive a SessionStore instead of reaching for a global.

Implementations here need no external service:
- InMemorySessionStore: process lifetime only (tests, throwaway sessions)
- FileSessionStore: JSON file, survives restarts of a local client

See techcart.database.redis_real for the Redis-backed store.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_KEY = "token"


class SessionStore(ABC):
    """One storage slot for an opaque bearer token."""

    @abstractmethod
    def get(self) -> Optional[str]:
        """Return the stored token, or None when no session exists."""

    @abstractmethod
    def set(self, token: str) -> None:
        """Store the token, replacing any previous value."""


class InMemorySessionStore(SessionStore):
    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token


class FileSessionStore(SessionStore):
    """
    Keeps the token in a small JSON document keyed by `key`.

    Every get() reads the file so two clients sharing the path never see a
    stale value.
    """

    def __init__(self, path: Union[str, Path], key: str = DEFAULT_TOKEN_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            logger.warning("Session file %s is not valid UTF-8 JSON; treating as empty", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self) -> Optional[str]:
        value = self._read().get(self.key)
        return value if isinstance(value, str) and value else None

    def set(self, token: str) -> None:
        data = self._read()
        data[self.key] = token
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data), encoding="utf-8")
        tmp.replace(self.path)
