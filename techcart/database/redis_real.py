"""
Redis-backed session token store for deployments where REDIS_URL is set.
Implements the same interface as techcart.database.session_store.
"""

from __future__ import annotations

from typing import Optional

import redis

from techcart.database.session_store import DEFAULT_TOKEN_KEY, SessionStore


class RedisSessionStore(SessionStore):
    """
    Stores the token under `session:<key>` with no expiry; the client does
    not track token lifetime.
    """

    def __init__(self, url: Optional[str] = None, key: str = DEFAULT_TOKEN_KEY, client=None) -> None:
        if client is None and not url:
            raise ValueError("RedisSessionStore needs a url or a client")
        self._client = client or redis.from_url(url, decode_responses=True)
        self._key = f"session:{key}"

    def get(self) -> Optional[str]:
        raw = self._client.get(self._key)
        if not raw:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return raw

    def set(self, token: str) -> None:
        self._client.set(self._key, token)

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False
