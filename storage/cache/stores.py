"""Typed views over CacheClient: per-source fetch results and OAuth tokens.

Fetched source summaries expire after a couple of minutes, stored credentials
after a day.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from storage.cache.keys import KEY_PREFIX, make_response_key, make_token_key
from storage.cache.redis_client import CacheClient

RESPONSE_TTL_SECONDS = 120
TOKEN_TTL_SECONDS = 24 * 60 * 60


class ResponseCache:
    """Cache-aside store for source summaries keyed by (user, source, date bucket)."""

    def __init__(self, cache: CacheClient, ttl_seconds: int = RESPONSE_TTL_SECONDS, prefix: str = KEY_PREFIX):
        self.cache = cache
        self.ttl_seconds = ttl_seconds
        self.prefix = prefix

    def get(self, user_id: str, source: str, bucket: str) -> Optional[Dict[str, Any]]:
        return self.cache.get(make_response_key(user_id, source, bucket, self.prefix))

    def put(self, user_id: str, source: str, bucket: str, value: Dict[str, Any]) -> None:
        self.cache.set(make_response_key(user_id, source, bucket, self.prefix), value, ex=self.ttl_seconds)


class TokenStore:
    def __init__(self, cache: CacheClient, ttl_seconds: int = TOKEN_TTL_SECONDS, prefix: str = KEY_PREFIX):
        self.cache = cache
        self.ttl_seconds = ttl_seconds
        self.prefix = prefix

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self.cache.get(make_token_key(user_id, self.prefix))

    def set(self, user_id: str, tokens: Dict[str, Any]) -> None:
        self.cache.set(make_token_key(user_id, self.prefix), tokens, ex=self.ttl_seconds)

    def delete(self, user_id: str) -> None:
        self.cache.delete(make_token_key(user_id, self.prefix))
