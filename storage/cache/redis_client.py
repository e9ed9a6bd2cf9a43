from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

import redis

logger = logging.getLogger(__name__)


class CacheClient:
    """JSON key-value store with per-key expiry.

    Backed by Redis when a URL is configured so every service instance shares
    the same state; otherwise an in-process dict that honours the same TTLs.
    """

    def __init__(self, url: str | None, clock: Callable[[], float] = time.time):
        self.clock = clock
        self.fallback: Dict[str, Tuple[Optional[float], str]] = {}
        self.client = None
        if url:
            try:
                self.client = redis.from_url(url)
            except ValueError as exc:
                logger.warning("Invalid REDIS_URL, using in-process cache: %s", exc)
                self.client = None

    @property
    def backend(self) -> str:
        return "redis" if self.client else "memory"

    def set(self, key: str, value: Any, ex: Optional[int] = None) -> None:
        payload = json.dumps(value)
        if self.client:
            try:
                self.client.set(key, payload, ex=ex)
                return
            except redis.RedisError as exc:  # pragma: no cover
                logger.warning("Redis SET failed for %s: %s", key, exc)
        self._sweep()
        expires_at = self.clock() + ex if ex else None
        self.fallback[key] = (expires_at, payload)

    def _sweep(self) -> None:
        """Drop expired in-process entries, including keys nobody reads again."""
        now = self.clock()
        expired = [key for key, (expires_at, _) in self.fallback.items() if expires_at is not None and now >= expires_at]
        for key in expired:
            del self.fallback[key]

    def get(self, key: str) -> Any | None:
        if self.client:
            try:
                value = self.client.get(key)
                if value is not None:
                    return json.loads(value)
            except redis.RedisError as exc:  # pragma: no cover
                logger.warning("Redis GET failed for %s: %s", key, exc)
        entry = self.fallback.get(key)
        if entry is None:
            return None
        expires_at, payload = entry
        if expires_at is not None and self.clock() >= expires_at:
            del self.fallback[key]
            return None
        return json.loads(payload)

    def delete(self, key: str) -> None:
        if self.client:
            try:
                self.client.delete(key)
            except redis.RedisError as exc:  # pragma: no cover
                logger.warning("Redis DEL failed for %s: %s", key, exc)
        self.fallback.pop(key, None)

    def size(self) -> int:
        if self.client:
            try:
                return int(self.client.dbsize())
            except redis.RedisError:  # pragma: no cover
                return 0
        self._sweep()
        return len(self.fallback)

    def clear(self) -> None:
        if self.client:
            try:
                self.client.flushdb()
            except redis.RedisError as exc:  # pragma: no cover
                logger.warning("Redis FLUSHDB failed: %s", exc)
        self.fallback.clear()
