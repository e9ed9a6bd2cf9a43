"""Shared key-value caches for fetched source data and stored credentials."""

from .redis_client import CacheClient
from .stores import ResponseCache, TokenStore

__all__ = ["CacheClient", "ResponseCache", "TokenStore"]
