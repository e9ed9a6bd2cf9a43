"""Maintenance helpers for clearing cached source data and stored tokens."""

from __future__ import annotations

from typing import Dict

from app.deps import get_cache


def purge_cache() -> Dict[str, str]:
    """Drop every cached source summary and stored token."""
    get_cache().clear()
    return {"status": "ok", "cache": "cleared"}
