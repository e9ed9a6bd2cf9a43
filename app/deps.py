from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Callable, Dict

import yaml
from dotenv import load_dotenv

from app.offline_mode import offline_mode_enabled
from core.sources.activity_sim import ActivitySimulator
from core.sources.clients import GOOGLE_API_BASE, OPEN_METEO_URL, GoogleWorkspaceClient, OpenMeteoClient
from core.wellbeing.engine import WellbeingEngine
from core.wellbeing.normalizer import MetricNormalizer
from storage.cache.redis_client import CacheClient
from storage.cache.stores import RESPONSE_TTL_SECONDS, TOKEN_TTL_SECONDS, ResponseCache, TokenStore

ROOT = Path(__file__).resolve().parent.parent


def _load_yaml(path: Path) -> Dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


@dataclass
class AppState:
    settings: Dict
    cache: CacheClient
    responses: ResponseCache
    tokens: TokenStore
    engine: WellbeingEngine
    simulator: ActivitySimulator
    weather: OpenMeteoClient
    google_client_factory: Callable[[str], GoogleWorkspaceClient]
    offline: bool

    def source_cfg(self, name: str) -> Dict:
        return self.settings.get("sources", {}).get(name, {})


def build_app_state(settings: Dict, redis_url: str | None = None) -> AppState:
    cache_cfg = settings.get("cache", {})
    google_cfg = settings.get("google", {})
    activity_cfg = settings.get("sources", {}).get("activity", {})
    calendar_cfg = settings.get("sources", {}).get("calendar", {})
    prefix = cache_cfg.get("key_prefix", "lifenav")

    response_ttl = int(os.getenv("LIFENAV_CACHE_TTL") or cache_cfg.get("response_ttl_seconds", RESPONSE_TTL_SECONDS))
    cache = CacheClient(redis_url)
    api_base = google_cfg.get("api_base", GOOGLE_API_BASE)
    google_timeout = google_cfg.get("timeout_seconds", 15)

    def google_client_factory(access_token: str) -> GoogleWorkspaceClient:
        return GoogleWorkspaceClient(access_token, base_url=api_base, timeout=google_timeout)

    return AppState(
        settings=settings,
        cache=cache,
        responses=ResponseCache(cache, ttl_seconds=response_ttl, prefix=prefix),
        tokens=TokenStore(cache, ttl_seconds=cache_cfg.get("token_ttl_seconds", TOKEN_TTL_SECONDS), prefix=prefix),
        engine=WellbeingEngine(normalizer=MetricNormalizer(calendar_cfg)),
        simulator=ActivitySimulator(),
        weather=OpenMeteoClient(
            activity_cfg.get("open_meteo_url", OPEN_METEO_URL),
            timeout=activity_cfg.get("timeout_seconds", 10),
        ),
        google_client_factory=google_client_factory,
        offline=offline_mode_enabled(),
    )


@lru_cache(maxsize=1)
def get_app_state() -> AppState:
    load_dotenv(ROOT / ".env")
    settings = _load_yaml(ROOT / "config" / "lifenav.yaml")
    return build_app_state(settings, redis_url=os.getenv("REDIS_URL"))


def get_settings() -> Dict:
    return get_app_state().settings


def get_engine() -> WellbeingEngine:
    return get_app_state().engine


def get_cache() -> CacheClient:
    return get_app_state().cache


def get_responses() -> ResponseCache:
    return get_app_state().responses


def get_tokens() -> TokenStore:
    return get_app_state().tokens
