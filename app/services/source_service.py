"""Per-source fetch layer: cache-aside lookups in front of the upstream APIs.

Each ``fetch_*`` helper returns a summary envelope (``data``, ``metadata``,
``interpretation``) whose ``data`` block is the raw payload the scoring engine
consumes.  Results are cached per (user, source, date bucket) for the response
TTL.  Concurrent requests for the same user may both miss and both fetch; the
last write wins, which is acceptable for read-only summaries.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, Optional

import httpx

from app.deps import AppState, get_app_state
from core.sources.activity_sim import interpret_activity
from core.sources.calendar_signals import WORKDAY_MINUTES, interpret_schedule, summarize_events
from core.sources.email_signals import ANALYZED_MESSAGES, STRESS_KEYWORDS, interpret_email, summarize_messages

logger = logging.getLogger(__name__)

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class NotAuthenticatedError(Exception):
    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} must authenticate with Google OAuth first")
        self.user_id = user_id


class SourceFetchError(Exception):
    def __init__(self, source: str, detail: str):
        super().__init__(f"{source} fetch failed: {detail}")
        self.source = source
        self.detail = detail


def _now(now: Optional[dt.datetime]) -> dt.datetime:
    return now or dt.datetime.now(dt.timezone.utc)


def _cached(state: AppState, user_id: str, source: str, bucket: str) -> Optional[Dict]:
    cached = state.responses.get(user_id, source, bucket)
    if cached is None:
        logger.debug("Cache miss for %s/%s/%s", user_id, source, bucket)
        return None
    logger.debug("Cache hit for %s/%s/%s", user_id, source, bucket)
    cached.setdefault("metadata", {})["cacheStatus"] = "cached"
    return cached


def _access_token(state: AppState, user_id: str) -> str:
    tokens = state.tokens.get(user_id)
    if not tokens or not tokens.get("access_token"):
        raise NotAuthenticatedError(user_id)
    return tokens["access_token"]


def fetch_email_summary(user_id: str, state: Optional[AppState] = None, now: Optional[dt.datetime] = None) -> Dict:
    """Inbox stress summary from the last week of Gmail messages."""
    state = state or get_app_state()
    now = _now(now)
    bucket = now.date().isoformat()
    cached = _cached(state, user_id, "email", bucket)
    if cached:
        return cached

    client = state.google_client_factory(_access_token(state, user_id))
    cfg = state.source_cfg("gmail")
    limit = cfg.get("analyzed_messages", ANALYZED_MESSAGES)
    try:
        messages = client.list_messages(cfg.get("query", "in:inbox newer_than:7d"), cfg.get("max_results", 50))
    except httpx.HTTPError as exc:
        logger.warning("Gmail listing failed for %s: %s", user_id, exc)
        raise SourceFetchError("email", str(exc)) from exc

    details = []
    for message in messages[:limit]:
        try:
            details.append(client.get_message_metadata(message["id"]))
        except httpx.HTTPError as exc:
            logger.warning("Skipping Gmail message %s: %s", message.get("id"), exc)

    data = summarize_messages(
        details,
        total_emails=len(messages),
        keywords=cfg.get("stress_keywords", STRESS_KEYWORDS),
        limit=limit,
    )
    result = {
        "type": "email_stress",
        "source": "Gmail API",
        "user": {"userId": user_id},
        "data": data,
        "metadata": {
            "timestamp": now.isoformat(),
            "analyzedEmails": min(limit, len(messages)),
            "cacheStatus": "fresh",
        },
        "interpretation": interpret_email(data["stressLevel"]),
    }
    state.responses.put(user_id, "email", bucket, result)
    return result


def fetch_calendar_summary(
    user_id: str,
    date: Optional[str] = None,
    state: Optional[AppState] = None,
    now: Optional[dt.datetime] = None,
) -> Dict:
    """Meeting density for one day (today unless ``date`` is an ISO date)."""
    state = state or get_app_state()
    now = _now(now)
    day = dt.date.fromisoformat(date) if date else now.date()
    bucket = day.isoformat()
    cached = _cached(state, user_id, "calendar", bucket)
    if cached:
        return cached

    client = state.google_client_factory(_access_token(state, user_id))
    start = dt.datetime.combine(day, dt.time.min, tzinfo=now.tzinfo or dt.timezone.utc)
    end = dt.datetime.combine(day, dt.time.max, tzinfo=now.tzinfo or dt.timezone.utc)
    try:
        events = client.list_events(start, end)
    except httpx.HTTPError as exc:
        logger.warning("Calendar listing failed for %s: %s", user_id, exc)
        raise SourceFetchError("calendar", str(exc)) from exc

    workday = state.source_cfg("calendar").get("workday_minutes", WORKDAY_MINUTES)
    try:
        data = summarize_events(events, workday_minutes=workday)
    except ValueError as exc:
        raise SourceFetchError("calendar", f"unparseable event: {exc}") from exc
    result = {
        "type": "schedule_health",
        "source": "Google Calendar API",
        "user": {"userId": user_id},
        "data": data,
        "metadata": {
            "timestamp": now.isoformat(),
            "dayOfWeek": DAY_NAMES[day.weekday()],
            "dateRange": date or "today",
            "cacheStatus": "fresh",
        },
        "interpretation": interpret_schedule(data["meetingDensity"], data["focusTimeHours"], data["declinableCount"]),
    }
    state.responses.put(user_id, "calendar", bucket, result)
    return result


def fetch_activity_summary(
    user_id: str,
    days: Optional[int] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    state: Optional[AppState] = None,
    now: Optional[dt.datetime] = None,
) -> Dict:
    """Simulated sleep/activity figures seeded by local weather."""
    state = state or get_app_state()
    now = _now(now)
    cfg = state.source_cfg("activity")
    days = days or cfg.get("days", 7)
    bucket = f"{now.date().isoformat()}:{days}d"
    cached = _cached(state, user_id, "activity", bucket)
    if cached:
        return cached

    weather = None
    if not state.offline:
        lat = latitude if latitude is not None else cfg.get("latitude", 41.8781)
        lon = longitude if longitude is not None else cfg.get("longitude", -87.6298)
        try:
            weather = state.weather.current_conditions(lat, lon, cfg.get("timezone", "UTC"))
        except (httpx.HTTPError, KeyError, ValueError) as exc:
            logger.warning("Weather lookup failed for %s: %s", user_id, exc)
            raise SourceFetchError("activity", str(exc)) from exc

    data = state.simulator.simulate(weather)
    result = {
        "type": "fitness_summary",
        "source": "Simulation (Open-Meteo weather)" if weather else "Simulation (offline)",
        "user": {"userId": user_id},
        "data": data,
        "metadata": {
            "timestamp": now.isoformat(),
            "daysCovered": days,
            "weather": weather.to_dict() if weather else None,
            "cacheStatus": "fresh",
        },
        "interpretation": interpret_activity(data),
    }
    state.responses.put(user_id, "activity", bucket, result)
    return result
