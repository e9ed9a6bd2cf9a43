"""Evaluation service that runs the scoring engine over supplied or fetched payloads."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from app.deps import AppState, get_app_state
from app.services.source_service import (
    NotAuthenticatedError,
    SourceFetchError,
    fetch_activity_summary,
    fetch_calendar_summary,
    fetch_email_summary,
)
from core.wellbeing.models import SourceKind

logger = logging.getLogger(__name__)

FETCHERS: Dict[SourceKind, Callable[..., Dict]] = {
    SourceKind.EMAIL: fetch_email_summary,
    SourceKind.CALENDAR: fetch_calendar_summary,
    SourceKind.ACTIVITY: fetch_activity_summary,
}


def evaluate_payloads(
    payloads: Mapping[Any, Any],
    state: Optional[AppState] = None,
    now: Optional[dt.datetime] = None,
) -> Dict:
    """Score caller-supplied raw payloads; absent or ``None`` entries are skipped."""
    state = state or get_app_state()
    now = now or dt.datetime.now(dt.timezone.utc)
    report = state.engine.evaluate(payloads, captured_at=now)
    response = report.to_dict()
    response["timestamp"] = now.isoformat()
    return response


def evaluate_user(user_id: str, state: Optional[AppState] = None, now: Optional[dt.datetime] = None) -> Dict:
    """Fetch every source for ``user_id`` and score whichever ones succeed.

    Sources that are unauthenticated or fail upstream are omitted from scoring
    and reported under ``omitted_sources``.
    """
    state = state or get_app_state()
    now = now or dt.datetime.now(dt.timezone.utc)
    payloads: Dict[SourceKind, Dict] = {}
    omitted: List[Dict[str, str]] = []
    for kind, fetch in FETCHERS.items():
        try:
            payloads[kind] = fetch(user_id, state=state, now=now)["data"]
        except (NotAuthenticatedError, SourceFetchError) as exc:
            logger.warning("Omitting %s for %s: %s", kind.value, user_id, exc)
            omitted.append({"source": kind.value, "reason": str(exc)})

    response = evaluate_payloads(payloads, state=state, now=now)
    response["user_id"] = user_id
    response["omitted_sources"] = omitted
    return response
