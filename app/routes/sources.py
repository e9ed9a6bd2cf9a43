from __future__ import annotations

from typing import Callable, Dict, Optional

from fastapi import APIRouter, HTTPException, Query, status

from app.services.source_service import (
    NotAuthenticatedError,
    SourceFetchError,
    fetch_activity_summary,
    fetch_calendar_summary,
    fetch_email_summary,
)

router = APIRouter(prefix="/api")


def _require_user(user_id: Optional[str]) -> str:
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="userId parameter is required")
    return user_id


def _run(fetch: Callable[[], Dict]) -> Dict:
    try:
        return fetch()
    except NotAuthenticatedError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    except SourceFetchError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc


@router.get("/gmail/stress-level")
def email_stress_endpoint(user_id: Optional[str] = Query(default=None, alias="userId")) -> Dict:
    user = _require_user(user_id)
    return _run(lambda: fetch_email_summary(user))


@router.get("/calendar/schedule-health")
def schedule_health_endpoint(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    date: Optional[str] = Query(default=None),
) -> Dict:
    user = _require_user(user_id)
    try:
        return _run(lambda: fetch_calendar_summary(user, date=date))
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid date: {date}") from exc


@router.get("/fitness/summary")
def fitness_summary_endpoint(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    days: Optional[int] = Query(default=None, ge=1, le=90),
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
) -> Dict:
    user = _require_user(user_id)
    return _run(lambda: fetch_activity_summary(user, days=days, latitude=lat, longitude=lon))
