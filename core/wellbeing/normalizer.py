"""Convert raw per-source payloads into canonical SourceMetric records.

Each source ships a differently shaped payload (see ``core.sources``).  The
normalizer reduces every payload to one magnitude in [0, 1] plus the supporting
values the combiner and recommender need.  Malformed payloads never raise: they
come back as a degraded, zero-magnitude metric so the remaining sources can
still be scored.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
from typing import Any, Dict, Mapping, Optional, Tuple

from core.wellbeing.models import SourceKind, SourceMetric

logger = logging.getLogger(__name__)

WORKDAY_MINUTES = 480
RATIO_PRECISION = 3
HOURS_PRECISION = 1

# Weights of the urgent and unread ratios in the email stress magnitude.
URGENT_WEIGHT = 0.6
UNREAD_WEIGHT = 0.4


class MalformedPayload(ValueError):
    """Raised internally when a payload lacks a required field or has bad types."""


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def _number(payload: Mapping[str, Any], key: str) -> Optional[float]:
    """Return payload[key] as a finite float, None when absent."""
    if key not in payload or payload[key] is None:
        return None
    raw = payload[key]
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise MalformedPayload(f"{key} must be numeric, got {type(raw).__name__}")
    try:
        value = float(raw)
    except OverflowError as exc:
        raise MalformedPayload(f"{key} is out of range") from exc
    if not math.isfinite(value):
        raise MalformedPayload(f"{key} must be finite")
    return value


def _require(payload: Mapping[str, Any], key: str) -> float:
    value = _number(payload, key)
    if value is None:
        raise MalformedPayload(f"missing required field {key}")
    return value


class MetricNormalizer:
    def __init__(self, cfg: Optional[Dict] = None):
        cfg = cfg or {}
        self.workday_minutes = cfg.get("workday_minutes", WORKDAY_MINUTES)
        if self.workday_minutes <= 0:
            raise ValueError("workday_minutes must be positive")

    def normalize(
        self,
        kind: SourceKind | str,
        payload: Any,
        captured_at: Optional[dt.datetime] = None,
    ) -> SourceMetric:
        """Normalize one payload; malformed input yields a degraded metric."""
        kind = SourceKind.parse(kind)
        handlers = {
            SourceKind.EMAIL: self._email,
            SourceKind.CALENDAR: self._calendar,
            SourceKind.ACTIVITY: self._activity,
        }
        try:
            if not isinstance(payload, Mapping):
                raise MalformedPayload(f"payload must be a mapping, got {type(payload).__name__}")
            magnitude, counts = handlers[kind](payload)
        except MalformedPayload as exc:
            logger.warning("Degraded %s payload: %s", kind.value, exc)
            return SourceMetric(
                source_kind=kind,
                magnitude=0.0,
                supporting_counts={},
                captured_at=captured_at,
                degraded=True,
            )
        return SourceMetric(
            source_kind=kind,
            magnitude=round(clamp_unit(magnitude), RATIO_PRECISION),
            supporting_counts=counts,
            captured_at=captured_at,
        )

    def _email(self, payload: Mapping[str, Any]) -> Tuple[float, Dict[str, float]]:
        total = _number(payload, "totalEmails")
        urgent = _number(payload, "urgentCount")
        unread = _number(payload, "unreadCount")
        counts: Dict[str, float] = {"urgent_count": int(urgent or 0)}

        if total is not None:
            counts["total_emails"] = int(total)
            counts["unread_count"] = int(unread or 0)
            if total <= 0:
                return 0.0, counts
            magnitude = URGENT_WEIGHT * ((urgent or 0) / total) + UNREAD_WEIGHT * ((unread or 0) / total)
            return magnitude, counts

        stress = _number(payload, "stressLevel")
        if stress is None:
            raise MalformedPayload("email payload needs totalEmails or stressLevel")
        if unread is not None:
            counts["unread_count"] = int(unread)
        return stress, counts

    def _calendar(self, payload: Mapping[str, Any]) -> Tuple[float, Dict[str, float]]:
        minutes = _number(payload, "meetingMinutes")
        density = _number(payload, "meetingDensity")
        focus = _number(payload, "focusTimeHours")

        if minutes is not None:
            magnitude = min(1.0, minutes / self.workday_minutes)
            if focus is None:
                focus = max(0.0, (self.workday_minutes - minutes) / 60)
        elif density is not None:
            magnitude = density
        else:
            raise MalformedPayload("calendar payload needs meetingMinutes or meetingDensity")

        counts: Dict[str, float] = {
            "meeting_count": int(_number(payload, "meetingCount") or 0),
            "total_events": int(_number(payload, "totalEvents") or 0),
            "declinable_count": int(_number(payload, "declinableCount") or 0),
        }
        if minutes is not None:
            counts["meeting_minutes"] = int(minutes)
        if focus is not None:
            counts["focus_time_hours"] = round(max(0.0, focus), HOURS_PRECISION)
        return magnitude, counts

    def _activity(self, payload: Mapping[str, Any]) -> Tuple[float, Dict[str, float]]:
        duration = _require(payload, "sleepDuration")
        quality = _require(payload, "sleepQuality")
        counts: Dict[str, float] = {
            "sleep_duration": round(duration, HOURS_PRECISION),
            "sleep_quality": round(clamp_unit(quality), RATIO_PRECISION),
        }
        steps = _number(payload, "dailySteps")
        if steps is not None:
            counts["daily_steps"] = int(steps)
        active = _number(payload, "activeMinutes")
        if active is not None:
            counts["active_minutes"] = int(active)
        stress = _number(payload, "stressLevel")
        if stress is not None:
            counts["stress_level"] = round(clamp_unit(stress), RATIO_PRECISION)
        return quality, counts
