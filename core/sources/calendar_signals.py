"""Summarize Google Calendar events into the CALENDAR payload shape."""

from __future__ import annotations

import datetime as dt
from typing import Dict, List

WORKDAY_MINUTES = 480


def parse_event_time(point: Dict) -> dt.datetime:
    """Parse an event ``start``/``end`` object holding ``dateTime`` or all-day ``date``."""
    raw = point.get("dateTime") or point.get("date")
    if not raw:
        raise ValueError("event time has neither dateTime nor date")
    return dt.datetime.fromisoformat(raw.replace("Z", "+00:00"))


def event_minutes(event: Dict) -> float:
    start = parse_event_time(event.get("start") or {})
    end = parse_event_time(event.get("end") or {})
    return max(0.0, (end - start).total_seconds() / 60)


def is_meeting(event: Dict) -> bool:
    return bool(event.get("attendees"))


def is_declinable(event: Dict) -> bool:
    """True when the user's own attendance is optional or only tentative."""
    own = next((attendee for attendee in event.get("attendees") or [] if attendee.get("self")), None)
    if own is None:
        return False
    return bool(own.get("optional")) or own.get("responseStatus") == "tentative"


def summarize_events(events: List[Dict], workday_minutes: int = WORKDAY_MINUTES) -> Dict[str, float]:
    meeting_count = 0
    meeting_minutes = 0.0
    declinable = 0
    for event in events:
        if not is_meeting(event):
            continue
        meeting_count += 1
        meeting_minutes += event_minutes(event)
        if is_declinable(event):
            declinable += 1
    density = min(1.0, meeting_minutes / workday_minutes)
    focus_hours = max(0.0, (workday_minutes - meeting_minutes) / 60)
    return {
        "meetingDensity": round(density, 2),
        "meetingMinutes": int(meeting_minutes),
        "totalEvents": len(events),
        "meetingCount": meeting_count,
        "focusTimeHours": round(focus_hours, 1),
        "declinableCount": declinable,
    }


def interpret_schedule(density: float, focus_hours: float, declinable: int) -> Dict[str, str]:
    if density > 0.6:
        status = "Overbooked"
        advice = f"Consider declining {declinable} optional meetings to create focus time"
    elif density > 0.4:
        status = "Busy"
        advice = "Schedule is busy but manageable"
    else:
        status = "Balanced"
        advice = "Schedule looks balanced - good day for focused work"
    return {
        "densityPercentage": f"{density * 100:.0f}%",
        "scheduleStatus": status,
        "recommendation": advice,
        "focusTimeAvailable": f"{focus_hours:.1f} hours",
    }
