"""Summarize Gmail message metadata into the EMAIL payload shape."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

STRESS_KEYWORDS: Sequence[str] = (
    "urgent",
    "asap",
    "deadline",
    "critical",
    "important",
    "immediately",
    "emergency",
    "action required",
)
ANALYZED_MESSAGES = 20


def message_subject(message: Dict) -> str:
    """Pull the Subject header out of a Gmail ``format=metadata`` resource."""
    headers = (message.get("payload") or {}).get("headers") or []
    for header in headers:
        if header.get("name") == "Subject":
            return header.get("value") or ""
    return message.get("subject", "") or ""


def is_urgent(subject: str, keywords: Iterable[str] = STRESS_KEYWORDS) -> bool:
    subject_lower = subject.lower()
    return any(keyword in subject_lower for keyword in keywords)


def is_unread(message: Dict) -> bool:
    return "UNREAD" in (message.get("labelIds") or [])


def summarize_messages(
    messages: List[Dict],
    total_emails: Optional[int] = None,
    keywords: Iterable[str] = STRESS_KEYWORDS,
    limit: int = ANALYZED_MESSAGES,
) -> Dict[str, float]:
    """Count urgent/unread messages among the first ``limit`` and derive stress.

    ``total_emails`` is the number of messages the listing returned; ratios are
    taken against it even though only ``limit`` messages are inspected.
    """
    total = len(messages) if total_emails is None else total_emails
    keywords = tuple(keywords)
    urgent = 0
    unread = 0
    for message in messages[:limit]:
        if is_urgent(message_subject(message), keywords):
            urgent += 1
        if is_unread(message):
            unread += 1
    urgent_ratio = urgent / total if total > 0 else 0.0
    unread_ratio = unread / total if total > 0 else 0.0
    stress = urgent_ratio * 0.6 + unread_ratio * 0.4
    return {
        "stressLevel": round(stress, 3),
        "urgentCount": urgent,
        "totalEmails": total,
        "unreadCount": unread,
    }


def interpret_email(stress: float) -> Dict[str, str]:
    if stress > 0.7:
        status = "High Stress"
        advice = "High email stress detected - consider blocking focus time and declining low-priority meetings"
    elif stress > 0.4:
        status = "Moderate Stress"
        advice = "Moderate stress - manage inbox proactively"
    else:
        status = "Low Stress"
        advice = "Email stress is low - good time for deep work"
    return {
        "stressPercentage": f"{stress * 100:.1f}%",
        "stressStatus": status,
        "recommendation": advice,
    }
