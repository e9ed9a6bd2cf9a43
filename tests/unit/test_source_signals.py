from __future__ import annotations

import random

from core.sources.activity_sim import ActivitySimulator, WeatherConditions, interpret_activity
from core.sources.calendar_signals import is_declinable, summarize_events
from core.sources.email_signals import interpret_email, is_urgent, message_subject, summarize_messages


def gmail_message(subject: str, unread: bool = False) -> dict:
    return {
        "id": subject,
        "labelIds": ["INBOX", "UNREAD"] if unread else ["INBOX"],
        "payload": {"headers": [{"name": "From", "value": "boss@example.com"}, {"name": "Subject", "value": subject}]},
    }


def meeting(start: str, end: str, **self_attendee) -> dict:
    return {
        "start": {"dateTime": start},
        "end": {"dateTime": end},
        "attendees": [{"email": "me@example.com", "self": True, **self_attendee}, {"email": "x@example.com"}],
    }


def test_subject_keywords_are_case_insensitive():
    assert is_urgent("URGENT: quarterly numbers")
    assert is_urgent("Action Required - sign the form")
    assert not is_urgent("Lunch on Friday?")
    assert message_subject(gmail_message("Hello")) == "Hello"
    assert message_subject({"payload": {"headers": []}}) == ""


def test_summarize_messages_counts_urgent_and_unread():
    messages = [
        gmail_message("URGENT: report", unread=True),
        gmail_message("Lunch"),
        gmail_message("Action required: sign", unread=True),
    ]
    summary = summarize_messages(messages)
    assert summary == {"stressLevel": 0.667, "urgentCount": 2, "totalEmails": 3, "unreadCount": 2}


def test_summarize_messages_only_inspects_first_twenty():
    messages = [gmail_message(f"deadline {idx}", unread=True) for idx in range(25)]
    summary = summarize_messages(messages)
    assert summary["urgentCount"] == 20
    assert summary["totalEmails"] == 25
    assert summary["stressLevel"] == 0.8


def test_summarize_messages_empty_inbox():
    assert summarize_messages([]) == {"stressLevel": 0.0, "urgentCount": 0, "totalEmails": 0, "unreadCount": 0}
    assert interpret_email(0.0)["stressStatus"] == "Low Stress"


def test_summarize_events_counts_meetings_and_declinable():
    events = [
        meeting("2026-10-16T09:00:00Z", "2026-10-16T10:00:00Z", optional=True),
        meeting("2026-10-16T13:00:00-05:00", "2026-10-16T14:00:00-05:00", responseStatus="accepted"),
        {"start": {"dateTime": "2026-10-16T15:00:00Z"}, "end": {"dateTime": "2026-10-16T17:00:00Z"}},
    ]
    summary = summarize_events(events)
    assert summary == {
        "meetingDensity": 0.25,
        "meetingMinutes": 120,
        "totalEvents": 3,
        "meetingCount": 2,
        "focusTimeHours": 6.0,
        "declinableCount": 1,
    }


def test_all_day_meeting_fills_the_workday():
    events = [
        {
            "start": {"date": "2026-10-16"},
            "end": {"date": "2026-10-17"},
            "attendees": [{"self": True, "responseStatus": "tentative"}],
        }
    ]
    summary = summarize_events(events)
    assert summary["meetingDensity"] == 1.0
    assert summary["focusTimeHours"] == 0.0
    assert summary["declinableCount"] == 1


def test_declinable_requires_own_attendance():
    assert not is_declinable({"attendees": [{"email": "x@example.com", "optional": True}]})


def test_simulator_is_reproducible_with_seeded_rng():
    first = ActivitySimulator(random.Random(7)).simulate(None)
    second = ActivitySimulator(random.Random(7)).simulate(None)
    assert first == second


def test_simulator_ranges_follow_weather():
    pleasant = WeatherConditions(temperature=20, humidity=50, wind_speed=10)
    harsh = WeatherConditions(temperature=2, humidity=90, wind_speed=35)
    simulator = ActivitySimulator(random.Random(1))
    for _ in range(50):
        good = simulator.simulate(pleasant)
        bad = simulator.simulate(harsh)
        assert 6000 <= good["dailySteps"] < 10000
        assert 2000 <= bad["dailySteps"] < 5000
        assert good["activeMinutes"] == good["dailySteps"] // 100
        assert 5.0 <= good["sleepDuration"] <= 8.0
        assert 0.5 <= good["sleepQuality"] <= 0.8
        assert 0.4 <= good["stressLevel"] <= 0.8
        assert 60 <= good["restingHeartRate"] < 80


def test_interpret_activity_statuses():
    text = interpret_activity({"sleepDuration": 5.5, "dailySteps": 4000, "stressLevel": 0.75})
    assert text["sleepStatus"] == "Sleep Deprived"
    assert text["activityStatus"] == "Sedentary"
    assert text["stressStatus"] == "High Stress"


def test_interpret_activity_trend():
    worn_out = interpret_activity({"sleepDuration": 6.2, "dailySteps": 4000, "stressLevel": 0.75})
    assert worn_out["trend"] == "Sleep: declining, Activity: low, Stress: increasing"
    rested = interpret_activity({"sleepDuration": 7.5, "dailySteps": 9000, "stressLevel": 0.5})
    assert rested["trend"] == "Sleep: stable, Activity: moderate, Stress: moderate"
