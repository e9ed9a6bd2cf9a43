from __future__ import annotations

import datetime as dt
import json
import logging

from core.wellbeing.models import SourceKind
from core.wellbeing.normalizer import MetricNormalizer


def test_email_magnitude_weights_urgent_and_unread_ratios():
    metric = MetricNormalizer().normalize("email", {"urgentCount": 5, "totalEmails": 10, "unreadCount": 2})
    assert metric.magnitude == 0.38
    assert metric.supporting_counts == {"urgent_count": 5, "total_emails": 10, "unread_count": 2}
    assert not metric.degraded


def test_email_zero_total_is_zero_magnitude_not_degraded():
    metric = MetricNormalizer().normalize(SourceKind.EMAIL, {"urgentCount": 3, "totalEmails": 0, "unreadCount": 1})
    assert metric.magnitude == 0.0
    assert not metric.degraded


def test_email_falls_back_to_precomputed_stress_level():
    metric = MetricNormalizer().normalize("email", {"stressLevel": 0.82, "urgentCount": 4})
    assert metric.magnitude == 0.82
    assert metric.count("urgent_count") == 4


def test_out_of_range_ratio_is_clamped():
    normalizer = MetricNormalizer()
    assert normalizer.normalize("email", {"stressLevel": 1.7}).magnitude == 1.0
    assert normalizer.normalize("email", {"urgentCount": 30, "totalEmails": 10, "unreadCount": 30}).magnitude == 1.0
    assert normalizer.normalize("email", {"urgentCount": -4, "totalEmails": 10}).magnitude == 0.0


def test_missing_required_field_yields_degraded_metric(caplog):
    with caplog.at_level(logging.WARNING):
        metric = MetricNormalizer().normalize("email", {"unreadCount": 4})
    assert metric.degraded
    assert metric.magnitude == 0.0
    assert metric.supporting_counts == {}
    assert "Degraded email payload" in caplog.text


def test_non_numeric_and_non_mapping_payloads_are_degraded():
    normalizer = MetricNormalizer()
    assert normalizer.normalize("calendar", {"meetingDensity": "high"}).degraded
    assert normalizer.normalize("activity", ["sleepDuration", 7]).degraded
    assert normalizer.normalize("email", {"totalEmails": True}).degraded
    assert normalizer.normalize("activity", {"sleepDuration": float("nan"), "sleepQuality": 0.5}).degraded


def test_integer_too_large_for_float_is_degraded(caplog):
    payload = json.loads('{"totalEmails": 1' + "0" * 400 + "}")
    with caplog.at_level(logging.WARNING):
        metric = MetricNormalizer().normalize("email", payload)
    assert metric.degraded
    assert metric.magnitude == 0.0
    assert "totalEmails is out of range" in caplog.text


def test_calendar_density_from_meeting_minutes():
    metric = MetricNormalizer().normalize("calendar", {"meetingMinutes": 300, "meetingCount": 4, "declinableCount": 2})
    assert metric.magnitude == 0.625
    assert metric.count("focus_time_hours") == 3.0
    assert metric.count("meeting_minutes") == 300
    assert metric.count("declinable_count") == 2


def test_calendar_density_caps_at_one_and_focus_at_zero():
    metric = MetricNormalizer().normalize("calendar", {"meetingMinutes": 600})
    assert metric.magnitude == 1.0
    assert metric.count("focus_time_hours") == 0.0


def test_calendar_uses_supplied_density_and_focus_time():
    metric = MetricNormalizer().normalize("calendar", {"meetingDensity": 0.75, "focusTimeHours": 1})
    assert metric.magnitude == 0.75
    assert metric.count("focus_time_hours") == 1.0
    assert metric.count("declinable_count") == 0


def test_calendar_respects_configured_workday():
    metric = MetricNormalizer({"workday_minutes": 600}).normalize("calendar", {"meetingMinutes": 300})
    assert metric.magnitude == 0.5
    assert metric.count("focus_time_hours") == 5.0


def test_activity_magnitude_is_sleep_quality_with_rounding():
    payload = {"sleepDuration": 7.46, "sleepQuality": 0.8123, "dailySteps": 9000.0, "stressLevel": 0.3}
    metric = MetricNormalizer().normalize("fitness", payload)
    assert metric.source_kind == SourceKind.ACTIVITY
    assert metric.magnitude == 0.812
    assert metric.count("sleep_duration") == 7.5
    assert metric.count("daily_steps") == 9000
    assert metric.count("stress_level") == 0.3
    assert metric.count("active_minutes") is None


def test_activity_requires_sleep_fields():
    assert MetricNormalizer().normalize("activity", {"sleepDuration": 7, "dailySteps": 9000}).degraded


def test_captured_at_is_passed_through_and_payload_untouched():
    stamp = dt.datetime(2026, 10, 16, 8, 30, tzinfo=dt.timezone.utc)
    payload = {"meetingDensity": 0.5}
    metric = MetricNormalizer().normalize("calendar", payload, captured_at=stamp)
    assert metric.captured_at == stamp
    assert payload == {"meetingDensity": 0.5}
