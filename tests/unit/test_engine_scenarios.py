from __future__ import annotations

import copy
import datetime as dt
import json

from core.wellbeing.engine import WellbeingEngine, evaluate
from core.wellbeing.models import Priority, SourceKind

SCENARIO_A = {"urgentCount": 5, "totalEmails": 10, "unreadCount": 2}
SCENARIO_B = {"meetingDensity": 0.75, "focusTimeHours": 1}
SCENARIO_C = {"sleepDuration": 5, "sleepQuality": 0.4, "dailySteps": 2000, "stressLevel": 0.8}


def test_no_sources_yields_neutral_fair_report():
    report = evaluate({})
    assert report.score.value == 50
    assert report.score.status_label == "Fair"
    assert report.recommendations == []
    assert report.adjustments == []


def test_none_payloads_are_treated_as_absent():
    report = evaluate({"email": None, SourceKind.CALENDAR: None})
    assert report.adjustments == []
    assert report.metrics == []


def test_scenario_a_email_nets_zero():
    report = evaluate({"email": SCENARIO_A})
    assert report.metrics[0].magnitude == 0.38
    assert [adj.delta for adj in report.adjustments] == [0]
    assert report.score.value == 50
    assert report.recommendations == []


def test_email_exactly_at_band_boundary_gets_lower_severity_bonus():
    report = evaluate({"email": {"urgentCount": 5, "totalEmails": 10, "unreadCount": 0}})
    assert report.metrics[0].magnitude == 0.3
    assert report.adjustments[0].delta == 10


def test_scenario_b_calendar_only_is_poor():
    report = evaluate({"calendar": SCENARIO_B})
    assert report.adjustments[0].delta == -15
    assert report.score.value == 35
    assert report.score.status_label == "Poor"
    assert [rec.action for rec in report.recommendations] == [
        "Decline 0 optional meetings this week",
        "Schedule a personal review meeting with yourself",
    ]


def test_scenario_c_activity_clamps_and_fires_four_rules_in_order():
    report = evaluate({"activity": SCENARIO_C})
    assert report.adjustments[0].delta == -55
    assert report.score.value == 0
    assert report.score.status_label == "Critical"
    assert [(rec.priority, rec.action) for rec in report.recommendations] == [
        (Priority.CRITICAL, "Aim for 7-8 hours of sleep tonight"),
        (Priority.MEDIUM, "Reduce screen time 1 hour before bed"),
        (Priority.MEDIUM, "Take a 15-minute walk during lunch"),
        (Priority.CRITICAL, "Schedule a personal review meeting with yourself"),
    ]


def test_all_sources_combine_in_fixed_order_regardless_of_mapping_order():
    report = evaluate({"activity": SCENARIO_C, "calendar": SCENARIO_B, "email": SCENARIO_A})
    assert [adj.source_kind for adj in report.adjustments] == [
        SourceKind.EMAIL,
        SourceKind.CALENDAR,
        SourceKind.ACTIVITY,
    ]
    assert report.score.value == 0


def test_degraded_source_does_not_block_others():
    report = evaluate({"email": {"subject": "no counts"}, "calendar": SCENARIO_B})
    assert report.metrics[0].degraded
    assert [adj.delta for adj in report.adjustments] == [0, -15]
    assert report.adjustments[0].detail_label == "No data"
    assert report.score.value == 35


def test_evaluation_is_idempotent_and_does_not_mutate_inputs():
    payloads = {"email": SCENARIO_A, "calendar": SCENARIO_B, "activity": SCENARIO_C}
    before = copy.deepcopy(payloads)
    stamp = dt.datetime(2026, 10, 16, tzinfo=dt.timezone.utc)
    engine = WellbeingEngine()
    first = engine.evaluate(payloads, captured_at=stamp)
    second = engine.evaluate(payloads, captured_at=stamp)
    assert first == second
    assert json.dumps(first.to_dict(), sort_keys=True) == json.dumps(second.to_dict(), sort_keys=True)
    assert payloads == before


def test_score_stays_in_bounds_for_extreme_inputs():
    extremes = [
        {"email": {"urgentCount": 10 ** 6, "totalEmails": 1, "unreadCount": 10 ** 6}},
        {"email": {"stressLevel": -5}},
        {"calendar": {"meetingMinutes": -900}},
        {"calendar": {"meetingMinutes": 10 ** 7, "focusTimeHours": 99}},
        {"activity": {"sleepDuration": 100, "sleepQuality": 50, "dailySteps": 10 ** 9, "stressLevel": -1}},
        {"activity": {"sleepDuration": -3, "sleepQuality": -2, "dailySteps": -5, "stressLevel": 9}},
    ]
    for payloads in extremes:
        report = evaluate(payloads)
        assert 0 <= report.score.value <= 100
        for metric in report.metrics:
            assert 0.0 <= metric.magnitude <= 1.0


def test_unknown_payload_keys_are_ignored(caplog):
    with caplog.at_level("WARNING"):
        report = evaluate({"weather": {"x": 1}, "meta": None, "email": {"stressLevel": 0.1}})
    assert [metric.source_kind for metric in report.metrics] == [SourceKind.EMAIL]
    assert report.score.value == 70
    assert "Ignoring unknown source 'weather'" in caplog.text


def test_source_aliases_are_accepted():
    report = evaluate({"emails": {"stressLevel": 0.1}, "fitness": {"sleepDuration": 8, "sleepQuality": 0.8}})
    assert [metric.source_kind for metric in report.metrics] == [SourceKind.EMAIL, SourceKind.ACTIVITY]
