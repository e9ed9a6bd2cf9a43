"""Ordered trigger rules that turn metrics and the composite score into advice.

Rules run in a fixed order and may co-fire.  The output keeps that order; it is
not re-sorted by priority, so a CRITICAL item can follow a MEDIUM one.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from core.wellbeing.models import CompositeScore, Priority, Recommendation, SourceKind, SourceMetric

EMAIL_STRESS_TRIGGER = 0.7
MEETING_DENSITY_TRIGGER = 0.6
SLEEP_HOURS_TRIGGER = 6
STEPS_TRIGGER = 5000
LOW_SCORE_TRIGGER = 40
HIGH_SCORE_TRIGGER = 80

EMAIL_CATEGORY = "Email Management"
CALENDAR_CATEGORY = "Calendar Optimization"
HEALTH_CATEGORY = "Health & Wellness"
OVERALL_CATEGORY = "Overall Wellness"
POSITIVE_CATEGORY = "Positive Feedback"


class RecommendationEngine:
    def recommend(self, metrics: List[SourceMetric], score: CompositeScore) -> List[Recommendation]:
        by_kind: Dict[SourceKind, SourceMetric] = {metric.source_kind: metric for metric in metrics}
        recommendations: List[Recommendation] = []
        recommendations += self._email_rules(by_kind.get(SourceKind.EMAIL))
        recommendations += self._calendar_rules(by_kind.get(SourceKind.CALENDAR))
        recommendations += self._sleep_rules(by_kind.get(SourceKind.ACTIVITY))
        recommendations += self._steps_rules(by_kind.get(SourceKind.ACTIVITY))
        recommendations += self._score_rules(score)
        return recommendations

    def _email_rules(self, metric: Optional[SourceMetric]) -> List[Recommendation]:
        if metric is None or metric.magnitude <= EMAIL_STRESS_TRIGGER:
            return []
        return [
            Recommendation(
                priority=Priority.HIGH,
                category=EMAIL_CATEGORY,
                action="Block 2 hours for deep work tomorrow",
                reason="High email stress detected - need uninterrupted focus time",
            ),
            Recommendation(
                priority=Priority.MEDIUM,
                category=EMAIL_CATEGORY,
                action="Set up email filters for urgent keywords",
                reason="Reduce reactive email checking",
            ),
        ]

    def _calendar_rules(self, metric: Optional[SourceMetric]) -> List[Recommendation]:
        if metric is None or metric.magnitude <= MEETING_DENSITY_TRIGGER:
            return []
        declinable = int(metric.count("declinable_count") or 0)
        return [
            Recommendation(
                priority=Priority.HIGH,
                category=CALENDAR_CATEGORY,
                action=f"Decline {declinable} optional meetings this week",
                reason="Schedule overbooked - create focus time",
            )
        ]

    def _sleep_rules(self, metric: Optional[SourceMetric]) -> List[Recommendation]:
        duration = metric.count("sleep_duration") if metric else None
        if duration is None or duration >= SLEEP_HOURS_TRIGGER:
            return []
        return [
            Recommendation(
                priority=Priority.CRITICAL,
                category=HEALTH_CATEGORY,
                action="Aim for 7-8 hours of sleep tonight",
                reason="Sleep deprivation affecting productivity and health",
            ),
            Recommendation(
                priority=Priority.MEDIUM,
                category=HEALTH_CATEGORY,
                action="Reduce screen time 1 hour before bed",
                reason="Improve sleep quality",
            ),
        ]

    def _steps_rules(self, metric: Optional[SourceMetric]) -> List[Recommendation]:
        steps = metric.count("daily_steps") if metric else None
        if steps is None or steps >= STEPS_TRIGGER:
            return []
        return [
            Recommendation(
                priority=Priority.MEDIUM,
                category=HEALTH_CATEGORY,
                action="Take a 15-minute walk during lunch",
                reason="Low daily activity detected - boost energy and focus",
            )
        ]

    def _score_rules(self, score: CompositeScore) -> List[Recommendation]:
        recommendations: List[Recommendation] = []
        if score.value < LOW_SCORE_TRIGGER:
            recommendations.append(
                Recommendation(
                    priority=Priority.CRITICAL,
                    category=OVERALL_CATEGORY,
                    action="Schedule a personal review meeting with yourself",
                    reason="Multiple health and productivity indicators are concerning",
                )
            )
        if score.value >= HIGH_SCORE_TRIGGER:
            recommendations.append(
                Recommendation(
                    priority=Priority.INFO,
                    category=POSITIVE_CATEGORY,
                    action="Great job! Maintain current healthy habits",
                    reason="All productivity and health metrics look excellent",
                )
            )
        return recommendations
