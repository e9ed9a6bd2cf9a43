"""Banding rules that turn normalized metrics into a bounded composite score."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from core.wellbeing.models import CompositeScore, ScoreAdjustment, SourceKind, SourceMetric

BASELINE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100

# (upper bound, delta) pairs checked with strict "<" in ascending order; the
# final pair uses an infinite bound and acts as the else branch.
EMAIL_BANDS: Sequence[Tuple[float, int]] = ((0.3, 20), (0.5, 10), (0.7, -10), (float("inf"), -25))
CALENDAR_BANDS: Sequence[Tuple[float, int]] = ((0.4, 20), (0.6, 5), (0.8, -15), (float("inf"), -30))

URGENT_EMAIL_LIMIT = 3
URGENT_EMAIL_PENALTY = -10
FOCUS_TIME_HOURS = 3.0
FOCUS_TIME_BONUS = 10

STATUS_BANDS: Sequence[Tuple[int, str, str]] = (
    (80, "Excellent", "Excellent - Thriving"),
    (60, "Good", "Good - Sustainable"),
    (40, "Fair", "Fair - Needs Attention"),
    (20, "Poor", "Poor - Action Required"),
)
CRITICAL_STATUS = ("Critical", "Critical - Immediate Intervention Needed")

CATEGORIES: Dict[SourceKind, str] = {
    SourceKind.EMAIL: "Email Stress",
    SourceKind.CALENDAR: "Schedule Health",
    SourceKind.ACTIVITY: "Sleep & Activity",
}

NO_DATA_LABEL = "No data"


def band_delta(value: float, bands: Sequence[Tuple[float, int]]) -> int:
    """Return the delta of the first band whose upper bound exceeds ``value``."""
    for upper, delta in bands:
        if value < upper:
            return delta
    return bands[-1][1]


def clamp_score(value: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def status_for(value: int) -> Tuple[str, str]:
    """Map a composite value onto its (label, description) status band."""
    for lower, label, description in STATUS_BANDS:
        if value >= lower:
            return label, description
    return CRITICAL_STATUS


def email_delta(metric: SourceMetric) -> int:
    delta = band_delta(metric.magnitude, EMAIL_BANDS)
    if (metric.count("urgent_count") or 0) > URGENT_EMAIL_LIMIT:
        delta += URGENT_EMAIL_PENALTY
    return delta


def calendar_delta(metric: SourceMetric) -> int:
    delta = band_delta(metric.magnitude, CALENDAR_BANDS)
    focus = metric.count("focus_time_hours")
    if focus is not None and focus >= FOCUS_TIME_HOURS:
        delta += FOCUS_TIME_BONUS
    return delta


def activity_delta(metric: SourceMetric) -> int:
    """Sum the sleep duration, sleep quality, steps, and stress sub-bands."""
    delta = 0

    duration = metric.count("sleep_duration")
    if duration is not None:
        if 7 <= duration <= 9:
            delta += 20
        elif duration >= 6:
            delta += 5
        else:
            delta -= 20

    quality = metric.count("sleep_quality")
    if quality is None:
        quality = metric.magnitude
    if quality > 0.7:
        delta += 10
    elif quality < 0.5:
        delta -= 10

    steps = metric.count("daily_steps")
    if steps is not None:
        if steps >= 8000:
            delta += 10
        elif steps < 3000:
            delta -= 10

    stress = metric.count("stress_level")
    if stress is not None and stress > 0.7:
        delta -= 15

    return delta


def detail_label(metric: SourceMetric) -> str:
    """Human-readable status for one source, shown beside its adjustment."""
    if metric.degraded:
        return NO_DATA_LABEL
    if metric.source_kind == SourceKind.EMAIL:
        if metric.magnitude > 0.7:
            return "High Stress"
        return "Moderate Stress" if metric.magnitude > 0.4 else "Low Stress"
    if metric.source_kind == SourceKind.CALENDAR:
        if metric.magnitude > 0.6:
            return "Overbooked"
        return "Busy" if metric.magnitude > 0.4 else "Balanced"
    duration = metric.count("sleep_duration") or 0
    if duration < 6:
        return "Sleep Deprived"
    return "Insufficient Sleep" if duration < 7 else "Healthy Sleep"


_DELTA_RULES = {
    SourceKind.EMAIL: email_delta,
    SourceKind.CALENDAR: calendar_delta,
    SourceKind.ACTIVITY: activity_delta,
}


class ScoreCombiner:
    def __init__(self, baseline: int = BASELINE_SCORE):
        self.baseline = baseline

    def adjustment_for(self, metric: SourceMetric) -> ScoreAdjustment:
        delta = 0 if metric.degraded else _DELTA_RULES[metric.source_kind](metric)
        return ScoreAdjustment(
            source_kind=metric.source_kind,
            delta=delta,
            detail_label=detail_label(metric),
            category=CATEGORIES[metric.source_kind],
        )

    def combine(self, metrics: Iterable[Optional[SourceMetric]]) -> Tuple[CompositeScore, List[ScoreAdjustment]]:
        """Score every present metric and fold the deltas into a clamped composite."""
        adjustments = [self.adjustment_for(metric) for metric in metrics if metric is not None]
        value = clamp_score(self.baseline + sum(adjustment.delta for adjustment in adjustments))
        label, description = status_for(value)
        return CompositeScore(value=value, status_label=label, status_description=description), adjustments
