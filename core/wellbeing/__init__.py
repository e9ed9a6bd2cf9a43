"""Aggregation & scoring engine for per-user wellbeing signals."""

from .engine import WellbeingEngine, evaluate
from .models import (
    CompositeScore,
    Priority,
    Recommendation,
    ScoreAdjustment,
    SourceKind,
    SourceMetric,
    WellbeingReport,
)

__all__ = [
    "WellbeingEngine",
    "evaluate",
    "CompositeScore",
    "Priority",
    "Recommendation",
    "ScoreAdjustment",
    "SourceKind",
    "SourceMetric",
    "WellbeingReport",
]
