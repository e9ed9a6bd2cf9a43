"""Value objects passed between the normalizer, combiner, and recommender."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# Payload keys used by the browser client for the same sources.
_SOURCE_ALIASES: Dict[str, str] = {"emails": "email", "fitness": "activity"}


class SourceKind(str, Enum):
    EMAIL = "email"
    CALENDAR = "calendar"
    ACTIVITY = "activity"

    @classmethod
    def parse(cls, value: "SourceKind | str") -> "SourceKind":
        """Accept either an enum member or its name/value in any case."""
        if isinstance(value, SourceKind):
            return value
        text = str(value).strip().lower()
        text = _SOURCE_ALIASES.get(text, text)
        for kind in cls:
            if kind.value == text:
                return kind
        raise ValueError(f"Unknown source kind: {value!r}")


class Priority(str, Enum):
    INFO = "INFO"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        """Severity rank; INFO is the least severe."""
        return _PRIORITY_RANK[self]

    # Compare by severity rather than by the underlying string.
    def __lt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank >= other.rank


_PRIORITY_RANK: Dict[Priority, int] = {
    Priority.INFO: 0,
    Priority.MEDIUM: 1,
    Priority.HIGH: 2,
    Priority.CRITICAL: 3,
}


@dataclass(frozen=True)
class SourceMetric:
    """Canonical per-source metric with a magnitude in [0, 1]."""

    source_kind: SourceKind
    magnitude: float
    supporting_counts: Dict[str, float] = field(default_factory=dict)
    captured_at: Optional[dt.datetime] = None
    degraded: bool = False

    def count(self, name: str) -> Optional[float]:
        return self.supporting_counts.get(name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_kind": self.source_kind.value,
            "magnitude": self.magnitude,
            "supporting_counts": dict(self.supporting_counts),
            "captured_at": self.captured_at.isoformat() if self.captured_at else None,
            "degraded": self.degraded,
        }


@dataclass(frozen=True)
class ScoreAdjustment:
    """Signed contribution of one present source to the composite score."""

    source_kind: SourceKind
    delta: int
    detail_label: str
    category: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_kind": self.source_kind.value,
            "category": self.category,
            "delta": self.delta,
            "detail_label": self.detail_label,
        }


@dataclass(frozen=True)
class CompositeScore:
    value: int
    status_label: str
    status_description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "status_label": self.status_label,
            "status_description": self.status_description,
        }


@dataclass(frozen=True)
class Recommendation:
    priority: Priority
    category: str
    action: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "priority": self.priority.value,
            "category": self.category,
            "action": self.action,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class WellbeingReport:
    """Complete result of one evaluation: score, audit trail, and advice."""

    score: CompositeScore
    adjustments: List[ScoreAdjustment]
    recommendations: List[Recommendation]
    metrics: List[SourceMetric]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score.to_dict(),
            "adjustments": [adjustment.to_dict() for adjustment in self.adjustments],
            "recommendations": [rec.to_dict() for rec in self.recommendations],
            "metrics": [metric.to_dict() for metric in self.metrics],
        }
