from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from core.wellbeing.models import Priority, SourceKind


class EvaluateRequest(BaseModel):
    """Raw per-source payloads; omitted sources are skipped, not zero-scored."""

    email: Optional[Dict[str, Any]] = None
    calendar: Optional[Dict[str, Any]] = None
    activity: Optional[Dict[str, Any]] = None

    def payloads(self) -> Dict[str, Optional[Dict[str, Any]]]:
        return {"email": self.email, "calendar": self.calendar, "activity": self.activity}


class ScorePayload(BaseModel):
    value: int = Field(..., ge=0, le=100)
    status_label: str
    status_description: str


class AdjustmentPayload(BaseModel):
    source_kind: SourceKind
    category: str
    delta: int
    detail_label: str


class RecommendationPayload(BaseModel):
    priority: Priority
    category: str
    action: str
    reason: str


class MetricPayload(BaseModel):
    source_kind: SourceKind
    magnitude: float = Field(..., ge=0.0, le=1.0)
    supporting_counts: Dict[str, float]
    captured_at: Optional[str]
    degraded: bool


class OmittedSource(BaseModel):
    source: SourceKind
    reason: str


class EvaluateResponse(BaseModel):
    score: ScorePayload
    adjustments: List[AdjustmentPayload]
    recommendations: List[RecommendationPayload]
    metrics: List[MetricPayload]
    timestamp: str


class UserEvaluationResponse(EvaluateResponse):
    user_id: str
    omitted_sources: List[OmittedSource] = Field(default_factory=list)
