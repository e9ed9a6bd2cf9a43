"""Aggregation & scoring engine: normalize, combine, recommend.

The engine is a pure function of its inputs.  It reads no clock and no random
source, so evaluating the same payloads twice produces identical reports.
Absent sources (missing key or ``None`` payload) are skipped entirely; present
but malformed payloads are scored as degraded metrics.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from core.wellbeing.combiner import ScoreCombiner
from core.wellbeing.models import SourceKind, SourceMetric, WellbeingReport
from core.wellbeing.normalizer import MetricNormalizer
from core.wellbeing.recommender import RecommendationEngine

logger = logging.getLogger(__name__)

# Evaluation order is fixed so that output does not depend on mapping order.
SOURCE_ORDER = (SourceKind.EMAIL, SourceKind.CALENDAR, SourceKind.ACTIVITY)


class WellbeingEngine:
    def __init__(
        self,
        normalizer: Optional[MetricNormalizer] = None,
        combiner: Optional[ScoreCombiner] = None,
        recommender: Optional[RecommendationEngine] = None,
    ):
        self.normalizer = normalizer or MetricNormalizer()
        self.combiner = combiner or ScoreCombiner()
        self.recommender = recommender or RecommendationEngine()

    def normalize_all(
        self,
        payloads: Mapping[Any, Any],
        captured_at: Optional[dt.datetime] = None,
    ) -> List[SourceMetric]:
        """Normalize the present payloads in fixed source order; unknown keys are ignored."""
        keyed: Dict[SourceKind, Any] = {}
        for key, value in payloads.items():
            try:
                keyed[SourceKind.parse(key)] = value
            except ValueError:
                logger.warning("Ignoring unknown source %r", key)
        return [
            self.normalizer.normalize(kind, keyed[kind], captured_at=captured_at)
            for kind in SOURCE_ORDER
            if keyed.get(kind) is not None
        ]

    def evaluate_metrics(self, metrics: Iterable[SourceMetric]) -> WellbeingReport:
        ordered = sorted(metrics, key=lambda metric: SOURCE_ORDER.index(metric.source_kind))
        score, adjustments = self.combiner.combine(ordered)
        recommendations = self.recommender.recommend(ordered, score)
        return WellbeingReport(
            score=score,
            adjustments=adjustments,
            recommendations=recommendations,
            metrics=ordered,
        )

    def evaluate(
        self,
        payloads: Mapping[Any, Any],
        captured_at: Optional[dt.datetime] = None,
    ) -> WellbeingReport:
        """Score whichever subset of sources is present, including none."""
        return self.evaluate_metrics(self.normalize_all(payloads, captured_at=captured_at))


def evaluate(payloads: Mapping[Any, Any], captured_at: Optional[dt.datetime] = None) -> WellbeingReport:
    return WellbeingEngine().evaluate(payloads, captured_at=captured_at)
