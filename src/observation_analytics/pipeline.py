# ABOUTME: Runs one full analytics pass over a snapshot of observation records.
# ABOUTME: Recommendations are derived only after the complete alert list exists.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .alerts import generate_intervention_alerts
from .config import AnalyticsConfig, resolve_config
from .peer_comparison import calculate_peer_comparison
from .recommendation import generate_recommendations
from .schemas import (
    InterventionAlert,
    ObservationRecord,
    PeerComparison,
    Recommendation,
    StudentSummary,
    TrendData,
)
from .summaries import summarize_students
from .trends import calculate_trends

logger = logging.getLogger(__name__)


@dataclass
class AnalyticsReport:
    trends: List[TrendData]
    peer_comparison: List[PeerComparison]
    alerts: List[InterventionAlert]
    recommendations: List[Recommendation]
    students: List[StudentSummary]


def run_analytics(
    records: Sequence[ObservationRecord],
    student_id: Optional[str] = None,
    config: Optional[AnalyticsConfig] = None,
) -> AnalyticsReport:
    """
    Programmatic entrypoint mirrored by the CLI.

    `student_id` narrows the trend series only; peers, alerts and summaries
    always cover the whole cohort.
    """

    cfg = resolve_config(config)
    snapshot = tuple(records)
    logger.debug("Running analytics over %d records", len(snapshot))

    alerts = generate_intervention_alerts(snapshot, cfg)
    return AnalyticsReport(
        trends=calculate_trends(snapshot, student_id=student_id, config=cfg),
        peer_comparison=calculate_peer_comparison(snapshot, cfg),
        alerts=alerts,
        recommendations=generate_recommendations(alerts, cfg),
        students=summarize_students(snapshot, cfg),
    )
