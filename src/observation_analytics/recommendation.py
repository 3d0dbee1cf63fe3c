# ABOUTME: Turns intervention alerts into suggested activities from a score-band catalog.
# ABOUTME: Every matching band yields its own recommendation; nothing is deduplicated.

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .config import AnalyticsConfig, resolve_config
from .schemas import InterventionAlert, Recommendation

logger = logging.getLogger(__name__)


def generate_recommendations(
    alerts: Sequence[InterventionAlert],
    config: Optional[AnalyticsConfig] = None,
) -> List[Recommendation]:
    """
    Recommend activities for each alert (rule-based).

    A rule matches when min_score <= alert.score <= max_score. The alert's
    severity becomes the recommendation priority. Categories missing from the
    catalog produce nothing.
    """

    cfg = resolve_config(config)
    recs: List[Recommendation] = []
    for alert in alerts:
        rules = cfg.catalog.get(alert.category, ())
        if not rules:
            logger.debug("No recommendation rules for category %r", alert.category)
        for rule in rules:
            if not rule.matches(alert.score):
                continue
            recs.append(
                Recommendation(
                    student_id=alert.student_id,
                    student_name=alert.student_name,
                    category=alert.category,
                    recommendation=rule.recommendation,
                    activity=rule.activity,
                    resources=list(rule.resources),
                    priority=alert.severity,
                )
            )
    logger.debug("Matched %d recommendations for %d alerts", len(recs), len(alerts))
    return recs
