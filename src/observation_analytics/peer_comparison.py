# ABOUTME: Ranks each student's per-category average against the whole cohort.
# ABOUTME: Percentiles use the first rank at or above the score, so ties share the lowest rank.

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from .config import AnalyticsConfig, resolve_config
from .frames import first_seen_students, observations_to_frame, round_half_up
from .schemas import ObservationRecord, PeerComparison

logger = logging.getLogger(__name__)


def calculate_peer_comparison(
    records: Sequence[ObservationRecord],
    config: Optional[AnalyticsConfig] = None,
) -> List[PeerComparison]:
    """
    Compare every student to the cohort, category by category.

    percentile = round(((first index of a cohort score >= theirs) + 1) / cohort size * 100)
    over the ascending list of cohort averages that are > 0. Students with no
    average for a category get 0 there, and zeros are left out of the
    overall percentile.
    """

    cfg = resolve_config(config)
    students = first_seen_students(records)
    averages = _category_averages(records, cfg.timezone)

    comparisons = [
        PeerComparison(
            student_id=student_id,
            student_name=name,
            category_averages=averages.get(student_id, {}),
        )
        for student_id, name in students.items()
    ]

    for category in cfg.categories:
        cohort = np.sort(
            np.array(
                [c.category_averages[category] for c in comparisons if c.category_averages.get(category, 0) > 0],
                dtype=float,
            )
        )
        for comparison in comparisons:
            score = comparison.category_averages.get(category, 0)
            if score > 0:
                rank = int(np.searchsorted(cohort, score, side="left"))
                comparison.percentile[category] = int(round_half_up((rank + 1) / len(cohort) * 100))
            else:
                comparison.percentile[category] = 0

    for comparison in comparisons:
        valid = [p for p in comparison.percentile.values() if p > 0]
        comparison.overall_percentile = int(round_half_up(sum(valid) / len(valid))) if valid else 0

    comparisons.sort(key=lambda c: c.overall_percentile, reverse=True)
    logger.debug("Ranked %d students across %d categories", len(comparisons), len(cfg.categories))
    return comparisons


def _category_averages(records: Sequence[ObservationRecord], timezone: str) -> Dict[str, Dict[str, float]]:
    scores = observations_to_frame(records, timezone=timezone)
    if scores.empty:
        return {}

    grouped = scores.groupby(["student_id", "category"], sort=False)["score"].mean().reset_index()
    averages: Dict[str, Dict[str, float]] = {}
    for row in grouped.itertuples(index=False):
        averages.setdefault(row.student_id, {})[row.category] = float(row.score)
    return averages
