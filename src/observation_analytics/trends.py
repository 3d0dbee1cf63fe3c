# ABOUTME: Aggregates category scores into week and month trend buckets.
# ABOUTME: Each score entry feeds both granularities; buckets report simple means.

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import pandas as pd

from .bucketing import month_key, period_sort_key, week_key
from .config import AnalyticsConfig, resolve_config
from .frames import observations_to_frame
from .schemas import ObservationRecord, TrendData

logger = logging.getLogger(__name__)

WEEK = "week"
MONTH = "month"


def calculate_trends(
    records: Sequence[ObservationRecord],
    student_id: Optional[str] = None,
    config: Optional[AnalyticsConfig] = None,
) -> List[TrendData]:
    """
    Build week and month trend entries for the cohort or one student.

    Steps:
    - Filter by `student_id` when one is given.
    - Key every record by its week bucket and month bucket.
    - Average each category's scores per bucket; count score entries per bucket.
    - Merge both granularities and order them by parsing the period as a date.
    """

    cfg = resolve_config(config)
    selected = [r for r in records if r.student_id == student_id] if student_id else list(records)
    if not selected:
        return []

    bucket_keys = {
        WEEK: [week_key(r.timestamp, cfg.timezone) for r in selected],
        MONTH: [month_key(r.timestamp, cfg.timezone) for r in selected],
    }

    scores = observations_to_frame(selected, timezone=cfg.timezone)
    trends: List[TrendData] = []
    for granularity in (WEEK, MONTH):
        keys = bucket_keys[granularity]
        # Buckets open on the first record that lands in them, scored or not.
        periods = list(dict.fromkeys(keys))
        averages = _bucket_averages(scores, keys)
        for period in periods:
            bucket = averages.get(period, {})
            trends.append(
                TrendData(
                    period=period,
                    scores={category: stats[0] for category, stats in bucket.items()},
                    total_observations=sum(stats[1] for stats in bucket.values()),
                    granularity=granularity,
                )
            )

    trends.sort(key=lambda t: period_sort_key(t.period))
    logger.debug("Built %d trend buckets from %d records", len(trends), len(selected))
    return trends


def _bucket_averages(scores: pd.DataFrame, keys: List[str]) -> Dict[str, Dict[str, tuple]]:
    if scores.empty:
        return {}

    frame = scores.assign(period=scores["record_position"].map(lambda pos: keys[pos]))
    grouped = (
        frame.groupby(["period", "category"], sort=False)["score"]
        .agg(average="mean", entries="count")
        .reset_index()
    )

    buckets: Dict[str, Dict[str, tuple]] = {}
    for row in grouped.itertuples(index=False):
        buckets.setdefault(row.period, {})[row.category] = (float(row.average), int(row.entries))
    return buckets
