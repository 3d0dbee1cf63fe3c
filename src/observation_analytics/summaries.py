# ABOUTME: Summarizes each student's observation history for roster and progress views.
# ABOUTME: Reports counts, latest observation, tags seen, and rounded category averages.

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .bucketing import to_utc
from .config import AnalyticsConfig, resolve_config
from .frames import first_seen_students, observations_to_frame, round_half_up
from .schemas import ObservationRecord, StudentSummary


def summarize_students(
    records: Sequence[ObservationRecord],
    config: Optional[AnalyticsConfig] = None,
) -> List[StudentSummary]:
    cfg = resolve_config(config)
    summaries: Dict[str, StudentSummary] = {
        student_id: StudentSummary(
            student_id=student_id,
            student_name=name,
            observation_count=0,
            last_observation=None,
            common_tags=[],
            category_averages={},
        )
        for student_id, name in first_seen_students(records).items()
    }

    for record in records:
        summary = summaries[record.student_id]
        summary.observation_count += 1
        if _is_later(record, summary.last_observation, cfg.timezone):
            summary.last_observation = record.timestamp
        for tag in record.tags:
            if tag not in summary.common_tags:
                summary.common_tags.append(tag)

    scores = observations_to_frame(records, timezone=cfg.timezone)
    means = {}
    if not scores.empty:
        means = scores.groupby(["student_id", "category"])["score"].mean().to_dict()

    for student_id, summary in summaries.items():
        for category in cfg.categories:
            avg = means.get((student_id, category))
            summary.category_averages[category] = round_half_up(avg, 1) if avg is not None else 0

    return list(summaries.values())


def _is_later(record: ObservationRecord, current, timezone: str) -> bool:
    if current is None:
        return True
    return to_utc(record.timestamp, timezone) > to_utc(current, timezone)
