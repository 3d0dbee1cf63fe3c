# ABOUTME: Flags sustained score declines and sub-threshold scores per student and category.
# ABOUTME: Windows are cut over scores ordered by their record timestamps, never wall-clock time.

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .config import AlertThresholds, AnalyticsConfig, resolve_config
from .frames import first_seen_students, mean, observations_to_frame
from .schemas import (
    ALERT_DECLINE,
    ALERT_IMPROVEMENT,
    ALERT_THRESHOLD,
    SEVERITY_ORDER,
    InterventionAlert,
    ObservationRecord,
)

logger = logging.getLogger(__name__)


def generate_intervention_alerts(
    records: Sequence[ObservationRecord],
    config: Optional[AnalyticsConfig] = None,
) -> List[InterventionAlert]:
    """
    Generate decline and threshold alerts for every (student, category) pair.

    Pairs with fewer than `min_observations` score entries are skipped. The
    decline check compares the mean of the last `window_size` scores with the
    `window_size` scores before them; the threshold check looks at the last
    score alone. Both may fire for the same pair. Output is ordered high to
    low severity, keeping encounter order within a severity.
    """

    cfg = resolve_config(config)
    limits = cfg.thresholds
    scores = observations_to_frame(records, timezone=cfg.timezone)
    if scores.empty:
        return []

    # Stable sort: equal timestamps keep record order, then entry order.
    scores = scores.sort_values(["timestamp", "record_position"], kind="mergesort")
    by_pair = {key: group["score"].tolist() for key, group in scores.groupby(["student_id", "category"], sort=False)}

    alerts: List[InterventionAlert] = []
    for student_id, student_name in first_seen_students(records).items():
        for category in cfg.categories:
            history = by_pair.get((student_id, category), [])
            if len(history) < limits.min_observations:
                continue
            alerts.extend(_trend_alerts(student_id, student_name, category, history, limits))
            threshold_alert = _threshold_alert(student_id, student_name, category, history[-1], limits)
            if threshold_alert:
                alerts.append(threshold_alert)

    alerts.sort(key=lambda a: SEVERITY_ORDER[a.severity], reverse=True)
    logger.debug("Generated %d intervention alerts", len(alerts))
    return alerts


def _trend_alerts(
    student_id: str,
    student_name: str,
    category: str,
    history: List[float],
    limits: AlertThresholds,
) -> List[InterventionAlert]:
    window = limits.window_size
    recent = history[-window:]
    older = history[-2 * window : -window]
    if len(older) < window:
        return []

    recent_avg = mean(recent)
    older_avg = mean(older)
    decline = older_avg - recent_avg

    alerts: List[InterventionAlert] = []
    if decline > limits.decline_margin:
        alerts.append(
            InterventionAlert(
                student_id=student_id,
                student_name=student_name,
                alert_type=ALERT_DECLINE,
                category=category,
                severity=_change_severity(decline, limits),
                message=f"{category} scores have declined by {decline:.1f} points",
                score=recent_avg,
                threshold=older_avg,
                trend=decline,
            )
        )
    elif limits.detect_improvement and -decline > limits.decline_margin:
        gain = -decline
        alerts.append(
            InterventionAlert(
                student_id=student_id,
                student_name=student_name,
                alert_type=ALERT_IMPROVEMENT,
                category=category,
                severity=_change_severity(gain, limits),
                message=f"{category} scores have improved by {gain:.1f} points",
                score=recent_avg,
                threshold=older_avg,
                trend=gain,
            )
        )
    return alerts


def _threshold_alert(
    student_id: str,
    student_name: str,
    category: str,
    current: float,
    limits: AlertThresholds,
) -> Optional[InterventionAlert]:
    if current >= limits.low_score:
        return None

    if current < limits.low_score_high:
        severity = "high"
    elif current < limits.low_score_medium:
        severity = "medium"
    else:
        severity = "low"

    return InterventionAlert(
        student_id=student_id,
        student_name=student_name,
        alert_type=ALERT_THRESHOLD,
        category=category,
        severity=severity,
        message=f"{category} score is below threshold ({format_score(current)}/5)",
        score=current,
        threshold=limits.low_score,
        trend=0,
    )


def _change_severity(change: float, limits: AlertThresholds) -> str:
    if change > limits.decline_high:
        return "high"
    if change > limits.decline_medium:
        return "medium"
    return "low"


def format_score(score: float) -> str:
    """Render a score without a trailing `.0` (2.0 -> "2", 2.49 -> "2.49")."""

    if float(score).is_integer():
        return str(int(score))
    return repr(float(score))
