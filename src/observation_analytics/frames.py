# ABOUTME: Flattens observation records into a long score frame (one row per category score).
# ABOUTME: Shared numeric helpers used by every analytics pass live here too.

from __future__ import annotations

import math
from typing import Iterable, Sequence

import pandas as pd

from .bucketing import to_utc
from .schemas import ObservationRecord

SCORE_COLUMNS = [
    "record_position",
    "record_id",
    "student_id",
    "student_name",
    "timestamp",
    "category",
    "score",
]


def observations_to_frame(records: Iterable[ObservationRecord], timezone: str = "UTC") -> pd.DataFrame:
    """
    Explode records into one row per category-score entry.

    Duplicate categories inside a record stay as separate rows, so every
    downstream aggregate counts them additively. `record_position` keeps the
    input order for stable tie-breaks. Timestamps are normalized to UTC, with
    naive values read in `timezone`.
    """

    rows = []
    for position, record in enumerate(records):
        if not record.categories:
            continue
        timestamp = to_utc(record.timestamp, timezone)
        for entry in record.categories:
            rows.append(
                {
                    "record_position": position,
                    "record_id": record.id,
                    "student_id": record.student_id,
                    "student_name": record.student_name,
                    "timestamp": timestamp,
                    "category": entry.category,
                    "score": float(entry.score),
                }
            )

    if not rows:
        return pd.DataFrame(columns=SCORE_COLUMNS)

    df = pd.DataFrame(rows, columns=SCORE_COLUMNS)
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
    return df


def first_seen_students(records: Sequence[ObservationRecord]) -> dict:
    """student_id -> student_name of the first record seen for that student."""

    students: dict = {}
    for record in records:
        students.setdefault(record.student_id, record.student_name)
    return students


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves toward +infinity (2.5 -> 3, -2.5 -> -2) rather than to even."""

    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)
