# ABOUTME: Reads and writes observation records in the web app's camelCase JSON shape.
# ABOUTME: Validates records at the boundary so the analytics passes can trust their input.

from __future__ import annotations

import json
import re
from dataclasses import asdict, is_dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Sequence

import pandas as pd

from .schemas import SCORE_MAX, SCORE_MIN, CategoryScore, ObservationRecord

REQUIRED_FIELDS = ("id", "studentId", "studentName", "timestamp")
ISO_TIMESTAMP = re.compile(r"\d{4}-\d{2}-\d{2}([T ]\d{2}:\d{2}\S*)?")


class ObservationFormatError(ValueError):
    """Raised when a stored observation cannot be turned into an ObservationRecord."""


def load_observations(path: Path) -> List[ObservationRecord]:
    with open(path, encoding="utf-8") as f:
        try:
            rows = json.load(f)
        except json.JSONDecodeError as exc:
            raise ObservationFormatError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(rows, list):
        raise ObservationFormatError(f"{path} must contain a JSON list of observations.")
    return parse_observations(rows)


def parse_observations(rows: Iterable[Mapping[str, Any]]) -> List[ObservationRecord]:
    return [_parse_row(position, row) for position, row in enumerate(rows)]


def _parse_row(position: int, row: Mapping[str, Any]) -> ObservationRecord:
    if not isinstance(row, Mapping):
        raise ObservationFormatError(f"Observation #{position} is not an object.")
    missing = [name for name in REQUIRED_FIELDS if row.get(name) in (None, "")]
    if missing:
        raise ObservationFormatError(f"Observation #{position} is missing: {', '.join(missing)}.")

    timestamp = _parse_timestamp(position, row["timestamp"])

    categories = []
    for entry in row.get("categories") or []:
        try:
            score = float(entry["score"])
            category = str(entry["category"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ObservationFormatError(f"Observation #{position} has a malformed category entry {entry!r}.") from exc
        if not SCORE_MIN <= score <= SCORE_MAX:
            raise ObservationFormatError(
                f"Observation #{position} scores {category!r} at {score}, outside {SCORE_MIN:g}-{SCORE_MAX:g}."
            )
        categories.append(
            CategoryScore(
                category=category,
                score=score,
                is_auto_suggested=bool(entry.get("isAutoSuggested", False)),
            )
        )

    return ObservationRecord(
        id=str(row["id"]),
        student_id=str(row["studentId"]),
        student_name=str(row["studentName"]),
        timestamp=timestamp,
        categories=tuple(categories),
        tags=tuple(str(tag) for tag in row.get("tags") or []),
        observation=str(row.get("observation") or ""),
    )


def _parse_timestamp(position: int, value: Any) -> datetime:
    # Only ISO 8601 strings; pandas would otherwise accept words like "now" or "NaT".
    problem = f"Observation #{position} has an unparseable timestamp {value!r}."
    if not isinstance(value, str) or not ISO_TIMESTAMP.fullmatch(value.strip()):
        raise ObservationFormatError(problem)
    try:
        stamp = pd.Timestamp(value.strip())
    except (TypeError, ValueError) as exc:
        raise ObservationFormatError(problem) from exc
    if pd.isna(stamp):
        raise ObservationFormatError(problem)
    return stamp.to_pydatetime()


def dump_observations(records: Sequence[ObservationRecord], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(to_rows(records), indent=2), encoding="utf-8")


def to_rows(items: Iterable[Any]) -> List[Dict[str, Any]]:
    """Convert dataclass instances into camelCase dictionaries for JSON consumers."""

    return [_camelize(asdict(item)) for item in items if is_dataclass(item)]


def to_frame(items: Iterable[Any]) -> pd.DataFrame:
    return pd.DataFrame([asdict(item) for item in items if is_dataclass(item)])


def _camelize(value: Any) -> Any:
    if isinstance(value, dict):
        return {_camel_key(k): _plain(v) for k, v in value.items()}
    return _plain(value)


def _plain(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_camelize(v) for v in value]
    return value


def _camel_key(key: str) -> str:
    # Only snake_case field names are rewritten; category names keep their spaces.
    if " " in key or "_" not in key:
        return key
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)
