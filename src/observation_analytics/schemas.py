# ABOUTME: Defines the observation record schema consumed by the analytics engine.
# ABOUTME: Centralizes derived trend, peer, alert, recommendation, and summary types.

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

CATEGORY_NAMES: Tuple[str, ...] = (
    "Cognitive Skills",
    "Social Skills",
    "Emotional Readiness",
    "Communication",
    "Creativity",
)

SCORE_MIN = 1.0
SCORE_MAX = 5.0

SEVERITY_ORDER: Dict[str, int] = {"high": 3, "medium": 2, "low": 1}

ALERT_DECLINE = "decline"
ALERT_THRESHOLD = "threshold"
ALERT_IMPROVEMENT = "improvement"


@dataclass(frozen=True)
class CategoryScore:
    """One category rating (1-5 scale) attached to an observation."""

    category: str
    score: float
    is_auto_suggested: bool = False


@dataclass(frozen=True)
class ObservationRecord:
    """Teacher-authored, timestamped observation about one student."""

    id: str
    student_id: str
    student_name: str
    timestamp: datetime
    categories: Tuple[CategoryScore, ...] = ()
    tags: Tuple[str, ...] = ()
    observation: str = ""


@dataclass
class TrendData:
    period: str
    scores: Dict[str, float]
    total_observations: int
    granularity: str


@dataclass
class PeerComparison:
    student_id: str
    student_name: str
    category_averages: Dict[str, float]
    percentile: Dict[str, int] = field(default_factory=dict)
    overall_percentile: int = 0


@dataclass
class InterventionAlert:
    student_id: str
    student_name: str
    alert_type: str
    category: str
    severity: str
    message: str
    score: float
    threshold: float
    trend: float


@dataclass
class Recommendation:
    student_id: str
    student_name: str
    category: str
    recommendation: str
    activity: str
    resources: List[str]
    priority: str


@dataclass
class StudentSummary:
    """Roster-level view of one student's observation history."""

    student_id: str
    student_name: str
    observation_count: int
    last_observation: Optional[datetime]
    common_tags: List[str]
    category_averages: Dict[str, float]
