# ABOUTME: Generates a demo cohort of eight students observed weekly for six weeks.
# ABOUTME: Score patterns cover declining, improving, steady, and struggling students.

from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from .schemas import CATEGORY_NAMES, SCORE_MAX, SCORE_MIN, CategoryScore, ObservationRecord

SAMPLE_STUDENTS = (
    ("1", "Sarah Johnson"),
    ("2", "Mike Chen"),
    ("3", "Emma Davis"),
    ("4", "Alex Rodriguez"),
    ("5", "Jordan Smith"),
    ("6", "Sophia Williams"),
    ("7", "Lucas Brown"),
    ("8", "Olivia Garcia"),
)

WEEKS = 6

_AVERAGE_PATTERN = {
    "Cognitive Skills": [3.0, 3.1, 3.2, 3.1, 3.3, 3.2],
    "Social Skills": [3.2, 3.3, 3.4, 3.3, 3.5, 3.4],
    "Emotional Readiness": [3.1, 3.2, 3.3, 3.2, 3.4, 3.3],
    "Communication": [3.3, 3.4, 3.5, 3.4, 3.6, 3.5],
    "Creativity": [3.4, 3.5, 3.6, 3.5, 3.7, 3.6],
}

SCORE_PATTERNS: Dict[str, Dict[str, List[float]]] = {
    # Sarah: high performer, slight decline
    "1": {
        "Cognitive Skills": [4.2, 4.1, 4.0, 3.8, 3.7, 3.5],
        "Social Skills": [4.5, 4.4, 4.3, 4.2, 4.1, 4.0],
        "Emotional Readiness": [4.0, 3.9, 3.8, 3.7, 3.6, 3.5],
        "Communication": [4.3, 4.2, 4.1, 4.0, 3.9, 3.8],
        "Creativity": [4.1, 4.0, 3.9, 3.8, 3.7, 3.6],
    },
    # Mike: struggling
    "2": {
        "Cognitive Skills": [2.1, 2.0, 1.9, 1.8, 1.7, 1.6],
        "Social Skills": [2.5, 2.4, 2.3, 2.2, 2.1, 2.0],
        "Emotional Readiness": [2.0, 1.9, 1.8, 1.7, 1.6, 1.5],
        "Communication": [2.3, 2.2, 2.1, 2.0, 1.9, 1.8],
        "Creativity": [2.8, 2.7, 2.6, 2.5, 2.4, 2.3],
    },
    # Emma: improving
    "3": {
        "Cognitive Skills": [2.5, 2.7, 2.9, 3.1, 3.3, 3.5],
        "Social Skills": [3.0, 3.2, 3.4, 3.6, 3.8, 4.0],
        "Emotional Readiness": [2.8, 3.0, 3.2, 3.4, 3.6, 3.8],
        "Communication": [2.9, 3.1, 3.3, 3.5, 3.7, 3.9],
        "Creativity": [3.2, 3.4, 3.6, 3.8, 4.0, 4.2],
    },
    # Alex: consistent
    "4": {
        "Cognitive Skills": [3.5, 3.6, 3.5, 3.7, 3.6, 3.8],
        "Social Skills": [3.8, 3.9, 3.8, 4.0, 3.9, 4.1],
        "Emotional Readiness": [3.6, 3.7, 3.6, 3.8, 3.7, 3.9],
        "Communication": [3.7, 3.8, 3.7, 3.9, 3.8, 4.0],
        "Creativity": [3.9, 4.0, 3.9, 4.1, 4.0, 4.2],
    },
    # Jordan: declining
    "5": {
        "Cognitive Skills": [3.8, 3.6, 3.4, 3.2, 3.0, 2.8],
        "Social Skills": [4.0, 3.8, 3.6, 3.4, 3.2, 3.0],
        "Emotional Readiness": [3.5, 3.3, 3.1, 2.9, 2.7, 2.5],
        "Communication": [3.7, 3.5, 3.3, 3.1, 2.9, 2.7],
        "Creativity": [3.9, 3.7, 3.5, 3.3, 3.1, 2.9],
    },
    # Sophia: high performer
    "6": {
        "Cognitive Skills": [4.5, 4.6, 4.7, 4.8, 4.9, 5.0],
        "Social Skills": [4.3, 4.4, 4.5, 4.6, 4.7, 4.8],
        "Emotional Readiness": [4.4, 4.5, 4.6, 4.7, 4.8, 4.9],
        "Communication": [4.2, 4.3, 4.4, 4.5, 4.6, 4.7],
        "Creativity": [4.6, 4.7, 4.8, 4.9, 5.0, 5.0],
    },
    # Lucas: average
    "7": _AVERAGE_PATTERN,
    # Olivia: struggling but improving
    "8": {
        "Cognitive Skills": [2.0, 2.2, 2.4, 2.6, 2.8, 3.0],
        "Social Skills": [2.5, 2.7, 2.9, 3.1, 3.3, 3.5],
        "Emotional Readiness": [2.2, 2.4, 2.6, 2.8, 3.0, 3.2],
        "Communication": [2.3, 2.5, 2.7, 2.9, 3.1, 3.3],
        "Creativity": [2.8, 3.0, 3.2, 3.4, 3.6, 3.8],
    },
}

CATEGORY_TAGS = {
    "Cognitive Skills": "Problem-Solving",
    "Social Skills": "Teamwork",
    "Emotional Readiness": "Confident",
    "Communication": "Articulate",
    "Creativity": "Creative",
}

LEVEL_TAGS = {
    "high": ["Excellent", "Engaged", "Independent"],
    "medium": ["Good", "Attentive", "Collaborative"],
    "low": ["Needs Help", "Struggling", "Distracted"],
}

OBSERVATION_TEXT = {
    "Cognitive Skills": {
        "high": ["Demonstrated excellent problem-solving skills during math activities",
                 "Showed strong critical thinking when analyzing complex problems"],
        "medium": ["Generally understands concepts with some guidance",
                   "Shows good problem-solving skills with occasional support"],
        "low": ["Struggles with basic problem-solving tasks",
                "Needs constant guidance for complex problem-solving"],
    },
    "Social Skills": {
        "high": ["Excellent collaboration skills during group activities",
                 "Demonstrates strong leadership qualities in team settings"],
        "medium": ["Works well with others in familiar group settings",
                   "Shows good cooperation skills with some guidance"],
        "low": ["Struggles with peer interactions and collaboration",
                "Needs guidance for social interactions"],
    },
    "Emotional Readiness": {
        "high": ["Shows excellent emotional regulation and self-awareness",
                 "Demonstrates strong resilience and confidence"],
        "medium": ["Generally manages emotions well in most situations",
                   "Demonstrates reasonable emotional regulation"],
        "low": ["Struggles with emotional regulation and self-control",
                "Requires support for emotional management"],
    },
    "Communication": {
        "high": ["Excellent verbal and written communication skills",
                 "Demonstrates strong presentation abilities"],
        "medium": ["Generally communicates clearly in familiar contexts",
                   "Shows good listening skills with some support"],
        "low": ["Struggles with verbal expression and communication",
                "Has difficulty with listening and articulation"],
    },
    "Creativity": {
        "high": ["Demonstrates exceptional creative thinking and imagination",
                 "Shows outstanding artistic expression and innovation"],
        "medium": ["Shows good creativity in familiar contexts",
                   "Displays solid creative problem-solving skills"],
        "low": ["Struggles with creative expression and imagination",
                "Requires support for creative activities"],
    },
}


def score_level(score: float) -> str:
    if score >= 4:
        return "high"
    if score >= 2.5:
        return "medium"
    return "low"


def weekly_timestamps(now: datetime, weeks: int = WEEKS) -> List[datetime]:
    """Oldest first: now - 7*(weeks-1) days ... now."""

    return [now - timedelta(days=7 * i) for i in range(weeks - 1, -1, -1)]


def generate_demo_observations(
    now: datetime,
    seed: Optional[int] = None,
    observations_per_week: Optional[int] = None,
    jitter: float = 0.5,
    students: Sequence[tuple] = SAMPLE_STUDENTS,
) -> List[ObservationRecord]:
    """
    Build the demo cohort, newest observations first.

    Each (student, week, category) gets `observations_per_week` records, or a
    random 2-3 when left unset. Scores are the pattern value plus uniform
    noise of total width `jitter`, clamped to the 1-5 scale.
    """

    rng = random.Random(seed)
    records: List[ObservationRecord] = []
    for student_id, student_name in students:
        pattern = SCORE_PATTERNS.get(student_id, _AVERAGE_PATTERN)
        for week_index, timestamp in enumerate(weekly_timestamps(now)):
            for category in CATEGORY_NAMES:
                base = pattern[category][week_index]
                count = observations_per_week if observations_per_week is not None else rng.randint(2, 3)
                for obs in range(count):
                    score = base + (rng.random() - 0.5) * jitter if jitter else base
                    score = max(SCORE_MIN, min(SCORE_MAX, score))
                    level = score_level(base)
                    records.append(
                        ObservationRecord(
                            id=f"{student_id}-{week_index}-{category}-{obs}",
                            student_id=student_id,
                            student_name=student_name,
                            timestamp=timestamp,
                            categories=(
                                CategoryScore(
                                    category=category,
                                    score=score,
                                    is_auto_suggested=rng.random() > 0.3,
                                ),
                            ),
                            tags=tuple(LEVEL_TAGS[level][:2] + [CATEGORY_TAGS[category]]),
                            observation=rng.choice(OBSERVATION_TEXT[category][level]),
                        )
                    )

    # Stable sort keeps generation order among records sharing a week.
    records.sort(key=lambda r: r.timestamp, reverse=True)
    return records
