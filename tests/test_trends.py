# ABOUTME: Tests week/month trend aggregation over observation records.
# ABOUTME: Checks simple averaging, entry-based counts, filtering, and ordering.

from datetime import datetime

import pytest

from src.observation_analytics.config import AnalyticsConfig
from src.observation_analytics.schemas import CategoryScore, ObservationRecord
from src.observation_analytics.trends import calculate_trends


def _record(record_id, student_id, when, **scores):
    return ObservationRecord(
        id=record_id,
        student_id=student_id,
        student_name=f"Student {student_id}",
        timestamp=when,
        categories=tuple(CategoryScore(name.replace("_", " "), score) for name, score in scores.items()),
    )


def _march_week_two():
    return [
        _record("r1", "s1", datetime(2024, 3, 5, 9), Cognitive_Skills=2, Social_Skills=3),
        _record("r2", "s1", datetime(2024, 3, 6, 9), Cognitive_Skills=4),
        _record("r3", "s1", datetime(2024, 3, 7, 9), Cognitive_Skills=5),
    ]


def test_weekly_average_and_entry_count():
    trends = calculate_trends(_march_week_two())

    assert [(t.period, t.granularity) for t in trends] == [("2024-W02", "week"), ("2024-03", "month")]
    week = trends[0]
    assert week.scores["Cognitive Skills"] == pytest.approx(11 / 3)
    assert week.scores["Social Skills"] == 3
    # Four category scores across three records.
    assert week.total_observations == 4
    assert trends[1].scores == week.scores
    assert trends[1].total_observations == 4


def test_duplicate_categories_in_one_record_are_additive():
    record = ObservationRecord(
        id="dup",
        student_id="s1",
        student_name="Student s1",
        timestamp=datetime(2024, 3, 5),
        categories=(CategoryScore("Creativity", 2), CategoryScore("Creativity", 4)),
    )

    week = calculate_trends([record])[0]
    assert week.scores == {"Creativity": 3}
    assert week.total_observations == 2


def test_student_filter_excludes_other_students():
    records = _march_week_two() + [_record("other", "s2", datetime(2024, 3, 5), Cognitive_Skills=1)]

    filtered = calculate_trends(records, student_id="s1")
    cohort = calculate_trends(records)

    assert filtered[0].scores["Cognitive Skills"] == pytest.approx(11 / 3)
    assert cohort[0].scores["Cognitive Skills"] == pytest.approx(12 / 4)
    assert calculate_trends(records, student_id="") == cohort


def test_records_without_scores_open_empty_buckets():
    record = ObservationRecord(id="x", student_id="s1", student_name="A", timestamp=datetime(2024, 5, 20))

    trends = calculate_trends([record])
    assert [(t.period, t.scores, t.total_observations) for t in trends] == [
        ("2024-W04", {}, 0),
        ("2024-05", {}, 0),
    ]


def test_empty_input_yields_no_trends():
    assert calculate_trends([]) == []
    assert calculate_trends(_march_week_two(), student_id="missing") == []


def test_months_ordered_chronologically_after_week_keys_sorted_by_text():
    records = [
        _record("a", "s1", datetime(2024, 5, 2), Communication=3),
        _record("b", "s1", datetime(2024, 3, 12), Communication=4),
        _record("c", "s1", datetime(2023, 12, 30), Communication=2),
    ]

    periods = [t.period for t in calculate_trends(records)]
    months = [p for p in periods if "W" not in p]
    weeks = [p for p in periods if "W" in p]

    assert months == ["2023-12", "2024-03", "2024-05"]
    assert periods == weeks + months
    assert weeks == sorted(weeks)


def test_naive_timestamps_inside_dst_gap_still_bucket():
    records = [
        _record(f"d{i}", "s1", datetime(2024, 3, 8 + i, 2, 30), Creativity=score)
        for i, score in enumerate([3, 4, 5])
    ]

    trends = calculate_trends(records, config=AnalyticsConfig(timezone="America/New_York"))

    assert [(t.period, t.total_observations) for t in trends] == [
        ("2024-W02", 2),
        ("2024-W03", 1),
        ("2024-03", 3),
    ]
    assert trends[-1].scores == {"Creativity": pytest.approx(4.0)}


def test_week_keys_sort_by_text_regardless_of_first_appearance():
    records = [
        _record("late", "s1", datetime(2024, 3, 20), Communication=3),
        _record("early", "s1", datetime(2024, 3, 5), Communication=4),
    ]

    assert [t.period for t in calculate_trends(records)] == ["2024-W02", "2024-W04", "2024-03"]
