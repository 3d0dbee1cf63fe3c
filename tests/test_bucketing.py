# ABOUTME: Tests week and month bucket keys used by the trend aggregator.
# ABOUTME: Documents the per-month week counter, which is not an ISO week number.

from datetime import datetime, timezone

from src.observation_analytics.bucketing import month_key, period_sort_key, to_utc, week_key


def test_month_key_zero_pads_month():
    assert month_key(datetime(2024, 3, 7, 12, 0)) == "2024-03"
    assert month_key(datetime(2024, 11, 30, 23, 59)) == "2024-11"


def test_week_key_counts_from_weekday_of_month_start():
    # March 2024 starts on a Friday (offset 5 with Sunday = 0).
    assert week_key(datetime(2024, 3, 1)) == "2024-W01"
    assert week_key(datetime(2024, 3, 2)) == "2024-W01"
    assert week_key(datetime(2024, 3, 3)) == "2024-W02"
    assert week_key(datetime(2024, 3, 31)) == "2024-W06"


def test_week_key_restarts_every_month_and_collides_across_months():
    # Documented behavior: week numbers are per month, so different months share keys.
    assert week_key(datetime(2024, 4, 1)) == "2024-W01"
    assert week_key(datetime(2024, 3, 1)) == week_key(datetime(2024, 4, 1))
    # An ISO week number would be 14 here.
    assert week_key(datetime(2024, 4, 1)) != "2024-W14"


def test_buckets_use_configured_timezone_for_aware_timestamps():
    instant = datetime(2024, 4, 1, 2, 0, tzinfo=timezone.utc)

    assert month_key(instant) == "2024-04"
    assert month_key(instant, "America/New_York") == "2024-03"
    assert week_key(instant, "America/New_York") == "2024-W06"


def test_period_sort_key_places_week_keys_before_parsed_months():
    periods = ["2024-04", "2024-W02", "2024-03", "2024-W01"]

    assert sorted(periods, key=period_sort_key) == ["2024-W01", "2024-W02", "2024-03", "2024-04"]


def test_naive_time_skipped_by_spring_forward_shifts_to_next_valid_instant():
    # 02:30 does not exist in New York on 2024-03-10; clocks jump from 02:00 to 03:00 EDT.
    stamp = to_utc(datetime(2024, 3, 10, 2, 30), "America/New_York")

    assert stamp == datetime(2024, 3, 10, 7, 0, tzinfo=timezone.utc)
    assert week_key(datetime(2024, 3, 10, 2, 30), "America/New_York") == "2024-W03"


def test_naive_time_repeated_by_fall_back_reads_as_standard_time():
    stamp = to_utc(datetime(2024, 11, 3, 1, 30), "America/New_York")

    assert stamp == datetime(2024, 11, 3, 6, 30, tzinfo=timezone.utc)
