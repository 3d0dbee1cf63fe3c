# ABOUTME: Maps observation timestamps to calendar week and month bucket keys.
# ABOUTME: Week numbers are a per-month counter, not ISO weeks, and restart every month.

from __future__ import annotations

import math
from datetime import datetime
from typing import Tuple

import pandas as pd


def localize(ts: datetime, timezone: str = "UTC") -> pd.Timestamp:
    """Express an instant in the bucketing zone; naive values are taken as already local."""

    stamp = pd.Timestamp(ts)
    if stamp.tzinfo is None:
        return stamp
    return stamp.tz_convert(timezone)


def to_utc(ts: datetime, timezone: str = "UTC") -> pd.Timestamp:
    """
    Pin a timestamp to UTC, reading naive values as wall-clock time in `timezone`.

    Wall-clock times skipped by a DST jump move forward to the first valid
    instant; repeated times resolve to the standard-time (second) occurrence.
    """

    stamp = pd.Timestamp(ts)
    if stamp.tzinfo is None:
        stamp = stamp.tz_localize(timezone, ambiguous=False, nonexistent="shift_forward")
    return stamp.tz_convert("UTC")


def month_key(ts: datetime, timezone: str = "UTC") -> str:
    stamp = localize(ts, timezone)
    return f"{stamp.year}-{stamp.month:02d}"


def week_key(ts: datetime, timezone: str = "UTC") -> str:
    """
    Week-of-month key `YYYY-WNN`.

    NN = ceil((day_of_month + weekday_of_month_start) / 7) with Sunday as weekday 0,
    so keys collide across months (every month has a W01).
    """

    stamp = localize(ts, timezone)
    month_start = pd.Timestamp(year=stamp.year, month=stamp.month, day=1)
    offset = (month_start.dayofweek + 1) % 7
    week = math.ceil((stamp.day + offset) / 7)
    return f"{stamp.year}-W{week:02d}"


def period_sort_key(period: str) -> Tuple[int, pd.Timestamp, str]:
    """
    Order periods by parsing the key as a date.

    Month keys parse to the first of the month. Week keys do not parse as dates;
    they sort ahead of every month key, ordered by key text among themselves
    (not by first appearance) so the output does not depend on input order.
    """

    parsed = pd.to_datetime(period, format="%Y-%m", errors="coerce")
    if pd.isna(parsed):
        return (0, pd.Timestamp.min, period)
    return (1, parsed, period)
