"""
Dynamic narrative computation

Purpose:
- Turn raw check-ins into the numbers behind a single-subject narrative
- Continuity, stability, verdict, chart values, monthly breakdown

Important:
- Pure: the only "now" is the `today` argument
- Missing days are excluded, never interpolated
- Days with several check-ins contribute their mean
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from capacity_artifacts.charts.downsampler import downsample
from capacity_artifacts.exceptions import InsufficientDataError
from capacity_artifacts.dynamic.models import (
    STATE_PERCENT,
    CapacityLog,
    ComputeConfig,
    ContinuityRating,
    DynamicData,
    MonthlyBreakdown,
    WindowStatus,
)
from capacity_artifacts.models.capacity import ZoneBand
from capacity_artifacts.models.render_config import DEFAULT_CONFIG, RenderConfig
from capacity_artifacts.utils.formatting import round_half_up
from capacity_artifacts.utils.logger import get_logger

logger = get_logger(__name__)

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

HIGH_CONTINUITY = 70
MODERATE_CONTINUITY = 40


def _frame(logs: Sequence[CapacityLog]) -> pd.DataFrame:
    df = pd.DataFrame(
        {
            "local_date": [log.local_date for log in logs],
            "state": [log.state for log in logs],
        },
        columns=["local_date", "state"],
    )
    df["percent"] = df["state"].map(STATE_PERCENT).astype(float)
    df["month"] = [d.strftime("%Y-%m") for d in df["local_date"]]
    return df


def _in_window(df: pd.DataFrame, start: date, end: date) -> pd.DataFrame:
    mask = (df["local_date"] >= start) & (df["local_date"] <= end)
    return df.loc[mask]


def _daily_values(df: pd.DataFrame) -> List[float]:
    if df.empty:
        return []
    return df.groupby("local_date", sort=True)["percent"].mean().tolist()


def _distribution(df: pd.DataFrame) -> dict:
    counts = df["state"].value_counts()
    return {band: int(counts.get(band, 0)) for band in ZoneBand}


# ------------------------------------------------------------
# Metrics
# ------------------------------------------------------------
def tracking_continuity(days_with_entries: int, total_days: int) -> Tuple[int, ContinuityRating]:
    percent = round_half_up(days_with_entries / total_days * 100) if total_days > 0 else 0
    percent = max(0, min(100, percent))

    if percent >= HIGH_CONTINUITY:
        rating = ContinuityRating.HIGH
    elif percent >= MODERATE_CONTINUITY:
        rating = ContinuityRating.MODERATE
    else:
        rating = ContinuityRating.LOW
    return percent, rating


def pattern_stability(daily_values: Sequence[float]) -> Tuple[int, float]:
    """
    100 minus the mean absolute day-to-day change (percent scale).
    Returns (stability 0-100, raw volatility rounded to 2 decimals).
    """
    if len(daily_values) < 2:
        volatility = 0.0
    else:
        volatility = float(pd.Series(daily_values).diff().abs().iloc[1:].mean())

    stability = round_half_up(100 - min(100.0, volatility))
    return max(0, min(100, stability)), round_half_up(volatility * 100) / 100


def verdict_for(stability: int, continuity: int) -> str:
    if continuity < MODERATE_CONTINUITY:
        return "Insufficient Observation"

    full = continuity >= HIGH_CONTINUITY
    if stability >= 80:
        return "Interpretable Capacity Trends" if full else "Partial Capacity Trends"
    if stability >= 50:
        return "Variable Capacity Patterns" if full else "Partial Capacity Patterns"
    return "Highly Variable Capacity" if full else "Insufficient Stability"


def anonymized_subject_id(seed: str) -> str:
    """
    Deterministic NNNNN-AAA id from a seed (32-bit rolling string hash).
    Not cryptographic; only stable.
    """
    h = 0
    for ch in seed:
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000

    positive = abs(h)
    digits = f"{positive % 100000:05d}"
    letters = "".join(
        chr(65 + value % 26) for value in (positive, abs(h >> 8), abs(h >> 16))
    )
    return f"{digits}-{letters}"


def month_labels(start: date, end: date) -> Tuple[str, str, str]:
    """Three x-axis labels: every month when <= 3, else first/middle/last."""
    months = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        months.append(MONTH_ABBR[month - 1])
        month += 1
        if month > 12:
            month, year = 1, year + 1

    if len(months) <= 3:
        while len(months) < 3:
            months.append(months[-1])
        return months[0], months[1], months[2]

    return months[0], months[len(months) // 2], months[-1]


def monthly_breakdown(df: pd.DataFrame) -> Tuple[MonthlyBreakdown, ...]:
    rows = []
    for month, month_df in df.groupby("month", sort=True):
        stability, volatility = pattern_stability(_daily_values(month_df))
        rows.append(MonthlyBreakdown(
            month=month,
            signal_count=len(month_df),
            stability=stability,
            volatility=round_half_up(volatility),
            distribution=_distribution(month_df),
        ))
    return tuple(rows)


def chart_values(
    daily_values: Sequence[float],
    config: RenderConfig = DEFAULT_CONFIG,
) -> Tuple[float, ...]:
    required = config.downsample.target_count
    if len(daily_values) < required:
        raise InsufficientDataError(
            f"{len(daily_values)} logging days cannot fill a {required}-point chart",
            available=len(daily_values),
            required=required,
        )
    return tuple(
        float(max(0, min(100, round_half_up(v))))
        for v in downsample(daily_values, config=config)
    )


# ------------------------------------------------------------
# Entry point
# ------------------------------------------------------------
def compute_dynamic_data(
    logs: Sequence[CapacityLog],
    compute_config: ComputeConfig,
    today: Optional[date] = None,
    config: RenderConfig = DEFAULT_CONFIG,
) -> DynamicData:
    """
    Compute the narrative numbers for the check-ins inside the window.

    Raises InsufficientDataError when fewer than `minimum_days` distinct
    days have an entry.
    """
    df = _in_window(_frame(logs), compute_config.window_start, compute_config.window_end)

    logging_days = df["local_date"].nunique()
    if logging_days < compute_config.minimum_days:
        raise InsufficientDataError(
            f"Only {logging_days} logging days in window; {compute_config.minimum_days} required",
            available=int(logging_days),
            required=compute_config.minimum_days,
        )

    if df.empty:
        start, end = compute_config.window_start, compute_config.window_end
    else:
        start, end = min(df["local_date"]), max(df["local_date"])

    today = today or date.today()
    status = WindowStatus.CLOSED if end < today else WindowStatus.OPEN

    total_days = (end - start).days + 1
    continuity, rating = tracking_continuity(int(logging_days), total_days)

    daily = _daily_values(df)
    stability, volatility = pattern_stability(daily)

    logger.info(
        "Dynamic narrative | window=%s..%s days=%d continuity=%d%% stability=%d%%",
        start, end, logging_days, continuity, stability,
    )

    return DynamicData(
        observation_start=start,
        observation_end=end,
        window_status=status,
        subject_id=anonymized_subject_id(compute_config.subject_id_seed),
        total_days_in_window=total_days,
        days_with_entries=int(logging_days),
        tracking_continuity_percent=continuity,
        tracking_continuity_rating=rating,
        pattern_stability_percent=stability,
        volatility_raw=volatility,
        verdict=verdict_for(stability, continuity),
        chart_values=chart_values(daily, config),
        x_labels=month_labels(start, end),
        monthly_breakdown=monthly_breakdown(df),
        overall_distribution=_distribution(df),
        total_signals=len(df),
    )
