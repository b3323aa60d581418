"""
Capacity projection

Purpose:
- Fit a recency-weighted linear trend to the last three weeks of daily
  capacity and project it six weeks forward

Important:
- Only a downward trend produces a result; flat or rising trends return None
- Weights decay by 0.95 per day back from the most recent day
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from capacity_artifacts.dynamic.models import STATE_PERCENT, CapacityLog
from capacity_artifacts.utils.formatting import round_half_up
from capacity_artifacts.utils.logger import get_logger

logger = get_logger(__name__)

PROJECTION_DAYS = 42
CRITICAL_THRESHOLD = 33     # depleted zone boundary, percent scale
MIN_INPUT_DAYS = 14
MAX_INPUT_DAYS = 30
PREFERRED_INPUT_DAYS = 21
DECAY = 0.95
FLAT_SLOPE = -0.15          # points per day; anything above is not a decline


@dataclass(frozen=True)
class ProjectionResult:
    projected_points: Tuple[int, ...]
    weeks_to_critical: Optional[float]
    trend_rate: float               # points per week
    slope: float                    # points per day
    intercept: float
    input_days: int


def _round_to(value: float, places: int) -> float:
    factor = 10 ** places
    return round_half_up(value * factor) / factor


def weighted_trend(values: Sequence[float]) -> Tuple[float, float]:
    """(slope, intercept) of y = slope * day_index + intercept."""
    y = np.asarray(values, dtype=float)
    n = len(y)
    if n == 0:
        return 0.0, 50.0
    if n == 1:
        return 0.0, float(y[0])

    x = np.arange(n, dtype=float)
    w = DECAY ** (n - 1 - x)

    sum_w = w.sum()
    sum_wx = (w * x).sum()
    sum_wy = (w * y).sum()
    denominator = sum_w * (w * x * x).sum() - sum_wx ** 2
    if abs(denominator) < 1e-10:
        return 0.0, float(y.mean())

    slope = (sum_w * (w * x * y).sum() - sum_wx * sum_wy) / denominator
    intercept = (sum_wy - slope * sum_wx) / sum_w
    return float(slope), float(intercept)


def _recent_daily_values(logs: Sequence[CapacityLog], reference: date) -> list:
    cutoff = reference - timedelta(days=MAX_INPUT_DAYS)
    df = pd.DataFrame(
        {
            "local_date": [log.local_date for log in logs],
            "percent": [STATE_PERCENT[log.state] for log in logs],
        },
        columns=["local_date", "percent"],
    )
    df = df[(df["local_date"] >= cutoff) & (df["local_date"] <= reference)]
    if df.empty:
        return []
    return df.groupby("local_date", sort=True)["percent"].mean().tolist()


def compute_projection(
    logs: Sequence[CapacityLog],
    window_end: Optional[date] = None,
) -> Optional[ProjectionResult]:
    """
    Project the recent trend of `logs` ending at `window_end` (today when
    omitted). Returns None with fewer than 14 logging days or no decline.
    """
    daily = _recent_daily_values(logs, window_end or date.today())
    if len(daily) < MIN_INPUT_DAYS:
        return None

    values = daily[-PREFERRED_INPUT_DAYS:]
    slope, intercept = weighted_trend(values)
    if slope > FLAT_SLOPE:
        return None

    last = len(values) - 1
    projected = tuple(
        max(0, min(100, round_half_up(slope * (last + i) + intercept)))
        for i in range(1, PROJECTION_DAYS + 1)
    )

    weeks_to_critical = None
    for i, value in enumerate(projected):
        if value <= CRITICAL_THRESHOLD:
            weeks_to_critical = _round_to((i + 1) / 7, 1)
            break

    logger.info("Projection | slope=%.3f/day weeks_to_critical=%s", slope, weeks_to_critical)

    return ProjectionResult(
        projected_points=projected,
        weeks_to_critical=weeks_to_critical,
        trend_rate=_round_to(slope * 7, 1),
        slope=_round_to(slope, 3),
        intercept=_round_to(intercept, 1),
        input_days=len(values),
    )
