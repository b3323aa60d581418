from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Tuple

from capacity_artifacts.models.capacity import ZoneBand


class WindowStatus(Enum):
    OPEN = "open"
    CLOSED = "closed"


class ContinuityRating(Enum):
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"


# Check-in state -> percent scale sample
STATE_PERCENT = {
    ZoneBand.RESOURCED: 100.0,
    ZoneBand.STRETCHED: 50.0,
    ZoneBand.DEPLETED: 0.0,
}


@dataclass(frozen=True)
class CapacityLog:
    """One self-reported check-in."""
    local_date: date
    state: ZoneBand


@dataclass(frozen=True)
class ComputeConfig:
    window_start: date
    window_end: date
    minimum_days: int = 90          # unique logging days required
    subject_id_seed: str = "default"

    def __post_init__(self):
        if self.window_end < self.window_start:
            raise ValueError(
                f"Observation window ends ({self.window_end}) before it starts ({self.window_start})"
            )


@dataclass(frozen=True)
class MonthlyBreakdown:
    month: str                      # YYYY-MM
    signal_count: int
    stability: int                  # 0-100
    volatility: int
    distribution: Dict[ZoneBand, int] = field(default_factory=dict)


@dataclass(frozen=True)
class DynamicData:
    observation_start: date
    observation_end: date
    window_status: WindowStatus

    subject_id: str

    total_days_in_window: int
    days_with_entries: int
    tracking_continuity_percent: int
    tracking_continuity_rating: ContinuityRating

    pattern_stability_percent: int
    volatility_raw: float

    verdict: str

    chart_values: Tuple[float, ...]
    x_labels: Tuple[str, str, str]

    monthly_breakdown: Tuple[MonthlyBreakdown, ...]
    overall_distribution: Dict[ZoneBand, int]
    total_signals: int
