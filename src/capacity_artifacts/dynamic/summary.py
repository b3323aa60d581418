"""
Session summary paragraph

Template expansion over computed DynamicData: status, trend direction,
dominant pattern and recovery are picked from fixed phrase tables, then
joined into three or four sentences. No free text is generated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Tuple

from capacity_artifacts.dynamic.models import DynamicData
from capacity_artifacts.dynamic.projection import ProjectionResult
from capacity_artifacts.models.capacity import ZoneBand
from capacity_artifacts.utils.formatting import round_half_up


class TrendDirection(Enum):
    STABLE = "stable"
    VARIABLE = "variable"
    SHIFTING = "shifting"


@dataclass(frozen=True)
class NarrativeSummary:
    status: str
    trend_direction: TrendDirection
    dominant_pattern: str
    recovery_assessment: str
    baseline: int
    summary: str


def _shares(distribution: Mapping[ZoneBand, int]) -> Tuple[float, float, float, int]:
    """(resourced, stretched, depleted) fractions and the total count."""
    total = sum(distribution.get(band, 0) for band in ZoneBand)
    if total == 0:
        return 0.0, 0.0, 0.0, 0
    return (
        distribution.get(ZoneBand.RESOURCED, 0) / total,
        distribution.get(ZoneBand.STRETCHED, 0) / total,
        distribution.get(ZoneBand.DEPLETED, 0) / total,
        total,
    )


# ------------------------------------------------------------
# Phrase selection
# ------------------------------------------------------------
def resolve_status(distribution: Mapping[ZoneBand, int]) -> str:
    resourced, stretched, depleted, total = _shares(distribution)
    if total == 0:
        return "undetermined"
    if resourced >= 0.5:
        return "predominantly resourced"
    if depleted >= 0.4:
        return "frequently near capacity limits"
    if stretched >= 0.5:
        return "consistently stretched"
    if resourced >= 0.3 and stretched >= 0.3:
        return "mixed between resourced and stretched"
    return "variable across states"


def resolve_trend_direction(stability: int) -> TrendDirection:
    if stability >= 75:
        return TrendDirection.STABLE
    if stability >= 45:
        return TrendDirection.VARIABLE
    return TrendDirection.SHIFTING


def resolve_dominant_pattern(distribution: Mapping[ZoneBand, int], stability: int) -> str:
    resourced, _, depleted, total = _shares(distribution)
    if total == 0:
        return "insufficient data"
    if stability >= 75 and resourced >= 0.5:
        return "sustained capacity with consistent patterns"
    if stability >= 75 and depleted >= 0.3:
        return "persistent low capacity with limited variability"
    if stability < 45:
        return "high day-to-day fluctuation in reported capacity"
    if depleted >= 0.4:
        return "recurrent capacity reduction episodes"
    if resourced < 0.2 and depleted < 0.2:
        return "mid-range capacity with moderate variation"
    return "mixed capacity patterns across the observation period"


def resolve_recovery_assessment(distribution: Mapping[ZoneBand, int], stability: int) -> str:
    resourced, _, depleted, total = _shares(distribution)
    if total == 0:
        return "not assessable"
    if resourced >= 0.5 and depleted < 0.15:
        return "appears consistent with available resources for recovery"
    if resourced >= 0.3 and depleted < 0.3:
        return "shows periods of recovery interspersed with elevated load"
    if depleted >= 0.4 and stability < 50:
        return "suggests limited recovery windows with sustained load"
    if depleted >= 0.3:
        return "indicates reduced capacity for self-regulation recovery"
    return "reflects a mixed recovery pattern warranting further observation"


def baseline_percent(distribution: Mapping[ZoneBand, int]) -> int:
    """Mean check-in value on the percent scale (50 with no entries)."""
    total = sum(distribution.get(band, 0) for band in ZoneBand)
    if total == 0:
        return 50
    weighted = distribution.get(ZoneBand.RESOURCED, 0) * 100 + distribution.get(ZoneBand.STRETCHED, 0) * 50
    return round_half_up(weighted / total)


# ------------------------------------------------------------
# Entry point
# ------------------------------------------------------------
def generate_summary(
    data: DynamicData,
    projection: Optional[ProjectionResult] = None,
    top_driver: Optional[str] = None,
) -> NarrativeSummary:
    distribution = data.overall_distribution
    stability = data.pattern_stability_percent

    status = resolve_status(distribution)
    trend = resolve_trend_direction(stability)
    pattern = resolve_dominant_pattern(distribution, stability)
    recovery = resolve_recovery_assessment(distribution, stability)
    baseline = baseline_percent(distribution)

    sentences = [
        f"Over the past {data.total_days_in_window} days, this individual's capacity has been "
        f"{status} with a {trend.value} stability trend ({stability}/100, from {baseline}% baseline).",
        f"The primary pattern is {pattern}, with recovery that {recovery}.",
        f"The most frequently reported load factor is {top_driver}."
        if top_driver else "No single load factor predominates in the reported data.",
    ]
    if projection is not None and projection.weeks_to_critical is not None:
        sentences.append(
            "Current trajectory suggests capacity may reach a critical threshold within "
            f"approximately {projection.weeks_to_critical:g} weeks if present patterns continue."
        )

    return NarrativeSummary(
        status=status,
        trend_direction=trend,
        dominant_pattern=pattern,
        recovery_assessment=recovery,
        baseline=baseline,
        summary=" ".join(sentences),
    )
