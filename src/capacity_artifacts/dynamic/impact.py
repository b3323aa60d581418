"""
Functional impact mapping

Purpose:
- Map computed capacity metrics to severity levels per impact domain
- Derive focus targets, observed strengths and recent-pattern descriptors

Important:
- Fixed threshold tables only; same input, same output
- Each derived list is capped at four entries
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from capacity_artifacts.dynamic.models import DynamicData
from capacity_artifacts.dynamic.projection import ProjectionResult
from capacity_artifacts.models.capacity import ZoneBand

MAX_ITEMS = 4


class SeverityLevel(Enum):
    LOW = "LOW"
    MODERATE = "MODERATE"
    ELEVATED = "ELEVATED"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self) + 1


_SEVERITY_ORDER = (
    SeverityLevel.LOW,
    SeverityLevel.MODERATE,
    SeverityLevel.ELEVATED,
    SeverityLevel.HIGH,
    SeverityLevel.CRITICAL,
)

SEVERITY_COLORS = {
    SeverityLevel.LOW: "#00E5FF",
    SeverityLevel.MODERATE: "#A8D8EA",
    SeverityLevel.ELEVATED: "#E8A830",
    SeverityLevel.HIGH: "#FF6B35",
    SeverityLevel.CRITICAL: "#F44336",
}


@dataclass(frozen=True)
class ImpactItem:
    domain: str
    severity: SeverityLevel
    descriptor: str


@dataclass(frozen=True)
class FocusTarget:
    priority: int       # 1 = highest
    label: str
    rationale: str


@dataclass(frozen=True)
class DriverStats:
    """Share of check-ins (percent) tagged with each load driver."""
    sensory: float = 0.0
    demand: float = 0.0
    social: float = 0.0

    def top_driver(self) -> Optional[str]:
        peak = max(self.sensory, self.demand, self.social)
        if peak <= 0:
            return None
        if self.sensory == peak:
            return "Sensory"
        if self.demand == peak:
            return "Demand"
        return "Social"


@dataclass(frozen=True)
class FunctionalImpact:
    items: Tuple[ImpactItem, ...]
    focus_targets: Tuple[FocusTarget, ...]
    strengths: Tuple[str, ...]
    recent_patterns: Tuple[str, ...]


def _percent(count: int, total: int) -> float:
    return count / total * 100 if total > 0 else 0.0


# ------------------------------------------------------------
# Domains
# ------------------------------------------------------------
def assess_work_performance(depleted_percent: float, trend_rate: Optional[float]) -> ImpactItem:
    if depleted_percent >= 50:
        if trend_rate is not None and trend_rate < -3:
            severity, descriptor = SeverityLevel.CRITICAL, "Sustained functional reduction with accelerating decline"
        else:
            severity, descriptor = SeverityLevel.HIGH, "Sustained functional reduction observed"
    elif depleted_percent >= 30:
        severity, descriptor = SeverityLevel.ELEVATED, "Intermittent functional reduction patterns"
    elif depleted_percent >= 15:
        severity, descriptor = SeverityLevel.MODERATE, "Occasional capacity-related functional shifts"
    else:
        severity, descriptor = SeverityLevel.LOW, "Functional capacity within sustainable range"
    return ImpactItem("Work Performance", severity, descriptor)


def assess_overload_risk(projection: Optional[ProjectionResult], depleted_percent: float) -> ImpactItem:
    weeks = projection.weeks_to_critical if projection is not None else None
    if weeks is not None:
        if weeks < 4:
            severity, descriptor = SeverityLevel.CRITICAL, f"Projected critical threshold within {weeks:g} weeks"
        elif weeks < 8:
            severity, descriptor = SeverityLevel.HIGH, f"Projected capacity reduction within {weeks:g} weeks"
        else:
            severity, descriptor = SeverityLevel.ELEVATED, "Downward trajectory warrants monitoring"
    elif depleted_percent >= 40:
        severity, descriptor = SeverityLevel.ELEVATED, "Elevated depletion frequency without clear trajectory"
    elif depleted_percent >= 20:
        severity, descriptor = SeverityLevel.MODERATE, "Moderate depletion frequency within expected range"
    else:
        severity, descriptor = SeverityLevel.LOW, "No significant overload indicators"
    return ImpactItem("Overload Risk", severity, descriptor)


def assess_recovery_capacity(resourced_percent: float, stability: int) -> ImpactItem:
    if resourced_percent >= 50 and stability >= 60:
        severity, descriptor = SeverityLevel.LOW, "Consistent recovery patterns observed"
    elif resourced_percent >= 35:
        severity, descriptor = SeverityLevel.MODERATE, "Partial recovery patterns with some variability"
    elif resourced_percent >= 20:
        severity, descriptor = SeverityLevel.ELEVATED, "Limited recovery windows identified"
    elif stability < 40:
        severity, descriptor = SeverityLevel.HIGH, "Minimal recovery periods with high instability"
    else:
        severity, descriptor = SeverityLevel.HIGH, "Reduced recovery capacity observed"
    return ImpactItem("Recovery Capacity", severity, descriptor)


def assess_social_functioning(social_percent: float, depleted_percent: float) -> ImpactItem:
    combined = social_percent * 0.6 + depleted_percent * 0.4
    if combined >= 45:
        severity, descriptor = SeverityLevel.HIGH, "Elevated social load with capacity impact"
    elif combined >= 30:
        severity, descriptor = SeverityLevel.ELEVATED, "Social demands contributing to load patterns"
    elif combined >= 15:
        severity, descriptor = SeverityLevel.MODERATE, "Social factors present in load profile"
    else:
        severity, descriptor = SeverityLevel.LOW, "Social functioning within reported norms"
    return ImpactItem("Social Functioning", severity, descriptor)


# ------------------------------------------------------------
# Derived lists
# ------------------------------------------------------------
def focus_targets(
    items: Tuple[ImpactItem, ...],
    top_driver: Optional[str],
    projection: Optional[ProjectionResult],
) -> Tuple[FocusTarget, ...]:
    entries: List[Tuple[str, str]] = []

    # Stable sort: equal severities keep domain order
    ranked = sorted(items, key=lambda item: item.severity.rank, reverse=True)
    if ranked and ranked[0].severity.rank >= SeverityLevel.ELEVATED.rank:
        entries.append((ranked[0].domain, ranked[0].descriptor))

    if projection is not None:
        entries.append(("Trajectory Monitoring", f"Current rate: {projection.trend_rate:g} pts/week"))

    if top_driver:
        entries.append((f"{top_driver} Load Management", "Most frequently reported load factor"))

    recovery = next((i for i in items if i.domain == "Recovery Capacity"), None)
    if recovery is not None and recovery.severity.rank >= SeverityLevel.ELEVATED.rank:
        entries.append(("Recovery Window Expansion", recovery.descriptor))

    return tuple(
        FocusTarget(priority=n, label=label, rationale=rationale)
        for n, (label, rationale) in enumerate(entries[:MAX_ITEMS], start=1)
    )


def strengths(data: DynamicData) -> Tuple[str, ...]:
    counts = data.overall_distribution
    total = sum(counts.get(band, 0) for band in ZoneBand)
    resourced = _percent(counts.get(ZoneBand.RESOURCED, 0), total)

    found = []
    if data.tracking_continuity_percent >= 70:
        found.append("Consistent engagement with self-monitoring")
    if resourced >= 40:
        found.append("Sustained periods of resourced capacity")
    if data.pattern_stability_percent >= 70:
        found.append("Stable capacity patterns over time")
    if data.days_with_entries >= 60:
        found.append("Extended longitudinal record available")
    if total > 0 and resourced >= 25 and counts.get(ZoneBand.DEPLETED, 0) / total < 0.2:
        found.append("Limited depletion episodes")
    return tuple(found[:MAX_ITEMS])


def recent_patterns(data: DynamicData, projection: Optional[ProjectionResult]) -> Tuple[str, ...]:
    stability = data.pattern_stability_percent
    if stability >= 75:
        found = ["Stable day-to-day patterns"]
    elif stability < 45:
        found = ["High day-to-day variability"]
    else:
        found = ["Moderate pattern variability"]

    counts = data.overall_distribution
    total = sum(counts.get(band, 0) for band in ZoneBand)
    if total > 0:
        depleted = _percent(counts.get(ZoneBand.DEPLETED, 0), total)
        if depleted >= 30:
            found.append("Recurrent capacity reduction")
        elif depleted >= 15:
            found.append("Occasional capacity dips")
        if _percent(counts.get(ZoneBand.RESOURCED, 0), total) >= 50:
            found.append("Predominantly resourced periods")

    if projection is not None:
        found.append("Downward capacity trajectory")
    return tuple(found[:MAX_ITEMS])


# ------------------------------------------------------------
# Entry point
# ------------------------------------------------------------
def map_functional_impact(
    data: DynamicData,
    projection: Optional[ProjectionResult] = None,
    drivers: Optional[DriverStats] = None,
) -> FunctionalImpact:
    counts = data.overall_distribution
    total = sum(counts.get(band, 0) for band in ZoneBand)
    depleted = _percent(counts.get(ZoneBand.DEPLETED, 0), total)
    resourced = _percent(counts.get(ZoneBand.RESOURCED, 0), total)
    drivers = drivers or DriverStats()

    items = (
        assess_work_performance(depleted, projection.trend_rate if projection is not None else None),
        assess_overload_risk(projection, depleted),
        assess_recovery_capacity(resourced, data.pattern_stability_percent),
        assess_social_functioning(drivers.social, depleted),
    )

    return FunctionalImpact(
        items=items,
        focus_targets=focus_targets(items, drivers.top_driver(), projection),
        strengths=strengths(data),
        recent_patterns=recent_patterns(data, projection),
    )
