# src/capacity_artifacts/charts/zones.py
"""
Zone Classifier + scale helpers.

The chart point coloring, the y-axis mapping and every badge/count in the
documents go through THIS module with the same RenderConfig thresholds.
"""

from __future__ import annotations

from typing import Iterable, List

from capacity_artifacts.models.capacity import Scale, ZoneBand, ZoneClassification
from capacity_artifacts.models.render_config import DEFAULT_CONFIG, RenderConfig


def clamp(value: float, scale: Scale, config: RenderConfig = DEFAULT_CONFIG) -> float:
    """Pin a sample into the scale range (out-of-range samples are kept, not dropped)."""
    spec = config.scale_spec(scale)
    return max(spec.minimum, min(spec.maximum, float(value)))


def band_for(value: float, scale: Scale, config: RenderConfig = DEFAULT_CONFIG) -> ZoneBand:
    spec = config.scale_spec(scale)
    v = clamp(value, scale, config)
    if v >= spec.resourced_min:
        return ZoneBand.RESOURCED
    if v >= spec.stretched_min:
        return ZoneBand.STRETCHED
    return ZoneBand.DEPLETED


def classify(
    value: float,
    scale: Scale = Scale.PERCENT,
    config: RenderConfig = DEFAULT_CONFIG,
) -> ZoneClassification:
    band = band_for(value, scale, config)
    return ZoneClassification(band=band, color=config.palette.for_band(band))


def to_percent(value: float, scale: Scale, config: RenderConfig = DEFAULT_CONFIG) -> float:
    """Named conversion of a (clamped) sample onto the 0-100 scale."""
    spec = config.scale_spec(scale)
    return (clamp(value, scale, config) - spec.minimum) / spec.span * 100.0


def convert_series(
    series: Iterable[float],
    source: Scale,
    target: Scale,
    config: RenderConfig = DEFAULT_CONFIG,
) -> List[float]:
    """Convert a whole series between scales. Values are clamped to `source` first."""
    if source is target:
        return [float(v) for v in series]

    src = config.scale_spec(source)
    dst = config.scale_spec(target)
    return [
        dst.minimum + (clamp(v, source, config) - src.minimum) / src.span * dst.span
        for v in series
    ]


def value_to_y(value: float, scale: Scale, config: RenderConfig = DEFAULT_CONFIG) -> float:
    """Map a sample to its chart y-coordinate (top of graph = scale maximum)."""
    geo = config.geometry
    spec = config.scale_spec(scale)
    fraction = (clamp(value, scale, config) - spec.minimum) / spec.span
    return geo.pad_top + geo.graph_height - fraction * geo.graph_height
