"""
Render configuration: the shared vocabulary of every component.

Chart geometry, zone thresholds, colors and algorithm constants are carried
by ONE frozen value. Components take it as a `config` argument and never
read module-level copies, so a scale change cannot drift between the
classifier, the y-mapping and the downsampler.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from capacity_artifacts.models.capacity import Scale, ZoneBand


@dataclass(frozen=True)
class ScaleSpec:
    scale: Scale
    minimum: float
    maximum: float
    resourced_min: float    # value >= resourced_min -> RESOURCED
    stretched_min: float    # value >= stretched_min -> STRETCHED, else DEPLETED

    @property
    def span(self) -> float:
        return self.maximum - self.minimum


@dataclass(frozen=True)
class ChartGeometry:
    width: int = 320
    height: int = 140
    pad_left: int = 32
    pad_right: int = 8
    pad_top: int = 8
    pad_bottom: int = 24
    point_x: Tuple[float, ...] = (40, 80, 128, 188, 248, 300)
    label_x: Tuple[float, float, float] = (70, 170, 270)
    label_y: float = 132
    legend_x: float = 16
    legend_text_x: float = 6

    @property
    def graph_width(self) -> int:
        return self.width - self.pad_left - self.pad_right

    @property
    def graph_height(self) -> int:
        return self.height - self.pad_top - self.pad_bottom

    @property
    def band_height(self) -> float:
        return self.graph_height / 3

    @property
    def right_edge(self) -> int:
        return self.pad_left + self.graph_width

    @property
    def baseline(self) -> int:
        return self.pad_top + self.graph_height


@dataclass(frozen=True)
class DownsampleSettings:
    target_count: int = 6
    lookback: int = 30              # samples inspected for oscillation
    noise_fraction: float = 0.05    # of the scale span (5 on 0-100)
    oscillation_cutoff: int = 8     # volatile when changes exceed this
    min_volatile_length: int = 10


@dataclass(frozen=True)
class CurveSettings:
    tension: float = 0.3            # control point x offset, fraction of dx
    slope_factor: float = 0.15      # control point y offset, fraction of neighbor rise
    precision: int = 1              # decimals for every emitted coordinate


@dataclass(frozen=True)
class Palette:
    resourced: str = "#00E5FF"
    stretched: str = "#E8A830"
    depleted: str = "#F44336"
    background: str = "#0a0b10"

    def for_band(self, band: ZoneBand) -> str:
        return getattr(self, band.value)


_SCALES = {
    Scale.PERCENT: ScaleSpec(
        scale=Scale.PERCENT,
        minimum=0.0,
        maximum=100.0,
        resourced_min=66.0,
        stretched_min=33.0,
    ),
    # Percent thresholds mapped through the named conversion (1 + t/100 * 2)
    Scale.LEGACY: ScaleSpec(
        scale=Scale.LEGACY,
        minimum=1.0,
        maximum=3.0,
        resourced_min=2.32,
        stretched_min=1.66,
    ),
}


@dataclass(frozen=True)
class RenderConfig:
    geometry: ChartGeometry = field(default_factory=ChartGeometry)
    downsample: DownsampleSettings = field(default_factory=DownsampleSettings)
    curve: CurveSettings = field(default_factory=CurveSettings)
    palette: Palette = field(default_factory=Palette)
    scales: Mapping[Scale, ScaleSpec] = field(
        default_factory=lambda: MappingProxyType(dict(_SCALES))
    )

    def scale_spec(self, scale: Scale) -> ScaleSpec:
        return self.scales[scale]

    def __post_init__(self):
        if len(self.geometry.point_x) != self.downsample.target_count:
            raise ValueError(
                f"Chart geometry defines {len(self.geometry.point_x)} x-positions "
                f"but downsampling targets {self.downsample.target_count} points"
            )


DEFAULT_CONFIG = RenderConfig()
