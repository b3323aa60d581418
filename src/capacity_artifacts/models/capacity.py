from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class Scale(Enum):
    PERCENT = "percent"   # 0-100
    LEGACY = "legacy"     # 1.0-3.0


class ZoneBand(Enum):
    DEPLETED = "depleted"
    STRETCHED = "stretched"
    RESOURCED = "resourced"

    @property
    def rank(self) -> int:
        return _BAND_ORDER.index(self)


# Low -> high
_BAND_ORDER = (ZoneBand.DEPLETED, ZoneBand.STRETCHED, ZoneBand.RESOURCED)


class DensityMode(Enum):
    STANDARD = "standard"
    COMPACT = "compact"


# ------------------------------------------------------------
# Series / points
# ------------------------------------------------------------
@dataclass(frozen=True)
class ZoneClassification:
    band: ZoneBand
    color: str


@dataclass(frozen=True)
class ChartPoint:
    x: float
    y: float
    value: float
    band: ZoneBand
    color: str


@dataclass(frozen=True)
class SubjectRecord:
    subject_id: str
    color_token: str
    series: Tuple[float, ...]
    scale: Scale = Scale.PERCENT

    def __post_init__(self):
        # Captured series are immutable for the life of an artifact
        object.__setattr__(self, "series", tuple(float(v) for v in self.series))

    @property
    def current_value(self) -> float:
        return self.series[-1]


# ------------------------------------------------------------
# Document metadata / layout
# ------------------------------------------------------------
@dataclass(frozen=True)
class ArtifactMetadata:
    generated_at: str
    protocol: str
    observation_start: str
    observation_end: str
    integrity_hash: str


@dataclass(frozen=True)
class PaginationPlan:
    subject_count: int
    page_count: int
    items_per_page: int
    rows_per_page: int
    items_per_row: int
    density: DensityMode = DensityMode.STANDARD
    page_sizes: Tuple[int, ...] = field(default=())

    @property
    def is_multi_page(self) -> bool:
        return self.page_count > 1

    def page_slices(self) -> list[slice]:
        """Subject index ranges for each page, in order."""
        slices = []
        start = 0
        for size in self.page_sizes:
            slices.append(slice(start, start + size))
            start += size
        return slices
