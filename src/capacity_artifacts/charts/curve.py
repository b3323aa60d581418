# src/capacity_artifacts/charts/curve.py
"""
Curve Builder: smooth stroke path + closed fill path through chart points.

Cardinal-style cubic segments: control points sit 30% of the horizontal
distance in from each endpoint, lifted by a fraction of the rise across the
neighboring points. The first and last points act as their own missing
neighbors.

Every number is emitted through fmt_coord (fixed decimals), which is what
makes the path strings byte-stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from capacity_artifacts.models.capacity import ChartPoint
from capacity_artifacts.models.render_config import DEFAULT_CONFIG, RenderConfig
from capacity_artifacts.utils.formatting import fmt_coord


@dataclass(frozen=True)
class CurvePaths:
    stroke_path: str
    fill_path: str


def _xy(x: float, y: float, places: int) -> str:
    return f"{fmt_coord(x, places)},{fmt_coord(y, places)}"


def build_stroke_path(points: Sequence[ChartPoint], config: RenderConfig = DEFAULT_CONFIG) -> str:
    if not points:
        return ""

    places = config.curve.precision
    tension = config.curve.tension
    lift = config.curve.slope_factor

    parts = [f"M {_xy(points[0].x, points[0].y, places)}"]
    last = len(points) - 1

    for i in range(last):
        p0 = points[max(0, i - 1)]
        p1 = points[i]
        p2 = points[i + 1]
        p3 = points[min(last, i + 2)]

        dx = p2.x - p1.x
        cp1x = p1.x + dx * tension
        cp1y = p1.y + (p2.y - p0.y) * lift
        cp2x = p2.x - dx * tension
        cp2y = p2.y - (p3.y - p1.y) * lift

        parts.append(
            f"C {_xy(cp1x, cp1y, places)} {_xy(cp2x, cp2y, places)} {_xy(p2.x, p2.y, places)}"
        )

    return " ".join(parts)


def build_curve(points: Sequence[ChartPoint], config: RenderConfig = DEFAULT_CONFIG) -> CurvePaths:
    """
    Build the stroke and fill paths for `points`.

    The fill closes the stroke down to the chart baseline under the last
    point, back along the baseline to the first point's x.
    """
    stroke = build_stroke_path(points, config)
    if not stroke:
        return CurvePaths(stroke_path="", fill_path="")

    places = config.curve.precision
    baseline = config.geometry.baseline
    fill = (
        f"{stroke} "
        f"L {_xy(points[-1].x, baseline, places)} "
        f"L {_xy(points[0].x, baseline, places)} Z"
    )
    return CurvePaths(stroke_path=stroke, fill_path=fill)
