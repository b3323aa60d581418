# src/capacity_artifacts/charts/composer.py
"""
Chart Composer: one capacity chart as an inline SVG.

Layer order is part of the visual contract:
  zone bands -> dashed dividers -> borders -> H/M/L legend -> gradient defs
  -> area fill -> shadow stroke -> gradient stroke -> point markers
  -> month labels

The same element tree feeds the on-screen preview (render_chart_svg) and
every exported document, so both contexts get identical bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from capacity_artifacts.charts.curve import build_curve
from capacity_artifacts.charts.downsampler import downsample
from capacity_artifacts.charts.zones import classify, value_to_y
from capacity_artifacts.exceptions import InsufficientDataError
from capacity_artifacts.markup.nodes import Comment, Element, el, serialize
from capacity_artifacts.models.capacity import ChartPoint, Scale
from capacity_artifacts.models.render_config import DEFAULT_CONFIG, RenderConfig
from capacity_artifacts.models.zone_theme import BANDS_TOP_DOWN, ZONE_THEME
from capacity_artifacts.utils.formatting import fmt_coord

FONT = "Inter, sans-serif"
GRID_STROKE = "rgba(255,255,255,0.12)"
BORDER_STROKE = "rgba(255,255,255,0.08)"
AXIS_STROKE = "rgba(255,255,255,0.15)"
LABEL_FILL = "rgba(255,255,255,0.6)"

DEFAULT_X_LABELS = ("Oct", "Nov", "Dec")


@dataclass(frozen=True)
class ChartOptions:
    id_prefix: str = "chart"
    include_defs: bool = True
    x_labels: Tuple[str, str, str] = DEFAULT_X_LABELS
    width: str = ""     # "" -> geometry width; e.g. "100%" inside cards

    @property
    def area_gradient_id(self) -> str:
        return f"{self.id_prefix}AreaGrad"

    @property
    def line_gradient_id(self) -> str:
        return f"{self.id_prefix}LineGrad"


# ------------------------------------------------------------
# Points
# ------------------------------------------------------------
def build_points(
    values: Sequence[float],
    scale: Scale = Scale.PERCENT,
    config: RenderConfig = DEFAULT_CONFIG,
) -> List[ChartPoint]:
    """Place already-downsampled values at the fixed x-positions."""
    xs = config.geometry.point_x
    if len(values) != len(xs):
        raise InsufficientDataError(
            f"Chart needs exactly {len(xs)} points, got {len(values)}",
            available=len(values),
            required=len(xs),
        )

    points = []
    for x, value in zip(xs, values):
        zone = classify(value, scale, config)
        points.append(
            ChartPoint(
                x=x,
                y=value_to_y(value, scale, config),
                value=float(value),
                band=zone.band,
                color=zone.color,
            )
        )
    return points


def chart_points_for_series(
    series: Sequence[float],
    scale: Scale = Scale.PERCENT,
    config: RenderConfig = DEFAULT_CONFIG,
) -> List[ChartPoint]:
    """raw series -> downsample -> classify. Short series are rejected, never padded."""
    required = config.downsample.target_count
    if len(series) < required:
        raise InsufficientDataError(
            f"Series has {len(series)} samples; at least {required} are required to chart",
            available=len(series),
            required=required,
        )
    return build_points(downsample(series, scale=scale, config=config), scale, config)


# ------------------------------------------------------------
# SVG layers
# ------------------------------------------------------------
def _zone_layers(config: RenderConfig) -> list:
    geo = config.geometry
    band_h = geo.band_height
    left, right, top = geo.pad_left, geo.right_edge, geo.pad_top

    nodes: list = [Comment("Zone backgrounds")]
    for i, band in enumerate(BANDS_TOP_DOWN):
        nodes.append(el(
            "rect",
            x=left,
            y=fmt_coord(top + band_h * i),
            width=geo.graph_width,
            height=fmt_coord(band_h),
            fill=config.palette.for_band(band),
            fill_opacity=ZONE_THEME[band].band_opacity,
        ))

    nodes.append(Comment("Zone dividers"))
    for i in (1, 2):
        y = fmt_coord(top + band_h * i)
        nodes.append(el(
            "line", x1=left, y1=y, x2=right, y2=y,
            stroke=GRID_STROKE, stroke_width=1, stroke_dasharray="3 3",
        ))

    nodes.append(Comment("Borders"))
    nodes.append(el("line", x1=left, y1=top, x2=right, y2=top, stroke=BORDER_STROKE, stroke_width=1))
    nodes.append(el("line", x1=left, y1=geo.baseline, x2=right, y2=geo.baseline, stroke=BORDER_STROKE, stroke_width=1))
    nodes.append(el("line", x1=left, y1=top, x2=left, y2=geo.baseline, stroke=AXIS_STROKE, stroke_width=1))
    return nodes


def _legend_layers(config: RenderConfig) -> list:
    geo = config.geometry
    nodes: list = [Comment("Zone legend")]
    for i, band in enumerate(BANDS_TOP_DOWN):
        color = config.palette.for_band(band)
        cy = geo.pad_top + geo.band_height * (i + 0.5)
        nodes.append(el("circle", cx=geo.legend_x, cy=fmt_coord(cy), r=4, fill=color, fill_opacity="0.9"))
        nodes.append(el(
            "text",
            ZONE_THEME[band].letter,
            x=geo.legend_text_x,
            y=fmt_coord(cy + 3),
            font_size=7,
            fill=color,
            font_family=FONT,
            font_weight=600,
        ))
    return nodes


def _gradient_defs(options: ChartOptions, config: RenderConfig) -> Element:
    palette = config.palette
    stops = (("0%", palette.resourced), ("50%", palette.stretched), ("100%", palette.depleted))
    area_opacity = ("0.20", "0.12", "0.20")

    area = el("linearGradient", id=options.area_gradient_id, x1="0%", y1="0%", x2="0%", y2="100%")
    for (offset, color), opacity in zip(stops, area_opacity):
        area.append(el("stop", offset=offset, stop_color=color, stop_opacity=opacity))

    line = el("linearGradient", id=options.line_gradient_id, x1="0%", y1="0%", x2="0%", y2="100%")
    for offset, color in stops:
        line.append(el("stop", offset=offset, stop_color=color))

    return el("defs", area, line)


def _marker_layers(points: Sequence[ChartPoint], config: RenderConfig) -> Element:
    group = el("g", class_="data-nodes")
    for p in points:
        cx, cy = fmt_coord(p.x), fmt_coord(p.y)
        group.append(
            el("circle", cx=cx, cy=cy, r=5, fill=config.palette.background),
            el("circle", cx=cx, cy=cy, r="3.5", fill=p.color),
            el("circle", cx=cx, cy=cy, r="1.5", fill="white", fill_opacity="0.9"),
        )
    return group


def _axis_labels(options: ChartOptions, config: RenderConfig) -> list:
    geo = config.geometry
    nodes: list = [Comment("Month labels")]
    for x, label in zip(geo.label_x, options.x_labels):
        nodes.append(el(
            "text",
            label,
            x=x,
            y=geo.label_y,
            font_size=9,
            fill=LABEL_FILL,
            font_family=FONT,
            font_weight=500,
            text_anchor="middle",
        ))
    return nodes


# ------------------------------------------------------------
# Public API
# ------------------------------------------------------------
def build_chart_element(
    points: Sequence[ChartPoint],
    options: ChartOptions = ChartOptions(),
    config: RenderConfig = DEFAULT_CONFIG,
) -> Element:
    geo = config.geometry
    curve = build_curve(points, config)

    svg = el(
        "svg",
        xmlns="http://www.w3.org/2000/svg",
        width=options.width or geo.width,
        height=geo.height,
        viewBox=f"0 0 {geo.width} {geo.height}",
        preserveAspectRatio="xMidYMid meet",
    )
    svg.extend(_zone_layers(config))
    svg.extend(_legend_layers(config))
    if options.include_defs:
        svg.append(_gradient_defs(options, config))

    svg.append(Comment("Area fill"))
    svg.append(el("path", d=curve.fill_path, fill=f"url(#{options.area_gradient_id})"))
    svg.append(Comment("Shadow stroke"))
    svg.append(el(
        "path", d=curve.stroke_path, stroke=config.palette.background, stroke_width=5,
        fill="none", stroke_linecap="round", stroke_linejoin="round",
    ))
    svg.append(Comment("Main stroke"))
    svg.append(el(
        "path", d=curve.stroke_path, stroke=f"url(#{options.line_gradient_id})", stroke_width="2.5",
        fill="none", stroke_linecap="round", stroke_linejoin="round",
    ))
    svg.append(_marker_layers(points, config))
    svg.extend(_axis_labels(options, config))
    return svg


def compose_chart(
    points: Sequence[ChartPoint],
    options: ChartOptions = ChartOptions(),
    config: RenderConfig = DEFAULT_CONFIG,
) -> str:
    """Serialized standalone chart markup."""
    return serialize(build_chart_element(points, options, config))


def render_chart_svg(
    series: Sequence[float],
    scale: Scale = Scale.PERCENT,
    options: ChartOptions = ChartOptions(),
    config: RenderConfig = DEFAULT_CONFIG,
) -> str:
    """Full chain for one series. Used by the interactive preview."""
    return compose_chart(chart_points_for_series(series, scale, config), options, config)
