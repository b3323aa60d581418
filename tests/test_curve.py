import re

from capacity_artifacts.charts.composer import build_points
from capacity_artifacts.charts.curve import build_curve, build_stroke_path
from capacity_artifacts.utils.formatting import fmt_coord

FLAT_STROKE = (
    "M 40.0,62.0 "
    "C 52.0,62.0 68.0,62.0 80.0,62.0 "
    "C 94.4,62.0 113.6,62.0 128.0,62.0 "
    "C 146.0,62.0 170.0,62.0 188.0,62.0 "
    "C 206.0,62.0 230.0,62.0 248.0,62.0 "
    "C 263.6,62.0 284.4,62.0 300.0,62.0"
)


class TestFlatLine:

    def test_stroke_is_horizontal_at_midline(self):
        curve = build_curve(build_points([50] * 6))
        assert curve.stroke_path == FLAT_STROKE

    def test_fill_closes_to_baseline(self):
        curve = build_curve(build_points([50] * 6))
        assert curve.fill_path == FLAT_STROKE + " L 300.0,116.0 L 40.0,116.0 Z"


class TestPathShape:

    def test_one_command_per_point(self):
        points = build_points([10, 90, 30, 70, 50, 20])
        stroke = build_stroke_path(points)
        commands = re.findall(r"\b[MC] ", stroke)
        assert len(commands) == len(points)
        assert commands[0] == "M "

    def test_curve_passes_through_points(self):
        points = build_points([10, 90, 30, 70, 50, 20])
        stroke = build_stroke_path(points)
        for p in points:
            assert f"{fmt_coord(p.x)},{fmt_coord(p.y)}" in stroke

    def test_every_number_has_one_decimal(self):
        stroke = build_stroke_path(build_points([12, 87, 33, 65, 41, 99]))
        numbers = re.findall(r"-?\d+(?:\.\d+)?", stroke)
        assert numbers
        assert all(re.fullmatch(r"-?\d+\.\d", n) for n in numbers)

    def test_empty_points(self):
        curve = build_curve([])
        assert curve.stroke_path == ""
        assert curve.fill_path == ""


class TestFormatting:

    def test_half_up_on_exact_value(self):
        assert fmt_coord(0.25) == "0.3"
        assert fmt_coord(2.675, 2) == "2.67"    # binary value is below .675
        assert fmt_coord(-0.04) == "0.0"
        assert fmt_coord(62) == "62.0"
