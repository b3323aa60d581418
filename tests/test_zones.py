import pytest

from capacity_artifacts.charts.zones import (
    band_for,
    clamp,
    classify,
    convert_series,
    to_percent,
    value_to_y,
)
from capacity_artifacts.models.capacity import Scale, ZoneBand


class TestClassify:

    @pytest.mark.parametrize("value, band", [
        (100, ZoneBand.RESOURCED),
        (66, ZoneBand.RESOURCED),
        (65.9, ZoneBand.STRETCHED),
        (33, ZoneBand.STRETCHED),
        (32.9, ZoneBand.DEPLETED),
        (0, ZoneBand.DEPLETED),
    ])
    def test_percent_thresholds(self, value, band):
        assert band_for(value, Scale.PERCENT) is band

    @pytest.mark.parametrize("value, band", [
        (3.0, ZoneBand.RESOURCED),
        (2.32, ZoneBand.RESOURCED),
        (2.0, ZoneBand.STRETCHED),
        (1.66, ZoneBand.STRETCHED),
        (1.65, ZoneBand.DEPLETED),
        (1.0, ZoneBand.DEPLETED),
    ])
    def test_legacy_thresholds(self, value, band):
        assert band_for(value, Scale.LEGACY) is band

    def test_color_follows_band(self, config):
        assert classify(80).color == config.palette.resourced
        assert classify(50).color == config.palette.stretched
        assert classify(10).color == config.palette.depleted

    @pytest.mark.parametrize("scale, step", [(Scale.PERCENT, 0.5), (Scale.LEGACY, 0.01)])
    def test_bands_are_monotonic(self, config, scale, step):
        spec = config.scale_spec(scale)
        values = []
        v = spec.minimum - 5 * step
        while v <= spec.maximum + 5 * step:
            values.append(v)
            v += step
        ranks = [classify(v, scale).band.rank for v in values]
        assert ranks == sorted(ranks)

    def test_out_of_range_is_clamped_not_dropped(self):
        assert band_for(150, Scale.PERCENT) is ZoneBand.RESOURCED
        assert band_for(-20, Scale.PERCENT) is ZoneBand.DEPLETED
        assert clamp(150, Scale.PERCENT) == 100.0
        assert clamp(0.2, Scale.LEGACY) == 1.0


class TestScales:

    def test_to_percent(self):
        assert to_percent(2.0, Scale.LEGACY) == 50.0
        assert to_percent(3.0, Scale.LEGACY) == 100.0
        assert to_percent(42, Scale.PERCENT) == 42.0

    def test_convert_series_both_ways(self):
        assert convert_series([1.0, 2.0, 3.0], Scale.LEGACY, Scale.PERCENT) == [0.0, 50.0, 100.0]
        assert convert_series([0, 50, 100], Scale.PERCENT, Scale.LEGACY) == [1.0, 2.0, 3.0]

    def test_same_scale_is_identity(self):
        assert convert_series([12, 34], Scale.PERCENT, Scale.PERCENT) == [12.0, 34.0]


class TestValueToY:

    def test_extremes_and_midline(self, config):
        geo = config.geometry
        assert value_to_y(100, Scale.PERCENT) == geo.pad_top
        assert value_to_y(0, Scale.PERCENT) == geo.baseline
        assert value_to_y(50, Scale.PERCENT) == 62.0

    def test_legacy_maps_like_percent(self):
        assert value_to_y(2.0, Scale.LEGACY) == value_to_y(50, Scale.PERCENT)

    def test_clamped_consistently_with_classifier(self, config):
        assert value_to_y(140, Scale.PERCENT) == config.geometry.pad_top
        assert value_to_y(-10, Scale.PERCENT) == config.geometry.baseline
