from datetime import date

import pytest

from capacity_artifacts.dynamic.format import RESPONSE_TIMING
from capacity_artifacts.dynamic.series import narrative_from_series
from capacity_artifacts.models.capacity import Scale

OCT_1 = date(2025, 10, 1)
OCT_30 = date(2025, 10, 30)
TODAY = date(2026, 1, 10)


class TestNarrativeFromSeries:

    def test_flat_full_window(self):
        narrative = narrative_from_series([50] * 30, Scale.PERCENT, "12345-ABC", OCT_1, OCT_30, TODAY)
        assert narrative.subject_id == "12345-ABC"
        assert narrative.tracking_continuity == "100% (High Reliability)"
        assert narrative.pattern_stability == "100%"
        assert narrative.verdict == "Interpretable Capacity Trends"
        assert narrative.response_timing == RESPONSE_TIMING
        assert narrative.x_labels == ("Oct", "Oct", "Oct")

    def test_legacy_scale_is_converted(self):
        # 1.0 <-> 3.0 swings the full percent range every day
        narrative = narrative_from_series([1.0, 3.0] * 15, Scale.LEGACY, "x", OCT_1, OCT_30, TODAY)
        assert narrative.pattern_stability == "0%"
        assert narrative.verdict == "Highly Variable Capacity"

    def test_sparse_series(self):
        narrative = narrative_from_series([50] * 10, Scale.PERCENT, "x", OCT_1, OCT_30, TODAY)
        assert narrative.tracking_continuity == "33% (Low Reliability)"
        assert narrative.verdict == "Insufficient Observation"

    def test_extra_samples_cap_continuity(self):
        narrative = narrative_from_series([50] * 200, Scale.PERCENT, "x", OCT_1, OCT_30, TODAY)
        assert narrative.tracking_continuity == "100% (High Reliability)"

    def test_open_window(self):
        narrative = narrative_from_series([50] * 30, Scale.PERCENT, "x", OCT_1, OCT_30, date(2025, 10, 15))
        assert narrative.window_status == "(Open)"

    def test_reversed_window(self):
        with pytest.raises(ValueError):
            narrative_from_series([50] * 30, Scale.PERCENT, "x", OCT_30, OCT_1, TODAY)
