from datetime import date

import pytest

from capacity_artifacts.dynamic.compute import compute_dynamic_data
from capacity_artifacts.dynamic.governance import find_prohibited_terms
from capacity_artifacts.dynamic.models import ComputeConfig
from capacity_artifacts.dynamic.projection import ProjectionResult
from capacity_artifacts.dynamic.summary import (
    TrendDirection,
    baseline_percent,
    generate_summary,
    resolve_dominant_pattern,
    resolve_recovery_assessment,
    resolve_status,
    resolve_trend_direction,
)
from capacity_artifacts.models.capacity import ZoneBand

R, S, D = ZoneBand.RESOURCED, ZoneBand.STRETCHED, ZoneBand.DEPLETED

Q4 = ComputeConfig(window_start=date(2025, 10, 1), window_end=date(2025, 12, 31))
TODAY = date(2026, 1, 10)

DOWNWARD = ProjectionResult(
    projected_points=(30,) * 42,
    weeks_to_critical=2.5,
    trend_rate=-4.2,
    slope=-0.6,
    intercept=48.0,
    input_days=21,
)


class TestResolvers:

    @pytest.mark.parametrize("distribution, expected", [
        ({}, "undetermined"),
        ({R: 5, S: 5}, "predominantly resourced"),
        ({S: 6, D: 4}, "frequently near capacity limits"),
        ({R: 1, S: 6, D: 3}, "consistently stretched"),
        ({R: 4, S: 4, D: 2}, "mixed between resourced and stretched"),
        ({R: 2, S: 4, D: 3}, "variable across states"),
    ])
    def test_status(self, distribution, expected):
        assert resolve_status(distribution) == expected

    @pytest.mark.parametrize("stability, expected", [
        (100, TrendDirection.STABLE),
        (75, TrendDirection.STABLE),
        (74, TrendDirection.VARIABLE),
        (45, TrendDirection.VARIABLE),
        (44, TrendDirection.SHIFTING),
    ])
    def test_trend_direction(self, stability, expected):
        assert resolve_trend_direction(stability) is expected

    @pytest.mark.parametrize("distribution, stability, expected", [
        ({}, 90, "insufficient data"),
        ({R: 6, S: 4}, 80, "sustained capacity with consistent patterns"),
        ({S: 6, D: 4}, 80, "persistent low capacity with limited variability"),
        ({R: 6, S: 4}, 30, "high day-to-day fluctuation in reported capacity"),
        ({S: 5, D: 5}, 60, "recurrent capacity reduction episodes"),
        ({R: 1, S: 8, D: 1}, 60, "mid-range capacity with moderate variation"),
        ({R: 3, S: 4, D: 3}, 60, "mixed capacity patterns across the observation period"),
    ])
    def test_dominant_pattern(self, distribution, stability, expected):
        assert resolve_dominant_pattern(distribution, stability) == expected

    @pytest.mark.parametrize("distribution, stability, expected", [
        ({}, 90, "not assessable"),
        ({R: 9, D: 1}, 90, "appears consistent with available resources for recovery"),
        ({R: 4, S: 4, D: 2}, 60, "shows periods of recovery interspersed with elevated load"),
        ({S: 5, D: 5}, 40, "suggests limited recovery windows with sustained load"),
        ({S: 5, D: 5}, 60, "indicates reduced capacity for self-regulation recovery"),
        ({R: 1, S: 8, D: 1}, 60, "reflects a mixed recovery pattern warranting further observation"),
    ])
    def test_recovery(self, distribution, stability, expected):
        assert resolve_recovery_assessment(distribution, stability) == expected

    @pytest.mark.parametrize("distribution, expected", [
        ({}, 50),
        ({R: 1, S: 1, D: 1}, 50),
        ({R: 1, D: 2}, 33),
        ({R: 2, S: 1}, 83),
    ])
    def test_baseline(self, distribution, expected):
        assert baseline_percent(distribution) == expected


class TestGenerateSummary:

    def test_resourced_quarter(self, make_checkins):
        data = compute_dynamic_data(make_checkins(states=(R,)), Q4, today=TODAY)
        summary = generate_summary(data)
        assert summary.status == "predominantly resourced"
        assert summary.trend_direction is TrendDirection.STABLE
        assert summary.baseline == 100
        assert summary.summary.startswith(
            "Over the past 92 days, this individual's capacity has been predominantly resourced "
            "with a stable stability trend (100/100, from 100% baseline)."
        )
        assert summary.summary.endswith("No single load factor predominates in the reported data.")

    def test_top_driver_sentence(self, make_checkins):
        data = compute_dynamic_data(make_checkins(), Q4, today=TODAY)
        summary = generate_summary(data, top_driver="Sensory")
        assert "The most frequently reported load factor is Sensory." in summary.summary

    def test_projection_sentence(self, make_checkins):
        data = compute_dynamic_data(make_checkins(states=(S, D)), Q4, today=TODAY)
        summary = generate_summary(data, DOWNWARD)
        assert summary.summary.endswith(
            "critical threshold within approximately 2.5 weeks if present patterns continue."
        )

    def test_no_projection_sentence_without_critical_point(self, make_checkins):
        data = compute_dynamic_data(make_checkins(), Q4, today=TODAY)
        projection = ProjectionResult((40,) * 42, None, -1.4, -0.2, 44.0, 21)
        assert "trajectory" not in generate_summary(data, projection).summary

    @pytest.mark.parametrize("states", [(R,), (S,), (D,), (R, D), (S, D), (R, S, D)])
    def test_no_prohibited_language(self, make_checkins, states):
        data = compute_dynamic_data(make_checkins(states=states), Q4, today=TODAY)
        summary = generate_summary(data, DOWNWARD, top_driver="Demand")
        assert find_prohibited_terms(summary.summary) == []
