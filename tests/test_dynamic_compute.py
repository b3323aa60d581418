from datetime import date

import pytest

from capacity_artifacts.dynamic.compute import (
    anonymized_subject_id,
    chart_values,
    compute_dynamic_data,
    month_labels,
    pattern_stability,
    tracking_continuity,
    verdict_for,
)
from capacity_artifacts.dynamic.models import (
    CapacityLog,
    ComputeConfig,
    ContinuityRating,
    WindowStatus,
)
from capacity_artifacts.exceptions import InsufficientDataError
from capacity_artifacts.models.capacity import ZoneBand

Q4 = ComputeConfig(window_start=date(2025, 10, 1), window_end=date(2025, 12, 31))


class TestContinuity:

    @pytest.mark.parametrize("days, total, expected", [
        (92, 92, (100, ContinuityRating.HIGH)),
        (70, 100, (70, ContinuityRating.HIGH)),
        (69, 100, (69, ContinuityRating.MODERATE)),
        (40, 100, (40, ContinuityRating.MODERATE)),
        (39, 100, (39, ContinuityRating.LOW)),
        (0, 0, (0, ContinuityRating.LOW)),
    ])
    def test_thresholds(self, days, total, expected):
        assert tracking_continuity(days, total) == expected


class TestStability:

    def test_flat(self):
        assert pattern_stability([50.0] * 10) == (100, 0.0)

    def test_alternating_extremes(self):
        assert pattern_stability([0.0, 100.0] * 5) == (0, 100.0)

    def test_mean_absolute_change(self):
        # changes 50, 50, 0 -> mean 33.33
        assert pattern_stability([0.0, 50.0, 100.0, 100.0]) == (67, 33.33)

    def test_single_day(self):
        assert pattern_stability([100.0]) == (100, 0.0)


class TestVerdict:

    @pytest.mark.parametrize("stability, continuity, verdict", [
        (92, 85, "Interpretable Capacity Trends"),
        (92, 55, "Partial Capacity Trends"),
        (60, 85, "Variable Capacity Patterns"),
        (60, 55, "Partial Capacity Patterns"),
        (30, 85, "Highly Variable Capacity"),
        (30, 55, "Insufficient Stability"),
        (100, 39, "Insufficient Observation"),
    ])
    def test_table(self, stability, continuity, verdict):
        assert verdict_for(stability, continuity) == verdict


class TestSubjectId:

    @pytest.mark.parametrize("seed, expected", [
        ("", "00000-AAA"),
        ("a", "00097-TAA"),
        ("ab", "03105-LMA"),
    ])
    def test_known_values(self, seed, expected):
        assert anonymized_subject_id(seed) == expected

    def test_shape_and_stability(self):
        first = anonymized_subject_id("subject-seed-2025")
        assert first == anonymized_subject_id("subject-seed-2025")
        assert len(first) == 9 and first[5] == "-"
        assert first[:5].isdigit() and first[6:].isalpha() and first[6:].isupper()


class TestMonthLabels:

    def test_quarter(self):
        assert month_labels(date(2025, 10, 1), date(2025, 12, 31)) == ("Oct", "Nov", "Dec")

    def test_single_month_repeats(self):
        assert month_labels(date(2025, 3, 2), date(2025, 3, 30)) == ("Mar", "Mar", "Mar")

    def test_long_window_uses_first_middle_last(self):
        assert month_labels(date(2025, 8, 1), date(2025, 12, 31)) == ("Aug", "Oct", "Dec")

    def test_year_boundary(self):
        assert month_labels(date(2025, 11, 15), date(2026, 1, 10)) == ("Nov", "Dec", "Jan")


class TestChartValues:

    def test_short_is_rejected(self):
        with pytest.raises(InsufficientDataError):
            chart_values([50.0] * 5)

    def test_rounded_and_downsampled(self):
        assert chart_values([50.0] * 40) == (50.0,) * 6
        assert chart_values([0.0, 100.0, 50.0, 25.0, 75.0, 62.5]) == (0.0, 100.0, 50.0, 25.0, 75.0, 63.0)


class TestComputeDynamicData:

    def test_full_quarter(self, make_checkins):
        data = compute_dynamic_data(make_checkins(), Q4, today=date(2026, 1, 10))
        assert data.observation_start == date(2025, 10, 1)
        assert data.observation_end == date(2025, 12, 31)
        assert data.window_status is WindowStatus.CLOSED
        assert data.total_days_in_window == 92
        assert data.tracking_continuity_percent == 100
        assert data.pattern_stability_percent == 100
        assert data.verdict == "Interpretable Capacity Trends"
        assert data.chart_values == (50.0,) * 6
        assert data.x_labels == ("Oct", "Nov", "Dec")
        assert data.total_signals == 92
        assert data.overall_distribution[ZoneBand.STRETCHED] == 92

    def test_open_window(self, make_checkins):
        data = compute_dynamic_data(make_checkins(), Q4, today=date(2025, 12, 31))
        assert data.window_status is WindowStatus.OPEN

    def test_logs_outside_window_are_ignored(self, make_checkins):
        logs = make_checkins(start=date(2025, 9, 1), days=130)
        data = compute_dynamic_data(logs, Q4, today=date(2026, 1, 10))
        assert data.days_with_entries == 92
        assert data.observation_start == date(2025, 10, 1)

    def test_missing_days_lower_continuity(self, make_checkins):
        logs = [log for i, log in enumerate(make_checkins()) if i % 2 == 0]
        config = ComputeConfig(window_start=Q4.window_start, window_end=Q4.window_end, minimum_days=30)
        data = compute_dynamic_data(logs, config, today=date(2026, 1, 10))
        # 46 entries between Oct 1 and Dec 30
        assert data.days_with_entries == 46
        assert data.total_days_in_window == 91
        assert data.tracking_continuity_percent == 51
        assert data.tracking_continuity_rating is ContinuityRating.MODERATE

    def test_same_day_entries_are_averaged(self, make_checkins):
        logs = make_checkins(states=(ZoneBand.RESOURCED,))
        logs += [CapacityLog(local_date=log.local_date, state=ZoneBand.DEPLETED) for log in logs]
        data = compute_dynamic_data(logs, Q4, today=date(2026, 1, 10))
        assert data.days_with_entries == 92
        assert data.total_signals == 184
        assert data.chart_values == (50.0,) * 6

    def test_monthly_breakdown(self, make_checkins):
        data = compute_dynamic_data(make_checkins(), Q4, today=date(2026, 1, 10))
        assert [m.month for m in data.monthly_breakdown] == ["2025-10", "2025-11", "2025-12"]
        assert [m.signal_count for m in data.monthly_breakdown] == [31, 30, 31]
        assert all(m.stability == 100 for m in data.monthly_breakdown)

    def test_too_few_days(self, make_checkins):
        with pytest.raises(InsufficientDataError) as exc:
            compute_dynamic_data(make_checkins(days=60), Q4)
        assert exc.value.available == 60
        assert exc.value.required == 90

    def test_window_must_be_ordered(self):
        with pytest.raises(ValueError):
            ComputeConfig(window_start=date(2025, 12, 31), window_end=date(2025, 10, 1))

    def test_seed_drives_subject_id(self, make_checkins):
        config = ComputeConfig(Q4.window_start, Q4.window_end, subject_id_seed="ab")
        data = compute_dynamic_data(make_checkins(), config, today=date(2026, 1, 10))
        assert data.subject_id == "03105-LMA"
