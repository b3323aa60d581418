from datetime import date, timedelta

import pytest

from capacity_artifacts.dynamic.models import CapacityLog
from capacity_artifacts.models.capacity import Scale, SubjectRecord, ZoneBand
from capacity_artifacts.models.render_config import DEFAULT_CONFIG


@pytest.fixture
def config():
    return DEFAULT_CONFIG


@pytest.fixture
def flat_series():
    return [50] * 90


@pytest.fixture
def zigzag_series():
    return [20 if i % 2 == 0 else 80 for i in range(90)]


@pytest.fixture
def make_subject():
    def _make(subject_id="subject-001", series=None, color="#4ECDC4", scale=Scale.PERCENT):
        return SubjectRecord(
            subject_id=subject_id,
            color_token=color,
            series=series if series is not None else [50] * 30,
            scale=scale,
        )
    return _make


@pytest.fixture
def make_checkins():
    """One check-in per day from `start`, cycling through `states`."""
    def _make(start=date(2025, 10, 1), days=92, states=(ZoneBand.STRETCHED,)):
        return [
            CapacityLog(local_date=start + timedelta(days=i), state=states[i % len(states)])
            for i in range(days)
        ]
    return _make
