import pytest

from capacity_artifacts.charts.composer import render_chart_svg
from capacity_artifacts.reference.golden import (
    COHORT_REFERENCE_HASH,
    REFERENCE_TIMESTAMP,
    SINGLE_REFERENCE_HASH,
    reference_cohort_document,
    reference_documents,
    reference_single_document,
)
from capacity_artifacts.utils.config import config

DOCUMENTS = reference_documents()


class TestReproducibility:

    @pytest.mark.parametrize("name", sorted(DOCUMENTS))
    def test_same_bytes_every_call(self, name):
        render = DOCUMENTS[name]
        assert render() == render()

    def test_frozen_stamp(self):
        doc = reference_single_document()
        assert REFERENCE_TIMESTAMP in doc
        assert SINGLE_REFERENCE_HASH in doc

    def test_cohort_uses_cohort_hash(self):
        doc = reference_cohort_document(10)
        assert COHORT_REFERENCE_HASH in doc
        assert SINGLE_REFERENCE_HASH not in doc

    def test_unix_line_endings(self):
        doc = reference_single_document()
        assert "\r" not in doc
        assert doc.endswith("\n")


class TestSnapshots:

    @pytest.mark.parametrize("name", sorted(DOCUMENTS))
    def test_matches_recorded_snapshot(self, name):
        path = config.GOLDEN_DIR / f"{name}.html"
        if not path.exists():
            pytest.fail(f"{path.name} is not recorded; run scripts/verify_golden_master.py --record and commit it")
        assert DOCUMENTS[name]() == path.read_text(encoding="utf-8")

    def test_flat_chart_snapshot(self, flat_series):
        expected = (config.GOLDEN_DIR / "chart_flat_50.svg").read_text(encoding="utf-8")
        assert render_chart_svg(flat_series) == expected
