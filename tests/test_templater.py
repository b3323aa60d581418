import re

import pytest

from capacity_artifacts.documents.narrative import REFERENCE_NARRATIVE, NarrativeFields
from capacity_artifacts.documents.pagination import plan
from capacity_artifacts.documents.pipeline import build_charts, render_artifact
from capacity_artifacts.documents.templater import build_document, cohort_stats
from capacity_artifacts.documents.variants import AnonymizedCohort, SingleSubject
from capacity_artifacts.models.capacity import ArtifactMetadata, Scale
from capacity_artifacts.reference.fixtures import (
    reference_cohort,
    reference_group,
    reference_single_record,
)

FROZEN = {
    "generated_at": "2026-01-10 14:02:41 UTC",
    "protocol": "Structured EMA v4.2",
    "observation_start": "2025-10-01",
    "observation_end": "2025-12-31",
    "integrity_hash": "sha256:test",
}

METADATA = ArtifactMetadata(**FROZEN)

# Timestamp, protocol and hash only; the window comes from the narrative
STAMP = {k: v for k, v in FROZEN.items() if not k.startswith("observation_")}


def render(variant, narrative=None):
    return render_artifact(variant, narrative, FROZEN).document


def pages_of(document):
    return len(re.findall(r'<div class="page" data-page="\d+">', document))


@pytest.fixture(scope="module")
def single_doc():
    return render(SingleSubject(record=reference_single_record()), REFERENCE_NARRATIVE)


@pytest.fixture(scope="module")
def cohort_20_doc():
    return render(reference_cohort(20))


class TestSingleSubject:

    def test_one_page_one_chart(self, single_doc):
        assert pages_of(single_doc) == 1
        assert single_doc.count("<svg") == 1
        assert 'data-kind="single"' in single_doc

    def test_reference_narrative(self, single_doc):
        for value in (
            REFERENCE_NARRATIVE.subject_id,
            REFERENCE_NARRATIVE.tracking_continuity,
            REFERENCE_NARRATIVE.pattern_stability,
            REFERENCE_NARRATIVE.verdict,
            REFERENCE_NARRATIVE.observation_window_display,
        ):
            assert value in single_doc

    def test_chain_of_custody(self, single_doc):
        assert "2026-01-10 14:02:41 UTC" in single_doc
        assert "sha256:test" in single_doc
        assert "2025-10-01 to 2025-12-31 <em>(Closed)</em>" in single_doc

    def test_dynamic_narrative_replaces_every_field(self):
        narrative = NarrativeFields(
            observation_window="2025-08-03 to 2025-10-30",
            window_status="(Open)",
            observation_window_display="Aug 3, 2025 – Oct 30, 2025",
            subject_id="12345-XYZ",
            tracking_continuity="55% (Moderate Reliability)",
            response_timing="Mean 4.2s",
            pattern_stability="61%",
            verdict="Partial Capacity Patterns",
            x_labels=("Aug", "Sep", "Oct"),
        )
        doc = render_artifact(SingleSubject(record=reference_single_record()), narrative, STAMP).document
        for value in ("12345-XYZ", "55% (Moderate Reliability)", "61%", "Partial Capacity Patterns",
                      "Aug 3, 2025 – Oct 30, 2025", "<em>(Open)</em>", ">Aug</text>"):
            assert value in doc
        for value in (REFERENCE_NARRATIVE.subject_id, REFERENCE_NARRATIVE.verdict,
                      REFERENCE_NARRATIVE.tracking_continuity, ">Dec</text>"):
            assert value not in doc


class TestNamedGroup:

    def test_members_and_charts(self):
        group = reference_group()
        doc = render(group)
        assert pages_of(doc) == 1
        assert doc.count('class="member-card"') == len(group.members)
        assert doc.count("<svg") == len(group.members)
        assert doc.count("<defs>") == 1
        for member in group.members:
            assert member.display_name in doc
        assert "SSG-2025-Q4" in doc

    def test_status_badges_use_classifier(self):
        doc = render(reference_group())
        # lily ends resourced, zach ends depleted
        assert 'class="status-badge status-resourced">Resourced<' in doc
        assert 'class="status-badge status-depleted">Depleted<' in doc


class TestAnonymizedCohort:

    def test_ten_seats_fit_one_page(self):
        doc = render(reference_cohort(10))
        assert pages_of(doc) == 1
        assert 'data-density="standard"' in doc
        assert doc.count('data-testid="aggregate-section"') == 1
        assert doc.count('data-testid="footer-section"') == 1

    def test_twenty_seats_take_two_pages(self, cohort_20_doc):
        doc = cohort_20_doc
        assert pages_of(doc) == 2
        assert 'data-pages="2"' in doc
        assert 'data-density="compact"' in doc
        assert "20 Seats — continued" in doc

    def test_aggregate_and_footer_only_on_last_page(self, cohort_20_doc):
        page_two = cohort_20_doc.index('data-page="2"')
        for marker in ('data-testid="aggregate-section"', 'data-testid="footer-section"'):
            assert cohort_20_doc.count(marker) == 1
            assert cohort_20_doc.index(marker) > page_two

    def test_pages_are_fully_packed(self, cohort_20_doc):
        page_two = cohort_20_doc.index('data-page="2"')
        first, second = cohort_20_doc[:page_two], cohort_20_doc[page_two:]
        assert first.count('class="mini-chart-card"') == 10
        assert second.count('class="mini-chart-card"') == 10

    def test_partial_last_page(self):
        doc = render(reference_cohort(15))
        assert doc.count('class="grid-row"') == 3
        assert 'data-testid="seat-grid-page-2"' in doc

    def test_one_gradient_definition(self, cohort_20_doc):
        assert cohort_20_doc.count('id="capAreaGrad"') == 1
        assert cohort_20_doc.count('fill="url(#capAreaGrad)"') == 21

    def test_no_subject_identifiers(self, make_subject):
        ids = ["Jane Doe", "MRN-0048213", "jdoe@example.org"]
        cohort = AnonymizedCohort(
            subjects=tuple(make_subject(subject_id=i, series=[20 + n * 30] * 10) for n, i in enumerate(ids)),
            cohort_id="BND-TEST",
        )
        doc = render(cohort)
        for subject_id in ids:
            assert subject_id not in doc
        assert all(f">#{n}</span>" in doc for n in (1, 2, 3))


class TestNarrativeSource:

    WINDOW_2024 = {**STAMP, "observation_start": "2024-01-01", "observation_end": "2024-03-31"}

    def test_group_window_follows_metadata(self):
        doc = render_artifact(reference_group(), None, self.WINDOW_2024).document
        assert "2024-01-01 to 2024-03-31" in doc
        assert "Jan 1, 2024 – Mar 31, 2024" in doc
        assert REFERENCE_NARRATIVE.observation_window_display not in doc
        assert ">Oct</text>" not in doc

    def test_cohort_labels_follow_metadata(self):
        doc = render_artifact(reference_cohort(10), None, self.WINDOW_2024).document
        for label in ("Jan", "Feb", "Mar"):
            assert f">{label}</text>" in doc
        for label in ("Oct", "Nov", "Dec"):
            assert f">{label}</text>" not in doc

    def test_single_subject_fields_come_from_its_series(self, make_subject):
        record = make_subject(subject_id="99999-ZZZ", series=[10, 60] * 45)
        doc = render_artifact(SingleSubject(record=record), None, STAMP).document
        # 90 samples over the 92-day default window, mean day-to-day change of 50
        for value in ("99999-ZZZ", "98% (High Reliability)", "Variable Capacity Patterns", "Not Captured"):
            assert value in doc
        for value in (
            REFERENCE_NARRATIVE.subject_id,
            REFERENCE_NARRATIVE.tracking_continuity,
            REFERENCE_NARRATIVE.response_timing,
            REFERENCE_NARRATIVE.verdict,
        ):
            assert value not in doc

    def test_window_still_open_at_generation(self, make_subject):
        window = {**STAMP, "observation_start": "2025-12-01", "observation_end": "2026-02-28"}
        doc = render_artifact(SingleSubject(record=make_subject()), None, window).document
        assert "2025-12-01 to 2026-02-28 <em>(Open)</em>" in doc
        assert all(f">{label}</text>" in doc for label in ("Dec", "Jan", "Feb"))

    def test_supplied_narrative_must_match_metadata_window(self):
        with pytest.raises(ValueError, match="does not match"):
            render_artifact(reference_group(), REFERENCE_NARRATIVE, self.WINDOW_2024)

    def test_build_document_rejects_window_mismatch(self):
        cohort = reference_cohort(10)
        charts, aggregate = build_charts(cohort, REFERENCE_NARRATIVE)
        metadata = ArtifactMetadata(**{**FROZEN, "observation_start": "2024-01-01"})
        with pytest.raises(ValueError, match="does not match"):
            build_document(metadata, charts, REFERENCE_NARRATIVE, cohort, aggregate=aggregate)

    def test_x_labels_are_required(self):
        with pytest.raises(TypeError):
            NarrativeFields(
                observation_window="2025-04-01 to 2025-06-30",
                window_status="(Closed)",
                observation_window_display="Apr 1, 2025 – Jun 30, 2025",
                subject_id="12345-XYZ",
                tracking_continuity="90% (High Reliability)",
                response_timing="Not Captured",
                pattern_stability="80%",
                verdict="Interpretable Capacity Trends",
            )


class TestCohortStats:

    def test_counts_and_average(self, make_subject):
        subjects = [
            make_subject(series=[80] * 6),
            make_subject(series=[50] * 6),
            make_subject(series=[10] * 6),
            make_subject(series=[3.0] * 6, scale=Scale.LEGACY),
        ]
        stats = cohort_stats(subjects)
        assert (stats.resourced, stats.stretched, stats.depleted) == (2, 1, 1)
        assert stats.average_percent == 60.0

    def test_legacy_threshold_matches_badges(self, make_subject):
        stats = cohort_stats([make_subject(series=[2.32] * 6, scale=Scale.LEGACY)])
        assert stats.resourced == 1

    def test_empty(self):
        assert cohort_stats([]).average_percent is None


class TestBuildDocument:

    def test_plan_must_match_seat_count(self):
        cohort = reference_cohort(10)
        charts, aggregate = build_charts(cohort, REFERENCE_NARRATIVE)
        with pytest.raises(ValueError):
            build_document(METADATA, charts, REFERENCE_NARRATIVE, cohort, aggregate=aggregate, plan=plan(11))

    def test_cohort_needs_aggregate(self):
        cohort = reference_cohort(10)
        charts, _ = build_charts(cohort, REFERENCE_NARRATIVE)
        with pytest.raises(ValueError):
            build_document(METADATA, charts, REFERENCE_NARRATIVE, cohort)

    def test_unknown_variant(self):
        with pytest.raises(ValueError):
            build_document(METADATA, [], REFERENCE_NARRATIVE, object())

    def test_self_contained(self, single_doc):
        assert "<script" not in single_doc
        assert "http://" not in single_doc.replace("http://www.w3.org/2000/svg", "")
        assert "https://" not in single_doc
        assert 'data-testid="artifact-ready"' in single_doc


class TestStylesheet:

    def test_density_changes_cohort_spacing(self):
        from capacity_artifacts.documents.styles import stylesheet
        from capacity_artifacts.models.capacity import DensityMode

        assert stylesheet("cohort", DensityMode.STANDARD) != stylesheet("cohort", DensityMode.COMPACT)
        assert stylesheet("single") == stylesheet("single", DensityMode.COMPACT)

    def test_unknown_kind(self):
        from capacity_artifacts.documents.styles import stylesheet

        with pytest.raises(ValueError):
            stylesheet("poster")
