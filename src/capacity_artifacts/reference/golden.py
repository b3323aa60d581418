# src/capacity_artifacts/reference/golden.py
"""
Reference ("golden master") entry points.

Zero-argument (or frozen-argument) calls that must return the same string
forever. Timestamp, hash and narrative are frozen literals, never computed.
"""

from typing import Callable, Dict

from capacity_artifacts.documents.narrative import REFERENCE_NARRATIVE
from capacity_artifacts.documents.pipeline import render_artifact
from capacity_artifacts.documents.variants import SingleSubject
from capacity_artifacts.export.json_artifact import (
    ArtifactSummary,
    MonthSummary,
    ObservationPeriod,
    ReportingQuality,
    create_artifact_json,
    serialize_artifact_json,
)
from capacity_artifacts.models.capacity import ArtifactMetadata
from capacity_artifacts.reference.fixtures import (
    reference_cohort,
    reference_group,
    reference_single_record,
)

REFERENCE_TIMESTAMP = "2026-01-10 14:02:41 UTC"
REFERENCE_PROTOCOL = "Structured EMA v4.2"
REFERENCE_WINDOW = ("2025-10-01", "2025-12-31")

SINGLE_REFERENCE_HASH = "sha256:8f43c9d11e7a2b8f...a72b5f1d2"
COHORT_REFERENCE_HASH = "sha256:b7d3f9a81c2e4b6f...e91c2d8a4"

REFERENCE_COHORT_SIZES = (10, 15, 20)


def reference_overrides(integrity_hash: str) -> Dict[str, str]:
    start, end = REFERENCE_WINDOW
    return {
        "generated_at": REFERENCE_TIMESTAMP,
        "protocol": REFERENCE_PROTOCOL,
        "observation_start": start,
        "observation_end": end,
        "integrity_hash": integrity_hash,
    }


def reference_single_document() -> str:
    variant = SingleSubject(record=reference_single_record())
    return render_artifact(variant, REFERENCE_NARRATIVE, reference_overrides(SINGLE_REFERENCE_HASH)).document


def reference_group_document() -> str:
    return render_artifact(
        reference_group(), REFERENCE_NARRATIVE, reference_overrides(SINGLE_REFERENCE_HASH)
    ).document


def reference_cohort_document(seat_count: int = 10) -> str:
    return render_artifact(
        reference_cohort(seat_count), REFERENCE_NARRATIVE, reference_overrides(COHORT_REFERENCE_HASH)
    ).document


REFERENCE_SUMMARY = ArtifactSummary(
    subject_id="34827-AFJ",
    observation_period=ObservationPeriod(start=REFERENCE_WINDOW[0], end=REFERENCE_WINDOW[1], status="closed"),
    reporting_quality=ReportingQuality(
        tracking_continuity=85,
        tracking_continuity_rating="high",
        response_timing_mean_ms=4200,
        pattern_stability=92,
        verdict="Interpretable Capacity Trends",
    ),
    monthly_breakdown=[
        MonthSummary(month="2025-10", stability=66, volatility=25),
        MonthSummary(month="2025-11", stability=59, volatility=31),
        MonthSummary(month="2025-12", stability=63, volatility=29),
    ],
)


def reference_json_document() -> str:
    """JSON companion of reference_single_document(), same stamp."""
    metadata = ArtifactMetadata(**reference_overrides(SINGLE_REFERENCE_HASH))
    return serialize_artifact_json(create_artifact_json(metadata, REFERENCE_SUMMARY))


def reference_documents() -> Dict[str, Callable[[], str]]:
    """Snapshot name -> entry point, for golden verification."""
    docs: Dict[str, Callable[[], str]] = {
        "single": reference_single_document,
        "group": reference_group_document,
    }
    for size in REFERENCE_COHORT_SIZES:
        docs[f"cohort_{size}"] = lambda size=size: reference_cohort_document(size)
    return docs
