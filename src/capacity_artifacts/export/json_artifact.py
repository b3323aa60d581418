# src/capacity_artifacts/export/json_artifact.py
"""
Machine-readable companion to a single-subject document.

Carries the same metadata (timestamp, protocol, window, integrity hash) as
the HTML it accompanies, plus the reporting-quality numbers behind the
narrative. Keys are camelCase on the wire; output is indented, key order
fixed by the model definitions.
"""

import re
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from capacity_artifacts.documents import copy
from capacity_artifacts.dynamic.format import format_subject_id, format_verdict
from capacity_artifacts.dynamic.models import DynamicData
from capacity_artifacts.models.capacity import ArtifactMetadata

ARTIFACT_SCHEMA = "urn:capacity-artifacts:schema:single-subject:v1"
ARTIFACT_TYPE = "capacity-artifact"
ARTIFACT_VERSION = "1"


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class MetadataJSON(WireModel):
    generated_at: str
    protocol: str
    observation_start: str
    observation_end: str
    integrity_hash: str


class ObservationPeriod(WireModel):
    start: str
    end: str
    status: Literal["open", "closed"]


class ReportingQuality(WireModel):
    tracking_continuity: int = Field(ge=0, le=100)
    tracking_continuity_rating: Literal["high", "moderate", "low"]
    response_timing_mean_ms: Optional[int] = Field(default=None, description="Absent when not captured")
    pattern_stability: int = Field(ge=0, le=100)
    verdict: str


class MonthSummary(WireModel):
    month: str = Field(description="YYYY-MM")
    stability: int
    volatility: int


class ArtifactSummary(WireModel):
    subject_id: str
    observation_period: ObservationPeriod
    reporting_quality: ReportingQuality
    monthly_breakdown: List[MonthSummary] = Field(default_factory=list)
    narrative: Optional[str] = None


class LegalNotice(WireModel):
    confidential: bool = True
    copyright: str = copy.COPYRIGHT
    disclaimer: str = copy.JSON_DISCLAIMER


class Signature(WireModel):
    algorithm: Literal["sha256"] = "sha256"
    hash: str
    signed_at: str


class ArtifactJSON(WireModel):
    schema_id: str = Field(default=ARTIFACT_SCHEMA, alias="$schema")
    type: str = ARTIFACT_TYPE
    id: str
    version: str = ARTIFACT_VERSION
    metadata: MetadataJSON
    summary: ArtifactSummary
    legal: LegalNotice = Field(default_factory=LegalNotice)
    signature: Signature


def summary_from_dynamic(data: DynamicData, narrative: Optional[str] = None) -> ArtifactSummary:
    return ArtifactSummary(
        subject_id=format_subject_id(data.subject_id),
        observation_period=ObservationPeriod(
            start=data.observation_start.isoformat(),
            end=data.observation_end.isoformat(),
            status=data.window_status.value,
        ),
        reporting_quality=ReportingQuality(
            tracking_continuity=data.tracking_continuity_percent,
            tracking_continuity_rating=data.tracking_continuity_rating.value,
            pattern_stability=data.pattern_stability_percent,
            verdict=format_verdict(data.verdict),
        ),
        monthly_breakdown=[
            MonthSummary(month=m.month, stability=m.stability, volatility=m.volatility)
            for m in data.monthly_breakdown
        ],
        narrative=narrative,
    )


def create_artifact_json(metadata: ArtifactMetadata, summary: ArtifactSummary) -> ArtifactJSON:
    """
    Pair a stamped document's metadata with its summary. The summary must
    describe the same observation window as the metadata.
    """
    period = summary.observation_period
    if (period.start, period.end) != (metadata.observation_start, metadata.observation_end):
        raise ValueError(
            f"Summary window {period.start} to {period.end} does not match "
            f"metadata window {metadata.observation_start} to {metadata.observation_end}"
        )

    return ArtifactJSON(
        id="cap-" + re.sub(r"\D", "", metadata.generated_at),
        metadata=MetadataJSON(
            generated_at=metadata.generated_at,
            protocol=metadata.protocol,
            observation_start=metadata.observation_start,
            observation_end=metadata.observation_end,
            integrity_hash=metadata.integrity_hash,
        ),
        summary=summary,
        signature=Signature(hash=metadata.integrity_hash, signed_at=metadata.generated_at),
    )


def serialize_artifact_json(artifact: ArtifactJSON) -> str:
    return artifact.model_dump_json(by_alias=True, exclude_none=True, indent=2)
