# src/capacity_artifacts/documents/stamper.py
"""
Metadata/Integrity Stamper

Attaches a generation timestamp and an integrity hash to a document.

- no overrides: timestamp from the UTC clock, hash = sha256 of the document
  rendered with an empty hash slot
- overrides: used verbatim (reference documents freeze both)
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Mapping, Optional

from capacity_artifacts.models.capacity import ArtifactMetadata
from capacity_artifacts.utils.config import config as env_config
from capacity_artifacts.utils.logger import get_logger

logger = get_logger(__name__)

DocumentBuilder = Callable[[ArtifactMetadata], str]

DEFAULT_OBSERVATION_START = "2025-10-01"
DEFAULT_OBSERVATION_END = "2025-12-31"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


@dataclass(frozen=True)
class StampedDocument:
    document: str
    metadata: ArtifactMetadata


def format_utc_timestamp(moment: datetime) -> str:
    """YYYY-MM-DD HH:MM:SS UTC. Naive datetimes are taken as UTC."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)


def compute_integrity_hash(document: str) -> str:
    return "sha256:" + hashlib.sha256(document.encode("utf-8")).hexdigest()


def stamp(
    document_builder: DocumentBuilder,
    metadata_overrides: Optional[Mapping[str, str]] = None,
    *,
    now: Optional[Callable[[], datetime]] = None,
) -> StampedDocument:
    """
    Render `document_builder(metadata)` with a complete ArtifactMetadata.

    `metadata_overrides` keys are ArtifactMetadata field names. An override
    for integrity_hash skips hashing entirely. `now` replaces the clock.
    """
    overrides = dict(metadata_overrides or {})
    unknown = set(overrides) - set(ArtifactMetadata.__dataclass_fields__)
    if unknown:
        raise ValueError(f"Unknown metadata fields: {sorted(unknown)}")

    clock = now or (lambda: datetime.now(timezone.utc))
    metadata = ArtifactMetadata(
        generated_at=overrides.get("generated_at") or format_utc_timestamp(clock()),
        protocol=overrides.get("protocol") or env_config.DEFAULT_PROTOCOL,
        observation_start=overrides.get("observation_start") or DEFAULT_OBSERVATION_START,
        observation_end=overrides.get("observation_end") or DEFAULT_OBSERVATION_END,
        integrity_hash=overrides.get("integrity_hash") or "",
    )

    if not metadata.integrity_hash:
        unsigned = document_builder(metadata)
        metadata = replace(metadata, integrity_hash=compute_integrity_hash(unsigned))
        logger.info("Stamped document | generated=%s hash=%s", metadata.generated_at, metadata.integrity_hash)

    return StampedDocument(document=document_builder(metadata), metadata=metadata)
