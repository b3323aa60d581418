"""
Artifact rendering use case

Purpose:
- Run the full chain for one variant:
  series -> points -> charts -> document -> stamped document
- Own the chart id policy for multi-chart documents

Important:
- Every chart in a document shares one gradient id prefix; only the first
  chart carries the <defs>, later charts reference them
- Chart ids are positional, never derived from subject ids
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from capacity_artifacts.charts.composer import (
    ChartOptions,
    build_chart_element,
    chart_points_for_series,
)
from capacity_artifacts.charts.zones import convert_series
from capacity_artifacts.documents.narrative import NarrativeFields, check_window, window_dates
from capacity_artifacts.documents.pagination import plan as plan_pages
from capacity_artifacts.documents.stamper import (
    DEFAULT_OBSERVATION_END,
    DEFAULT_OBSERVATION_START,
    TIMESTAMP_FORMAT,
    StampedDocument,
    format_utc_timestamp,
    stamp,
)
from capacity_artifacts.documents.templater import build_document
from capacity_artifacts.documents.variants import (
    AnonymizedCohort,
    NamedGroup,
    SingleSubject,
    Variant,
)
from capacity_artifacts.dynamic.series import narrative_from_series
from capacity_artifacts.exceptions import InsufficientDataError
from capacity_artifacts.markup.nodes import Element
from capacity_artifacts.models.capacity import Scale, SubjectRecord
from capacity_artifacts.models.render_config import DEFAULT_CONFIG, RenderConfig
from capacity_artifacts.utils.formatting import round_half_up
from capacity_artifacts.utils.logger import get_logger

logger = get_logger(__name__)

DOCUMENT_CHART_PREFIX = "cap"


def aggregate_series(
    subjects: Sequence[SubjectRecord],
    config: RenderConfig = DEFAULT_CONFIG,
) -> List[float]:
    """
    Per-day mean of all subjects on the percent scale, rounded half-up.
    Series are aligned on their most recent samples (truncated to the
    shortest).
    """
    if not subjects:
        raise InsufficientDataError("Cannot aggregate an empty cohort", available=0, required=1)

    length = min(len(s.series) for s in subjects)
    if length == 0:
        raise InsufficientDataError("A cohort subject has an empty series", available=0, required=1)

    matrix = np.array([
        convert_series(s.series[len(s.series) - length:], s.scale, Scale.PERCENT, config)
        for s in subjects
    ])
    return [float(round_half_up(float(v))) for v in matrix.mean(axis=0)]


def _chart(
    record: SubjectRecord,
    index: int,
    x_labels: Tuple[str, str, str],
    config: RenderConfig,
) -> Element:
    options = ChartOptions(
        id_prefix=DOCUMENT_CHART_PREFIX,
        include_defs=index == 0,
        x_labels=x_labels,
    )
    points = chart_points_for_series(record.series, record.scale, config)
    return build_chart_element(points, options, config)


def build_charts(
    variant: Variant,
    narrative: NarrativeFields,
    config: RenderConfig = DEFAULT_CONFIG,
) -> Tuple[List[Element], Optional[Element]]:
    """Chart elements for every subject of `variant`, plus the cohort aggregate."""
    labels = narrative.x_labels

    if isinstance(variant, SingleSubject):
        return [_chart(variant.record, 0, labels, config)], None

    if isinstance(variant, NamedGroup):
        return [_chart(m.record, i, labels, config) for i, m in enumerate(variant.members)], None

    if isinstance(variant, AnonymizedCohort):
        charts = [_chart(s, i, labels, config) for i, s in enumerate(variant.subjects)]
        aggregate_record = SubjectRecord(
            subject_id="aggregate",
            color_token="",
            series=tuple(aggregate_series(variant.subjects, config)),
        )
        aggregate = _chart(aggregate_record, len(charts), labels, config)
        return charts, aggregate

    raise ValueError(f"Unsupported document variant: {variant!r}")


def derive_narrative(
    variant: Variant,
    start: date,
    end: date,
    today: date,
    config: RenderConfig = DEFAULT_CONFIG,
) -> NarrativeFields:
    """
    Narrative computed from the variant's own series. Groups and cohorts
    use their aggregate series and their group/cohort id.
    """
    if isinstance(variant, SingleSubject):
        record = variant.record
        return narrative_from_series(
            record.series, record.scale, record.subject_id, start, end, today, config
        )

    if isinstance(variant, NamedGroup):
        series = aggregate_series([m.record for m in variant.members], config)
        return narrative_from_series(series, Scale.PERCENT, variant.group_id, start, end, today, config)

    if isinstance(variant, AnonymizedCohort):
        series = aggregate_series(variant.subjects, config)
        return narrative_from_series(series, Scale.PERCENT, variant.cohort_id, start, end, today, config)

    raise ValueError(f"Unsupported document variant: {variant!r}")


def _observation_window(
    narrative: Optional[NarrativeFields],
    overrides: Mapping[str, str],
) -> Tuple[str, str]:
    """Overrides first, then the narrative's own window, then the defaults."""
    if narrative is not None:
        start, end = window_dates(narrative)
    else:
        start, end = DEFAULT_OBSERVATION_START, DEFAULT_OBSERVATION_END
    return overrides.get("observation_start") or start, overrides.get("observation_end") or end


def _generated_on(generated_at: str) -> date:
    try:
        return datetime.strptime(generated_at, TIMESTAMP_FORMAT).date()
    except ValueError:
        raise ValueError(f"generated_at must look like '2026-01-10 14:02:41 UTC', got {generated_at!r}") from None


def render_artifact(
    variant: Variant,
    narrative: Optional[NarrativeFields] = None,
    metadata_overrides: Optional[Mapping[str, str]] = None,
    *,
    config: RenderConfig = DEFAULT_CONFIG,
    now: Optional[Callable[[], datetime]] = None,
) -> StampedDocument:
    """
    Render and stamp one artifact.

    narrative=None derives every narrative field from the variant's series
    and the metadata window. A supplied narrative must cover the same
    window as the metadata; its dates fill the metadata unless overridden.
    """
    logger.info("Rendering %s artifact", variant.kind)

    pagination = None
    if isinstance(variant, AnonymizedCohort):
        pagination = plan_pages(variant.seat_count)
        logger.info(
            "Cohort layout | seats=%d pages=%d density=%s",
            variant.seat_count, pagination.page_count, pagination.density.value,
        )

    overrides = dict(metadata_overrides or {})
    if not overrides.get("generated_at"):
        clock = now or (lambda: datetime.now(timezone.utc))
        overrides["generated_at"] = format_utc_timestamp(clock())

    start, end = _observation_window(narrative, overrides)
    overrides["observation_start"], overrides["observation_end"] = start, end

    if narrative is None:
        narrative = derive_narrative(
            variant,
            date.fromisoformat(start),
            date.fromisoformat(end),
            _generated_on(overrides["generated_at"]),
            config,
        )
    else:
        check_window(narrative, start, end)

    charts, aggregate = build_charts(variant, narrative, config)

    def builder(metadata) -> str:
        return build_document(
            metadata,
            charts,
            narrative,
            variant,
            aggregate=aggregate,
            plan=pagination,
            config=config,
        )

    return stamp(builder, overrides, now=now)
