"""
Narrative for captured series

Purpose:
- Build the NarrativeFields of a document that was rendered from raw
  series instead of check-ins (CLI --input, library callers)

Important:
- Every field comes from the series and the observation window; nothing
  is borrowed from the reference narrative
- One sample is taken as one observed day
"""

from __future__ import annotations

from datetime import date
from typing import Sequence

from capacity_artifacts.charts.zones import convert_series
from capacity_artifacts.documents.narrative import NarrativeFields
from capacity_artifacts.dynamic.compute import (
    month_labels,
    pattern_stability,
    tracking_continuity,
    verdict_for,
)
from capacity_artifacts.dynamic.format import (
    RESPONSE_TIMING,
    format_observation_window,
    format_observation_window_display,
    format_pattern_stability,
    format_tracking_continuity,
    format_verdict,
    format_window_status,
)
from capacity_artifacts.dynamic.models import WindowStatus
from capacity_artifacts.models.capacity import Scale
from capacity_artifacts.models.render_config import DEFAULT_CONFIG, RenderConfig
from capacity_artifacts.utils.logger import get_logger

logger = get_logger(__name__)


def narrative_from_series(
    series: Sequence[float],
    scale: Scale,
    subject_id: str,
    start: date,
    end: date,
    today: date,
    config: RenderConfig = DEFAULT_CONFIG,
) -> NarrativeFields:
    if end < start:
        raise ValueError(f"Observation window ends ({end}) before it starts ({start})")

    total_days = (end - start).days + 1
    continuity, rating = tracking_continuity(min(len(series), total_days), total_days)
    stability, _ = pattern_stability(convert_series(series, scale, Scale.PERCENT, config))
    status = WindowStatus.CLOSED if end < today else WindowStatus.OPEN

    logger.info(
        "Series narrative | subject=%s window=%s..%s continuity=%d%% stability=%d%%",
        subject_id, start, end, continuity, stability,
    )

    return NarrativeFields(
        observation_window=format_observation_window(start, end),
        window_status=format_window_status(status),
        observation_window_display=format_observation_window_display(start, end),
        subject_id=subject_id,
        tracking_continuity=format_tracking_continuity(continuity, rating),
        response_timing=RESPONSE_TIMING,
        pattern_stability=format_pattern_stability(stability),
        verdict=format_verdict(verdict_for(stability, continuity)),
        x_labels=month_labels(start, end),
    )
