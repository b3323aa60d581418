"""
DynamicData -> NarrativeFields.

Every field is clamped, length-limited or validated here so the templater
can treat the result exactly like the reference narrative.
"""

from __future__ import annotations

import re
from datetime import date

from capacity_artifacts.documents.narrative import NarrativeFields
from capacity_artifacts.dynamic.compute import MONTH_ABBR
from capacity_artifacts.dynamic.models import ContinuityRating, DynamicData, WindowStatus
from capacity_artifacts.models.capacity import SubjectRecord
from capacity_artifacts.utils.formatting import round_half_up

MAX_DISPLAY_WINDOW = 40
MAX_VERDICT = 40
VERDICT_FALLBACK = "Insufficient Data"
UNKNOWN_SUBJECT_ID = "00000-UNK"

# Check-ins carry no response latency
RESPONSE_TIMING = "Not Captured"

_SUBJECT_ID = re.compile(r"[0-9]{5}-[A-Z]{3}")

_RELIABILITY = {
    ContinuityRating.HIGH: "High Reliability",
    ContinuityRating.MODERATE: "Moderate Reliability",
    ContinuityRating.LOW: "Low Reliability",
}


def _clamp_percent(value) -> int:
    return max(0, min(100, round_half_up(value)))


def format_observation_window(start: date, end: date) -> str:
    return f"{start.isoformat()} to {end.isoformat()}"


def format_display_date(day: date) -> str:
    return f"{MONTH_ABBR[day.month - 1]} {day.day}, {day.year}"


def format_observation_window_display(start: date, end: date) -> str:
    text = f"{format_display_date(start)} – {format_display_date(end)}"
    return text[:MAX_DISPLAY_WINDOW]


def format_tracking_continuity(percent, rating: ContinuityRating) -> str:
    return f"{_clamp_percent(percent)}% ({_RELIABILITY.get(rating, 'Unknown')})"


def format_pattern_stability(percent) -> str:
    return f"{_clamp_percent(percent)}%"


def format_verdict(verdict: str) -> str:
    if not verdict or not verdict.strip():
        return VERDICT_FALLBACK
    return verdict[:MAX_VERDICT]


def format_subject_id(subject_id: str) -> str:
    return subject_id if _SUBJECT_ID.fullmatch(subject_id or "") else UNKNOWN_SUBJECT_ID


def format_window_status(status: WindowStatus) -> str:
    return "(Closed)" if status is WindowStatus.CLOSED else "(Open)"


def format_dynamic_data(data: DynamicData) -> NarrativeFields:
    return NarrativeFields(
        observation_window=format_observation_window(data.observation_start, data.observation_end),
        window_status=format_window_status(data.window_status),
        observation_window_display=format_observation_window_display(
            data.observation_start, data.observation_end
        ),
        subject_id=format_subject_id(data.subject_id),
        tracking_continuity=format_tracking_continuity(
            data.tracking_continuity_percent, data.tracking_continuity_rating
        ),
        response_timing=RESPONSE_TIMING,
        pattern_stability=format_pattern_stability(data.pattern_stability_percent),
        verdict=format_verdict(data.verdict),
        x_labels=tuple(data.x_labels),
    )


def to_subject_record(data: DynamicData) -> SubjectRecord:
    """The computed chart values as the subject's (already six-point) series."""
    return SubjectRecord(
        subject_id=format_subject_id(data.subject_id),
        color_token="",
        series=data.chart_values,
    )
