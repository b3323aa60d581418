from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class NarrativeFields:
    """
    Every templated string of a document.

    There are no optional fields: a document is rendered from exactly one
    complete set, computed or REFERENCE_NARRATIVE, never a mix.
    """
    observation_window: str             # "YYYY-MM-DD to YYYY-MM-DD"
    window_status: str                  # "(Closed)" / "(Open)"
    observation_window_display: str     # "Mon D, YYYY – Mon D, YYYY"
    subject_id: str
    tracking_continuity: str            # "85% (High Reliability)"
    response_timing: str
    pattern_stability: str
    verdict: str
    x_labels: Tuple[str, str, str]


REFERENCE_NARRATIVE = NarrativeFields(
    observation_window="2025-10-01 to 2025-12-31",
    window_status="(Closed)",
    observation_window_display="Oct 1, 2025 – Dec 31, 2025",
    subject_id="34827-AFJ",
    tracking_continuity="85% (High Reliability)",
    response_timing="Mean 4.2s",
    pattern_stability="92%",
    verdict="Interpretable Capacity Trends",
    x_labels=("Oct", "Nov", "Dec"),
)


def window_dates(narrative: NarrativeFields) -> Tuple[str, str]:
    """(start, end) ISO dates of `narrative.observation_window`."""
    start, sep, end = narrative.observation_window.partition(" to ")
    if not sep:
        raise ValueError(f"Malformed observation window: {narrative.observation_window!r}")
    return start, end


def check_window(narrative: NarrativeFields, start: str, end: str) -> None:
    """Raise ValueError unless the narrative covers exactly start..end."""
    if window_dates(narrative) != (start, end):
        raise ValueError(
            f"Narrative window {narrative.observation_window!r} does not match "
            f"metadata window '{start} to {end}'"
        )
