# src/capacity_artifacts/reference/fixtures.py
"""
Frozen demonstration data behind the reference documents.

Everything here is literal or integer arithmetic: no RNG, no clock, no
floating-point trigonometry. Changing a value changes a golden master.
"""

from typing import List, Tuple

from capacity_artifacts.documents.variants import AnonymizedCohort, GroupMember, NamedGroup
from capacity_artifacts.models.capacity import SubjectRecord

# 90 days, percent scale
SINGLE_SUBJECT_HISTORY = (
    20, 25, 22, 28, 30, 34, 32, 38, 40, 42,
    45, 44, 48, 50, 52, 55, 54, 58, 60, 62,
    64, 66, 68, 70, 72, 71, 74, 73, 75, 76,
    74, 72, 70, 68, 66, 64, 62, 60, 58, 56,
    55, 54, 52, 50, 52, 54, 56, 55, 57, 58,
    60, 62, 61, 63, 62, 64, 63, 62, 64, 66,
    67, 68, 70, 69, 71, 72, 73, 72, 74, 75,
    76, 77, 78, 77, 79, 80, 79, 81, 80, 82,
    81, 83, 82, 84, 83, 85, 84, 86, 85, 86,
)

GROUP_HISTORIES = {
    # Stable in the stretched range
    "mia": (
        55, 50, 45, 50, 60, 65, 55, 50, 40, 45,
        50, 55, 60, 50, 45, 50, 55, 50, 45, 40,
        45, 50, 55, 60, 55, 50, 50, 45, 50, 55,
        50, 45, 40, 45, 50, 55, 60, 55, 50, 45,
        50, 55, 50, 45, 50, 55, 50, 45, 40, 45,
        50, 55, 60, 55, 50, 45, 50, 55, 50, 45,
        40, 45, 50, 55, 50, 45, 50, 55, 60, 55,
        50, 45, 50, 55, 50, 45, 40, 45, 50, 55,
        50, 45, 50, 55, 60, 55, 50, 45, 50, 50,
    ),
    # Resourced -> depleted
    "zach": (
        90, 85, 90, 80, 85, 75, 80, 70, 75, 65,
        70, 65, 60, 65, 55, 60, 50, 55, 50, 45,
        50, 45, 40, 45, 40, 35, 40, 35, 30, 35,
        30, 35, 30, 25, 30, 25, 30, 25, 20, 25,
        20, 25, 20, 25, 20, 15, 20, 15, 20, 15,
        20, 15, 20, 15, 10, 15, 10, 15, 20, 15,
        10, 15, 10, 15, 10, 15, 10, 5, 10, 15,
        10, 5, 10, 15, 10, 5, 10, 5, 10, 5,
        10, 5, 10, 5, 0, 5, 10, 5, 0, 5,
    ),
    # Depleted -> resourced
    "lily": (
        20, 25, 20, 25, 30, 25, 30, 35, 30, 35,
        40, 35, 40, 45, 40, 45, 50, 45, 50, 55,
        50, 55, 60, 55, 60, 65, 60, 65, 70, 65,
        70, 65, 70, 75, 70, 75, 70, 75, 80, 75,
        80, 75, 80, 75, 80, 85, 80, 85, 80, 85,
        80, 85, 90, 85, 90, 85, 90, 85, 90, 95,
        90, 85, 90, 95, 90, 85, 90, 95, 90, 95,
        90, 95, 90, 95, 90, 95, 100, 95, 90, 95,
        100, 95, 90, 95, 100, 95, 90, 95, 100, 95,
    ),
    # Volatile: must keep its zig-zag through downsampling
    "tyler": (
        60, 40, 70, 30, 80, 45, 55, 20, 75, 35,
        65, 25, 85, 40, 50, 15, 70, 30, 60, 45,
        75, 20, 55, 35, 80, 25, 65, 40, 50, 20,
        70, 30, 60, 45, 75, 15, 55, 35, 80, 25,
        65, 40, 50, 20, 70, 30, 60, 45, 75, 15,
        55, 35, 80, 25, 65, 40, 50, 20, 70, 30,
        60, 45, 75, 15, 55, 35, 80, 25, 65, 40,
        50, 20, 70, 30, 60, 45, 75, 15, 55, 35,
        80, 25, 65, 40, 50, 20, 70, 30, 60, 40,
    ),
    # Gradual decline with a recent dip
    "emma": (
        80, 75, 80, 75, 70, 75, 70, 65, 70, 65,
        70, 65, 60, 65, 60, 65, 60, 55, 60, 55,
        60, 55, 50, 55, 50, 55, 50, 45, 50, 45,
        50, 45, 50, 45, 40, 45, 40, 45, 40, 35,
        40, 35, 40, 35, 40, 35, 30, 35, 30, 35,
        30, 35, 30, 25, 30, 25, 30, 25, 30, 25,
        20, 25, 20, 25, 20, 25, 20, 15, 20, 15,
        20, 15, 20, 15, 10, 15, 10, 15, 10, 15,
        10, 5, 10, 5, 10, 5, 10, 5, 10, 10,
    ),
}

# (key, display name, handle, trend, participation, notes)
GROUP_ROSTER = (
    ("mia", "Mia Anderson", "@mia", "Flat", "6/7", "Sensory sensitivity"),
    ("zach", "Zach Teguns", "@zach", "Declining", "7/7", "Sleep disruption"),
    ("lily", "Lily Teguns", "@lily", "Improving", "5/5", "Steady progress"),
    ("tyler", "Tyler Ramirez", "@tyler", "Volatile", "5/5", "Transition support"),
    ("emma", "Emily Zhang", "@emma", "Declining", "5/5", "Schedule changes"),
)

GROUP_COLORS = ("#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#DDA0DD")

AVATAR_COLORS = (
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FFEAA7",
    "#DDA0DD", "#98D8C8", "#F7DC6F", "#BB8FCE", "#85C1E9",
    "#F8B500", "#00CED1", "#FF7F50", "#9370DB", "#20B2AA",
    "#FFB6C1", "#87CEEB", "#DEB887", "#7B68EE", "#48D1CC",
)

# 30% resourced, 20% stretched, 10% depleted, 20% improving, 10% declining, 10% volatile
SEAT_PATTERNS = (
    "stable_high", "stable_high", "stable_high",
    "stable_mid", "stable_mid",
    "stable_low",
    "improving", "improving",
    "declining",
    "volatile",
)

COHORT_DAYS = 90


def _jitter(day: int, seat: int) -> int:
    """Deterministic noise in [-8, 8]."""
    return (day * 37 + seat * 101) % 17 - 8


def _pattern_value(pattern: str, day: int) -> int:
    if pattern == "stable_high":
        return 80
    if pattern == "stable_mid":
        return 50
    if pattern == "stable_low":
        return 25
    if pattern == "improving":
        return 20 + (day * 60) // COHORT_DAYS
    if pattern == "declining":
        return 85 - (day * 40) // COHORT_DAYS
    if pattern == "volatile":
        return 75 if day % 2 else 25
    raise ValueError(f"Unknown seat pattern: {pattern}")


def seat_history(pattern: str, seat: int, days: int = COHORT_DAYS) -> Tuple[int, ...]:
    return tuple(
        max(5, min(95, _pattern_value(pattern, day) + _jitter(day, seat)))
        for day in range(days)
    )


def reference_seats(seat_count: int) -> List[SubjectRecord]:
    return [
        SubjectRecord(
            subject_id=f"cohort-subject-{i + 1:03d}",
            color_token=AVATAR_COLORS[i % len(AVATAR_COLORS)],
            series=seat_history(SEAT_PATTERNS[i % len(SEAT_PATTERNS)], i),
        )
        for i in range(seat_count)
    ]


def reference_single_record() -> SubjectRecord:
    return SubjectRecord(
        subject_id="34827-AFJ",
        color_token="#00E5FF",
        series=SINGLE_SUBJECT_HISTORY,
    )


def reference_group() -> NamedGroup:
    members = tuple(
        GroupMember(
            display_name=name,
            handle=handle,
            trend=trend,
            participation=participation,
            notes=notes,
            record=SubjectRecord(
                subject_id=key,
                color_token=GROUP_COLORS[i],
                series=GROUP_HISTORIES[key],
            ),
        )
        for i, (key, name, handle, trend, participation, notes) in enumerate(GROUP_ROSTER)
    )
    return NamedGroup(
        group_id="SSG-2025-Q4",
        group_name="Sensory Support Group",
        coordinator="Emily Zhang",
        members=members,
    )


def reference_cohort(seat_count: int) -> AnonymizedCohort:
    return AnonymizedCohort(
        subjects=tuple(reference_seats(seat_count)),
        cohort_id=f"BND-{seat_count}-2025-Q4",
    )
