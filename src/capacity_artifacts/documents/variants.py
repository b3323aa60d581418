"""
Document variants, one tagged type per artifact kind.

The templater dispatches on `kind`; the variants only carry data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Tuple, Union

from capacity_artifacts.models.capacity import SubjectRecord


@dataclass(frozen=True)
class SingleSubject:
    kind: ClassVar[str] = "single"

    record: SubjectRecord


@dataclass(frozen=True)
class GroupMember:
    display_name: str
    handle: str
    trend: str              # free text: "Flat", "Declining", ...
    participation: str      # "6/7"
    notes: str
    record: SubjectRecord


@dataclass(frozen=True)
class NamedGroup:
    kind: ClassVar[str] = "group"

    group_id: str
    group_name: str
    coordinator: str
    members: Tuple[GroupMember, ...]

    def __post_init__(self):
        object.__setattr__(self, "members", tuple(self.members))
        if not self.members:
            raise ValueError("A named group needs at least one member")


@dataclass(frozen=True)
class AnonymizedCohort:
    """
    Seats are rendered from color tokens and 1-based positions only.
    `subject_id` values are used for nothing but ordering upstream and
    never reach the document.
    """
    kind: ClassVar[str] = "cohort"

    subjects: Tuple[SubjectRecord, ...]
    cohort_id: str

    def __post_init__(self):
        object.__setattr__(self, "subjects", tuple(self.subjects))

    @property
    def seat_count(self) -> int:
        return len(self.subjects)


Variant = Union[SingleSubject, NamedGroup, AnonymizedCohort]
