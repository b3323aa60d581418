# src/capacity_artifacts/documents/pagination.py
"""
Pagination Planner

Fixed grid: items_per_row x rows_per_page per page. Every page but the last
is full. Density is chosen once per document from the page count.
"""

from __future__ import annotations

from dataclasses import dataclass

from capacity_artifacts.exceptions import EmptyCohortError
from capacity_artifacts.models.capacity import DensityMode, PaginationPlan
from capacity_artifacts.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GridLayout:
    items_per_row: int
    rows_per_page: int

    @property
    def items_per_page(self) -> int:
        return self.items_per_row * self.rows_per_page


COHORT_LAYOUT = GridLayout(items_per_row=5, rows_per_page=2)


def plan(subject_count: int, layout: GridLayout = COHORT_LAYOUT) -> PaginationPlan:
    if subject_count <= 0:
        raise EmptyCohortError(
            f"Cannot paginate {subject_count} subjects; at least one is required"
        )

    per_page = layout.items_per_page
    page_count = -(-subject_count // per_page)     # ceil
    last = subject_count - per_page * (page_count - 1)
    page_sizes = (per_page,) * (page_count - 1) + (last,)

    density = DensityMode.COMPACT if page_count > 1 else DensityMode.STANDARD

    logger.debug(
        "Pagination | subjects=%d pages=%d density=%s",
        subject_count, page_count, density.value,
    )

    return PaginationPlan(
        subject_count=subject_count,
        page_count=page_count,
        items_per_page=per_page,
        rows_per_page=layout.rows_per_page,
        items_per_row=layout.items_per_row,
        density=density,
        page_sizes=page_sizes,
    )
