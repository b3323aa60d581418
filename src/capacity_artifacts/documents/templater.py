# src/capacity_artifacts/documents/templater.py
"""
Document Templater: embeds composed charts into one full document.

One entry point, build_document(), dispatches on the variant's `kind`.
Every page builder returns node trees; serialization happens once at the
end through markup.nodes.

Pure function: no I/O, no clock. The caller supplies metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from capacity_artifacts.charts.zones import band_for, to_percent
from capacity_artifacts.documents import copy
from capacity_artifacts.documents.narrative import NarrativeFields, check_window
from capacity_artifacts.documents.pagination import plan as plan_pages
from capacity_artifacts.documents.styles import AVATAR_SIZE, stylesheet
from capacity_artifacts.documents.variants import (
    AnonymizedCohort,
    NamedGroup,
    SingleSubject,
    Variant,
)
from capacity_artifacts.markup.nodes import Element, Raw, el, render_document
from capacity_artifacts.models.capacity import (
    ArtifactMetadata,
    DensityMode,
    PaginationPlan,
    SubjectRecord,
    ZoneBand,
)
from capacity_artifacts.models.render_config import DEFAULT_CONFIG, RenderConfig
from capacity_artifacts.models.zone_theme import ZONE_THEME
from capacity_artifacts.utils.formatting import fmt_coord, fmt_percent


@dataclass(frozen=True)
class CohortStats:
    resourced: int
    stretched: int
    depleted: int
    average_percent: Optional[float]


def cohort_stats(
    subjects: Sequence[SubjectRecord],
    config: RenderConfig = DEFAULT_CONFIG,
) -> CohortStats:
    """
    Band counts of each subject's current value plus the average current
    value on the percent scale. Uses the same classifier as chart points.
    """
    counts = {band: 0 for band in ZoneBand}
    percents = []
    for s in subjects:
        # Classified on the subject's own scale; converting first could cross a threshold
        counts[band_for(s.current_value, s.scale, config)] += 1
        percents.append(to_percent(s.current_value, s.scale, config))

    average = sum(percents) / len(percents) if percents else None
    return CohortStats(
        resourced=counts[ZoneBand.RESOURCED],
        stretched=counts[ZoneBand.STRETCHED],
        depleted=counts[ZoneBand.DEPLETED],
        average_percent=average,
    )


# ------------------------------------------------------------
# Shared blocks
# ------------------------------------------------------------
def _coc_line(label: str, value: Element, wide: bool = False) -> Element:
    return el(
        "div",
        el("span", label, class_="coc-label"),
        value,
        class_="coc-line coc-wide" if wide else "coc-line",
    )


def _chain_of_custody(
    metadata: ArtifactMetadata,
    window: str,
    window_status: str,
    extra: Sequence[Element] = (),
) -> Element:
    grid = el("div", class_="coc-grid")
    grid.append(
        _coc_line("Generated:", el("span", metadata.generated_at, class_="coc-value-mono")),
        _coc_line("Protocol:", el("span", metadata.protocol, class_="coc-value")),
        _coc_line(
            "Observation Window:",
            el("span", f"{window} ", el("em", window_status), class_="coc-value"),
        ),
    )
    grid.extend(extra)
    grid.append(
        _coc_line("Status:", el("span", copy.SNAPSHOT_STATUS, class_="coc-status")),
        _coc_line(
            "Integrity Hash:",
            el("span", metadata.integrity_hash, class_="coc-value-mono"),
            wide=True,
        ),
    )
    return el("div", grid, class_="chain-of-custody")


def _legal_footer(body: str, *lead: Element) -> Element:
    return el(
        "div",
        *lead,
        el(
            "div",
            el("div", copy.LEGAL_TITLE, class_="legal-title"),
            el("div", body, class_="legal-body"),
            el("div", copy.COPYRIGHT, class_="legal-rights"),
            class_="legal-block",
        ),
        class_="footer-section",
        data_testid="footer-section",
    )


def _bullet_list(items: Sequence[str]) -> Element:
    return el("ul", *(el("li", item) for item in items), class_="capacity-definition-list")


def _info_grid(pairs: Sequence[tuple]) -> Element:
    grid = el("div", class_="info-grid")
    for label, value, mono in pairs:
        grid.append(
            el("span", label, class_="info-label"),
            el("span", value, class_="info-value-mono" if mono else "info-value"),
        )
    return grid


# ------------------------------------------------------------
# Single subject
# ------------------------------------------------------------
def _audit_row(label: str, value: str, note: str) -> Element:
    return el(
        "div",
        el("span", label, class_="audit-label"),
        el("span", value, class_="audit-value"),
        el("span", note, class_="audit-note"),
        class_="audit-row",
    )


def _single_pages(metadata, charts, narrative, variant, aggregate, pagination, config) -> List[Element]:
    if len(charts) != 1:
        raise ValueError(f"Single-subject document takes exactly 1 chart, got {len(charts)}")

    definition = el(
        "div",
        el("div", copy.CAPACITY_DEFINITION_TITLE, class_="capacity-definition-title"),
        el(
            "div",
            el("p", copy.CAPACITY_DEFINITION_LEAD),
            el("p", copy.CAPACITY_DEFINITION_EMPHASIS, class_="capacity-definition-emphasis"),
            el("p", copy.CAPACITY_DEFINITION_LIST_INTRO),
            _bullet_list(copy.CAPACITY_DEFINITION_ITEMS),
            el("p", copy.CAPACITY_DEFINITION_FOOTER, class_="capacity-definition-footer"),
            class_="capacity-definition-body",
        ),
        class_="capacity-definition",
    )

    audit = el(
        "div",
        el("h3", copy.AUDIT_TITLE, class_="audit-title"),
        _audit_row("Tracking Continuity:", narrative.tracking_continuity, copy.TRACKING_NOTE),
        _audit_row("Response Timing:", narrative.response_timing, copy.TIMING_NOTE),
        _audit_row("Capacity Pattern Stability:", narrative.pattern_stability, copy.STABILITY_NOTE),
        el(
            "div",
            el("span", "Pattern Summary:", class_="audit-label"),
            el("span", narrative.verdict, class_="audit-verdict"),
            class_="audit-row verdict-row",
        ),
        class_="audit-panel",
    )

    chart_card = el(
        "div",
        el(
            "div",
            el(
                "div",
                copy.CHART_HEADER,
                el("span", copy.CHART_HEADER_SUB, class_="chart-header-sub"),
                class_="chart-header",
            ),
            charts[0],
            class_="chart-card",
        ),
        class_="charts-panel",
    )

    how_to_use = el(
        "div",
        el("div", copy.HOW_TO_USE_TITLE, class_="capacity-definition-title"),
        el(
            "div",
            el("p", copy.HOW_TO_USE_LEAD),
            el("p", copy.HOW_TO_USE_LIST_INTRO),
            _bullet_list(copy.HOW_TO_USE_ITEMS),
            el("p", copy.HOW_TO_USE_FOOTER, class_="capacity-definition-footer"),
            class_="capacity-definition-body",
        ),
        class_="capacity-definition how-to-use",
    )

    footer = _legal_footer(
        copy.SINGLE_LEGAL_BODY,
        el("div", copy.PROVIDER_TITLE, class_="provider-title"),
        el(
            "div",
            copy.PROVIDER_LEAD,
            el("em", copy.PROVIDER_EMPHASIS),
            copy.PROVIDER_TAIL,
            class_="provider-body",
        ),
        how_to_use,
    )

    page = el(
        "div",
        el("h1", copy.SINGLE_TITLE, class_="artifact-title"),
        _chain_of_custody(metadata, narrative.observation_window, narrative.window_status),
        definition,
        el("h2", copy.SUMMARY_TITLE, class_="section-title"),
        _info_grid([
            ("Patient ID:", narrative.subject_id, True),
            ("Observation Period:", narrative.observation_window_display, False),
        ]),
        el("div", audit, chart_card, class_="main-content"),
        footer,
        class_="page",
        data_page=1,
    )
    return [page]


# ------------------------------------------------------------
# Named group
# ------------------------------------------------------------
def _member_detail(label: str, *value) -> Element:
    return el("div", el("span", label, class_="member-detail-label"), " ", *value, class_="member-detail")


def _group_pages(metadata, charts, narrative, variant: NamedGroup, aggregate, pagination, config) -> List[Element]:
    if len(charts) != len(variant.members):
        raise ValueError(
            f"Group document has {len(variant.members)} members but {len(charts)} charts"
        )

    members = el("div", class_="members-grid")
    for member, chart in zip(variant.members, charts):
        band = band_for(member.record.current_value, member.record.scale, config)
        style = ZONE_THEME[band]
        members.append(el(
            "div",
            el(
                "div",
                el("div", member.display_name, class_="member-name"),
                el("div", member.handle, class_="member-handle"),
                _member_detail("Status:", el("span", style.label, class_=f"status-badge {style.badge_class}")),
                _member_detail("Trend:", member.trend),
                _member_detail("Participation:", member.participation),
                _member_detail("Notes:", member.notes),
                class_="member-info",
            ),
            el("div", el("div", chart, class_="chart-wrapper"), class_="member-chart"),
            class_="member-card",
        ))

    page = el(
        "div",
        el("h1", copy.GROUP_DOC_TITLE, el("span", copy.GROUP_BADGE, class_="group-badge"), class_="artifact-title"),
        _chain_of_custody(metadata, narrative.observation_window, narrative.window_status),
        _info_grid([
            ("Circle ID:", variant.group_id, True),
            ("Members:", str(len(variant.members)), False),
            ("Circle Name:", variant.group_name, False),
            ("Coordinator:", variant.coordinator, False),
        ]),
        el("div", copy.GROUP_SECTION_TITLE, class_="section-title"),
        el(
            "div",
            copy.GROUP_SECTION_SUBTITLE.format(window=narrative.observation_window_display),
            class_="section-subtitle",
        ),
        members,
        _legal_footer(copy.GROUP_LEGAL_BODY),
        class_="page",
        data_page=1,
    )
    return [page]


# ------------------------------------------------------------
# Anonymized cohort
# ------------------------------------------------------------
def avatar_svg(color_token: str, band: ZoneBand, size: int, config: RenderConfig = DEFAULT_CONFIG) -> Element:
    """Ring in the seat's band color around a disc in its color token."""
    center = fmt_coord(size / 2)
    svg = el(
        "svg",
        xmlns="http://www.w3.org/2000/svg",
        width=size,
        height=size,
        viewBox=f"0 0 {size} {size}",
    )
    return svg.append(
        el("circle", cx=center, cy=center, r=fmt_coord(size / 2 - 1),
           fill="none", stroke=config.palette.for_band(band), stroke_width=2),
        el("circle", cx=center, cy=center, r=fmt_coord(size / 2 - 3), fill=color_token),
        el("circle", cx=center, cy=center, r=fmt_coord(size * 0.1), fill="rgba(255,255,255,0.4)"),
    )


def _seat_card(index: int, subject: SubjectRecord, chart: Element, density: DensityMode, config) -> Element:
    band = band_for(subject.current_value, subject.scale, config)
    return el(
        "div",
        el(
            "div",
            el("div", avatar_svg(subject.color_token, band, AVATAR_SIZE[density], config), class_="avatar-wrap"),
            el("span", f"#{index}", class_="seat-index"),
            el("div", class_="state-indicator", style=f"background-color: {config.palette.for_band(band)}"),
            class_="mini-chart-header",
        ),
        el("div", chart, class_="mini-chart-container"),
        class_="mini-chart-card",
        data_seat=index,
    )


def _stats_row(stats: CohortStats) -> Element:
    def stat(band: ZoneBand, value: int) -> Element:
        return el(
            "div",
            el("div", class_=f"stat-dot stat-dot-{band.value}"),
            el("div", str(value), class_="stat-value"),
            el("div", ZONE_THEME[band].label, class_="stat-label"),
            class_="stat-item",
        )

    return el(
        "div",
        stat(ZoneBand.RESOURCED, stats.resourced),
        stat(ZoneBand.STRETCHED, stats.stretched),
        stat(ZoneBand.DEPLETED, stats.depleted),
        el(
            "div",
            el("div", fmt_percent(stats.average_percent), class_="stat-value stat-value-avg"),
            el("div", "Avg", class_="stat-label"),
            class_="stat-item",
        ),
        class_="stats-row",
    )


def _cohort_pages(metadata, charts, narrative, variant: AnonymizedCohort, aggregate, pagination, config) -> List[Element]:
    count = variant.seat_count
    if len(charts) != count:
        raise ValueError(f"Cohort document has {count} seats but {len(charts)} charts")
    if aggregate is None:
        raise ValueError("Cohort document requires an aggregate chart")

    per_row = pagination.items_per_row
    pages: List[Element] = []

    for page_no, seats in enumerate(pagination.page_slices(), start=1):
        page = el("div", class_="page", data_page=page_no)

        if page_no == 1:
            page.append(
                el("div", f"{count} Seats", el("span", copy.COHORT_BADGE, class_="cohort-badge"), class_="artifact-title"),
                el("div", copy.COHORT_SUBTITLE, class_="artifact-subtitle"),
                _chain_of_custody(
                    metadata,
                    narrative.observation_window,
                    narrative.window_status,
                    extra=[_coc_line("Cohort ID:", el("span", variant.cohort_id, class_="coc-value"))],
                ),
                el("div", copy.PRIVACY_NOTICE, class_="privacy-notice"),
                _stats_row(cohort_stats(variant.subjects, config)),
                el(
                    "div",
                    el("div", f"{count} Seats", class_="section-title"),
                    el("div", copy.COHORT_SECTION_SUBTITLE, class_="section-subtitle"),
                    class_="section-header",
                ),
            )
        else:
            page.append(el("div", copy.CONTINUATION_HEADER.format(count=count), class_="continuation-header"))

        grid = el("div", class_="grid-container", data_testid=f"seat-grid-page-{page_no}")
        indices = list(range(seats.start, seats.stop))
        for row_start in range(0, len(indices), per_row):
            row = el("div", class_="grid-row")
            for i in indices[row_start:row_start + per_row]:
                row.append(_seat_card(i + 1, variant.subjects[i], charts[i], pagination.density, config))
            grid.append(row)
        page.append(grid)

        if page_no == pagination.page_count:
            page.append(
                el(
                    "div",
                    el(
                        "div",
                        el("div", copy.AGGREGATE_TITLE, class_="section-title"),
                        el("div", copy.AGGREGATE_SUBTITLE.format(count=count), class_="section-subtitle"),
                        class_="section-header",
                    ),
                    el("div", aggregate, class_="aggregate-chart-container"),
                    class_="aggregate-section",
                    data_testid="aggregate-section",
                ),
                _legal_footer(copy.COHORT_LEGAL_BODY),
            )
        pages.append(page)

    return pages


# ------------------------------------------------------------
# Entry point
# ------------------------------------------------------------
_PAGE_BUILDERS = {
    SingleSubject.kind: (copy.SINGLE_DOC_TITLE, _single_pages),
    NamedGroup.kind: (copy.GROUP_DOC_TITLE, _group_pages),
    AnonymizedCohort.kind: (copy.COHORT_DOC_TITLE, _cohort_pages),
}


def build_document(
    metadata: ArtifactMetadata,
    charts: Sequence[Element],
    narrative: NarrativeFields,
    variant: Variant,
    *,
    aggregate: Optional[Element] = None,
    plan: Optional[PaginationPlan] = None,
    config: RenderConfig = DEFAULT_CONFIG,
) -> str:
    """
    Build the full HTML document for `variant`.

    `narrative` must cover the metadata observation window. Cohorts are paginated
    with `plan` (computed from the seat count when omitted); the other
    variants always fit on one page.
    """
    try:
        doc_title, build_pages = _PAGE_BUILDERS[variant.kind]
    except (AttributeError, KeyError):
        raise ValueError(f"Unsupported document variant: {variant!r}") from None

    check_window(narrative, metadata.observation_start, metadata.observation_end)

    if variant.kind == AnonymizedCohort.kind:
        pagination = plan if plan is not None else plan_pages(variant.seat_count)
        if pagination.subject_count != variant.seat_count:
            raise ValueError(
                f"Pagination plan covers {pagination.subject_count} subjects, "
                f"cohort has {variant.seat_count}"
            )
    else:
        pagination = plan if plan is not None else plan_pages(1)

    pages = build_pages(metadata, list(charts), narrative, variant, aggregate, pagination, config)

    latch = el(
        "div",
        class_="render-latch",
        data_testid="artifact-ready",
        data_kind=variant.kind,
        data_pages=len(pages),
        data_density=pagination.density.value,
    )

    root = el(
        "html",
        el(
            "head",
            el("meta", charset="UTF-8"),
            el("meta", name="viewport", content="width=device-width, initial-scale=1.0"),
            el("title", doc_title),
            el("style", Raw(stylesheet(variant.kind, pagination.density))),
        ),
        el("body", *pages, latch),
        lang="en",
    )
    return render_document(root)
