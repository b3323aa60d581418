# src/capacity_artifacts/documents/copy.py
"""
Fixed document text. Nothing here is computed; changing a string is a
visible change to every reference document.
"""

COPYRIGHT = "© 2026 Orbital Health Intelligence, Inc. All Rights Reserved."
LEGAL_TITLE = "Confidential & Proprietary Notice"
SNAPSHOT_STATUS = "IMMUTABLE SNAPSHOT"
JSON_DISCLAIMER = (
    "This artifact is an objective summary of patient-generated capacity signals. "
    "It does NOT constitute a diagnosis. Designed to support clinical documentation."
)

# ------------------------------------------------------------
# Single subject
# ------------------------------------------------------------
SINGLE_TITLE = "Clinical Artifact Record [Locked]"
SINGLE_DOC_TITLE = "Clinical Capacity Instrument"
SUMMARY_TITLE = "Capacity Summary Report"

CAPACITY_DEFINITION_TITLE = 'What "Capacity" Means in This Report'
CAPACITY_DEFINITION_LEAD = (
    "Capacity refers to a person's day-to-day functional bandwidth — the amount of "
    "emotional, cognitive, sensory, and social load they can manage before regulation "
    "begins to degrade."
)
CAPACITY_DEFINITION_EMPHASIS = (
    "Capacity is not a diagnosis, not a symptom checklist, and not a performance score."
)
CAPACITY_DEFINITION_LIST_INTRO = "Changes in capacity often present clinically as:"
CAPACITY_DEFINITION_ITEMS = (
    "increased emotional reactivity",
    "cognitive fatigue or brain fog",
    "sensory overwhelm",
    "social withdrawal",
    "reduced tolerance for stressors",
)
CAPACITY_DEFINITION_FOOTER = "This report summarizes patterns over time, not isolated moments."

AUDIT_TITLE = "Reporting Quality Overview"
TRACKING_NOTE = (
    "Reflects engagement with daily reflection. Gaps may correspond with overwhelm, "
    "avoidance, or periods of reduced capacity."
)
TIMING_NOTE = (
    "Reflects how quickly the individual checks in with their internal state. Slower or "
    "inconsistent timing may correlate with cognitive fatigue or overload."
)
STABILITY_NOTE = (
    "Indicates how consistent reported capacity is over time. Sudden shifts may reflect "
    "stressors, environmental changes, or dysregulation."
)

CHART_HEADER = "Capacity Over Time"
CHART_HEADER_SUB = "— Normalized, Non-Diagnostic"

PROVIDER_TITLE = "Provider Utility Statement"
PROVIDER_LEAD = "This artifact is an objective summary of patient-generated capacity signals. "
PROVIDER_EMPHASIS = (
    "It is provided to assist clinical documentation of functional status and does NOT "
    "constitute a diagnosis."
)
PROVIDER_TAIL = (
    " Inclusion of this record in a medical file serves as evidence of data review, not "
    "endorsement of subjective claims. Designed to support clinical documentation and "
    "record review (e.g., CPT 90885)."
)

HOW_TO_USE_TITLE = "How to Use This Report"
HOW_TO_USE_LEAD = (
    "This report is intended to support therapeutic conversation, reflection, and "
    "pattern recognition."
)
HOW_TO_USE_LIST_INTRO = "It may be useful for:"
HOW_TO_USE_ITEMS = (
    "identifying periods of overload",
    "discussing environmental or relational stressors",
    "tracking response to interventions",
    "supporting self-awareness and regulation strategies",
)
HOW_TO_USE_FOOTER = (
    "This report should be interpreted alongside clinical judgment and client self-report."
)

SINGLE_LEGAL_BODY = (
    "This Clinical Capacity Instrument and all underlying methodologies, algorithms, data "
    "structures, and presentation formats constitute proprietary intellectual property and "
    "trade secrets of Orbital Health Intelligence, Inc. Unauthorized reproduction, "
    "distribution, reverse engineering, derivative works, or system emulation is strictly "
    "prohibited and may result in civil liability and criminal penalties under applicable "
    "trade secret, copyright, and unfair competition laws. This document is provided solely "
    "for the confidential use of the intended recipient for clinical documentation purposes. "
    "Any disclosure, copying, or distribution to unauthorized parties is expressly forbidden. "
    "Orbital Health Intelligence, Inc. reserves the right to seek injunctive relief, actual "
    "and consequential damages, and recovery of attorneys' fees for any violation of these "
    "terms."
)

# ------------------------------------------------------------
# Named group
# ------------------------------------------------------------
GROUP_DOC_TITLE = "Circle Capacity Instrument"
GROUP_BADGE = "CIRCLE"
GROUP_SECTION_TITLE = "Member Capacity — 90 Days"
GROUP_SECTION_SUBTITLE = "Non-diagnostic. Per-member view. Observation period: {window}"
GROUP_LEGAL_BODY = (
    "This Circle Capacity Instrument and all underlying methodologies, algorithms, data "
    "structures, and presentation formats constitute proprietary intellectual property of "
    "Orbital Health Intelligence, Inc. This is NOT a diagnostic tool. Not a symptom severity "
    "scale. For coordination purposes only."
)

# ------------------------------------------------------------
# Anonymized cohort
# ------------------------------------------------------------
COHORT_DOC_TITLE = "Bundle Capacity Instrument"
COHORT_BADGE = "BUNDLE"
COHORT_SUBTITLE = "Anonymous seat-level capacity view"
PRIVACY_NOTICE = "Privacy first: avatars only, no individual attribution"
COHORT_SECTION_SUBTITLE = "Individual capacity · 90 days · Non-diagnostic"
AGGREGATE_TITLE = "Combined Aggregate"
AGGREGATE_SUBTITLE = "Average capacity across all {count} seats"
CONTINUATION_HEADER = "{count} Seats — continued"
COHORT_LEGAL_BODY = (
    "This Bundle Capacity Instrument contains ANONYMIZED aggregate data only. Individual "
    "seat holders are NOT identified. This is NOT a diagnostic tool. Not a symptom severity "
    "scale. For coordination purposes only."
)
