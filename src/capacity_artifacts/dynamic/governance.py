"""
Language governance for narrative output.

Interpretive, diagnostic and scoring vocabulary must never appear in a
rendered narrative field. Matching is a case-insensitive substring scan.
The test suite runs it over every verdict, the reference narrative and
computed narratives; rendering does not call it.
"""

from __future__ import annotations

from dataclasses import fields
from typing import List, Tuple

from capacity_artifacts.documents.narrative import NarrativeFields
from capacity_artifacts.exceptions import GovernanceViolationError

PROHIBITED_TERMS: Tuple[str, ...] = (
    # interpretation / advice
    "improving",
    "declining",
    "you should",
    "this means",
    "this indicates",
    "consider",
    "good",
    "bad",
    "healthy",
    "unhealthy",
    "normal",
    "abnormal",
    "diagnosis",
    "treatment",
    "intervention",
    "recommendation",
    # scoring
    "wellness score",
    "health score",
    "daily grade",
    "weekly grade",
    "progress percentage",
    # explanation
    "why are you",
    "suggested reason",
    "symptom",
    # regulatory
    "mental health",
    "therapy",
    "clinical assessment",
    "cure",
    "AI-powered",
    "AI analysis",
)

# Every string the verdict table and its formatter can emit
ALL_VERDICTS: Tuple[str, ...] = (
    "Interpretable Capacity Trends",
    "Partial Capacity Trends",
    "Variable Capacity Patterns",
    "Partial Capacity Patterns",
    "Highly Variable Capacity",
    "Insufficient Stability",
    "Insufficient Observation",
    "Insufficient Data",
)


def find_prohibited_terms(text: str) -> List[str]:
    lowered = text.lower()
    return [term for term in PROHIBITED_TERMS if term.lower() in lowered]


def assert_governance_compliance(narrative: NarrativeFields) -> None:
    """Raise GovernanceViolationError naming every offending field."""
    violations = []
    for f in fields(narrative):
        value = getattr(narrative, f.name)
        text = " ".join(value) if isinstance(value, tuple) else value
        found = find_prohibited_terms(text)
        if found:
            violations.append(f"{f.name}: {', '.join(found)}")

    if violations:
        raise GovernanceViolationError(
            "Prohibited language in narrative:\n" + "\n".join(violations),
            violations=violations,
        )
