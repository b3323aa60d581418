"""
Error types raised by the rendering engine.

All engine errors are deterministic and synchronous. Nothing here is
retried; the only retryable step (print conversion) lives outside the core.
"""


class CapacityArtifactError(Exception):
    """Base class for every engine error."""


class InsufficientDataError(CapacityArtifactError, ValueError):
    """A series is empty or too short to chart without padding."""

    def __init__(self, message: str, *, available: int = 0, required: int = 0):
        super().__init__(message)
        self.available = available
        self.required = required


class EmptyCohortError(CapacityArtifactError, ValueError):
    """Pagination was asked to lay out zero (or fewer) subjects."""


class ReferenceDriftError(CapacityArtifactError):
    """A reference document no longer matches its recorded snapshot."""


class PrintRenderError(CapacityArtifactError):
    """The headless print collaborator failed to produce a file."""


class GovernanceViolationError(CapacityArtifactError):
    """Narrative text contains prohibited (interpretive or clinical) language."""

    def __init__(self, message: str, *, violations=()):
        super().__init__(message)
        self.violations = tuple(violations)
