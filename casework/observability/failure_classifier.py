"""Failure categorization for per-case run errors and metrics."""

from enum import Enum

from casework.domain.exceptions import (
    DomainError,
    DomainValidationError,
    IncompleteScriptError,
    PolicyPackLoadError,
    PolicyPackMismatchError,
    ScriptStepFailedError,
)
from casework.domain.models.case import TransitionErrorKind


class FailureCategory(str, Enum):
    """Taxonomy for failure classification."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    POLICY_VIOLATION = "POLICY_VIOLATION"
    GUARD_REJECTION = "GUARD_REJECTION"
    WORKFLOW_ERROR = "WORKFLOW_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class FailureClassifier:
    """
    Classifies exceptions into FailureCategory. The caller records the category on
    the CaseError and increments metrics.
    """

    @staticmethod
    def classify(exception: BaseException) -> FailureCategory:
        """Map exception to FailureCategory. Unknown -> UNEXPECTED_ERROR."""
        if isinstance(exception, ScriptStepFailedError):
            if exception.kind == TransitionErrorKind.ROLE_VIOLATION.value:
                return FailureCategory.POLICY_VIOLATION
            if exception.kind == TransitionErrorKind.GUARD_FAILURE.value:
                return FailureCategory.GUARD_REJECTION
            return FailureCategory.WORKFLOW_ERROR
        if isinstance(exception, IncompleteScriptError):
            return FailureCategory.WORKFLOW_ERROR
        if isinstance(exception, (PolicyPackLoadError, PolicyPackMismatchError)):
            return FailureCategory.CONFIGURATION_ERROR
        if isinstance(exception, DomainValidationError):
            return FailureCategory.VALIDATION_ERROR
        if isinstance(exception, DomainError):
            return FailureCategory.WORKFLOW_ERROR
        return FailureCategory.UNEXPECTED_ERROR
