"""Schemas for artifacts and API requests."""

from casework.domain.schemas.artifacts import (
    ARTIFACT_TYPES,
    AppealDecision,
    AppealRequest,
    Artifact,
    DeterminationWorksheet,
    HearingRecord,
    Notice,
    VerificationRequest,
    validate_artifact,
)
from casework.domain.schemas.requests import (
    CaseDataPayload,
    ComparisonRequest,
    RunRequest,
    TransitionRequest,
)

__all__ = [
    "ARTIFACT_TYPES",
    "AppealDecision",
    "AppealRequest",
    "Artifact",
    "CaseDataPayload",
    "ComparisonRequest",
    "DeterminationWorksheet",
    "HearingRecord",
    "Notice",
    "RunRequest",
    "TransitionRequest",
    "VerificationRequest",
    "validate_artifact",
]
