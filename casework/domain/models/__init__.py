"""Domain models: case workflow, policy pack, oracle input/output, run results."""

from casework.domain.models.case import (
    AppealOutcome,
    CaseAction,
    CaseData,
    CaseStatus,
    GuardResult,
    PolicyFacts,
    Role,
    TransitionContext,
    TransitionErrorKind,
    TransitionFailure,
    TransitionResult,
    TransitionSuccess,
)
from casework.domain.models.oracle import (
    EligibleDetermination,
    IneligibleDetermination,
    OracleInput,
    OracleOutput,
)
from casework.domain.models.policy import PolicyPack, PolicyRules, SlaTable
from casework.domain.models.results import (
    CaseError,
    CaseOutcome,
    CaseResult,
    ComparisonResult,
    MismatchRecord,
    MismatchSeverity,
    MismatchType,
    RunEvent,
    RunResult,
    RunnerDecision,
)

__all__ = [
    "AppealOutcome",
    "CaseAction",
    "CaseData",
    "CaseError",
    "CaseOutcome",
    "CaseResult",
    "CaseStatus",
    "ComparisonResult",
    "EligibleDetermination",
    "GuardResult",
    "IneligibleDetermination",
    "MismatchRecord",
    "MismatchSeverity",
    "MismatchType",
    "OracleInput",
    "OracleOutput",
    "PolicyFacts",
    "PolicyPack",
    "PolicyRules",
    "Role",
    "RunEvent",
    "RunResult",
    "RunnerDecision",
    "SlaTable",
    "TransitionContext",
    "TransitionErrorKind",
    "TransitionFailure",
    "TransitionResult",
    "TransitionSuccess",
]
