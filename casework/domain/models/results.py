"""Comparator and runner result models. Immutable once built."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from casework.domain.models.case import CaseAction, CaseStatus, GuardResult, Role
from casework.domain.models.oracle import OracleOutput


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class MismatchType(str, Enum):
    ELIGIBILITY = "eligibility"
    BENEFIT_AMOUNT = "benefit_amount"
    CITATION = "citation"


class MismatchSeverity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RunnerDecision(str, Enum):
    APPROVED = "approved"
    DENIED = "denied"


class CaseOutcome(str, Enum):
    APPROVED = "approved"
    DENIED = "denied"
    ABANDONED = "abandoned"


class MismatchRecord(_FrozenModel):
    type: MismatchType
    severity: MismatchSeverity
    runner_value: str
    oracle_value: str
    detail: str


class OracleComparison(_FrozenModel):
    eligibility_match: bool
    benefit_match: bool
    benefit_delta: float = Field(..., ge=0)
    citations_covered: bool
    missing_citations: tuple[str, ...] = ()


class ComparisonResult(_FrozenModel):
    comparison: OracleComparison
    mismatches: tuple[MismatchRecord, ...] = ()


class RunEvent(_FrozenModel):
    """One successful scripted transition. Always carries at least one citation."""

    event_id: str
    sequence: int = Field(..., ge=1)
    action: CaseAction
    actor: str
    role: Role
    from_state: CaseStatus
    to_state: CaseStatus
    timestamp: datetime
    citations: tuple[str, ...] = Field(..., min_length=1)
    guard_results: tuple[GuardResult, ...] = ()


class OracleReview(_FrozenModel):
    output: OracleOutput
    comparison: ComparisonResult


class CaseResult(_FrozenModel):
    case_id: str
    case_index: int = Field(..., ge=0)
    scenario: str
    variant: str
    applicant_name: str
    final_state: CaseStatus
    outcome: CaseOutcome
    events: tuple[RunEvent, ...]
    sla_breaches: tuple[str, ...] = ()
    time_to_decision_days: Optional[int] = None
    oracle_review: Optional[OracleReview] = None

    @model_validator(mode="after")
    def abandoned_cases_have_no_review(self) -> "CaseResult":
        if self.outcome == CaseOutcome.ABANDONED and self.oracle_review is not None:
            raise ValueError("abandoned cases are not evaluated by the oracle")
        return self


class CaseError(_FrozenModel):
    case_index: int = Field(..., ge=0)
    case_id: str
    error: str
    category: str


class RunResult(_FrozenModel):
    run_id: str
    scenario: str
    seed: int
    total_cases: int = Field(..., ge=0)
    case_results: tuple[CaseResult, ...] = ()
    errors: tuple[CaseError, ...] = ()
