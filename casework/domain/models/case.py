"""Case workflow model: statuses, actions, roles, working record, transition context and results."""

import copy
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from casework.domain.exceptions import DomainValidationError
from casework.domain.models.policy import PolicyPack, SlaTable


class CaseStatus(str, Enum):
    """Workflow state of a case. CLOSED is terminal."""

    RECEIVED = "RECEIVED"
    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    READY_FOR_DETERMINATION = "READY_FOR_DETERMINATION"
    DETERMINED_APPROVED = "DETERMINED_APPROVED"
    DETERMINED_DENIED = "DETERMINED_DENIED"
    NOTICE_SENT = "NOTICE_SENT"
    APPEAL_REQUESTED = "APPEAL_REQUESTED"
    APPEAL_HEARING_SCHEDULED = "APPEAL_HEARING_SCHEDULED"
    APPEAL_DECIDED = "APPEAL_DECIDED"
    IMPLEMENTED = "IMPLEMENTED"
    CLOSED = "CLOSED"


class CaseAction(str, Enum):
    CREATE_CASE = "create_case"
    REQUEST_VERIFICATION = "request_verification"
    RECEIVE_VERIFICATION = "receive_verification"
    VERIFICATION_COMPLETE = "verification_complete"
    VERIFICATION_REFUSED = "verification_refused"
    APPROVE = "approve"
    DENY = "deny"
    SEND_NOTICE = "send_notice"
    IMPLEMENT = "implement"
    CLOSE_CASE = "close_case"
    CLOSE_ABANDONED = "close_abandoned"
    APPEAL_FILED = "appeal_filed"
    SCHEDULE_HEARING = "schedule_hearing"
    RENDER_DECISION = "render_decision"
    IMPLEMENT_FAVORABLE = "implement_favorable"
    IMPLEMENT_UNFAVORABLE = "implement_unfavorable"
    REOPEN_CASE = "reopen_case"


class Role(str, Enum):
    """Actor category supplied per attempted action. Cases do not own roles."""

    INTAKE_CLERK = "intake_clerk"
    CASEWORKER = "caseworker"
    SUPERVISOR = "supervisor"
    HEARING_OFFICER = "hearing_officer"
    SYSTEM = "system"


class AppealOutcome(str, Enum):
    FAVORABLE = "favorable"
    UNFAVORABLE = "unfavorable"
    REMAND = "remand"


@dataclass
class CaseData:
    """
    Mutable working record for one case. Owned by the orchestration loop for the case's lifetime.
    missing_items must always be a subset of required_verifications.
    """

    case_id: str
    applicant_name: str
    household_size: int
    application_date: datetime
    required_verifications: list[str] = field(default_factory=list)
    verified_items: list[str] = field(default_factory=list)
    missing_items: list[str] = field(default_factory=list)
    verification_requested_at: Optional[datetime] = None
    notice_sent_at: Optional[datetime] = None
    appeal_filed_at: Optional[datetime] = None
    hearing_scheduled_at: Optional[datetime] = None
    hearing_date: Optional[datetime] = None
    determination_result: Optional[str] = None
    appeal_decision: Optional[AppealOutcome] = None

    def __post_init__(self) -> None:
        self.check_invariants()

    def check_invariants(self) -> None:
        """Raise DomainValidationError if missing items escape the required set."""
        stray = [item for item in self.missing_items if item not in self.required_verifications]
        if stray:
            raise DomainValidationError(
                f"Missing items not in required verifications: {', '.join(stray)}"
            )

    @property
    def unverified_items(self) -> list[str]:
        return [item for item in self.required_verifications if item not in self.verified_items]

    def mark_all_verified(self) -> None:
        self.verified_items = list(self.required_verifications)
        self.missing_items = []

    def snapshot(self) -> "CaseData":
        """Independent copy for a transition context."""
        return copy.deepcopy(self)


@dataclass(frozen=True)
class PolicyFacts:
    """Read-only policy facts visible to guards: SLA table and the recognized citation ids."""

    sla: SlaTable
    rule_index: frozenset[str]

    @classmethod
    def from_pack(cls, pack: PolicyPack) -> "PolicyFacts":
        return cls(sla=pack.sla, rule_index=pack.rule_index)


@dataclass(frozen=True)
class TransitionContext:
    """Immutable snapshot for one transition attempt. Built fresh per attempt."""

    case_id: str
    current_state: CaseStatus
    role: Role
    agent_id: str
    timestamp: datetime
    case_data: CaseData
    policy: PolicyFacts


@dataclass(frozen=True)
class GuardResult:
    name: str
    passed: bool
    reason: Optional[str] = None
    citation: Optional[str] = None


class TransitionErrorKind(str, Enum):
    ROLE_VIOLATION = "ROLE_VIOLATION"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    GUARD_FAILURE = "GUARD_FAILURE"


@dataclass(frozen=True)
class TransitionSuccess:
    new_state: CaseStatus
    guard_results: tuple[GuardResult, ...] = ()

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class TransitionFailure:
    kind: TransitionErrorKind
    message: str
    guard_results: tuple[GuardResult, ...] = ()

    @property
    def ok(self) -> bool:
        return False


TransitionResult = Union[TransitionSuccess, TransitionFailure]
