"""
Scripted case timelines per scenario variant, the citations recorded per action,
the outcome each variant represents, and the SLA windows checked after replay.
Day offsets are relative to the simulation start date and must not drift.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import partial
from typing import Optional

from casework.domain.models.case import AppealOutcome, CaseAction, CaseData, Role
from casework.domain.models.policy import SlaTable, SlaWindow
from casework.domain.models.results import CaseOutcome
from casework.scenarios.appeal_reversal import AppealVariant
from casework.scenarios.base import ScenarioName
from casework.scenarios.missing_docs import MissingDocsVariant

A = CaseAction

PrepareFn = Callable[[CaseData, datetime], None]


@dataclass(frozen=True)
class ScriptStep:
    """One scripted action. prepare runs against the working record before the attempt."""

    day: int
    action: CaseAction
    role: Role
    agent_id: str
    prepare: Optional[PrepareFn] = None


@dataclass(frozen=True)
class Playbook:
    scripts: dict[str, tuple[ScriptStep, ...]]
    outcomes: dict[str, CaseOutcome]


# ---------------------------------------------------------------------------
# Pre-mutations: outside-world facts that arrive with a step
# ---------------------------------------------------------------------------

def _at(start: datetime, day: int) -> datetime:
    return start + timedelta(days=day)


def _verification_requested(day: int, case_data: CaseData, start: datetime) -> None:
    case_data.verification_requested_at = _at(start, day)


def _documents_received(case_data: CaseData, start: datetime) -> None:
    case_data.mark_all_verified()


def _determination(result: str, case_data: CaseData, start: datetime) -> None:
    case_data.determination_result = result


def _notice_sent(day: int, case_data: CaseData, start: datetime) -> None:
    case_data.notice_sent_at = _at(start, day)


def _appeal_filed(day: int, case_data: CaseData, start: datetime) -> None:
    case_data.appeal_filed_at = _at(start, day)


def _hearing_scheduled(day: int, hearing_day: int, case_data: CaseData, start: datetime) -> None:
    case_data.hearing_scheduled_at = _at(start, day)
    case_data.hearing_date = _at(start, hearing_day)


def _appeal_decided(outcome: AppealOutcome, case_data: CaseData, start: datetime) -> None:
    case_data.appeal_decision = outcome


# ---------------------------------------------------------------------------
# Missing-docs timelines
# ---------------------------------------------------------------------------

def _docs_arrive_script(
    request_day: int,
    receive_day: int,
    approve_day: int,
    notice_day: int,
    implement_day: int,
    close_day: int,
) -> tuple[ScriptStep, ...]:
    return (
        ScriptStep(request_day, A.REQUEST_VERIFICATION, Role.INTAKE_CLERK, "clerk-1",
                   partial(_verification_requested, request_day)),
        ScriptStep(receive_day, A.RECEIVE_VERIFICATION, Role.INTAKE_CLERK, "clerk-1", _documents_received),
        ScriptStep(receive_day, A.VERIFICATION_COMPLETE, Role.CASEWORKER, "worker-1"),
        ScriptStep(approve_day, A.APPROVE, Role.CASEWORKER, "worker-1", partial(_determination, "approved")),
        ScriptStep(notice_day, A.SEND_NOTICE, Role.CASEWORKER, "worker-1", partial(_notice_sent, notice_day)),
        ScriptStep(implement_day, A.IMPLEMENT, Role.SUPERVISOR, "super-1"),
        ScriptStep(close_day, A.CLOSE_CASE, Role.SUPERVISOR, "super-1"),
    )


DOCS_ARRIVE_ON_TIME = _docs_arrive_script(1, 8, 10, 12, 15, 16)

DOCS_ARRIVE_LATE = _docs_arrive_script(1, 35, 37, 39, 42, 43)

DOCS_NEVER_ARRIVE = (
    ScriptStep(1, A.REQUEST_VERIFICATION, Role.INTAKE_CLERK, "clerk-1", partial(_verification_requested, 1)),
    ScriptStep(62, A.CLOSE_ABANDONED, Role.SYSTEM, "system"),
)

APPLICANT_REFUSES = (
    ScriptStep(1, A.REQUEST_VERIFICATION, Role.INTAKE_CLERK, "clerk-1", partial(_verification_requested, 1)),
    ScriptStep(12, A.VERIFICATION_REFUSED, Role.INTAKE_CLERK, "clerk-1", partial(_determination, "denied")),
    ScriptStep(14, A.SEND_NOTICE, Role.CASEWORKER, "worker-1", partial(_notice_sent, 14)),
    ScriptStep(17, A.IMPLEMENT, Role.SUPERVISOR, "super-1"),
    ScriptStep(18, A.CLOSE_CASE, Role.SUPERVISOR, "super-1"),
)

# ---------------------------------------------------------------------------
# Appeal-reversal timelines: a shared denial phase, then the appeal
# ---------------------------------------------------------------------------

DENIAL_PHASE = (
    ScriptStep(1, A.REQUEST_VERIFICATION, Role.INTAKE_CLERK, "clerk-1", partial(_verification_requested, 1)),
    ScriptStep(5, A.RECEIVE_VERIFICATION, Role.INTAKE_CLERK, "clerk-1", _documents_received),
    ScriptStep(5, A.VERIFICATION_COMPLETE, Role.CASEWORKER, "worker-1"),
    ScriptStep(7, A.DENY, Role.CASEWORKER, "worker-1", partial(_determination, "denied")),
    ScriptStep(9, A.SEND_NOTICE, Role.CASEWORKER, "worker-1", partial(_notice_sent, 9)),
)

FAVORABLE_REVERSAL = DENIAL_PHASE + (
    ScriptStep(24, A.APPEAL_FILED, Role.SYSTEM, "system", partial(_appeal_filed, 24)),
    ScriptStep(27, A.SCHEDULE_HEARING, Role.SUPERVISOR, "super-1", partial(_hearing_scheduled, 27, 47)),
    ScriptStep(42, A.RENDER_DECISION, Role.HEARING_OFFICER, "officer-1",
               partial(_appeal_decided, AppealOutcome.FAVORABLE)),
    ScriptStep(47, A.IMPLEMENT_FAVORABLE, Role.SUPERVISOR, "super-1", partial(_determination, "approved")),
    ScriptStep(48, A.CLOSE_CASE, Role.SUPERVISOR, "super-1"),
)

UNFAVORABLE_UPHELD = DENIAL_PHASE + (
    ScriptStep(29, A.APPEAL_FILED, Role.SYSTEM, "system", partial(_appeal_filed, 29)),
    ScriptStep(33, A.SCHEDULE_HEARING, Role.SUPERVISOR, "super-1", partial(_hearing_scheduled, 33, 53)),
    ScriptStep(52, A.RENDER_DECISION, Role.HEARING_OFFICER, "officer-1",
               partial(_appeal_decided, AppealOutcome.UNFAVORABLE)),
    ScriptStep(57, A.IMPLEMENT_UNFAVORABLE, Role.SUPERVISOR, "super-1"),
    ScriptStep(58, A.CLOSE_CASE, Role.SUPERVISOR, "super-1"),
)

REMAND_REOPENED = DENIAL_PHASE + (
    ScriptStep(19, A.APPEAL_FILED, Role.SYSTEM, "system", partial(_appeal_filed, 19)),
    ScriptStep(22, A.SCHEDULE_HEARING, Role.SUPERVISOR, "super-1", partial(_hearing_scheduled, 22, 42)),
    ScriptStep(39, A.RENDER_DECISION, Role.HEARING_OFFICER, "officer-1",
               partial(_appeal_decided, AppealOutcome.REMAND)),
    ScriptStep(40, A.REOPEN_CASE, Role.SUPERVISOR, "super-1"),
    ScriptStep(44, A.APPROVE, Role.CASEWORKER, "worker-1", partial(_determination, "approved")),
    ScriptStep(46, A.SEND_NOTICE, Role.CASEWORKER, "worker-1", partial(_notice_sent, 46)),
    ScriptStep(50, A.IMPLEMENT, Role.SUPERVISOR, "super-1"),
    ScriptStep(51, A.CLOSE_CASE, Role.SUPERVISOR, "super-1"),
)

PLAYBOOKS: dict[ScenarioName, Playbook] = {
    ScenarioName.MISSING_DOCS: Playbook(
        scripts={
            MissingDocsVariant.DOCS_ARRIVE_ON_TIME.value: DOCS_ARRIVE_ON_TIME,
            MissingDocsVariant.DOCS_ARRIVE_LATE.value: DOCS_ARRIVE_LATE,
            MissingDocsVariant.DOCS_NEVER_ARRIVE.value: DOCS_NEVER_ARRIVE,
            MissingDocsVariant.APPLICANT_REFUSES.value: APPLICANT_REFUSES,
        },
        outcomes={
            MissingDocsVariant.DOCS_ARRIVE_ON_TIME.value: CaseOutcome.APPROVED,
            MissingDocsVariant.DOCS_ARRIVE_LATE.value: CaseOutcome.APPROVED,
            MissingDocsVariant.DOCS_NEVER_ARRIVE.value: CaseOutcome.ABANDONED,
            MissingDocsVariant.APPLICANT_REFUSES.value: CaseOutcome.DENIED,
        },
    ),
    ScenarioName.APPEAL_REVERSAL: Playbook(
        scripts={
            AppealVariant.FAVORABLE_REVERSAL.value: FAVORABLE_REVERSAL,
            AppealVariant.UNFAVORABLE_UPHELD.value: UNFAVORABLE_UPHELD,
            AppealVariant.REMAND_REOPENED.value: REMAND_REOPENED,
        },
        outcomes={
            AppealVariant.FAVORABLE_REVERSAL.value: CaseOutcome.APPROVED,
            AppealVariant.UNFAVORABLE_UPHELD.value: CaseOutcome.DENIED,
            AppealVariant.REMAND_REOPENED.value: CaseOutcome.APPROVED,
        },
    ),
}

# ---------------------------------------------------------------------------
# Citations recorded on each event. Every action has at least one.
# ---------------------------------------------------------------------------

ACTION_CITATIONS: dict[CaseAction, tuple[str, ...]] = {
    A.CREATE_CASE: ("CFR-273-2",),
    A.REQUEST_VERIFICATION: ("VER-MAND-001", "NOT-VER-001"),
    A.RECEIVE_VERIFICATION: ("VER-MAND-001",),
    A.VERIFICATION_COMPLETE: ("VER-MAND-001",),
    A.VERIFICATION_REFUSED: ("VER-MAND-001",),
    A.APPROVE: ("ELIG-GROSS-001",),
    A.DENY: ("ELIG-GROSS-001",),
    A.SEND_NOTICE: ("NOT-APPR-001",),
    A.IMPLEMENT: ("CFR-273",),
    A.CLOSE_CASE: ("CFR-273",),
    A.CLOSE_ABANDONED: ("CFR-273",),
    A.APPEAL_FILED: ("CFR-273-15", "SLA-APP-001"),
    A.SCHEDULE_HEARING: ("CFR-273-15", "SLA-APP-002"),
    A.RENDER_DECISION: ("CFR-273-15",),
    A.IMPLEMENT_FAVORABLE: ("CFR-273-15", "SLA-APP-004"),
    A.IMPLEMENT_UNFAVORABLE: ("CFR-273-15",),
    A.REOPEN_CASE: ("CFR-273-15",),
}

# Actions that settle an outcome; the last one seen dates the decision.
DECISION_ACTIONS: frozenset[CaseAction] = frozenset({
    A.APPROVE,
    A.DENY,
    A.VERIFICATION_REFUSED,
    A.CLOSE_ABANDONED,
    A.IMPLEMENT_FAVORABLE,
    A.IMPLEMENT_UNFAVORABLE,
})

# Actions that settle the initial application.
INITIAL_DETERMINATION_ACTIONS: frozenset[CaseAction] = frozenset({
    A.APPROVE,
    A.DENY,
    A.VERIFICATION_REFUSED,
    A.CLOSE_ABANDONED,
})


@dataclass(frozen=True)
class SlaCheck:
    """Maximum calendar days between start_action (None = application) and the first end action."""

    window: Callable[[SlaTable], SlaWindow]
    start_action: Optional[CaseAction]
    end_actions: frozenset[CaseAction]


SLA_CHECKS: tuple[SlaCheck, ...] = (
    SlaCheck(lambda sla: sla.processing.standard, None, INITIAL_DETERMINATION_ACTIONS),
    SlaCheck(lambda sla: sla.appeals.decision_deadline, A.APPEAL_FILED, frozenset({A.RENDER_DECISION})),
    SlaCheck(
        lambda sla: sla.appeals.favorable_implementation,
        A.RENDER_DECISION,
        frozenset({A.IMPLEMENT_FAVORABLE}),
    ),
)
