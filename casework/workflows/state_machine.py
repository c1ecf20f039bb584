"""Case state machine: role check, sparse transition table, guard evaluation. Never raises for rejections."""

import logging
from typing import Optional

from casework.domain.models.case import (
    CaseAction,
    CaseStatus,
    TransitionContext,
    TransitionErrorKind,
    TransitionFailure,
    TransitionResult,
    TransitionSuccess,
)
from casework.security.rbac import RBACService
from casework.workflows.guards import check_guards

logger = logging.getLogger(__name__)

S = CaseStatus
A = CaseAction

# Allowed transitions: state -> {action -> next state}. Pairs not listed are invalid.
TRANSITION_TABLE: dict[CaseStatus, dict[CaseAction, CaseStatus]] = {
    S.RECEIVED: {
        A.REQUEST_VERIFICATION: S.PENDING_VERIFICATION,
    },
    S.PENDING_VERIFICATION: {
        A.RECEIVE_VERIFICATION: S.PENDING_VERIFICATION,
        A.VERIFICATION_COMPLETE: S.READY_FOR_DETERMINATION,
        A.VERIFICATION_REFUSED: S.DETERMINED_DENIED,
        A.CLOSE_ABANDONED: S.CLOSED,
    },
    S.READY_FOR_DETERMINATION: {
        A.APPROVE: S.DETERMINED_APPROVED,
        A.DENY: S.DETERMINED_DENIED,
    },
    S.DETERMINED_APPROVED: {
        A.SEND_NOTICE: S.NOTICE_SENT,
    },
    S.DETERMINED_DENIED: {
        A.SEND_NOTICE: S.NOTICE_SENT,
    },
    S.NOTICE_SENT: {
        A.IMPLEMENT: S.IMPLEMENTED,
        A.APPEAL_FILED: S.APPEAL_REQUESTED,
    },
    S.APPEAL_REQUESTED: {
        A.SCHEDULE_HEARING: S.APPEAL_HEARING_SCHEDULED,
    },
    S.APPEAL_HEARING_SCHEDULED: {
        A.RENDER_DECISION: S.APPEAL_DECIDED,
    },
    S.APPEAL_DECIDED: {
        A.IMPLEMENT_FAVORABLE: S.IMPLEMENTED,
        A.IMPLEMENT_UNFAVORABLE: S.IMPLEMENTED,
        A.REOPEN_CASE: S.READY_FOR_DETERMINATION,
    },
    S.IMPLEMENTED: {
        A.CLOSE_CASE: S.CLOSED,
    },
    S.CLOSED: {},
}

TERMINAL_STATES: frozenset[CaseStatus] = frozenset(
    state for state, actions in TRANSITION_TABLE.items() if not actions
)

_rbac = RBACService()


def next_state(current_state: CaseStatus, action: CaseAction) -> Optional[CaseStatus]:
    """Table lookup only. None when the pair has no entry."""
    return TRANSITION_TABLE.get(current_state, {}).get(action)


def transition(
    current_state: CaseStatus,
    action: CaseAction,
    ctx: TransitionContext,
) -> TransitionResult:
    """
    Attempt one transition. Order: role check, table lookup, guards.
    Returns TransitionSuccess or TransitionFailure; CaseData is never touched here.
    """
    if not _rbac.is_permitted(ctx.role, action):
        return TransitionFailure(
            kind=TransitionErrorKind.ROLE_VIOLATION,
            message=f"Role '{ctx.role.value}' is not permitted to perform '{action.value}'",
        )

    state_transitions = TRANSITION_TABLE.get(current_state)
    if not state_transitions:
        return TransitionFailure(
            kind=TransitionErrorKind.INVALID_TRANSITION,
            message=f"No transitions defined from state '{current_state.value}'",
        )
    target = state_transitions.get(action)
    if target is None:
        return TransitionFailure(
            kind=TransitionErrorKind.INVALID_TRANSITION,
            message=f"Action '{action.value}' is not valid in state '{current_state.value}'",
        )

    guard_results = check_guards(action, ctx)
    failed = [g.name for g in guard_results if not g.passed]
    if failed:
        logger.debug(
            "transition_guard_failed",
            extra={"action": action.value, "state": current_state.value, "guards": failed},
        )
        return TransitionFailure(
            kind=TransitionErrorKind.GUARD_FAILURE,
            message=f"Guard(s) failed: {', '.join(failed)}",
            guard_results=guard_results,
        )
    return TransitionSuccess(new_state=target, guard_results=guard_results)
