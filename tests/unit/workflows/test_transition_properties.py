"""Exhaustive state machine properties over every state, action and role."""

import itertools

import pytest

from casework.domain.models.case import CaseAction, CaseStatus, Role, TransitionErrorKind
from casework.security.rbac import RBACService
from casework.workflows.state_machine import TERMINAL_STATES, TRANSITION_TABLE, transition

_rbac = RBACService()


def _permitted_role(action: CaseAction) -> Role:
    return sorted(_rbac.allowed_roles(action), key=lambda r: r.value)[0]


@pytest.mark.parametrize("state,action", list(itertools.product(CaseStatus, CaseAction)))
def test_table_decides_validity_for_permitted_roles(make_ctx, state, action):
    """Pairs outside the table are INVALID_TRANSITION; listed pairs never are."""
    result = transition(state, action, make_ctx(state, _permitted_role(action)))
    if action in TRANSITION_TABLE[state]:
        if result.ok:
            assert result.new_state == TRANSITION_TABLE[state][action]
        else:
            assert result.kind == TransitionErrorKind.GUARD_FAILURE
    else:
        assert not result.ok
        assert result.kind == TransitionErrorKind.INVALID_TRANSITION


@pytest.mark.parametrize(
    "action,role",
    [(a, r) for a in CaseAction for r in Role if r not in _rbac.allowed_roles(a)],
)
def test_roles_outside_allow_list_always_rejected(make_ctx, case_data, action, role):
    """Role violations win over table lookups and guards, in every state."""
    case_data.mark_all_verified()
    for state in CaseStatus:
        result = transition(state, action, make_ctx(state, role))
        assert not result.ok
        assert result.kind == TransitionErrorKind.ROLE_VIOLATION
        assert result.guard_results == ()


@pytest.mark.parametrize("state", sorted(TERMINAL_STATES, key=lambda s: s.value))
@pytest.mark.parametrize("action", list(CaseAction))
def test_terminal_states_admit_no_actions(make_ctx, state, action):
    result = transition(state, action, make_ctx(state, _permitted_role(action)))
    assert not result.ok
    assert result.kind == TransitionErrorKind.INVALID_TRANSITION
    assert result.message == f"No transitions defined from state '{state.value}'"


def test_every_role_is_permitted_somewhere():
    permitted = set().union(*(_rbac.allowed_roles(a) for a in CaseAction))
    assert permitted == set(Role)
