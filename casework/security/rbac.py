"""Role-based access control for case actions. No FastAPI."""

from casework.domain.models.case import CaseAction, Role

# Action                   Allowed roles
# create_case              intake_clerk, system
# request/receive verif.   intake_clerk
# verification_complete    caseworker
# verification_refused     intake_clerk
# approve / deny / notice  caseworker
# implement / close        supervisor
# close_abandoned          system
# appeal_filed             system
# schedule_hearing         supervisor
# render_decision          supervisor, hearing_officer
# implement_* / reopen     supervisor

_ACTION_ROLES: dict[CaseAction, frozenset[Role]] = {
    CaseAction.CREATE_CASE: frozenset({Role.INTAKE_CLERK, Role.SYSTEM}),
    CaseAction.REQUEST_VERIFICATION: frozenset({Role.INTAKE_CLERK}),
    CaseAction.RECEIVE_VERIFICATION: frozenset({Role.INTAKE_CLERK}),
    CaseAction.VERIFICATION_COMPLETE: frozenset({Role.CASEWORKER}),
    CaseAction.VERIFICATION_REFUSED: frozenset({Role.INTAKE_CLERK}),
    CaseAction.APPROVE: frozenset({Role.CASEWORKER}),
    CaseAction.DENY: frozenset({Role.CASEWORKER}),
    CaseAction.SEND_NOTICE: frozenset({Role.CASEWORKER}),
    CaseAction.IMPLEMENT: frozenset({Role.SUPERVISOR}),
    CaseAction.CLOSE_CASE: frozenset({Role.SUPERVISOR}),
    CaseAction.CLOSE_ABANDONED: frozenset({Role.SYSTEM}),
    CaseAction.APPEAL_FILED: frozenset({Role.SYSTEM}),
    CaseAction.SCHEDULE_HEARING: frozenset({Role.SUPERVISOR}),
    CaseAction.RENDER_DECISION: frozenset({Role.SUPERVISOR, Role.HEARING_OFFICER}),
    CaseAction.IMPLEMENT_FAVORABLE: frozenset({Role.SUPERVISOR}),
    CaseAction.IMPLEMENT_UNFAVORABLE: frozenset({Role.SUPERVISOR}),
    CaseAction.REOPEN_CASE: frozenset({Role.SUPERVISOR}),
}


class RBACService:
    """Check whether a role may perform a case action. Every action has a fixed allow-list."""

    def allowed_roles(self, action: CaseAction) -> frozenset[Role]:
        return _ACTION_ROLES.get(action, frozenset())

    def is_permitted(self, role: Role, action: CaseAction) -> bool:
        return role in self.allowed_roles(action)
