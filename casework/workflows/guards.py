"""Guard predicates evaluated before a case transition. Pure functions over TransitionContext."""

from collections.abc import Callable
from datetime import timedelta

from casework.domain.models.case import CaseAction, GuardResult, TransitionContext

Guard = Callable[[TransitionContext], GuardResult]

_ONE_DAY = timedelta(days=1)


def guard_verification_complete(ctx: TransitionContext) -> GuardResult:
    """Every required verification item must be verified."""
    name = "verification_complete"
    unverified = ctx.case_data.unverified_items
    if not unverified:
        return GuardResult(name=name, passed=True)
    return GuardResult(
        name=name,
        passed=False,
        reason=f"Missing verified items: {', '.join(unverified)}",
    )


def guard_verification_response_window(ctx: TransitionContext) -> GuardResult:
    """A refusal may only be recorded once the applicant's response window has run."""
    name = "verification_response_window"
    window = ctx.policy.sla.verification.response_window
    required_days = window.min_calendar_days or 0
    requested_at = ctx.case_data.verification_requested_at
    if requested_at is None:
        return GuardResult(
            name=name,
            passed=False,
            reason="No verification request date recorded",
            citation=window.sla_id,
        )
    elapsed = ctx.timestamp - requested_at
    if elapsed >= timedelta(days=required_days):
        return GuardResult(name=name, passed=True, citation=window.sla_id)
    return GuardResult(
        name=name,
        passed=False,
        reason=(
            f"Only {elapsed // _ONE_DAY} of {required_days} required days "
            "elapsed since verification request"
        ),
        citation=window.sla_id,
    )


def guard_appeal_deadline(ctx: TransitionContext) -> GuardResult:
    """An appeal must be filed within the filing window after the notice."""
    name = "appeal_deadline"
    window = ctx.policy.sla.appeals.filing_window
    max_days = window.max_calendar_days or 0
    notice_sent_at = ctx.case_data.notice_sent_at
    if notice_sent_at is None:
        return GuardResult(
            name=name,
            passed=False,
            reason="No notice sent date recorded",
            citation=window.sla_id,
        )
    elapsed = ctx.timestamp - notice_sent_at
    if elapsed <= timedelta(days=max_days):
        return GuardResult(name=name, passed=True, citation=window.sla_id)
    return GuardResult(
        name=name,
        passed=False,
        reason=f"Appeal filed {elapsed // _ONE_DAY} days after notice (max {max_days})",
        citation=window.sla_id,
    )


def guard_hearing_notice(ctx: TransitionContext) -> GuardResult:
    """The hearing must be held at least the minimum notice period after it was scheduled."""
    name = "hearing_notice"
    window = ctx.policy.sla.appeals.hearing_notice
    min_days = window.min_calendar_days or 0
    scheduled_at = ctx.case_data.hearing_scheduled_at
    hearing_date = ctx.case_data.hearing_date
    if scheduled_at is None or hearing_date is None:
        return GuardResult(
            name=name,
            passed=False,
            reason="Hearing scheduling date or hearing date not recorded",
            citation=window.sla_id,
        )
    lead_time = hearing_date - scheduled_at
    if lead_time >= timedelta(days=min_days):
        return GuardResult(name=name, passed=True, citation=window.sla_id)
    return GuardResult(
        name=name,
        passed=False,
        reason=f"Hearing only {lead_time // _ONE_DAY} days after scheduling (min {min_days})",
        citation=window.sla_id,
    )


# Actions absent from this registry have no guards.
GUARDS: dict[CaseAction, tuple[Guard, ...]] = {
    CaseAction.VERIFICATION_COMPLETE: (guard_verification_complete,),
    CaseAction.VERIFICATION_REFUSED: (guard_verification_response_window,),
    CaseAction.APPEAL_FILED: (guard_appeal_deadline,),
    CaseAction.RENDER_DECISION: (guard_hearing_notice,),
}


def check_guards(action: CaseAction, ctx: TransitionContext) -> tuple[GuardResult, ...]:
    """Run every guard registered for action. No short-circuit: all results are returned."""
    return tuple(guard(ctx) for guard in GUARDS.get(action, ()))
