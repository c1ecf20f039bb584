"""Guard tests: verification, response window, appeal deadline, hearing notice boundaries."""

from datetime import datetime, timedelta, timezone

from casework.domain.models.case import CaseAction, CaseStatus, Role
from casework.workflows.guards import (
    check_guards,
    guard_appeal_deadline,
    guard_hearing_notice,
    guard_verification_complete,
    guard_verification_response_window,
)

START = datetime(2026, 1, 1, tzinfo=timezone.utc)


def day(n: int) -> datetime:
    return START + timedelta(days=n)


def test_verification_complete_passes_when_all_verified(make_ctx, case_data):
    case_data.mark_all_verified()
    result = guard_verification_complete(make_ctx(CaseStatus.PENDING_VERIFICATION, Role.CASEWORKER))
    assert result.passed
    assert result.reason is None


def test_response_window_requires_request_date(make_ctx):
    result = guard_verification_response_window(make_ctx(CaseStatus.PENDING_VERIFICATION, Role.INTAKE_CLERK))
    assert not result.passed
    assert result.reason == "No verification request date recorded"


def test_response_window_boundary(make_ctx, case_data):
    case_data.verification_requested_at = day(1)
    early = guard_verification_response_window(
        make_ctx(CaseStatus.PENDING_VERIFICATION, Role.INTAKE_CLERK, at=day(10))
    )
    assert not early.passed
    assert early.reason == "Only 9 of 10 required days elapsed since verification request"
    exact = guard_verification_response_window(
        make_ctx(CaseStatus.PENDING_VERIFICATION, Role.INTAKE_CLERK, at=day(11))
    )
    assert exact.passed


def test_appeal_deadline_boundary(make_ctx, case_data):
    case_data.notice_sent_at = day(9)
    on_time = guard_appeal_deadline(make_ctx(CaseStatus.NOTICE_SENT, Role.SYSTEM, at=day(99)))
    assert on_time.passed
    late = guard_appeal_deadline(make_ctx(CaseStatus.NOTICE_SENT, Role.SYSTEM, at=day(100)))
    assert not late.passed
    assert late.reason == "Appeal filed 91 days after notice (max 90)"
    assert late.citation == "SLA-APP-001"


def test_appeal_deadline_requires_notice(make_ctx):
    result = guard_appeal_deadline(make_ctx(CaseStatus.NOTICE_SENT, Role.SYSTEM))
    assert result.reason == "No notice sent date recorded"


def test_hearing_notice_boundary(make_ctx, case_data):
    case_data.hearing_scheduled_at = day(20)
    case_data.hearing_date = day(29)
    short = guard_hearing_notice(make_ctx(CaseStatus.APPEAL_HEARING_SCHEDULED, Role.HEARING_OFFICER))
    assert not short.passed
    assert short.reason == "Hearing only 9 days after scheduling (min 10)"
    case_data.hearing_date = day(30)
    assert guard_hearing_notice(make_ctx(CaseStatus.APPEAL_HEARING_SCHEDULED, Role.HEARING_OFFICER)).passed


def test_hearing_notice_requires_dates(make_ctx):
    result = guard_hearing_notice(make_ctx(CaseStatus.APPEAL_HEARING_SCHEDULED, Role.HEARING_OFFICER))
    assert result.reason == "Hearing scheduling date or hearing date not recorded"


def test_unguarded_action_has_no_results(make_ctx):
    assert check_guards(CaseAction.APPROVE, make_ctx(CaseStatus.READY_FOR_DETERMINATION, Role.CASEWORKER)) == ()
