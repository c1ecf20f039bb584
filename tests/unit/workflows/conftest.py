"""Fixtures for state machine and guard tests."""

from datetime import datetime, timezone

import pytest

from casework.domain.models.case import CaseData, CaseStatus, PolicyFacts, Role, TransitionContext

START = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def case_data():
    return CaseData(
        case_id="case-1",
        applicant_name="James Smith",
        household_size=3,
        application_date=START,
        required_verifications=["identity", "income"],
        missing_items=["income"],
    )


@pytest.fixture
def make_ctx(policy_pack, case_data):
    """Build a TransitionContext; case_data defaults to the fixture record."""
    facts = PolicyFacts.from_pack(policy_pack)

    def _make(
        state: CaseStatus,
        role: Role,
        *,
        at: datetime | None = None,
        data: CaseData | None = None,
    ) -> TransitionContext:
        return TransitionContext(
            case_id="case-1",
            current_state=state,
            role=role,
            agent_id="agent-1",
            timestamp=at or START,
            case_data=(data or case_data).snapshot(),
            policy=facts,
        )

    return _make
