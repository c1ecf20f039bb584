"""Request schemas for the HTTP surface. Strict validation, no infrastructure."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from casework.domain.models.case import CaseAction, CaseStatus, Role
from casework.domain.models.oracle import OracleInput
from casework.domain.models.results import RunnerDecision


class CaseDataPayload(BaseModel):
    """Case working record as supplied by a caller for a one-off transition."""

    applicant_name: str = Field(..., min_length=1)
    household_size: int = Field(..., ge=1)
    application_date: datetime
    required_verifications: list[str] = []
    verified_items: list[str] = []
    missing_items: list[str] = []
    verification_requested_at: Optional[datetime] = None
    notice_sent_at: Optional[datetime] = None
    appeal_filed_at: Optional[datetime] = None
    hearing_scheduled_at: Optional[datetime] = None
    hearing_date: Optional[datetime] = None
    determination_result: Optional[str] = None


class TransitionRequest(BaseModel):
    case_id: str = Field(..., min_length=1)
    current_state: CaseStatus
    action: CaseAction
    role: Role
    agent_id: str = Field(..., min_length=1)
    citations: list[str] = []
    timestamp: datetime
    case_data: CaseDataPayload


class ComparisonRequest(BaseModel):
    runner_decision: RunnerDecision
    runner_benefit_amount: float = Field(0, ge=0)
    runner_citations: list[str] = []
    oracle_input: OracleInput


class RunRequest(BaseModel):
    scenario: str = Field(..., min_length=1)
    count: Optional[int] = Field(None, ge=1)
    seed: int = 42
    include_cases: bool = False
