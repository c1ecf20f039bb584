"""Case artifact schemas: closed tagged-variant set keyed by artifact_type. Strict validation, no I/O."""

from datetime import date, datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from casework.domain.exceptions import DomainValidationError
from casework.domain.models.case import AppealOutcome


class _Artifact(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class VerificationRequest(_Artifact):
    artifact_type: Literal["verification_request"] = "verification_request"
    missing_items: list[str] = Field(..., min_length=1)
    deadline: date
    consequences: str = Field(..., min_length=1)
    assistance_obligation: str = Field(..., min_length=1)


class WorksheetDeductions(_Artifact):
    standard: float
    earned_income: float
    dependent_care: float
    child_support: float
    medical: float
    excess_shelter: float


class DeterminationWorksheet(_Artifact):
    artifact_type: Literal["determination_worksheet"] = "determination_worksheet"
    eligible: bool
    gross_income: float
    net_income: float
    benefit_amount: float = Field(..., ge=0)
    deductions: WorksheetDeductions
    reason: Optional[str] = None


class Notice(_Artifact):
    artifact_type: Literal["notice"] = "notice"
    notice_type: Literal["approval", "denial"]
    recipient_name: str = Field(..., min_length=1)
    notice_date: date
    fields: dict[str, str]
    template_id: str = Field(..., min_length=1)


class AppealRequest(_Artifact):
    artifact_type: Literal["appeal_request"] = "appeal_request"
    appeal_id: str = Field(..., min_length=1)
    case_id: str = Field(..., min_length=1)
    filed_at: datetime
    reason: str = Field(..., min_length=1)
    cited_errors: list[str] = []
    requested_relief: str = Field(..., min_length=1)


class HearingRecord(_Artifact):
    artifact_type: Literal["hearing_record"] = "hearing_record"
    hearing_id: str = Field(..., min_length=1)
    case_id: str = Field(..., min_length=1)
    scheduled_at: datetime
    hearing_date: datetime
    attendees: list[str] = Field(..., min_length=1)
    evidence_presented: list[str] = []
    findings_of_fact: list[str] = []


class AppealDecision(_Artifact):
    artifact_type: Literal["appeal_decision"] = "appeal_decision"
    decision_id: str = Field(..., min_length=1)
    case_id: str = Field(..., min_length=1)
    outcome: AppealOutcome
    reasoning: str = Field(..., min_length=1)
    cited_regulations: list[str] = Field(..., min_length=1)
    order_text: str = Field(..., min_length=1)
    implementation_deadline: date


Artifact = Annotated[
    Union[
        VerificationRequest,
        DeterminationWorksheet,
        Notice,
        AppealRequest,
        HearingRecord,
        AppealDecision,
    ],
    Field(discriminator="artifact_type"),
]

ARTIFACT_TYPES: tuple[str, ...] = (
    "verification_request",
    "determination_worksheet",
    "notice",
    "appeal_request",
    "hearing_record",
    "appeal_decision",
)

_artifact_adapter: TypeAdapter[Any] = TypeAdapter(Artifact)


def validate_artifact(payload: dict[str, Any]) -> Artifact:
    """Validate a raw artifact against the variant named by its artifact_type tag."""
    artifact_type = payload.get("artifact_type")
    if artifact_type not in ARTIFACT_TYPES:
        raise DomainValidationError(f"Unknown artifact type: {artifact_type}")
    try:
        return _artifact_adapter.validate_python(payload)
    except ValidationError as e:
        raise DomainValidationError(f"Invalid {artifact_type} artifact: {e}") from e
