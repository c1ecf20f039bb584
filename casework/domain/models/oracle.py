"""Eligibility oracle input and output models. Outputs are tagged: eligible vs ineligible."""

from datetime import date
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class CitizenshipStatus(str, Enum):
    CITIZEN = "citizen"
    QUALIFIED_ALIEN = "qualified_alien"
    INELIGIBLE = "ineligible"


class IncomeType(str, Enum):
    EARNED = "earned"
    UNEARNED = "unearned"
    EXCLUDED = "excluded"


class IncomeFrequency(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    ANNUAL = "annual"


class SuaTier(str, Enum):
    HEATING_COOLING = "heating_cooling"
    LIMITED_UTILITY = "limited_utility"
    SINGLE_UTILITY = "single_utility"
    TELEPHONE_ONLY = "telephone_only"
    NONE = "none"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

class HouseholdMember(_FrozenModel):
    age: int = Field(..., ge=0, le=130)
    is_disabled: bool = False
    is_student: bool = False
    citizenship_status: CitizenshipStatus = CitizenshipStatus.CITIZEN


class IncomeItem(_FrozenModel):
    type: IncomeType
    amount: float = Field(..., ge=0)
    frequency: IncomeFrequency
    source: str = ""
    verified: bool = True


class ResourceItem(_FrozenModel):
    type: str
    value: float = Field(..., ge=0)
    countable: bool = True


class ShelterCosts(_FrozenModel):
    rent: float = Field(0, ge=0)
    mortgage: float = Field(0, ge=0)
    property_tax: float = Field(0, ge=0)
    insurance: float = Field(0, ge=0)
    condo_fees: float = Field(0, ge=0)
    sua_tier: SuaTier = SuaTier.NONE


class OracleInput(_FrozenModel):
    """Household and financial facts for one determination. Constructed once per case."""

    household_size: int = Field(..., ge=1)
    household_members: tuple[HouseholdMember, ...] = Field(..., min_length=1)
    income: tuple[IncomeItem, ...] = ()
    resources: tuple[ResourceItem, ...] = ()
    shelter_costs: ShelterCosts = ShelterCosts()
    medical_expenses: float = Field(0, ge=0)
    dependent_care_costs: float = Field(0, ge=0)
    child_support_paid: float = Field(0, ge=0)
    application_date: date
    policy_pack_id: str = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

StepValue = Union[bool, int, float, str]


class ShelterCostDetail(_FrozenModel):
    rent: float = 0
    mortgage: float = 0
    property_tax: float = 0
    insurance: float = 0
    condo_fees: float = 0
    sua_tier: SuaTier = SuaTier.NONE
    sua_amount: float = 0
    total_shelter_costs: float = 0


class DeductionBreakdown(_FrozenModel):
    standard: float = 0
    earned_income: float = 0
    dependent_care: float = 0
    child_support: float = 0
    medical: float = 0
    excess_shelter: float = 0
    total_deductions: float = 0
    shelter_cost_detail: ShelterCostDetail = ShelterCostDetail()


class CalculationStep(_FrozenModel):
    step_number: int = Field(..., ge=1, le=16)
    description: str
    rule_id: str
    inputs: dict[str, StepValue]
    output: StepValue
    formula: Optional[str] = None


class FailedTest(_FrozenModel):
    name: str
    rule_id: str
    reason: str
    actual: float
    limit: float


class _Determination(_FrozenModel):
    gross_income: float
    net_income: float
    deductions: DeductionBreakdown
    cited_rules: tuple[str, ...]
    calculation_steps: tuple[CalculationStep, ...]
    expedited_eligible: bool = False


class EligibleDetermination(_Determination):
    outcome: Literal["eligible"] = "eligible"
    benefit_amount: int = Field(..., gt=0)

    @computed_field
    @property
    def eligible(self) -> bool:
        return True

    @computed_field
    @property
    def failed_tests(self) -> tuple[FailedTest, ...]:
        return ()


class IneligibleDetermination(_Determination):
    outcome: Literal["ineligible"] = "ineligible"
    reason: str
    failed_tests: tuple[FailedTest, ...] = ()

    @computed_field
    @property
    def eligible(self) -> bool:
        return False

    @computed_field
    @property
    def benefit_amount(self) -> int:
        return 0

    @model_validator(mode="after")
    def reason_must_not_be_blank(self) -> "IneligibleDetermination":
        if not self.reason.strip():
            raise ValueError("ineligible determination requires a reason")
        return self


OracleOutput = Annotated[
    Union[EligibleDetermination, IneligibleDetermination],
    Field(discriminator="outcome"),
]
