"""Policy pack models: immutable rule tables loaded once and passed explicitly. No I/O."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _PolicyModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


# Standard deduction brackets: sizes 1-3, 4, 5, 6 and up.
STANDARD_DEDUCTION_BRACKETS = ("1", "4", "5", "6")


# ---------------------------------------------------------------------------
# pack.json / citations.json
# ---------------------------------------------------------------------------

class PackMeta(_PolicyModel):
    pack_id: str = Field(..., min_length=1)
    program: str
    jurisdiction: str
    version: str
    effective_date: date
    description: str = ""


class CitationSource(_PolicyModel):
    citation_id: str = Field(..., min_length=1)
    title: str
    url: Optional[str] = None


class CitationCatalog(_PolicyModel):
    sources: tuple[CitationSource, ...]


# ---------------------------------------------------------------------------
# rules.json
# ---------------------------------------------------------------------------

class IncomeTest(_PolicyModel):
    rule_id: str
    description: str = ""
    threshold_pct_fpl: int = Field(..., gt=0)
    threshold_pct_fpl_with_qualifying_member: Optional[int] = Field(None, gt=0)


class IncomeTests(_PolicyModel):
    gross_income_test: IncomeTest
    net_income_test: IncomeTest


class ResourceLimit(_PolicyModel):
    rule_id: str
    amount: float = Field(..., ge=0)


class ResourceLimits(_PolicyModel):
    standard: ResourceLimit
    with_qualifying_member: ResourceLimit


class SizeTable(_PolicyModel):
    """Amounts tabulated by household size, extrapolated linearly past the largest size."""

    rule_id: str
    description: str = ""
    by_household_size: dict[str, int]
    additional_member: int = Field(..., ge=0)

    @field_validator("by_household_size")
    @classmethod
    def sizes_must_be_contiguous(cls, v: dict[str, int]) -> dict[str, int]:
        """Keys must be exactly "1".."N" so every size up to the largest has an entry."""
        if not v:
            raise ValueError("by_household_size must not be empty")
        for key in v:
            if not key.isdigit() or str(int(key)) != key or int(key) < 1:
                raise ValueError(f"household size keys must be positive integers, got {key!r}")
        expected = {str(size) for size in range(1, len(v) + 1)}
        missing = sorted(expected - set(v), key=int)
        if missing:
            raise ValueError(f"household sizes missing from table: {', '.join(missing)}")
        return v

    @property
    def largest_size(self) -> int:
        return max(int(k) for k in self.by_household_size)

    def amount_for(self, household_size: int) -> int:
        largest = self.largest_size
        if household_size <= largest:
            return self.by_household_size[str(household_size)]
        return self.by_household_size[str(largest)] + (household_size - largest) * self.additional_member


class MaxAllotments(SizeTable):
    minimum_benefit: int = Field(..., ge=0)
    minimum_benefit_applies_to: tuple[int, ...] = ()


class StandardDeduction(_PolicyModel):
    rule_id: str
    by_household_size: dict[str, int]

    @field_validator("by_household_size")
    @classmethod
    def brackets_must_be_present(cls, v: dict[str, int]) -> dict[str, int]:
        missing = [key for key in STANDARD_DEDUCTION_BRACKETS if key not in v]
        if missing:
            raise ValueError(f"standard deduction brackets missing: {', '.join(missing)}")
        return v

    def amount_for(self, household_size: int) -> int:
        """Sizes 1-3 share the "1" bracket, 4 and 5 have their own, 6+ share "6"."""
        if household_size <= 3:
            return self.by_household_size["1"]
        if household_size == 4:
            return self.by_household_size["4"]
        if household_size == 5:
            return self.by_household_size["5"]
        return self.by_household_size["6"]


class EarnedIncomeDeduction(_PolicyModel):
    rule_id: str
    rate: float = Field(..., ge=0, le=1)


class PassThroughDeduction(_PolicyModel):
    rule_id: str


class MedicalDeduction(_PolicyModel):
    rule_id: str
    threshold: float = Field(..., ge=0)


class ExcessShelterDeduction(_PolicyModel):
    rule_id: str
    income_multiplier: float = Field(..., ge=0)
    cap: float = Field(..., ge=0)


class Deductions(_PolicyModel):
    standard: StandardDeduction
    earned_income: EarnedIncomeDeduction
    dependent_care: PassThroughDeduction
    child_support: PassThroughDeduction
    medical: MedicalDeduction
    excess_shelter: ExcessShelterDeduction


class UtilityAllowances(_PolicyModel):
    rule_id: str
    tiers: dict[str, int]

    @field_validator("tiers")
    @classmethod
    def tiers_must_be_complete(cls, v: dict[str, int]) -> dict[str, int]:
        missing = {"heating_cooling", "limited_utility", "single_utility", "telephone_only"} - set(v)
        if missing:
            raise ValueError(f"utility allowance tiers missing: {', '.join(sorted(missing))}")
        return v


class BenefitFormula(_PolicyModel):
    rule_id: str
    contribution_rate: float = Field(..., ge=0, le=1)
    round_direction: str = "down"


class IncomeConversion(_PolicyModel):
    rule_id: str
    weekly_multiplier: float = Field(..., gt=0)
    biweekly_multiplier: float = Field(..., gt=0)
    annual_divisor: int = Field(12, gt=0)


class ExpeditedService(_PolicyModel):
    rule_id: str
    gross_income_limit: float
    liquid_resource_limit: float


class VerificationRule(_PolicyModel):
    rule_id: str
    items: tuple[str, ...]


class VerificationRules(_PolicyModel):
    mandatory: VerificationRule
    conditional: VerificationRule


class NoticeRule(_PolicyModel):
    rule_id: str
    required_fields: tuple[str, ...] = ()


class NoticeRequirements(_PolicyModel):
    approval: NoticeRule
    denial: NoticeRule
    verification_request: NoticeRule


class PolicyRules(_PolicyModel):
    income_tests: IncomeTests
    resource_limits: ResourceLimits
    fpl_table: SizeTable
    max_allotments: MaxAllotments
    deductions: Deductions
    utility_allowances: UtilityAllowances
    benefit_formula: BenefitFormula
    income_conversion: IncomeConversion
    expedited_service: ExpeditedService
    verification: VerificationRules
    notice_requirements: NoticeRequirements


# ---------------------------------------------------------------------------
# sla.json
# ---------------------------------------------------------------------------

class SlaWindow(_PolicyModel):
    sla_id: str
    description: str = ""
    max_calendar_days: Optional[int] = Field(None, ge=0)
    min_calendar_days: Optional[int] = Field(None, ge=0)


class ProcessingSla(_PolicyModel):
    standard: SlaWindow
    expedited: SlaWindow


class VerificationSla(_PolicyModel):
    response_window: SlaWindow


class AppealsSla(_PolicyModel):
    filing_window: SlaWindow
    hearing_notice: SlaWindow
    decision_deadline: SlaWindow
    favorable_implementation: SlaWindow


class NoticesSla(_PolicyModel):
    adverse_action: SlaWindow


class SlaTable(_PolicyModel):
    processing: ProcessingSla
    verification: VerificationSla
    appeals: AppealsSla
    notices: NoticesSla


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

class PolicyPack(_PolicyModel):
    """One versioned, jurisdiction-specific bundle of rules plus the flattened id index."""

    meta: PackMeta
    rules: PolicyRules
    sla: SlaTable
    citations: CitationCatalog
    rule_index: frozenset[str]

    @property
    def pack_id(self) -> str:
        return self.meta.pack_id
