"""Shared pieces for seeded scenario generators: name pools, case models, household finances."""

import random
from collections.abc import Sequence
from datetime import date
from enum import Enum
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from casework.domain.models.oracle import (
    CitizenshipStatus,
    HouseholdMember,
    IncomeFrequency,
    IncomeItem,
    IncomeType,
    OracleInput,
    ResourceItem,
    ShelterCosts,
    SuaTier,
)

DEFAULT_POLICY_PACK_ID = "snap-illinois-fy2026-v1"
APPLICATION_DATE = date(2026, 1, 15)

FIRST_NAMES: tuple[str, ...] = (
    "Maria", "James", "Patricia", "Robert", "Linda",
    "Michael", "Barbara", "William", "Elizabeth", "David",
    "Jennifer", "Richard", "Susan", "Joseph", "Jessica",
    "Thomas", "Sarah", "Charles", "Karen", "Daniel",
)

LAST_NAMES: tuple[str, ...] = (
    "Garcia", "Smith", "Johnson", "Williams", "Brown",
    "Jones", "Davis", "Martinez", "Rodriguez", "Wilson",
    "Anderson", "Taylor", "Thomas", "Moore", "Jackson",
    "Martin", "Lee", "Perez", "Thompson", "White",
)

MIN_HOUSEHOLD_SIZE = 1
MAX_HOUSEHOLD_SIZE = 6

# Pay frequency and the divisor that turns a monthly figure into one paycheck.
_PAY_FREQUENCIES: tuple[tuple[IncomeFrequency, float], ...] = (
    (IncomeFrequency.MONTHLY, 1.0),
    (IncomeFrequency.BIWEEKLY, 2.15),
    (IncomeFrequency.WEEKLY, 4.3),
)

_SUA_TIERS: tuple[SuaTier, ...] = (
    SuaTier.HEATING_COOLING,
    SuaTier.LIMITED_UTILITY,
    SuaTier.SINGLE_UTILITY,
    SuaTier.TELEPHONE_ONLY,
    SuaTier.NONE,
)

V = TypeVar("V")


class ScenarioName(str, Enum):
    MISSING_DOCS = "missing_docs"
    APPEAL_REVERSAL = "appeal_reversal"


class GeneratedCase(BaseModel):
    """One synthetic case. Identical (count, seed) always yields identical cases."""

    model_config = ConfigDict(frozen=True)

    case_index: int = Field(..., ge=0)
    scenario: ScenarioName
    variant: str
    applicant_name: str
    household_size: int = Field(..., ge=MIN_HOUSEHOLD_SIZE)
    required_verifications: tuple[str, ...]
    missing_items: tuple[str, ...] = ()
    oracle_input: OracleInput

    @property
    def variant_name(self) -> str:
        return getattr(self.variant, "value", self.variant)

    @model_validator(mode="after")
    def missing_items_must_be_required(self) -> "GeneratedCase":
        stray = set(self.missing_items) - set(self.required_verifications)
        if stray:
            raise ValueError(f"missing items not required: {', '.join(sorted(stray))}")
        return self


def pick_variant(rng: random.Random, thresholds: Sequence[tuple[float, V]]) -> V:
    """Choose by cumulative-probability thresholds; the last entry catches the remainder."""
    roll = rng.random()
    for cutoff, variant in thresholds:
        if roll < cutoff:
            return variant
    return thresholds[-1][1]


def applicant_name(rng: random.Random) -> str:
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"


def household_size(rng: random.Random) -> int:
    return rng.randint(MIN_HOUSEHOLD_SIZE, MAX_HOUSEHOLD_SIZE)


def _household_members(rng: random.Random, size: int) -> tuple[HouseholdMember, ...]:
    members = []
    for i in range(size):
        age = rng.randint(18, 67) if i == 0 else rng.randint(1, 80)
        is_disabled = rng.random() < 0.08
        is_student = 18 <= age <= 24 and rng.random() < 0.15
        members.append(
            HouseholdMember(
                age=age,
                is_disabled=is_disabled,
                is_student=is_student,
                citizenship_status=CitizenshipStatus.CITIZEN,
            )
        )
    return tuple(members)


def generate_oracle_input(
    rng: random.Random,
    size: int,
    monthly_earned_range: tuple[int, int],
    *,
    policy_pack_id: str = DEFAULT_POLICY_PACK_ID,
    application_date: date = APPLICATION_DATE,
) -> OracleInput:
    """
    Synthesize household finances. The earned-income band is what callers tune per
    variant so the oracle can plausibly agree or disagree with the scripted outcome.
    """
    members = _household_members(rng, size)
    elderly_or_disabled = any(m.age >= 60 or m.is_disabled for m in members)
    has_young_child = any(m.age < 13 for m in members)

    frequency, divisor = rng.choice(_PAY_FREQUENCIES)
    monthly_earned = rng.randint(*monthly_earned_range)
    income = [
        IncomeItem(
            type=IncomeType.EARNED,
            amount=round(monthly_earned / divisor),
            frequency=frequency,
            source="employment",
        )
    ]
    if rng.random() < 0.25:
        income.append(
            IncomeItem(
                type=IncomeType.UNEARNED,
                amount=rng.randint(100, 500),
                frequency=IncomeFrequency.MONTHLY,
                source="unemployment_benefits",
            )
        )

    resources = []
    if rng.random() < 0.2:
        resources.append(ResourceItem(type="savings", value=rng.randint(0, 3000), countable=True))

    sua_tier = rng.choice(_SUA_TIERS)
    rent = rng.randint(400, 1600) if rng.random() < 0.75 else 0

    medical = 0
    if elderly_or_disabled and rng.random() < 0.4:
        medical = rng.randint(35, 335)
    dependent_care = 0
    if has_young_child and rng.random() < 0.3:
        dependent_care = rng.randint(50, 550)
    child_support = 0
    if rng.random() < 0.1:
        child_support = rng.randint(50, 450)

    return OracleInput(
        household_size=size,
        household_members=members,
        income=tuple(income),
        resources=tuple(resources),
        shelter_costs=ShelterCosts(rent=rent, sua_tier=sua_tier),
        medical_expenses=medical,
        dependent_care_costs=dependent_care,
        child_support_paid=child_support,
        application_date=application_date,
        policy_pack_id=policy_pack_id,
    )
