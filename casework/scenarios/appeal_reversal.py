"""Appeal-reversal scenario: a denied case is appealed and decided favorably, upheld, or remanded."""

import random
from enum import Enum

from casework.domain.exceptions import DomainValidationError
from casework.scenarios.base import (
    DEFAULT_POLICY_PACK_ID,
    GeneratedCase,
    ScenarioName,
    applicant_name,
    generate_oracle_input,
    household_size,
    pick_variant,
)

APPEAL_VERIFICATIONS: tuple[str, ...] = ("identity", "income", "residency")

DENIAL_REASONS: tuple[str, ...] = (
    "Gross income exceeds 130% FPL",
    "Net income exceeds 100% FPL",
    "Countable resources exceed limit",
    "Failed to meet work requirements",
    "Incomplete verification within deadline",
)

APPEAL_REASONS: tuple[str, ...] = (
    "Income was miscalculated",
    "Verification documents were submitted but not processed",
    "Household composition was incorrect",
    "Medical expenses were not properly deducted",
    "Work requirement exemption should apply",
    "Shelter costs were not fully accounted for",
)


class AppealVariant(str, Enum):
    FAVORABLE_REVERSAL = "favorable_reversal"
    UNFAVORABLE_UPHELD = "unfavorable_upheld"
    REMAND_REOPENED = "remand_reopened"


# Cumulative thresholds: 50% favorable, 30% upheld, 20% remand.
VARIANT_THRESHOLDS: tuple[tuple[float, AppealVariant], ...] = (
    (0.50, AppealVariant.FAVORABLE_REVERSAL),
    (0.80, AppealVariant.UNFAVORABLE_UPHELD),
    (1.00, AppealVariant.REMAND_REOPENED),
)

# Upheld denials get high income so the oracle independently confirms ineligibility.
INCOME_BANDS: dict[AppealVariant, tuple[int, int]] = {
    AppealVariant.FAVORABLE_REVERSAL: (400, 1600),
    AppealVariant.UNFAVORABLE_UPHELD: (3000, 5000),
    AppealVariant.REMAND_REOPENED: (400, 1600),
}


class AppealReversalCase(GeneratedCase):
    scenario: ScenarioName = ScenarioName.APPEAL_REVERSAL
    variant: AppealVariant
    denial_reason: str
    appeal_reason: str


def generate_appeal_reversal_cases(
    count: int,
    seed: int,
    *,
    policy_pack_id: str = DEFAULT_POLICY_PACK_ID,
) -> list[AppealReversalCase]:
    """Deterministic: the same (count, seed) yields the same cases."""
    if count < 0:
        raise DomainValidationError(f"count must be non-negative, got {count}")
    rng = random.Random(seed)
    cases = []
    for index in range(count):
        name = applicant_name(rng)
        size = household_size(rng)
        variant = pick_variant(rng, VARIANT_THRESHOLDS)
        denial_reason = rng.choice(DENIAL_REASONS)
        appeal_reason = rng.choice(APPEAL_REASONS)
        cases.append(
            AppealReversalCase(
                case_index=index,
                variant=variant,
                applicant_name=name,
                household_size=size,
                required_verifications=APPEAL_VERIFICATIONS,
                denial_reason=denial_reason,
                appeal_reason=appeal_reason,
                oracle_input=generate_oracle_input(
                    rng, size, INCOME_BANDS[variant], policy_pack_id=policy_pack_id
                ),
            )
        )
    return cases
