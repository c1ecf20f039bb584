"""Missing-documentation scenario: verification items requested, then on time, late, never, or refused."""

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

VERIFICATION_ITEMS: tuple[str, ...] = ("identity", "residency", "income", "citizenship", "resources")


class MissingDocsVariant(str, Enum):
    DOCS_ARRIVE_ON_TIME = "docs_arrive_on_time"
    DOCS_ARRIVE_LATE = "docs_arrive_late"
    DOCS_NEVER_ARRIVE = "docs_never_arrive"
    APPLICANT_REFUSES = "applicant_refuses"


# Cumulative thresholds: 40% on time, 20% late, 20% never, 20% refuses.
VARIANT_THRESHOLDS: tuple[tuple[float, MissingDocsVariant], ...] = (
    (0.40, MissingDocsVariant.DOCS_ARRIVE_ON_TIME),
    (0.60, MissingDocsVariant.DOCS_ARRIVE_LATE),
    (0.80, MissingDocsVariant.DOCS_NEVER_ARRIVE),
    (1.00, MissingDocsVariant.APPLICANT_REFUSES),
)

# Monthly earned income bands. Cases that end approved get incomes the oracle
# will usually accept; a refusal is procedural, so its band spans both sides.
INCOME_BANDS: dict[MissingDocsVariant, tuple[int, int]] = {
    MissingDocsVariant.DOCS_ARRIVE_ON_TIME: (400, 1600),
    MissingDocsVariant.DOCS_ARRIVE_LATE: (400, 1600),
    MissingDocsVariant.DOCS_NEVER_ARRIVE: (400, 1600),
    MissingDocsVariant.APPLICANT_REFUSES: (400, 4500),
}


class MissingDocsCase(GeneratedCase):
    scenario: ScenarioName = ScenarioName.MISSING_DOCS
    variant: MissingDocsVariant


def generate_missing_docs_cases(
    count: int,
    seed: int,
    *,
    policy_pack_id: str = DEFAULT_POLICY_PACK_ID,
) -> list[MissingDocsCase]:
    """Deterministic: the same (count, seed) yields the same cases."""
    if count < 0:
        raise DomainValidationError(f"count must be non-negative, got {count}")
    rng = random.Random(seed)
    cases = []
    for index in range(count):
        name = applicant_name(rng)
        size = household_size(rng)
        required = rng.sample(VERIFICATION_ITEMS, rng.randint(2, 4))
        missing = rng.sample(required, rng.randint(1, 2))
        variant = pick_variant(rng, VARIANT_THRESHOLDS)
        cases.append(
            MissingDocsCase(
                case_index=index,
                variant=variant,
                applicant_name=name,
                household_size=size,
                required_verifications=tuple(required),
                missing_items=tuple(missing),
                oracle_input=generate_oracle_input(
                    rng, size, INCOME_BANDS[variant], policy_pack_id=policy_pack_id
                ),
            )
        )
    return cases
