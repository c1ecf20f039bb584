"""Compare a runner's claimed decision against the oracle's determination and classify mismatches."""

from collections.abc import Sequence
from typing import Union

from casework.domain.models.oracle import EligibleDetermination, IneligibleDetermination
from casework.domain.models.results import (
    ComparisonResult,
    MismatchRecord,
    MismatchSeverity,
    MismatchType,
    OracleComparison,
    RunnerDecision,
)
from casework.oracle.eligibility import format_amount

# Benefit deltas at or below this are medium severity, above it high.
BENEFIT_DELTA_HIGH_THRESHOLD = 50


def benefit_delta_severity(delta: float) -> MismatchSeverity:
    return MismatchSeverity.HIGH if delta > BENEFIT_DELTA_HIGH_THRESHOLD else MismatchSeverity.MEDIUM


def compare_with_oracle(
    runner_decision: RunnerDecision,
    runner_benefit_amount: float,
    runner_citations: Sequence[str],
    oracle: Union[EligibleDetermination, IneligibleDetermination],
) -> ComparisonResult:
    """Eligibility, benefit and citation checks run independently; each failure adds one record."""
    runner_decision = RunnerDecision(runner_decision)
    mismatches: list[MismatchRecord] = []
    oracle_decision = RunnerDecision.APPROVED if oracle.eligible else RunnerDecision.DENIED

    eligibility_match = runner_decision == oracle_decision
    if not eligibility_match:
        mismatches.append(
            MismatchRecord(
                type=MismatchType.ELIGIBILITY,
                severity=MismatchSeverity.CRITICAL,
                runner_value=runner_decision.value,
                oracle_value=oracle_decision.value,
                detail=(
                    f'Runner decided "{runner_decision.value}" '
                    f'but oracle determined "{oracle_decision.value}"'
                ),
            )
        )

    benefit_delta = abs(runner_benefit_amount - oracle.benefit_amount)
    benefit_match = benefit_delta == 0
    if not benefit_match:
        mismatches.append(
            MismatchRecord(
                type=MismatchType.BENEFIT_AMOUNT,
                severity=benefit_delta_severity(benefit_delta),
                runner_value=format_amount(runner_benefit_amount),
                oracle_value=format_amount(oracle.benefit_amount),
                detail=(
                    f"Benefit amount differs by ${format_amount(benefit_delta)} "
                    f"(runner: ${format_amount(runner_benefit_amount)}, "
                    f"oracle: ${format_amount(oracle.benefit_amount)})"
                ),
            )
        )

    cited = set(runner_citations)
    missing = tuple(rule for rule in oracle.cited_rules if rule not in cited)
    citations_covered = not missing
    if not citations_covered:
        mismatches.append(
            MismatchRecord(
                type=MismatchType.CITATION,
                severity=MismatchSeverity.LOW,
                runner_value=", ".join(runner_citations),
                oracle_value=", ".join(oracle.cited_rules),
                detail=f"Missing citations: {', '.join(missing)}",
            )
        )

    return ComparisonResult(
        comparison=OracleComparison(
            eligibility_match=eligibility_match,
            benefit_match=benefit_match,
            benefit_delta=benefit_delta,
            citations_covered=citations_covered,
            missing_citations=missing,
        ),
        mismatches=tuple(mismatches),
    )
