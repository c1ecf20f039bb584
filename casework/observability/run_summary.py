"""Reduce a RunResult into aggregate QA metrics: outcomes, SLA, citations, oracle agreement, appeals."""

from collections import Counter
from typing import Optional

from pydantic import BaseModel

from casework.domain.models.case import CaseAction
from casework.domain.models.results import CaseOutcome, RunResult
from casework.scenarios.appeal_reversal import AppealVariant
from casework.scenarios.base import ScenarioName


class SlaCompliance(BaseModel):
    on_time: int
    breached: int
    breach_rate: float
    breaches_by_sla: dict[str, int] = {}


class SummaryError(BaseModel):
    case_id: str
    error: str
    category: str


class OracleMetrics(BaseModel):
    cases_evaluated: int
    eligibility_match_rate: float
    benefit_exact_match_rate: float
    average_benefit_delta: float
    mismatch_count: int
    mismatches_by_severity: dict[str, int]


class AppealMetrics(BaseModel):
    cases_appealed: int
    favorable_rate: float
    unfavorable_rate: float
    remand_rate: float
    avg_time_to_decision: float


class RunSummary(BaseModel):
    run_id: str
    total_cases: int
    by_variant: dict[str, int]
    by_outcome: dict[str, int]
    sla_compliance: SlaCompliance
    average_time_to_decision: float
    notice_completeness: float
    citation_coverage: float
    errors: list[SummaryError]
    oracle_metrics: OracleMetrics
    appeal_metrics: Optional[AppealMetrics] = None


def _rate(part: float, whole: float) -> float:
    return part / whole if whole else 0.0


def _appeal_metrics(result: RunResult) -> Optional[AppealMetrics]:
    appeal_cases = [cr for cr in result.case_results if cr.scenario == ScenarioName.APPEAL_REVERSAL.value]
    if not appeal_cases:
        return None
    variants = Counter(cr.variant for cr in appeal_cases)
    decided = [cr.time_to_decision_days for cr in appeal_cases if cr.time_to_decision_days is not None]
    total = len(appeal_cases)
    return AppealMetrics(
        cases_appealed=total,
        favorable_rate=_rate(variants[AppealVariant.FAVORABLE_REVERSAL.value], total),
        unfavorable_rate=_rate(variants[AppealVariant.UNFAVORABLE_UPHELD.value], total),
        remand_rate=_rate(variants[AppealVariant.REMAND_REOPENED.value], total),
        avg_time_to_decision=_rate(sum(decided), len(decided)),
    )


def compute_run_summary(result: RunResult) -> RunSummary:
    """Pure reduction over case results; errored cases are listed, not counted as cases."""
    cases = result.case_results
    total_cases = len(cases)

    by_variant: Counter[str] = Counter(cr.variant for cr in cases)
    by_outcome = {outcome.value: 0 for outcome in CaseOutcome}
    for cr in cases:
        by_outcome[cr.outcome.value] += 1

    breached = sum(1 for cr in cases if cr.sla_breaches)
    breaches_by_sla: Counter[str] = Counter(sla for cr in cases for sla in cr.sla_breaches)

    decision_days = [cr.time_to_decision_days for cr in cases if cr.time_to_decision_days is not None]

    events = [ev for cr in cases for ev in cr.events]
    cited_events = sum(1 for ev in events if ev.citations)

    decided_cases = [cr for cr in cases if cr.outcome != CaseOutcome.ABANDONED]
    noticed = sum(
        1 for cr in decided_cases if any(ev.action == CaseAction.SEND_NOTICE for ev in cr.events)
    )

    reviews = [cr.oracle_review for cr in cases if cr.oracle_review is not None]
    comparisons = [review.comparison.comparison for review in reviews]
    mismatches = [m for review in reviews for m in review.comparison.mismatches]
    evaluated = len(comparisons)

    return RunSummary(
        run_id=result.run_id,
        total_cases=total_cases,
        by_variant=dict(by_variant),
        by_outcome=by_outcome,
        sla_compliance=SlaCompliance(
            on_time=total_cases - breached,
            breached=breached,
            breach_rate=_rate(breached, total_cases),
            breaches_by_sla=dict(breaches_by_sla),
        ),
        average_time_to_decision=_rate(sum(decision_days), len(decision_days)),
        notice_completeness=_rate(noticed, len(decided_cases)) if decided_cases else 1.0,
        citation_coverage=_rate(cited_events, len(events)),
        errors=[
            SummaryError(case_id=e.case_id, error=e.error, category=e.category)
            for e in result.errors
        ],
        oracle_metrics=OracleMetrics(
            cases_evaluated=evaluated,
            eligibility_match_rate=_rate(sum(1 for c in comparisons if c.eligibility_match), evaluated),
            benefit_exact_match_rate=_rate(sum(1 for c in comparisons if c.benefit_match), evaluated),
            average_benefit_delta=_rate(sum(c.benefit_delta for c in comparisons), evaluated),
            mismatch_count=len(mismatches),
            mismatches_by_severity=dict(Counter(m.severity.value for m in mismatches)),
        ),
        appeal_metrics=_appeal_metrics(result),
    )
