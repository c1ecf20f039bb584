"""
Scenario runner: replays each generated case along its scripted timeline through the
state machine, evaluates the oracle, compares, and collects a RunResult.
One case failing never aborts the batch.
"""

import logging
import time
import uuid
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

from casework.core.context import case_id_ctx, run_id_ctx
from casework.domain.exceptions import (
    DomainError,
    IncompleteScriptError,
    PolicyPackMismatchError,
    ScriptStepFailedError,
)
from casework.domain.models.case import CaseData, CaseStatus, PolicyFacts, TransitionContext
from casework.domain.models.policy import PolicyPack, SlaTable
from casework.domain.models.results import (
    CaseError,
    CaseOutcome,
    CaseResult,
    OracleReview,
    RunEvent,
    RunnerDecision,
    RunResult,
)
from casework.observability.failure_classifier import FailureCategory, FailureClassifier
from casework.observability.metrics import MetricsCollector
from casework.oracle.comparison import compare_with_oracle
from casework.oracle.eligibility import compute_eligibility
from casework.runner.scripts import (
    ACTION_CITATIONS,
    DECISION_ACTIONS,
    PLAYBOOKS,
    SLA_CHECKS,
)
from casework.scenarios import generate_cases, resolve_scenario
from casework.scenarios.base import GeneratedCase
from casework.workflows.state_machine import TERMINAL_STATES, transition

logger = logging.getLogger(__name__)

DEFAULT_START_DATE = date(2026, 1, 1)

# The scripted workflow never computes a benefit, so every eligible oracle result
# produces a benefit mismatch that routes the case to human benefit verification.
RUNNER_BENEFIT_AMOUNT = 0


def case_id_for(case_index: int) -> str:
    return f"case-{case_index}"


def evaluate_sla_breaches(events: Sequence[RunEvent], start: datetime, sla: SlaTable) -> list[str]:
    """SLA ids whose window was exceeded. Windows whose start or end never happened are skipped."""
    breaches = []
    for check in SLA_CHECKS:
        window = check.window(sla)
        if window.max_calendar_days is None:
            continue
        if check.start_action is None:
            window_start: Optional[datetime] = start
        else:
            window_start = next((e.timestamp for e in events if e.action == check.start_action), None)
        if window_start is None:
            continue
        window_end = next(
            (e.timestamp for e in events if e.action in check.end_actions and e.timestamp >= window_start),
            None,
        )
        if window_end is None:
            continue
        if (window_end - window_start).days > window.max_calendar_days:
            breaches.append(window.sla_id)
    return breaches


class CaseRunner:
    """Replays generated cases against one loaded policy pack. Holds no per-case state."""

    def __init__(
        self,
        policy_pack: PolicyPack,
        *,
        start_date: date = DEFAULT_START_DATE,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self._pack = policy_pack
        self._facts = PolicyFacts.from_pack(policy_pack)
        self._start = datetime(start_date.year, start_date.month, start_date.day, tzinfo=timezone.utc)
        self._metrics = metrics

    def run_case(self, case: GeneratedCase) -> CaseResult:
        """
        Replay one case. Raises ScriptStepFailedError when a scripted transition is
        rejected and IncompleteScriptError when the script stops short of a terminal state.
        """
        playbook = PLAYBOOKS[case.scenario]
        variant = case.variant_name
        script = playbook.scripts[variant]
        outcome = playbook.outcomes[variant]
        case_id = case_id_for(case.case_index)

        case_data = CaseData(
            case_id=case_id,
            applicant_name=case.applicant_name,
            household_size=case.household_size,
            application_date=self._start,
            required_verifications=list(case.required_verifications),
            missing_items=list(case.missing_items),
        )
        state = CaseStatus.RECEIVED
        events: list[RunEvent] = []

        for step in script:
            timestamp = self._start + timedelta(days=step.day)
            if step.prepare is not None:
                step.prepare(case_data, self._start)
                case_data.check_invariants()
            ctx = TransitionContext(
                case_id=case_id,
                current_state=state,
                role=step.role,
                agent_id=step.agent_id,
                timestamp=timestamp,
                case_data=case_data.snapshot(),
                policy=self._facts,
            )
            result = transition(state, step.action, ctx)
            if not result.ok:
                raise ScriptStepFailedError(
                    f"Transition failed for case {case.case_index} (variant={variant}): "
                    f"{step.action.value} in state {state.value}: {result.message}",
                    action=step.action.value,
                    state=state.value,
                    kind=result.kind.value,
                )
            events.append(
                RunEvent(
                    event_id=f"{case_id}-evt-{len(events) + 1}",
                    sequence=len(events) + 1,
                    action=step.action,
                    actor=step.agent_id,
                    role=step.role,
                    from_state=state,
                    to_state=result.new_state,
                    timestamp=timestamp,
                    citations=ACTION_CITATIONS[step.action],
                    guard_results=result.guard_results,
                )
            )
            state = result.new_state

        if state not in TERMINAL_STATES:
            raise IncompleteScriptError(
                f"Script for case {case.case_index} (variant={variant}) ended in non-terminal state {state.value}"
            )

        decision_times = [e.timestamp for e in events if e.action in DECISION_ACTIONS]
        time_to_decision = (decision_times[-1] - self._start).days if decision_times else None

        review = None
        if outcome != CaseOutcome.ABANDONED:
            review = self._review(case, outcome, events)

        return CaseResult(
            case_id=case_id,
            case_index=case.case_index,
            scenario=case.scenario.value,
            variant=variant,
            applicant_name=case.applicant_name,
            final_state=state,
            outcome=outcome,
            events=tuple(events),
            sla_breaches=tuple(evaluate_sla_breaches(events, self._start, self._pack.sla)),
            time_to_decision_days=time_to_decision,
            oracle_review=review,
        )

    def _review(self, case: GeneratedCase, outcome: CaseOutcome, events: Sequence[RunEvent]) -> OracleReview:
        if case.oracle_input.policy_pack_id != self._pack.pack_id:
            raise PolicyPackMismatchError(
                f"Case {case.case_index} targets policy pack '{case.oracle_input.policy_pack_id}' "
                f"but '{self._pack.pack_id}' is loaded"
            )
        output = compute_eligibility(case.oracle_input, self._pack.rules)
        runner_citations = [c for event in events for c in event.citations]
        comparison = compare_with_oracle(
            RunnerDecision(outcome.value),
            RUNNER_BENEFIT_AMOUNT,
            runner_citations,
            output,
        )
        return OracleReview(output=output, comparison=comparison)

    def _run_isolated(self, case: GeneratedCase, run_id: str) -> Union[CaseResult, CaseError]:
        """Run one case, converting any failure into a CaseError."""
        case_id = case_id_for(case.case_index)
        run_token = run_id_ctx.set(run_id)
        case_token = case_id_ctx.set(case_id)
        started = time.perf_counter()
        try:
            result = self.run_case(case)
        except DomainError as e:
            category = FailureClassifier.classify(e)
            logger.warning(
                "case_failed",
                extra={"case_index": case.case_index, "category": category.value, "error": e.message},
            )
            return self._error(case, e.message, category)
        except Exception as e:
            logger.exception("case_crashed", extra={"case_index": case.case_index})
            return self._error(case, f"{type(e).__name__}: {e}", FailureCategory.UNEXPECTED_ERROR)
        finally:
            if self._metrics is not None:
                self._metrics.observe_latency(
                    "case_execution_latency",
                    (time.perf_counter() - started) * 1000,
                    scenario=case.scenario.value,
                )
            case_id_ctx.reset(case_token)
            run_id_ctx.reset(run_token)

        if self._metrics is not None:
            self._metrics.increment("cases_completed", scenario=case.scenario.value)
            self._metrics.increment("transitions_applied", len(result.events))
        logger.debug(
            "case_completed",
            extra={"case_index": case.case_index, "outcome": result.outcome.value, "final_state": result.final_state.value},
        )
        return result

    def _error(self, case: GeneratedCase, message: str, category: FailureCategory) -> CaseError:
        if self._metrics is not None:
            self._metrics.increment("case_errors", category=category.value)
        return CaseError(
            case_index=case.case_index,
            case_id=case_id_for(case.case_index),
            error=message,
            category=category.value,
        )

    def run_cases(
        self,
        cases: Sequence[GeneratedCase],
        *,
        scenario: str,
        seed: int,
        run_id: Optional[str] = None,
        max_workers: int = 1,
    ) -> RunResult:
        """
        Run a batch. With max_workers > 1 cases run on a thread pool; results are
        re-sorted by case index so output order never depends on scheduling.
        """
        run_id = run_id or str(uuid.uuid4())
        run_token = run_id_ctx.set(run_id)
        try:
            outcomes: list[Union[CaseResult, CaseError]] = []
            if max_workers > 1 and len(cases) > 1:
                with ThreadPoolExecutor(max_workers=max_workers) as executor:
                    futures = [executor.submit(self._run_isolated, case, run_id) for case in cases]
                    for future in as_completed(futures):
                        outcomes.append(future.result())
            else:
                outcomes = [self._run_isolated(case, run_id) for case in cases]

            outcomes.sort(key=lambda o: o.case_index)
            case_results = tuple(o for o in outcomes if isinstance(o, CaseResult))
            errors = tuple(o for o in outcomes if isinstance(o, CaseError))
            logger.info(
                "run_completed",
                extra={
                    "scenario": scenario,
                    "total_cases": len(cases),
                    "error_count": len(errors),
                },
            )
        finally:
            run_id_ctx.reset(run_token)
        return RunResult(
            run_id=run_id,
            scenario=scenario,
            seed=seed,
            total_cases=len(cases),
            case_results=case_results,
            errors=errors,
        )


def run_scenario(
    scenario: str,
    count: int,
    seed: int,
    policy_pack: PolicyPack,
    *,
    start_date: date = DEFAULT_START_DATE,
    max_workers: int = 1,
    metrics: Optional[MetricsCollector] = None,
    run_id: Optional[str] = None,
) -> RunResult:
    """Generate count cases for scenario from seed and run them all."""
    name = resolve_scenario(scenario)
    cases = generate_cases(name.value, count, seed, policy_pack_id=policy_pack.pack_id)
    runner = CaseRunner(policy_pack, start_date=start_date, metrics=metrics)
    return runner.run_cases(cases, scenario=name.value, seed=seed, run_id=run_id, max_workers=max_workers)
