"""Runner tests: end-to-end scenario runs, SLA evaluation, isolation, parallel determinism."""

from datetime import date

import pytest

from casework.core.context import run_id_ctx
from casework.domain.exceptions import IncompleteScriptError
from casework.domain.models.case import CaseAction, CaseStatus, Role
from casework.domain.models.results import CaseOutcome
from casework.observability.failure_classifier import FailureCategory
from casework.observability.metrics import MetricsCollector
from casework.runner.case_runner import CaseRunner, run_scenario
from casework.runner.scripts import ACTION_CITATIONS, PLAYBOOKS, ScriptStep
from casework.scenarios import MissingDocsVariant, ScenarioName, generate_missing_docs_cases


@pytest.fixture(scope="module")
def missing_docs_run(policy_pack):
    return run_scenario("missing_docs", 100, 42, policy_pack)


@pytest.fixture(scope="module")
def appeal_run(policy_pack):
    return run_scenario("appeal_reversal", 60, 42, policy_pack)


def test_missing_docs_run_completes_without_errors(missing_docs_run):
    assert missing_docs_run.total_cases == 100
    assert len(missing_docs_run.case_results) == 100
    assert missing_docs_run.errors == ()
    assert [r.case_index for r in missing_docs_run.case_results] == list(range(100))


def test_every_case_ends_closed(missing_docs_run, appeal_run):
    for result in missing_docs_run.case_results + appeal_run.case_results:
        assert result.final_state == CaseStatus.CLOSED


def test_every_event_is_cited(missing_docs_run, policy_pack):
    for result in missing_docs_run.case_results:
        for event in result.events:
            assert event.citations
            assert set(event.citations) <= policy_pack.rule_index


def test_event_ids_are_deterministic(missing_docs_run):
    first = missing_docs_run.case_results[0]
    assert first.case_id == "case-0"
    assert [e.event_id for e in first.events][:2] == ["case-0-evt-1", "case-0-evt-2"]
    assert [e.sequence for e in first.events] == list(range(1, len(first.events) + 1))


def test_outcomes_follow_variant(missing_docs_run):
    expected = PLAYBOOKS[ScenarioName.MISSING_DOCS].outcomes
    for result in missing_docs_run.case_results:
        assert result.outcome == expected[result.variant]


def test_late_and_abandoned_cases_breach_processing_sla(missing_docs_run):
    for result in missing_docs_run.case_results:
        if result.variant in (MissingDocsVariant.DOCS_ARRIVE_LATE.value, MissingDocsVariant.DOCS_NEVER_ARRIVE.value):
            assert result.sla_breaches == ("SLA-PROC-001",)
        else:
            assert result.sla_breaches == ()


def test_abandoned_cases_skip_oracle(missing_docs_run):
    for result in missing_docs_run.case_results:
        if result.outcome == CaseOutcome.ABANDONED:
            assert result.oracle_review is None
        else:
            assert result.oracle_review is not None


def test_time_to_decision(missing_docs_run):
    by_variant = {r.variant: r.time_to_decision_days for r in missing_docs_run.case_results}
    assert by_variant[MissingDocsVariant.DOCS_ARRIVE_ON_TIME.value] == 10
    assert by_variant[MissingDocsVariant.DOCS_ARRIVE_LATE.value] == 37
    assert by_variant[MissingDocsVariant.DOCS_NEVER_ARRIVE.value] == 62
    assert by_variant[MissingDocsVariant.APPLICANT_REFUSES.value] == 12


def test_appeal_cases_pass_guards_and_stay_within_sla(appeal_run):
    assert appeal_run.errors == ()
    for result in appeal_run.case_results:
        assert result.sla_breaches == ()
        actions = [e.action for e in result.events]
        assert CaseAction.APPEAL_FILED in actions
        assert CaseAction.RENDER_DECISION in actions


def test_runner_benefit_mismatch_routes_eligible_cases(missing_docs_run):
    """The scripted runner never computes a benefit, so eligible oracle results mismatch on amount."""
    for result in missing_docs_run.case_results:
        review = result.oracle_review
        if review is not None and review.output.eligible:
            assert not review.comparison.comparison.benefit_match


def test_same_seed_same_results(policy_pack, missing_docs_run):
    again = run_scenario("missing_docs", 100, 42, policy_pack, run_id=missing_docs_run.run_id)
    assert again.model_dump_json() == missing_docs_run.model_dump_json()


def test_parallel_matches_sequential(policy_pack):
    sequential = run_scenario("appeal_reversal", 30, 9, policy_pack, run_id="run-1")
    parallel = run_scenario("appeal_reversal", 30, 9, policy_pack, run_id="run-1", max_workers=4)
    assert parallel.model_dump_json() == sequential.model_dump_json()


def test_start_date_shifts_timestamps(policy_pack):
    result = run_scenario("missing_docs", 1, 42, policy_pack, start_date=date(2026, 3, 1))
    assert result.case_results[0].events[0].timestamp.month == 3


def test_failing_case_does_not_abort_batch(policy_pack):
    """Cases targeting another pack fail review; abandoned cases never reach review."""
    metrics = MetricsCollector()
    cases = generate_missing_docs_cases(20, 42, policy_pack_id="some-other-pack")
    result = CaseRunner(policy_pack, metrics=metrics).run_cases(cases, scenario="missing_docs", seed=42)
    assert len(result.case_results) + len(result.errors) == 20
    assert result.errors
    assert all(e.category == FailureCategory.CONFIGURATION_ERROR.value for e in result.errors)
    assert all(r.outcome == CaseOutcome.ABANDONED for r in result.case_results)
    labels = metrics.export_metrics()["counters_by_labels"]["case_errors"]
    assert labels["case_errors:category=CONFIGURATION_ERROR"] == len(result.errors)


def test_incomplete_script_raises(policy_pack, monkeypatch):
    variant = MissingDocsVariant.DOCS_NEVER_ARRIVE.value
    playbook = PLAYBOOKS[ScenarioName.MISSING_DOCS]
    truncated = (ScriptStep(1, CaseAction.REQUEST_VERIFICATION, Role.INTAKE_CLERK, "clerk-1"),)
    monkeypatch.setitem(playbook.scripts, variant, truncated)
    case = next(c for c in generate_missing_docs_cases(50, 42) if c.variant.value == variant)
    with pytest.raises(IncompleteScriptError):
        CaseRunner(policy_pack).run_case(case)


def test_every_action_has_citations():
    assert set(ACTION_CITATIONS) == set(CaseAction)


def test_run_id_context_reset_when_batch_raises(policy_pack, monkeypatch):
    def _boom(self, case, run_id):
        raise RuntimeError("worker crashed")

    monkeypatch.setattr(CaseRunner, "_run_isolated", _boom)
    cases = generate_missing_docs_cases(2, 42)
    with pytest.raises(RuntimeError, match="worker crashed"):
        CaseRunner(policy_pack).run_cases(cases, scenario="missing_docs", seed=42, run_id="run-x")
    assert run_id_ctx.get() is None
