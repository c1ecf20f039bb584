"""MetricsCollector tests: counters, histogram, scenario and category labels, thread safety."""

import threading

from casework.observability.metrics import MetricsCollector


def test_metrics_counter_increment():
    """Counter increments correctly."""
    m = MetricsCollector()
    m.increment("transitions_applied")
    m.increment("transitions_applied", 6)
    assert m.export_metrics()["counters"]["transitions_applied"] == 7


def test_metrics_histogram_tracks_latency():
    """Histogram tracks latency per scenario."""
    m = MetricsCollector()
    m.observe_latency("case_execution_latency", 1.5, scenario="missing_docs")
    m.observe_latency("case_execution_latency", 2.0, scenario="missing_docs")
    h = m.export_metrics()["histograms"]["case_execution_latency:scenario=missing_docs"]
    assert h["count"] == 2
    assert h["sum"] == 3.5


def test_metrics_labels_separated():
    m = MetricsCollector()
    m.increment("cases_completed", scenario="missing_docs")
    m.increment("cases_completed", scenario="appeal_reversal")
    m.increment("case_errors", category="GUARD_REJECTION")
    out = m.export_metrics()["counters_by_labels"]
    assert out["cases_completed"] == {
        "cases_completed:scenario=missing_docs": 1,
        "cases_completed:scenario=appeal_reversal": 1,
    }
    assert out["case_errors"]["case_errors:category=GUARD_REJECTION"] == 1


def test_metrics_thread_safe():
    m = MetricsCollector()

    def worker():
        for _ in range(500):
            m.increment("cases_completed")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert m.export_metrics()["counters"]["cases_completed"] == 4000


def test_metrics_reset():
    m = MetricsCollector()
    m.increment("cases_completed")
    m.reset()
    assert m.export_metrics() == {"counters": {}, "counters_by_labels": {}, "histograms": {}}


def test_runner_records_metrics(policy_pack):
    from casework.runner.case_runner import run_scenario

    m = MetricsCollector()
    run_scenario("missing_docs", 5, 42, policy_pack, metrics=m)
    out = m.export_metrics()
    assert out["counters_by_labels"]["cases_completed"]["cases_completed:scenario=missing_docs"] == 5
    assert out["histograms"]["case_execution_latency:scenario=missing_docs"]["count"] == 5
    assert out["counters"]["transitions_applied"] > 0
