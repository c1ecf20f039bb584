"""Observability: metrics collector, failure classification, run summaries."""

from casework.observability.failure_classifier import FailureCategory, FailureClassifier
from casework.observability.metrics import MetricsCollector
from casework.observability.run_summary import RunSummary, compute_run_summary

__all__ = [
    "FailureCategory",
    "FailureClassifier",
    "MetricsCollector",
    "RunSummary",
    "compute_run_summary",
]
