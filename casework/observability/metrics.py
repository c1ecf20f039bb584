"""Prometheus-style metrics collector. Thread-safe, in-memory. No real Prometheus dependency."""

import threading
from typing import Any


class MetricsCollector:
    """
    In-memory registry of counters and latency histograms. Safe to share across
    runner worker threads. Exposes increment, observe_latency, export_metrics.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[str, float] = {}
        self._counters_by_labels: dict[str, dict[str, float]] = {}
        self._histograms: dict[str, list[float]] = {}

    def increment(
        self,
        name: str,
        value: float = 1.0,
        *,
        scenario: str | None = None,
        category: str | None = None,
    ) -> None:
        """Increment a counter. Optional scenario or category label for dimensional metrics."""
        with self._lock:
            if scenario is not None:
                label = f"{name}:scenario={scenario}"
            elif category is not None:
                label = f"{name}:category={category}"
            else:
                self._counters[name] = self._counters.get(name, 0) + value
                return
            series = self._counters_by_labels.setdefault(name, {})
            series[label] = series.get(label, 0) + value

    def observe_latency(
        self,
        name: str,
        latency_ms: float,
        *,
        scenario: str | None = None,
    ) -> None:
        """Record a latency observation (histogram-style)."""
        with self._lock:
            bucket = name if scenario is None else f"{name}:scenario={scenario}"
            self._histograms.setdefault(bucket, []).append(latency_ms)

    def export_metrics(self) -> dict[str, Any]:
        with self._lock:
            return {
                "counters": dict(self._counters),
                "counters_by_labels": {
                    k: dict(v) for k, v in self._counters_by_labels.items()
                },
                "histograms": {
                    k: {
                        "count": len(v),
                        "sum": sum(v),
                        "values": list(v),
                    }
                    for k, v in self._histograms.items()
                },
            }

    def reset(self) -> None:
        """Reset all metrics (for tests)."""
        with self._lock:
            self._counters.clear()
            self._counters_by_labels.clear()
            self._histograms.clear()
