"""Prometheus metrics for workflow executions."""

from __future__ import annotations

from typing import Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

LATENCY_BUCKETS = (0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0)


class ExecutionMetrics:
    """
    Execution metrics.

    Exposes the following metrics:
    - socialclaw_workflow_executions_total: Counter of executions by final
      status (succeeded, blocked, failed)
    - socialclaw_workflow_execution_seconds: Histogram of the latency of
      succeeded executions

    Collectors are registered on ``registry``; a fresh ``CollectorRegistry``
    keeps readings isolated, e.g. in tests.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        registry = registry if registry is not None else REGISTRY
        self.executions = Counter(
            "socialclaw_workflow_executions_total",
            "Workflow executions by status",
            ["status"],
            registry=registry,
        )
        self.latency = Histogram(
            "socialclaw_workflow_execution_seconds",
            "Workflow execution latency in seconds",
            buckets=LATENCY_BUCKETS,
            registry=registry,
        )

    def record(self, status: str, seconds: float) -> None:
        self.executions.labels(status=status).inc()
        if status == "succeeded":
            self.latency.observe(seconds)


_default_metrics: Optional[ExecutionMetrics] = None


def default_metrics() -> ExecutionMetrics:
    """Process-wide metrics on the global Prometheus registry."""
    global _default_metrics
    if _default_metrics is None:
        _default_metrics = ExecutionMetrics()
    return _default_metrics
