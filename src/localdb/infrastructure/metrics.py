"""Prometheus metrics for the LocalDB provisioner."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    start_http_server,
)


class MetricsRegistry:
    """Registry of all provisioner metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        self.operations_total = Counter(
            "localdb_operations_total",
            "Total number of provisioning operations",
            ["operation", "status"],  # status: success, error
            registry=self._registry,
        )

        self.detach_outcomes_total = Counter(
            "localdb_detach_outcomes_total",
            "Detach requests by outcome",
            ["outcome"],  # detached, not_attached, failed
            registry=self._registry,
        )

        self.operation_latency_seconds = Histogram(
            "localdb_operation_latency_seconds",
            "Provisioning operation latency in seconds",
            ["operation"],  # create, detach, remove, connect
            buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
            registry=self._registry,
        )

        self.connections_opened_total = Counter(
            "localdb_connections_opened_total",
            "Connections handed out to callers",
            registry=self._registry,
        )

        self.info = Info(
            "localdb",
            "LocalDB provisioner information",
            registry=self._registry,
        )

    @contextmanager
    def track(self, operation: str) -> Generator[None, None, None]:
        """Count and time one operation, labelling it by outcome."""
        start = time.perf_counter()
        try:
            yield
        except BaseException:
            self.operations_total.labels(operation=operation, status="error").inc()
            raise
        else:
            self.operations_total.labels(operation=operation, status="success").inc()
        finally:
            self.operation_latency_seconds.labels(operation=operation).observe(
                time.perf_counter() - start
            )


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from localdb import __version__
    _metrics.info.info({
        "version": __version__,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
