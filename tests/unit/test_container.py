"""Unit tests for the DI container and observability setup."""

from __future__ import annotations

from pathlib import Path

import pytest

from localdb.adapters.outbound import MockSqlEngine
from localdb.infrastructure.config import Config, ObservabilityConfig, StorageConfig
from localdb.infrastructure.container import Container, get_container
from localdb.infrastructure.metrics import MetricsRegistry
from localdb.infrastructure.tracing import trace_span


@pytest.mark.unit
@pytest.mark.usefixtures("container")
class TestContainer:
    """Tests for Container."""

    def test_create_wires_provisioner(
        self, temp_dir: Path, metrics_registry: MetricsRegistry
    ) -> None:
        engine = MockSqlEngine()
        config = Config(
            storage=StorageConfig(data_dir=temp_dir),
            observability=ObservabilityConfig(log_format="console", log_level="DEBUG"),
        )

        container = Container.create(config=config, engine=engine, metrics=metrics_registry)

        assert container.config is config
        assert container.metrics is metrics_registry
        assert container.provisioner.engine is engine
        assert container.provisioner.default_base_path() == temp_dir

        container.provisioner.create("wired")
        assert engine.is_attached("wired")

    def test_create_starts_metrics_server(
        self, monkeypatch: pytest.MonkeyPatch, metrics_registry: MetricsRegistry
    ) -> None:
        """Without an injected registry the configured metrics port is served."""
        ports: list[int] = []

        def fake_setup_metrics(port: int = 8001) -> MetricsRegistry:
            ports.append(port)
            return metrics_registry

        monkeypatch.setattr(
            "localdb.infrastructure.container.setup_metrics", fake_setup_metrics
        )
        config = Config(observability=ObservabilityConfig(metrics_port=9123))

        container = Container.create(config=config, engine=MockSqlEngine())

        assert ports == [9123]
        assert container.metrics is metrics_registry

    def test_singleton(self, metrics_registry: MetricsRegistry) -> None:
        first = Container.create(engine=MockSqlEngine(), metrics=metrics_registry)
        assert get_container() is first
        assert Container.create() is first

    def test_reset(self, metrics_registry: MetricsRegistry) -> None:
        first = Container.create(engine=MockSqlEngine(), metrics=metrics_registry)
        Container.reset()
        second = Container.create(engine=MockSqlEngine(), metrics=metrics_registry)
        assert second is not first


@pytest.mark.unit
def test_trace_span_sets_attributes() -> None:
    with trace_span("localdb.test", {"db.name": "acct"}) as span:
        assert span is not None
