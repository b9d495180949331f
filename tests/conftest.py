"""Pytest configuration and fixtures for localdb tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
import structlog
from prometheus_client import CollectorRegistry

from localdb.adapters.outbound import MockSqlEngine
from localdb.application import LocalDB
from localdb.infrastructure.config import Config, StorageConfig
from localdb.infrastructure.container import Container
from localdb.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a test configuration whose data directory is temporary."""
    return Config(storage=StorageConfig(data_dir=temp_dir / "Data"))


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def engine() -> MockSqlEngine:
    """Provide an in-memory SQL engine."""
    return MockSqlEngine()


@pytest.fixture
def local_db(
    engine: MockSqlEngine, test_config: Config, metrics_registry: MetricsRegistry
) -> LocalDB:
    """Provide a LocalDB facade over the mock engine."""
    return LocalDB(engine=engine, config=test_config, metrics=metrics_registry)


@pytest.fixture
def container() -> Generator[None, None, None]:
    """Reset the DI container and logging configuration around a test."""
    Container.reset()
    yield
    Container.reset()
    structlog.reset_defaults()


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests against a real LocalDB")
