"""Dependency injection container for the LocalDB provisioner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import structlog
from opentelemetry import trace

from localdb.application import LocalDB
from localdb.infrastructure.config import Config, get_config
from localdb.infrastructure.logging import get_logger, setup_logging
from localdb.infrastructure.metrics import MetricsRegistry, setup_metrics
from localdb.infrastructure.tracing import setup_tracing
from localdb.ports.outbound import SqlEngine


@dataclass
class Container:
    """Wires configuration, observability and the provisioner together."""

    config: Config
    logger: structlog.BoundLogger
    tracer: trace.Tracer
    metrics: MetricsRegistry
    provisioner: LocalDB

    _instance: ClassVar[Container | None] = None

    @classmethod
    def create(
        cls,
        config: Config | None = None,
        engine: SqlEngine | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> Container:
        """Create and initialize the container with all dependencies."""
        if cls._instance is not None:
            return cls._instance

        config = config or get_config()
        setup_logging(config.observability.log_level, config.observability.log_format)
        tracer = setup_tracing(
            service_name=config.observability.otel_service_name,
            otlp_endpoint=config.observability.otel_endpoint,
        )
        if metrics is None:
            metrics = setup_metrics(port=config.observability.metrics_port)
        logger = get_logger(__name__)

        cls._instance = cls(
            config=config,
            logger=logger,
            tracer=tracer,
            metrics=metrics,
            provisioner=LocalDB(engine=engine, config=config, metrics=metrics),
        )

        logger.info(
            "localdb_container_initialized",
            instance=config.server.instance,
            driver=config.server.driver,
            if_exists=config.provisioning.if_exists,
        )

        return cls._instance

    @classmethod
    def get(cls) -> Container:
        """Get the singleton container instance."""
        if cls._instance is None:
            return cls.create()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the container (useful for testing)."""
        cls._instance = None


def get_container() -> Container:
    """Get the dependency injection container."""
    return Container.get()
