"""Configuration management for the LocalDB provisioner."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerConfig(BaseModel):
    """Connection endpoint for the LocalDB engine."""

    instance: str = Field(
        default=r"(localdb)\MSSQLLocalDB", description="Server or LocalDB instance address"
    )
    driver: str = Field(default="ODBC Driver 17 for SQL Server", description="ODBC driver name")
    trusted_connection: bool = Field(default=True, description="Use integrated authentication")
    username: str | None = Field(default=None, description="SQL login (ignored when trusted)")
    password: SecretStr | None = Field(default=None, description="SQL password (ignored when trusted)")
    login_timeout_seconds: int = Field(
        default=30, ge=1, le=600, description="Login timeout in seconds"
    )


class StorageConfig(BaseModel):
    """Storage configuration."""

    data_dir: Path | None = Field(
        default=None, description="Base directory for database files (default: <exe dir>/Data)"
    )


class ProvisioningConfig(BaseModel):
    """Provisioning policy."""

    if_exists: Literal["fail", "replace"] = Field(
        default="fail", description="What create() does when the data file already exists"
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="localdb", description="Service name for tracing")


class Config(BaseSettings):
    """Main configuration for the provisioner."""

    model_config = SettingsConfigDict(
        env_prefix="LOCALDB_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    server: ServerConfig = Field(default_factory=ServerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    provisioning: ProvisioningConfig = Field(default_factory=ProvisioningConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
