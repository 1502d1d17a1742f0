"""Configuration management with Pydantic Settings.

Environment variables are loaded from:
1. Environment variables (highest priority)
2. .env file (development)
3. Defaults (lowest priority)

The cluster inventory can be supplied inline as JSON (CLUSTERS) or as a
path to a JSON file (CLUSTERS_FILE). Both use the same shape:

    {"eastus": {"api": "http://eastus.example.com:5001/api/v1/"}}
"""

import json
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Logging format."""

    JSON = "json"
    TEXT = "text"


class ClusterEndpoint(BaseModel):
    """Endpoint descriptor for a single cluster.

    Only ``api`` is used by the poller; any other keys (e.g. ``allocate``)
    are kept so the inventory file can be shared with other tools.
    """

    model_config = ConfigDict(extra="allow")

    api: str = Field(description="Base URL of the cluster API, including trailing slash")


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="fleet-monitor", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        alias="ENV",
        description="Deployment environment",
    )

    # Logging configuration
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.JSON, description="Logging format")

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=8080, description="Server bind port")
    debug: bool = Field(default=False, description="Enable debug mode")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses LRU cache to avoid re-parsing environment variables.
    """
    return Settings()


class FleetMonitorSettings(Settings):
    """Settings specific to the fleet monitor service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    clusters: dict[str, ClusterEndpoint] = Field(
        default_factory=dict,
        description="Cluster name to endpoint descriptor (JSON)",
    )
    clusters_file: Path | None = Field(
        default=None,
        description="JSON file with additional cluster endpoints",
    )
    poll_interval_seconds: float = Field(
        default=5.0,
        description="Interval between fleet-wide polls",
    )
    fetch_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout for a single cluster build listing request",
    )
    build_listing_path: str = Field(
        default="gameserverbuilds",
        description="Path appended to each cluster API URL",
    )

    @field_validator("poll_interval_seconds", "fetch_timeout_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Intervals and timeouts must be positive."""
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    @model_validator(mode="after")
    def load_clusters_file(self) -> "FleetMonitorSettings":
        """Merge clusters from CLUSTERS_FILE; inline entries take precedence."""
        if self.clusters_file is None:
            return self

        try:
            raw = json.loads(self.clusters_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"cannot load clusters file {self.clusters_file}: {e}") from e

        if not isinstance(raw, dict):
            raise ValueError(f"clusters file {self.clusters_file} must contain a JSON object")

        merged = {name: ClusterEndpoint.model_validate(ep) for name, ep in raw.items()}
        merged.update(self.clusters)
        self.clusters = merged
        return self


@lru_cache
def get_fleet_monitor_settings() -> FleetMonitorSettings:
    """Get cached fleet monitor settings instance."""
    return FleetMonitorSettings()
