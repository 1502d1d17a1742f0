"""Configuration management module.

This module provides:
- Environment-based configuration with validation
- Service-specific settings classes
- Cached settings access via get_settings()
"""

from .settings import (
    ClusterEndpoint,
    Environment,
    FleetMonitorSettings,
    LogFormat,
    LogLevel,
    Settings,
    get_fleet_monitor_settings,
    get_settings,
)

__all__ = [
    # Main settings
    "Settings",
    "get_settings",
    # Enums
    "Environment",
    "LogLevel",
    "LogFormat",
    # Service-specific settings
    "ClusterEndpoint",
    "FleetMonitorSettings",
    "get_fleet_monitor_settings",
]
