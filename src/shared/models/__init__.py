"""Shared data models for the fleet monitor.

All models follow these conventions:
- Field names: snake_case in Python, camelCase on the wire
- Enums: uppercase SNAKE_CASE members
"""

# Base
from .base import FleetBaseModel

# Build domain
from .builds import BuildHealth, GameServerBuild

# Fleet summary domain
from .fleet import (
    BuildListResult,
    BuildListStatus,
    FleetSummary,
    SummaryCounters,
    TitleSummary,
)

__all__ = [
    # Base
    "FleetBaseModel",
    # Build domain
    "BuildHealth",
    "GameServerBuild",
    # Fleet summary domain
    "BuildListResult",
    "BuildListStatus",
    "FleetSummary",
    "SummaryCounters",
    "TitleSummary",
]
