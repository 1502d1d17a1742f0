"""Game server build domain models.

A cluster API answers ``GET <api>gameserverbuilds`` with a Kubernetes list
object whose ``items`` are GameServerBuild custom resources:

    {
        "metadata": {"name": "build-a"},
        "spec": {"titleID": "1234"},
        "status": {
            "health": "Healthy",
            "currentStandingBy": 2,
            "currentActive": 1,
            "currentPending": 0,
            "currentInitializing": 0
        }
    }

Items are stored exactly as received. GameServerBuild is the lenient,
read-only view the aggregation code uses; it never rejects an item.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import Field

from .base import FleetBaseModel


class BuildHealth(str, Enum):
    """Health of a build as reported by its cluster, collapsed to three values."""

    HEALTHY = "Healthy"
    UNHEALTHY = "Unhealthy"
    UNKNOWN = "Unknown"

    @classmethod
    def collapse(cls, raw: Any) -> BuildHealth:
        """Map a raw health value; only exact matches are distinguished."""
        if raw == cls.HEALTHY.value:
            return cls.HEALTHY
        if raw == cls.UNHEALTHY.value:
            return cls.UNHEALTHY
        return cls.UNKNOWN


def _section(item: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = item.get(key)
    return value if isinstance(value, Mapping) else {}


def _count(value: Any) -> int:
    # bool is an int subclass; JSON true/false is not a server count
    if isinstance(value, bool):
        return 0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value > 0:
        return value
    return 0


def _key(value: Any) -> str:
    return "" if value is None else str(value)


class GameServerBuild(FleetBaseModel):
    """Read-only view of a single GameServerBuild item."""

    name: str = Field(description="metadata.name, unique within a cluster only")
    title_id: str = Field(alias="titleID", description="spec.titleID")
    health: BuildHealth = BuildHealth.UNKNOWN
    standing_by: int = 0
    active: int = 0
    pending: int = 0
    initializing: int = 0

    @classmethod
    def from_item(cls, item: Any) -> GameServerBuild:
        """Build the view from a raw item.

        Missing sections and fields fall back to empty keys, zero counts and
        Unknown health. Non-mapping items produce an all-default view.
        """
        if not isinstance(item, Mapping):
            item = {}

        metadata = _section(item, "metadata")
        spec = _section(item, "spec")
        status = _section(item, "status")

        return cls(
            name=_key(metadata.get("name")),
            title_id=_key(spec.get("titleID")),
            health=BuildHealth.collapse(status.get("health")),
            standing_by=_count(status.get("currentStandingBy")),
            active=_count(status.get("currentActive")),
            pending=_count(status.get("currentPending")),
            initializing=_count(status.get("currentInitializing")),
        )
