"""Fleet summary models.

Four projections are derived from the per-cluster build lists:

- total: one set of counters for the whole fleet
- per_cluster: counters keyed by cluster name
- per_build: counters keyed by build name, merged across clusters
- per_title: counters plus health keyed by title ID
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from .base import FleetBaseModel
from .builds import BuildHealth


class SummaryCounters(FleetBaseModel):
    """Server counts for one aggregation key."""

    standing_by: int = Field(default=0, ge=0)
    active: int = Field(default=0, ge=0)
    pending: int = Field(default=0, ge=0)
    initializing: int = Field(default=0, ge=0)


class TitleSummary(SummaryCounters):
    """Counters for a title, with the health of its last reported build."""

    status: BuildHealth = BuildHealth.UNKNOWN


class FleetSummary(FleetBaseModel):
    """All four projections computed in a single pass."""

    total: SummaryCounters = Field(default_factory=SummaryCounters)
    per_cluster: dict[str, SummaryCounters] = Field(default_factory=dict)
    per_build: dict[str, SummaryCounters] = Field(default_factory=dict)
    per_title: dict[str, TitleSummary] = Field(default_factory=dict)


class BuildListStatus(str, Enum):
    """Outcome of a build listing request against one cluster."""

    OK = "OK"
    MALFORMED = "MALFORMED"
    UNREACHABLE = "UNREACHABLE"


class BuildListResult(FleetBaseModel):
    """Result of listing the builds of one cluster.

    items holds the raw JSON items for OK results and is empty otherwise.
    error is set only for UNREACHABLE results.
    """

    cluster: str
    url: str
    status: BuildListStatus
    items: list[Any] = Field(default_factory=list)
    error: str | None = None
    status_code: int | None = None
