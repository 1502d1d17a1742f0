"""Fleet API schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from shared.models import BuildListStatus, FleetBaseModel


class ClusterStatusResponse(FleetBaseModel):
    """Poll state of one configured cluster."""

    name: str
    api: str = Field(description="Configured base URL")
    url: str = Field(description="Build listing URL polled")
    build_count: int = Field(description="Builds currently held for the cluster")
    last_status: BuildListStatus | None = Field(
        default=None, description="Outcome of the most recent poll"
    )
    last_polled_at: datetime | None = None


class AvailabilityResponse(FleetBaseModel):
    """Current failure messages, sorted."""

    messages: list[str]
    total: int


class DismissRequest(FleetBaseModel):
    """Failure message to dismiss."""

    message: str
