"""Services for the Fleet Monitor."""

from .aggregation import summarize_fleet
from .availability import AvailabilityTracker
from .poller import (
    ClusterPollState,
    ClusterUpdate,
    FleetPoller,
    create_fleet_poller,
)

__all__ = [
    "AvailabilityTracker",
    "ClusterPollState",
    "ClusterUpdate",
    "FleetPoller",
    "create_fleet_poller",
    "summarize_fleet",
]
