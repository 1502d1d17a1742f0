"""API schemas for the Fleet Monitor."""

from .fleet import AvailabilityResponse, ClusterStatusResponse, DismissRequest

__all__ = [
    "AvailabilityResponse",
    "ClusterStatusResponse",
    "DismissRequest",
]
