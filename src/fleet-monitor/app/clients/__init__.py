"""Clients for the Fleet Monitor."""

from .cluster_api import ClusterAPIClient, unreachable_message

__all__ = [
    "ClusterAPIClient",
    "unreachable_message",
]
