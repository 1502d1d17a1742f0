"""API endpoints for the Fleet Monitor."""

from . import fleet, health

__all__ = ["fleet", "health"]
