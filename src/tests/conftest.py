"""Pytest configuration and shared fixtures."""

import os
from typing import Any

import pytest

# Set test environment before importing settings
os.environ["ENV"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"


@pytest.fixture
def sample_build_data() -> dict[str, Any]:
    """Sample GameServerBuild item as served by a cluster API."""
    return {
        "apiVersion": "mps.playfab.com/v1alpha1",
        "kind": "GameServerBuild",
        "metadata": {"name": "racing-build", "namespace": "default"},
        "spec": {"titleID": "1A2B", "buildID": "85ffe8da-c82f-4035-86c5-9d2b5f42d6f5"},
        "status": {
            "health": "Healthy",
            "currentStandingBy": 4,
            "currentActive": 2,
            "currentPending": 1,
            "currentInitializing": 3,
            "crashesCount": 0,
        },
    }


@pytest.fixture
def sample_clusters_data() -> dict[str, Any]:
    """Sample cluster inventory."""
    return {
        "eastus": {"api": "http://eastus.example.com:5001/api/v1/"},
        "westus": {
            "api": "http://westus.example.com:5001/api/v1/",
            "allocate": "http://westus.example.com:5000/api/v1/allocate",
        },
    }


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (require external services)"
    )
    config.addinivalue_line("markers", "slow: Slow tests")
