"""Test fixtures for the Fleet Monitor."""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any, Union

import httpx
import pytest
import pytest_asyncio

# Set test environment before importing settings
os.environ["ENV"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"

from app.clients.cluster_api import ClusterAPIClient  # noqa: E402

EAST_API = "http://eastus.example.com:5001/api/v1/"
WEST_API = "http://westus.example.com:5001/api/v1/"

Route = Union[httpx.Response, Exception, Callable[[httpx.Request], Any]]


def make_build(
    name: str,
    title_id: str,
    health: str | None = "Healthy",
    standing_by: int | None = 0,
    active: int | None = 0,
    pending: int | None = 0,
    initializing: int | None = 0,
) -> dict[str, Any]:
    """GameServerBuild item as returned by a cluster API. None omits the field."""
    status = {
        "health": health,
        "currentStandingBy": standing_by,
        "currentActive": active,
        "currentPending": pending,
        "currentInitializing": initializing,
    }
    return {
        "metadata": {"name": name},
        "spec": {"titleID": title_id},
        "status": {key: value for key, value in status.items() if value is not None},
    }


def build_list(*items: dict[str, Any]) -> httpx.Response:
    """200 response carrying a GameServerBuild list."""
    return httpx.Response(200, json={"kind": "GameServerBuildList", "items": list(items)})


def route_transport(routes: dict[str, Route]) -> httpx.MockTransport:
    """Mock transport answering by full URL.

    Values may be a response, an exception to raise, or a (sync or async)
    handler taking the request.
    """

    async def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(str(request.url))
        if route is None:
            raise httpx.ConnectError("no route", request=request)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            # Fresh copy per request; a route may be hit on every poll
            return httpx.Response(route.status_code, headers=route.headers, content=route.content)
        result = route(request)
        if hasattr(result, "__await__"):
            result = await result
        return result

    return httpx.MockTransport(handler)


@pytest.fixture
def build_item():
    """Factory for GameServerBuild items."""
    return make_build


@pytest_asyncio.fixture
async def cluster_api_factory():
    """Factory for ClusterAPIClient instances backed by a mock transport."""
    clients: list[httpx.AsyncClient] = []

    def _factory(routes: dict[str, Route], timeout: float = 5.0) -> ClusterAPIClient:
        http_client = httpx.AsyncClient(transport=route_transport(routes))
        clients.append(http_client)
        return ClusterAPIClient(timeout=timeout, client=http_client)

    yield _factory

    for http_client in clients:
        await http_client.aclose()


@pytest.fixture
def build_list_response():
    """Factory for 200 build list responses."""
    return build_list


@pytest.fixture
def clusters() -> dict[str, dict[str, str]]:
    """Two-cluster inventory."""
    return {
        "eastus": {"api": EAST_API},
        "westus": {"api": WEST_API},
    }
