"""Cluster API client.

Lists the GameServerBuild resources of one cluster. Every outcome is
returned as a BuildListResult; reachability problems never raise.
"""

from __future__ import annotations

import asyncio
import json
import time

import httpx

from shared.models import BuildListResult, BuildListStatus
from shared.observability import get_logger, log_cluster_call_end, log_cluster_call_start

logger = get_logger(__name__)

DEFAULT_BUILD_LISTING_PATH = "gameserverbuilds"
DEFAULT_TIMEOUT_SECONDS = 5.0


def unreachable_message(cluster: str, url: str) -> str:
    """Human-readable failure message for a cluster endpoint."""
    return f"Couldn't reach cluster '{cluster}' at: {url}"


class ClusterAPIClient:
    """Client for the build listing endpoint of cluster APIs."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        build_listing_path: str = DEFAULT_BUILD_LISTING_PATH,
        client: httpx.AsyncClient | None = None,
    ):
        self.timeout = timeout
        self.build_listing_path = build_listing_path
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    def build_listing_url(self, api_url: str) -> str:
        """Full listing URL; the path is appended to the base URL verbatim."""
        return f"{api_url}{self.build_listing_path}"

    async def list_builds(self, cluster: str, api_url: str) -> BuildListResult:
        """List the builds of one cluster.

        Args:
            cluster: Cluster name, used in logs and failure messages
            api_url: Base URL of the cluster API

        Returns:
            BuildListResult with status OK, MALFORMED or UNREACHABLE
        """
        url = self.build_listing_url(api_url)
        start = time.monotonic()
        log_cluster_call_start(logger, cluster, url)

        try:
            # httpx timeouts apply per phase; bound the whole request and body read
            response = await asyncio.wait_for(
                self._client.get(url, timeout=self.timeout),
                timeout=self.timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError):
            return self._unreachable(cluster, url, start, "Request timeout")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return self._unreachable(cluster, url, start, str(e) or type(e).__name__)

        if response.status_code != 200:
            return self._unreachable(
                cluster,
                url,
                start,
                f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return self._unreachable(
                cluster, url, start, f"Invalid JSON body: {e}", status_code=200
            )

        duration_ms = (time.monotonic() - start) * 1000
        items = data.get("items") if isinstance(data, dict) else None

        if not isinstance(items, list):
            log_cluster_call_end(
                logger, cluster, url, BuildListStatus.MALFORMED.value, duration_ms, status_code=200
            )
            return BuildListResult(
                cluster=cluster,
                url=url,
                status=BuildListStatus.MALFORMED,
                status_code=200,
            )

        log_cluster_call_end(
            logger, cluster, url, BuildListStatus.OK.value, duration_ms, status_code=200
        )
        return BuildListResult(
            cluster=cluster,
            url=url,
            status=BuildListStatus.OK,
            items=items,
            status_code=200,
        )

    def _unreachable(
        self,
        cluster: str,
        url: str,
        start: float,
        reason: str,
        status_code: int | None = None,
    ) -> BuildListResult:
        duration_ms = (time.monotonic() - start) * 1000
        log_cluster_call_end(
            logger,
            cluster,
            url,
            BuildListStatus.UNREACHABLE.value,
            duration_ms,
            error=reason,
            status_code=status_code,
        )
        return BuildListResult(
            cluster=cluster,
            url=url,
            status=BuildListStatus.UNREACHABLE,
            error=unreachable_message(cluster, url),
            status_code=status_code,
        )

    async def close(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
