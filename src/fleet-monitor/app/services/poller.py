"""Fleet Poller.

Polls the build listing endpoint of every configured cluster on a fixed
interval and keeps the fleet projections current:

- One fetch task per cluster per tick; a slow cluster never delays another
  cluster or the next tick
- Completed fetches post a ClusterUpdate onto a queue; a single writer task
  applies updates in completion order
- Each applied update replaces the cluster's build list, records failures
  and publishes a new FleetSummary snapshot in one synchronous step
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from shared.config import ClusterEndpoint, FleetMonitorSettings
from shared.models import BuildListResult, BuildListStatus, FleetSummary
from shared.observability import get_logger

from ..clients.cluster_api import ClusterAPIClient, unreachable_message
from .aggregation import summarize_fleet
from .availability import AvailabilityTracker

logger = get_logger(__name__)


@dataclass(frozen=True)
class ClusterUpdate:
    """A completed fetch, waiting to be applied."""

    cluster: str
    result: BuildListResult


@dataclass(frozen=True)
class ClusterPollState:
    """Last observed poll outcome for one cluster."""

    cluster: str
    api_url: str
    url: str
    build_count: int
    last_status: BuildListStatus | None
    last_polled_at: datetime | None


def _api_url(endpoint: ClusterEndpoint | Mapping[str, Any]) -> str:
    if isinstance(endpoint, ClusterEndpoint):
        return endpoint.api
    return ClusterEndpoint.model_validate(endpoint).api


class FleetPoller:
    """Periodic multi-cluster build poller and aggregator."""

    def __init__(
        self,
        clusters: Mapping[str, ClusterEndpoint | Mapping[str, Any]],
        client: ClusterAPIClient,
        poll_interval: float = 5.0,
        availability: AvailabilityTracker | None = None,
    ):
        """Initialize the poller.

        Args:
            clusters: Cluster name to endpoint descriptor (needs ``api``)
            client: Client used to list builds
            poll_interval: Seconds between fleet-wide polls
            availability: Tracker for unreachable clusters
        """
        self.clusters: dict[str, str] = {name: _api_url(ep) for name, ep in clusters.items()}
        self.client = client
        self.poll_interval = poll_interval
        self.availability = availability or AvailabilityTracker()

        self._store: dict[str, list[Any]] = {}
        self._summary = summarize_fleet(self._store)
        self._last_status: dict[str, BuildListStatus] = {}
        self._last_polled_at: dict[str, datetime] = {}

        self._updates: asyncio.Queue[ClusterUpdate] = asyncio.Queue()
        self._fetches: set[asyncio.Task] = set()
        self._ticker_task: asyncio.Task | None = None
        self._writer_task: asyncio.Task | None = None
        self._running = False
        self._closed = False

    @property
    def summary(self) -> FleetSummary:
        """Latest fleet projections."""
        return self._summary

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_ready(self) -> bool:
        """True once every configured cluster has been polled at least once."""
        return all(name in self._last_status for name in self.clusters)

    def store(self) -> dict[str, list[Any]]:
        """Copy of the cluster build store."""
        return {cluster: list(items) for cluster, items in self._store.items()}

    def failures(self):
        """Sorted, re-iterable view of the current failure messages."""
        return self.availability.list()

    def dismiss(self, message: str) -> bool:
        """Dismiss a failure message; absent messages are ignored."""
        return self.availability.dismiss(message)

    def cluster_states(self) -> list[ClusterPollState]:
        """Poll state of every configured cluster, in configuration order."""
        return [
            ClusterPollState(
                cluster=name,
                api_url=api_url,
                url=self.client.build_listing_url(api_url),
                build_count=len(self._store.get(name, ())),
                last_status=self._last_status.get(name),
                last_polled_at=self._last_polled_at.get(name),
            )
            for name, api_url in self.clusters.items()
        ]

    async def start(self) -> None:
        """Start polling; the first fan-out is issued immediately."""
        if self._running:
            return
        if self._closed:
            raise RuntimeError("FleetPoller is closed")

        self._running = True
        if self._writer_task is None:
            self._writer_task = asyncio.create_task(self._write_loop())
        self._ticker_task = asyncio.create_task(self._tick_loop())

        logger.info(
            "Fleet poller started",
            clusters=len(self.clusters),
            poll_interval=self.poll_interval,
        )

    async def stop(self) -> None:
        """Stop scheduling polls.

        In-flight fetches are not cancelled; they complete and their
        results are applied before this returns.
        """
        if not self._running:
            return

        self._running = False

        if self._ticker_task:
            self._ticker_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._ticker_task
            self._ticker_task = None

        await self._settle()
        logger.info("Fleet poller stopped")

    async def aclose(self) -> None:
        """Stop polling and release the writer task.

        Fetches that complete afterwards are dropped.
        """
        await self.stop()
        await self._settle()
        self._closed = True

        if self._writer_task:
            self._writer_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._writer_task
            self._writer_task = None

    def fan_out(self) -> list[asyncio.Task]:
        """Issue one fetch task per configured cluster without waiting."""
        tasks = []
        for cluster, api_url in self.clusters.items():
            task = asyncio.create_task(
                self._fetch(cluster, api_url),
                name=f"list-builds-{cluster}",
            )
            self._fetches.add(task)
            task.add_done_callback(self._fetches.discard)
            tasks.append(task)
        return tasks

    async def poll_once(self) -> FleetSummary:
        """Poll every cluster once and apply all results.

        Returns:
            The FleetSummary after all results were applied
        """
        tasks = self.fan_out()
        if tasks:
            await asyncio.gather(*tasks)
        await self._flush()
        return self._summary

    async def _tick_loop(self) -> None:
        while self._running:
            try:
                self.fan_out()
                await asyncio.sleep(self.poll_interval)
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error("Error in fleet poll loop", error=str(e))
                await asyncio.sleep(self.poll_interval)

    async def _fetch(self, cluster: str, api_url: str) -> None:
        try:
            result = await self.client.list_builds(cluster, api_url)
        except Exception as e:
            logger.error("Unexpected error listing builds", cluster=cluster, error=str(e))
            url = self.client.build_listing_url(api_url)
            result = BuildListResult(
                cluster=cluster,
                url=url,
                status=BuildListStatus.UNREACHABLE,
                error=unreachable_message(cluster, url),
            )

        if self._closed:
            logger.debug("Dropping build listing received after close", cluster=cluster)
            return

        self._updates.put_nowait(ClusterUpdate(cluster=cluster, result=result))

    async def _write_loop(self) -> None:
        while True:
            update = await self._updates.get()
            try:
                self._apply(update)
            except Exception as e:
                logger.error(
                    "Failed to apply cluster update",
                    cluster=update.cluster,
                    error=str(e),
                )
            finally:
                self._updates.task_done()

    async def _settle(self) -> None:
        """Wait for in-flight fetches and apply everything they posted."""
        pending = list(self._fetches)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        await self._flush()

    async def _flush(self) -> None:
        if self._writer_task is not None and not self._writer_task.done():
            await self._updates.join()
            return

        while not self._updates.empty():
            update = self._updates.get_nowait()
            try:
                self._apply(update)
            finally:
                self._updates.task_done()

    def _apply(self, update: ClusterUpdate) -> None:
        """Apply one fetch result and recompute the projections."""
        cluster = update.cluster
        result = update.result

        self._last_status[cluster] = result.status
        self._last_polled_at[cluster] = datetime.now(UTC)

        if result.status == BuildListStatus.MALFORMED:
            logger.debug("Ignoring malformed build listing", cluster=cluster, url=result.url)
            return

        if result.status == BuildListStatus.UNREACHABLE:
            self._store[cluster] = []
            if result.error:
                self.availability.record_failure(result.error)
            logger.warning("Cluster unreachable", cluster=cluster, url=result.url)
        else:
            self._store[cluster] = list(result.items)
            logger.debug("Cluster builds updated", cluster=cluster, builds=len(result.items))

        self._summary = summarize_fleet(self._store)


def create_fleet_poller(
    settings: FleetMonitorSettings,
    client: ClusterAPIClient | None = None,
) -> FleetPoller:
    """Build a FleetPoller from settings."""
    client = client or ClusterAPIClient(
        timeout=settings.fetch_timeout_seconds,
        build_listing_path=settings.build_listing_path,
    )
    return FleetPoller(
        clusters=settings.clusters,
        client=client,
        poll_interval=settings.poll_interval_seconds,
    )
