"""Fleet aggregation.

Reduces the per-cluster build lists to the four fleet projections. The
reduction is recomputed from scratch on every change; the store is bounded
by fleet size.

Field coverage differs per projection:

- total, per_cluster and per_build sum standing_by and active only; their
  pending and initializing stay 0.
- per_title sums standing_by, while active, pending, initializing and
  status come from the last build seen for the title (clusters in store
  order, builds in list order).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from shared.models import (
    BuildHealth,
    FleetSummary,
    GameServerBuild,
    SummaryCounters,
    TitleSummary,
)


@dataclass
class _Tally:
    standing_by: int = 0
    active: int = 0
    pending: int = 0
    initializing: int = 0
    status: BuildHealth = BuildHealth.UNKNOWN

    def add_running(self, build: GameServerBuild) -> None:
        self.standing_by += build.standing_by
        self.active += build.active

    def counters(self) -> SummaryCounters:
        return SummaryCounters(
            standing_by=self.standing_by,
            active=self.active,
            pending=self.pending,
            initializing=self.initializing,
        )

    def title_summary(self) -> TitleSummary:
        return TitleSummary(
            standing_by=self.standing_by,
            active=self.active,
            pending=self.pending,
            initializing=self.initializing,
            status=self.status,
        )


def summarize_fleet(store: Mapping[str, Sequence[Any]]) -> FleetSummary:
    """Compute all four projections from the cluster build store.

    Args:
        store: Cluster name to the raw build items last fetched from it

    Returns:
        A new FleetSummary; nothing is shared with earlier results
    """
    total = _Tally()
    per_cluster: dict[str, _Tally] = {}
    per_build: dict[str, _Tally] = {}
    per_title: dict[str, _Tally] = {}

    for cluster, items in store.items():
        cluster_tally = per_cluster.setdefault(cluster, _Tally())

        for item in items:
            build = GameServerBuild.from_item(item)

            total.add_running(build)
            cluster_tally.add_running(build)
            per_build.setdefault(build.name, _Tally()).add_running(build)

            title = per_title.setdefault(build.title_id, _Tally())
            title.standing_by += build.standing_by
            title.active = build.active
            title.pending = build.pending
            title.initializing = build.initializing
            title.status = build.health

    return FleetSummary(
        total=total.counters(),
        per_cluster={name: tally.counters() for name, tally in per_cluster.items()},
        per_build={name: tally.counters() for name, tally in per_build.items()},
        per_title={title_id: tally.title_summary() for title_id, tally in per_title.items()},
    )
