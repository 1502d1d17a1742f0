"""Unit tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from shared.models import (
    BuildHealth,
    BuildListResult,
    BuildListStatus,
    FleetSummary,
    GameServerBuild,
    SummaryCounters,
    TitleSummary,
)


class TestGameServerBuild:
    """Test the lenient GameServerBuild view."""

    def test_from_item(self, sample_build_data) -> None:
        """Test reading a complete item."""
        build = GameServerBuild.from_item(sample_build_data)

        assert build.name == "racing-build"
        assert build.title_id == "1A2B"
        assert build.health == BuildHealth.HEALTHY
        assert build.standing_by == 4
        assert build.active == 2
        assert build.pending == 1
        assert build.initializing == 3

    def test_from_empty_item(self) -> None:
        """Test an empty item yields defaults."""
        build = GameServerBuild.from_item({})

        assert build.name == ""
        assert build.title_id == ""
        assert build.health == BuildHealth.UNKNOWN
        assert (build.standing_by, build.active, build.pending, build.initializing) == (0, 0, 0, 0)

    @pytest.mark.parametrize("item", [None, "build", 3, ["metadata"]])
    def test_from_non_mapping(self, item) -> None:
        """Test non-object items do not raise."""
        build = GameServerBuild.from_item(item)

        assert build.name == ""
        assert build.health == BuildHealth.UNKNOWN

    def test_keys_converted_to_str(self) -> None:
        """Test non-string names and title IDs are used as string keys."""
        build = GameServerBuild.from_item({"metadata": {"name": 12}, "spec": {"titleID": 3.5}})

        assert build.name == "12"
        assert build.title_id == "3.5"

    @pytest.mark.parametrize(
        "raw,expected",
        [(3, 3), (3.0, 3), (2.5, 0), (True, 0), (False, 0), (-1, 0), (-2.0, 0), ("4", 0), (None, 0)],
    )
    def test_count_values(self, raw, expected) -> None:
        """Test integral numbers count and everything else reads as zero."""
        build = GameServerBuild.from_item({"status": {"currentActive": raw}})

        assert build.active == expected
        assert type(build.active) is int

    def test_item_not_modified(self, sample_build_data) -> None:
        """Test reading an item leaves it unchanged."""
        before = dict(sample_build_data)

        GameServerBuild.from_item(sample_build_data)

        assert sample_build_data == before

    def test_immutable(self, sample_build_data) -> None:
        """Test the view cannot be modified."""
        build = GameServerBuild.from_item(sample_build_data)

        with pytest.raises(ValidationError):
            build.active = 10


class TestBuildHealth:
    """Test health collapse."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Healthy", BuildHealth.HEALTHY),
            ("Unhealthy", BuildHealth.UNHEALTHY),
            ("Unknown", BuildHealth.UNKNOWN),
            ("UNHEALTHY", BuildHealth.UNKNOWN),
            (" Healthy", BuildHealth.UNKNOWN),
            (1, BuildHealth.UNKNOWN),
            (None, BuildHealth.UNKNOWN),
        ],
    )
    def test_collapse(self, raw, expected) -> None:
        assert BuildHealth.collapse(raw) == expected


class TestFleetModels:
    """Test fleet summary models."""

    def test_counters_default_zero(self) -> None:
        counters = SummaryCounters()

        assert counters.model_dump() == {
            "standing_by": 0,
            "active": 0,
            "pending": 0,
            "initializing": 0,
        }

    def test_counters_reject_negative(self) -> None:
        with pytest.raises(ValidationError):
            SummaryCounters(active=-1)

    def test_counters_accept_camel_case(self) -> None:
        """Test counters can be read back from the wire format."""
        counters = SummaryCounters.model_validate({"standingBy": 2, "active": 1})

        assert counters.standing_by == 2

    def test_title_summary_status(self) -> None:
        title = TitleSummary(standing_by=1, status="Unhealthy")

        assert title.status == BuildHealth.UNHEALTHY
        assert title.model_dump(by_alias=True)["status"] == "Unhealthy"

    def test_fleet_summary_round_trip(self) -> None:
        """Test a summary parses back from its JSON form."""
        summary = FleetSummary(
            total=SummaryCounters(standing_by=1),
            per_cluster={"eastus": SummaryCounters(standing_by=1)},
            per_build={"b1": SummaryCounters(standing_by=1)},
            per_title={"t1": TitleSummary(standing_by=1, status=BuildHealth.HEALTHY)},
        )

        parsed = FleetSummary.model_validate_json(summary.model_dump_json(by_alias=True))

        assert parsed == summary

    def test_build_list_result(self) -> None:
        result = BuildListResult(
            cluster="eastus",
            url="http://e/gameserverbuilds",
            status=BuildListStatus.UNREACHABLE,
            error="Couldn't reach cluster 'eastus' at: http://e/gameserverbuilds",
        )

        assert result.status == BuildListStatus.UNREACHABLE
        assert result.items == []
        assert result.model_dump(by_alias=True)["statusCode"] is None
