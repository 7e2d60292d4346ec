"""
Tests for the discovery service facade.

Tests cover:
- End-to-end join list assembly with fake DNS and probes
- Fatal parse and resolution errors
- Empty and zero-quota results
- Concurrent resolution
"""

import random

import pytest

from clusterjoin.discovery import (
    DiscoveryConfig,
    DiscoveryService,
    InvalidRecordFormat,
    ResolutionError,
    find_nodes,
)
from clusterjoin.discovery import discovery_service

from tests.unit.discovery.mocks import FakeProbe, FakeResolver, record


NAME_A = "_grpc._tcp.cockroachdb.default.svc.cluster.local"
NAME_B = "_grpc._tcp.cockroachdb.east.svc.cluster.local"


def make_service(resolver, probe, logger, **config) -> DiscoveryService:
    return DiscoveryService(
        config=DiscoveryConfig(**config),
        resolver=resolver,
        probe=probe,
        rng=random.Random(7),
        logger=logger,
    )


class TestFindNodes:
    """Tests for building the comma-separated join list."""

    @pytest.mark.asyncio
    async def test_unreachable_preferred_node_is_skipped(self, quiet_logger):
        resolver = FakeResolver({
            NAME_A: [
                record("h1", priority=0, weight=10),
                record("h2", priority=0, weight=10),
                record("h3", priority=1, weight=0),
            ]
        })
        probe = FakeProbe({"h2:26257", "h3:26257"})
        service = make_service(resolver, probe, quiet_logger)

        join = await service.find_nodes([NAME_A], max_nodes=2)

        assert join == "h2:26257,h3:26257"

    @pytest.mark.asyncio
    async def test_candidates_from_all_names_are_merged(self, quiet_logger):
        resolver = FakeResolver({
            NAME_A: [record("a1", priority=5)],
            NAME_B: [record("b1", priority=0)],
        })
        probe = FakeProbe({"a1:26257", "b1:26257"})
        service = make_service(resolver, probe, quiet_logger)

        nodes = await service.discover([NAME_A, NAME_B], max_nodes=3)

        assert nodes == ["b1:26257", "a1:26257"]
        assert resolver.queried == [NAME_A, NAME_B]

    @pytest.mark.asyncio
    async def test_no_reachable_nodes_gives_empty_string(self, quiet_logger):
        resolver = FakeResolver({NAME_A: [record("h1"), record("h2")]})
        probe = FakeProbe(set())
        service = make_service(resolver, probe, quiet_logger)

        assert await service.find_nodes([NAME_A], max_nodes=3) == ""
        assert probe.calls == ["h1:26257", "h2:26257"] or probe.calls == ["h2:26257", "h1:26257"]

    @pytest.mark.asyncio
    async def test_zero_quota_probes_nothing(self, quiet_logger):
        resolver = FakeResolver({NAME_A: [record("h1")]})
        probe = FakeProbe({"h1:26257"})
        service = make_service(resolver, probe, quiet_logger)

        assert await service.find_nodes([NAME_A], max_nodes=0) == ""
        assert probe.calls == []

    @pytest.mark.asyncio
    async def test_negative_quota_rejected(self, quiet_logger):
        service = make_service(FakeResolver({}), FakeProbe(set()), quiet_logger)

        with pytest.raises(ValueError):
            await service.find_nodes([NAME_A], max_nodes=-1)

    @pytest.mark.asyncio
    async def test_defaults_come_from_config(self, quiet_logger):
        resolver = FakeResolver({NAME_A: [record("h1"), record("h2")]})
        probe = FakeProbe({"h1:26257", "h2:26257"})
        service = make_service(
            resolver,
            probe,
            quiet_logger,
            srv_names=[NAME_A],
            max_nodes=1,
        )

        nodes = await service.discover()

        assert len(nodes) == 1
        assert resolver.queried == [NAME_A]


class TestDiscoveryFailures:
    """Tests for fatal discovery errors."""

    @pytest.mark.asyncio
    async def test_malformed_name_fails_before_any_lookup(self, quiet_logger):
        resolver = FakeResolver({NAME_A: [record("h1")]})
        probe = FakeProbe({"h1:26257"})
        service = make_service(resolver, probe, quiet_logger)

        with pytest.raises(InvalidRecordFormat):
            await service.find_nodes([NAME_A, "cockroachdb.local"], max_nodes=3)

        assert resolver.queried == []
        assert probe.calls == []

    @pytest.mark.asyncio
    async def test_resolution_failure_aborts_run(self, quiet_logger):
        resolver = FakeResolver({
            NAME_A: ResolutionError(NAME_A, "SRV query failed: NXDOMAIN"),
            NAME_B: [record("h1")],
        })
        probe = FakeProbe({"h1:26257"})
        service = make_service(resolver, probe, quiet_logger)

        with pytest.raises(ResolutionError):
            await service.find_nodes([NAME_A, NAME_B], max_nodes=3)

        assert resolver.queried == [NAME_A]
        assert probe.calls == []

    @pytest.mark.asyncio
    async def test_concurrent_resolution_failure_aborts_run(self, quiet_logger):
        resolver = FakeResolver(
            {
                NAME_A: [record("h1")],
                NAME_B: ResolutionError(NAME_B, "SRV resolution timeout (2.0s)"),
            },
            delays={NAME_A: 5},
        )
        probe = FakeProbe({"h1:26257"})
        service = make_service(
            resolver,
            probe,
            quiet_logger,
            max_concurrent_resolutions=2,
        )

        with pytest.raises(ResolutionError) as exc_info:
            await service.find_nodes([NAME_A, NAME_B], max_nodes=3)

        assert exc_info.value.query_name == NAME_B
        assert probe.calls == []

    @pytest.mark.asyncio
    async def test_concurrent_resolution_merges_results(self, quiet_logger):
        resolver = FakeResolver(
            {
                NAME_A: [record("a1", priority=1)],
                NAME_B: [record("b1", priority=0)],
            },
            delays={NAME_A: 0.02},
        )
        probe = FakeProbe({"a1:26257", "b1:26257"})
        service = make_service(
            resolver,
            probe,
            quiet_logger,
            max_concurrent_resolutions=2,
        )

        assert await service.find_nodes([NAME_A, NAME_B], max_nodes=2) == "b1:26257,a1:26257"


class TestModuleFindNodes:
    """Tests for the module-level convenience wrapper."""

    @pytest.mark.asyncio
    async def test_builds_default_service_from_config(self, monkeypatch):
        resolver = FakeResolver({NAME_A: [record("h1")]})
        probe = FakeProbe({"h1:26257"})

        monkeypatch.setattr(discovery_service, "SRVResolver", lambda **kwargs: resolver)
        monkeypatch.setattr(discovery_service, "TCPConnectProbe", lambda **kwargs: probe)

        join = await find_nodes(
            [NAME_A],
            max_nodes=1,
            config=DiscoveryConfig(log_level="fatal"),
        )

        assert join == "h1:26257"
