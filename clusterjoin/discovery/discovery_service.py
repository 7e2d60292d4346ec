"""
Discovery Service facade for building a cluster join list.

Combines the SRV name parser, the SRV resolver, the RFC 2782 orderer and
the reachability prober:

    query names -> parse -> resolve -> merge -> order -> probe -> join list

Usage:
    from clusterjoin.discovery import (
        DiscoveryConfig,
        DiscoveryService,
    )

    config = DiscoveryConfig(
        srv_names=["_grpc._tcp.cockroachdb.default.svc.cluster.local"],
        max_nodes=3,
    )
    service = DiscoveryService(config)

    join = await service.find_nodes()
    if join == "":
        print("No nodes discovered")
"""

import asyncio
import random
from dataclasses import dataclass, field
from typing import Sequence

from clusterjoin.discovery.errors import ResolutionError
from clusterjoin.discovery.dns.resolver import SRVLookup, SRVResolver
from clusterjoin.discovery.dns.srv_name import SRVName
from clusterjoin.discovery.models.discovery_config import DiscoveryConfig
from clusterjoin.discovery.models.srv_record import Endpoint, SRVRecord
from clusterjoin.discovery.probing.connect_probe import (
    ConnectProbe,
    TCPConnectProbe,
)
from clusterjoin.discovery.probing.reachability_prober import ReachabilityProber
from clusterjoin.discovery.selection.rfc2782 import order_candidates
from clusterjoin.logging import Logger, LoggingConfig
from clusterjoin.logging.clusterjoin_logging_models import (
    DiscoveryDebug,
    DiscoveryInfo,
    DiscoveryWarn,
    ResolutionDebug,
    ResolutionFailed,
)


@dataclass
class DiscoveryService:
    """
    Resolves a reachability-confirmed join list from SRV records.

    Each call is independent: no DNS answers or probe outcomes are kept
    between calls.

    Failure modes are binary. A malformed SRV name (InvalidRecordFormat) or
    a failed lookup for any name (ResolutionError) aborts the run and
    propagates. Otherwise the call succeeds, possibly with no endpoints,
    which callers should read as "no nodes found".
    """

    config: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    """Discovery configuration."""

    resolver: SRVLookup | None = field(default=None)
    """SRV lookup backend. Defaults to an aiodns SRVResolver built from config."""

    probe: ConnectProbe | None = field(default=None)
    """Connect capability. Defaults to a TCPConnectProbe built from config."""

    rng: random.Random | None = field(default=None)
    """Random source for the weighted shuffle. Seed it for reproducible order."""

    logger: Logger | None = field(default=None)
    """Logger for discovery entries. Defaults to one at config.log_level."""

    _prober: ReachabilityProber = field(init=False)
    """Prober wired to the probe capability."""

    def __post_init__(self) -> None:
        if self.logger is None:
            self.logger = Logger(
                LoggingConfig(log_level=self.config.log_level),
            )

        if self.resolver is None:
            self.resolver = SRVResolver(
                resolution_timeout_seconds=self.config.dns_timeout,
                nameservers=list(self.config.dns_nameservers),
            )

        if self.probe is None:
            self.probe = TCPConnectProbe(
                timeout_seconds=self.config.probe_timeout,
            )

        self._prober = ReachabilityProber(
            self.probe,
            max_concurrent_probes=self.config.max_concurrent_probes,
            logger=self.logger,
        )

    async def discover(
        self,
        srv_names: Sequence[str] | None = None,
        max_nodes: int | None = None,
    ) -> list[Endpoint]:
        """
        Resolve, order and probe candidates from every SRV name.

        Args:
            srv_names: SRV query names. Defaults to config.srv_names.
            max_nodes: Join list quota. Defaults to config.max_nodes.

        Returns:
            Reachable endpoints in preference order, at most max_nodes long

        Raises:
            ValueError: If max_nodes is negative
            InvalidRecordFormat: If any name is malformed (before any lookup)
            ResolutionError: If the lookup for any name fails
        """
        if srv_names is None:
            srv_names = self.config.srv_names

        if max_nodes is None:
            max_nodes = self.config.max_nodes

        if max_nodes < 0:
            raise ValueError(f"max_nodes must be >= 0, got {max_nodes}")

        names = [SRVName.parse(raw) for raw in srv_names]

        await self.logger.log(
            DiscoveryDebug(
                message="Starting SRV discovery",
                srv_names=list(srv_names),
                max_nodes=max_nodes,
            ),
            name="discovery",
        )

        if self.config.max_concurrent_resolutions == 1:
            resolved = await self._resolve_sequential(names)

        else:
            resolved = await self._resolve_concurrent(names)

        candidates: list[SRVRecord] = []
        for records in resolved:
            candidates.extend(records)

        report = await self._prober.probe(
            order_candidates(candidates, rng=self.rng),
            max_nodes,
        )

        if len(report.reachable) == 0:
            await self.logger.log(
                DiscoveryWarn(
                    message="No nodes discovered",
                    srv_names=list(srv_names),
                    max_nodes=max_nodes,
                ),
                name="discovery",
            )

        else:
            await self.logger.log(
                DiscoveryInfo(
                    message="Discovered nodes",
                    srv_names=list(srv_names),
                    max_nodes=max_nodes,
                    discovered=len(report.reachable),
                ),
                name="discovery",
            )

        return report.reachable

    async def find_nodes(
        self,
        srv_names: Sequence[str] | None = None,
        max_nodes: int | None = None,
    ) -> str:
        """
        Return the join list as a comma-separated host:port string.

        An empty string means no node was reachable (or max_nodes was 0).
        """
        return ",".join(await self.discover(srv_names, max_nodes))

    async def _resolve_sequential(
        self,
        names: list[SRVName],
    ) -> list[list[SRVRecord]]:
        resolved: list[list[SRVRecord]] = []
        for name in names:
            resolved.append(await self._resolve(name))

        return resolved

    async def _resolve_concurrent(
        self,
        names: list[SRVName],
    ) -> list[list[SRVRecord]]:
        semaphore = asyncio.Semaphore(self.config.max_concurrent_resolutions)

        async def resolve_bounded(name: SRVName) -> list[SRVRecord]:
            async with semaphore:
                return await self._resolve(name)

        tasks = [asyncio.create_task(resolve_bounded(name)) for name in names]

        try:
            # First failure by completion aborts the rest
            for next_done in asyncio.as_completed(tasks):
                await next_done

        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

        return [task.result() for task in tasks]

    async def _resolve(self, name: SRVName) -> list[SRVRecord]:
        try:
            records = await self.resolver.resolve(name)

        except ResolutionError as err:
            await self.logger.log(
                ResolutionFailed(
                    message=str(err),
                    query_name=name.query_name,
                ),
                name="discovery",
            )
            raise

        await self.logger.log(
            ResolutionDebug(
                message="Resolved SRV records",
                query_name=name.query_name,
                records=len(records),
            ),
            name="discovery",
        )

        return records


async def find_nodes(
    srv_names: Sequence[str],
    max_nodes: int,
    config: DiscoveryConfig | None = None,
) -> str:
    """
    Resolve a comma-separated join list from SRV names.

    Convenience wrapper around DiscoveryService.find_nodes.
    """
    service = DiscoveryService(config or DiscoveryConfig())
    return await service.find_nodes(srv_names, max_nodes)
