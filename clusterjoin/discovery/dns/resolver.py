"""
Async SRV resolver for peer discovery.

Issues one DNS SRV query per name through aiodns with an explicit timeout.
Results are returned exactly as the nameserver provided them: no caching,
no reordering and no target address resolution. Ordering is the job of
the RFC 2782 orderer and reachability is confirmed by the prober.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Protocol

import aiodns

from clusterjoin.discovery.errors import ResolutionError
from clusterjoin.discovery.models.srv_record import SRVRecord

from .srv_name import SRVName


class SRVLookup(Protocol):
    """Anything that can turn an SRV name into candidate records."""

    async def resolve(self, name: SRVName) -> list[SRVRecord]: ...


@dataclass
class SRVResolver:
    """
    SRV resolver backed by aiodns.

    Usage:
        resolver = SRVResolver(resolution_timeout_seconds=2.0)

        name = SRVName.parse("_grpc._tcp.cockroachdb.default.svc.cluster.local")
        for record in await resolver.resolve(name):
            print(f"Found: {record.endpoint} (priority={record.priority})")
    """

    resolution_timeout_seconds: float = 2.0
    """Timeout for an individual SRV query."""

    nameservers: list[str] = field(default_factory=list)
    """Nameservers to use instead of the system configuration."""

    _aiodns_resolver: aiodns.DNSResolver | None = field(default=None, repr=False)
    """Internal aiodns resolver, created on first use."""

    async def resolve(self, name: SRVName) -> list[SRVRecord]:
        """
        Resolve a DNS SRV record.

        Args:
            name: Parsed SRV name to query

        Returns:
            SRVRecord list in the order the nameserver returned it

        Raises:
            ResolutionError: If the query fails, times out or returns no records
        """
        # aiodns binds to the running loop, so it is created lazily
        if self._aiodns_resolver is None:
            self._aiodns_resolver = aiodns.DNSResolver(
                nameservers=self.nameservers or None,
            )

        query_name = name.query_name

        try:
            srv_results = await asyncio.wait_for(
                self._aiodns_resolver.query(query_name, "SRV"),
                timeout=self.resolution_timeout_seconds,
            )

        except asyncio.TimeoutError as exc:
            raise ResolutionError(
                query_name,
                f"SRV resolution timeout ({self.resolution_timeout_seconds}s)",
            ) from exc

        except aiodns.error.DNSError as exc:
            raise ResolutionError(query_name, f"SRV query failed: {exc}") from exc

        if not srv_results:
            raise ResolutionError(query_name, "No SRV records returned")

        return [
            SRVRecord(
                target=srv.host.rstrip("."),
                port=srv.port,
                priority=srv.priority,
                weight=srv.weight,
            )
            for srv in srv_results
        ]
