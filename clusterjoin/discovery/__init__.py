"""
SRV-based peer discovery for cluster bootstrap.

Resolves one or more DNS SRV names, orders the merged candidates as
RFC 2782 prescribes (ascending priority, weighted random within a
priority tier) and confirms them with TCP connects until a bounded join
list is filled.

Usage:
    from clusterjoin.discovery import find_nodes

    join = await find_nodes(
        ["_grpc._tcp.cockroachdb.default.svc.cluster.local"],
        max_nodes=3,
    )
"""

# Errors
from clusterjoin.discovery.errors import (
    DiscoveryError as DiscoveryError,
    InvalidRecordFormat as InvalidRecordFormat,
    ProbeFailure as ProbeFailure,
    ResolutionError as ResolutionError,
)

# Models
from clusterjoin.discovery.models import (
    DiscoveryConfig as DiscoveryConfig,
    Endpoint as Endpoint,
    ProbeReport as ProbeReport,
    SRVRecord as SRVRecord,
)

# DNS
from clusterjoin.discovery.dns import (
    SRVLookup as SRVLookup,
    SRVName as SRVName,
    SRVResolver as SRVResolver,
)

# Selection
from clusterjoin.discovery.selection import (
    order_candidates as order_candidates,
    weighted_shuffle as weighted_shuffle,
)

# Probing
from clusterjoin.discovery.probing import (
    ConnectProbe as ConnectProbe,
    ReachabilityProber as ReachabilityProber,
    TCPConnectProbe as TCPConnectProbe,
)

# Service facade
from clusterjoin.discovery.discovery_service import (
    DiscoveryService as DiscoveryService,
    find_nodes as find_nodes,
)
