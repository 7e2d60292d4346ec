"""Models for the discovery system."""

from clusterjoin.discovery.models.discovery_config import (
    DiscoveryConfig as DiscoveryConfig,
)
from clusterjoin.discovery.models.probe_report import (
    ProbeReport as ProbeReport,
)
from clusterjoin.discovery.models.srv_record import (
    Endpoint as Endpoint,
    SRVRecord as SRVRecord,
    format_endpoint as format_endpoint,
)
