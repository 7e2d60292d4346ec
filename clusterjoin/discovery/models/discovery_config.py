"""
Discovery configuration for SRV-based join list resolution.
"""

from dataclasses import dataclass, field

from clusterjoin.logging.models import LogLevel, LogLevelName


@dataclass(slots=True)
class DiscoveryConfig:
    """
    Configuration for a discovery run.

    Everything the discovery pipeline needs is carried here and passed in
    explicitly; nothing is read from process-wide state.
    """

    # ===== Query =====
    srv_names: list[str] = field(default_factory=list)
    """SRV query names to resolve, in order.

    Format: '_service._proto.domain'
    Example: '_grpc._tcp.cockroachdb.default.svc.cluster.local'

    On Kubernetes the service part is the name of the named port.
    """

    max_nodes: int = 3
    """Maximum number of reachable endpoints to return.

    Zero returns an empty join list without probing anything.
    """

    # ===== DNS =====
    dns_timeout: float = 2.0
    """Timeout for a single SRV query in seconds."""

    dns_nameservers: list[str] = field(default_factory=list)
    """Nameservers to query instead of the system resolver configuration."""

    max_concurrent_resolutions: int = 1
    """How many SRV names may be resolved at once.

    1 resolves names one after another and stops at the first failure
    without querying the remaining names.
    """

    # ===== Probing =====
    probe_timeout: float = 3.0
    """Timeout for a single TCP connect attempt in seconds."""

    max_concurrent_probes: int = 1
    """Size of the window of candidates probed concurrently.

    Results are always committed in preference order regardless of
    which probe finishes first.
    """

    # ===== Logging =====
    log_level: LogLevelName = "info"
    """Minimum level of discovery log entries."""

    def __post_init__(self) -> None:
        if self.max_nodes < 0:
            raise ValueError(f"max_nodes must be >= 0, got {self.max_nodes}")

        if self.dns_timeout <= 0:
            raise ValueError(f"dns_timeout must be positive, got {self.dns_timeout}")

        if self.probe_timeout <= 0:
            raise ValueError(f"probe_timeout must be positive, got {self.probe_timeout}")

        if self.max_concurrent_resolutions < 1:
            raise ValueError(
                f"max_concurrent_resolutions must be >= 1, got {self.max_concurrent_resolutions}"
            )

        if self.max_concurrent_probes < 1:
            raise ValueError(
                f"max_concurrent_probes must be >= 1, got {self.max_concurrent_probes}"
            )

        # Raises on unknown level names
        LogLevel.to_level(self.log_level)
