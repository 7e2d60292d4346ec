"""
Error taxonomy for SRV discovery.

Parsing and resolution errors are fatal to a discovery run and propagate
to the caller. Probe failures are absorbed by the prober and only show up
as an endpoint missing from the join list.
"""


class DiscoveryError(Exception):
    """Base class for discovery errors."""


class InvalidRecordFormat(DiscoveryError):
    """Raised when an SRV query name is not of the form _service._proto.domain."""

    def __init__(self, raw: str, message: str):
        self.raw = raw
        super().__init__(f"Invalid SRV record '{raw}': {message}")


class ResolutionError(DiscoveryError):
    """Raised when the SRV lookup for a query name fails."""

    def __init__(self, query_name: str, message: str):
        self.query_name = query_name
        super().__init__(f"SRV resolution failed for '{query_name}': {message}")


class ProbeFailure(DiscoveryError):
    """A single candidate could not be connected to."""

    def __init__(self, endpoint: str, reason: str):
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"Could not connect to '{endpoint}': {reason}")
