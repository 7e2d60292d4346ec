from dataclasses import dataclass, field

from clusterjoin.discovery.errors import ProbeFailure

from .srv_record import Endpoint


@dataclass(slots=True)
class ProbeReport:
    """Outcome of walking an ordered candidate list."""

    reachable: list[Endpoint] = field(default_factory=list)
    """Confirmed endpoints, in candidate order."""

    failures: list[ProbeFailure] = field(default_factory=list)
    """Candidates that could not be reached, in candidate order."""

    attempts: int = 0
    """Number of connection attempts started."""
