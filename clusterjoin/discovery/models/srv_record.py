from dataclasses import dataclass


Endpoint = str
"""A `host:port` string."""


def format_endpoint(host: str, port: int) -> Endpoint:
    return f"{host}:{port}"


@dataclass(slots=True, frozen=True)
class SRVRecord:
    """A candidate peer obtained from a DNS SRV answer."""

    target: str
    """Target hostname, without the trailing root dot."""

    port: int
    """Port number of the service."""

    priority: int = 0
    """Priority tier of the target host (lower values are preferred)."""

    weight: int = 0
    """Relative weight among hosts sharing a priority tier."""

    @property
    def endpoint(self) -> Endpoint:
        return format_endpoint(self.target, self.port)
