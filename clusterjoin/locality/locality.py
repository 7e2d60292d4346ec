"""
Node locality from cloud provider instance metadata.

CockroachDB-style locality has four tiers:
    provider   cloud provider (gcp, ...)
    area       rough geo location as a continent code (NA, SA, EU, OC, AS)
    territory  legal location as an ISO 3166 code
    location   cloud provider datacenter zone (europe-north1-a, ...)

Only GCP is supported.
"""

import asyncio
import socket
from dataclasses import dataclass
from typing import Protocol

import aiohttp

from clusterjoin.logging import Logger
from clusterjoin.logging.clusterjoin_logging_models import LocalityDebug

from .errors import LocalityError
from .territories import GCP_AREAS, GCP_TERRITORIES


GCP_METADATA_HOST = "metadata.google.internal"
GCP_METADATA_URL = f"http://{GCP_METADATA_HOST}/computeMetadata/v1"


@dataclass(slots=True, frozen=True)
class Locality:
    provider: str
    area: str
    territory: str
    zone: str

    def __str__(self) -> str:
        return (
            f"provider={self.provider},area={self.area},"
            f"territory={self.territory},location={self.zone}"
        )


class MetadataSource(Protocol):
    async def is_available(self) -> bool: ...

    async def get(self, path: str) -> str: ...


@dataclass(slots=True)
class GCPMetadataClient:
    """Reads values from the GCP instance metadata server."""

    base_url: str = GCP_METADATA_URL
    host: str = GCP_METADATA_HOST
    timeout_seconds: float = 2.0

    async def is_available(self) -> bool:
        try:
            await asyncio.wait_for(
                asyncio.get_running_loop().getaddrinfo(
                    self.host,
                    80,
                    type=socket.SOCK_STREAM,
                ),
                timeout=self.timeout_seconds,
            )

        except (asyncio.TimeoutError, socket.gaierror):
            return False

        return True

    async def get(self, path: str) -> str:
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(
                    f"{self.base_url}{path}",
                    headers={"Metadata-Flavor": "Google"},
                ) as response:
                    response.raise_for_status()
                    return (await response.text()).strip()

        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise LocalityError(f"Metadata request for '{path}' failed: {err}") from err


def locality_from_location(cluster_location: str, zone: str) -> Locality:
    """
    Map a GKE cluster location and node zone to a Locality.

    Zonal clusters report a zone (asia-southeast1-a) and regional clusters
    a region (asia-southeast1); both map to the same area and territory.
    Unknown regions leave area or territory empty.
    """
    parts = cluster_location.split("-")
    region = "-".join(parts[:2])

    return Locality(
        provider="gcp",
        area=GCP_AREAS.get(parts[0], ""),
        territory=GCP_TERRITORIES.get(region, ""),
        zone=zone,
    )


async def from_metadata(
    source: MetadataSource | None = None,
    logger: Logger | None = None,
) -> Locality:
    """
    Resolve the node locality from GCP instance metadata.

    Raises:
        LocalityError: If not running on GCP or the metadata server fails
    """
    if source is None:
        source = GCPMetadataClient()

    if logger is None:
        logger = Logger()

    if not await source.is_available():
        raise LocalityError("Not running on GCP")

    cluster_name = await source.get("/instance/attributes/cluster-name")
    cluster_location = await source.get("/instance/attributes/cluster-location")

    # projects/896444227315/zones/europe-north1-a -> europe-north1-a
    zone = (await source.get("/instance/zone")).split("/")[-1]

    await logger.log(
        LocalityDebug(
            message="Read instance metadata",
            cluster_name=cluster_name,
            cluster_location=cluster_location,
            zone=zone,
        ),
        name="locality",
    )

    return locality_from_location(cluster_location, zone)
