import asyncio
from dataclasses import dataclass
from typing import Protocol

from clusterjoin.discovery.errors import ProbeFailure
from clusterjoin.discovery.models.srv_record import format_endpoint


class ConnectProbe(Protocol):
    """
    Capability to check whether an endpoint accepts connections.

    Returns normally when the endpoint is reachable and raises
    ProbeFailure when it is not.
    """

    async def __call__(self, host: str, port: int) -> None: ...


@dataclass(slots=True)
class TCPConnectProbe:
    """
    One-shot TCP connect probe.

    Opens a connection, closes it straight away and exchanges no data.
    Name resolution of the target happens as part of the connect, so a
    target that does not resolve is reported as unreachable too.
    """

    timeout_seconds: float = 3.0
    """Upper bound for resolving and connecting to the target."""

    async def __call__(self, host: str, port: int) -> None:
        endpoint = format_endpoint(host, port)

        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port),
                timeout=self.timeout_seconds,
            )

        except asyncio.TimeoutError as exc:
            raise ProbeFailure(
                endpoint,
                f"connect timed out after {self.timeout_seconds}s",
            ) from exc

        except OSError as exc:
            raise ProbeFailure(endpoint, str(exc) or type(exc).__name__) from exc

        writer.close()

        try:
            await writer.wait_closed()

        except OSError:
            # Peer reset after accept; the connect itself succeeded.
            pass
