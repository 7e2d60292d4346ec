"""
Reachability probing of ordered SRV candidates.

Walks the preference-ordered candidate list, confirms each candidate with
a one-shot connect, and stops as soon as the join list quota is filled.
Unreachable candidates are logged and skipped; they never fail the run.
"""

import asyncio
from typing import Sequence

from clusterjoin.discovery.errors import ProbeFailure
from clusterjoin.discovery.models.probe_report import ProbeReport
from clusterjoin.discovery.models.srv_record import SRVRecord
from clusterjoin.logging import Logger
from clusterjoin.logging.clusterjoin_logging_models import (
    ProbeDebug,
    ProbeWarn,
)

from .connect_probe import ConnectProbe


class ReachabilityProber:
    """
    Confirms candidates in preference order until max_nodes are reachable.

    With max_concurrent_probes of 1 candidates are probed strictly one at a
    time. With a larger value, probes for a window of upcoming candidates
    run concurrently, but outcomes are still committed in list order: a
    later candidate that answers first waits for every earlier candidate
    to settle, so it can never displace a more preferred one. Probes still
    in flight when the quota is reached are cancelled and not awaited.

    Example usage:
        prober = ReachabilityProber(
            TCPConnectProbe(timeout_seconds=2.0),
            max_concurrent_probes=4,
        )

        report = await prober.probe(order_candidates(records), max_nodes=3)
        join = ",".join(report.reachable)
    """

    def __init__(
        self,
        probe: ConnectProbe,
        max_concurrent_probes: int = 1,
        logger: Logger | None = None,
    ):
        if max_concurrent_probes < 1:
            raise ValueError(
                f"max_concurrent_probes must be >= 1, got {max_concurrent_probes}"
            )

        self._probe = probe
        self._max_concurrent_probes = max_concurrent_probes
        self._logger = logger or Logger()

    async def probe(
        self,
        candidates: Sequence[SRVRecord],
        max_nodes: int,
    ) -> ProbeReport:
        """
        Probe candidates in order until max_nodes are reachable.

        Args:
            candidates: Candidates in preference order
            max_nodes: Quota of reachable endpoints, >= 0

        Returns:
            ProbeReport; reachable may hold fewer than max_nodes endpoints
            (or none) when the candidates run out first.
        """
        if max_nodes < 0:
            raise ValueError(f"max_nodes must be >= 0, got {max_nodes}")

        report = ProbeReport()

        if max_nodes == 0 or len(candidates) == 0:
            return report

        if self._max_concurrent_probes == 1:
            await self._probe_sequential(candidates, max_nodes, report)

        else:
            await self._probe_windowed(candidates, max_nodes, report)

        return report

    async def _probe_sequential(
        self,
        candidates: Sequence[SRVRecord],
        max_nodes: int,
        report: ProbeReport,
    ) -> None:
        for candidate in candidates:
            report.attempts += 1
            failure = await self._attempt(candidate)
            await self._commit(report, candidate, failure)

            if len(report.reachable) == max_nodes:
                break

    async def _probe_windowed(
        self,
        candidates: Sequence[SRVRecord],
        max_nodes: int,
        report: ProbeReport,
    ) -> None:
        pending: dict[int, asyncio.Task[ProbeFailure | None]] = {}
        next_index = 0

        try:
            for commit_index, candidate in enumerate(candidates):
                if len(report.reachable) == max_nodes:
                    break

                window_end = min(
                    commit_index + self._max_concurrent_probes,
                    len(candidates),
                )

                while next_index < window_end:
                    pending[next_index] = asyncio.create_task(
                        self._attempt(candidates[next_index])
                    )
                    report.attempts += 1
                    next_index += 1

                failure = await pending.pop(commit_index)
                await self._commit(report, candidate, failure)

        finally:
            for task in pending.values():
                task.cancel()

    async def _attempt(self, candidate: SRVRecord) -> ProbeFailure | None:
        try:
            await self._probe(candidate.target, candidate.port)

        except ProbeFailure as failure:
            return failure

        except Exception as exc:
            return ProbeFailure(candidate.endpoint, f"probe error: {exc}")

        return None

    async def _commit(
        self,
        report: ProbeReport,
        candidate: SRVRecord,
        failure: ProbeFailure | None,
    ) -> None:
        if failure is None:
            report.reachable.append(candidate.endpoint)

            await self._logger.log(
                ProbeDebug(
                    message="Endpoint reachable",
                    endpoint=candidate.endpoint,
                    priority=candidate.priority,
                    weight=candidate.weight,
                ),
                name="discovery",
            )

            return

        report.failures.append(failure)

        await self._logger.log(
            ProbeWarn(
                message="Could not connect to server",
                endpoint=candidate.endpoint,
                priority=candidate.priority,
                weight=candidate.weight,
                reason=failure.reason,
            ),
            name="discovery",
        )
