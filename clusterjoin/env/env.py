from typing import Callable, Dict, Literal, Union

from pydantic import BaseModel, StrictInt, StrictStr

from clusterjoin.discovery.models.discovery_config import DiscoveryConfig
from clusterjoin.logging import LoggingConfig

from .time_parser import TimeParser

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    CLUSTERJOIN_SRV_NAMES: StrictStr | None = None
    CLUSTERJOIN_MAX_NODES: StrictInt = 3
    CLUSTERJOIN_DNS_TIMEOUT: StrictStr = "2s"
    CLUSTERJOIN_DNS_NAMESERVERS: StrictStr | None = None
    CLUSTERJOIN_MAX_CONCURRENT_RESOLUTIONS: StrictInt = 1
    CLUSTERJOIN_PROBE_TIMEOUT: StrictStr = "3s"
    CLUSTERJOIN_MAX_CONCURRENT_PROBES: StrictInt = 1
    CLUSTERJOIN_LOG_LEVEL: Literal[
        "trace", "debug", "info", "warn", "error", "critical", "fatal"
    ] = "info"
    CLUSTERJOIN_LOG_DIRECTORY: StrictStr | None = None

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "CLUSTERJOIN_SRV_NAMES": str,
            "CLUSTERJOIN_MAX_NODES": int,
            "CLUSTERJOIN_DNS_TIMEOUT": str,
            "CLUSTERJOIN_DNS_NAMESERVERS": str,
            "CLUSTERJOIN_MAX_CONCURRENT_RESOLUTIONS": int,
            "CLUSTERJOIN_PROBE_TIMEOUT": str,
            "CLUSTERJOIN_MAX_CONCURRENT_PROBES": int,
            "CLUSTERJOIN_LOG_LEVEL": str,
            "CLUSTERJOIN_LOG_DIRECTORY": str,
        }

    def to_discovery_config(
        self,
        srv_names: list[str] | None = None,
        max_nodes: int | None = None,
        log_level: str | None = None,
    ) -> DiscoveryConfig:
        parser = TimeParser()

        if srv_names is None:
            srv_names = _split_list(self.CLUSTERJOIN_SRV_NAMES)

        if max_nodes is None:
            max_nodes = self.CLUSTERJOIN_MAX_NODES

        if log_level is None:
            log_level = self.CLUSTERJOIN_LOG_LEVEL

        return DiscoveryConfig(
            srv_names=srv_names,
            max_nodes=max_nodes,
            dns_timeout=parser.parse(self.CLUSTERJOIN_DNS_TIMEOUT),
            dns_nameservers=_split_list(self.CLUSTERJOIN_DNS_NAMESERVERS),
            max_concurrent_resolutions=self.CLUSTERJOIN_MAX_CONCURRENT_RESOLUTIONS,
            probe_timeout=parser.parse(self.CLUSTERJOIN_PROBE_TIMEOUT),
            max_concurrent_probes=self.CLUSTERJOIN_MAX_CONCURRENT_PROBES,
            log_level=log_level,
        )

    def to_logging_config(self, debug: bool = False) -> LoggingConfig:
        """Logging for CLI runs; JSON files per logger when a directory is set."""
        return LoggingConfig(
            log_level="debug" if debug else self.CLUSTERJOIN_LOG_LEVEL,
            log_directory=self.CLUSTERJOIN_LOG_DIRECTORY,
        )


def _split_list(value: str | None) -> list[str]:
    if not value:
        return []

    return [item.strip() for item in value.split(",") if item.strip()]
