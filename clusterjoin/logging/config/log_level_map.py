from typing import Dict

from clusterjoin.logging.models import LogLevel


class LogLevelMap:
    """Severity rank of each level, lowest (TRACE) first."""

    def __init__(self) -> None:
        self._ranks: Dict[LogLevel, int] = {
            level: rank for rank, level in enumerate(LogLevel)
        }

    def at_least(self, level: LogLevel, threshold: LogLevel) -> bool:
        return self._ranks[level] >= self._ranks[threshold]
