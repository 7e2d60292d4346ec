from typing import List, Literal

from clusterjoin.logging.models import LogLevel, LogLevelName
from .log_level_map import LogLevelMap
from .stream_type import StreamType


LogOutput = Literal['stdout', 'stderr']


class LoggingConfig:
    def __init__(
        self,
        log_level: LogLevelName = 'info',
        log_output: LogOutput = 'stderr',
        log_directory: str | None = None,
        disabled_loggers: List[str] | None = None,
    ) -> None:
        self._log_level = LogLevel.to_level(log_level)
        self._log_output_type = (
            StreamType.STDOUT if log_output == 'stdout' else StreamType.STDERR
        )
        self._log_directory = log_directory
        self._disabled_loggers: List[str] = list(disabled_loggers or [])
        self._level_map = LogLevelMap()

    def update(
        self, 
        log_directory: str | None = None,
        log_level: LogLevelName | None = None,
        log_output: LogOutput | None = None,
    ):
        if log_directory:
            self._log_directory = log_directory

        if log_level:
            self._log_level = LogLevel.to_level(log_level)

        if log_output:
            self._log_output_type = (
                StreamType.STDOUT if log_output == 'stdout' else StreamType.STDERR
            )

    def disable(self, *logger_names: str):
        self._disabled_loggers.extend(logger_names)

    def enabled(self, logger_name: str, log_level: LogLevel) -> bool:
        return logger_name not in self._disabled_loggers and (
            self._level_map.at_least(log_level, self._log_level)
        )

    @property
    def level(self):
        return self._log_level

    @property
    def output(self):
        return self._log_output_type
    
    @property
    def directory(self):
        return self._log_directory
