"""
Tests for the msgspec-backed async logger.
"""

import os

import msgspec
import pytest

from clusterjoin.logging import Entry, Logger, LoggingConfig, LogLevel
from clusterjoin.logging.config import LogLevelMap
from clusterjoin.logging.clusterjoin_logging_models import (
    ProbeWarn,
    ResolutionDebug,
)


class TestLogLevel:
    """Tests for level name parsing."""

    @pytest.mark.parametrize(
        "name,level",
        [("debug", LogLevel.DEBUG), ("WARN", LogLevel.WARN), ("fatal", LogLevel.FATAL)],
    )
    def test_to_level(self, name: str, level: LogLevel):
        assert LogLevel.to_level(name) == level

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError):
            LogLevel.to_level("verbose")


class TestLoggingConfig:
    """Tests for level and logger name filtering."""

    def test_levels_below_threshold_disabled(self):
        config = LoggingConfig(log_level="warn")

        assert config.enabled("discovery", LogLevel.ERROR)
        assert config.enabled("discovery", LogLevel.WARN)
        assert not config.enabled("discovery", LogLevel.INFO)

    def test_disabled_logger_is_silent(self):
        config = LoggingConfig(log_level="trace")
        config.disable("discovery")

        assert not config.enabled("discovery", LogLevel.FATAL)
        assert config.enabled("runner", LogLevel.TRACE)

    def test_update_level(self):
        config = LoggingConfig()
        config.update(log_level="debug")

        assert config.level == LogLevel.DEBUG


class TestEntry:
    """Tests for rendering entries into templates."""

    def test_template_uses_fields_and_context(self):
        entry = ProbeWarn(
            message="Could not connect to server",
            endpoint="h1:26257",
            priority=0,
            weight=10,
            reason="connection refused",
        )

        line = entry.to_template(
            "{level} {endpoint} {reason} {thread_id}",
            context={"thread_id": 1},
        )

        assert line == "WARN h1:26257 connection refused 1"

    def test_subclass_fields_rendered_as_pairs(self):
        entry = ProbeWarn(
            message="Could not connect to server",
            endpoint="h1:26257",
            priority=0,
            weight=10,
            reason="refused",
        )

        assert entry.to_template("{message} {fields}") == (
            "Could not connect to server endpoint=h1:26257 priority=0 weight=10 reason=refused"
        )


class TestLogger:
    """Tests for console and file output."""

    @pytest.mark.asyncio
    async def test_writes_to_stderr_by_default(self, capsys):
        logger = Logger(LoggingConfig(log_level="info"))

        await logger.log(
            Entry(message="hello discovery", level=LogLevel.INFO),
            name="discovery",
        )
        await logger.close()

        captured = capsys.readouterr()
        assert "hello discovery" in captured.err
        assert "INFO" in captured.err
        assert captured.out == ""

    @pytest.mark.asyncio
    async def test_entries_below_level_dropped(self, capsys):
        logger = Logger(LoggingConfig(log_level="info"))

        await logger.log(
            ResolutionDebug(
                message="Resolved SRV records",
                query_name="_grpc._tcp.example.com",
                records=3,
            ),
            name="discovery",
        )
        await logger.close()

        assert capsys.readouterr().err == ""

    @pytest.mark.asyncio
    async def test_stdout_output(self, capsys):
        logger = Logger(LoggingConfig(log_output="stdout"))

        await logger.log(Entry(message="to stdout", level=LogLevel.ERROR))
        await logger.close()

        assert "to stdout" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_writes_json_lines_to_file(self, temp_log_directory):
        logger = Logger(LoggingConfig(log_level="debug"))
        path = os.path.join(temp_log_directory, "discovery.json")

        for records in (1, 2):
            await logger.log(
                ResolutionDebug(
                    message="Resolved SRV records",
                    query_name="_grpc._tcp.example.com",
                    records=records,
                ),
                name="discovery",
                path=path,
            )

        await logger.close()

        with open(path, "rb") as logfile:
            lines = [msgspec.json.decode(line) for line in logfile.read().splitlines()]

        assert [line["entry"]["records"] for line in lines] == [1, 2]
        assert lines[0]["entry"]["level"] == "DEBUG"
        assert lines[0]["function_name"] == "test_writes_json_lines_to_file"

    @pytest.mark.asyncio
    async def test_log_directory_writes_file_per_logger(self, temp_log_directory, capsys):
        logger = Logger(LoggingConfig(log_directory=temp_log_directory))

        await logger.log(
            Entry(message="to discovery file", level=LogLevel.INFO),
            name="discovery",
        )
        await logger.log(
            Entry(message="to runner file", level=LogLevel.WARN),
            name="runner",
        )
        await logger.close()

        with open(os.path.join(temp_log_directory, "discovery.json"), "rb") as logfile:
            discovery_lines = [msgspec.json.decode(line) for line in logfile.read().splitlines()]

        with open(os.path.join(temp_log_directory, "runner.json"), "rb") as logfile:
            runner_lines = [msgspec.json.decode(line) for line in logfile.read().splitlines()]

        assert [line["entry"]["message"] for line in discovery_lines] == ["to discovery file"]
        assert [line["entry"]["message"] for line in runner_lines] == ["to runner file"]
        assert capsys.readouterr().err == ""

    def test_level_map_ranks_by_severity(self):
        level_map = LogLevelMap()

        assert level_map.at_least(LogLevel.FATAL, LogLevel.TRACE)
        assert not level_map.at_least(LogLevel.DEBUG, LogLevel.INFO)

    @pytest.mark.asyncio
    async def test_non_json_logfile_rejected(self, temp_log_directory):
        logger = Logger()

        with pytest.raises(ValueError):
            await logger.log(
                Entry(message="bad path", level=LogLevel.INFO),
                path=os.path.join(temp_log_directory, "discovery.txt"),
            )
