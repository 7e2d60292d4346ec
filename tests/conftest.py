"""
Pytest configuration for unit tests.

Configures pytest-asyncio for async test support.
"""

import tempfile
from typing import Generator

import pytest

from clusterjoin.logging import Logger, LoggingConfig


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


@pytest.fixture
def temp_log_directory() -> Generator[str, None, None]:
    with tempfile.TemporaryDirectory() as temp_directory:
        yield temp_directory


@pytest.fixture
def quiet_logger() -> Logger:
    """Logger that only emits fatal entries."""
    return Logger(LoggingConfig(log_level="fatal"))


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run without CLUSTERJOIN_* variables or a .env file in the cwd."""
    for name in (
        "CLUSTERJOIN_SRV_NAMES",
        "CLUSTERJOIN_MAX_NODES",
        "CLUSTERJOIN_DNS_TIMEOUT",
        "CLUSTERJOIN_DNS_NAMESERVERS",
        "CLUSTERJOIN_MAX_CONCURRENT_RESOLUTIONS",
        "CLUSTERJOIN_PROBE_TIMEOUT",
        "CLUSTERJOIN_MAX_CONCURRENT_PROBES",
        "CLUSTERJOIN_LOG_LEVEL",
        "CLUSTERJOIN_LOG_DIRECTORY",
    ):
        monkeypatch.delenv(name, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path
