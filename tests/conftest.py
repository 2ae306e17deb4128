"""
ddtstat Test Configuration and Fixtures

This module provides common fixtures and configuration for ddtstat tests.
"""

import io
from unittest.mock import Mock

import pytest

from ddtstat.config import DdtStatConfig
from ddtstat.core.interfaces.command_executor import CommandResult
from ddtstat.infrastructure.pool_query import FakePoolQuery
from ddtstat.infrastructure.logging.structured_logger import LogConfig
from tests.fixtures.test_data import (
    ZPOOL_STATUS_DEDUP,
    ZPOOL_STATUS_ROUND,
    ONE_TIB
)


@pytest.fixture
def fake_pool_query():
    """Pool query returning canned reports for 'tank' and 'backup'."""
    return FakePoolQuery(
        reports={
            "tank": ZPOOL_STATUS_DEDUP,
            "backup": ZPOOL_STATUS_ROUND,
        },
        capacities={
            "tank": 4 * ONE_TIB,
            "backup": ONE_TIB,
        },
        host_memory=32 * 1024 ** 3
    )


@pytest.fixture
def mock_logger():
    """Create mock logger."""
    logger = Mock()
    logger.info = Mock()
    logger.error = Mock()
    logger.warning = Mock()
    logger.debug = Mock()
    logger.critical = Mock()
    logger.fatal = Mock()
    return logger


@pytest.fixture
def mock_executor():
    """Command executor double with a configurable result."""
    executor = Mock()
    executor.execute = Mock(return_value=CommandResult(returncode=0, stdout="", stderr=""))
    executor.is_available = Mock(return_value=True)
    return executor


@pytest.fixture
def test_config():
    """Configuration independent of the host environment."""
    return DdtStatConfig(log=LogConfig(level="WARNING", format="text"))


@pytest.fixture
def stdout():
    return io.StringIO()


@pytest.fixture
def stderr():
    return io.StringIO()
