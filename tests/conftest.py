"""Pytest configuration and shared fixtures for all tests."""

# Add project root to path
import sys
from pathlib import Path

import pytest
from loguru import logger

sys.path.insert(0, str(Path(__file__).parent.parent))

from di_container import DIContainer


@pytest.fixture
def container():
    """Create a fresh container."""
    return DIContainer()


@pytest.fixture
def restore_logging():
    """Put loguru back to its import-time state after a test reconfigures it."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
    logger.disable("di_container")
