"""Tests for environment-driven settings."""

import pytest

from di_container import ConfigurationError
from di_container.config import ContainerSettings


class TestContainerSettings:
    """Test suite for ContainerSettings."""

    def test_defaults(self):
        settings = ContainerSettings.from_env({})

        assert settings.log_level == "WARNING"
        assert settings.log_format is None

    def test_env_overrides(self):
        settings = ContainerSettings.from_env({
            "DI_CONTAINER_LOG_LEVEL": "debug",
            "DI_CONTAINER_LOG_FORMAT": "{level} {message}",
            "DI_CONTAINER_UNKNOWN": "ignored",
            "LOG_LEVEL": "ERROR",
        })

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "{level} {message}"

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("DI_CONTAINER_LOG_LEVEL", "INFO")

        assert ContainerSettings.from_env().log_level == "INFO"

    def test_invalid_level(self):
        with pytest.raises(ConfigurationError, match="DI_CONTAINER_"):
            ContainerSettings.from_env({"DI_CONTAINER_LOG_LEVEL": "LOUD"})
