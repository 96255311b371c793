"""Process-level settings.

Settings come from defaults overridden by ``DI_CONTAINER_*`` environment
variables:
- DI_CONTAINER_LOG_LEVEL=DEBUG -> settings.log_level = "DEBUG"
- DI_CONTAINER_LOG_FORMAT="{message}" -> settings.log_format = "{message}"
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ValidationError, field_validator

from ..constants import DEFAULT_LOG_LEVEL, ENV_PREFIX
from ..errors import ConfigurationError

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class ContainerSettings(BaseModel):
    """Logging settings for tools built on the container."""

    log_level: str = DEFAULT_LOG_LEVEL
    log_format: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}, expected one of {', '.join(_LOG_LEVELS)}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ContainerSettings":
        """Build settings from the environment.

        Args:
            environ: Environment to read, ``os.environ`` if omitted

        Raises:
            ConfigurationError: If an override has an invalid value
        """
        environ = os.environ if environ is None else environ
        overrides = {}
        for key, value in environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            field_name = key[len(ENV_PREFIX):].lower()
            if field_name in cls.model_fields:
                overrides[field_name] = value

        try:
            return cls(**overrides)
        except ValidationError as e:
            raise ConfigurationError.from_exception(
                e, f"Invalid {ENV_PREFIX}* environment override: {e}"
            )
