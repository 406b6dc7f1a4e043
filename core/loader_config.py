"""
Loader Configuration
====================

Settings shared by the loaders, with presets and .env support.
"""

import os
import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "DATALOADER_"


class LoaderConfig(BaseModel):
    """
    Loader configuration.

    Example:
        >>> config = LoaderConfig(remote_timeout=5.0)
        >>> loader = DataLoader(Strategy.REMOTE_FIRST, source, config=config)
    """
    remote_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Remote fetch timeout in seconds (None = wait for completion)"
    )
    enable_logging: bool = Field(default=True, description="Emit engine logs")
    log_level: str = Field(default="INFO", description="Level used by setup_logging")
    log_file: Optional[str] = Field(default=None, description="Optional log file path")

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "LoaderConfig":
        """
        Build configuration from environment variables.

        Loads env_file (or a .env found from the working directory) first,
        without overriding variables already set.

        Recognized variables:
            DATALOADER_REMOTE_TIMEOUT, DATALOADER_ENABLE_LOGGING,
            DATALOADER_LOG_LEVEL, DATALOADER_LOG_FILE

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        load_dotenv(env_file)

        values = {}

        timeout = _getenv("REMOTE_TIMEOUT")
        if timeout is not None:
            values["remote_timeout"] = timeout

        enable_logging = _getenv("ENABLE_LOGGING")
        if enable_logging is not None:
            values["enable_logging"] = enable_logging

        log_level = _getenv("LOG_LEVEL")
        if log_level is not None:
            values["log_level"] = log_level

        log_file = _getenv("LOG_FILE")
        if log_file is not None:
            values["log_file"] = log_file

        config = cls(**values)
        logger.debug(f"Loaded config from environment: {config.model_dump()}")
        return config


def _getenv(name: str) -> Optional[str]:
    value = os.getenv(f"{ENV_PREFIX}{name}")
    if value is None or not value.strip():
        return None
    return value.strip()


# Presets
DEFAULT_CONFIG = LoaderConfig()
FAST_CONFIG = LoaderConfig(remote_timeout=3.0)
ROBUST_CONFIG = LoaderConfig(remote_timeout=30.0)
