"""Configuration: settings and logging."""

from .logging_config import (
    LogFormat,
    LogLevel,
    LogVerbosity,
    LoggingConfig,
    setup_logging,
    get_logger,
)
from .settings import DocVaultSettings, get_settings, MAX_FILE_SIZE_BYTES

__all__ = [
    "LogFormat",
    "LogLevel",
    "LogVerbosity",
    "LoggingConfig",
    "setup_logging",
    "get_logger",
    "DocVaultSettings",
    "get_settings",
    "MAX_FILE_SIZE_BYTES",
]
