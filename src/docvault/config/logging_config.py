"""Centralized logging configuration for docvault.

Provides consistent, configurable logging with environment-based control
over verbosity and log levels. The library never configures logging on
import; applications call setup_logging() once at startup.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict


class LogLevel(str, Enum):
    """Root log levels accepted in LOG_LEVEL."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    """How chatty the repositories are allowed to be."""
    QUIET = "QUIET"      # Only errors and critical
    NORMAL = "NORMAL"    # Info level logging
    VERBOSE = "VERBOSE"  # Info level plus repository chatter
    DEBUG = "DEBUG"      # Full debug logging


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


FORMATS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


def get_log_level_from_verbosity(verbosity: str, default: str = LogLevel.INFO.value) -> str:
    """Resolve the effective root level; unknown verbosities keep ``default``."""
    verbosity_map = {
        LogVerbosity.QUIET: LogLevel.ERROR.value,
        LogVerbosity.NORMAL: default,
        LogVerbosity.VERBOSE: LogLevel.INFO.value,
        LogVerbosity.DEBUG: LogLevel.DEBUG.value,
    }
    try:
        return verbosity_map[LogVerbosity(verbosity.upper())]
    except ValueError:
        return default


class LoggingConfig:
    """Builds and applies the dictConfig used by docvault applications."""

    # Modules that stay at WARNING unless running in DEBUG
    DEFAULT_QUIET_MODULES = [
        "docvault.features.documents.repositories",
        "docvault.features.permissions.repositories",
        "docvault.features.users.repositories",
    ]

    @classmethod
    def build_config(
        cls,
        log_level: str = "INFO",
        log_verbosity: str = "NORMAL",
        log_format: str = "simple",
        enable_sql_logging: bool = False
    ) -> Dict[str, Any]:
        """Build a dictConfig mapping for the given options."""
        effective_log_level = get_log_level_from_verbosity(log_verbosity, log_level.upper())
        try:
            format_string = FORMATS[LogFormat(log_format.lower())]
        except ValueError:
            format_string = FORMATS[LogFormat.SIMPLE]

        logging_config: Dict[str, Any] = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": format_string,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": effective_log_level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {
                "level": effective_log_level,
                "handlers": ["console"],
            },
            "loggers": {},
        }

        if log_verbosity.upper() != LogVerbosity.VERBOSE.value:
            for module in cls.DEFAULT_QUIET_MODULES:
                logging_config["loggers"][module] = {
                    "level": "WARNING" if effective_log_level != "DEBUG" else "DEBUG",
                    "handlers": ["console"],
                    "propagate": False,
                }

        if not enable_sql_logging:
            logging_config["loggers"]["asyncpg"] = {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False,
            }

        return logging_config

    @classmethod
    def configure(cls) -> None:
        """Apply the config described by LOG_LEVEL, LOG_VERBOSITY, LOG_FORMAT and ENABLE_SQL_LOGGING."""
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        log_verbosity = os.getenv("LOG_VERBOSITY", "NORMAL").upper()
        log_format = os.getenv("LOG_FORMAT", "simple")
        enable_sql_logging = os.getenv("ENABLE_SQL_LOGGING", "false").lower() == "true"

        config = cls.build_config(log_level, log_verbosity, log_format, enable_sql_logging)
        logging.config.dictConfig(config)

        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured: level={config['root']['level']}, format={log_format}")

    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        """Set log level for a specific module."""
        logging.getLogger(module_name).setLevel(getattr(logging, level.upper()))


def setup_logging() -> None:
    """Configure logging for an application embedding docvault.

    Call once at application startup.
    """
    LoggingConfig.configure()


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(name)
