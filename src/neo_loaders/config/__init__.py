"""Configuration helpers for neo-loaders."""

from .logging_config import (
    LogLevel,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
    setup_logging,
    get_logger,
)

__all__ = [
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
    "setup_logging",
    "get_logger",
]
