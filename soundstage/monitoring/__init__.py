"""
Monitoring for soundstage.

Components:
    StructuredLogger - JSON structured logging

Example:
    from soundstage.monitoring import configure_logging

    configure_logging(level="debug", json_format=False)
"""

from soundstage.monitoring.logging import (
    StructuredLogger,
    LogLevel,
    LogRecord,
    configure_logging,
    get_logger,
    configured_logger,
)

__all__ = [
    "StructuredLogger",
    "LogLevel",
    "LogRecord",
    "configure_logging",
    "get_logger",
    "configured_logger",
]
