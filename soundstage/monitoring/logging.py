"""
Structured logging for soundstage.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, TextIO


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def numeric(self) -> int:
        """Get numeric log level."""
        return {
            "debug": logging.DEBUG,
            "info": logging.INFO,
            "warning": logging.WARNING,
            "error": logging.ERROR,
            "critical": logging.CRITICAL,
        }[self.value]


@dataclass
class LogRecord:
    """A structured log record.

    Attributes:
        level: Log level.
        event: Event name/type.
        message: Human-readable message.
        timestamp: Unix timestamp.
        data: Additional structured data.
    """

    level: str
    event: str
    message: str = ""
    timestamp: float = field(default_factory=time.time)
    data: dict[str, Any] = field(default_factory=dict)

    logger_name: str = ""
    thread_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        d = asdict(self)
        d.update(d.pop("data", {}))
        return d

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), default=str)


class StructuredLogger:
    """Structured logging with JSON output.

    Example:
        logger = StructuredLogger("soundstage")

        logger.source_started("speaker-1", volume=0.42, pan=-0.3)
        # {"level": "info", "event": "source_started",
        #  "source_id": "speaker-1", "volume": 0.42, "pan": -0.3, ...}

        scene_logger = logger.bind(scene="lobby")
        scene_logger.info("walls_changed", wall_count=12)
    """

    def __init__(
        self,
        name: str = "soundstage",
        level: LogLevel = LogLevel.INFO,
        output: TextIO | None = None,
        json_format: bool = True,
    ):
        """Initialize the logger.

        Args:
            name: Logger name.
            level: Minimum log level.
            output: Output stream (default: stderr).
            json_format: Output as JSON (vs. human-readable).
        """
        self.name = name
        self._level = level
        self._output = output
        self._json_format = json_format
        self._context: dict[str, Any] = {}
        self._lock = threading.Lock()

    @property
    def level(self) -> LogLevel:
        return self._level

    def bind(self, **context: Any) -> StructuredLogger:
        """Create a new logger with bound context.

        Args:
            **context: Context to bind to all log records.

        Returns:
            New logger with bound context.
        """
        new_logger = StructuredLogger(
            name=self.name,
            level=self._level,
            output=self._output,
            json_format=self._json_format,
        )
        new_logger._context = {**self._context, **context}
        return new_logger

    def _log(self, level: LogLevel, event: str, message: str = "", **data: Any) -> None:
        if level.numeric < self._level.numeric:
            return

        record = LogRecord(
            level=level.value,
            event=event,
            message=message,
            data={**self._context, **data},
            logger_name=self.name,
            thread_name=threading.current_thread().name,
        )
        self._emit(record)

    def _emit(self, record: LogRecord) -> None:
        with self._lock:
            if self._json_format:
                line = record.to_json()
            else:
                line = self._format_human(record)
            # Resolved per call so stream redirection (e.g. pytest capsys) is honored
            print(line, file=self._output or sys.stderr)

    def _format_human(self, record: LogRecord) -> str:
        """Format record for human reading."""
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(record.timestamp))

        parts = [
            f"[{timestamp}]",
            f"[{record.level.upper()}]",
            f"[{record.event}]",
        ]
        if record.message:
            parts.append(record.message)
        if record.data:
            data_str = " ".join(f"{k}={v}" for k, v in record.data.items())
            parts.append(f"({data_str})")

        return " ".join(parts)

    def debug(self, event: str, message: str = "", **data: Any) -> None:
        """Log at DEBUG level."""
        self._log(LogLevel.DEBUG, event, message, **data)

    def info(self, event: str, message: str = "", **data: Any) -> None:
        """Log at INFO level."""
        self._log(LogLevel.INFO, event, message, **data)

    def warning(self, event: str, message: str = "", **data: Any) -> None:
        """Log at WARNING level."""
        self._log(LogLevel.WARNING, event, message, **data)

    def error(self, event: str, message: str = "", **data: Any) -> None:
        """Log at ERROR level."""
        self._log(LogLevel.ERROR, event, message, **data)

    def critical(self, event: str, message: str = "", **data: Any) -> None:
        """Log at CRITICAL level."""
        self._log(LogLevel.CRITICAL, event, message, **data)

    # Convenience methods for common events

    def source_started(self, source_id: str, volume: float = 0.0, pan: float = 0.0, **extra: Any) -> None:
        """Log a source starting on the output."""
        self.info(
            "source_started",
            f"Started {source_id}",
            source_id=source_id,
            volume=round(volume, 4),
            pan=round(pan, 4),
            **extra,
        )

    def source_stopped(self, source_id: str, **extra: Any) -> None:
        """Log a source stopping."""
        self.info("source_stopped", f"Stopped {source_id}", source_id=source_id, **extra)

    def parameters_pushed(self, source_id: str, volume: float, pan: float, wall_count: int = 0, **extra: Any) -> None:
        """Log recomputed parameters sent to the output."""
        self.debug(
            "parameters_pushed",
            source_id=source_id,
            volume=round(volume, 4),
            pan=round(pan, 4),
            wall_count=wall_count,
            **extra,
        )

    def output_unavailable(self, error: Exception, source_id: str | None = None, **extra: Any) -> None:
        """Log an output failure."""
        self.error(
            "output_unavailable",
            str(error),
            source_id=source_id,
            error_type=type(error).__name__,
            **extra,
        )


# Global logger instance
_global_logger: StructuredLogger | None = None


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    output: TextIO | None = None,
    json_format: bool = True,
) -> StructuredLogger:
    """Configure global logging.

    Args:
        level: Log level.
        output: Output stream.
        json_format: Use JSON format.

    Returns:
        Configured logger.
    """
    global _global_logger

    if isinstance(level, str):
        level = LogLevel(level.lower())

    _global_logger = StructuredLogger(
        name="soundstage",
        level=level,
        output=output,
        json_format=json_format,
    )
    return _global_logger


def get_logger(name: str = "soundstage") -> StructuredLogger:
    """Get the global logger, creating a default one on first use."""
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name)

    return _global_logger


def configured_logger() -> StructuredLogger | None:
    """The global logger if one has been configured or created, else None."""
    return _global_logger
