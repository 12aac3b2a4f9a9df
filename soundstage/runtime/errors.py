"""
Runtime Errors — Domain-specific error types.

Error hierarchy:
    SoundstageError (base)
    └── OutputUnavailableError
"""

from __future__ import annotations

from typing import Any


class SoundstageError(Exception):
    """Base error for all soundstage errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class OutputUnavailableError(SoundstageError):
    """
    Raised when the audio output cannot play a source.

    Examples:
    - No output device
    - Device lost while a source was starting
    """

    def __init__(
        self,
        reason: str,
        source_id: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(f"Audio output unavailable: {reason}", details)
        self.reason = reason
        self.source_id = source_id
