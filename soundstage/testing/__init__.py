"""
soundstage - Testing Utilities

Usage:
    from soundstage.testing import MockAudioOutput

    output = MockAudioOutput()
    registry = SourceRegistry(output=output)
"""

from soundstage.testing.mock import (
    MockAudioOutput,
    CallRecord,
    VoiceState,
)

__all__ = [
    "MockAudioOutput",
    "CallRecord",
    "VoiceState",
]
