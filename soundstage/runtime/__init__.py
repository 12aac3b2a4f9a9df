"""
soundstage - Runtime Module

Stateful side of the engine: the source registry and the audio output
port it drives.

Components:
    SourceRegistry   - Live sources, listener, walls and options
    AudioOutput      - Output port protocol
    NullAudioOutput  - Headless output
"""

from soundstage.runtime.errors import (
    SoundstageError,
    OutputUnavailableError,
)

from soundstage.runtime.output import (
    AudioOutput,
    NullAudioOutput,
    OutputHandle,
    SourceDescriptor,
)

from soundstage.runtime.registry import SourceRegistry

__all__ = [
    # Errors
    "SoundstageError",
    "OutputUnavailableError",
    # Output
    "AudioOutput",
    "NullAudioOutput",
    "OutputHandle",
    "SourceDescriptor",
    # Registry
    "SourceRegistry",
]
