"""
Audio Output - The port the registry drives.

OUTPUT CONTRACT:
    Outputs MUST:
        - Return a handle from start() that later calls refer to
        - Treat every call as fire-and-forget (no return values besides
          the start handle, no callbacks into the registry)
        - Own smoothing of gain/pan changes (ramps of ~20-50ms)
        - Raise OutputUnavailableError when a source cannot be played

    Outputs MUST NOT:
        - Compute spatial parameters
        - Mutate source configurations
        - Assume ordering beyond "start before a later stop for the same id"
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from soundstage.spatial.parameters import Waveform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceDescriptor:
    """What an output needs to start rendering a source."""

    source_id: str
    frequency: float
    waveform: Waveform = Waveform.SINE
    volume: float = 0.0
    pan: float = 0.0


@dataclass(frozen=True)
class OutputHandle:
    """Opaque reference to a started source."""

    source_id: str
    token: int


@runtime_checkable
class AudioOutput(Protocol):
    """Protocol for platform audio outputs."""

    def start(self, source_id: str, descriptor: SourceDescriptor) -> OutputHandle:
        """Start rendering a source. Raises OutputUnavailableError on failure."""
        ...

    def stop(self, handle: OutputHandle) -> None:
        """Stop a started source."""
        ...

    def set_gain(self, handle: OutputHandle, volume: float) -> None:
        """Set the source's gain (0-1)."""
        ...

    def set_pan(self, handle: OutputHandle, pan: float) -> None:
        """Set the source's stereo pan (-1 to 1)."""
        ...

    def set_frequency(self, handle: OutputHandle, hz: float) -> None:
        """Set an oscillator source's frequency."""
        ...


class NullAudioOutput:
    """Output that renders nothing.

    Lets a registry run headless (simulation, previews, tests).
    """

    def __init__(self):
        self._tokens = itertools.count(1)

    def start(self, source_id: str, descriptor: SourceDescriptor) -> OutputHandle:
        handle = OutputHandle(source_id=source_id, token=next(self._tokens))
        logger.debug("null output start %s", source_id)
        return handle

    def stop(self, handle: OutputHandle) -> None:
        logger.debug("null output stop %s", handle.source_id)

    def set_gain(self, handle: OutputHandle, volume: float) -> None:
        pass

    def set_pan(self, handle: OutputHandle, pan: float) -> None:
        pass

    def set_frequency(self, handle: OutputHandle, hz: float) -> None:
        pass
