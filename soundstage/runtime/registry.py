"""
Source Registry — Live sources, listener and scene settings.

The registry owns the current set of sources (keyed by id), the listener,
the walls and the calculation options. Every mutation is followed by an
explicit recompute of the affected active sources, and the results are
pushed to the audio output.

Rules:
- Source moves recompute that source only
- Listener, wall and option changes recompute every active source
- Unknown ids are silent no-ops
- Output failures surface as OutputUnavailableError
- Events go to the injected StructuredLogger, else to the one set up by
  configure_logging(), else to the module logger

The registry is not internally synchronized. Hosts that touch it from more
than one thread must serialize access themselves.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable, Sequence

from soundstage.config import AudioParameterOptions
from soundstage.monitoring.logging import StructuredLogger, configured_logger
from soundstage.runtime.errors import OutputUnavailableError
from soundstage.runtime.output import (
    AudioOutput,
    NullAudioOutput,
    OutputHandle,
    SourceDescriptor,
)
from soundstage.spatial.directivity import DirectivityPattern
from soundstage.spatial.distance import DistanceModel
from soundstage.spatial.geometry import Position, Wall, normalize_angle
from soundstage.spatial.hearing import Listener
from soundstage.spatial.parameters import AudioParameters, SourceConfig, compute_parameters
from soundstage.spatial.rooms import Room, all_walls, effective_transmission

logger = logging.getLogger(__name__)


class SourceRegistry:
    """
    Registry of sources driving an audio output.

    Example:
        registry = SourceRegistry(output=my_output)
        registry.upsert_source(SourceConfig(id="a", position=Position(2, 0), playing=True))

        registry.set_listener_facing(math.pi / 2)   # recomputes every active source
        registry.set_source_position("a", Position(1, 1))

        params = registry.get_parameters("a")
        print(params.volume, params.pan, params.describe())
    """

    def __init__(
        self,
        output: AudioOutput | None = None,
        options: AudioParameterOptions | None = None,
        listener: Listener | None = None,
        walls: Sequence[Wall] = (),
        structured_logger: StructuredLogger | None = None,
    ):
        self._output: AudioOutput = output or NullAudioOutput()
        self._options = options or AudioParameterOptions()
        self._listener = (listener or Listener()).normalized()
        self._walls: tuple[Wall, ...] = tuple(walls)
        self._rooms: tuple[Room, ...] = ()
        self._sources: dict[str, SourceConfig] = {}
        self._handles: dict[str, OutputHandle] = {}
        self._structured_logger = structured_logger

    # =========================================================================
    # State access
    # =========================================================================

    @property
    def output(self) -> AudioOutput:
        return self._output

    @property
    def listener(self) -> Listener:
        return self._listener

    @property
    def walls(self) -> tuple[Wall, ...]:
        return self._walls

    @property
    def rooms(self) -> tuple[Room, ...]:
        return self._rooms

    @property
    def options(self) -> AudioParameterOptions:
        return self._options

    @property
    def source_ids(self) -> list[str]:
        """Ids of every registered source, in insertion order."""
        return list(self._sources)

    @property
    def active_ids(self) -> frozenset[str]:
        """Ids of the sources currently playing on the output."""
        return frozenset(self._handles)

    def has_source(self, source_id: str) -> bool:
        return source_id in self._sources

    def is_active(self, source_id: str) -> bool:
        return source_id in self._handles

    def get_source(self, source_id: str) -> SourceConfig | None:
        """Get a copy of a source's configuration."""
        source = self._sources.get(source_id)
        return replace(source) if source is not None else None

    def __len__(self) -> int:
        return len(self._sources)

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._sources

    # =========================================================================
    # Sources
    # =========================================================================

    def upsert_source(self, config: SourceConfig) -> None:
        """
        Insert or replace a source by id.

        A playing config starts (or restarts) the source on the output;
        otherwise the source is stopped.

        Raises:
            OutputUnavailableError: The output could not start the source.
        """
        self._sources[config.id] = replace(config)
        if config.playing:
            self._start(config.id)
        else:
            self._stop(config.id)

    def remove_source(self, source_id: str) -> None:
        """Stop (if active) and forget a source."""
        if source_id not in self._sources:
            return
        self._stop(source_id)
        del self._sources[source_id]

    def set_source_position(self, source_id: str, position: Position) -> None:
        self._update_source(source_id, position=position)

    def set_source_facing(self, source_id: str, facing: float) -> None:
        self._update_source(source_id, facing=normalize_angle(facing))

    def set_source_volume(self, source_id: str, volume: float) -> None:
        self._update_source(source_id, volume=max(0.0, min(1.0, volume)))

    def set_source_directivity(self, source_id: str, pattern: DirectivityPattern | str) -> None:
        self._update_source(source_id, directivity=DirectivityPattern.coerce(pattern))

    def set_source_frequency(self, source_id: str, hz: float) -> None:
        source = self._sources.get(source_id)
        if source is None:
            return
        source.frequency = hz
        handle = self._handles.get(source_id)
        if handle is not None:
            self._output.set_frequency(handle, hz)

    def _update_source(self, source_id: str, **changes: Any) -> None:
        source = self._sources.get(source_id)
        if source is None:
            logger.debug("ignoring update for unknown source %s", source_id)
            return
        for name, value in changes.items():
            setattr(source, name, value)
        if source_id in self._handles:
            self.recompute_active([source_id])

    # =========================================================================
    # Playback
    # =========================================================================

    def start(self, source_id: str) -> bool:
        """
        Start a source. Returns False for unknown ids.

        Raises:
            OutputUnavailableError: The output could not start the source.
        """
        if source_id not in self._sources:
            return False
        self._start(source_id)
        return True

    def stop(self, source_id: str) -> bool:
        """Stop a source. Returns True if it was active."""
        was_active = source_id in self._handles
        self._stop(source_id)
        return was_active

    def toggle(self, source_id: str) -> bool:
        """
        Flip a source between playing and stopped.

        Returns:
            The new active state; False for unknown ids.
        """
        if source_id not in self._sources:
            return False
        if source_id in self._handles:
            self._stop(source_id)
            return False
        self._start(source_id)
        return True

    def stop_all(self) -> None:
        for source_id in list(self._handles):
            self._stop(source_id)

    def dispose(self) -> None:
        """Stop everything and forget all sources."""
        self.stop_all()
        self._sources.clear()

    def _start(self, source_id: str) -> None:
        source = self._sources[source_id]

        # Restart so frequency/waveform changes reach the output
        if source_id in self._handles:
            self._stop(source_id)

        params = self._compute(source)
        descriptor = SourceDescriptor(
            source_id=source_id,
            frequency=source.frequency,
            waveform=source.waveform,
            volume=params.volume,
            pan=params.pan,
        )

        try:
            handle = self._output.start(source_id, descriptor)
        except OutputUnavailableError as e:
            source.playing = False
            if e.source_id is None:
                e.source_id = source_id
            self._event("output_unavailable", logging.ERROR, error=e, source_id=source_id)
            raise

        self._handles[source_id] = handle
        source.playing = True
        self._event("source_started", logging.INFO, source_id=source_id, volume=params.volume, pan=params.pan)

    def _stop(self, source_id: str) -> None:
        handle = self._handles.pop(source_id, None)
        source = self._sources.get(source_id)
        if source is not None:
            source.playing = False
        if handle is None:
            return
        self._output.stop(handle)
        self._event("source_stopped", logging.INFO, source_id=source_id)

    @property
    def _log(self) -> StructuredLogger | None:
        """Injected logger, else the one from configure_logging(), looked up per event."""
        return self._structured_logger or configured_logger()

    def _event(self, name: str, level: int, **fields: Any) -> None:
        log = self._log
        if log is None:
            logger.log(level, "%s %s", name, fields)
            return
        getattr(log, name)(**fields)

    # =========================================================================
    # Listener
    # =========================================================================

    def set_listener(self, listener: Listener) -> None:
        self._listener = listener.normalized()
        self.recompute_active()

    def set_listener_position(self, position: Position) -> None:
        self._listener = self._listener.moved_to(position)
        self.recompute_active()

    def set_listener_facing(self, facing: float) -> None:
        self._listener = self._listener.turned_to(facing)
        self.recompute_active()

    # =========================================================================
    # Scene settings
    # =========================================================================

    def set_walls(self, walls: Iterable[Wall]) -> None:
        """Replace the walls. Clears any rooms set with set_rooms()."""
        self._walls = tuple(walls)
        self._rooms = ()
        self.recompute_active()

    def set_rooms(self, rooms: Iterable[Room]) -> None:
        """
        Use rooms as the scene geometry.

        The walls become every room's walls, and each source's per-wall
        factor comes from the most blocking room around it or the listener.
        """
        self._rooms = tuple(rooms)
        self._walls = tuple(all_walls(self._rooms))
        self.recompute_active()

    def set_distance_model(self, model: DistanceModel | str) -> None:
        self._options = self._options.with_updates(distance_model=DistanceModel.coerce(model))
        self.recompute_active()

    def set_master_volume(self, volume: float) -> None:
        self._options = self._options.with_updates(master_volume=max(0.0, min(1.0, volume)))
        self.recompute_active()

    def set_options(self, options: AudioParameterOptions) -> None:
        self._options = options
        self.recompute_active()

    def update_options(self, **changes: Any) -> None:
        """Change some options (validated) and recompute."""
        self.set_options(self._options.with_updates(**changes))

    # =========================================================================
    # Parameters
    # =========================================================================

    def _options_for(self, source: SourceConfig) -> AudioParameterOptions:
        if not self._rooms:
            return self._options
        transmission = effective_transmission(self._rooms, source.position, self._listener.position)
        return self._options.with_updates(attenuation_per_wall=transmission)

    def _compute(self, source: SourceConfig) -> AudioParameters:
        return compute_parameters(source, self._listener, self._walls, self._options_for(source))

    def get_parameters(self, source_id: str) -> AudioParameters | None:
        """
        Current parameters for a source, active or not.

        Has no side effects; returns None for unknown ids.
        """
        source = self._sources.get(source_id)
        if source is None:
            return None
        return self._compute(source)

    def recompute_active(self, source_ids: Iterable[str] | None = None) -> dict[str, AudioParameters]:
        """
        Recompute and push parameters for active sources.

        Args:
            source_ids: Sources to recompute (default: every active source).
                Inactive or unknown ids are skipped.

        Returns:
            Parameters pushed to the output, by source id.
        """
        ids = list(self._handles) if source_ids is None else list(source_ids)
        pushed: dict[str, AudioParameters] = {}

        for source_id in ids:
            handle = self._handles.get(source_id)
            source = self._sources.get(source_id)
            if handle is None or source is None:
                continue

            params = self._compute(source)
            self._output.set_gain(handle, params.volume)
            self._output.set_pan(handle, params.pan)
            self._event(
                "parameters_pushed",
                logging.DEBUG,
                source_id=source_id,
                volume=params.volume,
                pan=params.pan,
                wall_count=params.wall_count,
            )
            pushed[source_id] = params

        return pushed
