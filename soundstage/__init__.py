"""
soundstage - 2D positional audio parameters.

Computes per-source volume, stereo pan and the factors behind them
(distance falloff, source directivity, listener hearing, wall occlusion)
for a listener and speakers in a plane divided by walls.

Architecture:
    geometry → {directivity, distance, hearing, occlusion, panning}
             → compute_parameters → SourceRegistry → AudioOutput

Public API (stable):
    compute_parameters   - Pure per-source calculation
    SourceRegistry       - Stateful engine driving an AudioOutput
    AudioParameterOptions- Settings surface
    Position, Wall, Listener, SourceConfig - Scene values

Example:
    from soundstage import Position, SourceConfig, SourceRegistry

    registry = SourceRegistry()
    registry.upsert_source(SourceConfig(id="a", position=Position(2, 0), playing=True))
    registry.set_listener_facing(3.14159)
    print(registry.get_parameters("a"))
"""

__version__ = "0.4.0"

from soundstage.spatial import (
    Position,
    Wall,
    Listener,
    Material,
    MATERIALS,
    Room,
    Bounds,
    DirectivityPattern,
    DistanceModel,
    Waveform,
    SourceConfig,
    AudioParameters,
    compute_parameters,
    create_listener,
    create_source_config,
    room_from_corners,
    walls_from_bounds,
)
from soundstage.config import AudioParameterOptions
from soundstage.runtime import (
    SourceRegistry,
    AudioOutput,
    NullAudioOutput,
    OutputHandle,
    SourceDescriptor,
    SoundstageError,
    OutputUnavailableError,
)

__all__ = [
    "__version__",
    # Scene values
    "Position",
    "Wall",
    "Listener",
    "Material",
    "MATERIALS",
    "Room",
    "Bounds",
    "DirectivityPattern",
    "DistanceModel",
    "Waveform",
    "SourceConfig",
    "AudioParameters",
    # Calculation
    "compute_parameters",
    "create_listener",
    "create_source_config",
    "room_from_corners",
    "walls_from_bounds",
    "AudioParameterOptions",
    # Runtime
    "SourceRegistry",
    "AudioOutput",
    "NullAudioOutput",
    "OutputHandle",
    "SourceDescriptor",
    "SoundstageError",
    "OutputUnavailableError",
]
