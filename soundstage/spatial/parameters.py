"""
Audio Parameters - Combine every spatial factor into one result.

compute_parameters() is the single aggregation point: distance falloff,
source directivity, listener hearing, wall occlusion and pan for one
(source, listener, walls) query. It is a pure function; the same inputs
always produce the same AudioParameters.
"""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Iterable

from soundstage.config import AudioParameterOptions
from soundstage.spatial.directivity import DirectivityPattern, directivity_gain
from soundstage.spatial.distance import distance_attenuation
from soundstage.spatial.geometry import Position, Wall, angle_to, distance, normalize_angle
from soundstage.spatial.hearing import Listener, listener_gain
from soundstage.spatial.occlusion import path_attenuation
from soundstage.spatial.panning import stereo_pan


class Waveform(str, Enum):
    """Oscillator waveform for a source."""
    SINE = "sine"
    SQUARE = "square"
    SAWTOOTH = "sawtooth"
    TRIANGLE = "triangle"


@dataclass
class SourceConfig:
    """
    A sound source (speaker) in the scene.

    Identity is the id; every other field belongs to the caller and may
    change freely.
    """

    id: str
    position: Position = field(default_factory=Position)
    facing: float = 0.0
    directivity: DirectivityPattern = DirectivityPattern.CARDIOID
    volume: float = 1.0
    frequency: float = 440.0
    waveform: Waveform = Waveform.SINE
    playing: bool = False

    def __post_init__(self):
        self.directivity = DirectivityPattern.coerce(self.directivity)
        self.waveform = Waveform(self.waveform)


def create_source_config(source_id: str | None = None, **options: Any) -> SourceConfig:
    """
    Create a source with defaults (cardioid, 440 Hz sine, not playing).

    Args:
        source_id: Identifier (generated when omitted)
        **options: Field overrides
    """
    source_id = source_id or f"source-{uuid.uuid4().hex[:8]}"
    return SourceConfig(id=source_id, **options)


@dataclass(frozen=True)
class AudioParameters:
    """Computed rendering parameters for one source.

    Attributes:
        volume: Final gain, 0-1.
        pan: Stereo pan, -1 (left) to 1 (right).
        distance: Source-listener distance.
        directional_gain: Source directivity times listener hearing, 0-1.
        wall_attenuation: Combined wall occlusion, 0-1.
        wall_count: Number of walls on the direct path.
        distance_attenuation: Distance curve output, 0-1.
    """

    volume: float
    pan: float
    distance: float
    directional_gain: float
    wall_attenuation: float
    wall_count: int
    distance_attenuation: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    def describe(self) -> str:
        """Short occlusion summary, e.g. "2 walls, 9% through"."""
        if self.wall_count == 0:
            return "clear path"
        noun = "wall" if self.wall_count == 1 else "walls"
        return f"{self.wall_count} {noun}, {self.wall_attenuation * 100:.0f}% through"


def source_directional_gain(source: SourceConfig, listener_pos: Position) -> float:
    """Directivity gain of a source toward a listener position."""
    angle_diff = normalize_angle(angle_to(source.position, listener_pos) - source.facing)
    return directivity_gain(source.directivity, angle_diff)


def compute_parameters(
    source: SourceConfig,
    listener: Listener,
    walls: Iterable[Wall] = (),
    options: AudioParameterOptions | None = None,
) -> AudioParameters:
    """
    Calculate all audio parameters for a source-listener pair.

    Args:
        source: Sound source configuration
        listener: Listener pose
        walls: Walls for occlusion
        options: Calculation options (defaults when omitted)

    Returns:
        AudioParameters with the final volume and every factor behind it
    """
    options = options or AudioParameterOptions()

    dist = distance(source.position, listener.position)
    dist_atten = distance_attenuation(
        dist,
        options.distance_model,
        options.ref_distance,
        options.max_distance,
        options.rolloff,
    )

    source_gain = source_directional_gain(source, listener.position)
    hearing_gain = listener_gain(listener, source.position, options.rear_gain_floor)
    directional = source_gain * hearing_gain

    wall_count, wall_atten = path_attenuation(
        source.position,
        listener.position,
        walls,
        options.attenuation_per_wall,
    )

    pan = stereo_pan(listener, source.position, options.pan_width)

    volume = source.volume * dist_atten * directional * wall_atten * options.master_volume
    volume = max(0.0, min(1.0, volume))

    return AudioParameters(
        volume=volume,
        pan=pan,
        distance=dist,
        directional_gain=directional,
        wall_attenuation=wall_atten,
        wall_count=wall_count,
        distance_attenuation=dist_atten,
    )
