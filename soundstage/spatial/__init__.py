"""
soundstage - Spatial Module

2D positional audio math.

Components:
    geometry     - Positions, walls, distances, angles, segment crossing
    directivity  - Source radiation patterns
    distance     - Distance attenuation curves
    hearing      - Listener pose and directional hearing
    occlusion    - Wall counting and attenuation, materials
    panning      - Listener-relative stereo pan
    rooms        - Rectangular rooms and their walls
    parameters   - compute_parameters(), the single aggregation point

Usage:
    from soundstage.spatial import Position, SourceConfig, compute_parameters, create_listener

    params = compute_parameters(
        SourceConfig(id="a", position=Position(2, 0)),
        create_listener(Position(0, 0)),
    )
"""

from soundstage.spatial.geometry import (
    Position,
    Wall,
    distance,
    angle_to,
    normalize_angle,
    segments_intersect,
    segments_intersect_many,
    wall_array,
)

from soundstage.spatial.directivity import (
    DirectivityPattern,
    directivity_gain,
)

from soundstage.spatial.distance import (
    DistanceModel,
    distance_attenuation,
    taper,
)

from soundstage.spatial.hearing import (
    Listener,
    create_listener,
    listener_gain,
)

from soundstage.spatial.occlusion import (
    Material,
    MATERIALS,
    occluding_walls,
    walls_between,
    wall_attenuation,
    path_attenuation,
)

from soundstage.spatial.panning import stereo_pan

from soundstage.spatial.rooms import (
    Bounds,
    Room,
    walls_from_bounds,
    room_from_corners,
    is_valid_room_size,
    all_walls,
    effective_attenuation,
    effective_transmission,
)

from soundstage.spatial.parameters import (
    AudioParameters,
    SourceConfig,
    Waveform,
    compute_parameters,
    create_source_config,
    source_directional_gain,
)

__all__ = [
    # Geometry
    "Position",
    "Wall",
    "distance",
    "angle_to",
    "normalize_angle",
    "segments_intersect",
    "segments_intersect_many",
    "wall_array",
    # Directivity
    "DirectivityPattern",
    "directivity_gain",
    # Distance
    "DistanceModel",
    "distance_attenuation",
    "taper",
    # Hearing
    "Listener",
    "create_listener",
    "listener_gain",
    # Occlusion
    "Material",
    "MATERIALS",
    "occluding_walls",
    "walls_between",
    "wall_attenuation",
    "path_attenuation",
    # Panning
    "stereo_pan",
    # Rooms
    "Bounds",
    "Room",
    "walls_from_bounds",
    "room_from_corners",
    "is_valid_room_size",
    "all_walls",
    "effective_attenuation",
    "effective_transmission",
    # Parameters
    "AudioParameters",
    "SourceConfig",
    "Waveform",
    "compute_parameters",
    "create_source_config",
    "source_directional_gain",
]
