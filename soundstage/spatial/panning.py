"""
Stereo Panning - Listener-relative left/right placement.

Pan follows the lateral component of the source's bearing relative to
where the listener faces, scaled down for sources close to the listener
so nearly co-located sources do not hard-pan.
"""

from __future__ import annotations

import math

from soundstage.spatial.geometry import Position, distance
from soundstage.spatial.hearing import Listener

# Lateral gain applied before clamping
PAN_SCALE = 1.5


def stereo_pan(listener: Listener, source_pos: Position, pan_width: float = 3.0) -> float:
    """
    Calculate stereo pan for a source.

    Args:
        listener: Listener pose
        source_pos: Sound source position
        pan_width: Distance at which panning reaches full strength

    Returns:
        Pan in [-1, 1] (-1 = full left, 1 = full right)
    """
    lateral = math.sin(listener.relative_angle(source_pos))
    distance_factor = min(1.0, distance(listener.position, source_pos) / pan_width)
    return max(-1.0, min(1.0, lateral * distance_factor * PAN_SCALE))
