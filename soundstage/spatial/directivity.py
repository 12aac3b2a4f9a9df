"""
Directivity - How loud a source is toward the listener.

Every pattern maps the angle between the source's facing and the
direction to the listener onto a gain in [0, 1]. All patterns peak
at 1.0 when the source faces the listener.
"""

from __future__ import annotations

import math
from enum import Enum


class DirectivityPattern(str, Enum):
    """Source radiation patterns."""
    OMNIDIRECTIONAL = "omnidirectional"  # Equal in all directions
    CARDIOID = "cardioid"                # Heart-shaped, silent behind
    SUPERCARDIOID = "supercardioid"      # Tighter front lobe, small rear lobe
    HYPERCARDIOID = "hypercardioid"      # Tighter still
    FIGURE8 = "figure8"                  # Front and back, silent at the sides
    HEMISPHERE = "hemisphere"            # Front half only

    @classmethod
    def coerce(cls, value: DirectivityPattern | str) -> DirectivityPattern:
        """Accept a member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown directivity pattern {value!r}. Expected one of: {valid}") from None


def directivity_gain(pattern: DirectivityPattern | str, angle_diff: float) -> float:
    """
    Calculate directivity gain for a pattern.

    Args:
        pattern: Directivity pattern
        angle_diff: Angle between the source's facing and the direction
            from source to listener (radians, normalized)

    Returns:
        Gain multiplier in [0, 1]
    """
    pattern = DirectivityPattern.coerce(pattern)
    cos = math.cos(angle_diff)

    if pattern is DirectivityPattern.OMNIDIRECTIONAL:
        gain = 1.0
    elif pattern is DirectivityPattern.CARDIOID:
        gain = 0.5 + 0.5 * cos
    elif pattern is DirectivityPattern.SUPERCARDIOID:
        # Rear lobe dips to -0.26 at 180 degrees; clamp keeps it a gain
        gain = 0.37 + 0.63 * cos
    elif pattern is DirectivityPattern.HYPERCARDIOID:
        gain = 0.25 + 0.75 * cos
    elif pattern is DirectivityPattern.FIGURE8:
        gain = abs(cos)
    else:  # hemisphere
        gain = cos

    return max(0.0, min(1.0, gain))
