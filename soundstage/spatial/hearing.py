"""
Listener Hearing - Listener pose and directional hearing.

Sounds in front of the listener are heard at full gain; sounds behind
are quieter but never silent unless the floor is set to zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

from soundstage.spatial.geometry import Position, angle_to, normalize_angle


@dataclass(frozen=True)
class Listener:
    """
    Position and facing of the listener.

    facing is in radians (0 = +x). ear_separation is carried for hosts
    that want it; the pan model uses a fixed width instead.
    """

    position: Position = field(default_factory=Position)
    facing: float = 0.0
    ear_separation: float | None = None

    def moved_to(self, position: Position) -> Listener:
        """Return a copy at a new position."""
        return replace(self, position=position)

    def turned_to(self, facing: float) -> Listener:
        """Return a copy with a new (normalized) facing."""
        return replace(self, facing=normalize_angle(facing))

    def normalized(self) -> Listener:
        """Return a copy with facing wrapped into (-pi, pi]."""
        return replace(self, facing=normalize_angle(self.facing))

    def relative_angle(self, target: Position) -> float:
        """Angle of target relative to where the listener faces."""
        return normalize_angle(angle_to(self.position, target) - self.facing)


def create_listener(position: Position | None = None, facing: float = 0.0) -> Listener:
    """Create a listener with facing normalized."""
    return Listener(position=position or Position(), facing=normalize_angle(facing))


def listener_gain(listener: Listener, source_pos: Position, min_gain: float = 0.3) -> float:
    """
    Calculate listener directional hearing gain.

    Args:
        listener: Listener pose
        source_pos: Sound source position
        min_gain: Gain floor for sounds directly behind (0 disables the floor)

    Returns:
        Gain in [min_gain, 1]
    """
    raw = 0.5 + 0.5 * math.cos(listener.relative_angle(source_pos))
    return min_gain + (1.0 - min_gain) * raw
