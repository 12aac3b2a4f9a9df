"""
Geometry - 2D plane positions, walls, and segment math.

Features:
    - Immutable 2D positions
    - Distance and bearing between points
    - Angle normalization into (-pi, pi]
    - Segment intersection (scalar and vectorized over many walls)

Coordinate system:
    x: Left (-) / Right (+)
    y: Grows "down" the plan view; angles follow atan2(dy, dx),
       so 0 rad points along +x and pi/2 along +y.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

if TYPE_CHECKING:
    from soundstage.spatial.occlusion import Material


@dataclass(frozen=True)
class Position:
    """A point in the plane (room units)."""

    x: float = 0.0
    y: float = 0.0

    def distance_to(self, other: Position) -> float:
        """Calculate distance to another point."""
        return distance(self, other)

    def angle_to(self, other: Position) -> float:
        """Bearing from this point to another, in radians."""
        return angle_to(self, other)

    def __add__(self, other: Position) -> Position:
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Position) -> Position:
        return Position(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Position:
        return Position(self.x * scalar, self.y * scalar)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    @classmethod
    def from_polar(cls, angle: float, radius: float, origin: Position | None = None) -> Position:
        """
        Create a position at a bearing and range from an origin.

        Args:
            angle: Bearing in radians (0 = +x)
            radius: Distance from origin
            origin: Reference point (default: (0, 0))
        """
        origin = origin or cls()
        return cls(
            x=origin.x + radius * math.cos(angle),
            y=origin.y + radius * math.sin(angle),
        )


@dataclass(frozen=True)
class Wall:
    """
    A wall segment.

    Walls are inert geometry. A wall may carry a material; when it does,
    occlusion uses the material's transmission instead of the uniform
    per-wall factor.
    """

    start: Position
    end: Position
    material: Material | None = None


def distance(a: Position, b: Position) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def angle_to(origin: Position, target: Position) -> float:
    """
    Bearing from origin to target.

    Returns:
        Angle in radians; 0 means target lies along +x from origin.
    """
    return math.atan2(target.y - origin.y, target.x - origin.x)


def normalize_angle(angle: float) -> float:
    """Wrap any angle into (-pi, pi]."""
    wrapped = math.atan2(math.sin(angle), math.cos(angle))
    # atan2 can land on -pi exactly; the interval is open on that side
    if wrapped <= -math.pi:
        return math.pi
    return wrapped


def _orientation(a: Position, b: Position, c: Position) -> float:
    """Cross product sign of c relative to the directed line a -> b."""
    return (c.x - a.x) * (b.y - a.y) - (b.x - a.x) * (c.y - a.y)


def segments_intersect(
    p1: Position,
    p2: Position,
    wall_start: Position,
    wall_end: Position,
) -> bool:
    """
    Check whether segment p1-p2 properly crosses segment wall_start-wall_end.

    Only proper crossings count. Parallel segments, collinear overlap and
    contact at an endpoint are all treated as non-intersecting.
    """
    d1 = _orientation(wall_start, wall_end, p1)
    d2 = _orientation(wall_start, wall_end, p2)
    d3 = _orientation(p1, p2, wall_start)
    d4 = _orientation(p1, p2, wall_end)

    return ((d1 > 0 > d2) or (d1 < 0 < d2)) and ((d3 > 0 > d4) or (d3 < 0 < d4))


def wall_array(walls: Sequence[Wall]) -> np.ndarray:
    """Pack walls into an (N, 4) float array of x1, y1, x2, y2."""
    if not walls:
        return np.empty((0, 4), dtype=np.float64)
    return np.array(
        [(w.start.x, w.start.y, w.end.x, w.end.y) for w in walls],
        dtype=np.float64,
    )


def segments_intersect_many(p1: Position, p2: Position, walls: np.ndarray) -> np.ndarray:
    """
    Vectorized form of segments_intersect against many walls.

    Args:
        p1: Path start
        p2: Path end
        walls: (N, 4) array from wall_array()

    Returns:
        Boolean array of length N.
    """
    walls = np.asarray(walls, dtype=np.float64).reshape(-1, 4)
    sx, sy, ex, ey = walls[:, 0], walls[:, 1], walls[:, 2], walls[:, 3]

    d1 = (p1.x - sx) * (ey - sy) - (ex - sx) * (p1.y - sy)
    d2 = (p2.x - sx) * (ey - sy) - (ex - sx) * (p2.y - sy)
    d3 = (sx - p1.x) * (p2.y - p1.y) - (p2.x - p1.x) * (sy - p1.y)
    d4 = (ex - p1.x) * (p2.y - p1.y) - (p2.x - p1.x) * (ey - p1.y)

    straddles_wall = ((d1 > 0) & (d2 < 0)) | ((d1 < 0) & (d2 > 0))
    straddles_path = ((d3 > 0) & (d4 < 0)) | ((d3 < 0) & (d4 > 0))
    return straddles_wall & straddles_path
