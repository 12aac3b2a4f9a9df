"""
Rooms - Rectangular rooms built from drawn corners.

A room is four walls plus an attenuation (0 = transparent, 1 = fully
blocking). When rooms overlap, the most blocking room containing either
end of a path decides the per-wall factor, so an inner soundproof room
cannot be diluted by a thinner room around it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from soundstage.spatial.geometry import Position, Wall

# Attenuation used when no room contains either end of the path
DEFAULT_ROOM_ATTENUATION = 0.5

# Smallest width/height accepted for a drawn room
MIN_ROOM_SIZE = 0.2


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle given by its center and size."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2

    @property
    def center(self) -> Position:
        return Position(self.x, self.y)

    def contains(self, point: Position) -> bool:
        """Inclusive containment test."""
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom


@dataclass(frozen=True)
class Room:
    """A rectangular room."""

    id: str
    bounds: Bounds
    walls: tuple[Wall, ...] = field(default_factory=tuple)
    label: str = ""
    attenuation: float = DEFAULT_ROOM_ATTENUATION

    def __post_init__(self):
        if not 0.0 <= self.attenuation <= 1.0:
            raise ValueError(f"attenuation must be in [0, 1], got {self.attenuation}")
        if not self.walls:
            object.__setattr__(self, "walls", tuple(walls_from_bounds(self.bounds)))

    @property
    def center(self) -> Position:
        return self.bounds.center

    def contains(self, point: Position) -> bool:
        return self.bounds.contains(point)


def walls_from_bounds(bounds: Bounds) -> list[Wall]:
    """
    Create the four walls of a rectangle.

    Returns:
        Walls clockwise from the top-left corner: top, right, bottom, left
    """
    top_left = Position(bounds.left, bounds.top)
    top_right = Position(bounds.right, bounds.top)
    bottom_right = Position(bounds.right, bounds.bottom)
    bottom_left = Position(bounds.left, bounds.bottom)

    return [
        Wall(top_left, top_right),
        Wall(top_right, bottom_right),
        Wall(bottom_right, bottom_left),
        Wall(bottom_left, top_left),
    ]


def is_valid_room_size(start: Position, end: Position, min_size: float = MIN_ROOM_SIZE) -> bool:
    """Check that a drawn rectangle is large enough in both directions."""
    return abs(end.x - start.x) > min_size and abs(end.y - start.y) > min_size


def room_from_corners(
    start: Position,
    end: Position,
    room_id: str,
    attenuation: float = DEFAULT_ROOM_ATTENUATION,
    label: str | None = None,
) -> Room:
    """
    Create a room from two opposite corners (drag-to-draw).

    Args:
        start: First corner
        end: Opposite corner
        room_id: Room identifier
        attenuation: Wall attenuation, 0-1
        label: Display label (default: "Room <last 4 chars of id>")
    """
    min_x, max_x = sorted((start.x, end.x))
    min_y, max_y = sorted((start.y, end.y))
    width = max_x - min_x
    height = max_y - min_y

    bounds = Bounds(x=min_x + width / 2, y=min_y + height / 2, width=width, height=height)

    return Room(
        id=room_id,
        bounds=bounds,
        walls=tuple(walls_from_bounds(bounds)),
        label=label if label is not None else f"Room {room_id[-4:]}",
        attenuation=attenuation,
    )


def all_walls(rooms: Iterable[Room]) -> list[Wall]:
    """Flatten the walls of every room."""
    return [wall for room in rooms for wall in room.walls]


def effective_attenuation(rooms: Sequence[Room], *points: Position) -> float:
    """
    Highest attenuation among rooms containing any of the points.

    Falls back to DEFAULT_ROOM_ATTENUATION when no room contains any
    point (or there are no rooms), so walls still block sound.
    """
    containing = [room.attenuation for room in rooms if any(room.contains(p) for p in points)]
    return max(containing) if containing else DEFAULT_ROOM_ATTENUATION


def effective_transmission(rooms: Sequence[Room], source_pos: Position, listener_pos: Position) -> float:
    """Per-wall factor for a path: 1 - effective attenuation."""
    return 1.0 - effective_attenuation(rooms, source_pos, listener_pos)
