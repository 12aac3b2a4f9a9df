"""
Occlusion - Attenuation from walls on the direct path.

Each wall crossed by the straight line between source and listener
multiplies the remaining energy by a per-wall factor. Walls with a
material use the material's transmission as their factor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from soundstage.spatial.geometry import (
    Position,
    Wall,
    segments_intersect_many,
    wall_array,
)


@dataclass(frozen=True)
class Material:
    """Acoustic material properties (both in [0, 1])."""

    name: str
    absorption: float
    transmission: float

    def __post_init__(self):
        for attr in ("absorption", "transmission"):
            value = getattr(self, attr)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{attr} must be in [0, 1], got {value}")


MATERIALS: dict[str, Material] = {
    "concrete": Material("Concrete", absorption=0.02, transmission=0.05),
    "brick": Material("Brick", absorption=0.03, transmission=0.08),
    "drywall": Material("Drywall", absorption=0.1, transmission=0.3),
    "glass": Material("Glass", absorption=0.03, transmission=0.2),
    "wood": Material("Wood", absorption=0.1, transmission=0.15),
    "curtain": Material("Curtain", absorption=0.5, transmission=0.6),
    "acoustic_panel": Material("Acoustic Panel", absorption=0.8, transmission=0.1),
    "open": Material("Open", absorption=1.0, transmission=1.0),
}


def occluding_walls(p1: Position, p2: Position, walls: Iterable[Wall]) -> np.ndarray:
    """Boolean mask of the walls crossed by the segment p1-p2."""
    walls = tuple(walls)
    if not walls:
        return np.zeros(0, dtype=bool)
    return segments_intersect_many(p1, p2, wall_array(walls))


def walls_between(p1: Position, p2: Position, walls: Iterable[Wall]) -> int:
    """Count walls crossed by the direct path between two points."""
    return int(np.count_nonzero(occluding_walls(p1, p2, walls)))


def wall_attenuation(count: int, per_wall_factor: float = 0.3) -> float:
    """
    Attenuation from a number of uniform walls.

    Args:
        count: Number of walls crossed
        per_wall_factor: Fraction of energy passed by each wall

    Returns:
        per_wall_factor ** count (1.0 for no walls)
    """
    if count <= 0:
        return 1.0
    return per_wall_factor ** count


def path_attenuation(
    p1: Position,
    p2: Position,
    walls: Iterable[Wall],
    per_wall_factor: float = 0.3,
) -> tuple[int, float]:
    """
    Count crossed walls and their combined attenuation.

    Walls with a material contribute their transmission; the rest
    contribute per_wall_factor.

    Returns:
        (wall_count, attenuation)
    """
    walls = tuple(walls)
    mask = occluding_walls(p1, p2, walls)
    count = int(np.count_nonzero(mask))
    if count == 0:
        return 0, 1.0

    factors = np.array(
        [
            wall.material.transmission if wall.material is not None else per_wall_factor
            for wall, crossed in zip(walls, mask)
            if crossed
        ],
        dtype=np.float64,
    )
    return count, float(np.prod(factors))
