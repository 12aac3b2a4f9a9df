"""
Distance Attenuation - Loudness falloff with distance.

Features:
    - Linear, inverse and exponential curves
    - Hard cutoff at max_distance for every model
    - Raised-cosine taper over the last 20% of the range, so the curve
      lands on zero at max_distance instead of jumping there
"""

from __future__ import annotations

import math
from enum import Enum

# Fraction of max_distance where the taper begins
TAPER_START = 0.8


class DistanceModel(str, Enum):
    """Distance attenuation curves."""
    LINEAR = "linear"            # Predictable straight-line falloff
    INVERSE = "inverse"          # Natural 1/d-like falloff
    EXPONENTIAL = "exponential"  # Dramatic power-law falloff

    @classmethod
    def coerce(cls, value: DistanceModel | str) -> DistanceModel:
        """Accept a member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown distance model {value!r}. Expected one of: {valid}") from None


def _base_curve(d: float, model: DistanceModel, ref: float, max_distance: float, rolloff: float) -> float:
    if model is DistanceModel.LINEAR:
        return max(0.0, 1.0 - rolloff * (d - ref) / (max_distance - ref))
    if model is DistanceModel.INVERSE:
        return ref / (ref + rolloff * (d - ref))
    return (ref / d) ** rolloff


def taper(distance: float, max_distance: float) -> float:
    """
    Raised-cosine taper factor near the cutoff.

    Returns 1.0 below TAPER_START * max_distance, then eases to 0.0
    at max_distance with zero slope at both ends.
    """
    start = TAPER_START * max_distance
    if distance <= start:
        return 1.0
    if distance >= max_distance:
        return 0.0
    t = (distance - start) / (max_distance - start)
    return 0.5 * (1.0 + math.cos(math.pi * t))


def distance_attenuation(
    distance: float,
    model: DistanceModel | str = DistanceModel.INVERSE,
    ref_distance: float = 1.0,
    max_distance: float = 5.0,
    rolloff: float = 1.0,
) -> float:
    """
    Calculate distance attenuation.

    Args:
        distance: Distance from source to listener
        model: Attenuation curve
        ref_distance: Distance at (and inside) which gain is 1.0
        max_distance: Hard cutoff; silent at and beyond this
        rolloff: How quickly the curve decreases

    Returns:
        Gain multiplier in [0, 1]. A degenerate range
        (max_distance <= ref_distance, or a non-positive ref_distance)
        is treated as already past the cutoff and returns 0.0.
    """
    model = DistanceModel.coerce(model)

    if ref_distance <= 0 or max_distance <= ref_distance:
        return 0.0

    if distance >= max_distance:
        return 0.0

    d = max(distance, ref_distance)
    attenuation = _base_curve(d, model, ref_distance, max_distance, rolloff)
    attenuation *= taper(distance, max_distance)

    return max(0.0, min(1.0, attenuation))
