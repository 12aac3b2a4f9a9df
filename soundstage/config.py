"""
Settings for audio parameter calculation.

One frozen dataclass covers the whole settings surface: distance model,
master volume, cutoff distance, rear-gain floor and per-wall factor,
plus the curve tuning the models accept.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from soundstage.spatial.distance import DistanceModel

DEFAULT_MAX_DISTANCE = 5.0
"""Default maximum distance for sound propagation (room units)."""

DEFAULT_REAR_GAIN = 0.3
"""Default minimum gain for sounds behind the listener."""

DEFAULT_ATTENUATION_PER_WALL = 0.3
"""Default fraction of energy passed by each wall."""

_ENV_FIELDS = {
    "DISTANCE_MODEL": "distance_model",
    "MASTER_VOLUME": "master_volume",
    "MAX_DISTANCE": "max_distance",
    "REAR_GAIN_FLOOR": "rear_gain_floor",
    "ATTENUATION_PER_WALL": "attenuation_per_wall",
}


@dataclass(frozen=True)
class AudioParameterOptions:
    """Options for audio parameter calculation.

    Args:
        distance_model: Distance attenuation curve.
        master_volume: Global gain applied to every source, 0-1.
        max_distance: Hard cutoff distance; sources at or beyond it are silent.
        rear_gain_floor: Listener hearing floor for sounds directly behind, 0-1.
        attenuation_per_wall: Fraction of energy passed by each wall, 0-1.
        ref_distance: Distance at which the distance curve is 1.0.
        rolloff: Distance curve steepness.
        pan_width: Distance at which panning reaches full strength.

    Example:
        options = AudioParameterOptions(
            distance_model="linear",
            max_distance=8.0,
            rear_gain_floor=0.0,
        )
    """

    distance_model: DistanceModel = DistanceModel.INVERSE
    """Distance attenuation curve."""

    master_volume: float = 1.0
    """Global output gain."""

    max_distance: float = DEFAULT_MAX_DISTANCE
    """Hard cutoff distance."""

    rear_gain_floor: float = DEFAULT_REAR_GAIN
    """Audibility floor for sounds behind the listener."""

    attenuation_per_wall: float = DEFAULT_ATTENUATION_PER_WALL
    """Energy passed by each wall without a material."""

    ref_distance: float = 1.0
    rolloff: float = 1.0
    pan_width: float = 3.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        object.__setattr__(self, "distance_model", DistanceModel.coerce(self.distance_model))

        for name in ("master_volume", "rear_gain_floor", "attenuation_per_wall"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if self.max_distance <= 0:
            raise ValueError(f"max_distance must be > 0, got {self.max_distance}")
        if self.ref_distance <= 0:
            raise ValueError(f"ref_distance must be > 0, got {self.ref_distance}")
        if self.rolloff < 0:
            raise ValueError(f"rolloff must be >= 0, got {self.rolloff}")
        if self.pan_width <= 0:
            raise ValueError(f"pan_width must be > 0, got {self.pan_width}")

    def with_updates(self, **changes: Any) -> AudioParameterOptions:
        """Return a validated copy with some fields changed."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        d["distance_model"] = self.distance_model.value
        return d

    @classmethod
    def from_env(
        cls,
        prefix: str = "SOUNDSTAGE_",
        environ: Mapping[str, str] | None = None,
    ) -> AudioParameterOptions:
        """
        Build options from environment variables.

        Reads {prefix}DISTANCE_MODEL, {prefix}MASTER_VOLUME,
        {prefix}MAX_DISTANCE, {prefix}REAR_GAIN_FLOOR and
        {prefix}ATTENUATION_PER_WALL. Unset variables keep defaults.
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        for suffix, name in _ENV_FIELDS.items():
            raw = environ.get(prefix + suffix)
            if raw is None or raw.strip() == "":
                continue
            if name == "distance_model":
                values[name] = raw.strip()
            else:
                try:
                    values[name] = float(raw)
                except ValueError:
                    raise ValueError(f"{prefix}{suffix} must be a number, got {raw!r}") from None

        return cls(**values)
