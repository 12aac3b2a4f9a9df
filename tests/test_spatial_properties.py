"""
Property-Based Spatial Tests - Invariants across random scenes.

Uses Hypothesis to generate random listeners, sources and walls and
verify that the parameter calculation stays well-behaved everywhere.

Invariants tested:
    1. Bounds - volume and gains in [0, 1], pan in [-1, 1]
    2. Determinism - identical input → identical output
    3. Walls only ever make things quieter
    4. Distance attenuation never increases with distance
    5. Angle wrapping lands in (-pi, pi] and preserves direction
    6. Vectorized and scalar intersection agree
    7. Pan is odd in the lateral offset from the listener's facing
"""

import math

import pytest
from hypothesis import given, settings, strategies as st

from soundstage.config import AudioParameterOptions
from soundstage.spatial.directivity import DirectivityPattern, directivity_gain
from soundstage.spatial.distance import DistanceModel, distance_attenuation
from soundstage.spatial.geometry import (
    Position,
    Wall,
    normalize_angle,
    segments_intersect,
    segments_intersect_many,
    wall_array,
)
from soundstage.spatial.hearing import Listener
from soundstage.spatial.panning import stereo_pan
from soundstage.spatial.parameters import SourceConfig, compute_parameters

pytestmark = pytest.mark.property


# =============================================================================
# Hypothesis Strategies
# =============================================================================

coord = st.floats(min_value=-10.0, max_value=10.0, allow_nan=False, allow_infinity=False)
angle = st.floats(min_value=-20.0, max_value=20.0, allow_nan=False, allow_infinity=False)
unit = st.floats(min_value=0.0, max_value=1.0, allow_nan=False)

position_strategy = st.builds(Position, x=coord, y=coord)

wall_strategy = st.builds(Wall, start=position_strategy, end=position_strategy)

listener_strategy = st.builds(Listener, position=position_strategy, facing=angle)

source_strategy = st.builds(
    SourceConfig,
    id=st.just("s"),
    position=position_strategy,
    facing=angle,
    directivity=st.sampled_from(list(DirectivityPattern)),
    volume=unit,
)

options_strategy = st.builds(
    AudioParameterOptions,
    distance_model=st.sampled_from(list(DistanceModel)),
    master_volume=unit,
    max_distance=st.floats(min_value=0.5, max_value=20.0),
    rear_gain_floor=unit,
    attenuation_per_wall=unit,
)


# =============================================================================
# Property Tests - Invariants
# =============================================================================

class TestBounds:
    """Property: every output stays in its documented range."""

    @given(source_strategy, listener_strategy, st.lists(wall_strategy, max_size=8), options_strategy)
    @settings(max_examples=300)
    def test_parameters_in_range(self, source, listener, walls, options):
        """Volume, gains and pan stay in range for any scene."""
        params = compute_parameters(source, listener, walls, options)

        assert 0.0 <= params.volume <= 1.0
        assert -1.0 <= params.pan <= 1.0
        assert 0.0 <= params.directional_gain <= 1.0
        assert 0.0 <= params.wall_attenuation <= 1.0
        assert 0.0 <= params.distance_attenuation <= 1.0
        assert 0 <= params.wall_count <= len(walls)
        assert not math.isnan(params.volume)

    @given(st.sampled_from(list(DirectivityPattern)), angle)
    @settings(max_examples=200)
    def test_directivity_in_range(self, pattern, diff):
        """Directivity gain stays in [0, 1] for any angle."""
        assert 0.0 <= directivity_gain(pattern, diff) <= 1.0


class TestDeterminism:
    """Property: identical input produces identical output."""

    @given(source_strategy, listener_strategy, st.lists(wall_strategy, max_size=5))
    @settings(max_examples=100)
    def test_deterministic_output(self, source, listener, walls):
        """Two calls on the same scene agree."""
        assert compute_parameters(source, listener, walls) == compute_parameters(source, listener, walls)


class TestWalls:
    """Property: walls never make a source louder."""

    @given(source_strategy, listener_strategy, st.lists(wall_strategy, max_size=5), wall_strategy)
    @settings(max_examples=200)
    def test_extra_wall_never_louder(self, source, listener, walls, extra):
        """Adding a wall never raises volume or lowers the wall count."""
        without = compute_parameters(source, listener, walls)
        with_extra = compute_parameters(source, listener, walls + [extra])

        assert with_extra.volume <= without.volume + 1e-12
        assert with_extra.wall_count >= without.wall_count


class TestDistance:
    """Property: attenuation never increases with distance."""

    @given(
        st.sampled_from(list(DistanceModel)),
        st.floats(min_value=0.0, max_value=30.0),
        st.floats(min_value=0.0, max_value=30.0),
        st.floats(min_value=0.5, max_value=20.0),
    )
    @settings(max_examples=300)
    def test_monotonic(self, model, a, b, max_distance):
        """Farther is never louder, for any model and range."""
        near, far = sorted((a, b))
        g_near = distance_attenuation(near, model, 0.25, max_distance)
        g_far = distance_attenuation(far, model, 0.25, max_distance)
        assert g_far <= g_near + 1e-12


class TestAngles:
    """Property: wrapping is range-correct and keeps the direction."""

    @given(st.floats(min_value=-1000.0, max_value=1000.0, allow_nan=False))
    @settings(max_examples=300)
    def test_wrapped_range(self, a):
        """Wrapped angles land in (-pi, pi]."""
        wrapped = normalize_angle(a)
        assert -math.pi < wrapped <= math.pi

    @given(st.floats(min_value=-1000.0, max_value=1000.0, allow_nan=False))
    @settings(max_examples=300)
    def test_idempotent(self, a):
        """Wrapping twice equals wrapping once."""
        once = normalize_angle(a)
        assert normalize_angle(once) == pytest.approx(once, abs=1e-9)

    @given(st.floats(min_value=-1000.0, max_value=1000.0, allow_nan=False))
    @settings(max_examples=300)
    def test_same_direction(self, a):
        """Wrapping keeps the direction."""
        wrapped = normalize_angle(a)
        assert math.cos(wrapped) == pytest.approx(math.cos(a), abs=1e-9)
        assert math.sin(wrapped) == pytest.approx(math.sin(a), abs=1e-9)


class TestIntersection:
    """Property: the numpy path agrees with the scalar test."""

    @given(position_strategy, position_strategy, st.lists(wall_strategy, min_size=1, max_size=10))
    @settings(max_examples=200)
    def test_vectorized_matches_scalar(self, p1, p2, walls):
        """Mask matches the per-wall scalar test."""
        mask = segments_intersect_many(p1, p2, wall_array(walls))
        assert mask.tolist() == [segments_intersect(p1, p2, w.start, w.end) for w in walls]


class TestPanning:
    """Property: mirroring a source across the facing axis mirrors its pan."""

    @given(
        position_strategy,
        angle,
        st.floats(min_value=-math.pi, max_value=math.pi),
        st.floats(min_value=0.0, max_value=10.0),
    )
    @settings(max_examples=300)
    def test_pan_is_odd(self, origin, facing, offset, radius):
        """Sources at facing + offset and facing - offset pan to opposite sides."""
        listener = Listener(position=origin, facing=facing)
        source = Position.from_polar(facing + offset, radius, origin=origin)
        mirror = Position.from_polar(facing - offset, radius, origin=origin)

        assert stereo_pan(listener, source) == pytest.approx(-stereo_pan(listener, mirror), abs=1e-6)
