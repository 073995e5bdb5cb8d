import math

import pytest

from turtlesweep.corners import (
    corner_rings,
    generate_round_corner_ring_data,
    generate_round_corner_rings,
    generate_tapered_corner_ring_data,
    generate_tapered_corner_rings,
    ring_centroid,
    rotate_ring_around_axis,
    scale_ring_along_direction,
    scale_ring_from_centroid,
    smoothing_rings,
)
from turtlesweep.pose import Pose
from turtlesweep.settings import DEFAULT_SETTINGS, JointMode
from turtlesweep.shape import make_shape, rect_shape
from turtlesweep.stamp import stamp_shape, stamp_shape_with_holes
from turtlesweep.vecmath import magnitude, v_sub

X = (1.0, 0.0, 0.0)
Y = (0.0, 1.0, 0.0)


def _close(a, b, tol=1e-9):
    return all(math.isclose(x, y, abs_tol=tol) for x, y in zip(a, b))


def _end_ring():
    return stamp_shape(Pose(position=(20, 0, 0)), rect_shape(10, 10))


def _has_point(ring, target, tol=1e-9):
    return any(_close(p, target, tol) for p in ring)


def test_ring_helpers():
    ring = ((0, 0, 0), (2, 0, 0), (2, 2, 0), (0, 2, 0))
    assert ring_centroid(ring) == (1.0, 1.0, 0.0)
    doubled = scale_ring_from_centroid(ring, 2)
    assert _close(doubled[0], (-1, -1, 0))
    stretched = scale_ring_along_direction(ring, X, 3)
    assert _close(stretched[1], (4, 0, 0))
    assert _close(stretched[2], (4, 2, 0))
    turned = rotate_ring_around_axis(ring, (1, 1, 0), (0, 0, 1), math.pi)
    assert _close(turned[0], (2, 2, 0))


def test_round_corner_sweeps_about_inside_pivot():
    ring = _end_ring()
    rings = generate_round_corner_rings(ring, X, Y, 4, 5)
    assert len(rings) == 4
    pivot = (20.0, 5.0, 0.0)
    for r in rings:
        for p, q in zip(ring, r):
            assert math.isclose(magnitude(v_sub(p, pivot)), magnitude(v_sub(q, pivot)))
    # last ring faces the new heading, centred a radius past the old end
    assert _close(ring_centroid(rings[-1]), (25, 5, 0))


def test_round_corner_colinear_is_empty():
    assert generate_round_corner_rings(_end_ring(), X, X, 4, 5) == []
    assert generate_tapered_corner_rings(_end_ring(), (25, 0, 0), X, X) == []


def test_tapered_corner_is_a_miter():
    rings = generate_tapered_corner_rings(_end_ring(), (25, 0, 0), X, Y)
    assert len(rings) == 1
    ring = rings[0]
    assert _close(ring_centroid(ring), (25, 0, 0))
    assert _has_point(ring, (20, 5, 5))
    assert _has_point(ring, (30, -5, 5))
    assert _has_point(ring, (30, -5, -5))


def test_tapered_scale_is_capped_near_reversal():
    back = (math.cos(math.radians(179)), math.sin(math.radians(179)), 0.0)
    ring = generate_tapered_corner_rings(_end_ring(), (25, 0, 0), X, back)[0]
    extent = max(magnitude(v_sub(p, (25, 0, 0))) for p in ring)
    # half-width 5 stretched at most twice, plus the untouched z offset
    assert extent <= math.hypot(10, 5) + 1e-9


def _holed_data():
    shape = make_shape([(-5, -5), (5, -5), (5, 5), (-5, 5)],
                       holes=[[(1, 1), (1, 3), (3, 3), (3, 1)]], centered=True)
    return stamp_shape_with_holes(Pose(position=(20, 0, 0)), shape)


def test_ring_data_variants_move_holes_rigidly():
    data = _holed_data()
    offset = magnitude(v_sub(ring_centroid(data.holes[0]), ring_centroid(data.outer)))
    for rd in generate_round_corner_ring_data(data, X, Y, 3, 5):
        assert rd.structure() == data.structure()
        moved = magnitude(v_sub(ring_centroid(rd.holes[0]), ring_centroid(rd.outer)))
        assert math.isclose(moved, offset)
    (tapered,) = generate_tapered_corner_ring_data(data, (25, 0, 0), X, Y)
    assert tapered.structure() == data.structure()
    assert _close(ring_centroid(tapered.outer), (25, 0, 0))


def test_corner_rings_dispatch_on_joint_mode():
    ring = _end_ring()
    flat = DEFAULT_SETTINGS
    assert corner_rings(ring, (25, 0, 0), X, Y, 5, flat) == []
    round_ = flat.with_joint_mode(JointMode.ROUND)
    assert len(corner_rings(ring, (25, 0, 0), X, Y, 5, round_)) == 4
    tapered = flat.with_joint_mode("tapered")
    assert len(corner_rings(ring, (25, 0, 0), X, Y, 5, tapered)) == 1


@pytest.mark.parametrize("bend, expected", [(5, 1), (14, 1), (20, 2), (44, 3)])
def test_smoothing_uses_fixed_step(bend, expected):
    new = (math.cos(math.radians(bend)), math.sin(math.radians(bend)), 0.0)
    assert len(smoothing_rings(_end_ring(), X, new, 5)) == expected
