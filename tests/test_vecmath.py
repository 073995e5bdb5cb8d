import math

import pytest

from turtlesweep.vecmath import (
    angle_between,
    cross,
    deg_to_rad,
    dot,
    magnitude,
    normalize,
    rotate_around_axis,
    rotate_point_around_axis,
    vec3,
)


def _close(a, b, tol=1e-9):
    return all(math.isclose(x, y, abs_tol=tol) for x, y in zip(a, b))


def test_cross_of_x_and_y_is_z():
    assert cross((1, 0, 0), (0, 1, 0)) == (0, 0, 1)
    assert cross((0, 1, 0), (1, 0, 0)) == (0, 0, -1)


def test_normalize_zero_vector_is_unchanged():
    assert normalize((0.0, 0.0, 0.0)) == (0.0, 0.0, 0.0)
    assert math.isclose(magnitude(normalize((3.0, 4.0, 12.0))), 1.0)


def test_vec3_rejects_short_input():
    with pytest.raises(ValueError):
        vec3((1.0, 2.0))


def test_rotate_point_preserves_magnitude():
    p = (3.0, 1.0, -2.0)
    r = rotate_point_around_axis(p, (0.3, 0.5, 0.8), 1.234)
    assert math.isclose(magnitude(r), magnitude(p))


@pytest.mark.parametrize("angle, expected", [
    (90, (0.0, 1.0, 0.0)),
    (180, (-1.0, 0.0, 0.0)),
    (-90, (0.0, -1.0, 0.0)),
])
def test_rotate_around_z(angle, expected):
    assert _close(rotate_around_axis((1, 0, 0), (0, 0, 1), deg_to_rad(angle)), expected)


def test_angle_between_clamps_rounding():
    a = (1.0, 0.0, 0.0)
    assert angle_between(a, (1.0000000001, 0.0, 0.0)) == 0.0
    assert math.isclose(angle_between(a, (0.0, 0.0, 1.0)), math.pi / 2)
    assert math.isclose(dot(a, (-1.0, 0.0, 0.0)), -1.0)
