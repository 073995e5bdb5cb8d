"""Vector helpers shared by the pose, stamping, corner and sweep code.

Vectors are plain ``(x, y, z)`` float tuples.  Every function returns a new
tuple; nothing here mutates its arguments.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]


def vec3(v: Sequence[float]) -> Vec3:
    """Return the XYZ components of ``v`` as a float tuple."""

    if len(v) < 3:
        raise ValueError("vector must have three components")
    return float(v[0]), float(v[1]), float(v[2])


def v_add(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return a[0] + b[0], a[1] + b[1], a[2] + b[2]


def v_sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return a[0] - b[0], a[1] - b[1], a[2] - b[2]


def v_scale(v: Sequence[float], s: float) -> Vec3:
    return v[0] * s, v[1] * s, v[2] * s


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0])


def magnitude(v: Sequence[float]) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def normalize(v: Sequence[float]) -> Vec3:
    """Return ``v`` scaled to unit length.

    A zero vector is returned unchanged rather than raising; callers that
    care about degenerate directions test the magnitude first.
    """

    m = magnitude(v)
    if m == 0:
        return float(v[0]), float(v[1]), float(v[2])
    return v[0] / m, v[1] / m, v[2] / m


def deg_to_rad(deg: float) -> float:
    return deg * (math.pi / 180.0)


def rotate_point_around_axis(point: Sequence[float], axis: Sequence[float],
                             angle: float) -> Vec3:
    """Rotate ``point`` about ``axis`` (through the origin) by ``angle`` radians.

    Uses Rodrigues' formula::

        v' = v cos(a) + (k x v) sin(a) + k (k . v)(1 - cos(a))

    The magnitude of ``point`` is preserved, so this is the variant to use
    for positions.
    """

    k = normalize(axis)
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    term1 = v_scale(point, cos_a)
    term2 = v_scale(cross(k, point), sin_a)
    term3 = v_scale(k, dot(k, point) * (1.0 - cos_a))
    return v_add(v_add(term1, term2), term3)


def rotate_around_axis(direction: Sequence[float], axis: Sequence[float],
                       angle: float) -> Vec3:
    """Rotate a direction vector and renormalize the result.

    Renormalizing after every rotation keeps headings and up vectors unit
    length across long chains of turns.
    """

    return normalize(rotate_point_around_axis(direction, axis, angle))


def angle_between(a: Sequence[float], b: Sequence[float]) -> float:
    """Angle in radians between two unit vectors (acos clamped to [-1, 1])."""

    return math.acos(min(1.0, max(-1.0, dot(a, b))))


__all__ = [
    "Vec2",
    "Vec3",
    "vec3",
    "v_add",
    "v_sub",
    "v_scale",
    "dot",
    "cross",
    "magnitude",
    "normalize",
    "deg_to_rad",
    "rotate_point_around_axis",
    "rotate_around_axis",
    "angle_between",
]
