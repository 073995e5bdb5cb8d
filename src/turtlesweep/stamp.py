"""Project a 2D shape onto the plane perpendicular to the cursor heading.

The profile plane uses ``plane_x = normalize(heading x up)`` (the cursor's
right vector) and ``plane_y = up``.  A 2D point ``(px, py)`` maps to::

    position + (px + ox) * plane_x + (py + oy) * plane_y

where ``(ox, oy)`` is the anchor offset of the shape.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .pose import Pose
from .shape import Shape
from .vecmath import Vec2, Vec3, cross

Ring = Tuple[Vec3, ...]

_FALLBACK_PLANE_X: Vec3 = (1.0, 0.0, 0.0)


@dataclass(frozen=True)
class RingData:
    """Outer ring plus one ring per hole, all stamped with the same pose."""

    outer: Ring
    holes: Tuple[Ring, ...] = ()

    def __len__(self) -> int:
        return len(self.outer) + sum(len(h) for h in self.holes)

    def structure(self) -> Tuple[int, ...]:
        return (len(self.outer),) + tuple(len(h) for h in self.holes)


@dataclass(frozen=True)
class StampTransform:
    plane_x: Vec3
    plane_y: Vec3
    offset: Vec2
    origin: Vec3


def compute_stamp_transform(pose: Pose, shape: Shape) -> StampTransform:
    rx, ry, rz = cross(pose.heading, pose.up)
    r_mag = math.sqrt(rx * rx + ry * ry + rz * rz)
    if r_mag > 0:
        plane_x = (rx / r_mag, ry / r_mag, rz / r_mag)
    else:
        # heading parallel to up: no right vector, fall back to world X
        plane_x = _FALLBACK_PLANE_X

    if shape.preserve_position or shape.centered or not shape.points:
        offset = (0.0, 0.0)
    else:
        fx, fy = shape.points[0]
        offset = (-fx, -fy)

    return StampTransform(plane_x=plane_x, plane_y=pose.up,
                          offset=offset, origin=pose.position)


def transform_2d_to_3d(points: Sequence[Sequence[float]], xf: StampTransform) -> Ring:
    ox, oy, oz = xf.origin
    xx, xy, xz = xf.plane_x
    yx, yy, yz = xf.plane_y
    off_x, off_y = xf.offset
    out: List[Vec3] = []
    for p in points:
        px = p[0] + off_x
        py = p[1] + off_y
        out.append((ox + px * xx + py * yx,
                    oy + px * xy + py * yy,
                    oz + px * xz + py * yz))
    return tuple(out)


def stamp_shape(pose: Pose, shape: Shape) -> Ring:
    """3D ring of the shape's outline at ``pose``."""

    return transform_2d_to_3d(shape.points, compute_stamp_transform(pose, shape))


def stamp_shape_with_holes(pose: Pose, shape: Shape) -> RingData:
    xf = compute_stamp_transform(pose, shape)
    return RingData(outer=transform_2d_to_3d(shape.points, xf),
                    holes=tuple(transform_2d_to_3d(h, xf) for h in shape.holes))


__all__ = [
    "Ring",
    "RingData",
    "StampTransform",
    "compute_stamp_transform",
    "transform_2d_to_3d",
    "stamp_shape",
    "stamp_shape_with_holes",
]
