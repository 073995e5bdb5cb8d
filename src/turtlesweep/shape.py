"""2D profiles ("shapes") that are stamped along a sweep.

A shape is a closed polygon given as ``(x, y)`` points, counter-clockwise for
the outer contour.  Hole contours run the opposite way.  Three anchor
policies decide where the profile lands relative to the cursor:

``centered``
    the shape's own origin sits on the cursor (circles, rectangles)
``preserve_position``
    raw coordinates are used without any offset
otherwise
    the first point is moved onto the cursor (custom outlines)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable, Sequence, Tuple

from .vecmath import Vec2

Contour = Tuple[Vec2, ...]


def _contour(points: Iterable[Sequence[float]]) -> Contour:
    return tuple((float(p[0]), float(p[1])) for p in points)


@dataclass(frozen=True)
class Shape:
    points: Contour
    holes: Tuple[Contour, ...] = ()
    centered: bool = False
    preserve_position: bool = False

    def __post_init__(self):
        object.__setattr__(self, "points", _contour(self.points))
        object.__setattr__(self, "holes", tuple(_contour(h) for h in (self.holes or ())))

    @property
    def has_holes(self) -> bool:
        return bool(self.holes)


def make_shape(points, *, holes=None, centered=False, preserve_position=False) -> Shape:
    return Shape(points, tuple(holes or ()), centered, preserve_position)


def is_shape(x) -> bool:
    return isinstance(x, Shape)


# --- built-in shapes -------------------------------------------------------

def circle_shape(radius: float, segments: int = 32) -> Shape:
    step = 2 * math.pi / segments
    points = [(radius * math.cos(i * step), radius * math.sin(i * step))
              for i in range(segments)]
    return Shape(points, centered=True)


def rect_shape(width: float, height: float) -> Shape:
    """Rectangle centred on the origin, corners counter-clockwise from bottom-left."""

    hw = width / 2.0
    hh = height / 2.0
    return Shape([(-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh)], centered=True)


def polygon_shape(points) -> Shape:
    """Custom outline anchored at its first point."""

    return Shape(points, centered=False)


def ngon_shape(n: int, radius: float) -> Shape:
    """Regular ``n``-gon with its first vertex at the top."""

    step = 2 * math.pi / n
    points = [(radius * math.cos(i * step - math.pi / 2),
               radius * math.sin(i * step - math.pi / 2))
              for i in range(n)]
    return Shape(points, centered=True)


def star_shape(n_points: int, outer_r: float, inner_r: float) -> Shape:
    total = 2 * n_points
    step = 2 * math.pi / total
    points = []
    for i in range(total):
        r = outer_r if i % 2 == 0 else inner_r
        points.append((r * math.cos(i * step), r * math.sin(i * step)))
    return Shape(points, centered=True)


# --- transforms -------------------------------------------------------------

def translate_shape(shape: Shape, dx: float, dy: float) -> Shape:
    move = lambda c: [(x + dx, y + dy) for x, y in c]
    return replace(shape, points=move(shape.points),
                   holes=tuple(move(h) for h in shape.holes))


def scale_shape(shape: Shape, sx: float, sy: float) -> Shape:
    scale = lambda c: [(x * sx, y * sy) for x, y in c]
    return replace(shape, points=scale(shape.points),
                   holes=tuple(scale(h) for h in shape.holes))


def reverse_shape(shape: Shape) -> Shape:
    """Reverse the winding of the outline and every hole (flips sweep normals)."""

    return replace(shape, points=shape.points[::-1],
                   holes=tuple(h[::-1] for h in shape.holes))


def signed_area(points: Sequence[Sequence[float]]) -> float:
    """Shoelace area; positive for counter-clockwise contours."""

    n = len(points)
    if n < 3:
        return 0.0
    total = 0.0
    for i in range(n):
        x0, y0 = points[i][0], points[i][1]
        x1, y1 = points[(i + 1) % n][0], points[(i + 1) % n][1]
        total += x0 * y1 - x1 * y0
    return total / 2.0


def ensure_ccw(shape: Shape) -> Shape:
    """Return ``shape`` with a counter-clockwise outline and clockwise holes."""

    points = shape.points
    if signed_area(points) < 0:
        points = points[::-1]
    holes = tuple(h[::-1] if signed_area(h) > 0 else h for h in shape.holes)
    return replace(shape, points=points, holes=holes)


def orient_holes(shape: Shape) -> Shape:
    """Make every hole wind opposite to the outline, keeping the outline as is."""

    if not shape.holes:
        return shape
    outer_ccw = signed_area(shape.points) >= 0
    holes = tuple(h[::-1] if (signed_area(h) >= 0) == outer_ccw else h for h in shape.holes)
    return replace(shape, holes=holes)


def shape_radius(shape: Shape) -> float:
    """Largest distance from the shape's local origin to an outline point."""

    return max((math.hypot(x, y) for x, y in shape.points), default=0.0)


__all__ = [
    "Shape",
    "make_shape",
    "is_shape",
    "circle_shape",
    "rect_shape",
    "polygon_shape",
    "ngon_shape",
    "star_shape",
    "translate_shape",
    "scale_shape",
    "reverse_shape",
    "signed_area",
    "ensure_ccw",
    "orient_holes",
    "shape_radius",
]
