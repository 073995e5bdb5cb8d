"""Cap triangulation for sweep end rings.

We delegate to ``mapbox-earcut`` (the fast ear clipping implementation
used by Mapbox GL) for the actual triangulation.  The helpers here project
a planar 3D ring onto the coordinate plane most perpendicular to its
normal, hand the 2D contours to earcut, and map the local indices back to
global mesh indices with every triangle wound to agree with the requested
cap normal.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

import numpy as np

try:
    import mapbox_earcut as _earcut
except ImportError as exc:  # pragma: no cover - import guard
    raise ImportError(
        "mapbox-earcut must be installed to triangulate sweep caps"
    ) from exc

from .vecmath import Vec2, Vec3

logger = logging.getLogger(__name__)

Face = Tuple[int, int, int]


def project_to_2d(points: Sequence[Sequence[float]],
                  normal: Sequence[float]) -> Tuple[List[Vec2], bool]:
    """Drop the coordinate most aligned with ``normal``.

    Returns the 2D points and whether the projection keeps the winding sense
    as seen from the side ``normal`` points to.  When it does not, a
    counter-clockwise 2D triangle is clockwise about ``normal`` in 3D.
    """

    nx, ny, nz = abs(normal[0]), abs(normal[1]), abs(normal[2])
    if nz >= nx and nz >= ny:
        return [(p[0], p[1]) for p in points], normal[2] >= 0
    if ny >= nx:
        # (x, z) is a left-handed pair about +Y
        return [(p[0], p[2]) for p in points], normal[1] < 0
    return [(p[1], p[2]) for p in points], normal[0] >= 0


def earcut_triangulate(outer: Sequence[Sequence[float]],
                       holes: Iterable[Sequence[Sequence[float]]] = ()) -> List[Face]:
    """Triangulate ``outer`` minus ``holes``; indices count outer then holes."""

    coords: List[Tuple[float, float]] = [(float(x), float(y)) for x, y in outer]
    ring_ends = [len(coords)]
    for hole in holes:
        coords.extend((float(x), float(y)) for x, y in hole)
        ring_ends.append(len(coords))
    if len(outer) < 3:
        return []

    vertices = np.asarray(coords, dtype=np.float64).reshape(-1, 2)
    ends = np.asarray(ring_ends, dtype=np.uint32)
    indices = _earcut.triangulate_float64(vertices, ends)
    return [(int(indices[i]), int(indices[i + 1]), int(indices[i + 2]))
            for i in range(0, len(indices), 3)]


def _area2(pts: Sequence[Vec2], tri: Face) -> float:
    (ax, ay), (bx, by), (cx, cy) = pts[tri[0]], pts[tri[1]], pts[tri[2]]
    return (bx - ax) * (cy - ay) - (cx - ax) * (by - ay)


def _orient(pts2d: Sequence[Vec2], triangles: Iterable[Face], want_ccw: bool,
            base_index: int) -> List[Face]:
    faces: List[Face] = []
    for tri in triangles:
        a, b, c = tri
        area = _area2(pts2d, tri)
        if area != 0 and (area > 0) != want_ccw:
            b, c = c, b
        faces.append((a + base_index, b + base_index, c + base_index))
    return faces


def triangulate_cap(ring: Sequence[Vec3], base_index: int, normal: Vec3,
                    flip: bool = False) -> List[Face]:
    """Faces closing ``ring``, wound so their normals point along ``normal``.

    ``base_index`` is the global index of ``ring[0]``.  ``flip`` reverses
    the result.
    """

    if len(ring) < 3:
        logger.debug("cap skipped: ring has %d points", len(ring))
        return []
    pts2d, preserved = project_to_2d(ring, normal)
    tris = earcut_triangulate(pts2d)
    return _orient(pts2d, tris, preserved != flip, base_index)


def triangulate_cap_with_holes(outer: Sequence[Vec3], holes: Sequence[Sequence[Vec3]],
                               base_index: int, normal: Vec3,
                               flip: bool = False) -> List[Face]:
    """Like :func:`triangulate_cap` for a ring with hole rings.

    Vertices are expected in the mesh as the outer block followed by each
    hole block in order, starting at ``base_index``.
    """

    if len(outer) < 3:
        logger.debug("cap skipped: outer ring has %d points", len(outer))
        return []
    pts2d, preserved = project_to_2d(outer, normal)
    holes2d = [project_to_2d(h, normal)[0] for h in holes]
    all2d = list(pts2d)
    for h in holes2d:
        all2d.extend(h)
    tris = earcut_triangulate(pts2d, holes2d)
    return _orient(all2d, tris, preserved != flip, base_index)


__all__ = [
    "project_to_2d",
    "earcut_triangulate",
    "triangulate_cap",
    "triangulate_cap_with_holes",
]
