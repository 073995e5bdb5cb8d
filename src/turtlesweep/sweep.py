"""Assemble ring sequences into triangle meshes.

Vertex layout is ring-major: ring ``i`` occupies indices
``[i * stride, (i + 1) * stride)`` where ``stride`` is the number of points
per ring.  For ring data the block is the outer contour followed by each
hole contour in order.

Each quad between consecutive rings is split along its shorter diagonal,
which keeps twisted or strongly curved sections from folding.  With a
counter-clockwise profile the side faces wind outward; hole contours run
clockwise so their faces wind into the tunnel, which is outward for the
solid.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

from .corners import ring_centroid
from .mesh import Face, Mesh, checked_mesh
from .pose import Pose
from .stamp import Ring, RingData
from .triangulator import triangulate_cap, triangulate_cap_with_holes
from .vecmath import Vec3, dot, normalize, v_scale, v_sub

logger = logging.getLogger(__name__)


def _quad(verts: Sequence[Vec3], b0: int, b1: int, t0: int, t1: int,
          flip: bool) -> Tuple[Face, Face]:
    d0 = v_sub(verts[b0], verts[t1])
    d1 = v_sub(verts[b1], verts[t0])
    if dot(d0, d0) <= dot(d1, d1):
        if flip:
            return (b0, t1, t0), (b0, b1, t1)
        return (b0, t0, t1), (b0, t1, b1)
    if flip:
        return (b0, b1, t0), (t0, b1, t1)
    return (b0, t0, b1), (t0, t1, b1)


def _contour_sides(verts: Sequence[Vec3], base: int, next_base: int,
                   offset: int, count: int, flip: bool) -> List[Face]:
    faces: List[Face] = []
    for j in range(count):
        k = (j + 1) % count
        faces.extend(_quad(verts,
                           base + offset + j, base + offset + k,
                           next_base + offset + j, next_base + offset + k,
                           flip))
    return faces


def _side_faces(verts: Sequence[Vec3], n_rings: int, stride: int,
                contours: Sequence[Tuple[int, int]], closed: bool,
                flip: bool) -> List[Face]:
    """Side faces for every ``(offset, count)`` contour in the ring block."""

    faces: List[Face] = []
    spans = n_rings if closed else n_rings - 1
    for i in range(spans):
        base = i * stride
        next_base = ((i + 1) % n_rings) * stride
        for offset, count in contours:
            faces.extend(_contour_sides(verts, base, next_base, offset, count, flip))
    return faces


def _end_normals(centroids: Sequence[Vec3]) -> Tuple[Vec3, Vec3]:
    bottom = v_scale(normalize(v_sub(centroids[1], centroids[0])), -1.0)
    top = normalize(v_sub(centroids[-1], centroids[-2]))
    return bottom, top


def build_sweep_mesh(rings: Sequence[Ring], closed: bool = False,
                     creation_pose: Optional[Pose] = None, caps: bool = True,
                     flip_winding: bool = False, *, material: Any = None,
                     check: bool = True) -> Optional[Mesh]:
    """Join ``rings`` into one mesh.

    Open sweeps are capped at both ends (unless ``caps`` is false); cap
    normals follow the local tangent at each end.  Closed sweeps connect the
    last ring back to the first and are never capped; the first ring must
    not be repeated at the end.  ``flip_winding`` reverses the side faces
    for sweeps that travel against the stamping heading.

    Returns ``None`` for fewer than 2 rings (3 when closed) or fewer than 3
    profile points.
    """

    n_rings = len(rings)
    if n_rings < 2 or (closed and n_rings < 3):
        logger.debug("sweep skipped: %d rings", n_rings)
        return None
    n_verts = len(rings[0])
    if n_verts < 3:
        logger.debug("sweep skipped: profile has %d points", n_verts)
        return None
    if any(len(r) != n_verts for r in rings):
        raise ValueError("all rings of a sweep must have the same number of points")

    vertices = [pt for ring in rings for pt in ring]
    faces = _side_faces(vertices, n_rings, n_verts, [(0, n_verts)], closed, flip_winding)

    if closed:
        return checked_mesh(vertices, faces, primitive="sweep-closed",
                            creation_pose=creation_pose, material=material, check=check)

    if caps:
        bottom, top = _end_normals([ring_centroid(rings[0]), ring_centroid(rings[1]),
                                    ring_centroid(rings[-2]), ring_centroid(rings[-1])])
        faces.extend(triangulate_cap(rings[0], 0, bottom))
        faces.extend(triangulate_cap(rings[-1], (n_rings - 1) * n_verts, top))
    return checked_mesh(vertices, faces, primitive="sweep",
                        creation_pose=creation_pose, material=material, check=check)


def build_sweep_mesh_with_holes(ring_data: Sequence[RingData], closed: bool = False,
                                creation_pose: Optional[Pose] = None,
                                flip_winding: bool = False, *, caps: bool = True,
                                material: Any = None, check: bool = True) -> Optional[Mesh]:
    """Ring-data counterpart of :func:`build_sweep_mesh`.

    Every entry must share the hole structure of the first one.
    """

    n_rings = len(ring_data)
    if n_rings < 2 or (closed and n_rings < 3):
        logger.debug("sweep skipped: %d rings", n_rings)
        return None
    first = ring_data[0]
    if len(first.outer) < 3:
        logger.debug("sweep skipped: profile has %d points", len(first.outer))
        return None
    structure = first.structure()
    if any(rd.structure() != structure for rd in ring_data):
        raise ValueError("all ring data of a sweep must share one hole structure")

    stride = sum(structure)
    contours = []
    offset = 0
    for count in structure:
        if count >= 3:
            contours.append((offset, count))
        offset += count

    vertices = []
    for rd in ring_data:
        vertices.extend(rd.outer)
        for hole in rd.holes:
            vertices.extend(hole)
    faces = _side_faces(vertices, n_rings, stride, contours, closed, flip_winding)

    if closed:
        return checked_mesh(vertices, faces, primitive="sweep-closed",
                            creation_pose=creation_pose, material=material, check=check)

    if caps:
        last = ring_data[-1]
        bottom, top = _end_normals([ring_centroid(first.outer),
                                    ring_centroid(ring_data[1].outer),
                                    ring_centroid(ring_data[-2].outer),
                                    ring_centroid(last.outer)])
        faces.extend(triangulate_cap_with_holes(first.outer, first.holes, 0, bottom))
        faces.extend(triangulate_cap_with_holes(last.outer, last.holes,
                                                (n_rings - 1) * stride, top))
    return checked_mesh(vertices, faces, primitive="sweep",
                        creation_pose=creation_pose, material=material, check=check)


def build_segment_mesh(rings: Sequence[Ring], flip_winding: bool = False) -> Optional[Mesh]:
    """Side faces only, for pieces that are joined to other meshes later."""

    mesh = build_sweep_mesh(rings, caps=False, flip_winding=flip_winding)
    if mesh is None:
        return None
    return Mesh(mesh.vertices, mesh.faces, "segment")


def build_corner_mesh(ring1: Ring, ring2: Ring, flip_winding: bool = False) -> Optional[Mesh]:
    if len(ring1) != len(ring2):
        return None
    mesh = build_sweep_mesh([ring1, ring2], caps=False, flip_winding=flip_winding)
    if mesh is None:
        return None
    return Mesh(mesh.vertices, mesh.faces, "corner")


def sweep_two_shapes_with_holes(data1: RingData, data2: RingData, *,
                                creation_pose: Optional[Pose] = None,
                                flip_winding: bool = False,
                                material: Any = None, check: bool = True) -> Optional[Mesh]:
    """Capped prism between two stamped ring-data entries."""

    if data1.structure() != data2.structure():
        return None
    return build_sweep_mesh_with_holes([data1, data2], creation_pose=creation_pose,
                                       flip_winding=flip_winding, material=material,
                                       check=check)


def sweep_two_shapes(ring1: Ring, ring2: Ring, **kwargs) -> Optional[Mesh]:
    return sweep_two_shapes_with_holes(RingData(tuple(ring1)), RingData(tuple(ring2)), **kwargs)


__all__ = [
    "build_sweep_mesh",
    "build_sweep_mesh_with_holes",
    "build_segment_mesh",
    "build_corner_mesh",
    "sweep_two_shapes",
    "sweep_two_shapes_with_holes",
]
