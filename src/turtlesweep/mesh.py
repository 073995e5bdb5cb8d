"""Triangle mesh value produced by the sweep assembler."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from .errors import MeshValidationError
from .pose import Pose
from .vecmath import Vec3

Face = Tuple[int, int, int]


@dataclass(frozen=True)
class Mesh:
    """Indexed triangle mesh.

    ``faces`` index into ``vertices`` and are wound counter-clockwise when
    seen from outside the solid.  ``creation_pose`` records the cursor pose
    the sweep started from; ``material`` is carried through untouched.
    """

    vertices: Tuple[Vec3, ...]
    faces: Tuple[Face, ...]
    primitive: str = "extrusion"
    creation_pose: Optional[Pose] = None
    material: Any = None

    def __post_init__(self):
        object.__setattr__(self, "vertices", tuple(tuple(v) for v in self.vertices))
        object.__setattr__(self, "faces", tuple(tuple(f) for f in self.faces))

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def face_count(self) -> int:
        return len(self.faces)

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(vertices, faces)`` as ``float64 (N, 3)`` / ``int64 (M, 3)``."""

        verts = np.asarray(self.vertices, dtype=np.float64).reshape(-1, 3)
        faces = np.asarray(self.faces, dtype=np.int64).reshape(-1, 3)
        return verts, faces

    def bounding_box(self) -> Tuple[Vec3, Vec3]:
        return bounding_box(self)

    def to_trimesh(self):
        """Convert to a :class:`trimesh.Trimesh` (requires the ``trimesh`` extra)."""

        try:
            import trimesh
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError(
                "trimesh is required for Mesh.to_trimesh(); install turtlesweep[trimesh]"
            ) from exc

        verts, faces = self.as_arrays()
        return trimesh.Trimesh(vertices=verts, faces=faces, process=False)


def bounding_box(mesh: Mesh) -> Tuple[Vec3, Vec3]:
    """Axis-aligned ``(min, max)`` corners of the mesh vertices."""

    if not mesh.vertices:
        raise ValueError("bounding_box of an empty mesh")
    verts, _ = mesh.as_arrays()
    lo = verts.min(axis=0)
    hi = verts.max(axis=0)
    return (float(lo[0]), float(lo[1]), float(lo[2])), (float(hi[0]), float(hi[1]), float(hi[2]))


def _is_real(x) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


def assert_mesh(mesh: Mesh) -> Mesh:
    """Structural check of a freshly built mesh.

    Vertices must be 3-tuples of finite numbers and faces 3-tuples of
    integers indexing existing vertices.  Returns the mesh so it can wrap a
    constructor call.
    """

    n = len(mesh.vertices)
    for i, v in enumerate(mesh.vertices):
        if len(v) != 3 or not all(_is_real(c) and math.isfinite(c) for c in v):
            raise MeshValidationError(f"vertex {i} is not a finite 3-vector: {v!r}")
    for i, f in enumerate(mesh.faces):
        if len(f) != 3:
            raise MeshValidationError(f"face {i} is not a triangle: {f!r}")
        for idx in f:
            if not isinstance(idx, numbers.Integral) or isinstance(idx, bool):
                raise MeshValidationError(f"face {i} has a non-integer index: {f!r}")
            if not 0 <= idx < n:
                raise MeshValidationError(
                    f"face {i} index {idx} out of range for {n} vertices")
    return mesh


def checked_mesh(vertices: Sequence[Vec3], faces: Sequence[Face], *, primitive: str = "extrusion",
                 creation_pose: Optional[Pose] = None, material: Any = None,
                 check: bool = True) -> Mesh:
    """Build a :class:`Mesh`, running :func:`assert_mesh` in debug runs."""

    mesh = Mesh(tuple(vertices), tuple(faces), primitive, creation_pose=creation_pose,
                material=material)
    if __debug__ and check:
        assert_mesh(mesh)
    return mesh


__all__ = [
    "Face",
    "Mesh",
    "bounding_box",
    "assert_mesh",
    "checked_mesh",
]
