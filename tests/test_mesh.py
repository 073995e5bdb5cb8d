import math

import numpy as np
import pytest

from turtlesweep.errors import MeshValidationError
from turtlesweep.mesh import Mesh, assert_mesh, bounding_box, checked_mesh
from turtlesweep.pose import Pose


def _tetra():
    verts = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]
    faces = [(0, 2, 1), (0, 1, 3), (1, 2, 3), (0, 3, 2)]
    return Mesh(verts, faces)


def test_mesh_normalizes_to_tuples():
    mesh = Mesh([[0, 0, 0], [1, 0, 0], [0, 1, 0]], [[0, 1, 2]])
    assert mesh.vertices == ((0, 0, 0), (1, 0, 0), (0, 1, 0))
    assert mesh.faces == ((0, 1, 2),)
    assert mesh.vertex_count == 3
    assert mesh.face_count == 1
    assert mesh.primitive == "extrusion"


def test_as_arrays():
    verts, faces = _tetra().as_arrays()
    assert verts.shape == (4, 3)
    assert faces.shape == (4, 3)
    assert verts.dtype == np.float64
    assert faces.dtype == np.int64


def test_bounding_box():
    lo, hi = _tetra().bounding_box()
    assert lo == (0.0, 0.0, 0.0)
    assert hi == (1.0, 1.0, 1.0)
    with pytest.raises(ValueError):
        bounding_box(Mesh((), ()))


def test_assert_mesh_accepts_valid_mesh():
    mesh = _tetra()
    assert assert_mesh(mesh) is mesh


@pytest.mark.parametrize("verts, faces, match", [
    ([(0, 0, 0), (1, 0, 0), (0, 1, math.nan)], [(0, 1, 2)], "vertex 2"),
    ([(0, 0, 0), (1, 0, 0), (0, 1)], [(0, 1, 2)], "vertex 2"),
    ([(0, 0, 0), (1, 0, 0), (0, 1, 0)], [(0, 1, 3)], "out of range"),
    ([(0, 0, 0), (1, 0, 0), (0, 1, 0)], [(0, 1)], "not a triangle"),
    ([(0, 0, 0), (1, 0, 0), (0, 1, 0)], [(0, 1, 2.0)], "non-integer"),
])
def test_assert_mesh_rejects(verts, faces, match):
    with pytest.raises(MeshValidationError, match=match):
        assert_mesh(Mesh(verts, faces))


def test_checked_mesh_can_skip_validation():
    mesh = checked_mesh([(0, 0, 0)], [(0, 1, 2)], check=False)
    assert mesh.face_count == 1
    if __debug__:
        with pytest.raises(MeshValidationError):
            checked_mesh([(0, 0, 0)], [(0, 1, 2)])


def test_checked_mesh_carries_tags():
    pose = Pose(position=(1, 2, 3))
    mesh = checked_mesh([(0, 0, 0), (1, 0, 0), (0, 1, 0)], [(0, 1, 2)],
                        primitive="sweep", creation_pose=pose, material="oak")
    assert mesh.primitive == "sweep"
    assert mesh.creation_pose == pose
    assert mesh.material == "oak"


def test_to_trimesh():
    trimesh = pytest.importorskip("trimesh")
    tm = _tetra().to_trimesh()
    assert isinstance(tm, trimesh.Trimesh)
    assert tm.is_watertight
    assert math.isclose(tm.volume, 1.0 / 6.0)
