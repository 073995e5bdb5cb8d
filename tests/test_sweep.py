import math

import pytest

from turtlesweep.geometry_checks import (
    boundary_loops,
    faces_in_range,
    normals_outward,
    signed_volume,
    surface_watertight,
)
from turtlesweep.pose import Pose
from turtlesweep.shape import circle_shape, make_shape, rect_shape
from turtlesweep.stamp import stamp_shape, stamp_shape_with_holes
from turtlesweep.sweep import (
    build_corner_mesh,
    build_segment_mesh,
    build_sweep_mesh,
    build_sweep_mesh_with_holes,
    sweep_two_shapes,
    sweep_two_shapes_with_holes,
)


def _straight_rings(shape, length=30.0, steps=1):
    pose = Pose()
    return [stamp_shape(pose.forward(length * i / steps), shape) for i in range(steps + 1)]


def _holed_shape():
    return make_shape([(-5, -5), (5, -5), (5, 5), (-5, 5)],
                      holes=[[(-1, -1), (-1, 1), (1, 1), (1, -1)]], centered=True)


def test_box_is_closed_and_outward():
    mesh = build_sweep_mesh(_straight_rings(rect_shape(10, 10)))
    assert mesh.primitive == "sweep"
    assert mesh.vertex_count == 8
    assert mesh.face_count == 12
    assert surface_watertight(mesh)
    assert normals_outward(mesh)
    assert math.isclose(signed_volume(mesh), 3000.0)


def test_uncapped_sweep_has_two_boundary_loops():
    mesh = build_sweep_mesh(_straight_rings(circle_shape(4, 12), steps=3), caps=False)
    assert faces_in_range(mesh)
    loops = boundary_loops(mesh)
    assert len(loops) == 2
    assert sorted(len(loop) for loop in loops) == [12, 12]


def test_too_few_rings_or_points():
    ring = stamp_shape(Pose(), rect_shape(1, 1))
    assert build_sweep_mesh([ring]) is None
    assert build_sweep_mesh([ring, ring], closed=True) is None
    assert build_sweep_mesh([ring[:2], ring[:2]]) is None


def test_mismatched_rings_rejected():
    a = stamp_shape(Pose(), rect_shape(1, 1))
    b = stamp_shape(Pose().forward(1), circle_shape(1, 6))
    with pytest.raises(ValueError):
        build_sweep_mesh([a, b])


def test_flip_winding_for_backward_travel():
    shape = rect_shape(4, 4)
    rings = [stamp_shape(Pose(), shape), stamp_shape(Pose().forward(-10), shape)]
    assert not normals_outward(build_sweep_mesh(rings))
    flipped = build_sweep_mesh(rings, flip_winding=True)
    assert surface_watertight(flipped)
    assert normals_outward(flipped)


def test_closed_sweep_wraps_without_caps():
    pose = Pose()
    rings = []
    for _ in range(4):
        pose = pose.forward(10)
        rings.append(stamp_shape(pose, circle_shape(2, 8)))
        pose = pose.forward(10).yaw(90)
    mesh = build_sweep_mesh(rings, closed=True, creation_pose=Pose())
    assert mesh.primitive == "sweep-closed"
    assert mesh.vertex_count == 32
    assert mesh.face_count == 4 * 8 * 2
    assert surface_watertight(mesh)
    assert mesh.creation_pose == Pose()


def test_holed_prism():
    pose = Pose()
    data = [stamp_shape_with_holes(pose, _holed_shape()),
            stamp_shape_with_holes(pose.forward(30), _holed_shape())]
    mesh = build_sweep_mesh_with_holes(data)
    assert mesh.vertex_count == 16
    assert surface_watertight(mesh)
    assert normals_outward(mesh)
    assert math.isclose(signed_volume(mesh), (100 - 4) * 30)


def test_holed_sweep_structure_must_match():
    a = stamp_shape_with_holes(Pose(), _holed_shape())
    b = stamp_shape_with_holes(Pose().forward(5), rect_shape(10, 10))
    with pytest.raises(ValueError):
        build_sweep_mesh_with_holes([a, b])
    assert sweep_two_shapes_with_holes(a, b) is None


def test_holed_uncapped_sweep_has_four_boundary_loops():
    pose = Pose()
    data = [stamp_shape_with_holes(pose.forward(d), _holed_shape()) for d in (0, 10, 20)]
    mesh = build_sweep_mesh_with_holes(data, caps=False)
    assert len(boundary_loops(mesh)) == 4


def test_two_shape_helpers():
    a = stamp_shape(Pose(), rect_shape(2, 2))
    b = stamp_shape(Pose().forward(3), rect_shape(2, 2))
    prism = sweep_two_shapes(a, b, material="pine")
    assert prism.material == "pine"
    assert surface_watertight(prism)
    assert math.isclose(signed_volume(prism), 12.0)

    segment = build_segment_mesh([a, b])
    assert segment.primitive == "segment"
    assert segment.face_count == 8
    corner = build_corner_mesh(a, b)
    assert corner.primitive == "corner"
    assert build_corner_mesh(a, b[:3]) is None


def test_shorter_diagonal_is_chosen():
    # twist the second ring so the two diagonals of each quad differ
    a = stamp_shape(Pose(), rect_shape(10, 10))
    b = stamp_shape(Pose().forward(1).roll(40), rect_shape(10, 10))
    mesh = build_segment_mesh([a, b])
    verts = mesh.vertices
    for j in range(4):
        k = (j + 1) % 4
        b0, b1, t0, t1 = j, k, 4 + j, 4 + k
        if math.dist(verts[b0], verts[t1]) <= math.dist(verts[b1], verts[t0]):
            expected = (b0, t0, t1)
        else:
            expected = (b0, t0, b1)
        assert mesh.faces[2 * j] == expected
