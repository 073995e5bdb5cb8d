"""Path drivers: turn a shape and a recorded path into a sweep mesh.

Both drivers walk the analysed segments while threading the cursor pose:

1. stamp a start ring at the very beginning and after every corner
   (otherwise the previous end ring is reused, and a round joint whose
   last fillet ring already sits there needs no new one);
2. stamp the end ring at the shortened end of the segment;
3. apply the rotations that follow the segment and, when the heading
   really changed, append smoothing or corner rings;
4. move the cursor to where the next segment starts.

The ring list is then handed to the sweep assembler.  Shapes with holes
carry :class:`~turtlesweep.stamp.RingData` through the same walk.

A driver never raises for an unusable shape or path; it logs at DEBUG and
returns the turtle unchanged.  Non-finite numbers in the path do raise
:class:`~turtlesweep.errors.NonFiniteInputError`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, List, Optional, Sequence

from .analysis import Segment, analyze_closed_path, analyze_open_path
from .corners import corner_rings, ring_centroid, smoothing_rings
from .mesh import Mesh
from .path import is_corner_rotation, is_path, is_simple_forward_path, leading_rotations
from .pose import Pose, apply_rotations
from .settings import SweepSettings
from .shape import Shape, is_shape, orient_holes, shape_radius
from .stamp import stamp_shape, stamp_shape_with_holes
from .sweep import build_sweep_mesh, build_sweep_mesh_with_holes, sweep_two_shapes_with_holes
from .vecmath import Vec3, angle_between, dot, magnitude, v_add, v_scale, v_sub

if TYPE_CHECKING:  # pragma: no cover
    from .turtle import Turtle

logger = logging.getLogger(__name__)

# headings closer than this (cosine) count as unchanged
_SAME_HEADING_COS = 0.9998
# radians of heading mismatch before a closed loop gets a closing corner
_CLOSING_TOLERANCE = 0.1
# rings whose points all lie this close are the same ring
_COINCIDENT_TOLERANCE = 1e-7


@dataclass
class _Walk:
    rings: list
    pose: Pose


class _Profile:
    """Stamping and centroid access for plain rings or ring data."""

    def __init__(self, shape: Shape):
        self.shape = shape
        self.with_holes = shape.has_holes

    def stamp(self, pose: Pose):
        if self.with_holes:
            return stamp_shape_with_holes(pose, self.shape)
        return stamp_shape(pose, self.shape)

    def centroid(self, ring) -> Vec3:
        return ring_centroid(ring.outer if self.with_holes else ring)

    def coincident(self, a, b) -> bool:
        if self.with_holes:
            pairs = list(zip((a.outer,) + tuple(a.holes), (b.outer,) + tuple(b.holes)))
        else:
            pairs = [(a, b)]
        return all(_same_points(ra, rb) for ra, rb in pairs)


def _same_points(a, b) -> bool:
    return len(a) == len(b) and all(
        magnitude(v_sub(p, q)) <= _COINCIDENT_TOLERANCE for p, q in zip(a, b))


def _heading_change(old: Vec3, new: Vec3) -> Optional[float]:
    if dot(old, new) < _SAME_HEADING_COS:
        return angle_between(old, new)
    return None


def _has_corner(seg: Segment, heading_angle: Optional[float],
                settings: SweepSettings) -> bool:
    return (heading_angle is not None
            and any(is_corner_rotation(c) for c in seg.rotations_after)
            and heading_angle > math.radians(settings.corner_threshold_deg))


def _walk(pose: Pose, profile: _Profile, segments: Sequence[Segment], radius: float,
          settings: SweepSettings, closed: bool) -> _Walk:
    rings: list = []
    n = len(segments)
    prev_had_corner = False
    for i, seg in enumerate(segments):
        is_last = i == n - 1
        if closed and i == 0 and seg.shorten_start > 0:
            pose = pose.forward(seg.shorten_start)

        if i == 0 or prev_had_corner:
            start_ring = profile.stamp(pose)
            # a round joint already ends on the next start ring
            if not (rings and profile.coincident(rings[-1], start_ring)):
                rings.append(start_ring)

        end_pos = v_add(pose.position, v_scale(pose.heading, seg.effective_distance))
        end_pose = pose.with_position(end_pos)
        end_ring = profile.stamp(end_pose)
        rings.append(end_ring)

        corner_pos = v_add(end_pos, v_scale(end_pose.heading, seg.shorten_end))
        turned = apply_rotations(end_pose.with_position(corner_pos), seg.rotations_after)
        old_heading, new_heading = end_pose.heading, turned.heading
        heading_angle = _heading_change(old_heading, new_heading)
        has_corner = _has_corner(seg, heading_angle, settings)
        # an open path's outer end never gets a joint
        joins = closed or not is_last

        smooth = []
        if heading_angle is not None and not has_corner and joins and seg.rotations_after:
            smooth = smoothing_rings(end_ring, old_heading, new_heading, radius,
                                     settings, profile.with_holes)
            rings.extend(smooth)
        if has_corner and joins:
            rings.extend(corner_rings(end_ring, corner_pos, old_heading, new_heading,
                                      radius, settings, profile.with_holes))

        if smooth:
            pose = turned.with_position(profile.centroid(smooth[-1]))
        elif joins:
            next_start = segments[(i + 1) % n].shorten_start
            pose = turned.with_position(v_add(corner_pos, v_scale(new_heading, next_start)))
        else:
            pose = turned
        prev_had_corner = has_corner
    return _Walk(rings, pose)


def _validated(shape, path, driver: str) -> bool:
    if not (is_shape(shape) and is_path(path)):
        logger.debug("%s: expected a shape and a path, got %s and %s",
                     driver, type(shape).__name__, type(path).__name__)
        return False
    # non-finite arguments raise here, before any geometry is built
    path.validate()
    if len(shape.points) < 3:
        logger.debug("%s: shape has %d points", driver, len(shape.points))
        return False
    return True


def _add_mesh(turtle: "Turtle", mesh: Optional[Mesh], pose: Pose) -> "Turtle":
    if mesh is None:
        return turtle
    if turtle.material is not None:
        mesh = replace(mesh, material=turtle.material)
    return replace(turtle, pose=pose, meshes=turtle.meshes + (mesh,))


def _is_backward(profile: _Profile, rings: Sequence, heading: Vec3, n_segments: int) -> bool:
    if n_segments != 1:
        return False
    travel = v_sub(profile.centroid(rings[-1]), profile.centroid(rings[0]))
    return dot(travel, heading) < 0


def extrude_from_path(turtle: "Turtle", shape: Shape, path) -> "Turtle":
    """Sweep ``shape`` along ``path`` as an open, capped solid.

    Returns a new turtle positioned at the end of the path with the mesh
    appended, or ``turtle`` itself when nothing could be built.
    """

    if not _validated(shape, path, "extrude"):
        return turtle
    settings = turtle.settings
    shape = orient_holes(shape)
    profile = _Profile(shape)
    creation_pose = turtle.pose
    commands = list(path.commands)
    radius = shape_radius(shape)

    start = apply_rotations(turtle.pose, leading_rotations(commands))

    if profile.with_holes and is_simple_forward_path(path):
        dist = commands[0].distance
        end = start.forward(dist)
        mesh = sweep_two_shapes_with_holes(profile.stamp(start), profile.stamp(end),
                                           creation_pose=creation_pose,
                                           flip_winding=dist < 0,
                                           check=settings.check_meshes)
        return _add_mesh(turtle, mesh, end)

    segments = analyze_open_path(commands, radius, settings)
    if not segments:
        logger.debug("extrude: path has no forward moves")
        return turtle

    walk = _walk(start, profile, segments, radius, settings, closed=False)
    if len(walk.rings) < 2:
        logger.debug("extrude: only %d rings", len(walk.rings))
        return turtle

    flip = _is_backward(profile, walk.rings, start.heading, len(segments))
    if profile.with_holes:
        mesh = build_sweep_mesh_with_holes(walk.rings, creation_pose=creation_pose,
                                           flip_winding=flip, check=settings.check_meshes)
    else:
        mesh = build_sweep_mesh(walk.rings, creation_pose=creation_pose,
                                flip_winding=flip, check=settings.check_meshes)
    return _add_mesh(turtle, mesh, walk.pose)


def extrude_closed_from_path(turtle: "Turtle", shape: Shape, path) -> "Turtle":
    """Sweep ``shape`` around ``path`` as a closed loop with no caps.

    The path is treated as cyclic: the turn after the last forward move is
    the corner into the first one.  When the recorded turns do not bring the
    heading back to where it started, a closing corner is inserted.
    """

    if not _validated(shape, path, "extrude-closed"):
        return turtle
    settings = turtle.settings
    shape = orient_holes(shape)
    profile = _Profile(shape)
    creation_pose = turtle.pose
    commands = list(path.commands)
    radius = shape_radius(shape)

    segments = analyze_closed_path(commands, radius, settings)
    if not segments:
        logger.debug("extrude-closed: path has no forward moves")
        return turtle

    start = apply_rotations(turtle.pose, leading_rotations(commands))
    walk = _walk(start, profile, segments, radius, settings, closed=True)
    rings: List = list(walk.rings)

    final_heading = walk.pose.heading
    if angle_between(final_heading, start.heading) > _CLOSING_TOLERANCE:
        last = rings[-1]
        closing = corner_rings(last, profile.centroid(last), final_heading, start.heading,
                               radius, settings, profile.with_holes)
        logger.debug("extrude-closed: %d closing corner rings", len(closing))
        rings.extend(closing)
    if len(rings) > 1 and profile.coincident(rings[-1], rings[0]):
        rings.pop()

    if len(rings) < 3:
        logger.debug("extrude-closed: only %d rings", len(rings))
        return turtle

    if profile.with_holes:
        mesh = build_sweep_mesh_with_holes(rings, closed=True, creation_pose=creation_pose,
                                           check=settings.check_meshes)
    else:
        mesh = build_sweep_mesh(rings, closed=True, creation_pose=creation_pose,
                                check=settings.check_meshes)
    return _add_mesh(turtle, mesh, walk.pose)


__all__ = [
    "extrude_from_path",
    "extrude_closed_from_path",
]
