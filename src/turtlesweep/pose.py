"""Cursor pose: position plus an orthonormal heading/up frame.

The pose is a value.  Every movement or turn returns a new :class:`Pose`;
nothing is modified in place.  The right vector is always ``heading x up``.

The default pose sits at the origin facing +X with +Z up, so 2D profiles
stamped at the start of a sweep lie in the YZ plane.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from .errors import check_num
from .path import Forward, Pitch, Roll, SetHeading, Yaw
from .vecmath import (
    Vec3,
    cross,
    deg_to_rad,
    normalize,
    rotate_around_axis,
    v_add,
    v_scale,
    vec3,
)


@dataclass(frozen=True)
class Pose:
    position: Vec3 = (0.0, 0.0, 0.0)
    heading: Vec3 = (1.0, 0.0, 0.0)
    up: Vec3 = (0.0, 0.0, 1.0)

    def __post_init__(self):
        object.__setattr__(self, "position", vec3(self.position))
        object.__setattr__(self, "heading", vec3(self.heading))
        object.__setattr__(self, "up", vec3(self.up))

    @property
    def right(self) -> Vec3:
        return cross(self.heading, self.up)

    def with_position(self, position: Sequence[float]) -> "Pose":
        return replace(self, position=vec3(position))

    # --- movement -------------------------------------------------------

    def _move(self, direction: Vec3, dist: float) -> "Pose":
        return replace(self, position=v_add(self.position, v_scale(direction, dist)))

    def forward(self, dist: float) -> "Pose":
        """Move along heading.  Negative distances move backward."""

        return self._move(self.heading, check_num(dist, "f"))

    def back(self, dist: float) -> "Pose":
        return self._move(self.heading, -check_num(dist, "b"))

    def move_up(self, dist: float) -> "Pose":
        return self._move(self.up, check_num(dist, "u"))

    def move_down(self, dist: float) -> "Pose":
        return self._move(self.up, -check_num(dist, "d"))

    # --- rotation -------------------------------------------------------

    def yaw(self, angle: float) -> "Pose":
        """Rotate heading about up (positive turns left)."""

        rad = deg_to_rad(check_num(angle, "th"))
        return replace(self, heading=rotate_around_axis(self.heading, self.up, rad))

    def pitch(self, angle: float) -> "Pose":
        """Rotate heading and up about right (positive pitches up)."""

        rad = deg_to_rad(check_num(angle, "tv"))
        right = normalize(self.right)
        return replace(self,
                       heading=rotate_around_axis(self.heading, right, rad),
                       up=rotate_around_axis(self.up, right, rad))

    def roll(self, angle: float) -> "Pose":
        """Rotate up about heading."""

        rad = deg_to_rad(check_num(angle, "tr"))
        return replace(self, up=rotate_around_axis(self.up, self.heading, rad))

    def set_heading(self, heading: Sequence[float], up: Sequence[float]) -> "Pose":
        for component in tuple(heading) + tuple(up):
            check_num(component, "set-heading")
        return replace(self, heading=normalize(vec3(heading)), up=normalize(vec3(up)))

    def apply(self, cmd) -> "Pose":
        """Apply a single path command."""

        if isinstance(cmd, Forward):
            return self.forward(cmd.distance)
        if isinstance(cmd, Yaw):
            return self.yaw(cmd.angle)
        if isinstance(cmd, Pitch):
            return self.pitch(cmd.angle)
        if isinstance(cmd, Roll):
            return self.roll(cmd.angle)
        if isinstance(cmd, SetHeading):
            return self.set_heading(cmd.heading, cmd.up)
        raise TypeError(f"unknown path command: {cmd!r}")


def apply_rotations(pose: Pose, rotations: Iterable) -> Pose:
    """Replay rotation commands on ``pose``; forward moves are ignored."""

    for cmd in rotations:
        if isinstance(cmd, Forward):
            continue
        pose = pose.apply(cmd)
    return pose


__all__ = [
    "Pose",
    "apply_rotations",
]
