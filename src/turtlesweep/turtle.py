"""Turtle state: a cursor pose plus pen, sweep settings and produced geometry.

Every command returns a new :class:`Turtle`; the original is left intact,
so a turtle can be branched freely::

    t = make_turtle()
    t = t.joint_mode("round").extrude(circle_shape(5), square_path)
    mesh = t.meshes[-1]
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional, Sequence, Tuple, Union

from .extrusion import extrude_closed_from_path, extrude_from_path
from .mesh import Mesh
from .pose import Pose
from .settings import DEFAULT_SETTINGS, JointMode, ResolutionMode, SweepSettings
from .vecmath import Vec3

Line = Tuple[Vec3, Vec3]


class PenMode(Enum):
    OFF = "off"
    LINES = "lines"


@dataclass(frozen=True)
class Turtle:
    pose: Pose = field(default_factory=Pose)
    pen_mode: PenMode = PenMode.LINES
    settings: SweepSettings = DEFAULT_SETTINGS
    material: Any = None
    lines: Tuple[Line, ...] = ()
    meshes: Tuple[Mesh, ...] = ()

    @property
    def position(self) -> Vec3:
        return self.pose.position

    @property
    def heading(self) -> Vec3:
        return self.pose.heading

    @property
    def up(self) -> Vec3:
        return self.pose.up

    # --- movement -------------------------------------------------------

    def _moved(self, pose: Pose) -> "Turtle":
        if self.pen_mode is PenMode.LINES and pose.position != self.pose.position:
            return replace(self, pose=pose,
                           lines=self.lines + ((self.pose.position, pose.position),))
        return replace(self, pose=pose)

    def f(self, dist: float) -> "Turtle":
        return self._moved(self.pose.forward(dist))

    def b(self, dist: float) -> "Turtle":
        return self._moved(self.pose.back(dist))

    def u(self, dist: float) -> "Turtle":
        return self._moved(self.pose.move_up(dist))

    def d(self, dist: float) -> "Turtle":
        return self._moved(self.pose.move_down(dist))

    def th(self, angle: float) -> "Turtle":
        return replace(self, pose=self.pose.yaw(angle))

    def tv(self, angle: float) -> "Turtle":
        return replace(self, pose=self.pose.pitch(angle))

    def tr(self, angle: float) -> "Turtle":
        return replace(self, pose=self.pose.roll(angle))

    def set_heading(self, heading: Sequence[float], up: Sequence[float]) -> "Turtle":
        return replace(self, pose=self.pose.set_heading(heading, up))

    # --- state ----------------------------------------------------------

    def pen(self, mode: Union[PenMode, str]) -> "Turtle":
        return replace(self, pen_mode=PenMode(mode))

    def joint_mode(self, mode: Union[JointMode, str]) -> "Turtle":
        return replace(self, settings=self.settings.with_joint_mode(mode))

    def resolution(self, mode: Union[ResolutionMode, str], value: float) -> "Turtle":
        return replace(self, settings=self.settings.with_resolution(mode, value))

    def with_settings(self, settings: SweepSettings) -> "Turtle":
        return replace(self, settings=settings)

    def set_material(self, material: Any) -> "Turtle":
        """Material attached to every mesh produced from now on."""

        return replace(self, material=material)

    # --- sweeps ---------------------------------------------------------

    def extrude(self, shape, path) -> "Turtle":
        return extrude_from_path(self, shape, path)

    def extrude_closed(self, shape, path) -> "Turtle":
        return extrude_closed_from_path(self, shape, path)


def make_turtle(position: Sequence[float] = (0.0, 0.0, 0.0),
                heading: Sequence[float] = (1.0, 0.0, 0.0),
                up: Sequence[float] = (0.0, 0.0, 1.0),
                settings: Optional[SweepSettings] = None) -> Turtle:
    return Turtle(pose=Pose(position, heading, up),
                  settings=settings if settings is not None else DEFAULT_SETTINGS)


__all__ = [
    "Line",
    "PenMode",
    "Turtle",
    "make_turtle",
]
