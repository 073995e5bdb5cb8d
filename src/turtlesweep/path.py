"""Path commands and path recording.

A :class:`Path` is an ordered tuple of movement commands recorded ahead of
time and replayed by the extrusion drivers.  Commands are applied strictly in
order; rotations do not commute.

>>> path = PathRecorder().f(30).th(90).f(30).path()
>>> [c.name for c in path.commands]
['f', 'th', 'f']
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

from .errors import check_num
from .vecmath import Vec3


@dataclass(frozen=True)
class Forward:
    distance: float
    name = "f"

    def validate(self) -> None:
        check_num(self.distance, self.name)


@dataclass(frozen=True)
class Yaw:
    """Turn horizontally: rotate heading about up.  Positive turns left."""

    angle: float
    name = "th"

    def validate(self) -> None:
        check_num(self.angle, self.name)


@dataclass(frozen=True)
class Pitch:
    """Turn vertically: rotate heading and up about right."""

    angle: float
    name = "tv"

    def validate(self) -> None:
        check_num(self.angle, self.name)


@dataclass(frozen=True)
class Roll:
    """Rotate up about heading."""

    angle: float
    name = "tr"

    def validate(self) -> None:
        check_num(self.angle, self.name)


@dataclass(frozen=True)
class SetHeading:
    """Absolute heading/up assignment.

    Used by curve approximations; never treated as a corner.
    """

    heading: Vec3
    up: Vec3
    name = "set-heading"

    def validate(self) -> None:
        for component in tuple(self.heading) + tuple(self.up):
            check_num(component, self.name)


Rotation = Union[Yaw, Pitch, Roll, SetHeading]
Command = Union[Forward, Yaw, Pitch, Roll, SetHeading]

_ROTATIONS = (Yaw, Pitch, Roll, SetHeading)
_CORNER_ROTATIONS = (Yaw, Pitch, Roll)


def is_rotation(cmd) -> bool:
    """True for any heading-changing command, including SetHeading."""

    return isinstance(cmd, _ROTATIONS)


def is_corner_rotation(cmd) -> bool:
    """True for rotations that may form a corner needing segment shortening."""

    return isinstance(cmd, _CORNER_ROTATIONS)


def rotation_angle(cmd) -> float:
    """Absolute corner angle contributed by ``cmd`` in degrees (0 for SetHeading)."""

    if is_corner_rotation(cmd):
        return abs(cmd.angle)
    return 0.0


@dataclass(frozen=True)
class Path:
    commands: Tuple[Command, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "commands", tuple(self.commands))

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self):
        return iter(self.commands)

    def validate(self) -> None:
        """Raise ``NonFiniteInputError`` on the first non-finite argument."""

        for cmd in self.commands:
            cmd.validate()

def make_path(commands: Iterable[Command]) -> Path:
    return Path(tuple(commands))


def is_path(x) -> bool:
    return isinstance(x, Path)


def is_simple_forward_path(path: Path) -> bool:
    """Check if ``path`` is a single forward command with no turns."""

    return len(path.commands) == 1 and isinstance(path.commands[0], Forward)


def leading_rotations(commands: Sequence[Command]) -> List[Command]:
    """Rotations recorded before the first forward move."""

    out = []
    for cmd in commands:
        if isinstance(cmd, Forward):
            break
        out.append(cmd)
    return out


class PathRecorder:
    """Fluent builder that records turtle commands into a :class:`Path`.

    Arguments are validated as they are recorded, so a NaN produced by a
    script is reported at the command that received it.
    """

    def __init__(self):
        self._commands: List[Command] = []

    def _add(self, cmd: Command) -> "PathRecorder":
        cmd.validate()
        self._commands.append(cmd)
        return self

    def f(self, distance: float) -> "PathRecorder":
        return self._add(Forward(distance))

    def b(self, distance: float) -> "PathRecorder":
        check_num(distance, "b")
        return self._add(Forward(-distance))

    def th(self, angle: float) -> "PathRecorder":
        return self._add(Yaw(angle))

    def tv(self, angle: float) -> "PathRecorder":
        return self._add(Pitch(angle))

    def tr(self, angle: float) -> "PathRecorder":
        return self._add(Roll(angle))

    def set_heading(self, heading: Vec3, up: Vec3) -> "PathRecorder":
        return self._add(SetHeading(tuple(heading), tuple(up)))

    def arc_h(self, radius: float, angle: float, steps: int = 0) -> "PathRecorder":
        """Record a horizontal arc as alternating small yaws and forwards."""

        return self._arc(Yaw, "arc-h", radius, angle, steps)

    def arc_v(self, radius: float, angle: float, steps: int = 0) -> "PathRecorder":
        """Record a vertical arc as alternating small pitches and forwards."""

        return self._arc(Pitch, "arc-v", radius, angle, steps)

    def _arc(self, turn, command, radius, angle, steps):
        check_num(radius, command)
        check_num(angle, command)
        if radius <= 0 or angle == 0:
            return self
        if steps <= 0:
            steps = max(4, int(math.ceil(abs(angle) / 5.0)))
        step_angle = angle / steps
        # chord length of one step of the arc
        chord = 2.0 * radius * math.sin(math.radians(abs(step_angle)) / 2.0)
        # half-step turns on either side keep the chords centred on the arc
        self._add(turn(step_angle / 2.0))
        for i in range(steps):
            self._add(Forward(chord))
            if i < steps - 1:
                self._add(turn(step_angle))
        return self._add(turn(step_angle / 2.0))

    def path(self) -> Path:
        return Path(tuple(self._commands))


__all__ = [
    "Forward",
    "Yaw",
    "Pitch",
    "Roll",
    "SetHeading",
    "Command",
    "Rotation",
    "Path",
    "PathRecorder",
    "make_path",
    "is_path",
    "is_rotation",
    "is_corner_rotation",
    "rotation_angle",
    "is_simple_forward_path",
    "leading_rotations",
]
