"""Sweep configuration: joint mode, resolution and numeric thresholds.

All settings are immutable.  A turtle carries one :class:`SweepSettings`
instance and replaces it (``dataclasses.replace``) when a setting changes.
Settings can also be read from a YAML mapping::

    joint_mode: round
    resolution:
      mode: angle_step
      value: 10
    corner_threshold_deg: 10.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Union

import yaml


class JointMode(Enum):
    """How a path corner is bridged."""

    FLAT = "flat"
    ROUND = "round"
    TAPERED = "tapered"


class ResolutionMode(Enum):
    """How the number of fillet steps is derived."""

    FIXED_COUNT = "fixed_count"          # value = segments per full turn
    ANGLE_STEP = "angle_step"            # value = degrees per step
    STEPS_PER_ANGLE = "steps_per_angle"  # value = steps used for any corner


@dataclass(frozen=True)
class Resolution:
    mode: ResolutionMode = ResolutionMode.FIXED_COUNT
    value: float = 16

    def __post_init__(self):
        if not isinstance(self.mode, ResolutionMode):
            object.__setattr__(self, "mode", ResolutionMode(self.mode))
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise ValueError(f"bad resolution value: {self.value!r}")
        if not math.isfinite(self.value) or self.value <= 0:
            raise ValueError(f"resolution value must be positive, got {self.value}")


@dataclass(frozen=True)
class SweepSettings:
    """Per-sweep configuration.

    ``corner_threshold_deg`` and ``smooth_step_deg`` are empirical constants:
    rotations below the threshold are treated as straight (no shortening, no
    corner rings), and sub-threshold heading changes get one smoothing ring
    per ``smooth_step_deg`` of bend.
    """

    joint_mode: JointMode = JointMode.FLAT
    resolution: Resolution = field(default_factory=Resolution)
    corner_threshold_deg: float = 10.0
    smooth_step_deg: float = 15.0
    max_half_angle_deg: float = 87.5
    colinear_epsilon: float = 1e-3
    closing_tolerance_deg: float = 1.0
    check_meshes: bool = True

    def __post_init__(self):
        if not isinstance(self.joint_mode, JointMode):
            object.__setattr__(self, "joint_mode", JointMode(self.joint_mode))
        if not 0 < self.max_half_angle_deg < 90:
            raise ValueError("max_half_angle_deg must be in (0, 90)")
        if self.smooth_step_deg <= 0:
            raise ValueError("smooth_step_deg must be positive")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SweepSettings":
        """Build settings from a plain mapping (e.g. parsed YAML)."""

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown sweep settings: {sorted(unknown)}")
        kwargs = dict(data)
        res = kwargs.get("resolution")
        if isinstance(res, Mapping):
            kwargs["resolution"] = Resolution(**res)
        return cls(**kwargs)

    def with_joint_mode(self, mode: Union[JointMode, str]) -> "SweepSettings":
        return replace(self, joint_mode=JointMode(mode))

    def with_resolution(self, mode: Union[ResolutionMode, str],
                        value: float) -> "SweepSettings":
        return replace(self, resolution=Resolution(ResolutionMode(mode), value))


DEFAULT_SETTINGS = SweepSettings()


def load_settings(path: Union[str, Path]) -> SweepSettings:
    """Read :class:`SweepSettings` from a YAML file."""

    text = Path(path).read_text()
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"{path}: expected a mapping of sweep settings")
    return SweepSettings.from_mapping(data)


def calc_round_steps(resolution: Resolution, angle_deg: float) -> int:
    """Number of fillet rings for a bend of ``angle_deg``; never fewer than 2."""

    angle = abs(angle_deg)
    mode = resolution.mode
    if mode is ResolutionMode.FIXED_COUNT:
        # scale with the bend: 90 degrees uses a quarter of the full-turn count
        return max(2, int(resolution.value * angle / 360.0))
    if mode is ResolutionMode.ANGLE_STEP:
        return max(2, int(math.ceil(angle / resolution.value)))
    if mode is ResolutionMode.STEPS_PER_ANGLE:
        return max(2, int(resolution.value))
    raise ValueError(f"unhandled resolution mode: {mode}")


__all__ = [
    "JointMode",
    "ResolutionMode",
    "Resolution",
    "SweepSettings",
    "DEFAULT_SETTINGS",
    "load_settings",
    "calc_round_steps",
]
