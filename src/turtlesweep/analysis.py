"""Path segment analysis: how far each straight run is pulled back at corners.

Each forward move is a segment.  When a segment meets a corner, the part of
the sweep within ``radius * tan(angle / 2)`` of the corner would overlap the
next segment, so the segment is shortened by that amount on that side.  This
is the same construction as a mitred line join in 2D vector graphics.

Open paths never shorten the very start or the very end.  Closed paths
shorten both ends of every segment and attribute any missing turn (the
"closing angle") to the seam between the last and the first segment.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .path import Forward, is_rotation, rotation_angle
from .settings import DEFAULT_SETTINGS, SweepSettings


@dataclass(frozen=True)
class Segment:
    distance: float
    shorten_start: float
    shorten_end: float
    rotations_after: Tuple = ()
    is_first: bool = False
    is_last: bool = False
    closing_angle: float = 0.0

    @property
    def effective_distance(self) -> float:
        return self.distance - self.shorten_start - self.shorten_end


def shorten(angle_deg: float, radius: float,
            settings: SweepSettings = DEFAULT_SETTINGS) -> float:
    """Pull-back distance for a corner of ``angle_deg`` on a profile of ``radius``.

    Angles under ``settings.corner_threshold_deg`` are negligible and give 0.
    The half angle is clamped to ``settings.max_half_angle_deg`` so a near
    reversal does not blow up.
    """

    angle = abs(angle_deg)
    if angle < settings.corner_threshold_deg:
        return 0.0
    half = min(math.radians(angle) / 2.0, math.radians(settings.max_half_angle_deg))
    return radius * math.tan(half)


def _total_angle(rotations: Sequence) -> float:
    return sum(rotation_angle(r) for r in rotations)


def _forward_indices(cmds: Sequence) -> List[int]:
    return [i for i, c in enumerate(cmds) if isinstance(c, Forward)]


def analyze_open_path(commands: Sequence, radius: float,
                      settings: SweepSettings = DEFAULT_SETTINGS) -> List[Segment]:
    cmds = list(commands)
    n = len(cmds)
    forwards = _forward_indices(cmds)
    segments = []
    for fwd_idx, idx in enumerate(forwards):
        is_first = fwd_idx == 0
        is_last = fwd_idx == len(forwards) - 1

        before = []
        i = idx - 1
        while i >= 0 and is_rotation(cmds[i]):
            before.append(cmds[i])
            i -= 1

        after = []
        i = idx + 1
        while i < n and is_rotation(cmds[i]):
            after.append(cmds[i])
            i += 1

        segments.append(Segment(
            distance=cmds[idx].distance,
            shorten_start=0.0 if is_first else shorten(_total_angle(before), radius, settings),
            shorten_end=0.0 if is_last else shorten(_total_angle(after), radius, settings),
            rotations_after=tuple(after),
            is_first=is_first,
            is_last=is_last,
        ))
    return segments


def closing_angle(commands: Sequence,
                  settings: SweepSettings = DEFAULT_SETTINGS) -> float:
    """Turn (degrees) missing for the explicit rotations to close the loop."""

    remainder = math.fmod(_total_angle(commands), 360.0)
    if remainder < settings.closing_tolerance_deg:
        return 0.0
    return 360.0 - remainder


def analyze_closed_path(commands: Sequence, radius: float,
                        settings: SweepSettings = DEFAULT_SETTINGS) -> List[Segment]:
    cmds = list(commands)
    n = len(cmds)
    forwards = _forward_indices(cmds)
    closing = closing_angle(cmds, settings)
    segments = []
    for seg_idx, idx in enumerate(forwards):
        is_first = seg_idx == 0
        is_last = seg_idx == len(forwards) - 1

        # rotation runs wrap around the end of the command list
        before = []
        for step in range(1, n):
            c = cmds[(idx - step) % n]
            if not is_rotation(c):
                break
            before.append(c)

        after = []
        for step in range(1, n):
            c = cmds[(idx + step) % n]
            if not is_rotation(c):
                break
            after.append(c)

        angle_before = _total_angle(before) + (closing if is_first else 0.0)
        angle_after = _total_angle(after) + (closing if is_last else 0.0)
        segments.append(Segment(
            distance=cmds[idx].distance,
            shorten_start=shorten(angle_before, radius, settings),
            shorten_end=shorten(angle_after, radius, settings),
            rotations_after=tuple(after),
            is_first=is_first,
            is_last=is_last,
            closing_angle=closing,
        ))
    return segments


__all__ = [
    "Segment",
    "shorten",
    "closing_angle",
    "analyze_open_path",
    "analyze_closed_path",
]
