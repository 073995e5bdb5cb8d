"""Intermediate rings that bridge a path corner.

``ROUND`` joints rotate the ring that ends the incoming segment about a pivot
on the inside of the turn, producing a fillet.  ``TAPERED`` joints place one
ring at the corner apex, turned onto the bisector and stretched so the cross
section does not pinch.  ``FLAT`` joints add nothing.

Ring-data variants move the outer ring and every hole ring with one rigid
transform derived from the outer ring, so holes stay registered with the
outline through the corner.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from .settings import DEFAULT_SETTINGS, JointMode, SweepSettings, calc_round_steps
from .stamp import Ring, RingData
from .vecmath import (
    Vec3,
    angle_between,
    cross,
    dot,
    magnitude,
    normalize,
    rotate_point_around_axis,
    v_add,
    v_scale,
    v_sub,
)

logger = logging.getLogger(__name__)


# --- ring helpers -----------------------------------------------------------

def ring_centroid(ring: Sequence[Vec3]) -> Vec3:
    n = len(ring)
    sx = sy = sz = 0.0
    for x, y, z in ring:
        sx += x
        sy += y
        sz += z
    return sx / n, sy / n, sz / n


def translate_ring(ring: Sequence[Vec3], offset: Vec3) -> Ring:
    return tuple(v_add(pt, offset) for pt in ring)


def rotate_ring_around_axis(ring: Sequence[Vec3], pivot: Vec3, axis: Vec3,
                            angle: float) -> Ring:
    """Rotate every point about the line through ``pivot`` along ``axis``."""

    return tuple(v_add(rotate_point_around_axis(v_sub(pt, pivot), axis, angle), pivot)
                 for pt in ring)


def scale_ring_from_centroid(ring: Sequence[Vec3], factor: float,
                             center: Optional[Vec3] = None) -> Ring:
    c = ring_centroid(ring) if center is None else center
    return tuple(v_add(c, v_scale(v_sub(pt, c), factor)) for pt in ring)


def scale_ring_along_direction(ring: Sequence[Vec3], direction: Vec3, factor: float,
                               center: Optional[Vec3] = None) -> Ring:
    """Stretch ``ring`` along ``direction`` only; perpendicular offsets are kept."""

    c = ring_centroid(ring) if center is None else center
    d = normalize(direction)
    out = []
    for pt in ring:
        rel = v_sub(pt, c)
        proj = v_scale(d, dot(rel, d))
        perp = v_sub(rel, proj)
        out.append(v_add(c, v_add(perp, v_scale(proj, factor))))
    return tuple(out)


# --- round (fillet) ---------------------------------------------------------

def _fillet_frame(centroid: Vec3, old_heading: Vec3, new_heading: Vec3,
                  radius: float, eps: float):
    axis = cross(old_heading, new_heading)
    if magnitude(axis) < eps:
        return None
    axis_n = normalize(axis)
    total = angle_between(old_heading, new_heading)
    # points from the ring centre toward the centre of the turn
    inside = normalize(cross(axis_n, old_heading))
    pivot = v_add(centroid, v_scale(inside, radius))
    return pivot, axis_n, total


def generate_round_corner_rings(end_ring: Sequence[Vec3], old_heading: Vec3,
                                new_heading: Vec3, n_steps: int, radius: float,
                                settings: SweepSettings = DEFAULT_SETTINGS) -> List[Ring]:
    """Fillet rings stepping uniformly through the bend.

    Returns an empty list when the headings are colinear.
    """

    frame = _fillet_frame(ring_centroid(end_ring), old_heading, new_heading,
                          radius, settings.colinear_epsilon)
    if frame is None:
        return []
    pivot, axis, total = frame
    step = total / n_steps
    return [rotate_ring_around_axis(end_ring, pivot, axis, i * step)
            for i in range(1, n_steps + 1)]


def generate_round_corner_ring_data(end_data: RingData, old_heading: Vec3,
                                    new_heading: Vec3, n_steps: int, radius: float,
                                    settings: SweepSettings = DEFAULT_SETTINGS
                                    ) -> List[RingData]:
    frame = _fillet_frame(ring_centroid(end_data.outer), old_heading, new_heading,
                          radius, settings.colinear_epsilon)
    if frame is None:
        return []
    pivot, axis, total = frame
    step = total / n_steps
    out = []
    for i in range(1, n_steps + 1):
        angle = i * step
        out.append(RingData(
            outer=rotate_ring_around_axis(end_data.outer, pivot, axis, angle),
            holes=tuple(rotate_ring_around_axis(h, pivot, axis, angle)
                        for h in end_data.holes)))
    return out


# --- tapered (bevel) --------------------------------------------------------

def _bevel_frame(old_heading: Vec3, new_heading: Vec3, eps: float):
    axis = cross(old_heading, new_heading)
    if magnitude(axis) < eps:
        return None
    half = angle_between(old_heading, new_heading) / 2.0
    cos_half = math.cos(half)
    # 1/cos(half) grows without bound near a reversal; cap it at 2
    factor = 1.0 / cos_half if cos_half > 0.1 else 2.0
    axis_n = normalize(axis)
    stretch = normalize(cross(axis_n, normalize(v_add(old_heading, new_heading))))
    return axis_n, half, factor, stretch


def _bevel(ring, offset, corner_pos, axis, half, stretch, factor):
    moved = translate_ring(ring, offset)
    turned = rotate_ring_around_axis(moved, corner_pos, axis, half)
    return scale_ring_along_direction(turned, stretch, factor, center=corner_pos)


def generate_tapered_corner_rings(end_ring: Sequence[Vec3], corner_pos: Vec3,
                                  old_heading: Vec3, new_heading: Vec3,
                                  settings: SweepSettings = DEFAULT_SETTINGS) -> List[Ring]:
    """One bevel ring at ``corner_pos`` on the bisector of the turn."""

    frame = _bevel_frame(old_heading, new_heading, settings.colinear_epsilon)
    if frame is None:
        return []
    axis, half, factor, stretch = frame
    offset = v_sub(corner_pos, ring_centroid(end_ring))
    return [_bevel(end_ring, offset, corner_pos, axis, half, stretch, factor)]


def generate_tapered_corner_ring_data(end_data: RingData, corner_pos: Vec3,
                                      old_heading: Vec3, new_heading: Vec3,
                                      settings: SweepSettings = DEFAULT_SETTINGS
                                      ) -> List[RingData]:
    frame = _bevel_frame(old_heading, new_heading, settings.colinear_epsilon)
    if frame is None:
        return []
    axis, half, factor, stretch = frame
    offset = v_sub(corner_pos, ring_centroid(end_data.outer))
    return [RingData(
        outer=_bevel(end_data.outer, offset, corner_pos, axis, half, stretch, factor),
        holes=tuple(_bevel(h, offset, corner_pos, axis, half, stretch, factor)
                    for h in end_data.holes))]


# --- dispatch ---------------------------------------------------------------

def corner_rings(end_ring, corner_pos: Vec3, old_heading: Vec3, new_heading: Vec3,
                 radius: float, settings: SweepSettings = DEFAULT_SETTINGS,
                 with_holes: bool = False) -> list:
    """Corner rings for the joint mode in ``settings``.

    ``end_ring`` is a :class:`Ring`, or a :class:`RingData` when
    ``with_holes`` is set.
    """

    mode = settings.joint_mode
    if mode is JointMode.FLAT:
        return []
    if mode is JointMode.ROUND:
        bend = math.degrees(angle_between(old_heading, new_heading))
        steps = calc_round_steps(settings.resolution, bend)
        logger.debug("round joint: %.1f deg in %d steps", bend, steps)
        if with_holes:
            return generate_round_corner_ring_data(end_ring, old_heading, new_heading,
                                                   steps, radius, settings)
        return generate_round_corner_rings(end_ring, old_heading, new_heading,
                                           steps, radius, settings)
    if mode is JointMode.TAPERED:
        if with_holes:
            return generate_tapered_corner_ring_data(end_ring, corner_pos, old_heading,
                                                     new_heading, settings)
        return generate_tapered_corner_rings(end_ring, corner_pos, old_heading,
                                             new_heading, settings)
    raise ValueError(f"unhandled joint mode: {mode}")


def smoothing_rings(end_ring, old_heading: Vec3, new_heading: Vec3, radius: float,
                    settings: SweepSettings = DEFAULT_SETTINGS,
                    with_holes: bool = False) -> list:
    """Automatic fillet for a sub-threshold heading change.

    Uses one ring per ``settings.smooth_step_deg`` of bend whatever the
    joint mode, so curve approximations stay smooth.
    """

    bend = angle_between(old_heading, new_heading)
    steps = max(1, int(math.ceil(bend / math.radians(settings.smooth_step_deg))))
    if with_holes:
        return generate_round_corner_ring_data(end_ring, old_heading, new_heading,
                                               steps, radius, settings)
    return generate_round_corner_rings(end_ring, old_heading, new_heading,
                                       steps, radius, settings)


__all__ = [
    "ring_centroid",
    "translate_ring",
    "rotate_ring_around_axis",
    "scale_ring_from_centroid",
    "scale_ring_along_direction",
    "generate_round_corner_rings",
    "generate_round_corner_ring_data",
    "generate_tapered_corner_rings",
    "generate_tapered_corner_ring_data",
    "corner_rings",
    "smoothing_rings",
]
