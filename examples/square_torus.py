"""Sweep a circle around a square in each joint mode and report the result.

Usage::

    python examples/square_torus.py --side 30 --radius 10 --settings sweep.yaml
    python examples/square_torus.py --stl out   # writes out-<mode>.stl (needs trimesh)

``--settings`` takes a YAML file of sweep settings; the joint mode is
overridden per run.
"""

from __future__ import annotations

import argparse
import logging

from turtlesweep import JointMode, PathRecorder, circle_shape, load_settings, make_turtle
from turtlesweep.geometry_checks import signed_volume, surface_watertight


def square_path(side: float):
    rec = PathRecorder()
    for _ in range(4):
        rec.f(side).th(90)
    return rec.path()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--side", type=float, default=30.0)
    parser.add_argument("--radius", type=float, default=10.0)
    parser.add_argument("--segments", type=int, default=16)
    parser.add_argument("--settings", help="YAML file of sweep settings")
    parser.add_argument("--stl", help="write one STL per joint mode with this prefix")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    turtle = make_turtle()
    if args.settings:
        turtle = turtle.with_settings(load_settings(args.settings))

    shape = circle_shape(args.radius, args.segments)
    path = square_path(args.side)
    for mode in JointMode:
        mesh = turtle.joint_mode(mode).extrude_closed(shape, path).meshes[-1]
        check = surface_watertight(mesh)
        print(f"{mode.value:8s} vertices={mesh.vertex_count:5d} faces={mesh.face_count:5d} "
              f"volume={signed_volume(mesh):10.1f} watertight={bool(check)}")
        if args.stl:
            mesh.to_trimesh().export(f"{args.stl}-{mode.value}.stl")


if __name__ == "__main__":
    main()
