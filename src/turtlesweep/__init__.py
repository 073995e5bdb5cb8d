# -*- coding: utf-8 -*-
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("turtlesweep")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

from .errors import MeshValidationError, NonFiniteInputError, SweepError
from .mesh import Mesh, assert_mesh
from .path import Path, PathRecorder, make_path
from .pose import Pose
from .settings import JointMode, Resolution, ResolutionMode, SweepSettings, load_settings
from .shape import Shape, circle_shape, make_shape, ngon_shape, polygon_shape, rect_shape, star_shape
from .turtle import PenMode, Turtle, make_turtle
from .extrusion import extrude_closed_from_path, extrude_from_path

__all__ = [
    "__version__",
    "SweepError",
    "NonFiniteInputError",
    "MeshValidationError",
    "Mesh",
    "assert_mesh",
    "Path",
    "PathRecorder",
    "make_path",
    "Pose",
    "JointMode",
    "Resolution",
    "ResolutionMode",
    "SweepSettings",
    "load_settings",
    "Shape",
    "make_shape",
    "circle_shape",
    "rect_shape",
    "polygon_shape",
    "ngon_shape",
    "star_shape",
    "PenMode",
    "Turtle",
    "make_turtle",
    "extrude_from_path",
    "extrude_closed_from_path",
]
