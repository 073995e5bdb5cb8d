"""Exceptions raised by turtlesweep.

Only two things are ever raised to callers:

- ``NonFiniteInputError`` when a NaN/Infinity (or a non-number) reaches a
  movement primitive.  The message names the command and the value so the
  offending line of a script can be found.
- ``MeshValidationError`` from the development-mode structural check in
  :func:`turtlesweep.mesh.assert_mesh`.

Everything else (wrong argument types, too few points, too few rings) is a
recoverable authoring mistake and results in an unchanged turtle instead.
"""

from __future__ import annotations

import math
import numbers
from typing import Any


class SweepError(Exception):
    """Base exception for turtlesweep errors."""


class NonFiniteInputError(SweepError, ValueError):
    """A movement primitive received NaN, Infinity or a non-number."""

    def __init__(self, command: str, value: Any):
        self.command = command
        self.value = value
        super().__init__(f"({command} {value!r}): expected a number, got {_describe(value)}")


class MeshValidationError(SweepError, ValueError):
    """A produced mesh failed the structural check."""


def _describe(value: Any) -> str:
    if not _is_number(value):
        return type(value).__name__
    if math.isnan(value):
        return "NaN (bad arithmetic?)"
    return "Infinity"


def _is_number(value: Any) -> bool:
    return (not isinstance(value, bool)) and isinstance(value, numbers.Real)


def check_num(value: Any, command: str) -> float:
    """Return ``value`` as a float, or raise if it is not a finite number."""

    if not (_is_number(value) and math.isfinite(value)):
        raise NonFiniteInputError(command, value)
    return float(value)


__all__ = [
    "SweepError",
    "NonFiniteInputError",
    "MeshValidationError",
    "check_num",
]
