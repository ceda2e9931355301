"""Errors, argument validation and codec helpers."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

import numpy as np

from .geometry import AXES, Axis
from .history import Move

if TYPE_CHECKING:
    from .engine import RubikCube


class CubeError(Exception):
    """Base class for cube engine errors."""


class InvalidArgument(CubeError, ValueError):
    """Raised when a caller passes a bad axis, layer, speed or count."""


class InvalidDimension(InvalidArgument):
    """Raised when a cube is initialized with dimensions < 2."""


class NullFactory(InvalidArgument):
    """Raised when no usable piece factory is given."""


class InvalidHistoryCapacity(InvalidArgument):
    """Raised when the history capacity is negative."""


class AlreadyInitialized(CubeError, RuntimeError):
    """Raised when initialize() is called a second time."""


class NotInitialized(CubeError, RuntimeError):
    """Raised when the cube is used before initialize()."""


_MOVE_RE = re.compile(r"^\s*([xyzXYZ])(\d+)([+-])\s*$")


def validate_axis(axis: Axis | str | int | tuple | list | np.ndarray) -> Axis:
    """Accept an Axis, its name, its index or a positive unit vector."""
    if isinstance(axis, Axis):
        return axis
    if isinstance(axis, str):
        try:
            return Axis[axis.strip().upper()]
        except KeyError as exc:
            raise InvalidArgument(f"Unknown axis: {axis!r}") from exc
    if isinstance(axis, (int, np.integer)) and not isinstance(axis, bool):
        if 0 <= int(axis) < len(AXES):
            return AXES[int(axis)]
        raise InvalidArgument(f"Axis index must be in range 0..2, got {axis}")
    if isinstance(axis, (tuple, list, np.ndarray)):
        arr = np.asarray(axis)
        if arr.shape == (3,):
            for candidate in AXES:
                if np.array_equal(arr, candidate.vector):
                    return candidate
        raise InvalidArgument(f"Axis must be one of the positive unit vectors, got {axis!r}")
    raise InvalidArgument(f"Unsupported axis value: {axis!r}")


def validate_layer(layer: int, border: int) -> int:
    if isinstance(layer, bool) or not isinstance(layer, (int, np.integer)):
        raise InvalidArgument(f"Layer must be an integer, got {layer!r}")
    if layer < 0 or layer > border:
        raise InvalidArgument(f"Layer must be in range 0..{border}, got {layer}")
    return int(layer)


def validate_speed(speed: float) -> float:
    if isinstance(speed, bool) or not isinstance(speed, (int, float, np.floating, np.integer)):
        raise InvalidArgument(f"Speed must be a number, got {speed!r}")
    if not speed > 0:
        raise InvalidArgument(f"Speed must be positive, got {speed}")
    return float(speed)


def validate_count(count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count < 0:
        raise InvalidArgument("Shuffle count must be a non-negative integer")
    return int(count)


def format_move(move: Move) -> str:
    return f"{move.axis.label}{move.layer}{'+' if move.positive else '-'}"


def parse_move(token: str, border: int | None = None) -> Move:
    """Parse notation like ``X0+`` or ``z2-`` into a Move."""
    match = _MOVE_RE.match(token)
    if match is None:
        raise InvalidArgument(f"Invalid move notation: {token!r}")
    axis = Axis[match.group(1).upper()]
    layer = int(match.group(2))
    if border is not None:
        validate_layer(layer, border)
    return Move(axis=axis, layer=layer, positive=match.group(3) == "+")


def snapshot(cube: RubikCube) -> tuple:
    """Hashable view of the grid: (coordinate, piece home, orientation) per cell."""
    return tuple(
        (coord, piece.home, tuple(int(v) for v in piece.orientation.reshape(-1)))
        for coord, piece in sorted(cube.grid.items())
    )


def piece_to_json(piece: Any) -> dict[str, Any]:
    return {
        "home": list(piece.home),
        "coordinate": list(piece.coordinate),
        "orientation": np.asarray(piece.orientation).astype(int).tolist(),
    }
