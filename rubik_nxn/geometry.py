"""Axis and rotation utilities shared by the disc rotation engine and the solved check."""

from __future__ import annotations

import math
from collections import deque
from enum import Enum

import numpy as np


class Axis(Enum):
    """Positive principal axes of the cube frame."""

    X = 0
    Y = 1
    Z = 2

    @property
    def vector(self) -> np.ndarray:
        vec = np.zeros(3, dtype=np.int8)
        vec[self.value] = 1
        return vec

    @property
    def label(self) -> str:
        return self.name


AXES = (Axis.X, Axis.Y, Axis.Z)

# Cyclic order x, y, z, x, y, ... so that (axis, u, v) is always right-handed.
_TANGENTS = {
    Axis.X: (Axis.Y, Axis.Z),
    Axis.Y: (Axis.Z, Axis.X),
    Axis.Z: (Axis.X, Axis.Y),
}


def tangent_axes(axis: Axis) -> tuple[Axis, Axis]:
    """Return the (u, v) axes spanning the disc perpendicular to ``axis``."""
    return _TANGENTS[axis]


def rotate_2d(u: float, v: float, center: float, positive: bool) -> tuple[float, float]:
    """Rotate (u, v) by +/-90 degrees around (center, center).

    A positive turn maps the offset (du, dv) to (-dv, du), which matches a
    right-handed quarter turn around the disc axis for the tangent order above.
    """
    du = u - center
    dv = v - center
    if positive:
        du, dv = -dv, du
    else:
        du, dv = dv, -du
    return du + center, dv + center


def grid_index(axis: Axis, layer: int, u: int, v: int) -> tuple[int, int, int]:
    """Compose a grid coordinate from a disc layer and in-disc (u, v) indices."""
    u_axis, v_axis = tangent_axes(axis)
    coord = [0, 0, 0]
    coord[axis.value] = layer
    coord[u_axis.value] = u
    coord[v_axis.value] = v
    return coord[0], coord[1], coord[2]


def quarter_turn(axis: Axis, positive: bool) -> np.ndarray:
    """Return integer rotation matrix for +/-90 around x/y/z axes."""
    if axis is Axis.X and positive:
        return np.array([[1, 0, 0], [0, 0, -1], [0, 1, 0]], dtype=np.int8)
    if axis is Axis.X:
        return np.array([[1, 0, 0], [0, 0, 1], [0, -1, 0]], dtype=np.int8)
    if axis is Axis.Y and positive:
        return np.array([[0, 0, 1], [0, 1, 0], [-1, 0, 0]], dtype=np.int8)
    if axis is Axis.Y:
        return np.array([[0, 0, -1], [0, 1, 0], [1, 0, 0]], dtype=np.int8)
    if axis is Axis.Z and positive:
        return np.array([[0, -1, 0], [1, 0, 0], [0, 0, 1]], dtype=np.int8)
    if axis is Axis.Z:
        return np.array([[0, 1, 0], [-1, 0, 0], [0, 0, 1]], dtype=np.int8)
    raise ValueError(f"Unsupported rotation: axis={axis}, positive={positive}")


def rotation_matrix(axis: Axis, angle_rad: float) -> np.ndarray:
    """Float rotation matrix, only used for the transient animation transform."""
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    if axis is Axis.X:
        return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]], dtype=np.float64)
    if axis is Axis.Y:
        return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]], dtype=np.float64)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)


def _matrix_key(mat: np.ndarray) -> tuple[int, ...]:
    return tuple(int(v) for v in mat.reshape(-1))


def _generate_cube_rotations() -> list[np.ndarray]:
    gens = [quarter_turn(axis, True) for axis in AXES]
    identity = np.eye(3, dtype=np.int8)

    mats: list[np.ndarray] = []
    seen: set[tuple[int, ...]] = set()
    q: deque[np.ndarray] = deque([identity])

    while q:
        mat = q.popleft()
        key = _matrix_key(mat)
        if key in seen:
            continue
        seen.add(key)
        mats.append(mat)
        for g in gens:
            q.append((g @ mat).astype(np.int8))

    if len(mats) != 24:
        raise RuntimeError(f"Expected 24 orientation matrices, got {len(mats)}")
    return mats


_CUBE_ROTATIONS = _generate_cube_rotations()
_CUBE_ROTATION_KEYS = frozenset(_matrix_key(m) for m in _CUBE_ROTATIONS)


def cube_rotations() -> list[np.ndarray]:
    """The 24 exact orientations a cublet can be in."""
    return [m.copy() for m in _CUBE_ROTATIONS]


def snap_orientation(matrix: np.ndarray) -> np.ndarray:
    """Round an orientation to the nearest exact orthogonal cube frame.

    Raises ValueError if the rounded matrix is not one of the 24 cube rotations,
    which means the input was not within rounding distance of a valid frame.
    """
    snapped = np.rint(np.asarray(matrix, dtype=np.float64)).astype(np.int8)
    if _matrix_key(snapped) not in _CUBE_ROTATION_KEYS:
        raise ValueError(f"Orientation is not a multiple-of-90 rotation: {matrix!r}")
    return snapped


def is_shell(coord: tuple[int, int, int], border: int) -> bool:
    return any(c == 0 or c == border for c in coord)
