"""Cublet model: the visible pieces that populate the cube shell."""

from __future__ import annotations

import numpy as np

# Face order used for visibility: -x, +x, -y, +y, -z, +z
FACE_ORDER = ("-x", "+x", "-y", "+y", "-z", "+z")
N_FACES = len(FACE_ORDER)


class Cublet:
    """Default piece implementation.

    The engine only relies on ``coordinate``, ``orientation`` and ``home`` being
    assignable, plus the optional ``set_face_visible`` hook. Hosts may supply
    their own factory returning any object with that shape.
    """

    def __init__(self, coordinate: tuple[int, int, int], position: np.ndarray | None = None):
        self.home = tuple(coordinate)
        self.coordinate = tuple(coordinate)
        self.orientation = np.eye(3, dtype=np.int8)
        self.position = np.zeros(3) if position is None else np.asarray(position, dtype=np.float64)
        self.faces_visible = [True] * N_FACES

    def set_face_visible(self, index: int, visible: bool) -> None:
        self.faces_visible[index] = bool(visible)

    def __repr__(self) -> str:
        return f"Cublet(home={self.home}, coordinate={self.coordinate})"


def centered_position(coordinate: tuple[int, int, int], border: int) -> np.ndarray:
    """Visual position of a grid coordinate with the cube centered on the origin."""
    return np.asarray(coordinate, dtype=np.float64) - border / 2.0


def face_visibility(coordinate: tuple[int, int, int], border: int) -> list[bool]:
    x, y, z = coordinate
    return [x == 0, x == border, y == 0, y == border, z == 0, z == border]
