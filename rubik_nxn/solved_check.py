"""Solved-state checks for the cube engine."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from .geometry import AXES, Axis, grid_index

if TYPE_CHECKING:
    from .engine import RubikCube

logger = logging.getLogger(__name__)

ALIGNMENT_THRESHOLD = 0.999


def _aligned_axis_index(orientation: np.ndarray, axis: Axis) -> int:
    for i in range(3):
        if abs(float(np.dot(axis.vector, orientation[:, i]))) > ALIGNMENT_THRESHOLD:
            return i
    return -1


def is_layer_solved(cube: RubikCube, axis: Axis, layer: int, debug: bool = False) -> bool:
    """A layer is solved when every piece has the reference axis pointing the same way.

    The reference is the local axis of the (0, 0) piece that lines up with
    ``axis``. That same local axis of every other piece in the layer is
    compared against it.
    """
    reference = cube.grid[grid_index(axis, layer, 0, 0)]

    aligned = _aligned_axis_index(reference.orientation, axis)
    if aligned == -1:
        # Unreachable while orientations stay snapped.
        return False
    reference_direction = reference.orientation[:, aligned]

    if debug:
        logger.debug(
            "axis=%s layer=%d matched local axis=%d direction=%s",
            axis.label, layer, aligned, reference_direction.tolist(),
        )

    for u in range(cube.dimensions):
        for v in range(cube.dimensions):
            coord = grid_index(axis, layer, u, v)
            piece = cube.grid.get(coord)
            if piece is None:
                continue
            if float(np.dot(reference_direction, piece.orientation[:, aligned])) < ALIGNMENT_THRESHOLD:
                if debug:
                    logger.debug("mismatch at %s", coord)
                return False
    return True


def is_solved(cube: RubikCube, debug: bool = False) -> bool:
    if not debug:
        return all(
            is_layer_solved(cube, axis, layer)
            for axis in AXES
            for layer in (0, cube.border)
        )
    results = {
        (axis.label, layer): is_layer_solved(cube, axis, layer, debug=True)
        for axis in AXES
        for layer in (0, cube.border)
    }
    logger.debug("layer results: %s", results)
    return all(results.values())
