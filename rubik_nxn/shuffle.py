"""Random shuffle sequences for the cube."""

from __future__ import annotations

from typing import Iterator

import numpy as np

from .geometry import AXES
from .history import Move


def generate_shuffle(count: int, dimensions: int, rng: np.random.Generator) -> Iterator[Move]:
    """Yield ``count`` random moves, never turning the same axis twice in a row.

    When the drawn axis equals the previous one the next axis in x, y, z order
    is used instead, so shuffles do not pile up turns on a single axis. The
    "previous" axis for the first move is itself a random draw.
    """
    last_axis = int(rng.integers(0, len(AXES)))
    for _ in range(count):
        axis = int(rng.integers(0, len(AXES)))
        if axis == last_axis:
            axis = (axis + 1) % len(AXES)
        last_axis = axis
        yield Move(
            axis=AXES[axis],
            layer=int(rng.integers(0, dimensions)),
            positive=bool(rng.random() < 0.5),
        )
