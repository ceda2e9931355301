"""Animation support for disc rotations: the pivot, easing and tick sources."""

from __future__ import annotations

import asyncio
import math

import numpy as np

from .geometry import Axis, quarter_turn, rotation_matrix


def smoothstep01(t: float) -> float:
    t = max(0.0, min(1.0, t))
    return t * t * (3.0 - 2.0 * t)


class AsyncioTicker:
    """Yields once per frame on the running event loop and reports elapsed seconds."""

    def __init__(self, rate: float = 60.0):
        if rate <= 0:
            raise ValueError("Tick rate must be positive")
        self.interval = 1.0 / rate
        self._last: float | None = None

    async def tick(self) -> float:
        loop = asyncio.get_running_loop()
        start = loop.time() if self._last is None else self._last
        await asyncio.sleep(self.interval)
        now = loop.time()
        self._last = now
        return max(now - start, 0.0)

    def reset(self) -> None:
        self._last = None


class FixedTicker:
    """Yields to the loop without sleeping and reports a constant delta."""

    def __init__(self, dt: float = 1.0 / 60.0):
        self.dt = dt
        self.ticks = 0

    async def tick(self) -> float:
        await asyncio.sleep(0)
        self.ticks += 1
        return self.dt

    def reset(self) -> None:
        pass


class Pivot:
    """Temporary grouping that carries the visual rotation of one disc.

    The logical orientation of an attached piece already includes the target
    quarter turn, so the displayed transform undoes it and reapplies the
    current interpolated rotation.
    """

    def __init__(self):
        self.rotation = np.eye(3, dtype=np.float64)
        self.pieces: list = []
        self.axis: Axis | None = None
        self._angle = 0.0
        self._target = np.eye(3, dtype=np.int8)

    @property
    def active(self) -> bool:
        return self.axis is not None

    def attach(self, pieces: list, axis: Axis, positive: bool) -> None:
        self.pieces = list(pieces)
        self.axis = axis
        self._angle = math.pi / 2 if positive else -math.pi / 2
        self._target = quarter_turn(axis, positive)
        self.rotation = np.eye(3, dtype=np.float64)

    def update(self, progress: float) -> None:
        self.rotation = rotation_matrix(self.axis, self._angle * smoothstep01(progress))

    def finish(self) -> None:
        """Release the pieces and reset for reuse.

        Attached pieces already carry the target turn in their logical
        orientation, so dropping the interpolated rotation lands them on it.
        """
        self.pieces = []
        self.axis = None
        self._target = np.eye(3, dtype=np.int8)
        self.rotation = np.eye(3, dtype=np.float64)

    def holds(self, piece) -> bool:
        return any(p is piece for p in self.pieces)

    def display_orientation(self, piece) -> np.ndarray:
        return self.rotation @ self._target.T @ piece.orientation

    def display_position(self, position: np.ndarray) -> np.ndarray:
        return self.rotation @ self._target.T @ position
