"""Move records and the ring-buffer move history used for undo."""

from __future__ import annotations

from dataclasses import dataclass

from .geometry import Axis


@dataclass(frozen=True)
class Move:
    axis: Axis
    layer: int
    positive: bool

    def inverse(self) -> Move:
        return Move(axis=self.axis, layer=self.layer, positive=not self.positive)


class MoveHistory:
    """Fixed-capacity circular history of moves.

    Once full, the next record overwrites the oldest move. A capacity of 0
    disables the history entirely.
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError("History capacity cannot be negative")
        self._moves: list[Move | None] = [None] * capacity
        self._index = 0  # where the next move is stored
        self._size = 0

    @property
    def capacity(self) -> int:
        return len(self._moves)

    def __len__(self) -> int:
        return self._size

    def record(self, move: Move) -> None:
        if not self._moves:
            return
        self._moves[self._index] = move
        self._index = (self._index + 1) % len(self._moves)
        self._size = min(self._size + 1, len(self._moves))

    def pop_last(self) -> Move | None:
        if self._size == 0:
            return None
        self._index = (self._index - 1) % len(self._moves)
        self._size -= 1
        move = self._moves[self._index]
        self._moves[self._index] = None
        return move

    def moves(self) -> list[Move]:
        """Return recorded moves from oldest to newest."""
        start = self._index - self._size
        return [self._moves[(start + i) % len(self._moves)] for i in range(self._size)]
