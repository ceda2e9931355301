"""Core N x N x N cube engine: disc rotations, undo, shuffling and notifications."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

import numpy as np

from .animation import AsyncioTicker, FixedTicker, Pivot
from .geometry import Axis, grid_index, is_shell, quarter_turn, rotate_2d, snap_orientation
from .history import Move, MoveHistory
from .pieces import Cublet, centered_position, face_visibility
from .shuffle import generate_shuffle
from .solved_check import is_layer_solved, is_solved
from .state_codec import (
    AlreadyInitialized,
    InvalidDimension,
    InvalidHistoryCapacity,
    NotInitialized,
    NullFactory,
    format_move,
    piece_to_json,
    snapshot,
    validate_axis,
    validate_count,
    validate_layer,
    validate_speed,
)

if TYPE_CHECKING:
    from .config import CubeConfig

logger = logging.getLogger(__name__)

Coordinate = tuple[int, int, int]
Listener = Callable[["RubikCube"], Any]


class CubeEvent(Enum):
    CHANGED = "changed"
    SOLVED = "solved"


class RubikCube:
    """A cube of D x D x D cublets whose discs can be rotated 90 degrees at a time.

    Responsibilities:
    - creating the cube and all its cublets (``initialize``)
    - rotating discs and keeping track of these moves (``rotate``)
    - undoing the last recorded move (``undo``)
    - shuffling the cube (``shuffle``)

    Only one rotation can be in flight at a time. Requests made while a disc
    is turning are dropped, not queued. A cube is initialized once; to start
    over, create a new instance.
    """

    def __init__(
        self,
        ticker: AsyncioTicker | FixedTicker | None = None,
        rotation_speed: float = 1.0,
        seed: int | None = None,
    ):
        self.is_initialized = False
        self.dimensions = 0
        self.border = -1
        self.grid: dict[Coordinate, Any] = {}
        self.is_rotating = False
        self.history = MoveHistory(0)
        self.pivot = Pivot()
        self.ticker = ticker if ticker is not None else AsyncioTicker()
        self.rotation_speed = validate_speed(rotation_speed)

        self._rng = np.random.default_rng(seed)
        self._listeners: dict[CubeEvent, list[Listener]] = {event: [] for event in CubeEvent}
        self._tasks: set[asyncio.Task] = set()
        self._pending_animation: asyncio.Task | None = None

    @classmethod
    def from_config(
        cls,
        config: CubeConfig,
        piece_factory: Callable[..., Any] = Cublet,
        ticker: AsyncioTicker | FixedTicker | None = None,
    ) -> RubikCube:
        cube = cls(
            ticker=ticker if ticker is not None else AsyncioTicker(config.tick_rate),
            rotation_speed=config.rotation_speed,
            seed=config.seed,
        )
        cube.initialize(
            config.dimensions,
            piece_factory,
            config.history_size,
            hide_interior_faces=config.hide_interior_faces,
        )
        return cube

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------
    def initialize(
        self,
        dimensions: int,
        piece_factory: Callable[..., Any] | None = Cublet,
        history_capacity: int = 50,
        hide_interior_faces: bool = True,
    ) -> None:
        """Create one piece per shell coordinate of a ``dimensions``-sized cube.

        Grid index (0, 0, 0) is the bottom-left-back piece and (border, border,
        border) the top-right-front one. Piece positions are centered on the
        origin, so a 3x3x3 cube has pieces at -1, 0 and 1 along each axis.
        """
        if self.is_initialized:
            raise AlreadyInitialized("Initialized cube cannot be initialized again")
        if isinstance(dimensions, bool) or not isinstance(dimensions, (int, np.integer)) or dimensions < 2:
            raise InvalidDimension(f"The dimensions of the cube cannot be smaller than 2, got {dimensions!r}")
        if piece_factory is None or not callable(piece_factory):
            raise NullFactory("The piece factory cannot be None")
        if (
            isinstance(history_capacity, bool)
            or not isinstance(history_capacity, (int, np.integer))
            or history_capacity < 0
        ):
            raise InvalidHistoryCapacity(f"The max history cannot be smaller than 0, got {history_capacity!r}")

        dimensions = int(dimensions)
        border = dimensions - 1
        grid: dict[Coordinate, Any] = {}
        for x in range(dimensions):
            for y in range(dimensions):
                for z in range(dimensions):
                    coord = (x, y, z)
                    if not is_shell(coord, border):
                        continue
                    position = centered_position(coord, border)
                    piece = piece_factory(coord, position)
                    if piece is None:
                        raise NullFactory(f"Piece factory returned None for {coord}")
                    piece.home = coord
                    piece.coordinate = coord
                    piece.orientation = np.eye(3, dtype=np.int8)
                    piece.position = position
                    if hide_interior_faces and hasattr(piece, "set_face_visible"):
                        for index, visible in enumerate(face_visibility(coord, border)):
                            piece.set_face_visible(index, visible)
                    grid[coord] = piece

        self.dimensions = dimensions
        self.border = border
        self.grid = grid
        self.history = MoveHistory(int(history_capacity))
        self.is_initialized = True
        logger.info(
            "initialized %dx%dx%d cube with %d pieces (history=%d)",
            dimensions, dimensions, dimensions, len(grid), history_capacity,
        )

    def _require_initialized(self) -> None:
        if not self.is_initialized:
            raise NotInitialized("Cube has not been initialized")

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------
    def add_listener(self, event: CubeEvent, callback: Listener) -> None:
        self._listeners[event].append(callback)

    def remove_listener(self, event: CubeEvent, callback: Listener) -> None:
        if callback in self._listeners[event]:
            self._listeners[event].remove(callback)

    def _emit(self, event: CubeEvent) -> None:
        for callback in list(self._listeners[event]):
            callback(self)

    # ------------------------------------------------------------------
    # Disc rotation
    # ------------------------------------------------------------------
    def _begin_rotation(
        self,
        axis: Axis | str | int,
        layer: int,
        positive: bool,
        speed: float | None,
        record: bool,
    ) -> float | None:
        """Validate, then apply the logical part of a rotation.

        Returns the animation speed, or None when the request was ignored
        because another rotation is in flight.
        """
        self._require_initialized()
        axis = validate_axis(axis)
        layer = validate_layer(layer, self.border)
        speed = self.rotation_speed if speed is None else validate_speed(speed)

        if self.is_rotating:
            logger.debug("ignored rotation %s%d while another disc is rotating", axis.label, layer)
            return None
        self.is_rotating = True

        move = Move(axis=axis, layer=layer, positive=bool(positive))
        if record and self.history.capacity > 0:
            self.history.record(move)

        moved = self._apply_logical_rotation(move)
        self.pivot.attach(moved, move.axis, move.positive)
        logger.debug("rotated %s (%d pieces, record=%s)", format_move(move), len(moved), record)
        return speed

    def _apply_logical_rotation(self, move: Move) -> list:
        """Reindex the grid for one disc and turn every piece in it.

        Pieces are first staged at their rotated (u, v) slot and only copied
        back once the whole disc has been read, since source and destination
        slots overlap within the same disc.
        """
        border = self.border
        center = border / 2.0
        turn = quarter_turn(move.axis, move.positive)
        outer_layer = move.layer == 0 or move.layer == border

        staged: dict[Coordinate, Any] = {}
        for u in range(self.dimensions):
            for v in range(self.dimensions):
                if not (outer_layer or u == 0 or v == 0 or u == border or v == border):
                    continue
                piece = self.grid[grid_index(move.axis, move.layer, u, v)]
                ru, rv = rotate_2d(u, v, center, move.positive)
                destination = grid_index(move.axis, move.layer, int(round(ru)), int(round(rv)))
                piece.orientation = snap_orientation(turn @ piece.orientation)
                staged[destination] = piece

        for destination, piece in staged.items():
            self.grid[destination] = piece
            piece.coordinate = destination
            piece.position = centered_position(destination, border)
        return list(staged.values())

    async def _animate(self, speed: float) -> None:
        """Drive the pivot from identity to the target quarter turn, one tick at a time."""
        completed = False
        self._pending_animation = None
        self.ticker.reset()
        try:
            progress = 0.0
            while progress < 1.0:
                progress += await self.ticker.tick() * speed
                self.pivot.update(progress)
            completed = True
        finally:
            self.pivot.finish()
            self.is_rotating = False

        if completed:
            self._emit(CubeEvent.CHANGED)
            if self._listeners[CubeEvent.SOLVED] and self.is_solved():
                logger.info("cube solved")
                self._emit(CubeEvent.SOLVED)

    async def rotate(
        self,
        axis: Axis | str | int,
        layer: int,
        positive: bool,
        speed: float | None = None,
        record: bool = True,
    ) -> bool:
        """Rotate disc ``layer`` along ``axis`` by 90 degrees and wait for the animation.

        ``axis`` is one of the positive principal axes. ``positive`` selects a
        right-handed quarter turn around it; depending on which side of the
        cube you look from this appears clockwise or counter-clockwise.
        ``speed`` is measured in quarter turns per second. Returns False if the
        request was ignored because a rotation was already in flight.
        """
        speed = self._begin_rotation(axis, layer, positive, speed, record)
        if speed is None:
            return False
        await self._animate(speed)
        return True

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _spawn_animation(self, speed: float) -> asyncio.Task:
        task = self._spawn(self._animate(speed))
        self._pending_animation = task
        task.add_done_callback(self._release_if_never_started)
        return task

    def _release_if_never_started(self, task: asyncio.Task) -> None:
        # A task cancelled before its first step never reaches _animate's cleanup.
        if task is self._pending_animation:
            self._pending_animation = None
            self.pivot.finish()
            self.is_rotating = False

    def start_rotate(
        self,
        axis: Axis | str | int,
        layer: int,
        positive: bool,
        speed: float | None = None,
        record: bool = True,
    ) -> asyncio.Task | None:
        """Fire-and-forget variant of :meth:`rotate`.

        The grid is already updated when this returns; the returned task only
        runs the animation. Must be called from a running event loop.
        """
        asyncio.get_running_loop()
        speed = self._begin_rotation(axis, layer, positive, speed, record)
        if speed is None:
            return None
        return self._spawn_animation(speed)

    # ------------------------------------------------------------------
    # Undo
    # ------------------------------------------------------------------
    async def undo(self, speed: float | None = None) -> Move | None:
        """Undo the last recorded move. The undo itself is never recorded."""
        self._require_initialized()
        if speed is not None:
            validate_speed(speed)
        if self.is_rotating:
            logger.debug("ignored undo while another disc is rotating")
            return None
        move = self.history.pop_last()
        if move is None:
            return None
        inverse = move.inverse()
        await self.rotate(inverse.axis, inverse.layer, inverse.positive, speed, record=False)
        return move

    def start_undo(self, speed: float | None = None) -> asyncio.Task | None:
        asyncio.get_running_loop()
        self._require_initialized()
        if speed is not None:
            validate_speed(speed)
        if self.is_rotating or len(self.history) == 0:
            return None
        inverse = self.history.pop_last().inverse()
        speed = self._begin_rotation(inverse.axis, inverse.layer, inverse.positive, speed, record=False)
        return self._spawn_animation(speed)

    # ------------------------------------------------------------------
    # Shuffle
    # ------------------------------------------------------------------
    async def shuffle(self, count: int, speed: float | None = None, seed: int | None = None) -> list[Move]:
        """Apply ``count`` random, unrecorded rotations one after another."""
        self._require_initialized()
        count = validate_count(count)
        if speed is not None:
            validate_speed(speed)
        if self.is_rotating:
            logger.debug("ignored shuffle while another disc is rotating")
            return []

        rng = np.random.default_rng(seed) if seed is not None else self._rng
        executed: list[Move] = []
        for move in generate_shuffle(count, self.dimensions, rng):
            if await self.rotate(move.axis, move.layer, move.positive, speed, record=False):
                executed.append(move)
        logger.debug("shuffled %d moves", len(executed))
        return executed

    def start_shuffle(self, count: int, speed: float | None = None, seed: int | None = None) -> asyncio.Task | None:
        asyncio.get_running_loop()
        self._require_initialized()
        validate_count(count)
        if speed is not None:
            validate_speed(speed)
        if self.is_rotating:
            return None
        return self._spawn(self.shuffle(count, speed, seed))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_solved(self, debug: bool = False) -> bool:
        self._require_initialized()
        return is_solved(self, debug=debug)

    def is_layer_solved(self, axis: Axis | str | int, layer: int, debug: bool = False) -> bool:
        self._require_initialized()
        return is_layer_solved(self, validate_axis(axis), validate_layer(layer, self.border), debug=debug)

    def piece_at(self, coordinate: Coordinate) -> Any:
        return self.grid[tuple(coordinate)]

    def display_orientation(self, piece: Any) -> np.ndarray:
        """Orientation to draw ``piece`` with, including any in-flight disc animation."""
        if self.pivot.active and self.pivot.holds(piece):
            return self.pivot.display_orientation(piece)
        return piece.orientation.astype(np.float64)

    def display_position(self, piece: Any) -> np.ndarray:
        position = centered_position(piece.coordinate, self.border)
        if self.pivot.active and self.pivot.holds(piece):
            return self.pivot.display_position(position)
        return position

    def snapshot(self) -> tuple:
        return snapshot(self)

    def state_payload(self) -> dict[str, Any]:
        self._require_initialized()
        return {
            "dimensions": self.dimensions,
            "rotating": self.is_rotating,
            "solved": self.is_solved(),
            "history": [format_move(m) for m in self.history.moves()],
            "pieces": [piece_to_json(self.grid[c]) for c in sorted(self.grid)],
        }
