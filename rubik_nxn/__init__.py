"""N x N x N disc rotation cube engine."""

from .animation import AsyncioTicker, FixedTicker
from .config import CubeConfig, load_config
from .engine import CubeEvent, RubikCube
from .geometry import Axis, rotate_2d, tangent_axes
from .history import Move, MoveHistory
from .pieces import Cublet
from .state_codec import (
    AlreadyInitialized,
    CubeError,
    InvalidArgument,
    InvalidDimension,
    InvalidHistoryCapacity,
    NotInitialized,
    NullFactory,
)

__all__ = [
    "AlreadyInitialized",
    "AsyncioTicker",
    "Axis",
    "Cublet",
    "CubeConfig",
    "CubeError",
    "CubeEvent",
    "FixedTicker",
    "InvalidArgument",
    "InvalidDimension",
    "InvalidHistoryCapacity",
    "Move",
    "MoveHistory",
    "NotInitialized",
    "NullFactory",
    "RubikCube",
    "load_config",
    "rotate_2d",
    "tangent_axes",
]
