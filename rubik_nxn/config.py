"""Cube configuration and YAML loading."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml


@dataclass
class CubeConfig:
    """Settings for creating and driving a cube.

    Speeds are measured in 90 degree disc rotations per second.
    """

    dimensions: int = 3
    history_size: int = 50  # 0 disables undo
    hide_interior_faces: bool = True
    shuffle_on_start: bool = False
    shuffle_count: int = 20
    shuffle_speed: float = 5.0
    rotation_speed: float = 1.0
    undo_speed: float = 1.0
    tick_rate: float = 60.0
    min_dimensions: int = 2
    max_dimensions: int = 9
    seed: int | None = None

    def validate(self) -> CubeConfig:
        if self.min_dimensions < 2 or self.max_dimensions < self.min_dimensions:
            raise ValueError(
                f"Invalid dimension range {self.min_dimensions}..{self.max_dimensions}"
            )
        if not self.min_dimensions <= self.dimensions <= self.max_dimensions:
            raise ValueError(
                f"dimensions must be in range {self.min_dimensions}..{self.max_dimensions}, got {self.dimensions}"
            )
        for name in ("history_size", "shuffle_count"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        for name in ("shuffle_speed", "rotation_speed", "undo_speed", "tick_rate"):
            if not getattr(self, name) > 0:
                raise ValueError(f"{name} must be positive")
        return self

    def merged(self, **overrides: Any) -> CubeConfig:
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values).validate()


def config_from_dict(data: dict[str, Any]) -> CubeConfig:
    known = {f.name for f in fields(CubeConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    return CubeConfig(**data).validate()


def load_config(path: str | Path) -> CubeConfig:
    """Load YAML config. An empty file yields the defaults."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return config_from_dict(data)
