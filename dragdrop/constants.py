"""Constants and configuration for DragDrop diagrams.

The sizes here are the contract between hit-testing and rendering: a
render layer has to lay shapes out with the same box size that is passed
to the hit tests, or taps land on shapes the user cannot see.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import InvalidConfigurationError
from .types import Point, ToolType


DEFAULT_TOOL = ToolType.SQUARE

ENV_PREFIX = "DRAGDROP_"


@dataclass(frozen=True)
class GraphConfig:
    """Sizes and timings shared by the model, controller and renderer."""

    shape_size: float = 36.0
    outline_width: float = 3.0
    shape_box_size: float = 48.0
    touch_slop: float = 8.0
    highlight_pulses: int = 3
    highlight_interval_ms: int = 200

    def __post_init__(self) -> None:
        if self.shape_box_size <= 0:
            raise InvalidConfigurationError(f"shape_box_size must be positive, got {self.shape_box_size}")
        if self.shape_size <= 0:
            raise InvalidConfigurationError(f"shape_size must be positive, got {self.shape_size}")
        if self.shape_size > self.shape_box_size:
            raise InvalidConfigurationError("shape_size must fit inside shape_box_size")
        if self.outline_width < 0:
            raise InvalidConfigurationError(f"outline_width must not be negative, got {self.outline_width}")
        if self.touch_slop <= 0:
            raise InvalidConfigurationError(f"touch_slop must be positive, got {self.touch_slop}")
        if self.highlight_pulses < 1:
            raise InvalidConfigurationError("highlight_pulses must be at least 1")
        if self.highlight_interval_ms <= 0:
            raise InvalidConfigurationError("highlight_interval_ms must be positive")

    @property
    def half_box(self) -> Point:
        half = self.shape_box_size / 2
        return Point(half, half)

    @property
    def shape_inset(self) -> float:
        """Distance from the box edge to the drawn shape."""
        return (self.shape_box_size - self.shape_size) / 2

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GraphConfig":
        """Build a config, overriding defaults from ``DRAGDROP_*`` variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Raises:
            InvalidConfigurationError: If a variable is set but not a number,
                or the resulting values are out of range.
        """
        if environ is None:
            environ = os.environ
        overrides = {}
        for field_name, env_name, convert in (
            ("shape_size", "SHAPE_SIZE", float),
            ("outline_width", "OUTLINE_WIDTH", float),
            ("shape_box_size", "BOX_SIZE", float),
            ("touch_slop", "TOUCH_SLOP", float),
            ("highlight_pulses", "HIGHLIGHT_PULSES", int),
            ("highlight_interval_ms", "HIGHLIGHT_INTERVAL_MS", int),
        ):
            raw = environ.get(ENV_PREFIX + env_name)
            if raw is None or not raw.strip():
                continue
            try:
                overrides[field_name] = convert(raw.strip())
            except ValueError as exc:
                raise InvalidConfigurationError(
                    f"{ENV_PREFIX}{env_name} is not a valid number: {raw!r}"
                ) from exc
        return cls(**overrides)


DEFAULT_CONFIG = GraphConfig()
