from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from sdfmarch.geometry import WHITE, Color
from sdfmarch.math_utils import Point


@dataclass(frozen=True, slots=True)
class MarchingOptions:
    """Bounds that cut a ray off. Any field left as None disables that bound.

    x_range, y_range:
        Inclusive (min, max) window the ray tip must stay inside.
    max_len:
        Cap on the cumulative path length travelled by the ray.
    """

    x_range: tuple[float, float] | None = None
    y_range: tuple[float, float] | None = None
    max_len: float | None = None

    @classmethod
    def for_canvas(cls, width: float, height: float) -> MarchingOptions:
        return cls(
            x_range=(0.0, float(width)),
            y_range=(0.0, float(height)),
            max_len=math.hypot(width, height),
        )

    def is_outside(self, position: Point, path_length: float) -> bool:
        x, y = position
        if self.x_range is not None and (x < self.x_range[0] or x > self.x_range[1]):
            return True
        if self.y_range is not None and (y < self.y_range[0] or y > self.y_range[1]):
            return True
        return self.max_len is not None and path_length >= self.max_len


class RayStatus(Enum):
    ALIVE = "alive"
    COLLIDED = "collided"
    OUT_OF_BOUNDS = "out_of_bounds"

    @property
    def terminal(self) -> bool:
        return self is not RayStatus.ALIVE


@dataclass(frozen=True, slots=True)
class RaySnapshot:
    """State of a ray at one step, as handed to the rendering sink."""

    origin: Point
    position: Point
    min_dist: float
    step: int
    color: Color = WHITE


@dataclass(frozen=True, slots=True)
class MarchResult:
    origin: Point
    position: Point
    min_dist: float
    step: int
    collided: bool
    status: RayStatus
    color: Color = WHITE
