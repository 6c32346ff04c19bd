from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from sdfmarch.math_utils import Point, as_point, as_vec2
from sdfmarch.protocols import SDF, Drawable2D

Color = tuple[int, ...]

WHITE: Color = (255, 255, 255)


class PrimitiveKind(Enum):
    CIRCLE = "circle"
    RECTANGLE = "rectangle"


@dataclass(frozen=True, slots=True)
class Primitive(SDF, Drawable2D):
    """Immutable 2D shape described by a kind tag and its plain data.

    position:
        Center of the shape.
    scale:
        ``(r, r)`` for circles, half extents ``(w/2, h/2)`` for rectangles.
    color:
        Display attribute only, never read by the marcher.
    """

    kind: PrimitiveKind
    position: Point
    scale: Point
    color: Color = WHITE

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", as_point(as_vec2(self.position)))
        object.__setattr__(self, "scale", as_point(as_vec2(self.scale)))
        if self.scale[0] < 0.0 or self.scale[1] < 0.0:
            msg = f"Primitive scale must be non-negative, got {self.scale}"
            raise ValueError(msg)

    @property
    def radius(self) -> float:
        return self.scale[0]

    @property
    def size(self) -> Point:
        """Full (width, height) of the bounding box."""
        return 2.0 * self.scale[0], 2.0 * self.scale[1]

    def sdf(self, p: Any) -> float:
        return float(signed_distance(self, p))

    def polyline(self, num: int = 600) -> Any:
        cx, cy = self.position
        if self.kind is PrimitiveKind.CIRCLE:
            theta = np.linspace(0.0, 2.0 * np.pi, num, dtype=np.float64)
            return np.stack([cx + np.cos(theta) * self.radius, cy + np.sin(theta) * self.radius], axis=-1)

        hx, hy = self.scale
        return np.array(
            [
                [cx - hx, cy - hy],
                [cx + hx, cy - hy],
                [cx + hx, cy + hy],
                [cx - hx, cy + hy],
                [cx - hx, cy - hy],
            ],
            dtype=np.float64,
        )


def circle(x: float, y: float, radius: float, color: Color = WHITE) -> Primitive:
    return Primitive(kind=PrimitiveKind.CIRCLE, position=(x, y), scale=(radius, radius), color=color)


def rectangle(x: float, y: float, width: float, height: float, color: Color = WHITE) -> Primitive:
    """Axis-aligned rectangle centered at (x, y) with full extents width x height."""
    return Primitive(
        kind=PrimitiveKind.RECTANGLE,
        position=(x, y),
        scale=(0.5 * width, 0.5 * height),
        color=color,
    )


def _circle_distance(xp: Any, p: Any, center: Any, radius: float) -> Any:
    return xp.linalg.norm(p - center, axis=-1) - radius


def _box_distance(xp: Any, p: Any, center: Any, half: Any) -> Any:
    # Centered box SDF. Exact outside, negative depth inside.
    q = xp.abs(p - center) - half
    outside = xp.linalg.norm(xp.maximum(q, 0.0), axis=-1)
    inside = xp.minimum(xp.max(q, axis=-1), 0.0)
    return outside + inside


def signed_distance(primitive: Primitive, p: Any, xp: Any = np) -> Any:
    """Signed distance from p to primitive: negative inside, zero on the boundary.

    p may be a single point (2,) or a batch (..., 2); the result has shape (...).
    """
    pts = xp.asarray(p, dtype=xp.float64)
    center = xp.asarray(primitive.position, dtype=xp.float64)

    if primitive.kind is PrimitiveKind.CIRCLE:
        return _circle_distance(xp, pts, center, primitive.radius)
    if primitive.kind is PrimitiveKind.RECTANGLE:
        # NOTE: exact SDF of the centered box. Reading position/width as min/max
        # bounds instead does not give a distance to the drawn rectangle.
        return _box_distance(xp, pts, center, xp.asarray(primitive.scale, dtype=xp.float64))

    msg = f"Unsupported primitive kind: {primitive.kind}"
    raise ValueError(msg)
