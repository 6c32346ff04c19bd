from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, Sequence

import numpy as np

from sdfmarch.geometry import Primitive, circle, signed_distance

if TYPE_CHECKING:
    from sdfmarch.backend import ArrayModule

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Scene:
    """Ordered, immutable collection of primitives.

    Order never changes a distance value; it only decides which primitive is
    reported as nearest when several are equally close (first one wins).
    """

    primitives: tuple[Primitive, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "primitives", tuple(self.primitives))

    def __len__(self) -> int:
        return len(self.primitives)

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self.primitives)

    @property
    def is_empty(self) -> bool:
        return not self.primitives

    def nearest(self, point: Any) -> tuple[int, float] | None:
        """Return (index, signed distance) of the closest primitive, or None if empty."""
        best: tuple[int, float] | None = None
        for i, primitive in enumerate(self.primitives):
            dist = float(signed_distance(primitive, point))
            if best is None or dist < best[1]:
                best = (i, dist)
        return best

    def min_distance(self, point: Any) -> float | None:
        """Raw minimum signed distance from point to any primitive."""
        found = self.nearest(point)
        return None if found is None else found[1]

    def distance_field(self, points: Any, xp: ArrayModule = np) -> Any:
        """Vectorized minimum signed distance over a (..., 2) batch of points."""
        if self.is_empty:
            msg = "Cannot sample the distance field of an empty scene"
            raise ValueError(msg)

        pts = xp.asarray(points, dtype=xp.float64)
        field = signed_distance(self.primitives[0], pts, xp=xp)
        for primitive in self.primitives[1:]:
            field = xp.minimum(field, signed_distance(primitive, pts, xp=xp))
        return field

    @classmethod
    def of(cls, primitives: Sequence[Primitive]) -> Scene:
        return cls(primitives=tuple(primitives))


def random_scene(
        count: int,
        width: float,
        height: float,
        radius_range: tuple[float, float] = (15.0, 100.0),
        rng: np.random.Generator | None = None,
) -> Scene:
    """Scatter `count` circles uniformly over [0, width) x [0, height)."""
    if count < 0:
        msg = f"Object count must be >= 0, got {count}"
        raise ValueError(msg)

    if width < 0.0 or height < 0.0:
        msg = f"Canvas size must be non-negative, got {width} x {height}"
        raise ValueError(msg)

    lo, hi = radius_range
    if lo < 0.0 or hi < lo:
        msg = f"Invalid radius range: {radius_range}"
        raise ValueError(msg)

    rng = np.random.default_rng() if rng is None else rng
    xs = rng.uniform(0.0, width, size=count)
    ys = rng.uniform(0.0, height, size=count)
    rs = rng.uniform(lo, hi, size=count)

    scene = Scene(primitives=tuple(circle(float(x), float(y), float(r)) for x, y, r in zip(xs, ys, rs)))
    logger.debug("Generated scene with %d circles over %.1f x %.1f", count, width, height)
    return scene
