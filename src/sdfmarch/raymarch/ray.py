from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterator

import numpy as np

from sdfmarch.geometry import WHITE, Color
from sdfmarch.math_utils import Point, as_point, as_vec2
from sdfmarch.raymarch.config import MarchingOptions, MarchResult, RaySnapshot, RayStatus

if TYPE_CHECKING:
    from sdfmarch.scene import Scene

logger = logging.getLogger(__name__)


class Ray:
    """Single sphere-tracing probe stepped one march at a time.

    The tip is always ``origin + offset``; it is derived on every read and never
    cached. ``min_dist`` is only refreshed by :meth:`calc_min_dist`, so a march
    steps by whatever distance was last computed.

    History is stored oldest-first and exposed newest-first via
    :attr:`history` and :meth:`trail`.
    """

    COLLISION_THRESHOLD: float = 0.1

    def __init__(
            self,
            origin: Any,
            direction: Any,
            scene: Scene | None = None,
            offset: Any = (0.0, 0.0),
            collision_threshold: float = COLLISION_THRESHOLD,
            color: Color = WHITE,
    ) -> None:
        """Initialise the ray, optionally computing its first distance against scene."""
        self.origin = as_vec2(origin)
        self.direction = as_vec2(direction)
        self.offset = as_vec2(offset)
        self.collision_threshold = float(collision_threshold)
        self.color = color

        self.path_length = 0.0
        self.last_step = 0.0
        self.steps = 0
        self.min_dist = 0.0
        self._history: list[RaySnapshot] = []

        if scene is not None:
            self.calc_min_dist(scene)

    @property
    def position(self) -> np.ndarray:
        return self.origin + self.offset

    @property
    def has_collided(self) -> bool:
        return self.min_dist <= self.collision_threshold

    @property
    def snapshot(self) -> RaySnapshot:
        return RaySnapshot(
            origin=as_point(self.origin),
            position=as_point(self.position),
            min_dist=float(self.min_dist),
            step=self.steps,
            color=self.color,
        )

    @property
    def history(self) -> tuple[RaySnapshot, ...]:
        """Past snapshots, most recent first."""
        return tuple(reversed(self._history))

    def trail(self) -> Iterator[RaySnapshot]:
        """Iterate past snapshots, most recent first, without copying."""
        return reversed(self._history)

    def status(self, options: MarchingOptions | None = None) -> RayStatus:
        if options is not None and options.is_outside(as_point(self.position), self.path_length):
            return RayStatus.OUT_OF_BOUNDS
        if self.has_collided:
            return RayStatus.COLLIDED
        return RayStatus.ALIVE

    def last_result(self, options: MarchingOptions | None = None) -> MarchResult:
        snap = self.snapshot
        return MarchResult(
            origin=snap.origin,
            position=snap.position,
            min_dist=snap.min_dist,
            step=snap.step,
            collided=self.has_collided,
            status=self.status(options),
            color=snap.color,
        )

    def calc_min_dist(self, scene: Scene) -> float | None:
        """Refresh min_dist from the scene. An empty scene leaves it untouched."""
        if scene.is_empty:
            return None

        was_collided = self.has_collided
        self.min_dist = float(scene.min_distance(self.position))
        if self.has_collided and not was_collided:
            logger.debug(
                "Ray from %s collided at %s after %d steps (min_dist=%.4f)",
                as_point(self.origin), as_point(self.position), self.steps, self.min_dist,
            )
        return self.min_dist

    def march(self, step: float | None = None, options: MarchingOptions | None = None) -> MarchResult:
        """Advance the tip once along direction.

        Steps by `step` when given, otherwise by the last computed min_dist.
        Out-of-bounds and collided rays are returned as-is without stepping.
        """
        if options is not None and options.is_outside(as_point(self.position), self.path_length):
            return self.last_result(options)
        if self.has_collided:
            return self.last_result(options)

        self._history.append(self.snapshot)
        self.steps += 1

        dist = self.min_dist if step is None else float(step)
        self.offset = self.offset + self.direction * dist
        self.last_step = dist
        self.path_length += dist

        return self.last_result(options)

    def reset_state(self, scene: Scene | None = None) -> None:
        """Rewind to step 0 at the origin, seeding history with the fresh state."""
        self.offset = np.zeros(2, dtype=np.float64)
        self.path_length = 0.0
        self.last_step = 0.0
        self.steps = 0
        self.min_dist = 0.0
        self._history = [self.snapshot]

        if scene is not None:
            self.calc_min_dist(scene)

    def reposition(self, origin: Any, scene: Scene | None = None) -> None:
        self.origin = as_vec2(origin)
        self.reset_state(scene)

    def redirect(self, direction: Any, scene: Scene | None = None) -> None:
        self.direction = as_vec2(direction)
        self.reset_state(scene)

    def __repr__(self) -> str:
        return (
            f"Ray(origin={as_point(self.origin)}, direction={as_point(self.direction)}, "
            f"steps={self.steps}, min_dist={self.min_dist:.4f})"
        )
