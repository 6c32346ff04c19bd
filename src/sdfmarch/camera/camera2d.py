from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import numpy as np

from sdfmarch.math_utils import as_vec2, normalize
from sdfmarch.raymarch.ray import Ray

if TYPE_CHECKING:
    from sdfmarch.raymarch.config import MarchingOptions
    from sdfmarch.scene import Scene

logger = logging.getLogger(__name__)


class Camera2D:
    """2D camera that emits a fan of rays and marches them one step per frame.

    Coordinate convention:
    - points are (x, y)
    - rotation is in radians from the +x axis toward +y
    - fov_deg is the full field of view in degrees

    Parameters
    ----------
    scene:
        Scene every ray is marched against.
    position:
        Shared origin of all rays.
    rotation:
        Heading of the central ray.
    fov_deg:
        Full angular spread of the fan.
    resolution:
        Number of rays in the fan.

    """

    def __init__(
            self,
            scene: Scene,
            position: Any,
            rotation: float,
            fov_deg: float,
            resolution: int,
            collision_threshold: float = Ray.COLLISION_THRESHOLD,
    ) -> None:
        """Initialise the camera. Rays are built by :meth:`init`."""
        if resolution < 1:
            msg = f"Camera resolution must be >= 1, got {resolution}"
            raise ValueError(msg)

        self.scene = scene
        self.position = as_vec2(position)
        self.rotation = float(rotation)
        self.fov_deg = float(fov_deg)
        self.resolution = int(resolution)
        self.collision_threshold = float(collision_threshold)

        self.rays: list[Ray] = []
        self.render_finished = False

    @property
    def direction(self) -> np.ndarray:
        return np.array([np.cos(self.rotation), np.sin(self.rotation)], dtype=np.float64)

    def ray_directions(self) -> list[np.ndarray]:
        """Generate unit direction vectors spanning the camera FOV."""
        if self.resolution == 1:
            return [normalize(np, self.direction)]

        half_fov = np.deg2rad(self.fov_deg) * 0.5
        offsets = np.linspace(-half_fov, half_fov, self.resolution, dtype=np.float64)

        out: list[np.ndarray] = []
        for da in offsets:
            a = self.rotation + float(da)
            out.append(np.array([np.cos(a), np.sin(a)], dtype=np.float64))
        return out

    def init(self) -> list[Ray]:
        """Build the ray fan, each ray primed with its distance to the scene."""
        self.rays = [
            Ray(self.position, d, scene=self.scene, collision_threshold=self.collision_threshold)
            for d in self.ray_directions()
        ]
        self.render_finished = False
        logger.debug("Camera at %s initialised %d rays", tuple(self.position), len(self.rays))
        return self.rays

    def render(self, options: MarchingOptions | None = None) -> int:
        """Advance every live ray by one adaptive step.

        Each ray that has not collided gets its distance refreshed first, so
        rays cut off by the bounds still hand a current min_dist to the sink.
        Returns the number of rays that actually stepped. Once a call finds no
        live ray after the refresh, the render is finished and further calls
        do nothing.
        """
        if self.render_finished:
            return 0

        advanced = 0
        live = False
        for ray in self.rays:
            if ray.has_collided:
                continue
            ray.calc_min_dist(self.scene)
            if ray.status(options).terminal:
                continue
            steps = ray.steps
            ray.march(None, options)
            live = True
            if ray.steps > steps:
                advanced += 1

        if not live:
            self.render_finished = True
            collided = sum(1 for ray in self.rays if ray.has_collided)
            logger.info(
                "Render finished: %d/%d rays collided, %d cut off",
                collided, len(self.rays), len(self.rays) - collided,
            )
        return advanced

    def reset(self, scene: Scene) -> list[Ray]:
        """Rebind to a new scene and rebuild the fan."""
        self.scene = scene
        return self.init()
