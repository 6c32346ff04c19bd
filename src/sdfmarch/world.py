from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np

from sdfmarch.camera.camera2d import Camera2D
from sdfmarch.math_utils import Point, as_vec2, normalize
from sdfmarch.raymarch.config import MarchingOptions, MarchResult
from sdfmarch.raymarch.ray import Ray
from sdfmarch.scene import Scene, random_scene

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WorldConfig:
    """Canvas, scene sampling and camera settings.

    Camera and probe position default to (width / 4, height / 2).
    """

    width: float = 800.0
    height: float = 600.0
    object_count: int = 10
    radius_range: tuple[float, float] = (15.0, 100.0)
    camera_position: Point | None = None
    camera_rotation: float = 0.0
    camera_fov_deg: float = 45.0
    camera_resolution: int = 10
    probe_direction: Point = (1.0, 0.0)
    collision_threshold: float = Ray.COLLISION_THRESHOLD
    auto_march: bool = True
    seed: int | None = None

    @property
    def origin(self) -> Point:
        if self.camera_position is not None:
            return self.camera_position
        return self.width / 4.0, self.height / 2.0

    @property
    def options(self) -> MarchingOptions:
        return MarchingOptions.for_canvas(self.width, self.height)


class World:
    """Everything one frame driver owns: scene, marching bounds, camera and probe ray."""

    def __init__(
            self,
            config: WorldConfig,
            scene: Scene,
            camera: Camera2D,
            probe: Ray,
            rng: np.random.Generator,
    ) -> None:
        self.config = config
        self.scene = scene
        self.camera = camera
        self.probe = probe
        self.options = config.options
        self.rng = rng
        self.frame = 0

    @classmethod
    def create(cls, config: WorldConfig | None = None, rng: np.random.Generator | None = None) -> World:
        config = WorldConfig() if config is None else config
        rng = np.random.default_rng(config.seed) if rng is None else rng

        scene = random_scene(config.object_count, config.width, config.height, config.radius_range, rng=rng)
        return cls.from_scene(scene, config=config, rng=rng)

    @classmethod
    def from_scene(
            cls,
            scene: Scene,
            config: WorldConfig | None = None,
            rng: np.random.Generator | None = None,
    ) -> World:
        """Build a world around an existing scene instead of a random one."""
        config = WorldConfig() if config is None else config
        rng = np.random.default_rng(config.seed) if rng is None else rng

        camera = Camera2D(
            scene=scene,
            position=config.origin,
            rotation=config.camera_rotation,
            fov_deg=config.camera_fov_deg,
            resolution=config.camera_resolution,
            collision_threshold=config.collision_threshold,
        )
        camera.init()
        probe = Ray(
            config.origin,
            config.probe_direction,
            scene=scene,
            collision_threshold=config.collision_threshold,
        )
        return cls(config=config, scene=scene, camera=camera, probe=probe, rng=rng)

    @property
    def finished(self) -> bool:
        probe_done = not self.config.auto_march or self.probe.status(self.options).terminal
        return self.camera.render_finished and probe_done

    def tick(self) -> None:
        """One frame: step the camera fan and, if enabled, the probe."""
        self.camera.render(self.options)
        if self.config.auto_march and not self.probe.status(self.options).terminal:
            self.step_probe()
        self.frame += 1

    def run(self, max_frames: int) -> int:
        """Tick until everything is terminal or max_frames is reached."""
        start = self.frame
        while self.frame - start < max_frames and not self.finished:
            self.tick()
        ran = self.frame - start
        logger.info("Ran %d frames (finished=%s)", ran, self.finished)
        return ran

    def step_probe(self) -> MarchResult:
        self.probe.calc_min_dist(self.scene)
        result = self.probe.march(None, self.options)
        if result.collided:
            logger.debug("Probe collided: %s", result)
        return result

    def reposition_ray(self, point: Any) -> None:
        self.probe.reposition(point, self.scene)

    def redirect_ray(self, direction: Any) -> None:
        self.probe.redirect(normalize(np, as_vec2(direction)), self.scene)

    def aim_ray_at(self, point: Any) -> None:
        """Point the probe from its origin toward a target, e.g. a click position."""
        self.redirect_ray(as_vec2(point) - self.probe.origin)

    def regenerate_scene(self, count: int | None = None) -> Scene:
        """Replace the scene wholesale and restart probe and camera against it."""
        count = self.config.object_count if count is None else count
        self.scene = random_scene(count, self.config.width, self.config.height, self.config.radius_range, rng=self.rng)
        self.probe.reset_state(self.scene)
        self.camera.reset(self.scene)
        logger.info("Regenerated scene with %d objects", count)
        return self.scene
