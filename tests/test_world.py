"""Tests for the World aggregate and its interaction hooks."""

import numpy as np
import pytest

from sdfmarch.geometry import rectangle
from sdfmarch.scene import Scene
from sdfmarch.world import World, WorldConfig


@pytest.fixture
def wall_world():
    """Camera and probe facing a wall that spans the whole canvas height."""
    config = WorldConfig(width=400.0, height=300.0, camera_resolution=10)
    return World.from_scene(Scene.of([rectangle(300.0, 150.0, 20.0, 300.0)]), config=config)


class TestCreate:
    """Tests for world construction."""

    def test_defaults(self):
        """Test the default world mirrors the canvas setup."""
        world = World.create(WorldConfig(seed=5))
        assert len(world.scene) == 10
        assert len(world.camera.rays) == 10
        assert tuple(world.camera.position) == (200.0, 300.0)
        assert tuple(world.probe.origin) == (200.0, 300.0)
        assert world.options.max_len == pytest.approx(1000.0)

    def test_seed_is_reproducible(self):
        """Test two worlds with the same seed share a scene."""
        a = World.create(WorldConfig(seed=11))
        b = World.create(WorldConfig(seed=11))
        assert a.scene == b.scene

    def test_explicit_rng(self):
        """Test an injected generator drives scene sampling."""
        a = World.create(WorldConfig(object_count=4), rng=np.random.default_rng(2))
        b = World.create(WorldConfig(object_count=4), rng=np.random.default_rng(2))
        assert a.scene == b.scene


class TestTick:
    """Tests for frame stepping."""

    def test_tick_steps_camera_and_probe(self, wall_world):
        """Test one tick advances the fan and the probe once."""
        wall_world.tick()
        assert wall_world.frame == 1
        assert wall_world.probe.steps == 1
        assert all(ray.steps == 1 for ray in wall_world.camera.rays)

    def test_manual_probe(self):
        """Test with auto_march off only the camera moves on tick."""
        config = WorldConfig(width=400.0, height=300.0, auto_march=False)
        world = World.from_scene(Scene.of([rectangle(300.0, 150.0, 20.0, 300.0)]), config=config)
        world.tick()
        assert world.probe.steps == 0
        world.step_probe()
        assert world.probe.steps == 1

    def test_run_until_finished(self, wall_world):
        """Test running ends once the fan and probe have all hit the wall."""
        ran = wall_world.run(1000)
        assert ran < 1000
        assert wall_world.finished
        assert wall_world.probe.has_collided
        assert wall_world.probe.position[0] == pytest.approx(290.0, abs=0.1)


class TestHooks:
    """Tests for reposition / redirect / regenerate."""

    def test_reposition_ray(self, wall_world):
        """Test the probe restarts from the new point."""
        wall_world.tick()
        wall_world.reposition_ray((50.0, 50.0))
        assert wall_world.probe.steps == 0
        assert tuple(wall_world.probe.position) == (50.0, 50.0)
        assert wall_world.probe.min_dist == pytest.approx(240.0)

    def test_redirect_ray_normalizes(self, wall_world):
        """Test redirect stores a unit direction and resets the probe."""
        wall_world.tick()
        wall_world.redirect_ray((0.0, 5.0))
        np.testing.assert_allclose(wall_world.probe.direction, [0.0, 1.0])
        assert wall_world.probe.steps == 0

    def test_aim_ray_at(self, wall_world):
        """Test aiming points the probe from its origin to the target."""
        wall_world.aim_ray_at((100.0, 250.0))
        np.testing.assert_allclose(wall_world.probe.direction, [0.0, 1.0])

    def test_regenerate_scene(self, wall_world):
        """Test a new scene replaces the old one and everything restarts."""
        wall_world.run(5)
        old = wall_world.scene
        scene = wall_world.regenerate_scene(3)
        assert scene is wall_world.scene
        assert scene is not old
        assert len(scene) == 3
        assert wall_world.camera.scene is scene
        assert not wall_world.camera.render_finished
        assert all(ray.steps == 0 for ray in wall_world.camera.rays)
        assert wall_world.probe.steps == 0
