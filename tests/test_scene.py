"""Unit tests for the scene container and its distance queries."""

import numpy as np
import pytest

from sdfmarch.geometry import PrimitiveKind, circle, rectangle
from sdfmarch.scene import Scene, random_scene


class TestMinDistance:
    """Tests for nearest / min_distance queries."""

    def test_single_circle(self, single_circle_scene):
        """Test the distance from the canonical origin is 80."""
        assert single_circle_scene.min_distance((0.0, 100.0)) == pytest.approx(80.0)

    def test_matches_min_over_primitives(self, mixed_scene):
        """Test the query equals the minimum of each primitive's distance."""
        for p in [(0.0, 0.0), (250.0, 150.0), (120.0, 240.0), (390.0, 10.0)]:
            expected = min(prim.sdf(p) for prim in mixed_scene)
            assert mixed_scene.min_distance(p) == pytest.approx(expected)

    def test_order_independent_value(self, mixed_scene):
        """Test reversing the scene order does not change the value."""
        reversed_scene = Scene.of(list(reversed(mixed_scene.primitives)))
        for p in [(10.0, 10.0), (300.0, 100.0)]:
            assert reversed_scene.min_distance(p) == pytest.approx(mixed_scene.min_distance(p))

    def test_tie_goes_to_first(self):
        """Test equally close primitives resolve to the first in order."""
        scene = Scene.of([circle(-10.0, 0.0, 5.0), circle(10.0, 0.0, 5.0)])
        index, dist = scene.nearest((0.0, 0.0))
        assert index == 0
        assert dist == pytest.approx(5.0)

    def test_inside_is_negative(self, mixed_scene):
        """Test raw signed value is kept, not its magnitude."""
        assert mixed_scene.min_distance((200.0, 80.0)) == pytest.approx(-40.0)

    def test_empty_scene(self):
        """Test an empty scene has no nearest primitive."""
        scene = Scene()
        assert scene.is_empty
        assert scene.nearest((0.0, 0.0)) is None
        assert scene.min_distance((0.0, 0.0)) is None


class TestDistanceField:
    """Tests for vectorized field sampling."""

    def test_grid_matches_point_queries(self, mixed_scene):
        """Test each grid sample equals the scalar query at that point."""
        xs, ys = np.meshgrid(np.linspace(0.0, 400.0, 7), np.linspace(0.0, 300.0, 5))
        grid = np.stack([xs, ys], axis=-1)
        field = mixed_scene.distance_field(grid)
        assert field.shape == (5, 7)
        for j in range(5):
            for i in range(7):
                assert field[j, i] == pytest.approx(mixed_scene.min_distance(grid[j, i]))

    def test_empty_scene_rejected(self):
        """Test sampling an empty field is an error."""
        with pytest.raises(ValueError):
            Scene().distance_field(np.zeros((2, 2)))


class TestRandomScene:
    """Tests for random scene generation."""

    def test_count_and_bounds(self, rng):
        """Test circles land inside the canvas with radii in range."""
        scene = random_scene(25, 800.0, 600.0, radius_range=(15.0, 100.0), rng=rng)
        assert len(scene) == 25
        for prim in scene:
            assert prim.kind is PrimitiveKind.CIRCLE
            x, y = prim.position
            assert 0.0 <= x < 800.0
            assert 0.0 <= y < 600.0
            assert 15.0 <= prim.radius <= 100.0

    def test_zero_objects(self, rng):
        """Test an empty scene can be generated."""
        assert random_scene(0, 100.0, 100.0, rng=rng).is_empty

    def test_seeded_is_reproducible(self):
        """Test the same seed yields the same scene."""
        a = random_scene(5, 100.0, 100.0, rng=np.random.default_rng(3))
        b = random_scene(5, 100.0, 100.0, rng=np.random.default_rng(3))
        assert a == b

    def test_negative_count_rejected(self, rng):
        """Test negative object counts are refused."""
        with pytest.raises(ValueError):
            random_scene(-1, 100.0, 100.0, rng=rng)

    def test_negative_canvas_rejected(self, rng):
        """Test a negative canvas width or height is refused."""
        with pytest.raises(ValueError, match="Canvas size"):
            random_scene(3, -100.0, 100.0, rng=rng)
        with pytest.raises(ValueError, match="Canvas size"):
            random_scene(3, 100.0, -1.0, rng=rng)

    def test_scene_is_immutable(self):
        """Test primitives are stored as a tuple."""
        scene = Scene(primitives=[rectangle(0.0, 0.0, 1.0, 1.0)])
        assert isinstance(scene.primitives, tuple)
