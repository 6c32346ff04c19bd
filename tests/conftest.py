"""Shared fixtures for sdfmarch tests.

Plotting tests must never open a window, so the matplotlib backend is pinned
to Agg before anything imports the plotting module.
"""

import os

os.environ.setdefault("SDFMARCH_MPL_BACKEND", "Agg")

import numpy as np  # noqa: E402
import pytest  # noqa: E402

from sdfmarch.geometry import circle, rectangle  # noqa: E402
from sdfmarch.scene import Scene  # noqa: E402


@pytest.fixture
def single_circle_scene():
    """One circle of radius 20 at (100, 100)."""
    return Scene.of([circle(100.0, 100.0, 20.0)])


@pytest.fixture
def mixed_scene():
    """Two circles and a rectangle spread over a 400 x 300 canvas."""
    return Scene.of([
        circle(200.0, 80.0, 40.0),
        rectangle(300.0, 220.0, 80.0, 40.0),
        circle(120.0, 240.0, 25.0),
    ])


@pytest.fixture
def rng():
    """Seeded generator so random scenes are reproducible."""
    return np.random.default_rng(1234)
