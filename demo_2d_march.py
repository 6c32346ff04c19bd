from __future__ import annotations

import logging

from sdfmarch.backend import BackendName, get_array_module
from sdfmarch.viz.plot2d import Plotter2D
from sdfmarch.world import World, WorldConfig

# ============================================================
# TOP-LEVEL PARAMETERS (extract everything tweakable here)
# ============================================================

# Run
BACKEND: BackendName = "auto"

# Canvas
WIDTH = 800.0
HEIGHT = 600.0

# Scene
OBJECT_COUNT = 10
RADIUS_RANGE = (15.0, 100.0)
SEED = 7

# Camera ray fan
CAMERA_ROTATION = 0.0
CAMERA_FOV_DEG = 45.0
CAMERA_NUM_RAYS = 10

# Frames to simulate before plotting
MAX_FRAMES = 200

# Plot
SHOW_FIELD = True
OUTPUT_PATH: str | None = None


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = WorldConfig(
        width=WIDTH,
        height=HEIGHT,
        object_count=OBJECT_COUNT,
        radius_range=RADIUS_RANGE,
        camera_rotation=CAMERA_ROTATION,
        camera_fov_deg=CAMERA_FOV_DEG,
        camera_resolution=CAMERA_NUM_RAYS,
        seed=SEED,
    )
    world = World.create(config)
    world.run(MAX_FRAMES)

    plotter = Plotter2D()
    plotter.draw_world(world, field=SHOW_FIELD, xp=get_array_module(BACKEND))

    if OUTPUT_PATH:
        plotter.save(OUTPUT_PATH)
    else:
        plotter.show()


if __name__ == "__main__":
    main()
