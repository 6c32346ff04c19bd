from __future__ import annotations

import logging

import numpy as np

from sdfmarch.geometry import circle, rectangle
from sdfmarch.scene import Scene
from sdfmarch.viz.plot2d import Plotter2D
from sdfmarch.world import World, WorldConfig

# ============================================================
# TOP-LEVEL PARAMETERS
# A hand-built scene and a single probe ray aimed at a click point.
# ============================================================

WIDTH = 400.0
HEIGHT = 300.0

PROBE_ORIGIN = (20.0, 150.0)
CLICK_TARGET = (300.0, 210.0)

# Manual key presses (each one is one calc + march of the probe)
STEPS = 25

OUTPUT_PATH: str | None = None


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    scene = Scene.of([
        circle(200.0, 80.0, 40.0, color=(200, 80, 80)),
        rectangle(300.0, 220.0, 80.0, 40.0, color=(80, 160, 220)),
        circle(120.0, 240.0, 25.0, color=(120, 220, 120)),
    ])

    config = WorldConfig(width=WIDTH, height=HEIGHT, camera_resolution=5, auto_march=False)
    world = World.from_scene(scene, config=config)

    world.reposition_ray(PROBE_ORIGIN)
    world.aim_ray_at(CLICK_TARGET)
    for _ in range(STEPS):
        result = world.step_probe()
        if result.status.terminal:
            break

    plotter = Plotter2D()
    plotter.draw_field(np, scene, (0.0, WIDTH), (0.0, HEIGHT))
    plotter.draw_scene(scene)
    plotter.draw_ray(world.probe, options=world.options)
    plotter.set_limits((0.0, WIDTH), (0.0, HEIGHT))

    if OUTPUT_PATH:
        plotter.save(OUTPUT_PATH)
    else:
        plotter.show()


if __name__ == "__main__":
    main()
