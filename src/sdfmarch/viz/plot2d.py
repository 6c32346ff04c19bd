from __future__ import annotations

import os
from typing import TYPE_CHECKING

import matplotlib as mpl

# IMPORTANT: set backend before importing pyplot
# - An explicit SDFMARCH_MPL_BACKEND always wins.
# - Prefer a stable GUI backend if available; fallback to Agg.
_BACKEND = os.environ.get("SDFMARCH_MPL_BACKEND", "").strip()
if _BACKEND:
    mpl.use(_BACKEND, force=True)
else:
    for candidate in ("TkAgg", "QtAgg", "Agg"):
        # noinspection PyBroadException
        try:
            mpl.use(candidate, force=True)
            break
        except Exception:  # pragma: no cover  # noqa: BLE001, S112
            continue

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.patches import Circle  # noqa: E402

from sdfmarch.backend import ArrayModule, to_numpy  # noqa: E402
from sdfmarch.raymarch.config import RayStatus  # noqa: E402

if TYPE_CHECKING:
    from sdfmarch.camera.camera2d import Camera2D
    from sdfmarch.geometry import Color, Primitive
    from sdfmarch.protocols import Drawable2D
    from sdfmarch.raymarch.config import MarchingOptions, RaySnapshot
    from sdfmarch.raymarch.ray import Ray
    from sdfmarch.scene import Scene
    from sdfmarch.world import World


def _rgb(color: Color) -> tuple[float, ...]:
    return tuple(c / 255.0 for c in color)


class Plotter2D:
    """Matplotlib sink that paints primitives and ray snapshots.

    Screen-style coordinates: y grows downward, like the canvas the scenes
    are sampled on.
    """

    def __init__(self, dark: bool = True) -> None:
        """Initialize the plotter."""
        fig, ax = plt.subplots(figsize=(8, 6))
        self.fig = fig
        self.ax = ax
        ax.set_aspect("equal", "box")
        ax.set_xlabel("x")
        ax.set_ylabel("y")
        ax.set_title("sdfmarch - 2D Ray Marching")
        if dark:
            ax.set_facecolor("black")

    def draw_drawable(self, drawable: Drawable2D, linewidth: float = 2.0, color: str = "white") -> None:
        pts = drawable.polyline()
        self.ax.plot(pts[:, 0], pts[:, 1], linewidth=linewidth, color=color)

    def draw_primitive(self, primitive: Primitive) -> None:
        pts = primitive.polyline()
        self.ax.fill(pts[:, 0], pts[:, 1], color=_rgb(primitive.color), alpha=0.9, linewidth=0)
        self.draw_drawable(primitive, linewidth=1.0)

    def draw_scene(self, scene: Scene) -> None:
        for primitive in scene:
            self.draw_primitive(primitive)

    def draw_field(
            self,
            xp: ArrayModule,
            scene: Scene,
            xlim: tuple[float, float],
            ylim: tuple[float, float],
            samples: int = 200,
    ) -> None:
        """Shade the scene's distance field as a heatmap behind everything else."""
        xs = xp.linspace(xlim[0], xlim[1], samples, dtype=xp.float64)
        ys = xp.linspace(ylim[0], ylim[1], samples, dtype=xp.float64)
        gx, gy = xp.meshgrid(xs, ys)
        field = to_numpy(xp, scene.distance_field(xp.stack([gx, gy], axis=-1), xp=xp))

        self.ax.imshow(
            field,
            origin="lower",
            extent=(xlim[0], xlim[1], ylim[0], ylim[1]),
            cmap="magma",
            alpha=0.6,
            zorder=0,
        )
        self.ax.contour(to_numpy(xp, gx), to_numpy(xp, gy), field, levels=[0.0], colors="white", linewidths=1)

    def draw_snapshot(self, snapshot: RaySnapshot, linewidth: float = 2.0) -> None:
        ox, oy = snapshot.origin
        px, py = snapshot.position
        self.ax.plot([ox, px], [oy, py], color=_rgb(snapshot.color), linewidth=linewidth, zorder=2)

        if snapshot.min_dist > 0.0:
            self.ax.add_patch(Circle((px, py), snapshot.min_dist, color="white", alpha=0.15, zorder=1))

        self.ax.scatter([ox], [oy], s=20, color="white", zorder=3)

    def draw_ray(self, ray: Ray, options: MarchingOptions | None = None, trail: bool = True) -> None:
        if trail:
            for snapshot in ray.trail():
                self.draw_snapshot(snapshot, linewidth=1.0)

        current = ray.snapshot
        self.draw_snapshot(current)

        px, py = current.position
        status = ray.status(options)
        if status is RayStatus.COLLIDED:
            self.ax.scatter([px], [py], marker="x", s=70, color="red", zorder=4)
            return

        if status is RayStatus.OUT_OF_BOUNDS:
            self.ax.scatter([px], [py], marker="s", s=25, color="gray", zorder=4)
            return

        self.ax.scatter([px], [py], marker=".", s=25, color="white", zorder=4)

    def draw_camera(self, camera: Camera2D, options: MarchingOptions | None = None, trail: bool = False) -> None:
        for ray in camera.rays:
            self.draw_ray(ray, options=options, trail=trail)

        p = camera.position
        d = camera.direction
        self.ax.scatter([p[0]], [p[1]], s=80, color="cyan", zorder=5)
        self.ax.arrow(float(p[0]), float(p[1]), float(d[0]) * 20.0, float(d[1]) * 20.0, color="cyan", width=1.0)

    def draw_world(self, world: World, field: bool = False, xp: ArrayModule = np) -> None:
        xlim = (0.0, float(world.config.width))
        ylim = (0.0, float(world.config.height))
        if field and not world.scene.is_empty:
            self.draw_field(xp, world.scene, xlim, ylim)
        self.draw_scene(world.scene)
        self.draw_camera(world.camera, options=world.options)
        self.draw_ray(world.probe, options=world.options)
        self.set_limits(xlim, ylim)

    def set_limits(self, xlim: tuple[float, float], ylim: tuple[float, float]) -> None:
        self.ax.set_xlim(*xlim)
        # canvas convention: origin top-left
        self.ax.set_ylim(ylim[1], ylim[0])

    def show(self) -> None:
        plt.tight_layout()
        plt.show()

    def save(self, path: str, dpi: int = 150) -> None:
        """Save figure to disk (useful if running headless with Agg)."""
        plt.tight_layout()
        self.fig.savefig(path, dpi=dpi)

    def close(self) -> None:
        plt.close(self.fig)
