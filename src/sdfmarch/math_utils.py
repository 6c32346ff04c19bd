from __future__ import annotations

from typing import Any

import numpy as np

Point = tuple[float, float]


def normalize(xp: Any, v: Any, eps: float = 1e-12) -> Any:
    """Normalize vector with division-by-zero guard."""
    n = xp.linalg.norm(v)
    if float(n) <= eps:
        return v
    return v / n


def as_vec2(v: Any) -> np.ndarray:
    """Copy a 2D point-like into a float64 array of shape (2,)."""
    out = np.array(v, dtype=np.float64).reshape(-1)
    if out.shape != (2,):
        msg = f"Expected a 2D vector, got shape {out.shape}"
        raise ValueError(msg)
    return out


def as_point(v: Any) -> Point:
    """Freeze a 2D vector into a plain float tuple (hashable, compares by value)."""
    return float(v[0]), float(v[1])
