from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SDF(Protocol):
    """Pure signed distance field contract."""

    def sdf(self, p: Any) -> float:
        """Signed distance to surface at point p."""
        ...


@runtime_checkable
class Drawable2D(Protocol):
    """2D drawable contract."""

    def polyline(self, num: int = 600) -> Any:
        """Return a closed (N,2) polyline suitable for plotting."""
        ...
