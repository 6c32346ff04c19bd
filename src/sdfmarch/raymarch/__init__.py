from sdfmarch.raymarch.config import MarchingOptions, MarchResult, RaySnapshot, RayStatus
from sdfmarch.raymarch.ray import Ray

__all__ = [
    "MarchingOptions",
    "MarchResult",
    "Ray",
    "RaySnapshot",
    "RayStatus",
]
