"""
Garment Recolor Module

Recolors the fabric of a t-shirt mockup photograph and composites user
designs on top of it.
"""

from .engine import recolor, recolor_with_count, is_fabric, fabric_mask, resolve_color
from .errors import RecolorError, InvalidColor, InvalidImage
from .raster import RasterImage
from .session import PreviewSession

__all__ = [
    "recolor",
    "recolor_with_count",
    "is_fabric",
    "fabric_mask",
    "resolve_color",
    "RecolorError",
    "InvalidColor",
    "InvalidImage",
    "RasterImage",
    "PreviewSession",
]
