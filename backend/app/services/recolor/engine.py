"""
Garment Recolor Engine

Replaces the fabric pixels of a photographed t-shirt with a flat target color
while leaving printed design, shadows, highlights and background untouched.

A pixel counts as fabric when its HSL saturation is above 0.15 and its hue
falls in the wrap-around band h > 300 or h < 20 (magenta/pink through red).
The band matches the pink colorway of the base mockup photograph; a base asset
in another colorway needs different thresholds.
"""

from typing import Sequence, Tuple, Union

import numpy as np

from app.services.colors.conversion import InvalidFormat, hex_to_rgb, rgb_to_hsl, rgb_to_hsl_array
from .errors import InvalidColor, InvalidImage
from .raster import RasterImage, validate_raster


FABRIC_MIN_SATURATION = 0.15
FABRIC_HUE_ABOVE = 300.0
FABRIC_HUE_BELOW = 20.0

ColorInput = Union[str, Sequence[int]]


def is_fabric(r: int, g: int, b: int) -> bool:
    """Classify a single opaque pixel by the fabric hue/saturation rule."""
    h, s, _ = rgb_to_hsl(r, g, b)
    return s > FABRIC_MIN_SATURATION and (h > FABRIC_HUE_ABOVE or h < FABRIC_HUE_BELOW)


def fabric_mask(pixels: np.ndarray) -> np.ndarray:
    """
    Boolean (H, W) mask of fabric pixels in an RGBA array.

    Fully transparent pixels are never fabric.
    """
    h, s, _ = rgb_to_hsl_array(pixels[..., :3])
    in_band = (h > FABRIC_HUE_ABOVE) | (h < FABRIC_HUE_BELOW)
    return (pixels[..., 3] != 0) & (s > FABRIC_MIN_SATURATION) & in_band


def resolve_color(target: ColorInput) -> Tuple[int, int, int]:
    """
    Decode a hex string or validate an RGB triple.

    Raises:
        InvalidColor: If the color cannot be decoded
    """
    if isinstance(target, str):
        try:
            return hex_to_rgb(target)
        except InvalidFormat as e:
            raise InvalidColor(str(e)) from e

    if isinstance(target, (bytes, bytearray)):
        raise InvalidColor(f"Invalid RGB color: {target!r}")

    try:
        channels = tuple(target)
    except TypeError as e:
        raise InvalidColor(f"Invalid RGB color: {target!r}") from e

    # bool is an int subclass; floats and numeric strings are not channels
    if len(channels) != 3 or not all(
        isinstance(c, (int, np.integer)) and not isinstance(c, (bool, np.bool_))
        for c in channels
    ):
        raise InvalidColor(f"RGB color must be three integers: {target!r}")

    r, g, b = (int(c) for c in channels)
    if not all(0 <= c <= 255 for c in (r, g, b)):
        raise InvalidColor(f"RGB channels out of range [0, 255]: {target!r}")
    return r, g, b


def recolor_with_count(base: RasterImage, target: ColorInput) -> Tuple[RasterImage, int]:
    """
    Recolor and report how many pixels were classified as fabric.

    The mask is computed once and shared by both results.

    Raises:
        InvalidColor: Target color is malformed (no pixel work is done)
        InvalidImage: Base buffer violates the RGBA raster invariant
    """
    target_rgb = resolve_color(target)

    if not isinstance(base, RasterImage):
        raise InvalidImage(f"Expected RasterImage, got {type(base).__name__}")
    validate_raster(base.width, base.height, base.pixels)

    output = base.pixels.copy()
    mask = fabric_mask(output)
    output[mask, :3] = target_rgb

    recolored = RasterImage(width=base.width, height=base.height, pixels=output)
    return recolored, int(np.count_nonzero(mask))


def recolor(base: RasterImage, target: ColorInput) -> RasterImage:
    """
    Recolor the garment fabric of a base image.

    Args:
        base: Decoded base garment image
        target: Target color as "#RRGGBB" or an (R, G, B) triple

    Returns:
        New RasterImage of the same dimensions. Fabric pixels carry the target
        RGB with their original alpha; every other pixel is byte-identical.

    Raises:
        InvalidColor: Target color is malformed (no pixel work is done)
        InvalidImage: Base buffer violates the RGBA raster invariant
    """
    recolored, _ = recolor_with_count(base, target)
    return recolored


def count_fabric_pixels(image: RasterImage) -> int:
    """Number of pixels the engine would recolor in this image."""
    return int(np.count_nonzero(fabric_mask(image.pixels)))
