"""
Color Space Conversion

Hex <-> RGB decoding and RGB -> HSL conversion used by the recolor engine to
classify garment pixels. The scalar and vectorized HSL paths perform the same
float64 operations in the same order, so a pixel classifies identically
whichever path is used.
"""

import re
from typing import Tuple

import numpy as np


HEX_COLOR_RE = re.compile(r"#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")


class InvalidFormat(ValueError):
    """Raised when a color string is not a 6-digit hex value."""
    pass


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """
    Decode a hex color string to an RGB tuple.

    Args:
        hex_color: Color as "#RRGGBB" or "RRGGBB" (case-insensitive)

    Returns:
        Tuple of (R, G, B) integers in [0, 255]

    Raises:
        InvalidFormat: For shorthand, alpha-carrying or otherwise malformed input
    """
    if not isinstance(hex_color, str):
        raise InvalidFormat(f"Color must be a string, got {type(hex_color).__name__}")

    match = HEX_COLOR_RE.fullmatch(hex_color)
    if match is None:
        raise InvalidFormat(f"Invalid hex color format: {hex_color!r}")

    r, g, b = (int(group, 16) for group in match.groups())
    return r, g, b


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Encode RGB channels as an uppercase "#RRGGBB" string."""
    for channel in (r, g, b):
        if not 0 <= int(channel) <= 255:
            raise ValueError(f"RGB channel out of range [0, 255]: {channel}")
    return f"#{int(r):02X}{int(g):02X}{int(b):02X}"


def rgb_to_hsl(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """
    Convert 8-bit RGB to HSL.

    Args:
        r, g, b: Channel values in [0, 255]

    Returns:
        Tuple of (H, S, L) with H in degrees [0, 360), S and L in [0, 1]
    """
    r = r / 255.0
    g = g / 255.0
    b = b / 255.0

    max_c = max(r, g, b)
    min_c = min(r, g, b)
    l = (max_c + min_c) / 2.0

    # Achromatic: hue and saturation are both zero
    if max_c == min_c:
        return 0.0, 0.0, l

    d = max_c - min_c
    s = d / (2.0 - max_c - min_c) if l > 0.5 else d / (max_c + min_c)

    if max_c == r:
        h = (g - b) / d + (6.0 if g < b else 0.0)
    elif max_c == g:
        h = (b - r) / d + 2.0
    else:
        h = (r - g) / d + 4.0

    h = (h / 6.0 * 360.0) % 360.0
    return h, s, l


def rgb_to_hsl_array(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Vectorized RGB -> HSL over an (..., 3) array of 8-bit channels.

    Args:
        rgb: Array whose last axis holds R, G, B in [0, 255]

    Returns:
        Tuple of (H, S, L) float64 arrays shaped like rgb[..., 0]
    """
    channels = np.asarray(rgb, dtype=np.float64) / 255.0
    r = channels[..., 0]
    g = channels[..., 1]
    b = channels[..., 2]

    max_c = np.maximum(np.maximum(r, g), b)
    min_c = np.minimum(np.minimum(r, g), b)
    l = (max_c + min_c) / 2.0

    chromatic = max_c != min_c
    d = max_c - min_c
    # Placeholder divisor for achromatic pixels; their results are masked out below
    safe_d = np.where(chromatic, d, 1.0)

    s_high = d / np.where(chromatic, 2.0 - max_c - min_c, 1.0)
    s_low = d / np.where(chromatic, max_c + min_c, 1.0)
    s = np.where(l > 0.5, s_high, s_low)

    h_r = (g - b) / safe_d + np.where(g < b, 6.0, 0.0)
    h_g = (b - r) / safe_d + 2.0
    h_b = (r - g) / safe_d + 4.0
    h = np.where(max_c == r, h_r, np.where(max_c == g, h_g, h_b))
    h = np.mod(h / 6.0 * 360.0, 360.0)

    h = np.where(chromatic, h, 0.0)
    s = np.where(chromatic, s, 0.0)
    return h, s, l
