"""
RGBA raster image container used as the recolor engine's unit of input/output.
"""

from dataclasses import dataclass
from typing import Union

import numpy as np

from .errors import InvalidImage


@dataclass(frozen=True, eq=False)
class RasterImage:
    """
    Width x height grid of 8-bit RGBA pixels, row-major, origin top-left.

    The constructor keeps its own read-only copy of the pixel array, so the
    caller's array is left writable and later writes to it are not seen here.
    """
    width: int
    height: int
    pixels: np.ndarray  # (height, width, 4) uint8

    def __post_init__(self):
        validate_raster(self.width, self.height, self.pixels)
        pixels = np.array(self.pixels, copy=True)
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "RasterImage":
        """Build from an (H, W, 4) uint8 array."""
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise InvalidImage(f"Expected (H, W, 4) RGBA array, got shape {pixels.shape}")
        height, width = pixels.shape[:2]
        return cls(width=width, height=height, pixels=pixels)

    @classmethod
    def from_bytes(cls, width: int, height: int, buffer: Union[bytes, bytearray, memoryview]) -> "RasterImage":
        """
        Build from a flat RGBA byte buffer.

        Raises:
            InvalidImage: If len(buffer) != width * height * 4
        """
        if width <= 0 or height <= 0:
            raise InvalidImage(f"Invalid dimensions: {width}x{height}")

        expected = width * height * 4
        if len(buffer) != expected:
            raise InvalidImage(
                f"Buffer length {len(buffer)} does not match {width}x{height}x4 = {expected}"
            )

        pixels = np.frombuffer(bytes(buffer), dtype=np.uint8).reshape(height, width, 4)
        return cls(width=width, height=height, pixels=pixels)

    def to_bytes(self) -> bytes:
        """Flat row-major RGBA bytes."""
        return self.pixels.tobytes()

    def pixel(self, x: int, y: int) -> tuple:
        """RGBA tuple at column x, row y."""
        return tuple(int(c) for c in self.pixels[y, x])


def validate_raster(width: int, height: int, pixels: np.ndarray) -> None:
    """
    Check the buffer invariant: an (height, width, 4) uint8 array.

    Raises:
        InvalidImage: On any shape, dtype or dimension mismatch
    """
    if not isinstance(pixels, np.ndarray):
        raise InvalidImage(f"Pixel buffer must be a numpy array, got {type(pixels).__name__}")

    if pixels.dtype != np.uint8:
        raise InvalidImage(f"Pixel buffer must be uint8, got {pixels.dtype}")

    if width <= 0 or height <= 0:
        raise InvalidImage(f"Invalid dimensions: {width}x{height}")

    if pixels.shape != (height, width, 4):
        raise InvalidImage(
            f"Pixel buffer shape {pixels.shape} does not match {width}x{height} RGBA"
        )
