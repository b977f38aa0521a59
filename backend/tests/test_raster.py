"""
Unit tests for the RGBA raster container.
"""

import numpy as np
import pytest

from app.services.recolor import InvalidImage, RasterImage


def test_from_bytes_layout():
    """Buffer is row-major with the origin at the top-left"""
    buffer = bytes(range(2 * 3 * 4))
    image = RasterImage.from_bytes(2, 3, buffer)

    assert (image.width, image.height) == (2, 3)
    assert image.pixels.shape == (3, 2, 4)
    assert image.pixel(0, 0) == (0, 1, 2, 3)
    assert image.pixel(1, 0) == (4, 5, 6, 7)
    assert image.pixel(0, 1) == (8, 9, 10, 11)
    assert image.to_bytes() == buffer


@pytest.mark.parametrize("length", [0, 15, 17, 32])
def test_from_bytes_length_mismatch(length):
    with pytest.raises(InvalidImage):
        RasterImage.from_bytes(2, 2, b"\x00" * length)


def test_from_bytes_invalid_dimensions():
    with pytest.raises(InvalidImage):
        RasterImage.from_bytes(0, 4, b"")


def test_constructor_validates_shape():
    with pytest.raises(InvalidImage):
        RasterImage(width=3, height=2, pixels=np.zeros((2, 2, 4), dtype=np.uint8))


def test_constructor_validates_dtype():
    with pytest.raises(InvalidImage):
        RasterImage(width=2, height=2, pixels=np.zeros((2, 2, 4), dtype=np.float32))


def test_from_array_requires_rgba():
    with pytest.raises(InvalidImage):
        RasterImage.from_array(np.zeros((2, 2, 3), dtype=np.uint8))


def test_from_array_copies_and_freezes():
    source = np.zeros((2, 2, 4), dtype=np.uint8)
    image = RasterImage.from_array(source)

    source[0, 0] = (9, 9, 9, 9)
    assert image.pixel(0, 0) == (0, 0, 0, 0)

    assert not image.pixels.flags.writeable
    with pytest.raises(ValueError):
        image.pixels[0, 0, 0] = 1


def test_constructor_leaves_caller_array_writable():
    source = np.zeros((1, 1, 4), dtype=np.uint8)
    image = RasterImage(width=1, height=1, pixels=source)

    assert source.flags.writeable
    assert not image.pixels.flags.writeable
    assert not np.shares_memory(source, image.pixels)

    source[0, 0] = (1, 2, 3, 4)
    assert image.pixel(0, 0) == (0, 0, 0, 0)
