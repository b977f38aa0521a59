"""
Test image decode/encode utilities.
"""
import base64
import io

import numpy as np
import pytest
from PIL import Image

from app.services.imaging import (
    decode_image, encode_png, from_pil, resize_long_edge, to_data_uri, to_pil,
    validate_magic_bytes
)
from app.services.recolor import InvalidImage, RasterImage


def test_decode_png_keeps_rgba(tshirt_pixels, tshirt_png):
    image = decode_image(tshirt_png)

    assert (image.width, image.height) == (8, 8)
    np.testing.assert_array_equal(image.pixels, tshirt_pixels)


def test_decode_rgb_png_is_opaque():
    rgb = np.full((4, 6, 3), (236, 64, 122), dtype=np.uint8)
    buffer = io.BytesIO()
    Image.fromarray(rgb).save(buffer, format="PNG")

    image = decode_image(buffer.getvalue())

    assert (image.width, image.height) == (6, 4)
    assert np.all(image.pixels[..., 3] == 255)
    assert image.pixel(0, 0) == (236, 64, 122, 255)


def test_decode_jpeg():
    rgb = np.full((16, 16, 3), 128, dtype=np.uint8)
    buffer = io.BytesIO()
    Image.fromarray(rgb).save(buffer, format="JPEG")

    image = decode_image(buffer.getvalue())

    assert (image.width, image.height) == (16, 16)
    assert np.all(image.pixels[..., 3] == 255)


def test_validate_magic_bytes():
    assert validate_magic_bytes(b'\x89PNG\r\n\x1a\n' + b'\x00' * 8) == "image/png"
    assert validate_magic_bytes(b'\xff\xd8\xff' + b'\x00' * 8) == "image/jpeg"

    with pytest.raises(InvalidImage):
        validate_magic_bytes(b'GIF89a' + b'\x00' * 8)
    with pytest.raises(InvalidImage):
        validate_magic_bytes(b'\x89PNG')


def test_decode_corrupt_png():
    with pytest.raises(InvalidImage, match="Failed to decode"):
        decode_image(b'\x89PNG\r\n\x1a\n' + b'garbage' * 10)


def test_encode_png_roundtrip(tshirt_pixels):
    """PNG is lossless, including RGB values under zero alpha"""
    image = RasterImage.from_array(tshirt_pixels)

    png_bytes = encode_png(image)

    assert png_bytes.startswith(b'\x89PNG\r\n\x1a\n')
    decoded = np.array(Image.open(io.BytesIO(png_bytes)).convert("RGBA"))
    np.testing.assert_array_equal(decoded, tshirt_pixels)


def test_to_data_uri(tshirt_pixels):
    image = RasterImage.from_array(tshirt_pixels)

    uri = to_data_uri(image)

    prefix = "data:image/png;base64,"
    assert uri.startswith(prefix)
    payload = base64.b64decode(uri[len(prefix):])
    np.testing.assert_array_equal(decode_image(payload).pixels, tshirt_pixels)


def test_resize_long_edge_downscales():
    image = RasterImage.from_array(np.zeros((100, 200, 4), dtype=np.uint8))

    resized = resize_long_edge(image, max_edge=64)

    assert (resized.width, resized.height) == (64, 32)


def test_resize_long_edge_noop_when_small(tshirt_pixels):
    image = RasterImage.from_array(tshirt_pixels)
    assert resize_long_edge(image, max_edge=64) is image


def test_pil_conversion(tshirt_pixels):
    image = RasterImage.from_array(tshirt_pixels)

    pil_image = to_pil(image)
    assert pil_image.mode == "RGBA"
    assert pil_image.size == (8, 8)

    back = from_pil(pil_image.convert("RGB"))
    assert np.all(back.pixels[..., 3] == 255)
    np.testing.assert_array_equal(back.pixels[..., :3], tshirt_pixels[..., :3])
