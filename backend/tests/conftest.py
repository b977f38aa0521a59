"""
Test configuration and fixtures for the mockup recolor tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Import the main app
from main import app


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from app.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture
def tshirt_pixels():
    """
    Synthetic 8x8 mockup: pink fabric, a green print patch, a gray shadow
    stripe and a transparent border column.
    """
    img = np.zeros((8, 8, 4), dtype=np.uint8)
    img[:, :] = (236, 64, 122, 255)   # pink fabric
    img[2:4, 2:4] = (10, 200, 10, 255)  # green print
    img[6, :] = (90, 90, 90, 255)     # gray shadow
    img[:, 0] = (255, 0, 128, 0)      # transparent, pink-valued edge
    img[0, 7] = (240, 80, 140, 128)   # semi-transparent fabric edge
    return img


def encode_png_bytes(pixels: np.ndarray) -> bytes:
    """Encode an RGBA array as PNG bytes with PIL."""
    buffer = io.BytesIO()
    Image.fromarray(pixels).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def tshirt_png(tshirt_pixels):
    """The synthetic mockup as PNG bytes."""
    return encode_png_bytes(tshirt_pixels)
