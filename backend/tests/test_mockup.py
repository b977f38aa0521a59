"""
Test mockup composition of designs over recolored garments.
"""
import numpy as np
import pytest

from app.services.recolor import RasterImage
from app.services.recolor.mockup import composite_design, design_box, render_mockup


def solid(width: int, height: int, rgba) -> RasterImage:
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :] = rgba
    return RasterImage.from_array(pixels)


class TestDesignBox:
    """Test design placement geometry"""

    def test_centered_half_width(self):
        assert design_box((100, 100), (20, 20), 0.5, 0.5, 0.5) == (25, 25, 50, 50)

    def test_aspect_ratio_preserved(self):
        x, y, w, h = design_box((200, 100), (40, 10), 0.5, 0.5, 0.5)
        assert (w, h) == (100, 25)
        assert x == 50
        assert y == 38  # round(50 - 12.5), banker's rounding

    def test_overhang_gives_negative_offset(self):
        x, y, w, h = design_box((100, 100), (10, 10), 0.5, 0.1, 0.1)
        assert x < 0 and y < 0

    def test_invalid_design_size(self):
        with pytest.raises(ValueError):
            design_box((100, 100), (0, 10), 0.5, 0.5, 0.5)


class TestCompositeDesign:
    """Test alpha compositing"""

    def test_opaque_design_covers_center(self):
        garment = solid(100, 100, (236, 64, 122, 255))
        design = solid(10, 10, (0, 0, 255, 255))

        out = composite_design(garment, design)

        assert (out.width, out.height) == (100, 100)
        assert out.pixel(50, 50) == (0, 0, 255, 255)
        assert out.pixel(0, 0) == (236, 64, 122, 255)
        assert out.pixel(99, 99) == (236, 64, 122, 255)
        assert out.pixel(10, 50) == (236, 64, 122, 255)

    def test_transparent_design_leaves_garment(self):
        garment = solid(40, 40, (66, 165, 245, 255))
        design = solid(8, 8, (255, 255, 255, 0))

        out = composite_design(garment, design)

        np.testing.assert_array_equal(out.pixels, garment.pixels)

    def test_overhanging_design_is_clipped(self):
        garment = solid(50, 50, (10, 10, 10, 255))
        design = solid(10, 10, (255, 255, 0, 255))

        out = composite_design(garment, design, width_ratio=1.0, center_x=1.0, center_y=1.0)

        assert (out.width, out.height) == (50, 50)
        assert out.pixel(49, 49) == (255, 255, 0, 255)
        assert out.pixel(0, 0) == (10, 10, 10, 255)

    def test_rejects_bad_ratio(self):
        garment = solid(10, 10, (0, 0, 0, 255))
        with pytest.raises(ValueError):
            composite_design(garment, garment, width_ratio=0.0)
        with pytest.raises(ValueError):
            composite_design(garment, garment, center_x=1.5)

    def test_garment_not_mutated(self):
        garment = solid(20, 20, (236, 64, 122, 255))
        snapshot = garment.pixels.copy()
        composite_design(garment, solid(4, 4, (0, 0, 0, 255)))
        np.testing.assert_array_equal(garment.pixels, snapshot)


class TestRenderMockup:
    """Test recolor + composition"""

    def test_without_design_is_plain_recolor(self, tshirt_pixels):
        base = RasterImage.from_array(tshirt_pixels)
        out = render_mockup(base, None, "#26A69A")
        assert out.pixel(4, 4) == (38, 166, 154, 255)
        assert out.pixel(2, 2) == (10, 200, 10, 255)

    def test_design_drawn_over_recolored_garment(self):
        base = solid(100, 100, (236, 64, 122, 255))
        design = solid(10, 10, (255, 255, 255, 255))

        out = render_mockup(base, design, "#000000")

        assert out.pixel(5, 5) == (0, 0, 0, 255)
        assert out.pixel(50, 50) == (255, 255, 255, 255)
