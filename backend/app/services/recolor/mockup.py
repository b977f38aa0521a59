"""
Mockup Composition

Places a design image over a (recolored) garment image at a fixed relative
position and size.
"""

from typing import Optional, Tuple

from PIL import Image

from app.config import config
from app.services import imaging
from .engine import ColorInput, recolor
from .raster import RasterImage


def design_box(mockup_size: Tuple[int, int],
               design_size: Tuple[int, int],
               width_ratio: float,
               center_x: float,
               center_y: float) -> Tuple[int, int, int, int]:
    """
    Compute where the design lands on the mockup.

    The design is scaled to width_ratio of the mockup width, keeping its
    aspect ratio, and centered on (center_x, center_y) given as fractions of
    the mockup size.

    Returns:
        (x, y, width, height) in mockup pixels; x/y may be negative when the
        design overhangs the top or left edge
    """
    mockup_w, mockup_h = mockup_size
    design_w, design_h = design_size
    if design_w <= 0 or design_h <= 0:
        raise ValueError(f"Invalid design size: {design_w}x{design_h}")

    target_w = max(1, round(mockup_w * width_ratio))
    target_h = max(1, round(design_h * target_w / design_w))

    x = round(mockup_w * center_x - target_w / 2)
    y = round(mockup_h * center_y - target_h / 2)
    return x, y, target_w, target_h


def composite_design(garment: RasterImage,
                     design: RasterImage,
                     width_ratio: Optional[float] = None,
                     center_x: Optional[float] = None,
                     center_y: Optional[float] = None) -> RasterImage:
    """
    Alpha-composite a design over a garment image.

    Args:
        garment: Background mockup image
        design: Design image (transparency respected)
        width_ratio: Design width as a fraction of the mockup width
        center_x, center_y: Design center as fractions of the mockup size

    Returns:
        New RasterImage with the garment's dimensions
    """
    width_ratio = config.DESIGN_WIDTH_RATIO if width_ratio is None else width_ratio
    center_x = config.DESIGN_CENTER_X if center_x is None else center_x
    center_y = config.DESIGN_CENTER_Y if center_y is None else center_y

    for name, value in (("width_ratio", width_ratio), ("center_x", center_x), ("center_y", center_y)):
        if not config.validate_ratio(value):
            raise ValueError(f"{name} must be in (0, 1], got {value}")

    x, y, w, h = design_box(
        (garment.width, garment.height), (design.width, design.height),
        width_ratio, center_x, center_y
    )

    design_pil = imaging.to_pil(design).resize((w, h), Image.Resampling.LANCZOS)

    # Paste onto a transparent layer first so overhanging designs are clipped
    layer = Image.new("RGBA", (garment.width, garment.height), (0, 0, 0, 0))
    layer.paste(design_pil, (x, y))

    composed = Image.alpha_composite(imaging.to_pil(garment), layer)
    return imaging.from_pil(composed)


def render_mockup(base: RasterImage, design: Optional[RasterImage], color: ColorInput) -> RasterImage:
    """Recolor the base garment and place the design on it (if any)."""
    garment = recolor(base, color)
    if design is None:
        return garment
    return composite_design(garment, design)
