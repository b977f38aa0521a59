"""
Preview Session

Holds the base garment image for one preview session and turns color changes
into recolored mockups off the event loop. Requests are last-writer-wins: a
result that finishes after a newer request was issued is discarded.
"""

import asyncio
import time
from typing import Optional

from app.services.colors.conversion import rgb_to_hex
from app.utils.logging import get_logger
from app.utils.metrics import get_metrics
from .engine import ColorInput, resolve_color
from .mockup import render_mockup
from .raster import RasterImage


class PreviewSession:
    """Recolor requests against one base image with last-writer-wins results."""

    def __init__(self, base: RasterImage, design: Optional[RasterImage] = None):
        self.base = base
        self.design = design
        self._generation = 0
        self._latest: Optional[RasterImage] = None
        self._latest_color: Optional[str] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def latest(self) -> Optional[RasterImage]:
        """Most recent result that was not superseded."""
        return self._latest

    @property
    def latest_color(self) -> Optional[str]:
        return self._latest_color

    def set_design(self, design: Optional[RasterImage]) -> None:
        """Swap the design overlay; takes effect on the next request."""
        self.design = design

    async def request(self, color: ColorInput) -> Optional[RasterImage]:
        """
        Render the mockup for a newly selected color.

        Args:
            color: Target color as "#RRGGBB" or an (R, G, B) triple

        Returns:
            The rendered mockup, or None if a newer request superseded this one
            while it was running

        Raises:
            InvalidColor: Color is malformed; raised before any work is scheduled
            InvalidImage: Base or design buffer is malformed
        """
        logger = get_logger()
        metrics = get_metrics()

        # Fail fast on bad colors without bumping the generation
        r, g, b = resolve_color(color)
        color_hex = rgb_to_hex(r, g, b)

        self._generation += 1
        generation = self._generation
        design = self.design

        start_time = time.time()
        result = await asyncio.to_thread(render_mockup, self.base, design, (r, g, b))
        render_time = (time.time() - start_time) * 1000

        if generation != self._generation:
            logger.debug("Discarding superseded preview", extra={
                "generation": generation,
                "current_generation": self._generation,
                "color": color_hex
            })
            metrics.increment_counter("preview_superseded_total")
            return None

        self._latest = result
        self._latest_color = color_hex
        metrics.record_timing("preview_render", render_time)
        return result
