"""
Mockup Service API Schemas
Pydantic models for palette, recolor and mockup responses.
"""
from typing import Any, Dict, List
from pydantic import BaseModel, Field


HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("mockup-recolor", description="Service name")


class PaletteResponse(BaseModel):
    """Selectable t-shirt colors."""
    colors: List[str] = Field(..., description="Palette entries as #RRGGBB")
    default: str = Field(..., pattern=HEX_PATTERN, description="Initially selected color")


class RecolorDebug(BaseModel):
    """Processing details for a recolor request."""
    request_id: str = Field(..., description="Request identifier for log correlation")
    resized: bool = Field(..., description="Whether the base image was downscaled before recoloring")
    ms_decode: float = Field(..., description="Decode time in milliseconds")
    ms_recolor: float = Field(..., description="Recolor time in milliseconds")
    ms_encode: float = Field(..., description="Encode time in milliseconds")


class RecolorResponse(BaseModel):
    """Recolored garment image."""
    width: int = Field(..., description="Output image width in pixels")
    height: int = Field(..., description="Output image height in pixels")
    color: str = Field(..., pattern=HEX_PATTERN, description="Applied target color (uppercase)")
    in_palette: bool = Field(..., description="Whether the color is one of the configured palette entries")
    fabric_pixels: int = Field(..., ge=0, description="Number of pixels classified as fabric")
    fabric_ratio: float = Field(..., ge=0.0, le=1.0, description="Fabric pixels over total pixels")
    image_data_uri: str = Field(..., description="PNG data URI of the recolored image")
    debug: RecolorDebug = Field(..., description="Debug information")


class MockupResponse(BaseModel):
    """Recolored garment with the design composited on top."""
    width: int = Field(..., description="Mockup width in pixels")
    height: int = Field(..., description="Mockup height in pixels")
    color: str = Field(..., pattern=HEX_PATTERN, description="Applied target color (uppercase)")
    design_box_xywh: List[int] = Field(
        ...,
        min_length=4,
        max_length=4,
        description="Placed design as [x, y, width, height] in mockup pixels"
    )
    image_data_uri: str = Field(..., description="PNG data URI of the composited mockup")
    debug: Dict[str, Any] = Field(default_factory=dict, description="Debug information")


class MetricsResponse(BaseModel):
    """In-process metrics summary."""
    uptime_seconds: float
    counters: Dict[str, int]
    timing_stats: Dict[str, Dict[str, float]]
    fabric_ratio_stats: Dict[str, float]
