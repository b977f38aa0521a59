"""
Mockup Service v1 API Routes
Palette, recolor and mockup endpoints consumed by the preview frontend.
"""
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, Query, UploadFile

from app.config import config
from app.schemas import MetricsResponse, MockupResponse, PaletteResponse, RecolorResponse
from app.services.recolor.pipeline import run_mockup, run_recolor
from app.utils.metrics import get_metrics

router = APIRouter(prefix="/v1", tags=["Mockup Recolor"])


@router.get("/palette", response_model=PaletteResponse,
            summary="Selectable T-Shirt Colors")
async def get_palette() -> PaletteResponse:
    """Return the configured palette and the initially selected color."""
    return PaletteResponse(colors=config.PALETTE, default=config.DEFAULT_COLOR)


@router.post("/recolor", response_model=RecolorResponse,
             summary="Recolor Garment",
             description="Replace the garment fabric color of a base mockup image")
async def recolor_garment(
    file: UploadFile = File(..., description="Base garment image (PNG/JPEG)"),
    color: str = Form(..., description="Target color as #RRGGBB"),
    max_edge: Optional[int] = Query(None, ge=64, le=8192, description="Downscale limit for the long edge")
):
    """
    Recolor the fabric pixels of the uploaded garment photo.

    Any syntactically valid 6-digit hex is accepted, whether or not it is in
    the palette. Print, shadows and background keep their original pixels.
    """
    return await run_recolor(file, color, max_edge)


@router.post("/mockup", response_model=MockupResponse,
             summary="Render Mockup",
             description="Recolor the garment and composite the design on it")
async def render_mockup(
    base: UploadFile = File(..., description="Base garment image (PNG/JPEG)"),
    design: UploadFile = File(..., description="Design image (PNG/JPEG)"),
    color: str = Form(..., description="Target color as #RRGGBB"),
    max_edge: Optional[int] = Query(None, ge=64, le=8192, description="Downscale limit for the long edge")
):
    """The design is scaled to a fixed share of the mockup width and centered."""
    return await run_mockup(base, design, color, max_edge)


@router.get("/metrics", response_model=MetricsResponse, summary="Service Metrics")
async def get_service_metrics():
    """In-process counters and timing statistics."""
    if not config.METRICS_ENABLED:
        raise HTTPException(status_code=404, detail="Metrics disabled")
    return get_metrics().get_summary()
