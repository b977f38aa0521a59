"""
Recolor Request Pipeline
Orchestrates upload decode -> recolor -> encode for the HTTP API, with
request-scoped logging, timing and metrics.
"""
import asyncio
import time
from typing import Any, Dict, Optional

from fastapi import HTTPException, UploadFile

from app.config import config
from app.services.colors.conversion import rgb_to_hex
from app.services.imaging import decode_image, read_upload, resize_long_edge, to_data_uri
from app.utils.ids import generate_request_id
from app.utils.logging import get_logger
from app.utils.metrics import get_metrics
from .engine import recolor, recolor_with_count, resolve_color
from .errors import InvalidColor, InvalidImage
from .mockup import composite_design, design_box


def _normalize_color(color: str) -> str:
    r, g, b = resolve_color(color)
    return rgb_to_hex(r, g, b)


async def _load_upload(file: UploadFile, max_edge: int) -> tuple:
    file_bytes = await read_upload(file)
    image = decode_image(file_bytes)
    resized = resize_long_edge(image, max_edge)
    return resized, resized is not image


async def run_recolor(file: UploadFile, color: str, max_edge: Optional[int] = None) -> Dict[str, Any]:
    """
    Recolor an uploaded base garment image.

    Args:
        file: Uploaded PNG/JPEG of the base garment
        color: Target color as "#RRGGBB" (palette membership not required)
        max_edge: Downscale limit for the long edge (default from config)

    Returns:
        Dictionary matching RecolorResponse schema

    Raises:
        HTTPException: 422 invalid color, 400 invalid image, 413/415 upload
            limits, 500 unexpected failures
    """
    request_id = generate_request_id("rc")
    logger = get_logger()
    metrics = get_metrics()
    start_time = time.time()

    if max_edge is None:
        max_edge = config.MAX_EDGE
    if not config.validate_max_edge(max_edge):
        raise HTTPException(status_code=400, detail="Invalid max_edge value")

    metrics.increment_request_count("recolor")

    try:
        # Reject bad colors before touching the upload
        color_hex = _normalize_color(color)

        logger.info("Starting recolor", extra={"request_id": request_id, "color": color_hex})

        decode_start = time.time()
        base, resized = await _load_upload(file, max_edge)
        decode_time = (time.time() - decode_start) * 1000

        recolor_start = time.time()
        output, fabric_pixels = await asyncio.to_thread(recolor_with_count, base, color_hex)
        recolor_time = (time.time() - recolor_start) * 1000

        encode_start = time.time()
        try:
            data_uri = to_data_uri(output)
        except RuntimeError as e:
            logger.error(f"Encoding failed: {str(e)}", extra={"request_id": request_id})
            metrics.increment_failure_count("recolor", "encoding")
            raise HTTPException(status_code=500, detail="Failed to encode recolored image")
        encode_time = (time.time() - encode_start) * 1000

        total_pixels = output.width * output.height
        fabric_ratio = fabric_pixels / total_pixels

        total_time = (time.time() - start_time) * 1000
        logger.info("Recolor completed successfully", extra={
            "request_id": request_id,
            "color": color_hex,
            "dims": f"{output.width}x{output.height}",
            "fabric_ratio": round(fabric_ratio, 4),
            "ms_decode": decode_time,
            "ms_recolor": recolor_time,
            "ms_encode": encode_time,
            "ms_total": total_time,
            "result": "ok"
        })

        metrics.record_timing("recolor", recolor_time)
        metrics.record_timing("recolor_total", total_time)
        metrics.record_fabric_ratio(fabric_ratio)

        return {
            "width": output.width,
            "height": output.height,
            "color": color_hex,
            "in_palette": color_hex in config.PALETTE,
            "fabric_pixels": fabric_pixels,
            "fabric_ratio": fabric_ratio,
            "image_data_uri": data_uri,
            "debug": {
                "request_id": request_id,
                "resized": resized,
                "ms_decode": decode_time,
                "ms_recolor": recolor_time,
                "ms_encode": encode_time
            }
        }

    except InvalidColor as e:
        logger.warning(f"Invalid color: {str(e)}", extra={"request_id": request_id, "result": "error"})
        metrics.increment_failure_count("recolor", "invalid_color")
        raise HTTPException(status_code=422, detail=f"Invalid color: {str(e)}")
    except InvalidImage as e:
        logger.warning(f"Invalid image: {str(e)}", extra={"request_id": request_id, "result": "error"})
        metrics.increment_failure_count("recolor", "invalid_image")
        raise HTTPException(status_code=400, detail=f"Invalid image: {str(e)}")
    except HTTPException:
        raise
    except Exception as e:
        total_time = (time.time() - start_time) * 1000
        logger.error(f"Unexpected error in recolor pipeline: {str(e)}", extra={
            "request_id": request_id,
            "ms_total": total_time,
            "result": "error",
            "error_type": "unexpected"
        })
        metrics.increment_failure_count("recolor", "unexpected")
        raise HTTPException(status_code=500, detail="Internal recolor error")


async def run_mockup(base_file: UploadFile,
                     design_file: UploadFile,
                     color: str,
                     max_edge: Optional[int] = None) -> Dict[str, Any]:
    """
    Recolor a base garment and composite a design on it.

    Returns:
        Dictionary matching MockupResponse schema

    Raises:
        HTTPException: Same mapping as run_recolor
    """
    request_id = generate_request_id("mk")
    logger = get_logger()
    metrics = get_metrics()
    start_time = time.time()

    if max_edge is None:
        max_edge = config.MAX_EDGE
    if not config.validate_max_edge(max_edge):
        raise HTTPException(status_code=400, detail="Invalid max_edge value")

    metrics.increment_request_count("mockup")

    try:
        color_hex = _normalize_color(color)

        logger.info("Starting mockup", extra={"request_id": request_id, "color": color_hex})

        base, _ = await _load_upload(base_file, max_edge)
        design, _ = await _load_upload(design_file, max_edge)

        garment = await asyncio.to_thread(recolor, base, color_hex)
        mockup = await asyncio.to_thread(composite_design, garment, design)
        box = design_box(
            (mockup.width, mockup.height), (design.width, design.height),
            config.DESIGN_WIDTH_RATIO, config.DESIGN_CENTER_X, config.DESIGN_CENTER_Y
        )

        data_uri = to_data_uri(mockup)

        total_time = (time.time() - start_time) * 1000
        logger.info("Mockup completed successfully", extra={
            "request_id": request_id,
            "color": color_hex,
            "dims": f"{mockup.width}x{mockup.height}",
            "design_box": list(box),
            "ms_total": total_time,
            "result": "ok"
        })
        metrics.record_timing("mockup_total", total_time)

        return {
            "width": mockup.width,
            "height": mockup.height,
            "color": color_hex,
            "design_box_xywh": list(box),
            "image_data_uri": data_uri,
            "debug": {
                "request_id": request_id,
                "design_width_ratio": config.DESIGN_WIDTH_RATIO,
                "design_center": [config.DESIGN_CENTER_X, config.DESIGN_CENTER_Y]
            }
        }

    except InvalidColor as e:
        logger.warning(f"Invalid color: {str(e)}", extra={"request_id": request_id, "result": "error"})
        metrics.increment_failure_count("mockup", "invalid_color")
        raise HTTPException(status_code=422, detail=f"Invalid color: {str(e)}")
    except InvalidImage as e:
        logger.warning(f"Invalid image: {str(e)}", extra={"request_id": request_id, "result": "error"})
        metrics.increment_failure_count("mockup", "invalid_image")
        raise HTTPException(status_code=400, detail=f"Invalid image: {str(e)}")
    except HTTPException:
        raise
    except Exception as e:
        total_time = (time.time() - start_time) * 1000
        logger.error(f"Unexpected error in mockup pipeline: {str(e)}", extra={
            "request_id": request_id,
            "ms_total": total_time,
            "result": "error",
            "error_type": "unexpected"
        })
        metrics.increment_failure_count("mockup", "unexpected")
        raise HTTPException(status_code=500, detail="Internal mockup error")
