"""
Mockup Imaging Utilities
Handles upload validation, image decode/encode and data URI packaging for the
recolor engine.
"""
import base64
import io

import cv2
import numpy as np
from fastapi import HTTPException, UploadFile
from PIL import Image

from app.config import config
from app.services.recolor.errors import InvalidImage
from app.services.recolor.raster import RasterImage


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate uploaded file metadata before reading it.

    Args:
        file: FastAPI UploadFile object

    Raises:
        HTTPException: 413 for oversize files, 415 for unsupported formats
    """
    # Check file size (file.size might be None for some clients)
    if hasattr(file, 'size') and file.size and file.size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    if file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )

    if file.filename:
        ext = file.filename.lower().split('.')[-1] if '.' in file.filename else ''
        if f".{ext}" not in config.SUPPORTED_EXTENSIONS:
            raise HTTPException(
                status_code=415,
                detail=f"Unsupported file extension. Supported: {', '.join(sorted(config.SUPPORTED_EXTENSIONS))}"
            )


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Validate file magic bytes to ensure it's actually an image.

    Args:
        file_bytes: Raw file bytes

    Returns:
        Detected MIME type

    Raises:
        InvalidImage: For truncated or non-PNG/JPEG data
    """
    if len(file_bytes) < 8:
        raise InvalidImage("File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    elif file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    else:
        raise InvalidImage("Invalid image file. Magic bytes don't match supported formats.")


async def read_upload(file: UploadFile) -> bytes:
    """
    Read an uploaded image's bytes, enforcing the size limit.

    Raises:
        HTTPException: 400 if the stream can't be read, 413 if too large
    """
    validate_file_upload(file)

    try:
        file_bytes = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    return file_bytes


def decode_image(file_bytes: bytes) -> RasterImage:
    """
    Decode PNG/JPEG bytes into an RGBA RasterImage.

    Images without an alpha channel come back fully opaque.

    Raises:
        InvalidImage: For unrecognized or corrupt data
    """
    validate_magic_bytes(file_bytes)

    try:
        # Decode using PIL for safety
        pil_image = Image.open(io.BytesIO(file_bytes))
        pil_image.load()
        if pil_image.mode != 'RGBA':
            pil_image = pil_image.convert('RGBA')
        rgba_array = np.array(pil_image, dtype=np.uint8)
    except Exception as e:
        raise InvalidImage(f"Failed to decode image: {str(e)}") from e

    return RasterImage.from_array(rgba_array)


def encode_png(image: RasterImage) -> bytes:
    """
    Encode a RasterImage as PNG bytes, alpha preserved.

    Raises:
        RuntimeError: If OpenCV fails to encode
    """
    # Convert RGBA to BGRA for OpenCV
    bgra = cv2.cvtColor(np.array(image.pixels, copy=True), cv2.COLOR_RGBA2BGRA)

    success, buffer = cv2.imencode('.png', bgra)
    if not success:
        raise RuntimeError("Failed to encode RGBA as PNG")

    return buffer.tobytes()


def to_data_uri(image: RasterImage) -> str:
    """Encode a RasterImage as a displayable PNG data URI."""
    png_base64 = base64.b64encode(encode_png(image)).decode('ascii')
    return f"data:image/png;base64,{png_base64}"


def resize_long_edge(image: RasterImage, max_edge: int = None) -> RasterImage:
    """
    Downscale so the longest edge is at most max_edge pixels.

    Args:
        image: Input image
        max_edge: Maximum edge size (default from config)

    Returns:
        The input unchanged if already small enough, else a resized copy
    """
    if max_edge is None:
        max_edge = config.MAX_EDGE

    current_max = max(image.width, image.height)
    if current_max <= max_edge:
        return image

    scale = max_edge / current_max
    new_width = max(1, int(image.width * scale))
    new_height = max(1, int(image.height * scale))

    # Use INTER_AREA for downscaling (better quality)
    resized = cv2.resize(np.array(image.pixels, copy=True), (new_width, new_height), interpolation=cv2.INTER_AREA)

    return RasterImage.from_array(resized)


def to_pil(image: RasterImage) -> Image.Image:
    """View a RasterImage as a PIL RGBA image (copied)."""
    return Image.fromarray(np.array(image.pixels, copy=True))


def from_pil(pil_image: Image.Image) -> RasterImage:
    """Convert any PIL image to an RGBA RasterImage."""
    if pil_image.mode != 'RGBA':
        pil_image = pil_image.convert('RGBA')
    return RasterImage.from_array(np.array(pil_image, dtype=np.uint8))
