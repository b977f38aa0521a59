"""
Mockup Service Configuration
Manages environment variables and defaults for the recolor and mockup services.
"""
import os
from typing import List


DEFAULT_PALETTE = (
    "#FFFFFF,#E0E0E0,#9E9E9E,#424242,#000000,"
    "#EF5350,#EC407A,#AB47BC,#42A5F5,#26A69A,"
    "#66BB6A,#D4E157,#FFEE58,#FFA726,#8D6E63"
)


def _parse_palette(raw: str) -> List[str]:
    return [entry.strip().upper() for entry in raw.split(",") if entry.strip()]


class Config:
    """Configuration class for the mockup services."""

    # Service identity
    SERVICE_NAME: str = "mockup-recolor"
    VERSION: str = "1.0.0"

    # Server bind address when run directly
    HOST: str = os.environ.get("MOCKUP_HOST", "0.0.0.0")
    PORT: int = int(os.environ.get("MOCKUP_PORT", "8000"))

    # File size and dimensions
    MAX_FILE_MB: int = int(os.environ.get("MOCKUP_MAX_FILE_MB", "10"))
    MAX_EDGE: int = int(os.environ.get("MOCKUP_MAX_EDGE", "2048"))

    # Logging
    LOG_LEVEL: str = os.environ.get("MOCKUP_LOG_LEVEL", "INFO")

    # Selectable t-shirt colors
    PALETTE: List[str] = _parse_palette(os.environ.get("MOCKUP_PALETTE", DEFAULT_PALETTE))
    DEFAULT_COLOR: str = os.environ.get("MOCKUP_DEFAULT_COLOR", "#E0E0E0").upper()

    # Design placement relative to the mockup
    DESIGN_WIDTH_RATIO: float = float(os.environ.get("MOCKUP_DESIGN_WIDTH_RATIO", "0.5"))
    DESIGN_CENTER_X: float = float(os.environ.get("MOCKUP_DESIGN_CENTER_X", "0.5"))
    DESIGN_CENTER_Y: float = float(os.environ.get("MOCKUP_DESIGN_CENTER_Y", "0.5"))

    # Metrics
    METRICS_ENABLED: bool = bool(int(os.environ.get("MOCKUP_METRICS_ENABLED", "1")))

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get(
        "MOCKUP_ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173"
    )

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png"]
    SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png"}

    @classmethod
    def validate_ratio(cls, ratio: float) -> bool:
        """Validate a relative size/position in (0, 1]."""
        return 0.0 < ratio <= 1.0

    @classmethod
    def validate_max_edge(cls, max_edge: int) -> bool:
        """Validate max_edge parameter."""
        return 64 <= max_edge <= 8192

    @classmethod
    def allowed_origins(cls) -> List[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global config instance
config = Config()
