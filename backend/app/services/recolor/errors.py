"""
Recolor error taxonomy.
"""


class RecolorError(Exception):
    """Base exception for recolor engine failures."""
    pass


class InvalidColor(RecolorError):
    """Target color could not be decoded."""
    pass


class InvalidImage(RecolorError):
    """Raster buffer is malformed or image bytes could not be decoded."""
    pass
