"""
Mockup Colors Module

Provides hex/RGB decoding and RGB to HSL conversion used to classify
garment pixels.
"""

__version__ = "1.0.0"
