"""
Imaging Module
==============

Frame preprocessing ahead of spectral analysis.

This module provides:
    - Luminance conversion of cropped RGB(A) ROI buffers
    - Tiled contrast-limited histogram equalization
"""

from chiller.imaging.luminance import FrameShapeError, to_luminance, validate_frame
from chiller.imaging.contrast import ContrastEnhancer

__all__ = [
    "FrameShapeError",
    "to_luminance",
    "validate_frame",
    "ContrastEnhancer",
]
