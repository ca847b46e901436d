"""
Luminance Conversion
====================

Converts cropped RGB(A) ROI buffers into 8-bit luminance frames.

Design Rules:
    - This is the ONLY place in the pipeline that touches colour data
    - Luminance = floor(0.299 R + 0.587 G + 0.114 B)
    - Fails loudly on malformed buffers; a silently truncated frame would
      corrupt the row spectra downstream
"""

import logging
from typing import Optional

import numpy as np


logger = logging.getLogger(__name__)


class FrameShapeError(ValueError):
    """Raised when a frame buffer does not match the configured ROI."""
    pass


def to_luminance(
    rgb: np.ndarray,
    width: int,
    height: int,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Convert an RGB or RGBA ROI buffer to grayscale.

    Accepts either an image-shaped array (height, width, 3|4) or a flat
    interleaved RGBA byte buffer of length width * height * 4, as handed
    over by browser canvas style APIs. The alpha channel is ignored.

    Args:
        rgb: ROI pixel buffer, dtype uint8
        width: Expected ROI width in pixels
        height: Expected ROI height in pixels
        out: Optional preallocated (height, width) uint8 array to write into

    Returns:
        Luminance frame as np.ndarray (height, width), dtype=uint8

    Raises:
        FrameShapeError: If the buffer shape does not match the ROI
    """
    rgb = np.asarray(rgb)

    if rgb.ndim == 1:
        if rgb.size != width * height * 4:
            raise FrameShapeError(
                f"Flat RGBA buffer has {rgb.size} samples, "
                f"expected {width * height * 4} for {width}x{height}"
            )
        rgb = rgb.reshape(height, width, 4)

    if rgb.ndim != 3 or rgb.shape[2] not in (3, 4):
        raise FrameShapeError(f"Expected (H, W, 3|4) colour buffer, got {rgb.shape}")

    if rgb.shape[:2] != (height, width):
        raise FrameShapeError(
            f"ROI buffer is {rgb.shape[1]}x{rgb.shape[0]}, expected {width}x{height}"
        )

    # Summed left to right so floor() sees the same value as the scalar formula
    channels = rgb.astype(np.float64)
    luma = 0.299 * channels[..., 0]
    luma += 0.587 * channels[..., 1]
    luma += 0.114 * channels[..., 2]
    np.floor(luma, out=luma)

    if out is None:
        return luma.astype(np.uint8)
    np.copyto(out, luma, casting="unsafe")
    return out


def validate_frame(frame: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Check that a grayscale frame matches the ROI dimensions.

    Args:
        frame: Candidate luminance frame
        width: Expected ROI width
        height: Expected ROI height

    Returns:
        The frame as an ndarray

    Raises:
        FrameShapeError: If the frame is not (height, width)
    """
    frame = np.asarray(frame)
    if frame.shape != (height, width):
        raise FrameShapeError(
            f"Luminance frame has shape {frame.shape}, expected {(height, width)}"
        )
    return frame
