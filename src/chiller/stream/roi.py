"""
ROI Extraction
==============

Centered region-of-interest crop and colour reordering for captured frames.
"""

import numpy as np

from chiller.imaging.luminance import FrameShapeError


def crop_center_roi(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Cut a ``width`` x ``height`` window out of the centre of an image.

    The window origin is floor((W - width) / 2), floor((H - height) / 2).

    Args:
        image: Frame array (H, W) or (H, W, C)
        width: ROI width in pixels
        height: ROI height in pixels

    Returns:
        View of the ROI (height, width[, C])

    Raises:
        FrameShapeError: If the image is smaller than the ROI
    """
    if image.ndim < 2:
        raise FrameShapeError(f"Expected an image array, got shape {image.shape}")

    frame_h, frame_w = image.shape[:2]
    if frame_w < width or frame_h < height:
        raise FrameShapeError(
            f"Frame {frame_w}x{frame_h} is smaller than ROI {width}x{height}"
        )

    x = (frame_w - width) // 2
    y = (frame_h - height) // 2
    return image[y:y + height, x:x + width]


def bgr_to_rgb(image: np.ndarray) -> np.ndarray:
    """Reorder OpenCV BGR channels to RGB (view, no copy)."""
    return image[..., 2::-1]
