"""
Video Frame Model
=================

Internal frame representation handed from the frame source to the session.

Design Rules:
    - Immutable wrapper, the image array itself is not copied
    - Carries the capture-side index and timestamp for logging
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class VideoFrame:
    """
    Frame read from a video source.

    Attributes:
        frame_id: Monotonically increasing counter from the source (0-based)
        timestamp: Monotonic time (seconds) when the frame was read
        image: Full BGR frame as decoded by OpenCV (H, W, 3), dtype uint8
    """

    frame_id: int
    timestamp: float
    image: np.ndarray

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the pixel data."""
        return (
            f"VideoFrame(frame_id={self.frame_id}, "
            f"timestamp={self.timestamp:.3f}, "
            f"shape={self.image.shape})"
        )
