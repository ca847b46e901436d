"""
Video Frame Source
==================

Pulls frames from an OpenCV capture (video file or camera index).

Design Rules:
    - Frames are read only when the consumer asks for the next one; there
      is no queue and nothing is dropped or counted as dropped
    - The capture is released when iteration ends or the context exits
    - Exposes minimal metrics for observability
"""

import logging
import time
from typing import Callable, Iterator, Optional, Union

import cv2

from chiller.stream.frame import VideoFrame


logger = logging.getLogger(__name__)


CaptureFactory = Callable[[Union[int, str]], "cv2.VideoCapture"]


def parse_source(source: str) -> Union[int, str]:
    """Interpret a purely numeric source string as a camera index."""
    return int(source) if source.isdigit() else source


class VideoFrameSource:
    """
    Iterator over frames of an OpenCV capture.

    Attributes:
        source: Camera index or path/URL passed to cv2.VideoCapture
        max_frames: Stop after this many frames (None = until exhausted)

    Example:
        with VideoFrameSource("clip.mp4") as frames:
            for frame in frames:
                process(frame.image)
    """

    def __init__(
        self,
        source: Union[int, str] = 0,
        max_frames: Optional[int] = None,
        capture_factory: CaptureFactory = cv2.VideoCapture,
    ) -> None:
        """
        Initialize frame source.

        Args:
            source: Camera index or video path
            max_frames: Optional frame limit, must be >= 1
            capture_factory: Callable that opens the capture
        """
        if max_frames is not None and max_frames < 1:
            raise ValueError("max_frames must be >= 1")

        self.source = source
        self.max_frames = max_frames
        self._capture_factory = capture_factory
        self._capture = None
        self._frames_read: int = 0
        self._first_timestamp: Optional[float] = None
        self._last_timestamp: Optional[float] = None

    @property
    def frames_read(self) -> int:
        """Number of frames successfully read."""
        return self._frames_read

    @property
    def measured_fps(self) -> float:
        """Average frame rate since the first frame (0.0 with < 2 frames)."""
        if (
            self._frames_read < 2
            or self._first_timestamp is None
            or self._last_timestamp is None
        ):
            return 0.0
        elapsed = self._last_timestamp - self._first_timestamp
        if elapsed <= 0:
            return 0.0
        return (self._frames_read - 1) / elapsed

    def open(self) -> None:
        """
        Open the underlying capture.

        Raises:
            RuntimeError: If the capture cannot be opened
        """
        if self._capture is not None:
            return

        capture = self._capture_factory(self.source)
        if not capture.isOpened():
            capture.release()
            raise RuntimeError(f"Could not open video source: {self.source!r}")

        self._capture = capture
        logger.info(f"Opened video source: {self.source!r}")

    def close(self) -> None:
        """Release the capture."""
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.info(
                f"Closed video source: {self._frames_read} frames, "
                f"{self.measured_fps:.1f} fps"
            )

    def __enter__(self) -> "VideoFrameSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[VideoFrame]:
        self.open()
        try:
            while self.max_frames is None or self._frames_read < self.max_frames:
                ok, image = self._capture.read()
                if not ok or image is None:
                    logger.info("Video source exhausted")
                    break

                now = time.monotonic()
                if self._first_timestamp is None:
                    self._first_timestamp = now
                self._last_timestamp = now

                frame = VideoFrame(
                    frame_id=self._frames_read,
                    timestamp=now,
                    image=image,
                )
                self._frames_read += 1
                yield frame
        finally:
            self.close()

    def metrics(self) -> dict:
        """
        Get source metrics for observability.

        Returns:
            Dict with source, frames_read, measured_fps
        """
        return {
            "source": self.source,
            "frames_read": self._frames_read,
            "measured_fps": round(self.measured_fps, 2),
        }
