"""
Stream Module
=============

Frame acquisition glue around the detection session.

This module provides:
    - VideoFrame: Typed frame data model
    - VideoFrameSource: OpenCV capture iterator (file or camera)
    - crop_center_roi / bgr_to_rgb: ROI extraction helpers

Example:
    from chiller.stream import VideoFrameSource, crop_center_roi, bgr_to_rgb

    with VideoFrameSource("clip.mp4") as frames:
        for frame in frames:
            roi = bgr_to_rgb(crop_center_roi(frame.image, 160, 120))
            session.process_rgb(roi)
"""

from chiller.stream.frame import VideoFrame
from chiller.stream.roi import bgr_to_rgb, crop_center_roi
from chiller.stream.source import VideoFrameSource, parse_source


__all__ = [
    "VideoFrame",
    "VideoFrameSource",
    "parse_source",
    "bgr_to_rgb",
    "crop_center_roi",
]
