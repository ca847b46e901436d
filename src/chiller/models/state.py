"""
Detection State Models
======================

This module defines the per-frame output contract of a detection session.

Core Concepts:
    - DetectionState: Discrete classification of a frame
    - FrameResult: Everything the presentation layer needs for one frame

State Flow:
    CALIBRATING: Baseline samples are still being collected, no intensity
    MONITORING:  Calibrated, intensity below the detection threshold
    DETECTING:   Calibrated, intensity at or above the detection threshold

    CALIBRATING is left exactly once per session, after the calibration
    window fills. MONITORING and DETECTING alternate freely afterwards
    (threshold-only classifier, no hysteresis).

Example:
    from chiller.models.state import DetectionState, FrameResult

    result = FrameResult(
        frame_index=11,
        state=DetectionState.DETECTING,
        texture_power=13.0,
        intensity=30.0,
        baseline=10.0,
        detection_count=1,
        calibration_samples=10,
    )
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class DetectionState(str, Enum):
    """
    Discrete states reported for every processed frame.

    Attributes:
        CALIBRATING: Collecting baseline texture power samples
        MONITORING: Baseline known, no goosebump texture detected
        DETECTING: Texture power exceeds baseline by the threshold
    """

    CALIBRATING = "CALIBRATING"
    MONITORING = "MONITORING"
    DETECTING = "DETECTING"


class FrameResult(BaseModel):
    """
    Output of one full pipeline pass.

    Attributes:
        frame_index: 1-based index of the frame within the session
        state: Classification of this frame
        texture_power: Band-limited spectral power of the ROI
        intensity: Percent deviation from baseline (None while calibrating)
        baseline: Calibrated baseline power (0.0 until calibrated)
        detection_count: Detections counted so far in this session
        calibration_samples: Baseline samples collected so far
    """

    frame_index: int = Field(..., ge=1, description="1-based frame index in session")

    state: DetectionState = Field(..., description="Frame classification")

    texture_power: float = Field(
        ...,
        ge=0.0,
        description="Maximum band power of the averaged row spectrum",
    )

    intensity: Optional[float] = Field(
        default=None,
        description="Percent deviation from baseline, None while calibrating",
    )

    baseline: float = Field(
        default=0.0,
        description="Mean texture power over the calibration window",
    )

    detection_count: int = Field(
        default=0,
        ge=0,
        description="Number of detecting frames so far in this session",
    )

    calibration_samples: int = Field(
        default=0,
        ge=0,
        description="Baseline samples collected (for progress display)",
    )

    @property
    def is_detection(self) -> bool:
        """True when this frame was classified as DETECTING."""
        return self.state == DetectionState.DETECTING
