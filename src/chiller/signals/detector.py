"""
Detection State Machine
=======================

Threshold classifier applied to every frame after calibration.

Transition Rule (per frame, no hysteresis, no debounce):
    intensity = (power - baseline) / baseline * 100   if baseline > 0
              = 0                                      otherwise

    DETECTING   if intensity >= threshold
    MONITORING  otherwise

Every DETECTING frame increments the detection counter, so a detection
sustained over N frames counts N times.
"""

import logging
from dataclasses import dataclass

from chiller.models.state import DetectionState


logger = logging.getLogger(__name__)


def relative_intensity(power: float, baseline: float) -> float:
    """Percent deviation of ``power`` from ``baseline``; 0 for a non-positive baseline."""
    if baseline > 0:
        return (power - baseline) / baseline * 100
    return 0.0


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of classifying one frame."""

    state: DetectionState
    intensity: float

    @property
    def detected(self) -> bool:
        return self.state == DetectionState.DETECTING


class DetectionStateMachine:
    """
    Threshold-only goosebump classifier.

    Attributes:
        threshold: Intensity (percent) at or above which a frame is DETECTING
        detection_count: Detecting frames seen since the last reset
        state: Classification of the most recent frame

    Example:
        detector = DetectionStateMachine(threshold=30.0)
        result = detector.classify(power=130.0, baseline=100.0)
        assert result.state == DetectionState.DETECTING
    """

    def __init__(self, threshold: float = 30.0) -> None:
        self.threshold = threshold

        self._detection_count: int = 0
        self._state: DetectionState = DetectionState.MONITORING

        logger.info(f"DetectionStateMachine initialized: threshold={threshold}%")

    @property
    def detection_count(self) -> int:
        """Number of detecting frames since the last reset."""
        return self._detection_count

    @property
    def state(self) -> DetectionState:
        """State of the most recently classified frame."""
        return self._state

    def classify(self, power: float, baseline: float) -> Classification:
        """
        Classify one calibrated frame.

        Args:
            power: Texture power of the frame
            baseline: Calibrated baseline power

        Returns:
            Classification with the new state and the intensity
        """
        intensity = relative_intensity(power, baseline)

        if intensity >= self.threshold:
            self._state = DetectionState.DETECTING
            self._detection_count += 1
        else:
            self._state = DetectionState.MONITORING

        return Classification(state=self._state, intensity=intensity)

    def reset(self) -> None:
        """Zero the detection counter."""
        self._detection_count = 0
        self._state = DetectionState.MONITORING
