"""
Baseline Calibrator
===================

Establishes the per-session reference texture power.

States:
    CALIBRATING -> CALIBRATED (terminal until reset)

The first ``window`` texture power readings of a session are collected and
averaged once the window is full. The baseline is never recomputed
afterwards; only reset() returns the calibrator to CALIBRATING.
"""

import logging
from typing import List, Tuple


logger = logging.getLogger(__name__)


class BaselineCalibrator:
    """
    Fixed-window baseline estimator.

    Attributes:
        window: Number of samples averaged into the baseline

    Example:
        calibrator = BaselineCalibrator(window=10)

        for power in readings:
            if calibrator.add_sample(power):
                print(f"Baseline: {calibrator.baseline}")
    """

    def __init__(self, window: int = 10) -> None:
        """
        Initialize calibrator.

        Args:
            window: Calibration window length, must be >= 1
        """
        if window < 1:
            raise ValueError("window must be >= 1")

        self.window = window

        self._samples: List[float] = []
        self._baseline: float = 0.0
        self._calibrated: bool = False

    @property
    def calibrated(self) -> bool:
        """True once the calibration window has been filled."""
        return self._calibrated

    @property
    def baseline(self) -> float:
        """Mean of the calibration samples (0.0 until calibrated)."""
        return self._baseline

    @property
    def samples(self) -> Tuple[float, ...]:
        """Calibration samples collected so far."""
        return tuple(self._samples)

    @property
    def sample_count(self) -> int:
        return len(self._samples)

    def add_sample(self, power: float) -> bool:
        """
        Record one texture power reading.

        Args:
            power: Texture power of the current frame

        Returns:
            True if this sample completed calibration, False otherwise

        Raises:
            RuntimeError: If the calibrator is already calibrated
        """
        if self._calibrated:
            raise RuntimeError("Calibrator already calibrated; reset() first")

        self._samples.append(float(power))

        if len(self._samples) >= self.window:
            self._baseline = sum(self._samples) / len(self._samples)
            self._calibrated = True
            logger.info(
                f"Baseline established from {len(self._samples)} samples: "
                f"{self._baseline:.4f}"
            )
            return True

        return False

    def reset(self) -> None:
        """Discard samples and baseline, back to CALIBRATING."""
        self._samples.clear()
        self._baseline = 0.0
        self._calibrated = False
        logger.info("BaselineCalibrator reset")
