"""
Detection Session
=================

Explicit per-session context for the goosebump detection pipeline.

A session owns all state that survives from one frame to the next:
    - BaselineCalibrator (calibration samples, baseline)
    - DetectionStateMachine (detection counter)
    - IntensityHistory (trend buffer)
    - ScratchBuffers reused by every frame

Per frame (process_rgb):
    RGB(A) ROI -> luminance -> contrast enhancement -> texture power
        -> calibrator (while CALIBRATING)
        -> detector + history (afterwards)

Sessions are independent of each other; nothing is kept at module level.
Stopping a session is reset(): the calibrator, counter and history go back
to their initial empty values. Frames always run to completion.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional

import numpy as np

from chiller.imaging.contrast import ContrastEnhancer
from chiller.imaging.luminance import to_luminance, validate_frame
from chiller.models.state import DetectionState, FrameResult
from chiller.signals.calibrator import BaselineCalibrator
from chiller.signals.detector import DetectionStateMachine
from chiller.signals.history import IntensityHistory
from chiller.spectral.analyzer import SpectralPowerAnalyzer
from chiller.spectral.bands import FrequencyBand

if TYPE_CHECKING:
    from chiller.config import Settings


logger = logging.getLogger(__name__)


DetectionCallback = Callable[[FrameResult], None]


@dataclass
class ScratchBuffers:
    """
    Frame-sized work arrays allocated once per session.

    Contents are only meaningful during a single process_* call.

    Attributes:
        luminance: Grayscale ROI (H, W) uint8
        enhanced: Contrast-enhanced ROI (H, W) uint8
        normalized: Z-scored ROI (H, W) float64
        spectrum: Row-averaged power spectrum (W,) float64
    """

    width: int
    height: int
    luminance: np.ndarray = field(init=False, repr=False)
    enhanced: np.ndarray = field(init=False, repr=False)
    normalized: np.ndarray = field(init=False, repr=False)
    spectrum: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        shape = (self.height, self.width)
        self.luminance = np.zeros(shape, dtype=np.uint8)
        self.enhanced = np.zeros(shape, dtype=np.uint8)
        self.normalized = np.zeros(shape, dtype=np.float64)
        self.spectrum = np.zeros(self.width, dtype=np.float64)


class DetectionSession:
    """
    One monitoring session of the goosebump detector.

    Attributes:
        width: ROI width in pixels
        height: ROI height in pixels
        enhancer: Contrast enhancement stage
        analyzer: Spectral power stage
        calibrator: Baseline calibration stage
        detector: Threshold classification stage
        history: Recent intensity values
        log_every_n_frames: Period of the debug summary log

    Example:
        session = DetectionSession.from_settings(settings, on_detection=buzz)

        for roi in frames:
            result = session.process_rgb(roi)
            print(result.state, result.intensity)

        session.reset()
    """

    def __init__(
        self,
        width: int = 160,
        height: int = 120,
        enhancer: Optional[ContrastEnhancer] = None,
        analyzer: Optional[SpectralPowerAnalyzer] = None,
        baseline_frames: int = 10,
        detection_threshold: float = 30.0,
        max_history: int = 60,
        on_detection: Optional[DetectionCallback] = None,
        log_every_n_frames: int = 30,
    ) -> None:
        """
        Initialize a detection session.

        Args:
            width: ROI width in pixels
            height: ROI height in pixels
            enhancer: Contrast enhancer (default 8px tiles, clip 2.0)
            analyzer: Spectral analyzer (default band for this ROI size)
            baseline_frames: Calibration window length
            detection_threshold: Intensity percentage counted as detection
            max_history: Intensity history capacity
            on_detection: Called with the FrameResult of every detecting
                frame (haptic / visual feedback hook)
            log_every_n_frames: Log a session summary every N frames
        """
        if analyzer is not None and (analyzer.width, analyzer.height) != (width, height):
            raise ValueError(
                f"Analyzer is sized {analyzer.width}x{analyzer.height}, "
                f"session ROI is {width}x{height}"
            )

        self.width = width
        self.height = height
        self.enhancer = enhancer or ContrastEnhancer()
        self.analyzer = analyzer or SpectralPowerAnalyzer(width=width, height=height)
        self.calibrator = BaselineCalibrator(window=baseline_frames)
        self.detector = DetectionStateMachine(threshold=detection_threshold)
        self.history = IntensityHistory(capacity=max_history)
        self.on_detection = on_detection
        self.log_every_n_frames = log_every_n_frames

        self._scratch = ScratchBuffers(width=width, height=height)
        self._frame_count: int = 0
        self._last_result: Optional[FrameResult] = None

        logger.info(
            f"DetectionSession initialized: roi={width}x{height}, "
            f"baseline_frames={baseline_frames}, threshold={detection_threshold}%"
        )

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        on_detection: Optional[DetectionCallback] = None,
    ) -> "DetectionSession":
        """Build a session from loaded configuration."""
        roi = settings.roi
        band = FrequencyBand(
            freq_min_mm=settings.spectrum.freq_min_mm,
            freq_max_mm=settings.spectrum.freq_max_mm,
            pixel_size_mm=settings.spectrum.pixel_size_mm,
        )
        return cls(
            width=roi.width,
            height=roi.height,
            enhancer=ContrastEnhancer(
                tile_size=settings.enhancement.tile_size,
                clip_limit=settings.enhancement.clip_limit,
            ),
            analyzer=SpectralPowerAnalyzer(
                width=roi.width,
                height=roi.height,
                band=band,
                noise_floor_std=settings.spectrum.noise_floor_std,
            ),
            baseline_frames=settings.calibration.baseline_frames,
            detection_threshold=settings.detection.threshold,
            max_history=settings.detection.max_history,
            on_detection=on_detection,
            log_every_n_frames=settings.logging.log_every_n_frames,
        )

    # -------------------------------------------------------------------------
    # Pipeline entry points
    # -------------------------------------------------------------------------

    def process_rgb(self, roi: np.ndarray) -> FrameResult:
        """
        Run the full pipeline on a cropped RGB(A) ROI buffer.

        Args:
            roi: (height, width, 3|4) uint8 array or flat RGBA buffer

        Returns:
            FrameResult for this frame

        Raises:
            FrameShapeError: If the buffer does not match the ROI size
        """
        gray = to_luminance(roi, self.width, self.height, out=self._scratch.luminance)
        return self.process_luminance(gray)

    def process_luminance(self, gray: np.ndarray) -> FrameResult:
        """
        Run enhancement, analysis and classification on a grayscale ROI.

        Args:
            gray: (height, width) uint8 luminance frame

        Returns:
            FrameResult for this frame
        """
        gray = validate_frame(gray, self.width, self.height)
        enhanced = self.enhancer.enhance(gray, out=self._scratch.enhanced)
        power = self.analyzer.texture_power(
            enhanced,
            work=self._scratch.normalized,
            spectrum=self._scratch.spectrum,
        )
        return self.process_power(power)

    def process_power(self, power: float) -> FrameResult:
        """
        Feed one texture power reading into calibration or detection.

        Args:
            power: Texture power of the current frame

        Returns:
            FrameResult for this frame

        Raises:
            ValueError: If power is negative or not finite
        """
        if not (math.isfinite(power) and power >= 0):
            raise ValueError(f"Texture power must be finite and non-negative, got {power!r}")

        self._frame_count += 1

        if not self.calibrator.calibrated:
            self.calibrator.add_sample(power)
            result = FrameResult(
                frame_index=self._frame_count,
                state=DetectionState.CALIBRATING,
                texture_power=power,
                intensity=None,
                baseline=self.calibrator.baseline,
                detection_count=self.detector.detection_count,
                calibration_samples=self.calibrator.sample_count,
            )
        else:
            classification = self.detector.classify(power, self.calibrator.baseline)
            self.history.push(classification.intensity)
            result = FrameResult(
                frame_index=self._frame_count,
                state=classification.state,
                texture_power=power,
                intensity=classification.intensity,
                baseline=self.calibrator.baseline,
                detection_count=self.detector.detection_count,
                calibration_samples=self.calibrator.sample_count,
            )
            if classification.detected:
                logger.info(
                    f"Goosebumps detected [frame {self._frame_count}]: "
                    f"intensity={classification.intensity:.1f}%, "
                    f"count={self.detector.detection_count}"
                )
                if self.on_detection is not None:
                    self.on_detection(result)

        self._last_result = result

        if self._frame_count % self.log_every_n_frames == 0:
            logger.debug(
                f"Session [frame {self._frame_count}]: state={result.state.value}, "
                f"power={power:.3f}, baseline={result.baseline:.3f}, "
                f"detections={result.detection_count}"
            )

        return result

    # -------------------------------------------------------------------------
    # Session state
    # -------------------------------------------------------------------------

    @property
    def state(self) -> DetectionState:
        """State of the most recent frame (CALIBRATING before any frame)."""
        if self._last_result is None:
            return DetectionState.CALIBRATING
        return self._last_result.state

    @property
    def baseline(self) -> float:
        return self.calibrator.baseline

    @property
    def calibrated(self) -> bool:
        return self.calibrator.calibrated

    @property
    def detection_count(self) -> int:
        return self.detector.detection_count

    @property
    def frame_count(self) -> int:
        """Number of frames processed since the last reset."""
        return self._frame_count

    @property
    def last_result(self) -> Optional[FrameResult]:
        return self._last_result

    def reset(self) -> None:
        """Stop the session: clear calibration, counters and history."""
        self.calibrator.reset()
        self.detector.reset()
        self.history.clear()
        self._frame_count = 0
        self._last_result = None
        logger.info("DetectionSession reset")

    def get_metrics(self) -> dict:
        """Get session metrics for observability."""
        return {
            "frame_count": self._frame_count,
            "state": self.state.value,
            "calibrated": self.calibrator.calibrated,
            "calibration_samples": self.calibrator.sample_count,
            "baseline": self.calibrator.baseline,
            "detection_count": self.detector.detection_count,
            "history_length": len(self.history),
        }
