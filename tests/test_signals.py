"""
Signal Stage Tests
==================

Calibration, detection state machine and history buffer.
"""

import pytest

from chiller.models.state import DetectionState
from chiller.signals import (
    BaselineCalibrator,
    DetectionStateMachine,
    IntensityHistory,
    relative_intensity,
)


class TestBaselineCalibrator:
    """Tests for fixed-window baseline calibration."""

    def test_calibrates_exactly_once_at_window(self):
        calibrator = BaselineCalibrator(window=10)
        completions = [calibrator.add_sample(float(v)) for v in range(1, 11)]
        assert completions == [False] * 9 + [True]
        assert calibrator.calibrated
        assert calibrator.baseline == pytest.approx(5.5)

    def test_not_calibrated_before_window(self):
        calibrator = BaselineCalibrator(window=10)
        for _ in range(9):
            calibrator.add_sample(4.0)
        assert not calibrator.calibrated
        assert calibrator.baseline == 0.0
        assert calibrator.sample_count == 9

    def test_samples_never_exceed_window(self):
        calibrator = BaselineCalibrator(window=3)
        for v in (1.0, 2.0, 3.0):
            calibrator.add_sample(v)
        with pytest.raises(RuntimeError):
            calibrator.add_sample(100.0)
        assert calibrator.samples == (1.0, 2.0, 3.0)
        assert calibrator.baseline == pytest.approx(2.0)

    def test_reset(self):
        calibrator = BaselineCalibrator(window=2)
        calibrator.add_sample(1.0)
        calibrator.add_sample(3.0)
        calibrator.reset()
        assert not calibrator.calibrated
        assert calibrator.samples == ()
        assert calibrator.baseline == 0.0

    def test_invalid_window(self):
        with pytest.raises(ValueError):
            BaselineCalibrator(window=0)


class TestDetectionStateMachine:
    """Tests for the threshold classifier."""

    def test_threshold_is_inclusive(self):
        detector = DetectionStateMachine(threshold=30.0)
        result = detector.classify(power=130.0, baseline=100.0)
        assert result.intensity == pytest.approx(30.0)
        assert result.state == DetectionState.DETECTING
        assert detector.detection_count == 1

    def test_just_below_threshold(self):
        detector = DetectionStateMachine(threshold=30.0)
        result = detector.classify(power=129.99, baseline=100.0)
        assert result.state == DetectionState.MONITORING
        assert detector.detection_count == 0

    def test_counts_every_detecting_frame(self):
        detector = DetectionStateMachine(threshold=30.0)
        for _ in range(3):
            detector.classify(power=200.0, baseline=100.0)
        detector.classify(power=100.0, baseline=100.0)
        detector.classify(power=200.0, baseline=100.0)
        assert detector.detection_count == 4
        assert detector.state == DetectionState.DETECTING

    def test_zero_baseline_gives_zero_intensity(self):
        detector = DetectionStateMachine(threshold=30.0)
        result = detector.classify(power=50.0, baseline=0.0)
        assert result.intensity == 0.0
        assert result.state == DetectionState.MONITORING

    def test_negative_intensity(self):
        assert relative_intensity(50.0, 100.0) == pytest.approx(-50.0)
        assert relative_intensity(5.0, -1.0) == 0.0

    def test_reset(self):
        detector = DetectionStateMachine()
        detector.classify(power=200.0, baseline=100.0)
        detector.reset()
        assert detector.detection_count == 0
        assert detector.state == DetectionState.MONITORING


class TestIntensityHistory:
    """Tests for the bounded FIFO."""

    def test_evicts_oldest(self):
        history = IntensityHistory(capacity=60)
        for i in range(61):
            history.push(float(i))
        values = history.values()
        assert len(history) == 60
        assert values[0] == 1.0
        assert values[-1] == 60.0
        assert history.latest() == 60.0

    def test_order_preserved_below_capacity(self):
        history = IntensityHistory(capacity=5)
        for v in (3.0, 1.0, 2.0):
            history.push(v)
        assert history.values() == (3.0, 1.0, 2.0)

    def test_snapshot_is_read_only_copy(self):
        history = IntensityHistory(capacity=3)
        history.push(1.0)
        snapshot = history.values()
        history.push(2.0)
        assert snapshot == (1.0,)

    def test_clear(self):
        history = IntensityHistory(capacity=3)
        history.push(1.0)
        history.clear()
        assert len(history) == 0
        assert history.capacity == 3

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            IntensityHistory(capacity=0)
