"""
Signals Module
==============

Per-session signal processing on top of the texture power stream.

This module provides:
    - BaselineCalibrator: fixed-window reference power
    - DetectionStateMachine: threshold classifier with detection counter
    - IntensityHistory: bounded trend buffer
"""

from chiller.signals.calibrator import BaselineCalibrator
from chiller.signals.detector import (
    Classification,
    DetectionStateMachine,
    relative_intensity,
)
from chiller.signals.history import IntensityHistory

__all__ = [
    "BaselineCalibrator",
    "Classification",
    "DetectionStateMachine",
    "relative_intensity",
    "IntensityHistory",
]
