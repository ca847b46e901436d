"""
Data Models
===========

Models for the CHILLER detection pipeline.

Models:
    State:
        - DetectionState: Enum of frame states (CALIBRATING, MONITORING, DETECTING)
        - FrameResult: Per-frame output contract
"""

from chiller.models.state import DetectionState, FrameResult

__all__ = [
    "DetectionState",
    "FrameResult",
]
