"""
Intensity History
=================

Bounded FIFO of recent intensity values for trend display.

Design Rules:
    - Fixed capacity, oldest value evicted on overflow
    - Chronological order preserved
    - Read-only snapshots for consumers
"""

from collections import deque
from typing import Deque, Tuple


class IntensityHistory:
    """
    Fixed-capacity record of classified-frame intensities.

    Attributes:
        capacity: Maximum number of values retained
    """

    def __init__(self, capacity: int = 60) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")

        self._values: Deque[float] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._values.maxlen

    def push(self, intensity: float) -> None:
        """Append a value, evicting the oldest one when full."""
        self._values.append(float(intensity))

    def values(self) -> Tuple[float, ...]:
        """Snapshot of the stored values, oldest first."""
        return tuple(self._values)

    def latest(self) -> float:
        """Most recent value. Raises IndexError when empty."""
        return self._values[-1]

    def clear(self) -> None:
        self._values.clear()

    def __len__(self) -> int:
        return len(self._values)
