"""
Frequency Bands
===============

Maps a physical spatial-frequency band onto DFT bin indices.

Formulas:
    f_px  = f_mm * pixel_size_mm             (cycles per pixel)
    bin   = f_px / nyquist * width / 2       (nyquist = 0.5 cycles/pixel)
    range = [floor(bin_min), min(ceil(bin_max), ceil(width / 2)))

Only the first half of the spectrum is searched; for real input the upper
half mirrors it.
"""

import math
from dataclasses import dataclass
from typing import Tuple


NYQUIST_CYCLES_PER_PIXEL = 0.5


@dataclass(frozen=True, slots=True)
class FrequencyBand:
    """
    Target spatial-frequency band of the goosebump texture.

    Attributes:
        freq_min_mm: Lower band edge (cycles per mm)
        freq_max_mm: Upper band edge (cycles per mm)
        pixel_size_mm: Physical size of one ROI pixel (mm)
    """

    freq_min_mm: float = 0.23
    freq_max_mm: float = 0.75
    pixel_size_mm: float = 0.25

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.pixel_size_mm <= 0:
            raise ValueError("pixel_size_mm must be positive")
        if not 0 <= self.freq_min_mm < self.freq_max_mm:
            raise ValueError("band must satisfy 0 <= freq_min_mm < freq_max_mm")

    def bin_range(self, width: int) -> Tuple[int, int]:
        """
        Half-open DFT bin range [bin_min, bin_max) for a row of ``width`` samples.

        The upper bound is clamped to the first half of the spectrum. The
        range may be empty for very short rows.
        """
        if width < 1:
            raise ValueError("width must be >= 1")

        f_min = self.freq_min_mm * self.pixel_size_mm
        f_max = self.freq_max_mm * self.pixel_size_mm

        bin_min = math.floor(f_min / NYQUIST_CYCLES_PER_PIXEL * width / 2)
        bin_max = math.ceil(f_max / NYQUIST_CYCLES_PER_PIXEL * width / 2)

        half = (width + 1) // 2
        return max(bin_min, 0), min(bin_max, half)
