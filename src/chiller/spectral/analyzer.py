"""
Spectral Power Analyzer
=======================

Reduces an enhanced ROI frame to a single texture power value.

Pipeline:
    1. Global mean / standard deviation of the frame. Frames flatter than
       the noise floor return 0 without further work.
    2. Z-score normalization
    3. Forward DFT of every row (no window), power re^2 + im^2 summed per
       bin over all rows, then divided by the row count
    4. Maximum of the averaged spectrum inside the target band

The row transform uses numpy.fft, a mixed-radix FFT that is exact for any
row length. The reference ROI width of 160 = 2^5 * 5 is not a power of two,
so a radix-2-only transform would be wrong for it.
"""

import logging
from typing import Optional

import numpy as np

from chiller.imaging.luminance import validate_frame
from chiller.spectral.bands import FrequencyBand


logger = logging.getLogger(__name__)


class SpectralPowerAnalyzer:
    """
    Band-limited row spectrum analyzer for fixed-size frames.

    Attributes:
        width: Frame width (row length, DFT size)
        height: Frame height (number of rows averaged)
        band: Target spatial-frequency band
        noise_floor_std: Minimum pixel standard deviation to analyze
        bin_min: First DFT bin searched (inclusive)
        bin_max: Last DFT bin searched (exclusive)

    Example:
        analyzer = SpectralPowerAnalyzer(width=160, height=120)
        power = analyzer.texture_power(enhanced)
    """

    def __init__(
        self,
        width: int = 160,
        height: int = 120,
        band: Optional[FrequencyBand] = None,
        noise_floor_std: float = 1.0,
    ) -> None:
        """
        Initialize spectral analyzer.

        Args:
            width: Frame width in pixels
            height: Frame height in pixels
            band: Target band (defaults to the goosebump band)
            noise_floor_std: Frames with a lower pixel std yield zero power
        """
        if width < 1 or height < 1:
            raise ValueError("width and height must be >= 1")
        if noise_floor_std < 0:
            raise ValueError("noise_floor_std must be non-negative")

        self.width = width
        self.height = height
        self.band = band or FrequencyBand()
        self.noise_floor_std = noise_floor_std
        self.bin_min, self.bin_max = self.band.bin_range(width)

        logger.info(
            f"SpectralPowerAnalyzer initialized: {width}x{height}, "
            f"bins=[{self.bin_min}, {self.bin_max}), "
            f"noise_floor_std={noise_floor_std}"
        )

    def power_spectrum(
        self,
        frame: np.ndarray,
        work: Optional[np.ndarray] = None,
        spectrum: Optional[np.ndarray] = None,
    ) -> Optional[np.ndarray]:
        """
        Compute the row-averaged power spectrum of a frame.

        Args:
            frame: Frame (height, width), any real dtype
            work: Optional (height, width) float64 scratch array
            spectrum: Optional (width,) float64 array to write the result into

        Returns:
            Power spectrum of length ``width``, or None if the frame's
            standard deviation is below the noise floor
        """
        frame = validate_frame(frame, self.width, self.height)

        if work is None:
            work = np.empty((self.height, self.width), dtype=np.float64)
        np.copyto(work, frame, casting="unsafe")

        mean = work.mean()
        std = work.std()
        if not std >= self.noise_floor_std:
            return None

        work -= mean
        work /= std

        rows = np.fft.fft(work, axis=1)

        if spectrum is None:
            spectrum = np.empty(self.width, dtype=np.float64)
        np.sum(rows.real ** 2 + rows.imag ** 2, axis=0, out=spectrum)
        spectrum /= self.height
        return spectrum

    def texture_power(
        self,
        frame: np.ndarray,
        work: Optional[np.ndarray] = None,
        spectrum: Optional[np.ndarray] = None,
    ) -> float:
        """
        Compute the texture power of a frame.

        Args:
            frame: Enhanced frame (height, width)
            work: Optional scratch array, see power_spectrum
            spectrum: Optional spectrum buffer, see power_spectrum

        Returns:
            Maximum averaged power inside the target band, >= 0. Zero for
            flat frames and for an empty band.
        """
        power = self.power_spectrum(frame, work=work, spectrum=spectrum)
        if power is None or self.bin_max <= self.bin_min:
            return 0.0
        return float(power[self.bin_min:self.bin_max].max())
