"""
Spectral Module
===============

Frequency-domain texture measurement.

This module provides:
    - FrequencyBand: physical band to DFT bin mapping
    - SpectralPowerAnalyzer: row-averaged power spectrum and band maximum
"""

from chiller.spectral.bands import FrequencyBand
from chiller.spectral.analyzer import SpectralPowerAnalyzer

__all__ = ["FrequencyBand", "SpectralPowerAnalyzer"]
