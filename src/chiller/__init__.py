"""
CHILLER
=======

Goosebump detection from live video by spatial-frequency texture analysis.

A fixed region of interest of every frame is contrast-enhanced, reduced to a
band-limited "texture power" via per-row Fourier spectra, and compared with
a baseline calibrated at the start of each monitoring session.

Components:
    - imaging: Luminance conversion and tiled contrast enhancement
    - spectral: Row power spectrum and band power
    - signals: Baseline calibration, detection state machine, history
    - session: Per-session pipeline context
    - stream: OpenCV frame source and ROI cropping for the CLI runner

Example:
    from chiller.config import settings
    from chiller.session import DetectionSession

    session = DetectionSession.from_settings(settings)
    result = session.process_rgb(roi_rgb)
"""

__version__ = "0.1.0"
__author__ = "CHILLER Project"

__all__ = [
    "__version__",
]
