"""
Test Configuration
==================

Pytest fixtures and test configuration for CHILLER.
"""

import numpy as np
import pytest


ROI_WIDTH = 160
ROI_HEIGHT = 120


def make_row_sinusoid(
    cycles: float,
    width: int = ROI_WIDTH,
    height: int = ROI_HEIGHT,
    mean: float = 128.0,
    amplitude: float = 100.0,
) -> np.ndarray:
    """Frame whose rows all carry the same sinusoid with ``cycles`` periods per row."""
    x = np.arange(width)
    row = mean + amplitude * np.sin(2 * np.pi * cycles * x / width)
    return np.tile(row, (height, 1))


@pytest.fixture
def rng():
    """Deterministic random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def settings():
    """Default configuration."""
    from chiller.config import Settings

    return Settings()


@pytest.fixture
def session():
    """Fresh detection session with reference dimensions."""
    from chiller.session import DetectionSession

    return DetectionSession(width=ROI_WIDTH, height=ROI_HEIGHT)


@pytest.fixture
def flat_gray():
    """Constant-valued luminance ROI."""
    return np.full((ROI_HEIGHT, ROI_WIDTH), 128, dtype=np.uint8)


@pytest.fixture
def noise_rgb(rng):
    """Random RGB ROI with plenty of texture."""
    return rng.integers(0, 256, size=(ROI_HEIGHT, ROI_WIDTH, 3), dtype=np.uint8)
