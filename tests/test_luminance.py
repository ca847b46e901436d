"""
Luminance Conversion Tests
==========================
"""

import numpy as np
import pytest

from chiller.imaging.luminance import FrameShapeError, to_luminance, validate_frame


def _solid(rgb, width=16, height=8, channels=3):
    frame = np.zeros((height, width, channels), dtype=np.uint8)
    frame[..., :3] = rgb
    return frame


class TestToLuminance:
    """Tests for RGB(A) -> luminance conversion."""

    def test_weighted_sum(self):
        gray = to_luminance(_solid((100, 50, 200)), 16, 8)
        assert gray.shape == (8, 16)
        assert gray.dtype == np.uint8
        # 29.9 + 29.35 + 22.8 = 82.05
        assert np.all(gray == 82)

    def test_truncates_instead_of_rounding(self):
        # 0.114 * 5 = 0.57 would round to 1
        gray = to_luminance(_solid((0, 0, 5)), 16, 8)
        assert np.all(gray == 0)

    def test_floor_boundary_matches_scalar_formula(self):
        # 0.587 * 78 + 0.114 * 151 lands just on 63.0; a dot product can fall below it
        gray = to_luminance(_solid((0, 78, 151)), 16, 8)
        assert np.all(gray == 63)

    def test_alpha_ignored(self):
        rgba = _solid((10, 20, 30), channels=4)
        rgba[..., 3] = 255
        gray = to_luminance(rgba, 16, 8)
        # 2.99 + 11.74 + 3.42 = 18.15
        assert np.all(gray == 18)

    def test_flat_rgba_buffer(self):
        rgba = _solid((100, 50, 200), channels=4)
        gray = to_luminance(rgba.ravel(), 16, 8)
        assert gray.shape == (8, 16)
        assert np.all(gray == 82)

    def test_writes_into_out(self):
        out = np.zeros((8, 16), dtype=np.uint8)
        result = to_luminance(_solid((100, 50, 200)), 16, 8, out=out)
        assert result is out
        assert np.all(out == 82)

    def test_wrong_dimensions_raise(self):
        with pytest.raises(FrameShapeError):
            to_luminance(_solid((1, 2, 3), width=15), 16, 8)

    def test_wrong_channels_raise(self):
        with pytest.raises(FrameShapeError):
            to_luminance(np.zeros((8, 16, 2), dtype=np.uint8), 16, 8)

    def test_wrong_flat_length_raises(self):
        with pytest.raises(FrameShapeError):
            to_luminance(np.zeros(16 * 8 * 3, dtype=np.uint8), 16, 8)

    def test_shape_error_is_value_error(self):
        assert issubclass(FrameShapeError, ValueError)


class TestValidateFrame:
    def test_accepts_matching(self):
        frame = np.zeros((8, 16), dtype=np.uint8)
        assert validate_frame(frame, 16, 8) is frame

    def test_rejects_transposed(self):
        with pytest.raises(FrameShapeError):
            validate_frame(np.zeros((16, 8), dtype=np.uint8), 16, 8)
