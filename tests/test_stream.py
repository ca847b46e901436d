"""
Frame Source Tests
==================
"""

import numpy as np
import pytest

from chiller.imaging.luminance import FrameShapeError
from chiller.stream import (
    VideoFrame,
    VideoFrameSource,
    bgr_to_rgb,
    crop_center_roi,
    parse_source,
)


class FakeCapture:
    """Stand-in for cv2.VideoCapture that replays a list of images."""

    def __init__(self, images, opened=True):
        self._images = list(images)
        self._opened = opened
        self.released = False

    def isOpened(self):
        return self._opened

    def read(self):
        if not self._images:
            return False, None
        return True, self._images.pop(0)

    def release(self):
        self.released = True


def fake_factory(capture):
    def factory(source):
        return capture
    return factory


class TestCropCenterRoi:
    def test_centered_window(self):
        image = np.arange(480 * 640).reshape(480, 640)
        roi = crop_center_roi(image, 160, 120)
        assert roi.shape == (120, 160)
        assert roi[0, 0] == image[180, 240]
        assert roi[-1, -1] == image[299, 399]

    def test_odd_margin_rounds_down(self):
        image = np.arange(11 * 13).reshape(11, 13)
        roi = crop_center_roi(image, 8, 8)
        assert roi[0, 0] == image[1, 2]

    def test_colour_channels_kept(self):
        roi = crop_center_roi(np.zeros((240, 320, 3), dtype=np.uint8), 160, 120)
        assert roi.shape == (120, 160, 3)

    def test_too_small_raises(self):
        with pytest.raises(FrameShapeError):
            crop_center_roi(np.zeros((100, 100, 3), dtype=np.uint8), 160, 120)


class TestBgrToRgb:
    def test_swaps_channels(self):
        bgr = np.zeros((2, 2, 3), dtype=np.uint8)
        bgr[..., 0] = 1
        bgr[..., 2] = 3
        rgb = bgr_to_rgb(bgr)
        assert rgb[0, 0].tolist() == [3, 0, 1]


class TestVideoFrameSource:
    """Tests for capture iteration."""

    def test_iterates_until_exhausted(self):
        images = [np.full((4, 4, 3), i, dtype=np.uint8) for i in range(3)]
        capture = FakeCapture(images)
        source = VideoFrameSource("clip.mp4", capture_factory=fake_factory(capture))

        frames = list(source)

        assert [f.frame_id for f in frames] == [0, 1, 2]
        assert all(isinstance(f, VideoFrame) for f in frames)
        assert frames[2].image[0, 0, 0] == 2
        assert source.frames_read == 3
        assert capture.released

    def test_max_frames(self):
        images = [np.zeros((4, 4, 3), dtype=np.uint8) for _ in range(10)]
        capture = FakeCapture(images)
        with VideoFrameSource(0, max_frames=4, capture_factory=fake_factory(capture)) as source:
            frames = list(source)
        assert len(frames) == 4
        assert capture.released
        assert source.metrics()["frames_read"] == 4

    def test_unopened_capture_raises(self):
        capture = FakeCapture([], opened=False)
        source = VideoFrameSource("missing.mp4", capture_factory=fake_factory(capture))
        with pytest.raises(RuntimeError):
            list(source)
        assert capture.released

    def test_fps_needs_two_frames(self):
        capture = FakeCapture([np.zeros((4, 4, 3), dtype=np.uint8)])
        source = VideoFrameSource(capture_factory=fake_factory(capture))
        list(source)
        assert source.measured_fps == 0.0

    def test_invalid_max_frames(self):
        with pytest.raises(ValueError):
            VideoFrameSource(max_frames=0)

    def test_frame_repr_omits_pixels(self):
        frame = VideoFrame(frame_id=7, timestamp=1.5, image=np.zeros((2, 3, 3)))
        assert repr(frame) == "VideoFrame(frame_id=7, timestamp=1.500, shape=(2, 3, 3))"


def test_parse_source():
    assert parse_source("0") == 0
    assert parse_source("2") == 2
    assert parse_source("clip.mp4") == "clip.mp4"
