"""
CHILLER Command Line Runner
===========================

Runs a detection session over a camera or video file.

Per captured frame:
    1. Crop the centered ROI (roi.width x roi.height)
    2. BGR -> RGB
    3. DetectionSession.process_rgb
    4. Log state changes, detections and a periodic summary

The session is reset when the run ends, mirroring a "stop" in the UI.

Usage:
    chiller --source 0                 # default camera
    chiller --source clip.mp4 --max-frames 300
    chiller --config config.yaml --source clip.mp4
"""

import argparse
import logging
import sys
from typing import List, Optional

from chiller.config import Settings, load_config, setup_logging
from chiller.imaging.luminance import FrameShapeError
from chiller.models.state import DetectionState, FrameResult
from chiller.session import DetectionSession
from chiller.stream import VideoFrameSource, bgr_to_rgb, crop_center_roi, parse_source


logger = logging.getLogger(__name__)


def run(settings: Settings, source: VideoFrameSource) -> dict:
    """
    Process every frame of ``source`` through a fresh session.

    Args:
        settings: Loaded configuration
        source: Frame source to drain

    Returns:
        Final session metrics (captured before the session is reset)
    """
    session = DetectionSession.from_settings(settings)
    roi = settings.roi
    previous_state: Optional[DetectionState] = None
    result: Optional[FrameResult] = None

    try:
        for frame in source:
            try:
                rgb = bgr_to_rgb(crop_center_roi(frame.image, roi.width, roi.height))
                result = session.process_rgb(rgb)
            except FrameShapeError:
                logger.error(f"Malformed frame {frame.frame_id}: {frame!r}")
                raise

            if result.state != previous_state:
                if result.state == DetectionState.CALIBRATING:
                    logger.info("Calibrating baseline...")
                else:
                    logger.info(
                        f"State -> {result.state.value} [frame {result.frame_index}]: "
                        f"power={result.texture_power:.3f}, "
                        f"baseline={result.baseline:.3f}"
                    )
                previous_state = result.state

            if result.frame_index % settings.logging.log_every_n_frames == 0:
                if result.intensity is None:
                    progress = (
                        f"baseline {result.calibration_samples}/"
                        f"{settings.calibration.baseline_frames}"
                    )
                else:
                    progress = f"intensity={result.intensity:.1f}%"
                logger.info(
                    f"[frame {result.frame_index}] {result.state.value}: {progress}, "
                    f"detections={result.detection_count}, "
                    f"fps={source.measured_fps:.1f}"
                )

        metrics = session.get_metrics()
        metrics["source"] = source.metrics()
        return metrics
    finally:
        session.reset()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Detect goosebump skin texture in a video feed"
    )
    parser.add_argument(
        "--source",
        type=str,
        default="0",
        help="Camera index or video file path (default: 0)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config.yaml (default: search working directory)",
    )
    parser.add_argument(
        "--max-frames",
        type=int,
        default=None,
        help="Stop after this many frames (default: until the source ends)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_config(args.config)
    setup_logging(settings)

    source = VideoFrameSource(
        source=parse_source(args.source),
        max_frames=args.max_frames,
    )

    try:
        metrics = run(settings, source)
    except RuntimeError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping session")
        return 0

    logger.info(
        f"Session finished: {metrics['frame_count']} frames, "
        f"baseline={metrics['baseline']:.3f}, "
        f"detections={metrics['detection_count']}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
