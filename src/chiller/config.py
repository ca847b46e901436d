"""
CHILLER Configuration
=====================

This module handles configuration loading for the goosebump detector.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    CHILLER_BASELINE_FRAMES     -> calibration.baseline_frames
    CHILLER_DETECTION_THRESHOLD -> detection.threshold
    CHILLER_MAX_HISTORY         -> detection.max_history
    CHILLER_ROI_WIDTH           -> roi.width
    CHILLER_ROI_HEIGHT          -> roi.height
    CHILLER_CLAHE_CLIP          -> enhancement.clip_limit
    CHILLER_LOG_LEVEL           -> logging.level

Example:
    from chiller.config import settings

    print(settings.roi.width)
    print(settings.detection.threshold)
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, model_validator


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class RoiConfig(BaseModel):
    """Region of interest dimensions (pixels)."""

    width: int = Field(default=160, ge=8, description="ROI width in pixels")
    height: int = Field(default=120, ge=8, description="ROI height in pixels")


class EnhancementConfig(BaseModel):
    """Tiled contrast enhancement (CLAHE-style) configuration."""

    tile_size: int = Field(
        default=8,
        ge=1,
        description="Edge length of the square equalization tiles",
    )
    clip_limit: float = Field(
        default=2.0,
        gt=0,
        description="Histogram clip multiplier relative to a flat histogram",
    )


class SpectrumConfig(BaseModel):
    """Spatial-frequency band of interest."""

    freq_min_mm: float = Field(default=0.23, gt=0, description="Lower band edge")
    freq_max_mm: float = Field(default=0.75, gt=0, description="Upper band edge")
    pixel_size_mm: float = Field(
        default=0.25,
        gt=0,
        description="Physical pixel pitch on the skin (mm)",
    )
    noise_floor_std: float = Field(
        default=1.0,
        ge=0,
        description="Frames with a lower pixel standard deviation yield zero power",
    )

    @model_validator(mode="after")
    def _check_band(self) -> "SpectrumConfig":
        if self.freq_min_mm >= self.freq_max_mm:
            raise ValueError("freq_min_mm must be below freq_max_mm")
        return self


class CalibrationConfig(BaseModel):
    """Baseline calibration configuration."""

    baseline_frames: int = Field(
        default=10,
        ge=1,
        description="Number of texture power samples averaged into the baseline",
    )


class DetectionConfig(BaseModel):
    """Detection classifier configuration."""

    threshold: float = Field(
        default=30.0,
        description="Intensity (percent above baseline) that counts as a detection",
    )
    max_history: int = Field(
        default=60,
        ge=1,
        description="Number of intensity values kept for trend display",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")
    log_every_n_frames: int = Field(
        default=30,
        ge=1,
        description="Emit a session summary every N frames",
    )


class Settings(BaseModel):
    """
    Main settings class for CHILLER.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    roi: RoiConfig = Field(default_factory=RoiConfig)
    enhancement: EnhancementConfig = Field(default_factory=EnhancementConfig)
    spectrum: SpectrumConfig = Field(default_factory=SpectrumConfig)
    calibration: CalibrationConfig = Field(default_factory=CalibrationConfig)
    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def _check_roi_tiling(self) -> "Settings":
        tile = self.enhancement.tile_size
        if self.roi.width % tile or self.roi.height % tile:
            raise ValueError(
                f"ROI {self.roi.width}x{self.roi.height} is not divisible "
                f"by tile size {tile}"
            )
        return self


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to config.yaml. If None, searches common locations.

    Returns:
        Settings: Loaded configuration
    """
    if config_path is None:
        search_paths = [
            Path("config.yaml"),
            Path("config.yml"),
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No config file found, using defaults and environment variables")

    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Calibration / detection
    if env_frames := os.environ.get("CHILLER_BASELINE_FRAMES"):
        config_data.setdefault("calibration", {})["baseline_frames"] = int(env_frames)
    if env_threshold := os.environ.get("CHILLER_DETECTION_THRESHOLD"):
        config_data.setdefault("detection", {})["threshold"] = float(env_threshold)
    if env_history := os.environ.get("CHILLER_MAX_HISTORY"):
        config_data.setdefault("detection", {})["max_history"] = int(env_history)

    # ROI geometry
    if env_width := os.environ.get("CHILLER_ROI_WIDTH"):
        config_data.setdefault("roi", {})["width"] = int(env_width)
    if env_height := os.environ.get("CHILLER_ROI_HEIGHT"):
        config_data.setdefault("roi", {})["height"] = int(env_height)

    # Enhancement
    if env_clip := os.environ.get("CHILLER_CLAHE_CLIP"):
        config_data.setdefault("enhancement", {})["clip_limit"] = float(env_clip)

    # Logging settings
    if env_log := os.environ.get("CHILLER_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


# =============================================================================
# Global Settings Instance
# =============================================================================

# Global settings instance - loaded on import
settings = load_config()
