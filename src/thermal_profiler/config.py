"""
ThermalLineProfiler Configuration
=================================

This module handles configuration loading for the thermal profiler.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    THERMAL_VIDEO_PATH           -> video.path
    THERMAL_DECODE_TIMEOUT       -> video.decode_timeout_seconds
    THERMAL_CALIBRATION_PATH     -> calibration.path
    THERMAL_EARLY_EXIT_DISTANCE  -> resolver.early_exit_distance
    THERMAL_LOG_LEVEL            -> logging.level

Example:
    from thermal_profiler.config import load_config

    settings = load_config()

    print(settings.video.path)
    print(settings.resolver.early_exit_distance)
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class VideoConfig(BaseModel):
    """Video source configuration."""

    path: str = Field(
        default="./videos/demo_vid.avi",
        description="Path to the thermal video",
    )
    decode_timeout_seconds: Optional[float] = Field(
        default=10.0,
        gt=0,
        description="Max seconds per frame seek+decode (null = no limit)",
    )


class CalibrationConfig(BaseModel):
    """Calibration table configuration."""

    path: str = Field(
        default="./data/temp_mapping.csv",
        description="Path to the color/temperature calibration CSV",
    )
    delimiter: str = Field(
        default=",",
        min_length=1,
        max_length=1,
        description="Field delimiter of the calibration file",
    )


class ResolverConfig(BaseModel):
    """Color resolution configuration."""

    early_exit_distance: float = Field(
        default=10.0,
        ge=0,
        description="Nearest-neighbor scan stops below this RGB distance",
    )
    missing_temperature: float = Field(
        default=0.0,
        description="Reading reported for pixels with no calibration match",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for the thermal profiler.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    video: VideoConfig = Field(default_factory=VideoConfig)
    calibration: CalibrationConfig = Field(default_factory=CalibrationConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


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
    # Find config file
    if config_path is None:
        search_paths = [
            Path("config.yaml"),
            Path("config.yml"),
            Path(__file__).parent.parent.parent / "config.yaml",
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    # Load from YAML if exists
    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.info("No config file found, using defaults and environment variables")

    # Apply environment variable overrides
    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Video settings
    if env_video := os.environ.get("THERMAL_VIDEO_PATH"):
        config_data.setdefault("video", {})["path"] = env_video
    if env_timeout := os.environ.get("THERMAL_DECODE_TIMEOUT"):
        config_data.setdefault("video", {})["decode_timeout_seconds"] = float(env_timeout)

    # Calibration settings
    if env_csv := os.environ.get("THERMAL_CALIBRATION_PATH"):
        config_data.setdefault("calibration", {})["path"] = env_csv

    # Resolver settings
    if env_exit := os.environ.get("THERMAL_EARLY_EXIT_DISTANCE"):
        config_data.setdefault("resolver", {})["early_exit_distance"] = float(env_exit)

    # Logging settings
    if env_log := os.environ.get("THERMAL_LOG_LEVEL"):
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
