"""
ASCII Player Configuration
==========================

This module handles configuration loading for the ASCII video player.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Command-line flags are applied on top of the loaded settings by the CLI.

Environment Variable Mapping:
    ASCII_PLAYER_WIDTH       -> render.width
    ASCII_PLAYER_RAMP        -> render.ramp
    ASCII_PLAYER_FRAMES_DIR  -> storage.frames_dir
    ASCII_PLAYER_WORKERS     -> pipeline.workers
    ASCII_PLAYER_FFMPEG      -> media.ffmpeg_binary
    ASCII_PLAYER_FFPROBE     -> media.ffprobe_binary
    ASCII_PLAYER_LOG_LEVEL   -> logging.level

Example:
    from ascii_player.config import load_config

    settings = load_config()
    print(settings.render.width)
    print(settings.storage.frames_dir)
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

class RenderConfig(BaseModel):
    """Glyph grid configuration."""

    width: int = Field(
        default=100,
        ge=1,
        description="Output glyph-grid width in columns",
    )
    ramp: str = Field(
        default="detailed",
        min_length=1,
        description="Ramp preset ('detailed', 'simple') or a literal glyph string",
    )


class PipelineConfig(BaseModel):
    """Frame generation configuration."""

    workers: int = Field(
        default=1,
        ge=1,
        description="Threads used to convert stills (1 = strictly sequential)",
    )
    still_pattern: str = Field(
        default="frame%d.png",
        description="ffmpeg output pattern for scratch stills",
    )


class StorageConfig(BaseModel):
    """Text frame storage configuration."""

    frames_dir: str = Field(
        default="textFrames",
        description="Transient directory holding ascii_frame_<N>.txt files",
    )


class PlaybackConfig(BaseModel):
    """Terminal playback configuration."""

    wait_for_start: bool = Field(
        default=True,
        description="Block on one line of stdin before the first frame",
    )


class MediaConfig(BaseModel):
    """External media tool configuration."""

    ffmpeg_binary: str = Field(default="ffmpeg", description="ffmpeg executable")
    ffprobe_binary: str = Field(default="ffprobe", description="ffprobe executable")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for the ASCII player.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    render: RenderConfig = Field(default_factory=RenderConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    playback: PlaybackConfig = Field(default_factory=PlaybackConfig)
    media: MediaConfig = Field(default_factory=MediaConfig)
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
    if config_path is None:
        search_paths = [
            Path("config.yaml"),
            Path("config.yml"),
            Path.home() / ".config" / "ascii-player" / "config.yaml",
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

    # Render settings
    if env_width := os.environ.get("ASCII_PLAYER_WIDTH"):
        config_data.setdefault("render", {})["width"] = int(env_width)
    if env_ramp := os.environ.get("ASCII_PLAYER_RAMP"):
        config_data.setdefault("render", {})["ramp"] = env_ramp

    # Storage and pipeline settings
    if env_dir := os.environ.get("ASCII_PLAYER_FRAMES_DIR"):
        config_data.setdefault("storage", {})["frames_dir"] = env_dir
    if env_workers := os.environ.get("ASCII_PLAYER_WORKERS"):
        config_data.setdefault("pipeline", {})["workers"] = int(env_workers)

    # Media tools
    if env_ffmpeg := os.environ.get("ASCII_PLAYER_FFMPEG"):
        config_data.setdefault("media", {})["ffmpeg_binary"] = env_ffmpeg
    if env_ffprobe := os.environ.get("ASCII_PLAYER_FFPROBE"):
        config_data.setdefault("media", {})["ffprobe_binary"] = env_ffprobe

    # Logging settings
    if env_log := os.environ.get("ASCII_PLAYER_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings. Logs go to stderr."""
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
