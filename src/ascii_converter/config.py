"""
ASCII Converter Configuration
=============================

This module handles configuration loading for the converter service and CLI.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    ASCII_HOST              -> server.host
    ASCII_PORT              -> server.port
    PORT                    -> server.port (container platforms)
    ASCII_CORS_ORIGINS      -> cors.allow_origins (comma separated)
    ASCII_DEFAULT_WIDTH     -> converter.default_width
    ASCII_DEFAULT_PALETTE   -> converter.default_palette
    ASCII_VIDEO_MAX_FRAMES  -> video.max_frame_count
    ASCII_VIDEO_WORKERS     -> video.workers
    ASCII_LOG_LEVEL         -> logging.level
    ASCII_LOG_FORMAT        -> logging.format

Example:
    from ascii_converter.config import settings

    print(settings.server.port)
    print(settings.video.max_frame_count)
"""

import os
import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class AppConfig(BaseModel):
    """Service identification."""

    name: str = Field(default="ascii-converter", description="Service name")
    version: str = Field(default="v0.1.0", description="API version")


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=3000, ge=1, le=65535, description="Bind port")


class CorsConfig(BaseModel):
    """Cross-origin settings for the web front end."""

    allow_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API",
    )
    allow_methods: List[str] = Field(
        default_factory=lambda: ["GET", "POST", "OPTIONS"],
        description="Allowed HTTP methods",
    )


class ConverterConfig(BaseModel):
    """Rendering defaults applied at the API/CLI boundary."""

    default_width: int = Field(
        default=100,
        gt=0,
        description="Width in characters when none (or a non-positive one) is given",
    )
    default_palette: str = Field(
        default="normal",
        description="Palette used when the request names none",
    )
    default_font_size: int = Field(
        default=12,
        gt=0,
        description="SVG font size in points",
    )


class VideoConfig(BaseModel):
    """Video sampling and batch rendering limits."""

    default_fps: int = Field(default=10, ge=1, description="Sampling rate when none given")
    max_fps: int = Field(default=15, ge=1, description="Highest accepted sampling rate")
    max_frame_count: int = Field(
        default=200,
        ge=1,
        description="Upper bound on sampled frames per video",
    )
    max_duration_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Only this many seconds from the start of a video are sampled",
    )
    max_file_size_mb: int = Field(
        default=50,
        ge=1,
        description="Largest accepted video upload in megabytes",
    )
    workers: int = Field(
        default=1,
        ge=1,
        description="Worker threads used to render frames (1 = sequential)",
    )
    isolate_frame_errors: bool = Field(
        default=False,
        description="Skip frames that fail to render instead of failing the batch",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for the ASCII converter.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    app: AppConfig = Field(default_factory=AppConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    cors: CorsConfig = Field(default_factory=CorsConfig)
    converter: ConverterConfig = Field(default_factory=ConverterConfig)
    video: VideoConfig = Field(default_factory=VideoConfig)
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
            Path(__file__).parent.parent.parent / "config.yaml",
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

    # Server settings (container platforms set PORT)
    if env_host := os.environ.get("ASCII_HOST"):
        config_data.setdefault("server", {})["host"] = env_host
    if env_port := os.environ.get("PORT"):
        config_data.setdefault("server", {})["port"] = int(env_port)
    elif env_port := os.environ.get("ASCII_PORT"):
        config_data.setdefault("server", {})["port"] = int(env_port)

    if env_origins := os.environ.get("ASCII_CORS_ORIGINS"):
        origins = [o.strip() for o in env_origins.split(",") if o.strip()]
        config_data.setdefault("cors", {})["allow_origins"] = origins

    # Converter defaults
    if env_width := os.environ.get("ASCII_DEFAULT_WIDTH"):
        config_data.setdefault("converter", {})["default_width"] = int(env_width)
    if env_palette := os.environ.get("ASCII_DEFAULT_PALETTE"):
        config_data.setdefault("converter", {})["default_palette"] = env_palette

    # Video limits
    if env_frames := os.environ.get("ASCII_VIDEO_MAX_FRAMES"):
        config_data.setdefault("video", {})["max_frame_count"] = int(env_frames)
    if env_workers := os.environ.get("ASCII_VIDEO_WORKERS"):
        config_data.setdefault("video", {})["workers"] = int(env_workers)

    # Logging settings
    if env_log := os.environ.get("ASCII_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log
    if env_log_format := os.environ.get("ASCII_LOG_FORMAT"):
        config_data.setdefault("logging", {})["format"] = env_log_format


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
setup_logging(settings)
