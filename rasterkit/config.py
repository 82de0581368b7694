"""
Environment-backed settings and logging setup.

Values are read from the process environment (a local .env file is loaded
first) when a repository or service is constructed, so tests can override
them with monkeypatch.setenv.
"""
from __future__ import annotations
import logging
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_IMAGE_EXTENSIONS = ".jpg,.jpeg,.png,.bmp,.tif,.tiff,.gif"
DEFAULT_DECODE_TIMEOUT_S = "5"
DEFAULT_PATCH_EDGE_COLOR = "r"
DEFAULT_PATCH_LINE_WIDTH = "2"
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = '%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s'
LOG_DATEFMT = '%H:%M:%S'


def valid_image_extensions() -> set[str]:
    raw = os.getenv("VALID_IMAGE_EXTENSIONS", DEFAULT_IMAGE_EXTENSIONS)
    return {ext.strip().lower() for ext in raw.split(",") if ext.strip()}


def decode_timeout() -> int:
    return int(os.getenv("DECODE_TIMEOUT_S", DEFAULT_DECODE_TIMEOUT_S))


def patch_edge_color() -> str:
    return os.getenv("PATCH_EDGE_COLOR", DEFAULT_PATCH_EDGE_COLOR)


def patch_line_width() -> float:
    return float(os.getenv("PATCH_LINE_WIDTH", DEFAULT_PATCH_LINE_WIDTH))


def configure_logging(level: str | int | None = None) -> None:
    """
    Centralized logging configuration for scripts built on rasterkit.
    Library modules only create loggers; call this once from the entry point.
    """
    if level is None:
        level = os.getenv("RASTERKIT_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
