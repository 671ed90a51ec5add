"""Utility modules for Playlist Manager."""

from .duration import format_duration, parse_duration
from .logger import setup_logger
from .platform import get_config_dir, get_default_playlists_dir, is_windows

__all__ = [
    "format_duration",
    "get_config_dir",
    "get_default_playlists_dir",
    "is_windows",
    "parse_duration",
    "setup_logger",
]
