"""Platform-specific paths for configuration and saved playlists."""

import os
import sys
from pathlib import Path

APP_DIR_NAME = 'playlist-manager'


def is_windows() -> bool:
    """Check if running on Windows."""
    return sys.platform == 'win32' or os.name == 'nt'


def is_macos() -> bool:
    """Check if running on macOS."""
    return sys.platform == 'darwin'


def get_config_dir() -> Path:
    """Get the configuration directory based on the platform.

    Returns:
        Path: Configuration directory path
            - Windows: %APPDATA%/playlist-manager
            - macOS: ~/Library/Application Support/playlist-manager
            - Linux: ~/.config/playlist-manager
    """
    if is_windows():
        base = Path(os.environ.get('APPDATA', Path.home()))
    elif is_macos():
        base = Path.home() / 'Library' / 'Application Support'
    else:  # Linux and others
        base = Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config'))

    config_dir = base / APP_DIR_NAME
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_default_playlists_dir() -> Path:
    """Get the directory where saved playlists are kept.

    Returns:
        Path: ``playlists`` folder inside the configuration directory
    """
    playlists_dir = get_config_dir() / 'playlists'
    playlists_dir.mkdir(parents=True, exist_ok=True)
    return playlists_dir
