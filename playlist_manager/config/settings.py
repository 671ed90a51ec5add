"""Configuration management for Playlist Manager."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from ..utils.platform import get_config_dir, get_default_playlists_dir


@dataclass
class LibraryConfig:
    """Where playlists are loaded from and saved to."""

    default_playlist: Optional[Path] = None
    playlists_dir: Optional[Path] = None

    def __post_init__(self):
        """Expand paths and set the default playlists directory."""
        if isinstance(self.default_playlist, str):
            self.default_playlist = Path(self.default_playlist).expanduser()

        if self.playlists_dir is None:
            self.playlists_dir = get_default_playlists_dir()
        elif isinstance(self.playlists_dir, str):
            self.playlists_dir = Path(self.playlists_dir).expanduser()


@dataclass
class SearchConfig:
    """Fuzzy search configuration."""

    max_distance: int = 2

    def __post_init__(self):
        """Validate configuration."""
        if self.max_distance < 0:
            raise ValueError("max_distance must be >= 0")


@dataclass
class PlaybackConfig:
    """Playback configuration."""

    loop_interval_seconds: float = 2.0

    def __post_init__(self):
        """Validate configuration."""
        if self.loop_interval_seconds <= 0:
            raise ValueError("loop_interval_seconds must be > 0")


@dataclass
class LoggingConfig:
    """Logging configuration."""

    path: Optional[Path] = None
    level: str = "WARNING"
    max_size_mb: int = 10
    backup_count: int = 5

    def __post_init__(self):
        """Validate configuration and set defaults."""
        if self.path is None:
            self.path = get_config_dir() / 'playlist-manager.log'
        elif isinstance(self.path, str):
            self.path = Path(self.path).expanduser()

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.level.upper() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}")


@dataclass
class Settings:
    """Main settings container."""

    library: LibraryConfig = field(default_factory=LibraryConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    playback: PlaybackConfig = field(default_factory=PlaybackConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, config_path: Path) -> 'Settings':
        """Load settings from YAML file.

        Args:
            config_path: Path to configuration file

        Returns:
            Settings instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        return cls(
            library=LibraryConfig(**(data.get('library') or {})),
            search=SearchConfig(**(data.get('search') or {})),
            playback=PlaybackConfig(**(data.get('playback') or {})),
            logging=LoggingConfig(**(data.get('logging') or {})),
        )

    @classmethod
    def from_file_or_default(cls, config_path: Optional[Path] = None) -> 'Settings':
        """Load settings from file or return defaults.

        Args:
            config_path: Path to configuration file (optional)

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = get_config_dir() / 'config.yaml'

        if config_path.exists():
            try:
                return cls.from_file(config_path)
            except (ValueError, TypeError, yaml.YAMLError) as e:
                logging.warning(f"Failed to load config from {config_path}: {e}")
                logging.warning("Using default configuration")
                return cls()
        else:
            logging.info(f"Config file not found at {config_path}, using defaults")
            return cls()

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save settings to YAML file.

        Args:
            config_path: Path to save configuration (default: config.yaml in config dir)
        """
        if config_path is None:
            config_path = get_config_dir() / 'config.yaml'

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            'library': {
                'default_playlist': str(self.library.default_playlist) if self.library.default_playlist else None,
                'playlists_dir': str(self.library.playlists_dir) if self.library.playlists_dir else None
            },
            'search': {
                'max_distance': self.search.max_distance
            },
            'playback': {
                'loop_interval_seconds': self.playback.loop_interval_seconds
            },
            'logging': {
                'path': str(self.logging.path) if self.logging.path else None,
                'level': self.logging.level,
                'max_size_mb': self.logging.max_size_mb,
                'backup_count': self.logging.backup_count
            }
        }

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
