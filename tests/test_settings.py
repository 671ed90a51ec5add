"""Test configuration loading"""

from pathlib import Path

import pytest
import yaml

from playlist_manager.config.settings import (
    LoggingConfig,
    PlaybackConfig,
    SearchConfig,
    Settings,
)


class TestSettings:
    """Test settings defaults, validation and persistence"""

    def test_defaults(self, isolated_config_dir):
        settings = Settings()

        assert settings.search.max_distance == 2
        assert settings.playback.loop_interval_seconds == 2.0
        assert settings.library.default_playlist is None
        assert settings.library.playlists_dir.name == "playlists"
        assert settings.library.playlists_dir.exists()
        assert settings.logging.level == "WARNING"

    def test_validation(self):
        with pytest.raises(ValueError):
            SearchConfig(max_distance=-1)
        with pytest.raises(ValueError):
            PlaybackConfig(loop_interval_seconds=0)
        with pytest.raises(ValueError):
            LoggingConfig(level="LOUD")

    def test_from_file(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.dump({
            'library': {
                'default_playlist': str(tmp_path / "songs.csv"),
                'playlists_dir': str(tmp_path / "mine"),
            },
            'search': {'max_distance': 3},
        }), encoding="utf-8")

        settings = Settings.from_file(config_path)

        assert settings.library.default_playlist == tmp_path / "songs.csv"
        assert settings.library.playlists_dir == tmp_path / "mine"
        assert settings.search.max_distance == 3
        assert settings.playback.loop_interval_seconds == 2.0

    def test_from_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Settings.from_file(tmp_path / "nope.yaml")

    def test_invalid_file_falls_back_to_defaults(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("search:\n  max_distance: -4\n", encoding="utf-8")

        settings = Settings.from_file_or_default(config_path)

        assert settings.search.max_distance == 2

    def test_save_and_reload(self, settings, tmp_path):
        settings.search.max_distance = 1
        settings.library.default_playlist = Path(tmp_path / "default.csv")
        config_path = tmp_path / "saved" / "config.yaml"

        settings.save(config_path)
        reloaded = Settings.from_file(config_path)

        assert reloaded.search.max_distance == 1
        assert reloaded.library.default_playlist == tmp_path / "default.csv"
        assert reloaded.library.playlists_dir == settings.library.playlists_dir
        assert reloaded.logging.path == settings.logging.path
