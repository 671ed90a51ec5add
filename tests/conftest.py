"""Test configuration and fixtures"""

from pathlib import Path

import pytest

from playlist_manager.config.settings import (
    LibraryConfig,
    LoggingConfig,
    Settings,
)
from playlist_manager.core.linked_list import SongSequence
from playlist_manager.models.song import Song

SAMPLE_ROWS = [
    (1, "Bohemian Rhapsody", "Queen", "A Night at the Opera", "05:55", "Rock"),
    (2, "Stairway to Heaven", "Led Zeppelin", "Led Zeppelin IV", "08:02", "Rock"),
    (3, "Hotel California", "Eagles", "Hotel California", "06:30", "Rock"),
    (4, "Imagine", "John Lennon", "Imagine", "03:04", "Pop"),
    (5, "Smells Like Teen Spirit", "Nirvana", "Nevermind", "05:01", "Grunge"),
]


def make_song(title, artist="Artist", duration="03:00", song_id=1, album="Album", genre="Pop"):
    """Build a song with sensible defaults for fields a test doesn't care about"""
    return Song.create(
        id=song_id,
        title=title,
        artist=artist,
        album=album,
        duration=duration,
        genre=genre
    )


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Keep config, logs and saved playlists inside the test's temp dir"""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("APPDATA", str(home / "AppData"))
    return home


@pytest.fixture
def sample_songs():
    """The five-song sample playlist"""
    return [Song.create(*row) for row in SAMPLE_ROWS]


@pytest.fixture
def sample_playlist(sample_songs):
    """A sequence bulk-loaded with the sample songs (no undo history)"""
    return SongSequence(sample_songs)


@pytest.fixture
def sample_csv(tmp_path) -> Path:
    """Sample playlist written in the persisted CSV format"""
    path = tmp_path / "sample.csv"
    lines = ["ID,Title,Artist,Album,Duration,Genre"]
    lines += [",".join(str(value) for value in row) for row in SAMPLE_ROWS]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing every path into the temp dir"""
    return Settings(
        library=LibraryConfig(playlists_dir=tmp_path / "playlists"),
        logging=LoggingConfig(path=tmp_path / "logs" / "test.log"),
    )


@pytest.fixture
def song_factory():
    """Factory for songs with default artist, album, duration and genre"""
    return make_song
