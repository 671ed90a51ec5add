"""Song data model."""

from dataclasses import dataclass
from datetime import timedelta

from ..utils.duration import format_duration, parse_duration


@dataclass(frozen=True)
class Song:
    """A single track in a playlist.

    Songs are values: once built they are never edited, a changed song is a
    new record.
    """

    id: int
    title: str
    artist: str
    album: str
    duration: timedelta
    genre: str

    @classmethod
    def create(
        cls,
        id: int,
        title: str,
        artist: str,
        album: str,
        duration: str,
        genre: str
    ) -> 'Song':
        """Build a song from a ``MM:SS`` duration string.

        Raises:
            ValueError: If the duration cannot be parsed
        """
        return cls(
            id=id,
            title=title,
            artist=artist,
            album=album,
            duration=parse_duration(duration),
            genre=genre
        )

    @property
    def duration_str(self) -> str:
        """Duration formatted as ``MM:SS``."""
        return format_duration(self.duration)

    @property
    def identity_key(self) -> str:
        """Composite key used for duplicate detection."""
        return f"{self.title.lower()}|{self.artist.lower()}"


def now_playing_line(song: Song) -> str:
    """Render the one-line description shown while a song plays."""
    return f"{song.title} by {song.artist} - ({song.duration_str})"
