"""Sorted views over a list of songs."""

from enum import Enum
from typing import Callable, Dict, Iterable, List, Union

from ..models.song import Song


class SortKey(str, Enum):
    """Fields a playlist can be sorted by."""

    TITLE = "title"
    ARTIST = "artist"
    ALBUM = "album"
    DURATION = "duration"
    GENRE = "genre"


_KEY_FUNCTIONS: Dict[SortKey, Callable[[Song], object]] = {
    SortKey.TITLE: lambda song: song.title.lower(),
    SortKey.ARTIST: lambda song: song.artist.lower(),
    SortKey.ALBUM: lambda song: song.album.lower(),
    SortKey.DURATION: lambda song: song.duration.total_seconds(),
    SortKey.GENRE: lambda song: song.genre.lower(),
}


def parse_sort_key(value: Union[str, SortKey]) -> SortKey:
    """Convert a user-supplied value to a SortKey.

    Raises:
        ValueError: If the value names no known key
    """
    if isinstance(value, SortKey):
        return value
    try:
        return SortKey(str(value).strip().lower())
    except ValueError:
        valid = [key.value for key in SortKey]
        raise ValueError(f"Cannot sort by '{value}', must be one of {valid}")


def sort_songs(songs: Iterable[Song], key: Union[str, SortKey]) -> List[Song]:
    """Return a new list of songs ordered by ``key``.

    Text fields compare case-insensitively, duration by total length. Equal
    keys keep their original relative order.

    Raises:
        ValueError: If ``key`` is not a known sort key
    """
    sort_key = parse_sort_key(key)
    return sorted(songs, key=_KEY_FUNCTIONS[sort_key])
