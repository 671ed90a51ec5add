"""Data models for Playlist Manager."""

from .result import (
    LoadReport,
    MalformedRecord,
    OperationResult,
    PlaybackEvent,
    PlaylistEntry,
    ResultStatus,
    SearchMatch,
)
from .song import Song, now_playing_line

__all__ = [
    "LoadReport",
    "MalformedRecord",
    "OperationResult",
    "PlaybackEvent",
    "PlaylistEntry",
    "ResultStatus",
    "SearchMatch",
    "Song",
    "now_playing_line",
]
