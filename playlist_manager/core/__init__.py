"""Core functionality for Playlist Manager."""

from .linked_list import SongSequence
from .looper import LoopPlayer
from .search import edit_distance, fuzzy_search
from .sorting import SortKey, sort_songs
from .undo import UndoLedger

__all__ = [
    "LoopPlayer",
    "SongSequence",
    "SortKey",
    "UndoLedger",
    "edit_distance",
    "fuzzy_search",
    "sort_songs",
]
