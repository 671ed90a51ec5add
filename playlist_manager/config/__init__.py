"""Configuration and persistence for Playlist Manager."""

from .csv_store import CSVStore
from .settings import Settings

__all__ = ["CSVStore", "Settings"]
