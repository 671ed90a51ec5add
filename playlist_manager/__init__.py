"""Playlist Manager: a linked-list backed command-line playlist manager."""

__version__ = "0.1.0"
