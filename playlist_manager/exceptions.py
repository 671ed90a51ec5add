"""Exceptions for Playlist Manager."""


class PlaylistManagerError(Exception):
    """Base class for playlist manager errors."""


class MalformedRecordError(PlaylistManagerError):
    """A persisted row failed field-count or value validation."""

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"Line {line_number}: {reason}")


class PlaylistIntegrityError(PlaylistManagerError):
    """The song chain violated a structural invariant (e.g. a cycle)."""


class PlaylistReadError(PlaylistManagerError):
    """A playlist file exists but could not be read or decoded."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read playlist {path}: {reason}")
