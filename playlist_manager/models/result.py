"""Structured outcomes returned by playlist operations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from .song import Song


class ResultStatus(str, Enum):
    """Outcome of a playlist operation."""

    OK = "ok"
    EMPTY_COLLECTION = "empty_collection"
    NOT_FOUND = "not_found"
    INVALID_INDEX = "invalid_index"
    INVALID_SORT_KEY = "invalid_sort_key"
    MALFORMED_RECORD = "malformed_record"
    NO_UNDO_AVAILABLE = "no_undo_available"
    NOTHING_TO_SHUFFLE = "nothing_to_shuffle"
    NOTHING_PLAYING = "nothing_playing"


class PlaybackEvent(str, Enum):
    """Events raised while moving the playback cursor."""

    PLAYLIST_END_REACHED = "playlist_end_reached"


@dataclass
class OperationResult:
    """Result of a single operation on a playlist."""

    status: ResultStatus = ResultStatus.OK
    message: str = ""
    data: Any = None
    events: List[PlaybackEvent] = field(default_factory=list)

    def __post_init__(self):
        """Convert status to enum if it's a string."""
        if isinstance(self.status, str):
            self.status = ResultStatus(self.status)

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.OK

    @classmethod
    def success(cls, message: str = "", data: Any = None) -> 'OperationResult':
        return cls(ResultStatus.OK, message, data)

    @classmethod
    def failure(cls, status: ResultStatus, message: str) -> 'OperationResult':
        return cls(status, message)


@dataclass(frozen=True)
class PlaylistEntry:
    """One row of the playlist listing."""

    position: int
    song: Song
    is_current: bool = False


@dataclass(frozen=True)
class SearchMatch:
    """A song that matched a fuzzy search."""

    song: Song
    position: int
    distance: int


@dataclass
class MalformedRecord:
    """A persisted row that was skipped while loading."""

    line_number: int
    line: str
    reason: str


@dataclass
class LoadReport:
    """Outcome of loading a playlist file."""

    loaded: int = 0
    skipped: List[MalformedRecord] = field(default_factory=list)
    source: Optional[str] = None
    created: bool = False

    def as_result(self) -> OperationResult:
        """Summarize the load, failing if every data row was malformed."""
        if self.created:
            return OperationResult.success(f"Starting new playlist {self.source}")

        if self.skipped and not self.loaded:
            return OperationResult.failure(
                ResultStatus.MALFORMED_RECORD,
                f"No valid rows in {self.source}: skipped {len(self.skipped)} malformed row(s)"
            )

        return OperationResult.success(f"Loaded {self.loaded} song(s) from {self.source}")
