"""Singly linked song sequence with playback cursor and undo."""

import logging
import random
from typing import Dict, Iterable, Iterator, List, Optional, Union

from ..exceptions import PlaylistIntegrityError
from ..models.result import (
    OperationResult,
    PlaybackEvent,
    PlaylistEntry,
    ResultStatus,
)
from ..models.song import Song, now_playing_line
from .search import DEFAULT_MAX_DISTANCE, fuzzy_search
from .sorting import SortKey, parse_sort_key, sort_songs
from .undo import SongNode, UndoLedger


class SongSequence:
    """Ordered playlist stored as a singly linked chain.

    Nodes live in an arena keyed by integer handles. Each node stores the
    handle of its successor, and both the head and the playback cursor are
    handles, so undo snapshots can copy the arena without re-locating the
    cursor.
    """

    def __init__(
        self,
        songs: Optional[Iterable[Song]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize the sequence.

        Args:
            songs: Songs to bulk-load in order (no undo history is recorded)
            logger: Logger instance (defaults to the module logger)
        """
        self.logger = logger or logging.getLogger(__name__)
        self.history = UndoLedger(self.logger)

        self._nodes: Dict[int, SongNode] = {}
        self._head: Optional[int] = None
        self._cursor: Optional[int] = None
        self._next_handle = 0

        for song in songs or []:
            self._append(song)

    # Traversal

    def _iter_handles(self) -> Iterator[int]:
        """Yield node handles from head to tail.

        Raises:
            PlaylistIntegrityError: If the chain loops back on itself
        """
        handle = self._head
        steps = 0
        while handle is not None:
            steps += 1
            if steps > len(self._nodes):
                raise PlaylistIntegrityError("Cycle detected in song chain")
            yield handle
            handle = self._nodes[handle].next

    def __iter__(self) -> Iterator[Song]:
        for handle in self._iter_handles():
            yield self._nodes[handle].song

    def __len__(self) -> int:
        return self.count()

    def count(self) -> int:
        """Number of songs, counted by walking the chain."""
        return sum(1 for _ in self._iter_handles())

    def songs(self) -> List[Song]:
        """All songs in chain order."""
        return list(self)

    def is_empty(self) -> bool:
        return self._head is None

    def next_id(self) -> int:
        """ID to give the next song added by hand."""
        return self.count() + 1

    @property
    def current(self) -> Optional[Song]:
        """Song under the playback cursor, if any."""
        if self._cursor is None:
            return None
        return self._nodes[self._cursor].song

    def entries(self) -> List[PlaylistEntry]:
        """Positions and songs in order, marking the one currently playing."""
        return [
            PlaylistEntry(
                position=position,
                song=self._nodes[handle].song,
                is_current=(handle == self._cursor)
            )
            for position, handle in enumerate(self._iter_handles())
        ]

    # Structural helpers

    def _new_node(self, song: Song) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._nodes[handle] = SongNode(song)
        return handle

    def _tail_handle(self) -> Optional[int]:
        tail = None
        for handle in self._iter_handles():
            tail = handle
        return tail

    def _append(self, song: Song) -> None:
        """Link a new node at the tail."""
        was_empty = self._head is None
        handle = self._new_node(song)

        if was_empty:
            self._head = handle
            self._cursor = None
        else:
            self._nodes[self._tail_handle()].next = handle

    def _unlink(self, previous: Optional[int], handle: int) -> Song:
        """Remove ``handle`` from the chain given its predecessor."""
        node = self._nodes.pop(handle)

        if previous is None:
            self._head = node.next
        else:
            self._nodes[previous].next = node.next

        if self._cursor == handle:
            self._cursor = None

        return node.song

    def _save_state(self, label: str) -> None:
        self.history.save_state(label, self._nodes, self._head, self._cursor)

    def _empty_result(self) -> OperationResult:
        return OperationResult.failure(ResultStatus.EMPTY_COLLECTION, "Playlist is empty")

    # Mutations

    def add(self, song: Song) -> OperationResult:
        """Append a song at the end of the playlist.

        Adding to an empty playlist clears the cursor; otherwise playback
        position is kept.
        """
        self._save_state("add")
        self._append(song)
        self.logger.debug(f"Added '{song.title}' by {song.artist}")
        return OperationResult.success(f"Added '{song.title}' to playlist", data=song)

    def delete(self, target: Union[int, str]) -> OperationResult:
        """Delete by position when given an int, by title when given a str."""
        if isinstance(target, int):
            return self.delete_by_index(target)
        return self.delete_by_title(target)

    def delete_by_title(self, title: str) -> OperationResult:
        """Remove the first song whose title matches exactly.

        Args:
            title: Title to match (case-sensitive)

        Returns:
            Result holding the removed song on success
        """
        if self._head is None:
            return self._empty_result()

        previous = None
        for handle in self._iter_handles():
            if self._nodes[handle].song.title == title:
                self._save_state("delete")
                song = self._unlink(previous, handle)
                self.logger.debug(f"Deleted '{title}'")
                return OperationResult.success(f"Deleted '{title}' from playlist", data=song)
            previous = handle

        return OperationResult.failure(
            ResultStatus.NOT_FOUND,
            f"Song '{title}' not found in playlist"
        )

    def delete_by_index(self, index: int) -> OperationResult:
        """Remove the song at a zero-based position.

        Args:
            index: Position of the song to remove

        Returns:
            Result holding the removed song on success
        """
        if index < 0:
            return OperationResult.failure(
                ResultStatus.INVALID_INDEX,
                "Index cannot be negative"
            )

        if self._head is None:
            return self._empty_result()

        previous = None
        for position, handle in enumerate(self._iter_handles()):
            if position == index:
                self._save_state("delete")
                song = self._unlink(previous, handle)
                self.logger.debug(f"Deleted '{song.title}' at index {index}")
                return OperationResult.success(
                    f"Deleted '{song.title}' from index {index}",
                    data=song
                )
            previous = handle

        return OperationResult.failure(
            ResultStatus.INVALID_INDEX,
            f"Index {index} not found in playlist"
        )

    def shuffle(self, rng: Optional[random.Random] = None) -> OperationResult:
        """Randomly reorder the playlist (Fisher-Yates).

        The chain is rebuilt with new nodes, so the cursor is reset.

        Args:
            rng: Random source (defaults to the ``random`` module)
        """
        if self._head is None:
            return self._empty_result()

        songs = self.songs()
        if len(songs) == 1:
            return OperationResult.failure(
                ResultStatus.NOTHING_TO_SHUFFLE,
                "Playlist has 1 song. Nothing to shuffle."
            )

        self._save_state("shuffle")

        rng = rng or random
        for i in range(len(songs) - 1, 0, -1):
            j = rng.randint(0, i)
            songs[i], songs[j] = songs[j], songs[i]

        self._nodes = {}
        self._head = None
        self._cursor = None
        for song in songs:
            self._append(song)

        self.logger.debug(f"Shuffled {len(songs)} songs")
        return OperationResult.success("Playlist shuffled", data=songs)

    def remove_duplicates(self) -> OperationResult:
        """Drop every song whose title and artist repeat an earlier one.

        Comparison ignores case. The first occurrence of each song is kept.

        Returns:
            Result whose data is the number of songs removed
        """
        if self._head is None:
            return self._empty_result()

        self._save_state("remove duplicates")

        seen = set()
        removed = 0
        previous = None
        handle = self._head

        while handle is not None:
            node = self._nodes[handle]
            following = node.next
            key = node.song.identity_key

            if key in seen:
                self._unlink(previous, handle)
                removed += 1
            else:
                seen.add(key)
                previous = handle

            handle = following

        if removed == 0:
            message = "No duplicates found."
        else:
            message = f"Removed {removed} duplicate song(s)."
            self.logger.info(message)

        return OperationResult.success(message, data=removed)

    def undo(self) -> OperationResult:
        """Restore the playlist to its state before the last mutation."""
        snapshot = self.history.pop()
        if snapshot is None:
            return OperationResult.failure(
                ResultStatus.NO_UNDO_AVAILABLE,
                "No actions to undo"
            )

        self._nodes = snapshot.nodes
        self._head = snapshot.head
        self._cursor = snapshot.cursor

        self.logger.debug(f"Undid '{snapshot.label}'")
        return OperationResult.success(f"Undid last action: {snapshot.label}", data=snapshot.label)

    # Read-only views

    def sorted_by(self, key: Union[str, SortKey]) -> OperationResult:
        """Return the songs ordered by ``key`` without touching the chain.

        Returns:
            Result whose data is the sorted list of songs
        """
        if self._head is None:
            return self._empty_result()

        try:
            sort_key = parse_sort_key(key)
        except ValueError as e:
            return OperationResult.failure(ResultStatus.INVALID_SORT_KEY, str(e))

        ordered = sort_songs(self, sort_key)
        return OperationResult.success(f"Playlist sorted by {sort_key.value}", data=ordered)

    def search(
        self,
        term: str,
        max_distance: int = DEFAULT_MAX_DISTANCE
    ) -> OperationResult:
        """Fuzzy search song titles.

        Returns:
            Result whose data is a list of SearchMatch, closest first
        """
        if self._head is None:
            return self._empty_result()

        matches = fuzzy_search(self, term, max_distance)
        if not matches:
            return OperationResult.failure(
                ResultStatus.NOT_FOUND,
                f"No songs found similar to '{term}'"
            )

        return OperationResult.success(f"Found {len(matches)} similar songs", data=matches)

    # Playback cursor

    def play_next(self) -> OperationResult:
        """Advance the cursor, wrapping from the last song to the first.

        Returns:
            Result whose data is the song now playing
        """
        events = []

        if self._cursor is None:
            if self._head is None:
                return self._empty_result()
            self._cursor = self._head
        else:
            following = self._nodes[self._cursor].next
            if following is None:
                events.append(PlaybackEvent.PLAYLIST_END_REACHED)
                self._cursor = self._head
            else:
                self._cursor = following

        song = self._nodes[self._cursor].song
        result = OperationResult.success(f"Now playing: {now_playing_line(song)}", data=song)
        result.events = events
        return result

    def play_previous(self) -> OperationResult:
        """Move the cursor back one song.

        With nothing selected, or at the first song, jumps to the last song.

        Returns:
            Result whose data is the song now playing
        """
        if self._head is None:
            return self._empty_result()

        if self._cursor is None or self._cursor == self._head:
            self._cursor = self._tail_handle()
        else:
            previous = self._head
            for handle in self._iter_handles():
                if self._nodes[handle].next == self._cursor:
                    previous = handle
                    break
            self._cursor = previous

        song = self._nodes[self._cursor].song
        return OperationResult.success(f"Now playing: {now_playing_line(song)}", data=song)
