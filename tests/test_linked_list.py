"""Test the linked song sequence"""

import random

import pytest

from playlist_manager.core.linked_list import SongSequence
from playlist_manager.exceptions import PlaylistIntegrityError
from playlist_manager.models.result import PlaybackEvent, ResultStatus


def titles(sequence):
    return [song.title for song in sequence]


class FirstIndexRandom:
    """Random stand-in that always picks index 0 and records its calls"""

    def __init__(self):
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return 0


class TestAdd:
    """Test appending songs"""

    def test_add_to_empty_playlist(self, song_factory):
        sequence = SongSequence()
        result = sequence.add(song_factory("Test Song"))

        assert result.ok
        assert sequence.count() == 1
        assert titles(sequence) == ["Test Song"]

    def test_add_keeps_order(self, song_factory):
        sequence = SongSequence()
        for title in ["Song 1", "Song 2", "Song 3"]:
            sequence.add(song_factory(title))

        assert titles(sequence) == ["Song 1", "Song 2", "Song 3"]

    def test_count_increases_by_one(self, sample_playlist, song_factory):
        before = sample_playlist.count()
        sample_playlist.add(song_factory("New"))
        assert sample_playlist.count() == before + 1
        assert len(sample_playlist) == before + 1

    def test_add_keeps_cursor_on_non_empty_playlist(self, sample_playlist, song_factory):
        sample_playlist.play_next()
        sample_playlist.play_next()
        sample_playlist.add(song_factory("New"))

        assert sample_playlist.current.title == "Stairway to Heaven"

    def test_first_add_starts_fresh_playback(self, song_factory):
        sequence = SongSequence()
        sequence.add(song_factory("Only"))
        assert sequence.current is None

    def test_next_id(self, sample_playlist):
        assert sample_playlist.next_id() == 6
        assert SongSequence().next_id() == 1


class TestDeleteByTitle:
    """Test deleting by exact title"""

    def test_delete_existing_title(self, sample_playlist):
        result = sample_playlist.delete_by_title("Imagine")

        assert result.ok
        assert result.data.title == "Imagine"
        assert sample_playlist.count() == 4
        assert "Imagine" not in titles(sample_playlist)

    def test_delete_head(self, sample_playlist):
        sample_playlist.delete_by_title("Bohemian Rhapsody")
        assert titles(sample_playlist)[0] == "Stairway to Heaven"

    def test_delete_tail(self, sample_playlist):
        sample_playlist.delete_by_title("Smells Like Teen Spirit")
        assert titles(sample_playlist)[-1] == "Imagine"

    def test_delete_removes_only_first_match(self, song_factory):
        sequence = SongSequence([song_factory("A", song_id=1), song_factory("A", song_id=2)])
        sequence.delete_by_title("A")

        assert [song.id for song in sequence] == [2]

    def test_delete_is_case_sensitive(self, sample_playlist):
        result = sample_playlist.delete_by_title("imagine")

        assert result.status == ResultStatus.NOT_FOUND
        assert sample_playlist.count() == 5

    def test_missing_title_takes_no_snapshot(self, sample_playlist):
        sample_playlist.delete_by_title("Nonexistent Song")
        assert len(sample_playlist.history) == 0

    def test_delete_from_empty_playlist(self):
        sequence = SongSequence()
        result = sequence.delete_by_title("Nonexistent Song")

        assert result.status == ResultStatus.EMPTY_COLLECTION
        assert len(sequence.history) == 0


class TestDeleteByIndex:
    """Test deleting by position"""

    def test_delete_middle_index(self, sample_playlist):
        result = sample_playlist.delete_by_index(2)

        assert result.ok
        assert result.data.title == "Hotel California"
        assert sample_playlist.count() == 4

    def test_delete_index_zero_removes_head(self, sample_playlist):
        sample_playlist.delete_by_index(0)
        assert titles(sample_playlist)[0] == "Stairway to Heaven"

    def test_delete_last_index(self, sample_playlist):
        sample_playlist.delete_by_index(4)
        assert titles(sample_playlist)[-1] == "Imagine"

    @pytest.mark.parametrize("index", [-1, 5, 100])
    def test_out_of_range_index_is_rejected(self, sample_playlist, index):
        result = sample_playlist.delete_by_index(index)

        assert result.status == ResultStatus.INVALID_INDEX
        assert sample_playlist.count() == 5
        assert len(sample_playlist.history) == 0

    def test_negative_index_on_empty_playlist(self):
        result = SongSequence().delete_by_index(-1)
        assert result.status == ResultStatus.INVALID_INDEX

    def test_delete_index_from_empty_playlist(self):
        result = SongSequence().delete_by_index(0)
        assert result.status == ResultStatus.EMPTY_COLLECTION

    def test_delete_dispatches_on_type(self, sample_playlist):
        sample_playlist.delete(0)
        sample_playlist.delete("Imagine")

        assert titles(sample_playlist) == [
            "Stairway to Heaven",
            "Hotel California",
            "Smells Like Teen Spirit",
        ]

    def test_deleting_current_song_clears_cursor(self, sample_playlist):
        sample_playlist.play_next()
        sample_playlist.delete_by_index(0)

        assert sample_playlist.current is None
        assert sample_playlist.play_next().data.title == "Stairway to Heaven"


class TestShuffle:
    """Test Fisher-Yates shuffle"""

    def test_shuffle_preserves_songs(self, sample_playlist, sample_songs):
        result = sample_playlist.shuffle(random.Random(42))

        assert result.ok
        assert sample_playlist.count() == len(sample_songs)
        assert sorted(titles(sample_playlist)) == sorted(song.title for song in sample_songs)

    def test_shuffle_walks_from_last_index_down(self, song_factory):
        sequence = SongSequence([song_factory("A"), song_factory("B"), song_factory("C")])
        rng = FirstIndexRandom()

        sequence.shuffle(rng)

        assert rng.calls == [(0, 2), (0, 1)]
        assert titles(sequence) == ["B", "C", "A"]

    def test_shuffle_resets_cursor(self, sample_playlist):
        sample_playlist.play_next()
        sample_playlist.shuffle(random.Random(1))
        assert sample_playlist.current is None

    def test_single_song_is_not_shuffled(self, song_factory):
        sequence = SongSequence([song_factory("Only")])
        result = sequence.shuffle()

        assert result.status == ResultStatus.NOTHING_TO_SHUFFLE
        assert titles(sequence) == ["Only"]
        assert len(sequence.history) == 0

    def test_empty_playlist_is_not_shuffled(self):
        sequence = SongSequence()
        assert sequence.shuffle().status == ResultStatus.EMPTY_COLLECTION
        assert len(sequence.history) == 0


class TestPlayback:
    """Test the playback cursor"""

    def test_play_next_visits_every_song_then_wraps(self, sample_playlist, sample_songs):
        played = [sample_playlist.play_next() for _ in range(len(sample_songs))]

        assert [result.data for result in played] == sample_songs
        assert all(not result.events for result in played)

        wrapped = sample_playlist.play_next()
        assert wrapped.data == sample_songs[0]
        assert wrapped.events == [PlaybackEvent.PLAYLIST_END_REACHED]

    def test_play_next_on_empty_playlist(self):
        result = SongSequence().play_next()
        assert result.status == ResultStatus.EMPTY_COLLECTION
        assert result.data is None

    def test_play_previous_from_fresh_cursor_selects_last(self, sample_playlist):
        result = sample_playlist.play_previous()
        assert result.data.title == "Smells Like Teen Spirit"

    def test_play_previous_from_head_wraps_to_tail(self, sample_playlist):
        sample_playlist.play_next()
        assert sample_playlist.play_previous().data.title == "Smells Like Teen Spirit"

    def test_play_previous_steps_back(self, sample_playlist):
        for _ in range(3):
            sample_playlist.play_next()

        assert sample_playlist.play_previous().data.title == "Stairway to Heaven"
        assert sample_playlist.play_previous().data.title == "Bohemian Rhapsody"

    def test_play_previous_on_empty_playlist(self):
        assert SongSequence().play_previous().status == ResultStatus.EMPTY_COLLECTION

    def test_playback_does_not_touch_history(self, sample_playlist):
        sample_playlist.play_next()
        sample_playlist.play_previous()
        assert len(sample_playlist.history) == 0

    def test_entries_mark_current_song(self, sample_playlist):
        sample_playlist.play_next()
        sample_playlist.play_next()
        entries = sample_playlist.entries()

        assert [entry.position for entry in entries] == [0, 1, 2, 3, 4]
        assert [entry.is_current for entry in entries] == [False, True, False, False, False]


class TestRemoveDuplicates:
    """Test duplicate elimination"""

    def test_removes_later_occurrences(self, song_factory):
        sequence = SongSequence([
            song_factory("Imagine", artist="John Lennon", song_id=1),
            song_factory("Hey Jude", artist="The Beatles", song_id=2),
            song_factory("IMAGINE", artist="john lennon", song_id=3),
            song_factory("Imagine", artist="A Perfect Circle", song_id=4),
            song_factory("Hey Jude", artist="The Beatles", song_id=5),
        ])

        result = sequence.remove_duplicates()

        assert result.ok
        assert result.data == 2
        assert [song.id for song in sequence] == [1, 2, 4]

    def test_is_idempotent(self, sample_playlist, sample_songs):
        sample_playlist.add(sample_songs[0])
        assert sample_playlist.remove_duplicates().data == 1
        assert sample_playlist.remove_duplicates().data == 0
        assert sample_playlist.count() == 5

    def test_no_duplicates_is_not_an_error(self, sample_playlist):
        result = sample_playlist.remove_duplicates()

        assert result.ok
        assert result.data == 0
        assert result.message == "No duplicates found."

    def test_empty_playlist(self):
        sequence = SongSequence()
        assert sequence.remove_duplicates().status == ResultStatus.EMPTY_COLLECTION
        assert len(sequence.history) == 0

    def test_snapshot_taken_once(self, song_factory):
        sequence = SongSequence([song_factory("A"), song_factory("A"), song_factory("A")])
        sequence.remove_duplicates()

        assert len(sequence.history) == 1
        assert sequence.history.peek_label() == "remove duplicates"


class TestIntegrity:
    """Test traversal invariants"""

    def test_count_walks_the_chain(self, sample_playlist):
        assert sample_playlist.count() == 5
        assert sample_playlist.songs()[2].title == "Hotel California"

    def test_cycle_is_detected(self, song_factory):
        sequence = SongSequence([song_factory("A"), song_factory("B")])
        tail = list(sequence._iter_handles())[-1]
        sequence._nodes[tail].next = sequence._head

        with pytest.raises(PlaylistIntegrityError):
            sequence.count()
