"""CSV persistence for playlists."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from ..core.linked_list import SongSequence
from ..exceptions import MalformedRecordError, PlaylistReadError
from ..models.result import LoadReport, MalformedRecord, OperationResult, ResultStatus
from ..models.song import Song
from ..utils.duration import parse_duration

CSV_HEADER = ["ID", "Title", "Artist", "Album", "Duration", "Genre"]
FIELD_COUNT = len(CSV_HEADER)


def parse_row(line_number: int, line: str) -> Song:
    """Parse one data row into a Song.

    Fields beyond the sixth are ignored. Values are not unescaped, so a comma
    inside a title splits it.

    Args:
        line_number: 1-based line number, for error reporting
        line: Raw line without trailing newline

    Returns:
        Parsed song

    Raises:
        MalformedRecordError: If the row has too few fields or a bad ID/duration
    """
    parts = line.split(',')

    if len(parts) < FIELD_COUNT:
        raise MalformedRecordError(
            line_number, line,
            f"expected {FIELD_COUNT} fields, found {len(parts)}"
        )

    try:
        song_id = int(parts[0].strip())
    except ValueError:
        raise MalformedRecordError(line_number, line, f"invalid ID '{parts[0].strip()}'")

    try:
        duration = parse_duration(parts[4])
    except ValueError as e:
        raise MalformedRecordError(line_number, line, str(e))

    return Song(
        id=song_id,
        title=parts[1].strip(),
        artist=parts[2].strip(),
        album=parts[3].strip(),
        duration=duration,
        genre=parts[5].strip()
    )


def format_row(song: Song) -> str:
    """Render a song as one CSV row."""
    return ",".join([
        str(song.id),
        song.title,
        song.artist,
        song.album,
        song.duration_str,
        song.genre,
    ])


class CSVStore:
    """Reads and writes playlists as flat CSV files."""

    def __init__(self, playlists_dir: Path, logger: Optional[logging.Logger] = None):
        """Initialize the store.

        Args:
            playlists_dir: Directory holding saved playlists
            logger: Logger instance
        """
        self.playlists_dir = playlists_dir
        self.logger = logger or logging.getLogger(__name__)

    def resolve(self, name: str) -> Path:
        """Map a playlist name or path to a file path.

        A bare name such as ``road-trip`` resolves to
        ``<playlists_dir>/road-trip.csv``; anything containing a directory
        part or a ``.csv`` suffix is used as given.
        """
        path = Path(name).expanduser()
        if path.suffix.lower() == '.csv' or len(path.parts) > 1:
            return path
        return self.playlists_dir / f"{name}.csv"

    def list_saved(self) -> List[Path]:
        """Saved playlists in the playlists directory, sorted by name."""
        if not self.playlists_dir.exists():
            return []
        return sorted(self.playlists_dir.glob('*.csv'))

    def load(self, path: Path) -> Tuple[SongSequence, LoadReport]:
        """Load a playlist file.

        The header row and blank lines are skipped. Malformed rows are logged
        and reported instead of aborting the load. The returned sequence has
        no undo history.

        Args:
            path: CSV file to read

        Returns:
            The loaded sequence and a report of what was skipped

        Raises:
            FileNotFoundError: If the file doesn't exist
            PlaylistReadError: If the file can't be read as UTF-8 text
        """
        if not path.exists():
            raise FileNotFoundError(f"Playlist file not found: {path}")

        self.logger.info(f"Loading playlist from {path}")
        sequence = SongSequence(logger=self.logger.getChild('sequence'))
        report = LoadReport(source=str(path))

        try:
            with open(path, 'r', encoding='utf-8') as f:
                lines = f.read().splitlines()
        except (UnicodeDecodeError, OSError) as e:
            self.logger.error(f"Failed to read {path}: {e}")
            raise PlaylistReadError(path, str(e)) from e

        for index, line in enumerate(lines[1:], start=2):
            if not line.strip():
                continue

            try:
                song = parse_row(index, line)
            except MalformedRecordError as e:
                self.logger.warning(f"Skipping invalid line {index}: {e.reason}")
                report.skipped.append(MalformedRecord(e.line_number, e.line, e.reason))
                continue

            sequence.add(song)
            report.loaded += 1

        sequence.history.clear()
        self.logger.info(f"Loaded {report.loaded} song(s), skipped {len(report.skipped)}")
        return sequence, report

    def save(
        self,
        sequence: SongSequence,
        path: Path,
        allow_empty: bool = False
    ) -> OperationResult:
        """Write a playlist to a CSV file.

        Args:
            sequence: Playlist to save
            path: Destination file (parent directories are created)
            allow_empty: Write a header-only file instead of refusing an
                empty playlist

        Returns:
            Result whose data is the written path
        """
        if sequence.is_empty() and not allow_empty:
            return OperationResult.failure(ResultStatus.EMPTY_COLLECTION, "Playlist is empty")

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(",".join(CSV_HEADER) + "\n")
            for song in sequence:
                f.write(format_row(song) + "\n")

        self.logger.info(f"Saved {sequence.count()} song(s) to {path}")
        return OperationResult.success(f"Playlist saved to {path}", data=path)
