"""Playlist session service wiring settings, storage and the live playlist."""

from pathlib import Path
from typing import Callable, Optional

from .config.csv_store import CSVStore
from .config.settings import Settings
from .core.linked_list import SongSequence
from .core.looper import LoopPlayer
from .models.result import LoadReport, OperationResult, ResultStatus
from .utils.logger import setup_logger


class PlaylistService:
    """Holds one playlist for the lifetime of a CLI session."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        settings: Optional[Settings] = None,
        console_logging: bool = True
    ):
        """Initialize the service.

        Args:
            config_path: Path to configuration file (optional)
            settings: Pre-built settings, takes precedence over config_path
            console_logging: Whether log records are also written to stderr
        """
        self.settings = settings or Settings.from_file_or_default(config_path)

        self.logger = setup_logger(
            log_file=self.settings.logging.path,
            level=self.settings.logging.level,
            max_size_mb=self.settings.logging.max_size_mb,
            backup_count=self.settings.logging.backup_count,
            console=console_logging
        )

        self.store = CSVStore(self.settings.library.playlists_dir, self.logger)
        self.sequence = SongSequence(logger=self.logger.getChild('sequence'))
        self.source_path: Optional[Path] = None
        self.looper: Optional[LoopPlayer] = None

    def load(
        self,
        playlist: Optional[str] = None,
        create_missing: bool = False
    ) -> LoadReport:
        """Replace the live playlist with one read from disk.

        Args:
            playlist: Playlist name or path; falls back to the configured
                default playlist, and to an empty playlist if there is none
            create_missing: Start an empty playlist bound to the path instead
                of failing when the file doesn't exist yet

        Raises:
            FileNotFoundError: If the playlist doesn't exist and
                create_missing is False
            PlaylistReadError: If the file can't be read
        """
        if playlist is not None:
            path = self.store.resolve(playlist)
        else:
            path = self.settings.library.default_playlist

        if path is None:
            self.logger.info("No playlist given, starting with an empty playlist")
            self.sequence = SongSequence(logger=self.logger.getChild('sequence'))
            self.source_path = None
            return LoadReport()

        if create_missing and not path.exists():
            self.logger.info(f"{path} does not exist yet, starting a new playlist")
            self.sequence = SongSequence(logger=self.logger.getChild('sequence'))
            self.source_path = path
            return LoadReport(source=str(path), created=True)

        self.sequence, report = self.store.load(path)
        self.source_path = path
        return report

    def save(
        self,
        playlist: Optional[str] = None,
        allow_empty: bool = False
    ) -> OperationResult:
        """Write the live playlist to disk.

        Args:
            playlist: Playlist name or path; defaults to the file it was
                loaded from
            allow_empty: Write a header-only file for an empty playlist
        """
        if playlist is not None:
            path = self.store.resolve(playlist)
        elif self.source_path is not None:
            path = self.source_path
        else:
            return OperationResult.failure(
                ResultStatus.NOT_FOUND,
                "No destination given and playlist was not loaded from a file"
            )

        result = self.store.save(self.sequence, path, allow_empty=allow_empty)
        if result.ok:
            self.source_path = path
        return result

    def start_loop(self, emit: Callable[[str], None]) -> OperationResult:
        """Start repeating the current song's line through ``emit``."""
        self.stop_loop()
        self.looper = LoopPlayer(
            self.sequence,
            emit,
            logger=self.logger,
            interval_seconds=self.settings.playback.loop_interval_seconds
        )
        result = self.looper.start()
        if not result.ok:
            self.looper = None
        return result

    def stop_loop(self) -> None:
        if self.looper is not None:
            self.looper.stop()
            self.looper = None
