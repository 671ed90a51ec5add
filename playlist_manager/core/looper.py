"""Repeat the current song on a fixed interval until stopped."""

import logging
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..models.result import OperationResult, ResultStatus
from ..models.song import Song, now_playing_line
from .linked_list import SongSequence


class LoopPlayer:
    """Emits the current song's display line repeatedly in the background.

    Stopping is up to the caller; the player never decides on its own when
    a loop ends.
    """

    def __init__(
        self,
        sequence: SongSequence,
        emit: Callable[[str], None],
        logger: Optional[logging.Logger] = None,
        interval_seconds: float = 2.0
    ):
        """Initialize loop player.

        Args:
            sequence: Playlist whose current song is looped
            emit: Called with each display line
            logger: Logger instance
            interval_seconds: Delay between repeated lines
        """
        self.sequence = sequence
        self.emit = emit
        self.logger = logger or logging.getLogger(__name__)
        self.interval_seconds = interval_seconds

        self.scheduler: Optional[BackgroundScheduler] = None
        self.song: Optional[Song] = None
        self._job_id = "loop_current"

    def start(self) -> OperationResult:
        """Start looping the current song.

        The first line is emitted before this returns.
        """
        song = self.sequence.current
        if song is None:
            return OperationResult.failure(
                ResultStatus.NOTHING_PLAYING,
                "No song currently playing. Use 'play next' to start."
            )

        if self.is_running():
            self.stop()

        self.song = song
        self._emit_line()

        self.scheduler = BackgroundScheduler()
        self.scheduler.add_job(
            self._emit_line,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=self._job_id,
            name="Loop Current Song",
            replace_existing=True
        )
        self.scheduler.start()
        self.logger.debug(f"Looping '{song.title}' every {self.interval_seconds}s")

        return OperationResult.success(f"Looping: {now_playing_line(song)}", data=song)

    def stop(self) -> None:
        """Stop the loop and wait for any pending line to finish."""
        if self.scheduler is not None and self.scheduler.running:
            self.scheduler.shutdown(wait=True)
            self.logger.debug("Loop stopped")
        self.scheduler = None

    def is_running(self) -> bool:
        return self.scheduler is not None and self.scheduler.running

    def _emit_line(self) -> None:
        """Emit one line, keeping the scheduler alive if the callback fails."""
        try:
            self.emit(f"Looping: {now_playing_line(self.song)}")
        except Exception as e:
            self.logger.error(f"Error emitting loop line: {e}", exc_info=True)
