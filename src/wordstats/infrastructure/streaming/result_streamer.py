"""Live progress tracking for a processing session."""

from dataclasses import dataclass
from typing import Callable, Optional, List, Any, Dict
from datetime import datetime
import threading

from ...domain.models.statistics import AggregateStats, FileRecord
from ..logging import WordStatsLogger
from .event_channel import ProgressListener


# Called with (record, files_processed, total_files) for every finished file
StreamingCallback = Callable[[FileRecord, int, int], None]


@dataclass
class ScanProgress:
    """Overall progress information."""
    total_files: int
    files_completed: int = 0
    files_failed: int = 0
    total_words: int = 0
    percent: int = 0
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    last_file: Optional[str] = None

    @property
    def files_remaining(self) -> int:
        return self.total_files - self.files_completed - self.files_failed


class ResultStreamer(ProgressListener):
    """
    Progress listener that keeps a live view of the run.

    Per-file events are forwarded to the registered callbacks as they
    arrive. The current state can be read from any thread with
    ``get_progress()``.
    """

    def __init__(self, callbacks: Optional[List[StreamingCallback]] = None):
        """
        Initialize result streamer.

        Args:
            callbacks: Optional callbacks to invoke for each processed file
        """
        self.callbacks = list(callbacks or [])

        self._progress: Optional[ScanProgress] = None
        self._aggregate: Optional[AggregateStats] = None
        self._error: Optional[str] = None
        self._lock = threading.Lock()

        self.logger = WordStatsLogger.get_instance()

    def on_processing_started(self, total_files: int):
        with self._lock:
            self._progress = ScanProgress(
                total_files=total_files,
                started_at=datetime.now(),
            )
            self._aggregate = None
            self._error = None

    def on_file_processed(self, record: FileRecord, files_processed: int, total_files: int):
        with self._lock:
            if self._progress:
                if record.failed:
                    self._progress.files_failed += 1
                else:
                    self._progress.files_completed += 1
                    self._progress.total_words += record.word_count
                self._progress.last_file = record.file_name
            callbacks = list(self.callbacks)

        for callback in callbacks:
            try:
                callback(record, files_processed, total_files)
            except Exception as e:
                self.logger.warning(f"Streaming callback failed: {e}")

    def on_progress_update(self, percent: int):
        with self._lock:
            if self._progress:
                self._progress.percent = percent

    def on_processing_complete(self, aggregate: AggregateStats):
        with self._lock:
            self._aggregate = aggregate
            if self._progress:
                self._progress.completed_at = datetime.now()

        self.logger.info(
            "Processing complete",
            extra={
                "files_processed": aggregate.files_processed,
                "files_failed": aggregate.files_failed,
                "total_words": aggregate.total_word_count,
            }
        )

    def on_error(self, context: str, message: str):
        with self._lock:
            self._error = f"{context}: {message}" if context else message

    @property
    def aggregate(self) -> Optional[AggregateStats]:
        """Final aggregate, once processing completed."""
        with self._lock:
            return self._aggregate

    @property
    def error(self) -> Optional[str]:
        with self._lock:
            return self._error

    @property
    def is_complete(self) -> bool:
        with self._lock:
            return self._aggregate is not None

    def get_progress(self) -> Dict[str, Any]:
        """
        Get current progress.

        Returns:
            Dictionary with progress information (empty before start)
        """
        with self._lock:
            if not self._progress:
                return {}

            return {
                "total_files": self._progress.total_files,
                "files_completed": self._progress.files_completed,
                "files_failed": self._progress.files_failed,
                "files_remaining": self._progress.files_remaining,
                "progress_percent": self._progress.percent,
                "total_words": self._progress.total_words,
                "last_file": self._progress.last_file,
            }

    def add_callback(self, callback: StreamingCallback):
        """
        Add a callback to be invoked for each processed file.

        Args:
            callback: Callback function
        """
        with self._lock:
            self.callbacks.append(callback)
