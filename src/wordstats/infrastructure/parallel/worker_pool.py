"""Worker pool for parallel file processing."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Dict, Optional, Sequence
import asyncio
import os
import time

from ...domain.models.statistics import FileRecord
from ..logging import WordStatsLogger


def default_pool_size() -> int:
    """Number of parallel execution units available on this host."""
    return os.cpu_count() or 1


@dataclass
class WorkerConfig:
    """Configuration for the worker pool."""
    pool_size: int = field(default_factory=default_pool_size)

    def __post_init__(self):
        if self.pool_size < 1:
            raise ValueError("pool_size must be at least 1")


# A unit of work: path in, record out
FileProcessFn = Callable[[Path], FileRecord]


class WorkerPool:
    """
    Runs file processing on a fixed number of worker threads and streams
    the results back in completion order.

    Each ``run`` gets its own thread pool. Units wait on a semaphore so at
    most ``pool_size`` execute at once; the rest stay queued and can be
    dropped without ever starting. Finished records go onto a completion
    queue read by a single consumer, which is the only place results
    leave the pool.
    """

    def __init__(
        self,
        config: WorkerConfig,
        process_file: FileProcessFn,
    ):
        """
        Initialize the worker pool.

        Args:
            config: Worker pool configuration
            process_file: Callable turning one path into a FileRecord
                (e.g. ``FileProcessor.process``)
        """
        self.config = config
        self.process_file = process_file
        self.logger = WordStatsLogger.get_instance()

        # Statistics
        self._stats: Dict[str, Any] = {}
        self._reset_stats()

    @property
    def pool_size(self) -> int:
        return self.config.pool_size

    async def run(self, paths: Sequence[Path]) -> AsyncIterator[FileRecord]:
        """
        Process files concurrently, yielding records as they complete.

        Yields exactly one record per path. Closing the iterator early
        (``aclose()`` or cancelling the consuming task) cancels units that
        have not started and abandons the ones still running.

        Args:
            paths: Files to process

        Yields:
            FileRecord for each path, in completion order
        """
        self._reset_stats()
        self._stats["submitted"] = len(paths)
        if not paths:
            return

        loop = asyncio.get_running_loop()
        semaphore = asyncio.Semaphore(self.config.pool_size)
        completions: "asyncio.Queue[FileRecord]" = asyncio.Queue()
        executor = ThreadPoolExecutor(
            max_workers=self.config.pool_size,
            thread_name_prefix="wordstats-worker",
        )

        async def run_unit(path: Path):
            async with semaphore:
                try:
                    record = await loop.run_in_executor(executor, self.process_file, path)
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    self.logger.error(
                        f"Worker failed with exception: {path}",
                        extra={"error": str(e)}
                    )
                    record = FileRecord.failure(path, str(e) or type(e).__name__)
            completions.put_nowait(record)

        self.logger.info(
            "Starting parallel processing",
            extra={
                "total_files": len(paths),
                "pool_size": self.config.pool_size,
            }
        )

        start_time = time.time()
        units = [asyncio.create_task(run_unit(Path(path))) for path in paths]
        finished = False

        try:
            for _ in range(len(units)):
                record = await completions.get()
                self._stats["completed"] += 1
                if record.failed:
                    self._stats["failed"] += 1
                yield record
            finished = True

        finally:
            pending = [unit for unit in units if not unit.done()]
            for unit in pending:
                unit.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

            # Abandoned threads finish their current file on their own
            executor.shutdown(wait=False, cancel_futures=True)

            duration = time.time() - start_time
            self._stats["duration_seconds"] = duration
            self._stats["cancelled"] = len(paths) - self._stats["completed"]

            self.logger.info(
                "Parallel processing complete" if finished else "Parallel processing stopped",
                extra={
                    "files_completed": self._stats["completed"],
                    "files_failed": self._stats["failed"],
                    "files_cancelled": self._stats["cancelled"],
                    "total_duration_seconds": round(duration, 2),
                }
            )

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics for the most recent run.

        Returns:
            Dictionary with statistics
        """
        return dict(self._stats)

    def _reset_stats(self):
        self._stats = {
            "submitted": 0,
            "completed": 0,
            "failed": 0,
            "cancelled": 0,
            "duration_seconds": 0.0,
        }
