"""Processing session: one full run over a directory."""

from contextlib import aclosing
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Union
import asyncio

from ..domain.exceptions import AlreadyRunningError
from ..domain.models.statistics import AggregateStats, SessionState
from ..domain.services.result_aggregator import ResultAggregator
from ..infrastructure.logging import WordStatsLogger
from ..infrastructure.parallel import WorkerPool
from ..infrastructure.streaming import (
    EventChannel,
    FileProcessed,
    ProcessingComplete,
    ProcessingError,
    ProcessingStarted,
    ProgressListener,
    ProgressUpdate,
)


NO_FILES_MESSAGE = "No files found"


class FileLister(Protocol):
    """Anything that can list the text files of a directory."""

    def list_text_files(
        self,
        directory: Union[str, Path],
        recursive: bool = True,
    ) -> Sequence[Path]:
        ...


def progress_percent(files_processed: int, total_files: int) -> int:
    """Whole-number percentage of files processed."""
    if total_files <= 0:
        return 100
    return int(files_processed * 100 / total_files)


class ProcessingSession:
    """
    Orchestrates file discovery, the worker pool and aggregation.

    State machine: IDLE -> RUNNING on ``start``; RUNNING -> IDLE when all
    files are absorbed or none were found; RUNNING -> CANCELLING on
    ``cancel``; CANCELLING -> IDLE once outstanding work is abandoned.

    Workers only produce records. A single consumer task absorbs them and
    publishes events; a separate pump task delivers those events to the
    listener in order, so the listener never runs concurrently with
    itself and never sees aggregator internals.
    """

    def __init__(
        self,
        file_lister: FileLister,
        worker_pool: WorkerPool,
        aggregator: Optional[ResultAggregator] = None,
        listener: Optional[ProgressListener] = None,
        event_buffer_size: int = 64,
    ):
        """
        Initialize the session.

        Args:
            file_lister: File discovery collaborator
            worker_pool: Pool that processes the files
            aggregator: Aggregator for the results (new one if omitted)
            listener: Receiver of progress events
            event_buffer_size: Undelivered events allowed before
                processing waits for the listener
        """
        self.file_lister = file_lister
        self.worker_pool = worker_pool
        self.aggregator = aggregator or ResultAggregator()
        self.listener = listener
        self.event_buffer_size = event_buffer_size
        self.logger = WordStatsLogger.get_instance()

        self._state = SessionState.IDLE
        self._channel: Optional[EventChannel] = None
        self._consumer: Optional[asyncio.Task] = None
        self._discovery: Optional[asyncio.Task] = None
        self._completed = False

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_processing(self) -> bool:
        return self._state is not SessionState.IDLE

    def snapshot(self) -> AggregateStats:
        """Current (possibly partial) aggregate."""
        return self.aggregator.snapshot()

    async def start(
        self,
        directory: Union[str, Path],
        recursive: bool = True,
    ) -> Optional[AggregateStats]:
        """
        Process every text file in a directory.

        Args:
            directory: Directory to process
            recursive: Whether to include subdirectories

        Returns:
            Final aggregate, or None if no files were found or the run
            was cancelled

        Raises:
            AlreadyRunningError: If a run is already in progress
        """
        if self._state is not SessionState.IDLE:
            raise AlreadyRunningError(self._state.value)

        self._state = SessionState.RUNNING
        self._completed = False
        self.aggregator.reset()

        channel = EventChannel(maxsize=self.event_buffer_size)
        self._channel = channel
        pump = asyncio.create_task(channel.pump(self.listener))

        try:
            result = await self._run(directory, recursive, channel)

        except BaseException:
            channel.abandon()
            raise

        finally:
            consumer = self._consumer
            if consumer is not None and not consumer.done():
                consumer.cancel()
                await asyncio.gather(consumer, return_exceptions=True)

            await channel.close()
            await pump
            self.logger.debug(
                "Session finished",
                extra={"events_delivered": channel.delivered, "abandoned": channel.abandoned}
            )
            self._consumer = None
            self._discovery = None
            self._channel = None
            self._state = SessionState.IDLE

        if channel.abandoned and not self._completed:
            # cancelled after the last file; the complete event was dropped
            return None
        return result

    def cancel(self):
        """
        Stop the current run.

        Files not yet started are dropped, running ones are abandoned and
        no completion event is sent. Results absorbed so far remain in
        ``snapshot()``. A run still listing files stops without waiting for
        the listing to finish. Does nothing when idle or once the run has
        started reporting completion.

        Must be called on the event loop running ``start``; from other
        threads use ``loop.call_soon_threadsafe(session.cancel)``.
        """
        if self._state is SessionState.IDLE or self._completed:
            return

        self._state = SessionState.CANCELLING
        if self._discovery is not None and not self._discovery.done():
            # the listing thread runs on, its result is ignored
            self._discovery.cancel()
        if self._channel is not None:
            self._channel.abandon()
        if self._consumer is not None and not self._consumer.done():
            self._consumer.cancel()

    async def _consume(self, paths: List[Path], channel: EventChannel) -> AggregateStats:
        total = len(paths)
        files_processed = 0

        async with aclosing(self.worker_pool.run(paths)) as records:
            async for record in records:
                self.aggregator.absorb(record)
                files_processed += 1

                await channel.publish(FileProcessed(record, files_processed, total))
                await channel.publish(ProgressUpdate(progress_percent(files_processed, total)))

        return self.aggregator.snapshot()

    async def _run(
        self,
        directory: Union[str, Path],
        recursive: bool,
        channel: EventChannel,
    ) -> Optional[AggregateStats]:
        self._discovery = asyncio.create_task(asyncio.to_thread(
            self.file_lister.list_text_files, directory, recursive
        ))
        try:
            paths = await self._discovery
        except asyncio.CancelledError:
            if self._state is not SessionState.CANCELLING or not self._discovery.cancelled():
                raise
            self.logger.info("Processing cancelled during file discovery")
            return None

        if self._state is SessionState.CANCELLING:
            return None

        if not paths:
            self.logger.warning(
                "No text files found",
                extra={"directory": str(directory), "recursive": recursive}
            )
            await channel.publish(ProcessingError(str(directory), NO_FILES_MESSAGE))
            return None

        self.logger.info(
            f"Processing {len(paths)} files",
            extra={"directory": str(directory), "pool_size": self.worker_pool.pool_size}
        )
        await channel.publish(ProcessingStarted(len(paths)))

        self._consumer = asyncio.create_task(self._consume(list(paths), channel))
        try:
            final = await self._consumer
        except asyncio.CancelledError:
            if self._state is not SessionState.CANCELLING or not self._consumer.cancelled():
                raise
            self.logger.info(
                "Processing cancelled",
                extra={"files_processed": self.aggregator.files_processed}
            )
            return None

        if self._state is SessionState.CANCELLING:
            return None

        self._completed = True
        await channel.publish(ProcessingComplete(final))
        return final
