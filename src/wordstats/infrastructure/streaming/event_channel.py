"""Ordered delivery of progress events to a listener."""

from dataclasses import dataclass
from typing import Optional
import asyncio

from ...domain.models.statistics import AggregateStats, FileRecord
from ..logging import WordStatsLogger


class ProgressListener:
    """
    Receives progress of a processing session.

    Every method is a no-op by default; override the ones you need.
    For one run the listener sees one ``on_processing_started``, then an
    ``on_file_processed``/``on_progress_update`` pair per file in
    completion order, then ``on_processing_complete`` unless the run was
    cancelled. A run that finds no files only sees ``on_error``.
    All calls come from the same task, one at a time.
    """

    def on_processing_started(self, total_files: int):
        pass

    def on_file_processed(self, record: FileRecord, files_processed: int, total_files: int):
        pass

    def on_progress_update(self, percent: int):
        pass

    def on_processing_complete(self, aggregate: AggregateStats):
        pass

    def on_error(self, context: str, message: str):
        pass


class ProgressEvent:
    """Base class for events published by a session."""

    def deliver(self, listener: ProgressListener):
        raise NotImplementedError


@dataclass(frozen=True)
class ProcessingStarted(ProgressEvent):
    total_files: int

    def deliver(self, listener: ProgressListener):
        listener.on_processing_started(self.total_files)


@dataclass(frozen=True)
class FileProcessed(ProgressEvent):
    record: FileRecord
    files_processed: int
    total_files: int

    def deliver(self, listener: ProgressListener):
        listener.on_file_processed(self.record, self.files_processed, self.total_files)


@dataclass(frozen=True)
class ProgressUpdate(ProgressEvent):
    percent: int

    def deliver(self, listener: ProgressListener):
        listener.on_progress_update(self.percent)


@dataclass(frozen=True)
class ProcessingComplete(ProgressEvent):
    aggregate: AggregateStats

    def deliver(self, listener: ProgressListener):
        listener.on_processing_complete(self.aggregate)


@dataclass(frozen=True)
class ProcessingError(ProgressEvent):
    context: str
    message: str

    def deliver(self, listener: ProgressListener):
        listener.on_error(self.context, self.message)


_CLOSE = object()


class EventChannel:
    """
    Bounded queue of progress events drained by a single pump task.

    Publishers wait when ``maxsize`` events are undelivered, so a slow
    listener slows processing down instead of growing memory. Events are
    delivered strictly in publication order. After ``abandon()`` nothing
    more is delivered: queued and later events are dropped.
    """

    def __init__(self, maxsize: int = 64):
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._abandoned = False
        self._closed = False
        self._delivered = 0
        self.logger = WordStatsLogger.get_instance()

    @property
    def abandoned(self) -> bool:
        return self._abandoned

    @property
    def delivered(self) -> int:
        """Number of events handed to the listener so far."""
        return self._delivered

    async def publish(self, event: ProgressEvent):
        """Queue an event, waiting while the channel is full."""
        if self._closed:
            raise RuntimeError("Cannot publish on a closed event channel")
        if self._abandoned:
            return
        await self._queue.put(event)

    def abandon(self):
        """Stop delivering; pending and future events are discarded."""
        self._abandoned = True
        while True:
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                break
        if self._closed:
            # keep the pump's stop signal
            self._queue.put_nowait(_CLOSE)

    async def close(self):
        """Signal the pump to stop once queued events are delivered."""
        if self._closed:
            return
        self._closed = True
        await self._queue.put(_CLOSE)

    async def pump(self, listener: Optional[ProgressListener]):
        """
        Deliver events to the listener until the channel is closed.

        Listener exceptions are logged and do not stop delivery.

        Args:
            listener: Receiver of the events (events are dropped if None)
        """
        while True:
            event = await self._queue.get()
            if event is _CLOSE:
                return
            if self._abandoned or listener is None:
                continue

            try:
                event.deliver(listener)
            except Exception as e:
                self.logger.warning(
                    f"Progress listener failed: {e}",
                    extra={"event": type(event).__name__},
                    exc_info=True
                )
            self._delivered += 1
