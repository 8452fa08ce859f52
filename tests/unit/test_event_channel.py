"""Tests for ordered progress event delivery."""

import asyncio

import pytest

from wordstats.domain.models.statistics import AggregateStats
from wordstats.infrastructure.streaming import (
    EventChannel,
    FileProcessed,
    ProcessingComplete,
    ProcessingError,
    ProcessingStarted,
    ProgressUpdate,
    ResultStreamer,
)

from tests.conftest import RecordingListener, make_record


class TestEventChannel:
    """Ordering, backpressure and abandonment."""

    async def test_delivers_in_publication_order(self):
        channel = EventChannel(maxsize=2)
        listener = RecordingListener()
        pump = asyncio.create_task(channel.pump(listener))

        record = make_record("a.txt", 3)
        await channel.publish(ProcessingStarted(1))
        await channel.publish(FileProcessed(record, 1, 1))
        await channel.publish(ProgressUpdate(100))
        await channel.publish(ProcessingComplete(AggregateStats()))
        await channel.close()
        await asyncio.wait_for(pump, timeout=5)

        assert listener.kinds() == ["started", "file", "progress", "complete"]
        assert listener.records() == [record]
        assert channel.delivered == 4

    async def test_publisher_waits_when_full(self):
        channel = EventChannel(maxsize=1)

        await channel.publish(ProgressUpdate(1))
        blocked = asyncio.create_task(channel.publish(ProgressUpdate(2)))
        await asyncio.sleep(0.05)

        assert not blocked.done()

        listener = RecordingListener()
        pump = asyncio.create_task(channel.pump(listener))
        await asyncio.wait_for(blocked, timeout=5)
        await channel.close()
        await asyncio.wait_for(pump, timeout=5)

        assert listener.events == [("progress", 1), ("progress", 2)]

    async def test_abandon_drops_pending_and_later_events(self):
        channel = EventChannel(maxsize=10)
        await channel.publish(ProgressUpdate(10))
        await channel.publish(ProgressUpdate(20))

        channel.abandon()
        await channel.publish(ProgressUpdate(30))

        listener = RecordingListener()
        pump = asyncio.create_task(channel.pump(listener))
        await channel.close()
        await asyncio.wait_for(pump, timeout=5)

        assert listener.events == []
        assert channel.abandoned

    async def test_abandon_after_close_still_stops_pump(self):
        channel = EventChannel(maxsize=10)
        await channel.publish(ProgressUpdate(10))
        await channel.close()

        channel.abandon()

        await asyncio.wait_for(channel.pump(RecordingListener()), timeout=5)

    async def test_listener_errors_do_not_stop_delivery(self):
        class FlakyListener(RecordingListener):
            def on_progress_update(self, percent):
                raise RuntimeError("display broke")

        channel = EventChannel()
        listener = FlakyListener()
        pump = asyncio.create_task(channel.pump(listener))

        await channel.publish(ProgressUpdate(50))
        await channel.publish(ProcessingError("dir", "No files found"))
        await channel.close()
        await asyncio.wait_for(pump, timeout=5)

        assert listener.events == [("error", "dir", "No files found")]

    async def test_publish_after_close_fails(self):
        channel = EventChannel()
        await channel.close()

        with pytest.raises(RuntimeError):
            await channel.publish(ProgressUpdate(1))

    def test_maxsize_must_be_positive(self):
        with pytest.raises(ValueError):
            EventChannel(maxsize=0)


class TestResultStreamer:
    """Live progress tracking."""

    def test_tracks_progress_and_completion(self):
        seen = []
        streamer = ResultStreamer(callbacks=[lambda record, done, total: seen.append((record.file_name, done, total))])

        assert streamer.get_progress() == {}

        streamer.on_processing_started(2)
        streamer.on_file_processed(make_record("a.txt", 4), 1, 2)
        streamer.on_progress_update(50)
        streamer.on_file_processed(make_record("b.txt", failed=True), 2, 2)
        streamer.on_progress_update(100)

        progress = streamer.get_progress()
        assert progress["total_files"] == 2
        assert progress["files_completed"] == 1
        assert progress["files_failed"] == 1
        assert progress["files_remaining"] == 0
        assert progress["progress_percent"] == 100
        assert progress["total_words"] == 4
        assert progress["last_file"] == "b.txt"
        assert seen == [("a.txt", 1, 2), ("b.txt", 2, 2)]
        assert not streamer.is_complete

        aggregate = AggregateStats(files_processed=2)
        streamer.on_processing_complete(aggregate)

        assert streamer.is_complete
        assert streamer.aggregate is aggregate

    def test_callback_failure_is_contained(self):
        def broken(record, done, total):
            raise ValueError("nope")

        seen = []
        streamer = ResultStreamer(callbacks=[broken])
        streamer.add_callback(lambda record, done, total: seen.append(done))

        streamer.on_processing_started(1)
        streamer.on_file_processed(make_record("a.txt", 1), 1, 1)

        assert seen == [1]

    def test_records_error(self):
        streamer = ResultStreamer()

        streamer.on_error("/tmp/empty", "No files found")

        assert streamer.error == "/tmp/empty: No files found"
        assert streamer.aggregate is None
