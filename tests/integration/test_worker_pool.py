"""Integration tests for the worker pool.

Exercises the pool against real files and against slow stand-in
processors to check exactly-once delivery, completion ordering,
the concurrency cap and early shutdown.
"""

import asyncio
import threading
import time
from contextlib import aclosing
from pathlib import Path

import pytest

from wordstats.domain.models.statistics import FileRecord
from wordstats.infrastructure.parallel import WorkerPool, WorkerConfig, default_pool_size
from wordstats.infrastructure.processing import FileProcessor

from tests.conftest import generate_text_files


async def collect(pool: WorkerPool, paths):
    return [record async for record in pool.run(paths)]


class ConcurrencyProbe:
    """Processor stand-in that records how many calls overlap."""

    def __init__(self, delay: float = 0.02):
        self.delay = delay
        self.active = 0
        self.max_active = 0
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self, path: Path) -> FileRecord:
        with self._lock:
            self.active += 1
            self.calls += 1
            self.max_active = max(self.max_active, self.active)
        try:
            time.sleep(self.delay)
            return FileRecord(file_name=path.name, file_path=str(path), word_count=1)
        finally:
            with self._lock:
                self.active -= 1


@pytest.mark.integration
class TestWorkerPool:
    """Fan-out/fan-in behaviour."""

    K = 12

    @pytest.mark.parametrize("pool_size", [1, 4, K, K + 5])
    async def test_every_path_completes_exactly_once(self, temp_dir, pool_size):
        paths = generate_text_files(temp_dir, self.K)
        pool = WorkerPool(WorkerConfig(pool_size=pool_size), FileProcessor().process)

        records = await collect(pool, paths)

        assert len(records) == self.K
        assert sorted(r.file_path for r in records) == sorted(str(p) for p in paths)
        assert all(r.word_count == 20 and r.you_count == 1 for r in records)
        stats = pool.get_stats()
        assert stats["submitted"] == stats["completed"] == self.K
        assert stats["cancelled"] == 0

    async def test_concurrency_is_capped_at_pool_size(self):
        probe = ConcurrencyProbe()
        pool = WorkerPool(WorkerConfig(pool_size=3), probe)

        records = await collect(pool, [Path(f"/virtual/{i}.txt") for i in range(15)])

        assert len(records) == 15
        assert probe.max_active <= 3

    async def test_results_arrive_in_completion_order(self):
        def process(path: Path) -> FileRecord:
            if path.name == "slow.txt":
                time.sleep(0.3)
            return FileRecord(file_name=path.name, file_path=str(path))

        pool = WorkerPool(WorkerConfig(pool_size=2), process)

        records = await collect(pool, [Path("/virtual/slow.txt"), Path("/virtual/fast.txt")])

        assert [r.file_name for r in records] == ["fast.txt", "slow.txt"]

    async def test_raising_unit_becomes_failed_record(self):
        def process(path: Path) -> FileRecord:
            if path.name == "bad.txt":
                raise RuntimeError("disk on fire")
            return FileRecord(file_name=path.name, file_path=str(path), word_count=2)

        pool = WorkerPool(WorkerConfig(pool_size=2), process)
        paths = [Path(f"/virtual/{name}.txt") for name in ("a", "bad", "b", "c")]

        records = await collect(pool, paths)

        assert len(records) == 4
        failed = [r for r in records if r.failed]
        assert [r.file_name for r in failed] == ["bad.txt"]
        assert failed[0].error == "disk on fire"
        assert pool.get_stats()["failed"] == 1

    async def test_unreadable_files_do_not_stop_the_batch(self, temp_dir):
        paths = generate_text_files(temp_dir, 5)
        paths.insert(2, temp_dir / "missing.txt")
        pool = WorkerPool(WorkerConfig(pool_size=2), FileProcessor().process)

        records = await collect(pool, paths)

        assert len(records) == 6
        assert sum(r.failed for r in records) == 1

    async def test_empty_input_yields_nothing(self):
        pool = WorkerPool(WorkerConfig(pool_size=2), ConcurrencyProbe())

        assert await collect(pool, []) == []

    async def test_closing_early_drops_queued_units(self):
        probe = ConcurrencyProbe(delay=0.05)
        pool = WorkerPool(WorkerConfig(pool_size=2), probe)
        paths = [Path(f"/virtual/{i}.txt") for i in range(200)]

        started = time.monotonic()
        async with aclosing(pool.run(paths)) as records:
            async for _ in records:
                break
        elapsed = time.monotonic() - started

        # at most the units already running when the stream closed
        await asyncio.sleep(0.2)
        assert probe.calls <= 4
        assert elapsed < 5
        assert pool.get_stats()["cancelled"] == 199

    async def test_cancelling_consumer_is_bounded(self):
        probe = ConcurrencyProbe(delay=0.5)
        pool = WorkerPool(WorkerConfig(pool_size=2), probe)
        paths = [Path(f"/virtual/{i}.txt") for i in range(50)]

        consumer = asyncio.create_task(collect(pool, paths))
        await asyncio.sleep(0.1)
        consumer.cancel()

        with pytest.raises(asyncio.CancelledError):
            await asyncio.wait_for(consumer, timeout=5)
        assert probe.calls <= 4


class TestWorkerConfig:
    """Pool sizing."""

    def test_defaults_to_cpu_count(self):
        assert WorkerConfig().pool_size == default_pool_size() >= 1

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            WorkerConfig(pool_size=0)
