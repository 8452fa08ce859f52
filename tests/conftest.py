"""Pytest configuration and fixtures for WordStats tests."""

import tempfile
import shutil
from pathlib import Path
from typing import Dict, Generator, List, Optional, Tuple
import pytest

from wordstats.domain.models.statistics import AggregateStats, FileRecord
from wordstats.infrastructure.logging import WordStatsLogger
from wordstats.infrastructure.streaming import ProgressListener


@pytest.fixture(autouse=True)
def reset_logger() -> Generator[None, None, None]:
    """Keep handlers added by one test from leaking into the next."""
    yield
    WordStatsLogger.reset()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Provide a temporary directory for test files.

    Automatically cleaned up after the test completes.
    """
    temp_path = Path(tempfile.mkdtemp(prefix="wordstats_test_"))
    try:
        yield temp_path
    finally:
        if temp_path.exists():
            shutil.rmtree(temp_path)


@pytest.fixture
def sample_text() -> str:
    """
    Provide a short English text with every target word.

    Returns:
        Text with 7 words: one 'is', one 'are', one 'you'
    """
    return "The cat is big. You are happy."


@pytest.fixture
def sample_tree(temp_dir: Path) -> Path:
    """
    Provide a small directory tree of text and non-text files.

    Layout:
        a.txt            "Hello you"            (2 words)
        b.md             "Is it? Yes it is."    (5 words)
        image.png        (ignored)
        sub/c.py         "are are are"          (3 words)
        sub/deep/d.csv   "x,y"                  (2 words)
    """
    (temp_dir / "a.txt").write_text("Hello you", encoding="utf-8")
    (temp_dir / "b.md").write_text("Is it? Yes it is.", encoding="utf-8")
    (temp_dir / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (temp_dir / "sub").mkdir()
    (temp_dir / "sub" / "c.py").write_text("are are are", encoding="utf-8")
    (temp_dir / "sub" / "deep").mkdir()
    (temp_dir / "sub" / "deep" / "d.csv").write_text("x,y", encoding="utf-8")
    return temp_dir


def generate_text_files(directory: Path, count: int, words_per_file: int = 20) -> List[Path]:
    """
    Write ``count`` text files with predictable content.

    File ``i`` contains ``words_per_file`` words, one of which is 'you'.

    Args:
        directory: Where to write the files
        count: Number of files
        words_per_file: Words in each file

    Returns:
        Paths of the written files
    """
    paths = []
    for index in range(count):
        words = ["you"] + ["word"] * (words_per_file - 1)
        path = directory / f"file_{index:04d}.txt"
        path.write_text(" ".join(words), encoding="utf-8")
        paths.append(path)
    return paths


def make_record(
    name: str,
    word_count: int = 0,
    counts: Optional[Dict[str, int]] = None,
    longest: str = "",
    shortest: str = "",
    failed: bool = False,
) -> FileRecord:
    """Build a FileRecord without touching the filesystem."""
    if failed:
        return FileRecord.failure(Path("/data") / name, "Permission denied")
    return FileRecord(
        file_name=name,
        file_path=f"/data/{name}",
        word_count=word_count,
        target_word_counts={"is": 0, "are": 0, "you": 0, **(counts or {})},
        longest_word=longest,
        shortest_word=shortest,
    )


class RecordingListener(ProgressListener):
    """Listener that records every event in order."""

    def __init__(self):
        self.events: List[Tuple] = []

    def on_processing_started(self, total_files: int):
        self.events.append(("started", total_files))

    def on_file_processed(self, record: FileRecord, files_processed: int, total_files: int):
        self.events.append(("file", record, files_processed, total_files))

    def on_progress_update(self, percent: int):
        self.events.append(("progress", percent))

    def on_processing_complete(self, aggregate: AggregateStats):
        self.events.append(("complete", aggregate))

    def on_error(self, context: str, message: str):
        self.events.append(("error", context, message))

    def kinds(self) -> List[str]:
        return [event[0] for event in self.events]

    def records(self) -> List[FileRecord]:
        return [event[1] for event in self.events if event[0] == "file"]
