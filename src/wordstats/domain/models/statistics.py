"""Word statistics domain models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


# Words counted individually in every file (compared case-insensitively)
TARGET_WORDS: Tuple[str, ...] = ("is", "are", "you")

ERROR_MARKER = "ERROR"


def empty_target_counts() -> Dict[str, int]:
    """Zero count for every target word."""
    return dict.fromkeys(TARGET_WORDS, 0)


def _frozen_counts(counts: Mapping[str, int]) -> Mapping[str, int]:
    # read-only view over a private copy
    return MappingProxyType(dict(counts))


class SessionState(str, Enum):
    """Lifecycle of a processing session."""
    IDLE = "idle"
    RUNNING = "running"
    CANCELLING = "cancelling"


@dataclass(frozen=True)
class WordStats:
    """Statistics for a single piece of text."""
    word_count: int = 0
    target_word_counts: Mapping[str, int] = field(default_factory=empty_target_counts, hash=False)
    longest_word: str = ""
    shortest_word: str = ""

    def __post_init__(self):
        object.__setattr__(self, "target_word_counts", _frozen_counts(self.target_word_counts))

    @classmethod
    def empty(cls) -> "WordStats":
        """Zero-value statistics for text without any words."""
        return cls()


@dataclass(frozen=True)
class FileRecord:
    """
    Statistics for a single processed file.

    Produced by exactly one worker and never modified afterwards.
    A record with ``failed=True`` carries zero counts and sentinel
    longest/shortest words.
    """
    file_name: str
    file_path: str
    word_count: int = 0
    target_word_counts: Mapping[str, int] = field(default_factory=empty_target_counts, hash=False)
    longest_word: str = ""
    shortest_word: str = ""
    failed: bool = False
    error: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "target_word_counts", _frozen_counts(self.target_word_counts))

    @classmethod
    def from_stats(cls, path: Union[str, Path], stats: WordStats) -> "FileRecord":
        """Build a successful record from analyzer output."""
        path = Path(path)
        return cls(
            file_name=path.name,
            file_path=str(path),
            word_count=stats.word_count,
            target_word_counts=stats.target_word_counts,
            longest_word=stats.longest_word,
            shortest_word=stats.shortest_word,
        )

    @classmethod
    def failure(cls, path: Union[str, Path], reason: str) -> "FileRecord":
        """Build the degraded record for a file that could not be read."""
        path = Path(path)
        return cls(
            file_name=path.name,
            file_path=str(path),
            longest_word=f"{ERROR_MARKER}: {reason}",
            shortest_word=ERROR_MARKER,
            failed=True,
            error=reason,
        )

    @property
    def is_count(self) -> int:
        return self.target_word_counts.get("is", 0)

    @property
    def are_count(self) -> int:
        return self.target_word_counts.get("are", 0)

    @property
    def you_count(self) -> int:
        return self.target_word_counts.get("you", 0)

    def to_table_row(self) -> Tuple[str, int, int, int, int, str, str]:
        """Row for tabular display."""
        return (
            self.file_name,
            self.word_count,
            self.is_count,
            self.are_count,
            self.you_count,
            self.longest_word,
            self.shortest_word,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "file_name": self.file_name,
            "file_path": self.file_path,
            "word_count": self.word_count,
            "target_word_counts": dict(self.target_word_counts),
            "longest_word": self.longest_word,
            "shortest_word": self.shortest_word,
            "failed": self.failed,
            "error": self.error,
        }


@dataclass
class AggregateStats:
    """
    Cross-file totals for one processing session.

    ``records`` is in completion order. Instances handed out by the
    aggregator are independent copies.
    """
    files_processed: int = 0
    total_word_count: int = 0
    total_target_word_counts: Dict[str, int] = field(default_factory=empty_target_counts)
    longest_word: str = ""
    shortest_word: str = ""
    records: List[FileRecord] = field(default_factory=list)

    @property
    def files_failed(self) -> int:
        return sum(1 for record in self.records if record.failed)

    @property
    def average_words_per_file(self) -> float:
        if self.files_processed == 0:
            return 0.0
        return self.total_word_count / self.files_processed

    def summary(self) -> str:
        """Multi-line plain-text summary of the totals."""
        counts = "\n".join(
            f"  '{word}': {self.total_target_word_counts.get(word, 0)}"
            for word in TARGET_WORDS
        )
        return (
            f"Files processed: {self.files_processed}\n"
            f"Files failed: {self.files_failed}\n"
            f"Total words: {self.total_word_count}\n"
            f"{counts}\n"
            f"Average words per file: {self.average_words_per_file:.2f}\n"
            f"Longest word: {self.longest_word}\n"
            f"Shortest word: {self.shortest_word}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "total_word_count": self.total_word_count,
            "total_target_word_counts": dict(self.total_target_word_counts),
            "average_words_per_file": round(self.average_words_per_file, 2),
            "longest_word": self.longest_word,
            "shortest_word": self.shortest_word,
            "records": [record.to_dict() for record in self.records],
        }
