"""Domain models."""

from .statistics import (
    TARGET_WORDS,
    ERROR_MARKER,
    SessionState,
    WordStats,
    FileRecord,
    AggregateStats,
)

__all__ = [
    "TARGET_WORDS",
    "ERROR_MARKER",
    "SessionState",
    "WordStats",
    "FileRecord",
    "AggregateStats",
]
