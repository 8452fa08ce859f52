"""Application layer: processing sessions."""

from .session import ProcessingSession, FileLister, NO_FILES_MESSAGE, progress_percent

__all__ = [
    "ProcessingSession",
    "FileLister",
    "NO_FILES_MESSAGE",
    "progress_percent",
]
