"""Streaming progress infrastructure for incremental reporting."""

from .event_channel import (
    EventChannel,
    ProgressListener,
    ProgressEvent,
    ProcessingStarted,
    FileProcessed,
    ProgressUpdate,
    ProcessingComplete,
    ProcessingError,
)
from .result_streamer import ResultStreamer, StreamingCallback

__all__ = [
    "EventChannel",
    "ProgressListener",
    "ProgressEvent",
    "ProcessingStarted",
    "FileProcessed",
    "ProgressUpdate",
    "ProcessingComplete",
    "ProcessingError",
    "ResultStreamer",
    "StreamingCallback",
]
