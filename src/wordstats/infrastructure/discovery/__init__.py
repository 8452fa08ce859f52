"""Text file discovery."""

from .file_discoverer import (
    FileDiscoverer,
    DEFAULT_TEXT_EXTENSIONS,
    DEFAULT_EXCLUDED_DIRS,
)

__all__ = [
    "FileDiscoverer",
    "DEFAULT_TEXT_EXTENSIONS",
    "DEFAULT_EXCLUDED_DIRS",
]
