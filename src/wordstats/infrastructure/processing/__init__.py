"""Per-file processing."""

from .file_processor import FileProcessor

__all__ = ["FileProcessor"]
