"""Discovery of text files in a directory tree."""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..logging import WordStatsLogger


DEFAULT_TEXT_EXTENSIONS = (
    ".txt", ".text", ".md", ".java", ".c", ".cpp", ".h", ".py",
    ".js", ".html", ".css", ".xml", ".json", ".csv",
)

DEFAULT_EXCLUDED_DIRS = (".git", "node_modules", "__pycache__")


class FileDiscoverer:
    """
    Finds text files by extension.

    A file counts as text only when its extension is in the allow-list;
    content is never sniffed. Missing or unreadable directories yield an
    empty list rather than an error.
    """

    def __init__(
        self,
        extensions: Iterable[str] = DEFAULT_TEXT_EXTENSIONS,
        excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
    ):
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.excluded_dirs = frozenset(excluded_dirs)
        self.logger = WordStatsLogger.get_instance()

    def list_text_files(
        self,
        directory: Optional[Union[str, Path]],
        recursive: bool = True,
    ) -> List[Path]:
        """
        List text files under a directory.

        Args:
            directory: Directory to search
            recursive: Whether to descend into subdirectories

        Returns:
            Sorted list of regular files with a text extension
        """
        if directory is None or not str(directory).strip():
            return []

        root = Path(directory)
        if not root.is_dir():
            self.logger.warning(
                f"Directory does not exist or is not a directory: {root}"
            )
            return []

        def on_walk_error(error: OSError):
            self.logger.warning(
                f"Error scanning directory: {error.filename}",
                extra={"error": str(error)}
            )

        text_files: List[Path] = []
        for dirpath, dirnames, filenames in os.walk(root, onerror=on_walk_error):
            dirnames[:] = sorted(d for d in dirnames if d not in self.excluded_dirs)

            for filename in filenames:
                path = Path(dirpath) / filename
                if self.is_text_file(path) and path.is_file():
                    text_files.append(path)

            if not recursive:
                break

        text_files.sort()
        self.logger.debug(
            f"Discovered {len(text_files)} text files",
            extra={"directory": str(root), "recursive": recursive}
        )
        return text_files

    def is_text_file(self, path: Path) -> bool:
        """Check the extension against the allow-list."""
        return path.name.lower().endswith(self.extensions)

    def count_text_files(self, directory: Union[str, Path], recursive: bool = True) -> int:
        """Count text files without processing them."""
        return len(self.list_text_files(directory, recursive))

    def text_file_names(self, directory: Union[str, Path], recursive: bool = True) -> List[str]:
        """Names (not paths) of the text files in a directory."""
        return [path.name for path in self.list_text_files(directory, recursive)]
