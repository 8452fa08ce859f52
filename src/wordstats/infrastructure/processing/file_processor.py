"""Reads a single file and turns it into a FileRecord."""

from pathlib import Path
from typing import Optional, Union

from ...domain.models.statistics import FileRecord
from ...domain.services.word_analyzer import WordAnalyzer
from ..logging import WordStatsLogger


class FileProcessor:
    """
    Processes one file into a FileRecord.

    ``process`` never raises: any failure becomes a failed record, so a
    bad file cannot take down the batch it belongs to.
    """

    def __init__(
        self,
        word_analyzer: Optional[WordAnalyzer] = None,
        encoding: str = "utf-8",
        errors: str = "strict",
    ):
        """
        Initialize the processor.

        Args:
            word_analyzer: Analyzer to apply to file content
            encoding: Text encoding used to read files
            errors: Decode error handling passed to ``open``
        """
        self.word_analyzer = word_analyzer or WordAnalyzer()
        self.encoding = encoding
        self.errors = errors
        self.logger = WordStatsLogger.get_instance()

    def process(self, path: Union[str, Path]) -> FileRecord:
        """
        Read a file and compute its statistics.

        Args:
            path: File to process

        Returns:
            FileRecord, with ``failed=True`` if the file could not be read
        """
        path = Path(path)

        try:
            content = path.read_text(encoding=self.encoding, errors=self.errors)
            stats = self.word_analyzer.analyze(content)

        except (OSError, UnicodeDecodeError) as e:
            reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            self.logger.warning(
                f"Could not read file: {path.name}",
                extra={"file_path": str(path), "error": reason}
            )
            return FileRecord.failure(path, reason)

        except Exception as e:
            self.logger.error(
                f"Unexpected error processing file: {path.name}",
                extra={"file_path": str(path), "error": str(e)},
                exc_info=True
            )
            return FileRecord.failure(path, "Unexpected error")

        self.logger.debug(
            f"Processed: {path.name}",
            extra={"file_path": str(path), "word_count": stats.word_count}
        )
        return FileRecord.from_stats(path, stats)
