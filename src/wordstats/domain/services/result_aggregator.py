"""Cross-file aggregation of per-file word statistics."""

from typing import Dict, List
import threading

from ..models.statistics import AggregateStats, FileRecord, empty_target_counts


class ResultAggregator:
    """
    Running totals over the records of one processing session.

    ``absorb`` is only ever called by a session's single consumer task,
    so updates never race each other. The lock only keeps ``snapshot``
    (which may be called from any thread) from seeing a half-applied
    update.

    Longest/shortest words use first-seen-wins on ties, applied in absorb
    order. Absorb order is completion order, so which of two equally long
    words wins can differ from run to run.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._records: List[FileRecord] = []
        self._total_word_count = 0
        self._target_counts: Dict[str, int] = empty_target_counts()
        self._longest_word = ""
        self._shortest_word = ""

    def reset(self):
        """Discard all accumulated results."""
        with self._lock:
            self._records = []
            self._total_word_count = 0
            self._target_counts = empty_target_counts()
            self._longest_word = ""
            self._shortest_word = ""

    def absorb(self, record: FileRecord):
        """
        Add one completed file to the totals.

        Failed records are counted and kept but contribute nothing else;
        their sentinel words never take part in longest/shortest.

        Args:
            record: Completed file record
        """
        with self._lock:
            self._records.append(record)

            if record.failed:
                return

            self._total_word_count += record.word_count
            for word, count in record.target_word_counts.items():
                self._target_counts[word] = self._target_counts.get(word, 0) + count

            longest = record.longest_word
            if longest and len(longest) > len(self._longest_word):
                self._longest_word = longest

            shortest = record.shortest_word
            if shortest and (not self._shortest_word or len(shortest) < len(self._shortest_word)):
                self._shortest_word = shortest

    def snapshot(self) -> AggregateStats:
        """
        Get an independent copy of the current totals.

        Returns:
            AggregateStats that later absorbs will not modify
        """
        with self._lock:
            return AggregateStats(
                files_processed=len(self._records),
                total_word_count=self._total_word_count,
                total_target_word_counts=dict(self._target_counts),
                longest_word=self._longest_word,
                shortest_word=self._shortest_word,
                records=list(self._records),
            )

    @property
    def files_processed(self) -> int:
        with self._lock:
            return len(self._records)
