"""Single-pass word statistics for a piece of text."""

import re
from typing import Dict, Optional

from ..models.statistics import TARGET_WORDS, WordStats


# A word is a maximal run of ASCII letters
WORD_PATTERN = re.compile(r"[A-Za-z]+")


class WordAnalyzer:
    """
    Computes word statistics for text.

    Stateless: one instance may be shared by every worker thread.
    """

    target_words = TARGET_WORDS

    def analyze(self, text: Optional[str]) -> WordStats:
        """
        Analyze text and return its statistics.

        Tokens keep the case they have at their own position in the text;
        target words are matched case-insensitively. Ties for longest and
        shortest word go to the first token seen.

        Args:
            text: Text to analyze (any string, ``None`` treated as empty)

        Returns:
            WordStats for the text
        """
        if not text or not text.strip():
            return WordStats.empty()

        counts: Dict[str, int] = dict.fromkeys(self.target_words, 0)
        word_count = 0
        longest = ""
        shortest = ""

        for match in WORD_PATTERN.finditer(text):
            word = match.group()
            word_count += 1

            lower = word.lower()
            if lower in counts:
                counts[lower] += 1

            if len(word) > len(longest):
                longest = word
            if not shortest or len(word) < len(shortest):
                shortest = word

        if word_count == 0:
            return WordStats.empty()

        return WordStats(
            word_count=word_count,
            target_word_counts=counts,
            longest_word=longest,
            shortest_word=shortest,
        )

    def analyze_and_summarize(self, text: Optional[str]) -> str:
        """Analyze text and return a readable one-line summary."""
        stats = self.analyze(text)
        counts = ", ".join(
            f"'{word}': {stats.target_word_counts.get(word, 0)}"
            for word in self.target_words
        )
        return (
            f"Words: {stats.word_count}, {counts}, "
            f"Longest: '{stats.longest_word}', Shortest: '{stats.shortest_word}'"
        )


_default_analyzer = WordAnalyzer()


def analyze(text: Optional[str]) -> WordStats:
    """Analyze text with the default analyzer."""
    return _default_analyzer.analyze(text)
