"""Domain services."""

from .word_analyzer import WordAnalyzer, analyze
from .result_aggregator import ResultAggregator

__all__ = [
    "WordAnalyzer",
    "analyze",
    "ResultAggregator",
]
