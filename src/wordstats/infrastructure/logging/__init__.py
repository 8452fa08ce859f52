"""Logging infrastructure."""

from .logger import WordStatsLogger, StructuredFormatter, LOGGER_NAME

__all__ = [
    "WordStatsLogger",
    "StructuredFormatter",
    "LOGGER_NAME",
]
