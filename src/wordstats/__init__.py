"""WordStats - concurrent word statistics for directories of text files."""

__version__ = "1.0.0"
